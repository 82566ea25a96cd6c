"""gettextengine runtime package.

Provides the locale data store, plural rules, filter pipeline, hooks
registry, I18n API and the sprintf format engine.

Python 3.13+.
"""

from .filters import domain_channel
from .hooks import HookCapability, Hooks, default_hooks
from .i18n import I18n, create_i18n
from .locale_data import LocaleDataStore, message_key
from .plural_rules import compile_plural_rule, default_plural_forms, select_plural_index
from .sprintf import sprintf
from .subscriptions import Subscribers

__all__ = [
    "HookCapability",
    "Hooks",
    "I18n",
    "LocaleDataStore",
    "Subscribers",
    "compile_plural_rule",
    "create_i18n",
    "default_hooks",
    "default_plural_forms",
    "domain_channel",
    "message_key",
    "select_plural_index",
    "sprintf",
]
