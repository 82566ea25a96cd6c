"""gettextengine - gettext-style translation lookup with safe formatting.

Resolves source strings to translations from in-memory, Jed-formatted locale
data: singular and plural forms, disambiguation contexts and multiple text
domains. Every lookup passes through named filter hooks, and subscribers are
notified whenever locale data changes. sprintf() formats the result without
ever raising on a malformed translation.

Public API:
    __, _x, _n, _nx - Translate via the default instance
    has_translation, is_rtl - Query the default instance
    get_locale_data, set_locale_data, add_locale_data, reset_locale_data
    subscribe - Observe locale data changes
    sprintf - Error-tolerant string formatting
    I18n, create_i18n - Independent instances
    Hooks, default_hooks - Filter/action registry

Exceptions:
    I18nError - Base exception class
    HookNameError - Invalid hook or namespace name
    PluralFormsError, SprintfError - Absorbed internally, exposed for tests

Example:
    >>> from gettextengine import __, _n, set_locale_data, sprintf
    >>> set_locale_data({"%d apple": ["%d pomme", "%d pommes"]})
    >>> sprintf(_n("%d apple", "%d apples", 3), 3)
    '3 pommes'
"""

from .diagnostics import HookNameError, I18nError, PluralFormsError, SprintfError
from .runtime import Hooks, I18n, create_i18n, default_hooks, sprintf

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("gettextengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

# Process-wide instance behind the module-level functions.
default_i18n = I18n()

get_locale_data = default_i18n.get_locale_data
set_locale_data = default_i18n.set_locale_data
add_locale_data = default_i18n.add_locale_data
reset_locale_data = default_i18n.reset_locale_data
subscribe = default_i18n.subscribe
__ = default_i18n.translate
_x = default_i18n.translate_with_context
_n = default_i18n.translate_plural
_nx = default_i18n.translate_plural_with_context
is_rtl = default_i18n.is_rtl
has_translation = default_i18n.has_translation

__all__ = [
    "Hooks",
    "HookNameError",
    "I18n",
    "I18nError",
    "PluralFormsError",
    "SprintfError",
    "__",
    "__version__",
    "_n",
    "_nx",
    "_x",
    "add_locale_data",
    "create_i18n",
    "default_hooks",
    "default_i18n",
    "get_locale_data",
    "has_translation",
    "is_rtl",
    "reset_locale_data",
    "set_locale_data",
    "sprintf",
    "subscribe",
]
