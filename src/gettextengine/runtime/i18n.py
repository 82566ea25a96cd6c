"""I18n - translation lookup with filters and change notification.

An I18n instance owns all mutable translation state: the locale data store
(with its plural rule cache) and the set of change subscribers. Separate
instances share nothing except, optionally, a hooks registry.

Python 3.13+.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from gettextengine.constants import (
    DEFAULT_DOMAIN,
    FILTER_GETTEXT,
    FILTER_GETTEXT_WITH_CONTEXT,
    FILTER_HAS_TRANSLATION,
    FILTER_NGETTEXT,
    FILTER_NGETTEXT_WITH_CONTEXT,
    HOOK_ADDED,
    HOOK_REMOVED,
    I18N_HOOK_PATTERN,
    I18N_NAMESPACE,
    RTL_PROBE_CONTEXT,
    RTL_PROBE_TEXT,
)
from gettextengine.runtime.filters import make_filter_pipeline
from gettextengine.runtime.hooks import HookCapability, default_hooks
from gettextengine.runtime.locale_data import LocaleDataStore, message_key
from gettextengine.runtime.subscriptions import Subscribers
from gettextengine.types import DomainName, LocaleData, SubscribeCallback, UnsubscribeCallback

__all__ = ["I18n", "create_i18n"]

logger = logging.getLogger(__name__)


def _require_str(name: str, value: object) -> None:
    if not isinstance(value, str):
        msg = f"{name} must be a string, got {type(value).__name__}"
        raise TypeError(msg)


def _require_optional_str(name: str, value: object) -> None:
    if value is not None:
        _require_str(name, value)


def _require_number(value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
        msg = f"Plural count must be a number, got {type(value).__name__}"
        raise TypeError(msg)


class I18n:
    """Domain-scoped gettext lookups over in-memory locale data.

    Lookups never fail on missing data: an unknown domain is created on
    first use, a missing translation returns the source text. Passing a
    non-string text, context or domain is a programmer error and raises
    TypeError.

    Filters:
        With a hooks capability, each lookup result passes through a generic
        and then a domain-specific filter channel:

        ====================================  ===============================
        Method                                Channels
        ====================================  ===============================
        translate()                           i18n.gettext[_<domain>]
        translate_with_context()              i18n.gettext_with_context[...]
        translate_plural()                    i18n.ngettext[...]
        translate_plural_with_context()       i18n.ngettext_with_context[...]
        has_translation()                     i18n.has_translation[...]
        ====================================  ===============================

        Adding or removing a filter on any of these channels counts as a
        locale data change and notifies subscribers.

    Examples:
        >>> i18n = I18n({"Save": ["Enregistrer"]}, hooks=None)
        >>> i18n.translate("Save")
        'Enregistrer'
        >>> i18n.translate("Cancel")
        'Cancel'
        >>> i18n.translate_plural("%d file", "%d files", 3)
        '%d files'
    """

    __slots__ = ("_filter", "_hooks", "_namespace", "_store", "_subscribers")

    def __init__(
        self,
        initial_data: LocaleData | None = None,
        initial_domain: DomainName | None = None,
        *,
        hooks: HookCapability | None = default_hooks,
    ) -> None:
        """Initialize I18n instance.

        Args:
            initial_data: Locale data to set (and notify) right away
            initial_domain: Domain for initial_data (default: "default")
            hooks: Hooks capability for filters and implicit notifications,
                   or None to disable both (default: the shared default_hooks)
        """
        self._store = LocaleDataStore()
        self._subscribers = Subscribers()
        self._hooks = hooks
        self._filter = make_filter_pipeline(hooks)

        if initial_data:
            self.set_locale_data(initial_data, initial_domain)

        # Own namespace so close() removes this instance's listeners only.
        self._namespace = f"{I18N_NAMESPACE}/{id(self):x}"
        if hooks is not None:
            hooks.add_action(HOOK_ADDED, self._namespace, self._on_hook_added_or_removed)
            hooks.add_action(HOOK_REMOVED, self._namespace, self._on_hook_added_or_removed)

    def close(self) -> None:
        """Stop listening for hook changes.

        The hooks registry holds a reference to every instance built on it,
        so an instance on the shared default_hooks stays alive (and keeps
        reacting to filter changes) until closed. Lookups still work after
        close(); only hook-driven notifications stop. Safe to call twice.
        """
        if self._hooks is not None:
            self._hooks.remove_action(HOOK_ADDED, self._namespace)
            self._hooks.remove_action(HOOK_REMOVED, self._namespace)
            logger.debug("I18n listeners removed: %s", self._namespace)

    @property
    def hooks(self) -> HookCapability | None:
        """Hooks capability this instance filters through."""
        return self._hooks

    def _on_hook_added_or_removed(self, hook_name: str, *_args: Any) -> None:
        if I18N_HOOK_PATTERN.match(hook_name):
            logger.debug("Translation hook changed: %s", hook_name)
            self._subscribers.notify()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: SubscribeCallback) -> UnsubscribeCallback:
        """Call ``callback()`` whenever locale data changes.

        Returns:
            Function removing the subscription (safe to call repeatedly)
        """
        return self._subscribers.subscribe(callback)

    # ------------------------------------------------------------------
    # Locale data
    # ------------------------------------------------------------------

    def get_locale_data(self, domain: DomainName | None = None) -> Mapping[str, Any] | None:
        """Read-only view of a domain's locale data, None if never touched."""
        _require_optional_str("domain", domain)
        return self._store.get(DEFAULT_DOMAIN if domain is None else domain)

    def set_locale_data(self, data: LocaleData | None = None, domain: DomainName | None = None) -> None:
        """Merge locale data into a domain and notify subscribers.

        A '' entry in data replaces the domain's metadata (defaults are
        filled in underneath).
        """
        _require_optional_str("domain", domain)
        self._store.merge(data, DEFAULT_DOMAIN if domain is None else domain)
        self._subscribers.notify()

    def add_locale_data(self, data: LocaleData | None, domain: DomainName | None = None) -> None:
        """Merge locale data into a domain and notify subscribers.

        Unlike set_locale_data(), metadata is merged field by field, with
        data's own fields winning.
        """
        _require_optional_str("domain", domain)
        self._store.add(data, DEFAULT_DOMAIN if domain is None else domain)
        self._subscribers.notify()

    def reset_locale_data(self, data: LocaleData | None = None, domain: DomainName | None = None) -> None:
        """Discard all domains, then set data. Always notifies exactly once."""
        _require_optional_str("domain", domain)
        self._store.clear()
        self.set_locale_data(data, domain)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def dcnpgettext(
        self,
        domain: DomainName | None,
        context: str | None,
        single: str,
        plural: str | None = None,
        number: int | float | Decimal | None = None,
    ) -> str:
        """Unfiltered lookup. See LocaleDataStore.dcnpgettext()."""
        _require_optional_str("domain", domain)
        _require_optional_str("context", context)
        _require_str("single", single)
        _require_optional_str("plural", plural)
        if number is not None:
            _require_number(number)
        return self._store.dcnpgettext(
            DEFAULT_DOMAIN if domain is None else domain, context, single, plural, number
        )

    def translate(self, text: str, domain: DomainName | None = None) -> str:
        """Translate text."""
        translation = self.dcnpgettext(domain, None, text)
        return self._filter(FILTER_GETTEXT, translation, (text,), domain)

    def translate_with_context(
        self, text: str, context: str, domain: DomainName | None = DEFAULT_DOMAIN
    ) -> str:
        """Translate text used in a specific context.

        Unlike the other call shapes, an omitted domain reaches filters as
        "default" rather than None.
        """
        _require_str("context", context)
        if domain is None:
            domain = DEFAULT_DOMAIN
        translation = self.dcnpgettext(domain, context, text)
        return self._filter(FILTER_GETTEXT_WITH_CONTEXT, translation, (text, context), domain)

    def translate_plural(
        self,
        single: str,
        plural: str,
        number: int | float | Decimal,
        domain: DomainName | None = None,
    ) -> str:
        """Translate the singular or plural form selected by number."""
        _require_str("plural", plural)
        _require_number(number)
        translation = self.dcnpgettext(domain, None, single, plural, number)
        return self._filter(FILTER_NGETTEXT, translation, (single, plural, number), domain)

    def translate_plural_with_context(
        self,
        single: str,
        plural: str,
        number: int | float | Decimal,
        context: str,
        domain: DomainName | None = None,
    ) -> str:
        """Translate the form selected by number, in a specific context."""
        _require_str("plural", plural)
        _require_number(number)
        _require_str("context", context)
        translation = self.dcnpgettext(domain, context, single, plural, number)
        return self._filter(
            FILTER_NGETTEXT_WITH_CONTEXT, translation, (single, plural, number, context), domain
        )

    def has_translation(
        self,
        single: str,
        context: str | None = None,
        domain: DomainName | None = None,
    ) -> bool:
        """Check whether locale data holds a translation for single.

        Does not create the domain. Plural arity is irrelevant: only the key
        derived from single and context is checked.
        """
        _require_str("single", single)
        _require_optional_str("context", context)
        _require_optional_str("domain", domain)
        key = message_key(single, context)
        result = self._store.has_entry(key, DEFAULT_DOMAIN if domain is None else domain)
        return self._filter(FILTER_HAS_TRANSLATION, result, (single, context), domain)

    def is_rtl(self) -> bool:
        """Whether the default domain's locale is right-to-left.

        Translators signal RTL by translating "ltr" (context "text
        direction") as "rtl".
        """
        return self.translate_with_context(RTL_PROBE_TEXT, RTL_PROBE_CONTEXT) == "rtl"


def create_i18n(
    initial_data: LocaleData | None = None,
    initial_domain: DomainName | None = None,
    hooks: HookCapability | None = default_hooks,
) -> I18n:
    """Create an I18n instance.

    Args:
        initial_data: Locale data to set right away
        initial_domain: Domain for initial_data
        hooks: Hooks capability, or None to disable filtering

    Returns:
        New I18n instance

    Example:
        >>> from gettextengine.runtime.hooks import Hooks
        >>> i18n = create_i18n({"hello": ["bonjour"]}, hooks=Hooks())
        >>> i18n.translate("hello")
        'bonjour'
    """
    return I18n(initial_data, initial_domain, hooks=hooks)
