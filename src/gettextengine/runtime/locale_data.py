"""Locale data store: domain-scoped translations and plural rule cache.

Holds Jed-formatted locale data, one mapping per text domain:

    {
        "": {"plural_forms": <rule>, ...},        # domain metadata
        "Save": ["Enregistrer"],                  # singular
        "%d file": ["%d fichier", "%d fichiers"], # singular + plural forms
        "verb\\u0004Post": ["Publier"],            # context + EOT + text
    }

Every domain always carries a '' metadata entry. The compiled plural rule
for a domain is cached and discarded on every write to that domain.

The store never notifies anyone; I18n decides which writes are observable.

Python 3.13+.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from gettextengine.constants import CONTEXT_SEPARATOR, DEFAULT_DOMAIN, METADATA_KEY
from gettextengine.runtime.plural_rules import (
    DEFAULT_METADATA,
    compile_plural_rule,
    select_plural_index,
)
from gettextengine.types import DomainName, LocaleData, PluralFormsFunction

__all__ = ["LocaleDataStore", "message_key"]

logger = logging.getLogger(__name__)


def message_key(single: str, context: str | None = None) -> str:
    """Derive the lookup key for a source string.

    Example:
        >>> message_key("Post")
        'Post'
        >>> message_key("Post", "verb")
        'verb\\x04Post'
    """
    return f"{context}{CONTEXT_SEPARATOR}{single}" if context else single


def _check_data(data: LocaleData | None) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        msg = f"Locale data must be a mapping, got {type(data).__name__}"
        raise TypeError(msg)
    return data


def _metadata(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


class LocaleDataStore:
    """Per-instance translation storage with a per-domain plural rule cache.

    Example:
        >>> store = LocaleDataStore()
        >>> store.merge({"cat": ["chat", "chats"]})
        >>> store.dcnpgettext("default", None, "cat", "cats", 2)
        'chats'
        >>> store.dcnpgettext("default", None, "dog", "dogs", 2)
        'dogs'
    """

    __slots__ = ("_data", "_plural_forms")

    def __init__(self) -> None:
        """Initialize empty store."""
        self._data: dict[DomainName, dict[str, Any]] = {}
        self._plural_forms: dict[DomainName, PluralFormsFunction] = {}

    def __contains__(self, domain: object) -> bool:
        return domain in self._data

    def __iter__(self) -> Iterator[DomainName]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def get(self, domain: DomainName = DEFAULT_DOMAIN) -> Mapping[str, Any] | None:
        """Read-only view of a domain's locale data, or None if unknown."""
        domain_data = self._data.get(domain)
        return None if domain_data is None else MappingProxyType(domain_data)

    def merge(self, data: LocaleData | None = None, domain: DomainName = DEFAULT_DOMAIN) -> None:
        """Shallow-merge data into a domain, replacing its metadata entry.

        Keys in ``data`` overwrite existing keys wholesale. If ``data``
        carries a '' entry it replaces the domain's metadata; defaults are
        then filled in underneath. Merging None just seeds the defaults.

        Args:
            data: Locale data to merge (may be None)
            domain: Target domain
        """
        data = _check_data(data)
        domain_data = {**self._data.get(domain, {}), **data}
        domain_data[METADATA_KEY] = {
            **DEFAULT_METADATA,
            **_metadata(domain_data.get(METADATA_KEY)),
        }
        self._data[domain] = domain_data
        self._invalidate(domain)
        logger.debug("Merged %d locale data keys into domain '%s'", len(data), domain)

    def add(self, data: LocaleData | None, domain: DomainName = DEFAULT_DOMAIN) -> None:
        """Shallow-merge data into a domain, merging metadata key by key.

        Unlike merge(), existing metadata fields survive unless ``data``'s
        own '' entry overrides them; ``data``'s metadata wins over both the
        defaults and what the domain already had.

        Args:
            data: Locale data to merge (may be None)
            domain: Target domain
        """
        data = _check_data(data)
        current = self._data.get(domain, {})
        self._data[domain] = {
            **current,
            **data,
            METADATA_KEY: {
                **DEFAULT_METADATA,
                **_metadata(current.get(METADATA_KEY)),
                **_metadata(data.get(METADATA_KEY)),
            },
        }
        self._invalidate(domain)
        logger.debug("Added %d locale data keys to domain '%s'", len(data), domain)

    def clear(self) -> None:
        """Discard every domain and every cached plural rule."""
        self._data = {}
        self._plural_forms = {}
        logger.debug("Locale data reset")

    def has_entry(self, key: str, domain: DomainName = DEFAULT_DOMAIN) -> bool:
        """Check whether a domain holds an entry for key, even an empty one."""
        domain_data = self._data.get(domain)
        return domain_data is not None and domain_data.get(key) is not None

    def plural_rule(self, domain: DomainName) -> PluralFormsFunction:
        """Return the domain's compiled plural rule, compiling it on first use."""
        rule = self._plural_forms.get(domain)
        if rule is None:
            metadata = self._data.get(domain, {}).get(METADATA_KEY)
            rule = self._plural_forms[domain] = compile_plural_rule(_metadata(metadata))
        return rule

    def dcnpgettext(
        self,
        domain: DomainName,
        context: str | None,
        single: str,
        plural: str | None = None,
        number: int | float | None = None,
    ) -> str:
        """Resolve a string in a domain, with optional context and count.

        Unknown domains are seeded silently with default metadata. Missing
        entries or forms fall back to ``single`` when form 0 is selected
        and to ``plural`` otherwise.

        Args:
            domain: Domain to look in
            context: Disambiguation context (None or '' for none)
            single: Singular source text, and the lookup key
            plural: Plural source text
            number: Count selecting the plural form (None for form 0)

        Returns:
            The translated form, or the matching source text
        """
        if domain not in self._data:
            self.merge(None, domain)
            logger.debug("Seeded empty domain '%s'", domain)

        index = 0 if number is None else select_plural_index(self.plural_rule(domain), number)

        entry = self._data[domain].get(message_key(single, context))
        if isinstance(entry, str):
            entry = (entry,)
        if isinstance(entry, Sequence) and 0 <= index < len(entry) and entry[index]:
            return entry[index]

        if index == 0 or plural is None:
            return single
        return plural

    def _invalidate(self, domain: DomainName) -> None:
        self._plural_forms.pop(domain, None)
