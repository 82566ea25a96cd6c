"""Type aliases for locale data and subscriptions.

Provides semantic type aliases used throughout the runtime package and by
user code when annotating I18n call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeAlias

__all__ = [
    "DomainName",
    "LocaleData",
    "PluralFormsFunction",
    "SubscribeCallback",
    "TranslationEntry",
    "UnsubscribeCallback",
]

DomainName: TypeAlias = str
"""Text domain identifier (e.g., 'default', 'my-plugin')."""

TranslationEntry: TypeAlias = Sequence[str]
"""Translated forms of one message: index 0 is singular, then plural forms."""

LocaleData: TypeAlias = Mapping[str, Any]
"""Jed-style locale data: message key -> TranslationEntry, plus '' metadata."""

PluralFormsFunction: TypeAlias = Callable[[int | float], int]
"""Maps a count to the index of the translated form to use."""

SubscribeCallback: TypeAlias = Callable[[], None]
"""Called with no arguments whenever locale data changes."""

UnsubscribeCallback: TypeAlias = Callable[[], None]
"""Removes a previously registered SubscribeCallback."""
