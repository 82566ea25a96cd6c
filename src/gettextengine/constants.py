"""Shared constants for gettextengine.

This module provides the naming conventions and bounds used across the
runtime package. Placing them here avoids circular imports and provides a
single source of truth.

Constants are grouped by domain:
- Locale data: Domain defaults and lookup key conventions
- Hooks: Action names and the translation filter naming contract
- Formatting: Logging bounds for the format engine

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale data
    "DEFAULT_DOMAIN",
    "CONTEXT_SEPARATOR",
    "METADATA_KEY",
    "PLURAL_FORMS_KEYS",
    "LANGUAGE_KEYS",
    "RTL_PROBE_TEXT",
    "RTL_PROBE_CONTEXT",
    # Hooks
    "HOOK_ADDED",
    "HOOK_REMOVED",
    "DEFAULT_PRIORITY",
    "I18N_NAMESPACE",
    "FILTER_GETTEXT",
    "FILTER_GETTEXT_WITH_CONTEXT",
    "FILTER_NGETTEXT",
    "FILTER_NGETTEXT_WITH_CONTEXT",
    "FILTER_HAS_TRANSLATION",
    "I18N_HOOK_PATTERN",
    # Formatting
    "DEFAULT_FORMAT_LOCALE",
    "SPRINTF_ERROR_LOG_CACHE_SIZE",
    "SPRINTF_MAX_INTEGER_DIGITS",
]

# ============================================================================
# LOCALE DATA
# ============================================================================

# Domain used when a caller does not name one.
DEFAULT_DOMAIN: str = "default"

# gettext context separator (EOT). Contextual keys are context + EOT + text.
CONTEXT_SEPARATOR: str = "\u0004"

# Reserved message key holding per-domain metadata.
METADATA_KEY: str = ""

# Metadata keys that may carry a plural rule, in precedence order.
PLURAL_FORMS_KEYS: tuple[str, ...] = ("Plural-Forms", "plural-forms", "plural_forms")

# Metadata keys that may name the domain's locale, in precedence order.
LANGUAGE_KEYS: tuple[str, ...] = ("lang", "language", "Language")

# Direction detection relies on translators localizing this exact pair.
RTL_PROBE_TEXT: str = "ltr"
RTL_PROBE_CONTEXT: str = "text direction"

# ============================================================================
# HOOKS
# ============================================================================

# Actions fired by the hooks registry whenever any handler is added/removed.
HOOK_ADDED: str = "hook_added"
HOOK_REMOVED: str = "hook_removed"

# Handlers without an explicit priority run at this priority.
DEFAULT_PRIORITY: int = 10

# Prefix of the per-instance namespace I18n registers its hook listeners under.
I18N_NAMESPACE: str = "core/i18n"

# Generic filter channels, one per public call shape. The domain-specific
# channel for each is built by runtime.filters.domain_channel().
FILTER_GETTEXT: str = "i18n.gettext"
FILTER_GETTEXT_WITH_CONTEXT: str = "i18n.gettext_with_context"
FILTER_NGETTEXT: str = "i18n.ngettext"
FILTER_NGETTEXT_WITH_CONTEXT: str = "i18n.ngettext_with_context"
FILTER_HAS_TRANSLATION: str = "i18n.has_translation"

# Matches every generic and domain-specific translation channel, e.g.
# i18n.gettext, i18n.ngettext_with_context, i18n.has_translation_my-plugin.
I18N_HOOK_PATTERN: re.Pattern[str] = re.compile(r"^i18n\.(n?gettext|has_translation)(_|$)")

# ============================================================================
# FORMATTING
# ============================================================================

# Locale used by %D when the caller does not pass one.
DEFAULT_FORMAT_LOCALE: str = "en_US"

# Distinct failing sprintf calls remembered for log de-duplication.
# Once exceeded, the least recently failing call may be logged again.
SPRINTF_ERROR_LOG_CACHE_SIZE: int = 1024

# Largest decimal exponent accepted by integer conversions (%d %i %u %x %X %o %c).
# Matches the interpreter's default int/str conversion digit limit.
SPRINTF_MAX_INTEGER_DIGITS: int = 4300
