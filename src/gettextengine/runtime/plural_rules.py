"""Plural-form evaluation for gettext locale data.

A domain's '' metadata entry decides which translated form a count selects.
The rule may be given as:

- a callable ``plural_forms(n) -> index``
- a gettext header string (``"nplurals=2; plural=(n != 1);"``) under
  ``Plural-Forms``, ``plural-forms`` or ``plural_forms``
- a ``lang`` entry, in which case the expression comes from Babel's plural
  table for that locale

Rules are compiled by compile_plural_rule() and cached per domain by the
locale data store, which discards the cached rule whenever the domain's data
changes.

Python 3.13+. Depends on Babel for locale-derived plural expressions.
"""

import gettext
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from babel.core import UnknownLocaleError
from babel.messages.plurals import get_plural

from gettextengine.constants import LANGUAGE_KEYS, PLURAL_FORMS_KEYS
from gettextengine.diagnostics import PluralFormsError
from gettextengine.locale_utils import normalize_locale
from gettextengine.types import PluralFormsFunction

__all__ = [
    "DEFAULT_METADATA",
    "compile_plural_rule",
    "default_plural_forms",
    "extract_plural_expression",
    "plural_expression_for_locale",
    "select_plural_index",
]

logger = logging.getLogger(__name__)


def default_plural_forms(n: int | float) -> int:
    """English plural rule: form 0 for exactly one, form 1 otherwise.

    Examples:
        >>> default_plural_forms(1)
        0
        >>> default_plural_forms(0)
        1
        >>> default_plural_forms(-1)
        1
    """
    return 0 if n == 1 else 1


# Seeded into the '' entry of every domain that does not supply its own.
DEFAULT_METADATA: Mapping[str, Any] = MappingProxyType({"plural_forms": default_plural_forms})


def extract_plural_expression(header: str) -> str:
    """Return the ``plural=`` expression from a Plural-Forms header.

    A bare expression (no ``plural=`` part) is returned unchanged.

    Args:
        header: Header value, e.g. ``"nplurals=2; plural=(n != 1);"``

    Returns:
        The C expression, e.g. ``"(n != 1)"``

    Example:
        >>> extract_plural_expression("nplurals=3; plural=n%10==1 ? 0 : n==0 ? 1 : 2;")
        'n%10==1 ? 0 : n==0 ? 1 : 2'
    """
    parts = [part.strip() for part in header.split(";")]
    for part in parts:
        if part.startswith("plural="):
            return part[len("plural=") :].strip()
    if any(part.startswith("nplurals=") for part in parts):
        raise PluralFormsError(header, "missing 'plural=' expression")
    return header.strip()


def plural_expression_for_locale(locale_code: str) -> str:
    """Look up the gettext plural expression for a locale in Babel's table.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        C plural expression, e.g. ``"(n != 1)"`` for "de"

    Raises:
        PluralFormsError: If Babel does not know the locale
    """
    try:
        return get_plural(normalize_locale(locale_code)).plural_expr
    except (UnknownLocaleError, ValueError) as e:
        raise PluralFormsError(locale_code, f"unknown locale ({e})") from e


def _compile_expression(expression: str) -> PluralFormsFunction:
    try:
        evaluate = gettext.c2py(expression)
    except (ValueError, SyntaxError, RecursionError) as e:
        raise PluralFormsError(expression, str(e)) from e

    def plural_forms(n: int | float) -> int:
        # C semantics: n is an unsigned long, fractions are truncated.
        return evaluate(n if isinstance(n, int) else int(n))

    plural_forms.expression = expression  # type: ignore[attr-defined]
    return plural_forms


def compile_plural_rule(metadata: Mapping[str, Any] | None) -> PluralFormsFunction:
    """Build the plural rule a domain's metadata describes.

    Header strings win over callables, and an explicit callable wins over a
    language-derived rule. The seeded default_plural_forms only applies when
    nothing else is given. Invalid metadata never fails a lookup: it is
    logged and the default rule is returned.

    Args:
        metadata: The domain's '' entry (may be None)

    Returns:
        Callable mapping a count to a form index
    """
    if not metadata:
        return default_plural_forms

    candidates = [metadata[key] for key in PLURAL_FORMS_KEYS if metadata.get(key) is not None]

    try:
        for candidate in candidates:
            if isinstance(candidate, str):
                rule = _compile_expression(extract_plural_expression(candidate))
                logger.debug("Compiled plural rule: %s", rule.expression)  # type: ignore[attr-defined]
                return rule

        for candidate in candidates:
            if callable(candidate) and candidate is not default_plural_forms:
                return candidate

        for key in LANGUAGE_KEYS:
            language = metadata.get(key)
            if isinstance(language, str) and language:
                rule = _compile_expression(plural_expression_for_locale(language))
                logger.debug("Plural rule for language %s: %s", language, rule.expression)  # type: ignore[attr-defined]
                return rule
    except PluralFormsError as e:
        logger.warning("%s. Falling back to default plural rule", e)

    return default_plural_forms


def select_plural_index(rule: PluralFormsFunction, n: int | float) -> int:
    """Evaluate a plural rule for a count.

    Boolean results (rules written as ``n != 1``) are converted to 0/1. A
    rule that raises or returns a non-integer is logged and the default rule
    is used for this count.

    Args:
        rule: Compiled plural rule
        n: Count to evaluate

    Returns:
        Index of the translated form
    """
    try:
        index = rule(n)
        return int(index)
    except (ArithmeticError, TypeError, ValueError) as e:
        logger.warning("Plural rule failed for n=%r: %s. Using default rule", n, e)
        return default_plural_forms(n)
