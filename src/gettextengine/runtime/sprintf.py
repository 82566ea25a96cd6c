"""sprintf-style string formatting that never raises on bad input.

Translated strings are data: a translator can drop a placeholder, add one,
or typo a conversion. sprintf() therefore never lets a formatting problem
reach the caller. Any failure is logged once per distinct failing call and
the template comes back unchanged.

Placeholders:
    ``%%``                     literal percent sign
    ``%s``                     str(value)
    ``%d`` ``%i``              integer (numeric strings accepted, truncated)
    ``%u``                     unsigned 32-bit integer
    ``%f`` ``%e`` ``%g``       floating point (default precision 6)
    ``%x`` ``%X`` ``%o``       hexadecimal / octal integer
    ``%c``                     character for a code point
    ``%b`` ``%t``              boolean, rendered ``true`` / ``false``
    ``%D``                     date or datetime, formatted by Babel for ``locale``
    ``%j``                     JSON (precision sets the indent)

Each may carry, in order: an argument selector (``2$`` for explicit
position, ``(name)`` or ``(user.name)`` / ``(items[0])`` for named lookup
in a single mapping argument), a ``+`` sign flag, a pad character (``0``
or ``'`` followed by any character), ``-`` for left alignment, a width and
a ``.precision``.

A template must use positional or named placeholders, not both.

Python 3.13+. Depends on Babel for %D.
"""

import functools
import json
import logging
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from babel.core import UnknownLocaleError
from babel.dates import format_date, format_datetime

from gettextengine.constants import (
    DEFAULT_FORMAT_LOCALE,
    SPRINTF_ERROR_LOG_CACHE_SIZE,
    SPRINTF_MAX_INTEGER_DIGITS,
)
from gettextengine.diagnostics import SprintfError
from gettextengine.locale_utils import get_babel_locale

__all__ = ["Placeholder", "parse_template", "sprintf"]

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(
    r"%(?:(?P<argnum>[1-9]\d*)\$|\((?P<key>[^)]*)\))?"
    r"(?P<sign>\+)?(?P<pad>0|'.)?(?P<align>-)?(?P<width>\d+)?(?:\.(?P<precision>\d+))?"
    r"(?P<conversion>[bcdDefgijostuxX])"
)
_KEY_HEAD = re.compile(r"[A-Za-z_][\w-]*")
_KEY_ATTR = re.compile(r"\.([A-Za-z_][\w-]*)")
_KEY_INDEX = re.compile(r"\[(\d+)\]")

_NUMERIC = frozenset("defgiuxXo")


@dataclass(frozen=True, slots=True)
class Placeholder:
    """One parsed conversion specifier.

    Attributes:
        conversion: Conversion character (s, d, D, ...)
        argnum: 1-based explicit argument position, if given
        key_path: Named lookup path, e.g. ("user", "name") or ("items", 0)
        sign: Whether to print '+' for non-negative numbers
        pad_char: Padding character (' ' by default)
        left_align: Pad on the right instead of the left
        width: Minimum field width
        precision: Precision (digits, truncation length or JSON indent)
    """

    conversion: str
    argnum: int | None = None
    key_path: tuple[str | int, ...] | None = None
    sign: bool = False
    pad_char: str = " "
    left_align: bool = False
    width: int | None = None
    precision: int | None = None


def _parse_key_path(template: str, key: str) -> tuple[str | int, ...]:
    head = _KEY_HEAD.match(key)
    if head is None:
        raise SprintfError(template, f"invalid named argument key {key!r}")
    path: list[str | int] = [head.group()]
    pos = head.end()
    while pos < len(key):
        if match := _KEY_ATTR.match(key, pos):
            path.append(match.group(1))
        elif match := _KEY_INDEX.match(key, pos):
            path.append(int(match.group(1)))
        else:
            raise SprintfError(template, f"invalid named argument key {key!r}")
        pos = match.end()
    return tuple(path)


@functools.lru_cache(maxsize=256)
def parse_template(template: str) -> tuple[str | Placeholder, ...]:
    """Split a template into literal text and placeholders.

    Args:
        template: Format string

    Returns:
        Tuple of literal strings and Placeholder objects

    Raises:
        SprintfError: On an unknown or malformed placeholder, or when
            positional and named placeholders are mixed
    """
    tokens: list[str | Placeholder] = []
    pos = 0
    named = positional = False

    while pos < len(template):
        if template[pos] != "%":
            end = template.find("%", pos)
            end = len(template) if end == -1 else end
            tokens.append(template[pos:end])
            pos = end
            continue

        if template.startswith("%%", pos):
            tokens.append("%")
            pos += 2
            continue

        match = _PLACEHOLDER.match(template, pos)
        if match is None:
            raise SprintfError(template, f"unexpected placeholder at position {pos}")

        key = match.group("key")
        if key is not None:
            named = True
        else:
            positional = True
        pad = match.group("pad")
        width = match.group("width")
        precision = match.group("precision")
        tokens.append(
            Placeholder(
                conversion=match.group("conversion"),
                argnum=int(match.group("argnum")) if match.group("argnum") else None,
                key_path=_parse_key_path(template, key) if key is not None else None,
                sign=match.group("sign") is not None,
                pad_char=" " if pad is None else pad[-1],
                left_align=match.group("align") is not None,
                width=int(width) if width else None,
                precision=int(precision) if precision else None,
            )
        )
        pos = match.end()

    if named and positional:
        raise SprintfError(template, "mixing positional and named placeholders is not supported")
    return tuple(tokens)


def _to_number(template: str, value: Any, conversion: str) -> int | float | Decimal:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            raise SprintfError(template, f"%{conversion} expects a number, got {value!r}") from None
    if not isinstance(value, int | float | Decimal):
        raise SprintfError(template, f"%{conversion} expects a number, got {type(value).__name__}")
    finite = value.is_finite() if isinstance(value, Decimal) else math.isfinite(value)
    if not finite:
        raise SprintfError(template, f"%{conversion} expects a finite number, got {value!r}")
    return value


def _to_integer(template: str, value: Any, conversion: str) -> int:
    number = _to_number(template, value, conversion)
    if isinstance(number, Decimal) and number.adjusted() >= SPRINTF_MAX_INTEGER_DIGITS:
        reason = f"%{conversion} argument exceeds {SPRINTF_MAX_INTEGER_DIGITS} digits"
        raise SprintfError(template, reason)
    return int(number)


def _to_bool(template: str, value: Any, conversion: str) -> bool:
    if not isinstance(value, bool | int | float | Decimal):
        raise SprintfError(template, f"%{conversion} expects a boolean, got {type(value).__name__}")
    return bool(value)


def _format_date(template: str, value: Any, locale: str) -> str:
    if not isinstance(value, date):
        raise SprintfError(template, f"%D expects a date, got {type(value).__name__}")
    try:
        babel_locale = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError) as e:
        raise SprintfError(template, f"unknown locale {locale!r}") from e
    if isinstance(value, datetime):
        return format_datetime(value, locale=babel_locale)
    return format_date(value, locale=babel_locale)


def _convert(template: str, spec: Placeholder, value: Any, locale: str) -> str:  # noqa: PLR0911, PLR0912
    conversion = spec.conversion
    precision = spec.precision

    match conversion:
        case "s":
            text = str(value)
            return text if precision is None else text[:precision]
        case "b" | "t":
            text = "true" if _to_bool(template, value, conversion) else "false"
            return text if precision is None else text[:precision]
        case "d" | "i":
            return str(_to_integer(template, value, conversion))
        case "u":
            return str(_to_integer(template, value, conversion) % 2**32)
        case "f" | "e" | "g":
            number = float(_to_number(template, value, conversion))
            return format(number, f".{6 if precision is None else precision}{conversion}")
        case "x" | "X" | "o":
            return format(_to_integer(template, value, conversion), conversion)
        case "c":
            try:
                return chr(_to_integer(template, value, conversion))
            except (OverflowError, ValueError) as e:
                raise SprintfError(template, f"%c expects a code point, got {value!r}") from e
        case "j":
            try:
                return json.dumps(value, ensure_ascii=False, indent=precision)
            except (TypeError, ValueError) as e:
                raise SprintfError(template, f"%j cannot serialize value: {e}") from e
        case "D":
            return _format_date(template, value, locale)
    raise SprintfError(template, f"unknown conversion %{conversion}")  # pragma: no cover


def _pad(spec: Placeholder, text: str) -> str:
    sign = ""
    if spec.conversion in _NUMERIC:
        if text.startswith("-"):
            sign, text = "-", text[1:]
        elif spec.sign:
            sign = "+"
    padding = spec.pad_char * max((spec.width or 0) - len(sign) - len(text), 0)
    if spec.left_align:
        return sign + text + padding
    if spec.pad_char == "0":
        return sign + padding + text
    return padding + sign + text


def _lookup_named(template: str, args: tuple[Any, ...], path: tuple[str | int, ...]) -> Any:
    if len(args) != 1 or not isinstance(args[0], Mapping):
        raise SprintfError(template, "named placeholders require a single mapping argument")
    value: Any = args[0]
    for part in path:
        try:
            if isinstance(part, int):
                if not isinstance(value, Sequence) or isinstance(value, str):
                    raise TypeError
                value = value[part]
            else:
                value = value[part]
        except (KeyError, IndexError, TypeError):
            name = ".".join(str(p) for p in path)
            raise SprintfError(template, f"missing named argument {name!r}") from None
        except Exception as e:
            name = ".".join(str(p) for p in path)
            raise SprintfError(template, f"cannot read named argument {name!r}") from e
    return value


def _apply(template: str, args: tuple[Any, ...], locale: str) -> str:
    tokens = parse_template(template)
    output: list[str] = []
    cursor = 0
    used = 0
    named = False

    for token in tokens:
        if isinstance(token, str):
            output.append(token)
            continue

        if token.key_path is not None:
            named = True
            value = _lookup_named(template, args, token.key_path)
        else:
            index = token.argnum - 1 if token.argnum is not None else cursor
            if token.argnum is None:
                cursor += 1
            if index >= len(args):
                raise SprintfError(template, f"too few arguments (expected at least {index + 1})")
            used = max(used, index + 1)
            value = args[index]

        try:
            text = _convert(template, token, value, locale)
        except SprintfError:
            raise
        except Exception as e:
            kind = type(value).__name__
            reason = f"cannot convert {kind} for %{token.conversion}: {type(e).__name__}"
            raise SprintfError(template, reason) from e
        output.append(_pad(token, text))

    if not named and used < len(args):
        raise SprintfError(template, f"too many arguments (expected {used}, got {len(args)})")
    return "".join(output)


def _call_key(args: tuple[Any, ...], locale: str) -> str:
    try:
        return repr((args, locale))
    except Exception:
        # Arguments that cannot describe themselves are keyed by identity.
        return repr(([(type(arg).__qualname__, id(arg)) for arg in args], locale))


@functools.lru_cache(maxsize=SPRINTF_ERROR_LOG_CACHE_SIZE)
def _log_error_once(template: str, call_key: str, reason: str) -> None:  # noqa: ARG001
    logger.error("sprintf error: %s", reason)


def sprintf(template: str, *args: Any, locale: str = DEFAULT_FORMAT_LOCALE) -> str:
    """Return template with placeholders replaced by args.

    Args:
        template: Format string
        *args: Positional values, or a single mapping for named placeholders
        locale: Locale for %D (default: en_US)

    Returns:
        The formatted string, or template unchanged if formatting failed

    Raises:
        TypeError: If template is not a string

    Examples:
        >>> sprintf("bonjour %s", "Riad")
        'bonjour Riad'
        >>> sprintf("bonjour %(name)s", {"name": "Riad"})
        'bonjour Riad'
        >>> sprintf("%05.1f%%", 9.5)
        '009.5%'
        >>> sprintf("Hello %(name)s")
        'Hello %(name)s'
    """
    if not isinstance(template, str):
        msg = f"Format template must be a string, got {type(template).__name__}"
        raise TypeError(msg)

    try:
        return _apply(template, args, locale)
    except SprintfError as e:
        _log_error_once(template, _call_key(args, locale), str(e))
        return template
