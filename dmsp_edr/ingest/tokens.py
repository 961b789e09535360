"""Token converters for whitespace-separated EDR fields.

Each converter takes ``(token, line)`` and either returns the typed value or
raises :class:`MalformedScalar` carrying the line the token came from.
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Any, Callable, List, Type, TypeVar

from .errors import MalformedScalar, UnrecognizedEnumCode

Converter = Callable[[str, int], Any]
E = TypeVar("E", bound=IntEnum)

_UINT = re.compile(r"^\+?\d+$")
_INT = re.compile(r"^[+-]?\d+$")


def to_uint(token: str, line: int) -> int:
    if not _UINT.match(token):
        raise MalformedScalar(f"expected unsigned integer, got {token!r}", line)
    return int(token)


def to_int(token: str, line: int) -> int:
    if not _INT.match(token):
        raise MalformedScalar(f"expected integer, got {token!r}", line)
    return int(token)


def to_float(token: str, line: int) -> float:
    # float() also takes digit-group underscores ("1_5"); the format never does
    if "_" in token:
        raise MalformedScalar(f"expected float, got {token!r}", line)
    try:
        return float(token)
    except ValueError:
        raise MalformedScalar(f"expected float, got {token!r}", line) from None


def fixed_text(width: int) -> Converter:
    """Converter accepting only tokens of exactly ``width`` characters."""
    w = int(width)

    def conv(token: str, line: int) -> str:
        if len(token) != w:
            raise MalformedScalar(f"expected {w}-character field, got {token!r}", line)
        return token

    conv.__name__ = f"fixed_text_{w}"
    return conv


def to_enum(token: str, line: int, enum: Type[E]) -> E:
    code = to_int(token, line)
    try:
        return enum(code)
    except ValueError:
        raise UnrecognizedEnumCode(code, line, enum) from None


def enum_code(enum: Type[IntEnum]) -> Converter:
    """Converter mapping an integer token through a closed code table."""

    def conv(token: str, line: int) -> IntEnum:
        return to_enum(token, line, enum)

    conv.__name__ = f"enum_{enum.__name__}"
    return conv


def split_exact(text: str, n: int, line: int) -> List[str]:
    toks = text.split()
    if len(toks) != n:
        raise MalformedScalar(f"expected {n} tokens, found {len(toks)}", line)
    return toks
