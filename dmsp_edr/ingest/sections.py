"""Section parsers for EDR records.

Every parser consumes a fixed number of lines from a :class:`LineCursor` and
either returns the decoded value or raises an :class:`EdrDecodeError`
subclass; nothing is repaired, defaulted or skipped.

The record layout itself lives in :mod:`dmsp_edr.ingest.grammar`; this module
walks grammar items (``decode_items``) and exposes the named per-section
entry points built on top of it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar

import numpy as np

from dmsp_edr.models.record import (
    CklAnalyses,
    EdrHeader,
    EpSweepAnalyses,
    RpaSweepAnalyses,
    SpacecraftLocation,
)

from .cursor import LineCursor
from .errors import MalformedScalar
from .grammar import (
    CKL_GROUP,
    EP_GROUP,
    HEADER,
    HEADER_CAPTION,
    LOCATION,
    RPA_GROUP,
    Blank,
    Caption,
    Fields,
    Item,
    Repeat,
    Section,
    Tag,
    Title,
    Vector,
)
from .tokens import split_exact, to_enum, to_float

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=IntEnum)

DEFAULT_MAX_VERSION_WIDTH = 99


@dataclass
class DecodeContext:
    """State shared by the section parsers while one record is decoded."""

    cursor: LineCursor
    max_version_width: int = DEFAULT_MAX_VERSION_WIDTH
    warnings: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Line-level parsers
# ---------------------------------------------------------------------------


def parse_blank(cursor: LineCursor) -> None:
    text = cursor.advance()
    if text.strip():
        raise MalformedScalar(f"expected blank separator line, got {text!r}", cursor.current())


def parse_title(cursor: LineCursor) -> str:
    return cursor.advance()


def parse_caption(
    cursor: LineCursor,
    prefix: str,
    *,
    separator: str = " - ",
    max_width: int = DEFAULT_MAX_VERSION_WIDTH,
    warnings: Optional[List[str]] = None,
) -> str:
    """Consume a title line ``<prefix><separator><trailer>`` and return the trailer."""
    text = cursor.advance()
    line = cursor.current()
    head, sep, trailer = text.partition(separator)
    if not sep or head.strip() != prefix:
        raise MalformedScalar(f"expected title '{prefix}{separator}...', got {text!r}", line)
    trailer = trailer.rstrip()
    if len(trailer) > max_width:
        msg = f"line {line}: caption trailer truncated from {len(trailer)} to {max_width} characters"
        logger.warning(msg)
        if warnings is not None:
            warnings.append(msg)
        trailer = trailer[:max_width]
    return trailer


def parse_fields(cursor: LineCursor, fields: Fields) -> Dict[str, Any]:
    """Consume one line holding exactly the tokens named by ``fields``."""
    text = cursor.advance()
    line = cursor.current()
    toks = split_exact(text, len(fields.fields), line)
    return {name: conv(tok, line) for (name, conv), tok in zip(fields.fields, toks)}


def parse_vector(cursor: LineCursor, size: int, lines: int = 1) -> np.ndarray:
    """
    Consume ``lines`` physical lines and return exactly ``size`` floats.

    Tokens may wrap freely across the lines; only the total count matters.
    """
    values: List[float] = []
    for _ in range(int(lines)):
        text = cursor.advance()
        line = cursor.current()
        values.extend(to_float(tok, line) for tok in text.split())
    if len(values) != size:
        raise MalformedScalar(
            f"vector section expected {size} values over {lines} line(s), found {len(values)}",
            cursor.current(),
        )
    arr = np.asarray(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


def parse_source_tag(cursor: LineCursor, enum: Type[E]) -> E:
    """Consume one line with a single integer code and map it through ``enum``."""
    text = cursor.advance()
    line = cursor.current()
    (tok,) = split_exact(text, 1, line)
    return to_enum(tok, line, enum)


# ---------------------------------------------------------------------------
# Grammar walker
# ---------------------------------------------------------------------------


def _decode_blank(ctx: DecodeContext, item: Blank, ns: Dict[str, Any]) -> None:
    parse_blank(ctx.cursor)


def _decode_title(ctx: DecodeContext, item: Title, ns: Dict[str, Any]) -> None:
    parse_title(ctx.cursor)


def _decode_caption(ctx: DecodeContext, item: Caption, ns: Dict[str, Any]) -> None:
    ns[item.name] = parse_caption(
        ctx.cursor,
        item.prefix,
        separator=item.separator,
        max_width=ctx.max_version_width,
        warnings=ctx.warnings,
    )


def _decode_fields(ctx: DecodeContext, item: Fields, ns: Dict[str, Any]) -> None:
    ns.update(parse_fields(ctx.cursor, item))


def _decode_vector(ctx: DecodeContext, item: Vector, ns: Dict[str, Any]) -> None:
    ns[item.name] = parse_vector(ctx.cursor, item.size, item.lines)


def _decode_tag(ctx: DecodeContext, item: Tag, ns: Dict[str, Any]) -> None:
    ns[item.name] = parse_source_tag(ctx.cursor, item.enum)


def _decode_repeat(ctx: DecodeContext, item: Repeat, ns: Dict[str, Any]) -> None:
    ns[item.name] = tuple(
        item.build(**decode_items(ctx, item.items)) for _ in range(int(item.count))
    )


def _decode_section(ctx: DecodeContext, item: Section, ns: Dict[str, Any]) -> None:
    ns[item.name] = item.build(**decode_items(ctx, item.items))


_DECODERS: Dict[type, Callable[[DecodeContext, Any, Dict[str, Any]], None]] = {
    Blank: _decode_blank,
    Title: _decode_title,
    Caption: _decode_caption,
    Fields: _decode_fields,
    Vector: _decode_vector,
    Tag: _decode_tag,
    Repeat: _decode_repeat,
    Section: _decode_section,
}


def decode_items(
    ctx: DecodeContext,
    items: Tuple[Item, ...],
    ns: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Decode ``items`` in order and return the collected named values."""
    out: Dict[str, Any] = {} if ns is None else ns
    for item in items:
        try:
            decoder = _DECODERS[type(item)]
        except KeyError:
            raise TypeError(f"Unsupported grammar item: {item!r}") from None
        decoder(ctx, item, out)
    return out


def decode_section(ctx: DecodeContext, section: Section) -> Any:
    ns: Dict[str, Any] = {}
    _decode_section(ctx, section, ns)
    return ns[section.name]


# ---------------------------------------------------------------------------
# Named section entry points
# ---------------------------------------------------------------------------


def parse_header(
    cursor: LineCursor,
    *,
    max_version_width: int = DEFAULT_MAX_VERSION_WIDTH,
    warnings: Optional[List[str]] = None,
) -> EdrHeader:
    ctx = DecodeContext(cursor, max_version_width=max_version_width)
    if warnings is not None:
        ctx.warnings = warnings
    return decode_section(ctx, HEADER)


def parse_location(cursor: LineCursor) -> SpacecraftLocation:
    return SpacecraftLocation(**parse_fields(cursor, LOCATION))


def parse_ckl_analyses(cursor: LineCursor) -> CklAnalyses:
    return decode_section(DecodeContext(cursor), CKL_GROUP)


def parse_ep_sweep_analyses(cursor: LineCursor) -> EpSweepAnalyses:
    return decode_section(DecodeContext(cursor), EP_GROUP)


def parse_rpa_sweep_analyses(cursor: LineCursor) -> RpaSweepAnalyses:
    return decode_section(DecodeContext(cursor), RPA_GROUP)


__all__ = [
    "DEFAULT_MAX_VERSION_WIDTH",
    "DecodeContext",
    "HEADER_CAPTION",
    "decode_items",
    "decode_section",
    "parse_blank",
    "parse_caption",
    "parse_ckl_analyses",
    "parse_ep_sweep_analyses",
    "parse_fields",
    "parse_header",
    "parse_location",
    "parse_rpa_sweep_analyses",
    "parse_source_tag",
    "parse_title",
    "parse_vector",
]
