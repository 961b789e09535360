"""Encode EdrRecord values back into the fixed EDR text layout.

The encoder walks the same grammar as the decoder. Output is canonical:
floats are written with ``repr``, vector tokens are spread evenly over their
declared body lines and discarded title lines get the schema's title text.
Decoding canonical text and encoding the result gives identical lines.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import IO, Any, Iterable, List, Optional

import numpy as np

from dmsp_edr.models.record import EdrRecord

from .grammar import (
    EDR_SCHEMA_SWEEPS,
    Blank,
    Caption,
    EdrSchema,
    Fields,
    Item,
    Repeat,
    Section,
    Tag,
    Title,
    Vector,
)


def format_token(value: Any) -> str:
    if isinstance(value, IntEnum):
        return str(int(value))
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        return repr(float(value))
    return str(value)


def _wrap(values: np.ndarray, lines: int) -> List[str]:
    per_line = int(math.ceil(len(values) / float(lines))) if lines else 0
    out = []
    for k in range(lines):
        chunk = values[k * per_line:(k + 1) * per_line]
        out.append(" ".join(format_token(v) for v in chunk))
    return out


def _encode_items(items: Iterable[Item], obj: Any, out: List[str]) -> None:
    for item in items:
        if isinstance(item, Blank):
            out.append("")
        elif isinstance(item, Title):
            out.append(item.text)
        elif isinstance(item, Caption):
            out.append(f"{item.prefix}{item.separator}{getattr(obj, item.name)}")
        elif isinstance(item, Fields):
            out.append(" ".join(format_token(getattr(obj, n)) for n in item.names))
        elif isinstance(item, Vector):
            out.extend(_wrap(np.asarray(getattr(obj, item.name), dtype=np.float64), int(item.lines)))
        elif isinstance(item, Tag):
            out.append(format_token(getattr(obj, item.name)))
        elif isinstance(item, Repeat):
            entries = getattr(obj, item.name)
            if len(entries) != item.count:
                raise ValueError(f"'{item.name}' needs {item.count} entries, got {len(entries)}")
            for entry in entries:
                _encode_items(item.items, entry, out)
        elif isinstance(item, Section):
            value = getattr(obj, item.name)
            if value is None:
                raise ValueError(f"record has no '{item.name}' section but the schema requires it")
            _encode_items(item.items, value, out)
        else:
            raise TypeError(f"Unsupported grammar item: {item!r}")


def format_record(record: EdrRecord, schema: Optional[EdrSchema] = None) -> List[str]:
    """Return the lines (without terminators) of one encoded record."""
    sch = schema or EDR_SCHEMA_SWEEPS
    out: List[str] = []
    _encode_items(sch.items, record, out)

    pad = int(sch.record_span) - len(out)
    tail = list(record.unparsed_lines[:pad])
    tail.extend([""] * (pad - len(tail)))
    out.extend(tail)
    return out


def format_records(records: Iterable[EdrRecord], schema: Optional[EdrSchema] = None) -> str:
    lines: List[str] = []
    for r in records:
        lines.extend(format_record(r, schema))
    return "".join(line + "\n" for line in lines)


def write_records(
    records: Iterable[EdrRecord],
    stream: IO[str],
    schema: Optional[EdrSchema] = None,
) -> int:
    """Write records to an open text stream; return the number of records written."""
    n = 0
    for r in records:
        for line in format_record(r, schema):
            stream.write(line + "\n")
        n += 1
    return n

