"""Ingest package - EDR text decoding.

This package handles:
- Line bookkeeping over a forward-only text stream (LineCursor)
- The declarative section grammar and its schema versions
- Section parsers and the record assembler (EdrDecoder)
- Encoding records back to text (format_record / write_records)

Design principle:
- Decoding is strictly forward and single-pass; failures carry the line number
- No repair, defaulting or skipping of malformed tokens
"""
from .cursor import LineCursor
from .errors import (
    EdrDecodeError,
    EndOfInput,
    MalformedScalar,
    TruncatedInput,
    UnrecognizedEnumCode,
)
from .grammar import EDR_SCHEMA_CKL, EDR_SCHEMA_SWEEPS, SCHEMAS, EdrSchema, get_schema
from .reader import EdrDecoder, EdrReader, EdrReaderConfig, read_records
from .writer import format_record, format_records, write_records

__all__ = [
    "LineCursor",
    "EdrDecodeError",
    "EndOfInput",
    "MalformedScalar",
    "TruncatedInput",
    "UnrecognizedEnumCode",
    "EDR_SCHEMA_CKL",
    "EDR_SCHEMA_SWEEPS",
    "SCHEMAS",
    "EdrSchema",
    "get_schema",
    "EdrDecoder",
    "EdrReader",
    "EdrReaderConfig",
    "read_records",
    "format_record",
    "format_records",
    "write_records",
]
