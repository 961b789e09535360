from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Union

from dmsp_edr.models.record import EdrRecord

from .cursor import LineCursor
from .errors import EndOfInput, TruncatedInput
from .grammar import EDR_SCHEMA_SWEEPS, EdrSchema
from .sections import DEFAULT_MAX_VERSION_WIDTH, DecodeContext, decode_items

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO[str], IO[bytes], Iterable[str], Iterable[bytes]]


@dataclass(frozen=True)
class EdrReaderConfig:
    """
    Reader configuration for EDR text streams.

    schema:
      Section layout to decode (see dmsp_edr.ingest.grammar).
    record_span:
      Override of the schema's total line count per record. None keeps the
      schema's own value. The span grows whenever the format gains sections.
    max_version_width:
      Maximum length of the free-text version caption; longer captions are
      truncated and a warning is attached to the record.
    encoding:
      Encoding used to decode byte lines (paths are read as bytes). A line
      that does not decode fails as MalformedScalar with its line number.
    """
    schema: EdrSchema = EDR_SCHEMA_SWEEPS
    record_span: Optional[int] = None
    max_version_width: int = DEFAULT_MAX_VERSION_WIDTH
    encoding: str = "ascii"

    def resolved_schema(self) -> EdrSchema:
        if self.record_span is None:
            return self.schema
        return self.schema.with_span(self.record_span)


class EdrDecoder:
    """
    Record assembler: decodes one EDR per call from a LineCursor.

    Contract:
      - Sections are decoded strictly in schema order; any failure aborts the
        record and propagates unchanged.
      - After the grammar, lines are skipped until exactly record_span lines
        of this record were consumed.
      - End of input before the first line of a record is a clean stop
        (EndOfInput); after it, it is TruncatedInput.
    """

    def __init__(self, config: Optional[EdrReaderConfig] = None):
        self.config = config or EdrReaderConfig()
        self.schema = self.config.resolved_schema()

    def decode(self, cursor: LineCursor) -> EdrRecord:
        start = cursor.current()
        ctx = DecodeContext(cursor, max_version_width=self.config.max_version_width)
        try:
            ns = decode_items(ctx, self.schema.items)
            remaining = start + int(self.schema.record_span) - cursor.current()
            unparsed = cursor.skip(remaining)
        except EndOfInput as e:
            if cursor.current() == start:
                raise
            raise TruncatedInput(cursor.current(), start) from e

        logger.debug(
            "decoded record %s (lines %d-%d, %d unparsed)",
            ns["header"].record_no, start + 1, cursor.current(), len(unparsed),
        )
        return EdrRecord(**ns, unparsed_lines=tuple(unparsed), warnings=tuple(ctx.warnings))

    def iter_records(self, cursor: LineCursor) -> Iterator[EdrRecord]:
        """Yield records until the input ends exactly at a record boundary."""
        while not cursor.at_end():
            yield self.decode(cursor)


def _open_lines(source: Source) -> Iterator[Union[str, bytes]]:
    if isinstance(source, (str, Path)):
        path = Path(source).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(str(path))
        with open(path, "rb") as f:
            yield from f
    else:
        yield from source


def read_records(source: Source, config: Optional[EdrReaderConfig] = None) -> Iterator[EdrRecord]:
    """Lazily decode every record from a path, an open stream or an iterable of lines."""
    cfg = config or EdrReaderConfig()
    cursor = LineCursor(_open_lines(source), encoding=cfg.encoding)
    yield from EdrDecoder(cfg).iter_records(cursor)


class EdrReader:
    """Collects all records of one EDR source into a list."""

    def __init__(self, config: Optional[EdrReaderConfig] = None):
        self.config = config or EdrReaderConfig()

    def read(self, source: Source) -> List[EdrRecord]:
        records = list(read_records(source, self.config))
        logger.info("read %d EDR records", len(records))
        return records
