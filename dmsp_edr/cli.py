from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

from dmsp_edr.ingest.cursor import LineCursor
from dmsp_edr.ingest.errors import EdrDecodeError
from dmsp_edr.ingest.grammar import SCHEMAS, get_schema
from dmsp_edr.ingest.reader import EdrDecoder, EdrReaderConfig
from dmsp_edr.models.record import EdrRecord


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="python -m dmsp_edr",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Decode a DMSP SSIES EDR text file and print a short summary.

            Decoding stops at the first malformed record; the line number and
            error kind are reported on stderr.
            """
        ),
    )
    p.add_argument("path", help="EDR text file, or '-' for standard input")
    p.add_argument("--schema", default="sweeps", choices=sorted(SCHEMAS), help="Record layout version")
    p.add_argument("--record-span", type=int, default=None, help="Override the total line count per record")
    p.add_argument("--encoding", default="ascii", help="Text encoding of the input file")
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")

    ns = p.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=getattr(logging, str(ns.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = EdrReaderConfig(
        schema=get_schema(ns.schema),
        record_span=ns.record_span,
        encoding=ns.encoding,
    )
    decoder = EdrDecoder(cfg)
    records: List[EdrRecord] = []

    if ns.path == "-":
        cursor = LineCursor(sys.stdin.buffer, encoding=cfg.encoding)
        status = _decode_all(decoder, cursor, records)
    else:
        try:
            f = open(ns.path, "rb")
        except OSError as e:
            print(f"[error] cannot open {ns.path}: {e}", file=sys.stderr)
            return 1
        with f:
            cursor = LineCursor(f, encoding=cfg.encoding)
            status = _decode_all(decoder, cursor, records)

    print(f"lines parsed: {cursor.current()}")
    print(f"records read: {len(records)}")
    if records:
        example = records[0]
        print(f"example record: {example.header.record_no}")
        print(f"example record edr: {example.header.edr_no}")
        print(f"example record date/time: {example.header.date} {example.header.time}")
        n_warn = sum(len(r.warnings) for r in records)
        if n_warn:
            print(f"[warn] {n_warn} record warning(s); first: {next(w for r in records for w in r.warnings)}")
    return status


def _decode_all(decoder: EdrDecoder, cursor: LineCursor, records: List[EdrRecord]) -> int:
    try:
        for r in decoder.iter_records(cursor):
            records.append(r)
    except EdrDecodeError as e:
        print(f"[error] {e.kind} at line {e.line}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
