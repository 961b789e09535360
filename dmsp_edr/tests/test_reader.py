"""Tests for the record assembler, the reader driver and the encoder."""

from __future__ import annotations

import io
from dataclasses import replace

import numpy as np
import pytest

from dmsp_edr.ingest.cursor import LineCursor
from dmsp_edr.ingest.errors import EndOfInput, MalformedScalar, TruncatedInput, UnrecognizedEnumCode
from dmsp_edr.ingest.grammar import EDR_SCHEMA_CKL, EDR_SCHEMA_SWEEPS
from dmsp_edr.ingest.reader import EdrDecoder, EdrReader, EdrReaderConfig, read_records
from dmsp_edr.ingest.writer import format_record, format_records, write_records
from dmsp_edr.models import PlasmaDensitySource, PotentialSource


def test_full_record_consumes_declared_span(edr_text) -> None:
    cur = LineCursor.from_text(edr_text(1))
    rec = EdrDecoder().decode(cur)
    assert cur.current() == EDR_SCHEMA_SWEEPS.record_span == 114
    assert rec.header.record_no == 1
    assert rec.header.version == "v1.0"
    assert len(rec.ephemeris) == 3
    assert rec.potential_source is PotentialSource.SENPOT
    assert rec.plasma_density_source is PlasmaDensitySource.DM
    assert rec.satellite_potential.shape == (15,)
    for name in ("plasma_density", "horizontal_ion_drift", "vertical_ion_drift"):
        assert getattr(rec, name).shape == (60,)
    assert len(rec.ckl.analyses) == 6
    assert len(rec.ep.sweeps) == 15
    assert len(rec.rpa.sweeps) == 15
    assert len(rec.unparsed_lines) == 114 - EDR_SCHEMA_SWEEPS.decoded_lines
    assert rec.warnings == ()


def test_decoded_values_match_source_record(make_record) -> None:
    src = make_record(record_no=4, seed=11)
    rec = EdrDecoder().decode(LineCursor(format_record(src)))
    assert rec.header == src.header
    assert rec.ephemeris == src.ephemeris
    np.testing.assert_array_equal(rec.plasma_density, src.plasma_density)
    np.testing.assert_array_equal(rec.vertical_ion_drift, src.vertical_ion_drift)
    np.testing.assert_array_equal(
        rec.ckl.analyses[2].power_density_spectrum, src.ckl.analyses[2].power_density_spectrum
    )
    assert rec.ep.sweeps == src.ep.sweeps
    assert rec.rpa.sweeps == src.rpa.sweeps
    assert rec.rpa.source is src.rpa.source


def test_canonical_text_round_trips(edr_text) -> None:
    text = edr_text(2)
    records = list(read_records(io.StringIO(text)))
    assert format_records(records) == text


def test_three_records_then_clean_end(edr_text) -> None:
    cur = LineCursor.from_text(edr_text(3))
    records = list(EdrDecoder().iter_records(cur))
    assert [r.header.record_no for r in records] == [1, 2, 3]
    assert cur.current() == 3 * 114


def test_empty_input_yields_nothing() -> None:
    assert list(read_records(io.StringIO(""))) == []


def test_decode_at_boundary_raises_end_of_input(edr_text) -> None:
    cur = LineCursor.from_text(edr_text(1))
    dec = EdrDecoder()
    dec.decode(cur)
    with pytest.raises(EndOfInput):
        dec.decode(cur)
    assert cur.current() == 114


def test_truncated_record(edr_text) -> None:
    lines = edr_text(2).splitlines(keepends=True)
    cut = lines[: 114 + 40]
    with pytest.raises(TruncatedInput) as ei:
        list(read_records(cut))
    assert ei.value.line == 154
    assert ei.value.record_start == 114


def test_truncated_in_trailing_padding(edr_text) -> None:
    lines = edr_text(1).splitlines(keepends=True)[:-1]
    with pytest.raises(TruncatedInput):
        list(read_records(lines))


def test_bad_code_in_second_record_stops_the_session(edr_text) -> None:
    lines = edr_text(3).splitlines(keepends=True)
    # potential source line: header(3) + ephemeris(4) + title + values -> 10th line of the record
    idx = 114 + 9
    assert lines[idx].strip() == "2"
    lines[idx] = "3\n"
    it = read_records(lines)
    first = next(it)
    assert first.header.record_no == 1
    with pytest.raises(UnrecognizedEnumCode) as ei:
        next(it)
    assert ei.value.code == 3
    assert ei.value.line == idx + 1


def test_malformed_vector_reports_line(edr_text) -> None:
    lines = edr_text(1).splitlines(keepends=True)
    # plasma density body starts after header(3)+ephemeris(4)+potential(3)+title(1)
    lines[11] = "1.0 2.0 oops 4.0 5.0 6.0\n"
    with pytest.raises(MalformedScalar) as ei:
        list(read_records(lines))
    assert ei.value.line == 12
    assert ei.value.kind == "malformed_scalar"


def test_ckl_schema_leaves_sweeps_unset(edr_text) -> None:
    text = edr_text(2, with_sweeps=False)
    cfg = EdrReaderConfig(schema=EDR_SCHEMA_CKL)
    records = EdrReader(cfg).read(io.StringIO(text))
    assert len(records) == 2
    assert records[0].ep is None and records[0].rpa is None
    assert len(records[0].unparsed_lines) == 114 - 64


def test_record_span_is_configurable(make_record) -> None:
    sch = EDR_SCHEMA_SWEEPS.with_span(120)
    text = format_records([make_record(1), make_record(2, seed=5)], sch)
    cur = LineCursor.from_text(text)
    dec = EdrDecoder(EdrReaderConfig(record_span=120))
    records = list(dec.iter_records(cur))
    assert len(records) == 2
    assert cur.current() == 240
    assert len(records[0].unparsed_lines) == 120 - 99


def test_record_span_shorter_than_grammar_is_rejected() -> None:
    with pytest.raises(ValueError):
        EdrDecoder(EdrReaderConfig(record_span=98))


def test_reader_from_path(tmp_path, edr_text) -> None:
    p = tmp_path / "sample.edr"
    p.write_text(edr_text(2), encoding="ascii")
    records = EdrReader().read(p)
    assert [r.header.record_no for r in records] == [1, 2]


def test_reader_undecodable_byte_reports_line(tmp_path, edr_text) -> None:
    p = tmp_path / "latin1.edr"
    p.write_bytes(edr_text(1).encode("ascii").replace(b"RECORD", b"R\xe9CORD", 1))
    with pytest.raises(MalformedScalar) as ei:
        EdrReader().read(p)
    assert ei.value.line == 2
    assert ei.value.kind == "malformed_scalar"


def test_reader_encoding_is_configurable(tmp_path, edr_text) -> None:
    lines = edr_text(1).splitlines(keepends=True)
    lines[1] = lines[1].rstrip("\n") + "\u00e9\n"
    p = tmp_path / "latin1.edr"
    p.write_bytes("".join(lines).encode("latin-1"))
    records = EdrReader(EdrReaderConfig(encoding="latin-1")).read(p)
    assert records[0].header.version == "v1.0\u00e9"


def test_reader_missing_path(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        EdrReader().read(tmp_path / "missing.edr")


def test_write_records_counts(make_record) -> None:
    buf = io.StringIO()
    n = write_records([make_record(1), make_record(2, seed=3)], buf)
    assert n == 2
    assert buf.getvalue().count("\n") == 228


def test_writer_requires_sections_of_schema(make_record) -> None:
    rec = make_record(1, with_sweeps=False)
    with pytest.raises(ValueError):
        format_record(rec, EDR_SCHEMA_SWEEPS)
    assert len(format_record(rec, EDR_SCHEMA_CKL)) == 114


def test_unparsed_lines_written_back(make_record) -> None:
    rec = replace(make_record(1), unparsed_lines=("FUTURE SECTION", "1 2 3"))
    lines = format_record(rec)
    assert lines[99:101] == ["FUTURE SECTION", "1 2 3"]
    assert lines[101:] == [""] * 13
    again = EdrDecoder().decode(LineCursor(lines))
    assert again.unparsed_lines[:2] == ("FUTURE SECTION", "1 2 3")
