"""DMSP EDR decoder -- Python tooling for DMSP SSIES Environmental Data Records.

An EDR is a fixed-layout text block describing one measurement epoch of the
SSIES instrument suite: header metadata, ephemeris samples, fixed-length
time series (satellite potential, plasma density, ion drifts) and nested
CKL / EP / RPA analysis groups, each tagged with a closed source code.

This package provides tools for:
- Decoding EDR text streams into immutable, typed records (single pass)
- Describing record layouts as data, so format versions are schema changes
- Encoding records back into the canonical text layout
- Flattening records into pandas DataFrames for analysis

Key principles:
- No repair: malformed input fails with the offending line number
- No reinterpretation: values are stored exactly as read
- Strictly forward: no rollback, no random access

Main subpackages:
- ingest: Line cursor, section grammar, parsers, reader and writer
- models: Data models (EdrRecord and its sections, source code tables)
- analysis: Tabular views over decoded records
"""

__all__ = []
