"""Declarative section grammar for EDR text records.

A record layout is an ordered tuple of items. Each item consumes a fixed
number of physical lines, so a schema knows its decoded line count before a
single byte is read:

- ``Blank``    one separator line that must be empty
- ``Title``    one section-title line, discarded on decode
- ``Caption``  one title line whose free-text trailer is captured
- ``Fields``   one line of typed whitespace-separated tokens
- ``Vector``   N float tokens wrapped over a fixed number of lines
- ``Tag``      one line holding a single code from a closed table
- ``Repeat``   a sub-grammar decoded ``count`` times into a tuple
- ``Section``  a sub-grammar decoded once into one typed value

Adding sections to the file format means adding items to a schema, not
writing new parser code.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, Dict, Tuple, Type, Union

from dmsp_edr.models.record import (
    CklAnalyses,
    CklAnalysis,
    EdrHeader,
    EpSweepAnalyses,
    EpSweepAnalysis,
    RpaSweepAnalyses,
    RpaSweepAnalysis,
    SpacecraftLocation,
)
from dmsp_edr.models.sources import (
    CklQualifier,
    CklSource,
    PlasmaDensitySource,
    PotentialSource,
    RpaQualifier,
    SweepSource,
)

from .tokens import Converter, enum_code, fixed_text, to_float, to_int, to_uint


@dataclass(frozen=True)
class Blank:
    @property
    def line_count(self) -> int:
        return 1


@dataclass(frozen=True)
class Title:
    text: str

    @property
    def line_count(self) -> int:
        return 1


@dataclass(frozen=True)
class Caption:
    name: str
    prefix: str
    separator: str = " - "

    @property
    def line_count(self) -> int:
        return 1


@dataclass(frozen=True)
class Fields:
    fields: Tuple[Tuple[str, Converter], ...]

    @property
    def line_count(self) -> int:
        return 1

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(n for n, _ in self.fields)


@dataclass(frozen=True)
class Vector:
    name: str
    size: int
    lines: int = 1

    @property
    def line_count(self) -> int:
        return int(self.lines)


@dataclass(frozen=True)
class Tag:
    name: str
    enum: Type[IntEnum]

    @property
    def line_count(self) -> int:
        return 1


@dataclass(frozen=True)
class Repeat:
    name: str
    count: int
    items: Tuple["Item", ...]
    build: Callable[..., object]

    @property
    def line_count(self) -> int:
        return int(self.count) * grammar_lines(self.items)


@dataclass(frozen=True)
class Section:
    name: str
    items: Tuple["Item", ...]
    build: Callable[..., object]

    @property
    def line_count(self) -> int:
        return grammar_lines(self.items)


Item = Union[Blank, Title, Caption, Fields, Vector, Tag, Repeat, Section]


def grammar_lines(items: Tuple[Item, ...]) -> int:
    return sum(it.line_count for it in items)


@dataclass(frozen=True)
class EdrSchema:
    """
    One version of the EDR layout.

    record_span is the total number of physical lines per record. Lines
    after the decoded grammar, up to the span, are skipped and kept raw.
    """
    name: str
    items: Tuple[Item, ...]
    record_span: int

    def __post_init__(self) -> None:
        if int(self.record_span) <= 0:
            raise ValueError(f"record_span must be > 0 (got {self.record_span}).")
        if self.decoded_lines > int(self.record_span):
            raise ValueError(
                f"schema '{self.name}' decodes {self.decoded_lines} lines, "
                f"more than its record_span={self.record_span}."
            )

    @property
    def decoded_lines(self) -> int:
        return grammar_lines(self.items)

    @property
    def field_names(self) -> Tuple[str, ...]:
        out = []
        for it in self.items:
            name = getattr(it, "name", None)
            if name:
                out.append(name)
        return tuple(out)

    def with_span(self, record_span: int) -> "EdrSchema":
        return replace(self, record_span=int(record_span))


# ---------------------------------------------------------------------------
# Section layouts
# ---------------------------------------------------------------------------

HEADER_CAPTION = "RECORD, EDR OF RECORD, DMSP #, DATE, TIME"

HEADER = Section(
    "header",
    (
        Blank(),
        Caption("version", HEADER_CAPTION),
        Fields((
            ("record_no", to_uint),
            ("edr_no", to_uint),
            ("satellite_id", to_uint),
            ("date", fixed_text(8)),
            ("time", fixed_text(4)),
        )),
    ),
    EdrHeader,
)

LOCATION = Fields((
    ("latitude", to_float),
    ("longitude", to_float),
    ("apex_latitude", to_float),
    ("apex_longitude", to_float),
    ("apex_local_time", to_float),
    ("altitude", to_float),
))

EPHEMERIS = (
    Title("EPHEMERIS"),
    Repeat("ephemeris", 3, (LOCATION,), SpacecraftLocation),
)

SATELLITE_POTENTIAL = (
    Title("SATELLITE POTENTIAL (VOLTS), THEN SOURCE"),
    Vector("satellite_potential", 15, lines=1),
    Tag("potential_source", PotentialSource),
)

PLASMA_DENSITY = (
    Title("PRIMARY PLASMA DENSITY (ONE-SECOND AVERAGES)(/CM3), THEN SOURCE"),
    Vector("plasma_density", 60, lines=10),
    Tag("plasma_density_source", PlasmaDensitySource),
)

HORIZONTAL_DRIFT = (
    Title("HORIZONTAL ION DRIFT VELOCS (M/S)"),
    Vector("horizontal_ion_drift", 60, lines=10),
)

VERTICAL_DRIFT = (
    Title("VERTICAL ION DRIFT VELOCS (M/S)"),
    Vector("vertical_ion_drift", 60, lines=10),
)

CKL_ENTRY = (
    Fields((
        ("rms", to_float),
        ("t1", to_float),
        ("p1", to_float),
        ("ckl", to_float),
    )),
    Vector("power_density_spectrum", 15, lines=1),
    Tag("qualifier", CklQualifier),
)

CKL_GROUP = Section(
    "ckl",
    (
        Title("CKL ANALYSES, THEN SOURCE"),
        Repeat("analyses", 6, CKL_ENTRY, CklAnalysis),
        Tag("data_used", CklSource),
    ),
    CklAnalyses,
)

EP_ENTRY = (
    Fields((
        ("timestamp", to_int),
        ("electron_density", to_float),
        ("electron_temperature", to_float),
        ("satellite_potential", to_float),
        ("qualifier", to_int),
        ("surrogate", to_float),
    )),
)

EP_GROUP = Section(
    "ep",
    (
        Title("EP SWEEP ANALYSES"),
        Repeat("sweeps", 15, EP_ENTRY, EpSweepAnalysis),
        Title("EP SOURCE"),
        Tag("source", SweepSource),
    ),
    EpSweepAnalyses,
)

RPA_ENTRY = (
    Fields((
        ("timestamp", to_int),
        ("density_1", to_float),
        ("density_2", to_float),
        ("light_ion_flag", to_int),
        ("ion_temperature", to_float),
        ("ion_drift", to_float),
        ("qualifier", enum_code(RpaQualifier)),
        ("total_density", to_float),
    )),
)

RPA_GROUP = Section(
    "rpa",
    (
        Title("RPA SWEEP ANALYSES, THEN SOURCE"),
        Repeat("sweeps", 15, RPA_ENTRY, RpaSweepAnalysis),
        Tag("source", SweepSource),
    ),
    RpaSweepAnalyses,
)


# ---------------------------------------------------------------------------
# Schema versions
# ---------------------------------------------------------------------------

DEFAULT_RECORD_SPAN = 114

_CORE = (HEADER,) + EPHEMERIS + SATELLITE_POTENTIAL + PLASMA_DENSITY + HORIZONTAL_DRIFT + VERTICAL_DRIFT

EDR_SCHEMA_CKL = EdrSchema("ckl", _CORE + (CKL_GROUP,), DEFAULT_RECORD_SPAN)
EDR_SCHEMA_SWEEPS = EdrSchema("sweeps", _CORE + (CKL_GROUP, EP_GROUP, RPA_GROUP), DEFAULT_RECORD_SPAN)

SCHEMAS: Dict[str, EdrSchema] = {
    EDR_SCHEMA_CKL.name: EDR_SCHEMA_CKL,
    EDR_SCHEMA_SWEEPS.name: EDR_SCHEMA_SWEEPS,
}


def get_schema(name: str) -> EdrSchema:
    try:
        return SCHEMAS[name]
    except KeyError:
        raise ValueError(f"Unknown EDR schema {name!r}; expected one of {sorted(SCHEMAS)}.") from None
