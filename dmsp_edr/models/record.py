from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .sources import (
    CklQualifier,
    CklSource,
    LightIon,
    PlasmaDensitySource,
    PotentialSource,
    RpaQualifier,
    SweepSource,
    light_ion_fraction,
)


@dataclass(frozen=True)
class EdrHeader:
    """
    Identification block at the top of each EDR.

    date is kept as the raw 8-character YYYYMMDD token and time as the raw
    4-character HHMM token; no calendar validation is applied.
    """
    record_no: int
    edr_no: int
    satellite_id: int
    date: str
    time: str
    version: str


@dataclass(frozen=True)
class SpacecraftLocation:
    latitude: float         # degrees, north
    longitude: float        # degrees, east
    apex_latitude: float    # degrees, north
    apex_longitude: float   # degrees, east
    apex_local_time: float  # hours
    altitude: float         # km


@dataclass(frozen=True)
class CklAnalysis:
    rms: float
    t1: float
    p1: float
    ckl: float
    power_density_spectrum: np.ndarray  # (15,)
    qualifier: CklQualifier


@dataclass(frozen=True)
class CklAnalyses:
    analyses: Tuple[CklAnalysis, ...]  # 6 entries
    data_used: CklSource


@dataclass(frozen=True)
class EpSweepAnalysis:
    """
    One electron-probe sweep.

    qualifier is kept as the raw integer: its encoding is not documented
    well enough to map it onto a closed table.
    """
    timestamp: int  # seconds of day
    electron_density: float
    electron_temperature: float
    satellite_potential: float
    qualifier: int
    surrogate: float


@dataclass(frozen=True)
class EpSweepAnalyses:
    sweeps: Tuple[EpSweepAnalysis, ...]  # 15 entries
    source: SweepSource


@dataclass(frozen=True)
class RpaSweepAnalysis:
    """
    One retarding-potential-analyzer sweep.

    When qualifier is UNSUCCESSFUL only density_1 and total_density carry
    meaning; the remaining fields are stored as read.
    """
    timestamp: int  # seconds of day
    density_1: float
    density_2: float
    light_ion_flag: int
    ion_temperature: float
    ion_drift: float
    qualifier: RpaQualifier
    total_density: float

    @property
    def successful(self) -> bool:
        return self.qualifier is RpaQualifier.SUCCESSFUL

    @property
    def light_ion(self) -> LightIon:
        return LightIon.from_flag(self.light_ion_flag)

    @property
    def light_ion_fraction(self) -> float:
        return light_ion_fraction(self.light_ion_flag)


@dataclass(frozen=True)
class RpaSweepAnalyses:
    sweeps: Tuple[RpaSweepAnalysis, ...]  # 15 entries
    source: SweepSource


@dataclass(frozen=True)
class EdrRecord:
    """
    One fully decoded Environmental Data Record.

    Notes
    - Every vector is a read-only float64 array of its declared length.
    - ep and rpa are None when the record was decoded with a schema that
      predates the sweep-analysis sections.
    - unparsed_lines holds the raw lines skipped to reach the record span.
    """
    header: EdrHeader
    ephemeris: Tuple[SpacecraftLocation, ...]  # 3 samples

    satellite_potential: np.ndarray  # (15,) volts
    potential_source: PotentialSource

    plasma_density: np.ndarray  # (60,) one-second averages, /cm^3
    plasma_density_source: PlasmaDensitySource

    horizontal_ion_drift: np.ndarray  # (60,) m/s
    vertical_ion_drift: np.ndarray  # (60,) m/s

    ckl: CklAnalyses
    ep: Optional[EpSweepAnalyses] = None
    rpa: Optional[RpaSweepAnalyses] = None

    unparsed_lines: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def record_no(self) -> int:
        return int(self.header.record_no)
