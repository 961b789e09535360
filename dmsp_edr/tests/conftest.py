"""Synthetic EDR fixtures shared by the test modules."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
import pytest

from dmsp_edr.models import (
    CklAnalyses,
    CklAnalysis,
    CklQualifier,
    CklSource,
    EdrHeader,
    EdrRecord,
    EpSweepAnalyses,
    EpSweepAnalysis,
    PlasmaDensitySource,
    PotentialSource,
    RpaQualifier,
    RpaSweepAnalyses,
    RpaSweepAnalysis,
    SpacecraftLocation,
    SweepSource,
)


def _vec(rng: np.random.Generator, n: int, scale: float) -> np.ndarray:
    return np.round(rng.normal(0.0, scale, size=n), 3)


def build_record(record_no: int = 1, seed: int = 0, with_sweeps: bool = True) -> EdrRecord:
    rng = np.random.default_rng(seed)
    header = EdrHeader(
        record_no=record_no,
        edr_no=7,
        satellite_id=53,
        date="19991231",
        time="0000",
        version="v1.0",
    )
    eph = tuple(
        SpacecraftLocation(
            latitude=float(np.round(rng.uniform(-90, 90), 2)),
            longitude=float(np.round(rng.uniform(0, 360), 2)),
            apex_latitude=float(np.round(rng.uniform(-90, 90), 2)),
            apex_longitude=float(np.round(rng.uniform(0, 360), 2)),
            apex_local_time=float(np.round(rng.uniform(0, 24), 2)),
            altitude=float(np.round(rng.uniform(830, 860), 1)),
        )
        for _ in range(3)
    )
    ckl = CklAnalyses(
        analyses=tuple(
            CklAnalysis(
                rms=float(np.round(rng.uniform(0, 1), 4)),
                t1=float(np.round(rng.normal(), 3)),
                p1=float(np.round(rng.normal(), 3)),
                ckl=float(np.round(rng.normal(), 3)),
                power_density_spectrum=_vec(rng, 15, 10.0),
                qualifier=CklQualifier(k % 5),
            )
            for k in range(6)
        ),
        data_used=CklSource.SM_DENSITY_FILTER_DATA,
    )
    ep = rpa = None
    if with_sweeps:
        ep = EpSweepAnalyses(
            sweeps=tuple(
                EpSweepAnalysis(
                    timestamp=3600 + 4 * k,
                    electron_density=float(np.round(rng.uniform(1e3, 1e5), 1)),
                    electron_temperature=float(np.round(rng.uniform(1e3, 3e3), 1)),
                    satellite_potential=float(np.round(rng.normal(-2, 0.5), 2)),
                    qualifier=k % 3,
                    surrogate=float(np.round(rng.uniform(0, 1), 3)),
                )
                for k in range(15)
            ),
            source=SweepSource.CPU,
        )
        rpa = RpaSweepAnalyses(
            sweeps=tuple(
                RpaSweepAnalysis(
                    timestamp=3600 + 4 * k,
                    density_1=float(np.round(rng.uniform(1e3, 1e5), 1)),
                    density_2=float(np.round(rng.uniform(1e2, 1e4), 1)),
                    light_ion_flag=(k % 3) if k < 12 else 3 + 2500,
                    ion_temperature=float(np.round(rng.uniform(800, 2000), 1)),
                    ion_drift=float(np.round(rng.normal(0, 100), 1)),
                    qualifier=RpaQualifier(k % 2),
                    total_density=float(np.round(rng.uniform(1e3, 1e5), 1)),
                )
                for k in range(15)
            ),
            source=SweepSource.GROUND,
        )
    return EdrRecord(
        header=header,
        ephemeris=eph,
        satellite_potential=_vec(rng, 15, 1.0),
        potential_source=PotentialSource.SENPOT,
        plasma_density=np.round(rng.uniform(1e3, 1e5, size=60), 1),
        plasma_density_source=PlasmaDensitySource.DM,
        horizontal_ion_drift=_vec(rng, 60, 100.0),
        vertical_ion_drift=_vec(rng, 60, 100.0),
        ckl=ckl,
        ep=ep,
        rpa=rpa,
    )


@pytest.fixture
def make_record() -> Callable[..., EdrRecord]:
    return build_record


@pytest.fixture
def edr_text() -> Callable[..., str]:
    """Canonical text for ``n`` consecutive synthetic records."""
    from dmsp_edr.ingest.grammar import EDR_SCHEMA_CKL, EDR_SCHEMA_SWEEPS
    from dmsp_edr.ingest.writer import format_records

    def make(n: int = 1, with_sweeps: bool = True, schema: Optional[object] = None) -> str:
        sch = schema or (EDR_SCHEMA_SWEEPS if with_sweeps else EDR_SCHEMA_CKL)
        recs = [build_record(record_no=k + 1, seed=k, with_sweeps=with_sweeps) for k in range(n)]
        return format_records(recs, sch)

    return make
