"""Tabular views over decoded EDR records.

Records stay the source of truth; these helpers only flatten them into
``pandas.DataFrame`` / ``numpy.ndarray`` objects for analysis. Enum-valued
columns are written as their names, raw integer codes keep their value.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from dmsp_edr.models.record import EdrRecord
from dmsp_edr.models.sources import light_ion_fraction

VECTOR_FIELDS = (
    "satellite_potential",
    "plasma_density",
    "horizontal_ion_drift",
    "vertical_ion_drift",
)

_LOCATION_COLUMNS = (
    "latitude",
    "longitude",
    "apex_latitude",
    "apex_longitude",
    "apex_local_time",
    "altitude",
)


def headers_frame(records: Sequence[EdrRecord]) -> pd.DataFrame:
    """One row per record: identifiers, section sources and the first ephemeris sample."""
    rows = []
    for r in records:
        h = r.header
        row = {
            "record_no": h.record_no,
            "edr_no": h.edr_no,
            "satellite_id": h.satellite_id,
            "date": h.date,
            "time": h.time,
            "version": h.version,
            "potential_source": r.potential_source.name,
            "plasma_density_source": r.plasma_density_source.name,
            "ckl_source": r.ckl.data_used.name,
            "ep_source": r.ep.source.name if r.ep is not None else None,
            "rpa_source": r.rpa.source.name if r.rpa is not None else None,
        }
        loc = r.ephemeris[0]
        for c in _LOCATION_COLUMNS:
            row[c] = getattr(loc, c)
        rows.append(row)
    return pd.DataFrame(rows, columns=_header_columns())


def _header_columns() -> list:
    return [
        "record_no", "edr_no", "satellite_id", "date", "time", "version",
        "potential_source", "plasma_density_source", "ckl_source", "ep_source", "rpa_source",
        *_LOCATION_COLUMNS,
    ]


def ephemeris_frame(records: Sequence[EdrRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        for k, loc in enumerate(r.ephemeris):
            row = {"record_no": r.record_no, "sample": k}
            for c in _LOCATION_COLUMNS:
                row[c] = getattr(loc, c)
            rows.append(row)
    return pd.DataFrame(rows, columns=["record_no", "sample", *_LOCATION_COLUMNS])


def vector_matrix(records: Sequence[EdrRecord], field: str) -> np.ndarray:
    """Stack one vector field of every record into an ``(n_records, N)`` float array."""
    if field not in VECTOR_FIELDS:
        raise ValueError(f"Unknown vector field {field!r}; expected one of {VECTOR_FIELDS}.")
    if not records:
        return np.empty((0, 0), dtype=np.float64)
    return np.vstack([np.asarray(getattr(r, field), dtype=np.float64) for r in records])


def ckl_frame(records: Sequence[EdrRecord]) -> pd.DataFrame:
    """One row per CKL analysis; spectrum samples as columns psd_0..psd_14."""
    rows = []
    for r in records:
        for k, a in enumerate(r.ckl.analyses):
            row = {
                "record_no": r.record_no,
                "analysis": k,
                "rms": a.rms,
                "t1": a.t1,
                "p1": a.p1,
                "ckl": a.ckl,
                "qualifier": a.qualifier.name,
                "source": r.ckl.data_used.name,
            }
            for j, v in enumerate(a.power_density_spectrum):
                row[f"psd_{j}"] = float(v)
            rows.append(row)
    return pd.DataFrame(rows)


def ep_frame(records: Sequence[EdrRecord]) -> pd.DataFrame:
    """One row per EP sweep; records decoded without EP sections contribute nothing."""
    rows = []
    for r in records:
        if r.ep is None:
            continue
        for k, s in enumerate(r.ep.sweeps):
            rows.append({
                "record_no": r.record_no,
                "sweep": k,
                "timestamp": s.timestamp,
                "electron_density": s.electron_density,
                "electron_temperature": s.electron_temperature,
                "satellite_potential": s.satellite_potential,
                "qualifier": s.qualifier,
                "surrogate": s.surrogate,
                "source": r.ep.source.name,
            })
    return pd.DataFrame(rows, columns=[
        "record_no", "sweep", "timestamp", "electron_density", "electron_temperature",
        "satellite_potential", "qualifier", "surrogate", "source",
    ])


def rpa_frame(records: Sequence[EdrRecord]) -> pd.DataFrame:
    """
    One row per RPA sweep.

    Values are copied as decoded. For unsuccessful sweeps only density_1 and
    total_density are meaningful; filtering is left to the caller.
    """
    rows = []
    for r in records:
        if r.rpa is None:
            continue
        for k, s in enumerate(r.rpa.sweeps):
            rows.append({
                "record_no": r.record_no,
                "sweep": k,
                "timestamp": s.timestamp,
                "density_1": s.density_1,
                "density_2": s.density_2,
                "light_ion_flag": s.light_ion_flag,
                "light_ion_fraction": light_ion_fraction(s.light_ion_flag),
                "ion_temperature": s.ion_temperature,
                "ion_drift": s.ion_drift,
                "successful": s.successful,
                "total_density": s.total_density,
                "source": r.rpa.source.name,
            })
    return pd.DataFrame(rows, columns=[
        "record_no", "sweep", "timestamp", "density_1", "density_2", "light_ion_flag",
        "light_ion_fraction", "ion_temperature", "ion_drift", "successful", "total_density", "source",
    ])
