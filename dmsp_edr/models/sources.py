"""Closed code tables used by EDR source/qualifier lines.

Every tagged section of an EDR ends with a single integer naming the
instrument or processing path that produced it. Only the codes listed here
are valid; the decoder rejects anything else.
"""

from __future__ import annotations

from enum import IntEnum


class PotentialSource(IntEnum):
    CPU = 1
    SENPOT = 2


class PlasmaDensitySource(IntEnum):
    SM = 1
    DM = 2
    EP = 3


class CklQualifier(IntEnum):
    NO_ANALYSIS_ATTEMPT = 0
    NO_ANALYSIS_NO_DATA = 1
    NO_ANALYSIS_RMS_TOO_LOW = 2
    ANALYSIS_256_POINTS = 3
    ANALYSIS_512_POINTS = 4


class CklSource(IntEnum):
    SM_DENSITY_DATA = 1
    SM_DENSITY_FILTER_DATA = 2
    EP_DC_DENSITY_DATA = 3


class SweepSource(IntEnum):
    """Source of the EP and RPA sweep-analysis groups (shared table)."""

    CPU = 1
    GROUND = 2


class RpaQualifier(IntEnum):
    UNSUCCESSFUL = 0
    SUCCESSFUL = 1


class LightIon(IntEnum):
    """Light-ion flag of an RPA sweep.

    Codes >= 3 do not name a species; they encode a fractional composition
    as ``3 + 10000 * fraction`` and map to ``MIXED``.
    """

    NONE = 0
    H_PLUS = 1
    HE_PLUS = 2
    MIXED = 3

    @classmethod
    def from_flag(cls, flag: int) -> "LightIon":
        if flag >= 3:
            return cls.MIXED
        return cls(flag)


def light_ion_fraction(flag: int) -> float:
    """Fraction of light ions encoded by an RPA flag (nan for species codes)."""
    if flag < 3:
        return float("nan")
    return (flag - 3) / 10000.0
