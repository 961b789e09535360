from .record import (
    CklAnalyses,
    CklAnalysis,
    EdrHeader,
    EdrRecord,
    EpSweepAnalyses,
    EpSweepAnalysis,
    RpaSweepAnalyses,
    RpaSweepAnalysis,
    SpacecraftLocation,
)
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

__all__ = [
    "CklAnalyses",
    "CklAnalysis",
    "EdrHeader",
    "EdrRecord",
    "EpSweepAnalyses",
    "EpSweepAnalysis",
    "RpaSweepAnalyses",
    "RpaSweepAnalysis",
    "SpacecraftLocation",
    "CklQualifier",
    "CklSource",
    "LightIon",
    "PlasmaDensitySource",
    "PotentialSource",
    "RpaQualifier",
    "SweepSource",
    "light_ion_fraction",
]
