"""Analysis package.

Design principle:
  - Ingest produces immutable :class:`~dmsp_edr.models.record.EdrRecord` objects.
  - Analysis consumes records and produces tabular views; it never alters values.
"""

from .tables import (
    ckl_frame,
    ep_frame,
    ephemeris_frame,
    headers_frame,
    rpa_frame,
    vector_matrix,
)

__all__ = [
    "ckl_frame",
    "ep_frame",
    "ephemeris_frame",
    "headers_frame",
    "rpa_frame",
    "vector_matrix",
]
