"""
Fusional vergence series for charting.

Two points, Distance then Near. Base-in values are negated so the chart
shows BI to the left of zero and BO to the right; blanks plot as 0.
"""
from __future__ import annotations

from typing import Any, Mapping, Tuple

import numpy as np

from optoscreen.core.measurements import MeasurementCode, parse_or_zero
from .base import VergenceSeriesPoint

_C = MeasurementCode

SERIES_COLUMNS = ("biBreak", "biRecovery", "boBreak", "boRecovery")

# label → (bi break, bi recovery, bo break, bo recovery)
_SERIES_FIELDS = (
    ("Distance", (_C.BIF_BREAK_DISTANCE, _C.BIF_RECOVERY_DISTANCE,
                  _C.BOF_BREAK_DISTANCE, _C.BOF_RECOVERY_DISTANCE)),
    ("Near",     (_C.BIF_BREAK_NEAR, _C.BIF_RECOVERY_NEAR,
                  _C.BOF_BREAK_NEAR, _C.BOF_RECOVERY_NEAR)),
)


def _base_in(raw: Any) -> float:
    value = parse_or_zero(raw)
    return -value if value else 0.0   # no -0.0 on the chart axis


def build(record: Mapping[MeasurementCode, Any]) -> Tuple[VergenceSeriesPoint, ...]:
    """
    Build the Distance/Near series from a record keyed by MeasurementCode.

    Values may be raw text or already-parsed floats.
    """
    points = []
    for label, (bi_break, bi_recovery, bo_break, bo_recovery) in _SERIES_FIELDS:
        points.append(VergenceSeriesPoint(
            label=label,
            bi_break=_base_in(record.get(bi_break)),
            bi_recovery=_base_in(record.get(bi_recovery)),
            bo_break=parse_or_zero(record.get(bo_break)),
            bo_recovery=parse_or_zero(record.get(bo_recovery)),
        ))
    return tuple(points)


def as_matrix(series) -> np.ndarray:
    """
    Stack a series into a (points × 4) float array.

    Columns follow SERIES_COLUMNS; rows follow the series order.
    """
    if not series:
        return np.zeros((0, len(SERIES_COLUMNS)), dtype=float)
    return np.array([point.values() for point in series], dtype=float)
