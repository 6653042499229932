"""
Reference Range Table

Clinical norms for every MeasurementCode. Most bounds are fixed; the
amplitude of accommodation bounds follow Hofstetter's age formulas and are
computed on each lookup:

    minimum expected amplitude = 15 − 0.25 × age
    maximum expected amplitude = 25 − 0.25 × age

Constant bounds use the Morgan / Scheiman & Wick expected values
(mean ± one standard deviation, rounded).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from optoscreen import config
from optoscreen.utils import UnknownMeasurementCodeError
from .codes import MeasurementCode


@dataclass(frozen=True)
class ReferenceRange:
    """Valid numeric bounds for one measurement."""
    min: float
    max: float
    unit: str
    description: str

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> dict:
        return {
            "min": self.min,
            "max": self.max,
            "unit": self.unit,
            "description": self.description,
        }


def _amplitude_range(eye: str) -> Callable[[float], ReferenceRange]:
    def compute(age: float) -> ReferenceRange:
        return ReferenceRange(
            min=15 - 0.25 * age,
            max=25 - 0.25 * age,
            unit="D",
            description=f"Amplitude of accommodation {eye} (push-up)",
        )
    return compute


RangeEntry = Union[ReferenceRange, Callable[[float], ReferenceRange]]

_C = MeasurementCode

# ── Table: code → fixed range or age → range ─────────────────────────────────
_RANGES: Dict[MeasurementCode, RangeEntry] = {
    _C.NPC:                   ReferenceRange(0, 6, "cm", "Near point of convergence (break)"),
    _C.NPA:                   ReferenceRange(0, 10, "cm", "Near point of accommodation"),
    _C.AMPLITUDE_OD:          _amplitude_range("OD"),
    _C.AMPLITUDE_OS:          _amplitude_range("OS"),
    _C.AF_OD:                 ReferenceRange(11, 20, "cpm", "Monocular accommodative facility OD (±2.00 D flippers)"),
    _C.AF_OS:                 ReferenceRange(11, 20, "cpm", "Monocular accommodative facility OS (±2.00 D flippers)"),
    _C.AF_OU:                 ReferenceRange(8, 20, "cpm", "Binocular accommodative facility (±2.00 D flippers)"),
    _C.NRA:                   ReferenceRange(1.5, 2.5, "D", "Negative relative accommodation"),
    _C.PRA:                   ReferenceRange(-3.5, -1.25, "D", "Positive relative accommodation"),
    _C.AC_RATIO:              ReferenceRange(3, 5, ":1", "Accommodative convergence / accommodation ratio"),
    _C.PHORIA_DISTANCE:       ReferenceRange(-2, 2, "pd", "Distance phoria (negative = exo)"),
    _C.PHORIA_NEAR:           ReferenceRange(-6, 0, "pd", "Near phoria (negative = exo)"),
    _C.STEREOPSIS:            ReferenceRange(0, 40, "arc sec", "Stereo acuity"),
    _C.BIF_BLUR_NEAR:         ReferenceRange(9, 17, "pd", "Base-in blur at near"),
    _C.BIF_BREAK_NEAR:        ReferenceRange(17, 25, "pd", "Base-in break at near"),
    _C.BIF_RECOVERY_NEAR:     ReferenceRange(8, 18, "pd", "Base-in recovery at near"),
    _C.BOF_BLUR_NEAR:         ReferenceRange(12, 22, "pd", "Base-out blur at near"),
    _C.BOF_BREAK_NEAR:        ReferenceRange(15, 27, "pd", "Base-out break at near"),
    _C.BOF_RECOVERY_NEAR:     ReferenceRange(4, 18, "pd", "Base-out recovery at near"),
    _C.BIF_BREAK_DISTANCE:    ReferenceRange(4, 10, "pd", "Base-in break at distance"),
    _C.BIF_RECOVERY_DISTANCE: ReferenceRange(2, 6, "pd", "Base-in recovery at distance"),
    _C.BOF_BLUR_DISTANCE:     ReferenceRange(5, 13, "pd", "Base-out blur at distance"),
    _C.BOF_BREAK_DISTANCE:    ReferenceRange(11, 27, "pd", "Base-out break at distance"),
    _C.BOF_RECOVERY_DISTANCE: ReferenceRange(6, 14, "pd", "Base-out recovery at distance"),
}


class ReferenceRangeTable:
    """
    Lookup of ReferenceRange by MeasurementCode.

    Stateless; the module-level `default_table` is shared by the engine.
    """

    def __init__(self, ranges: Optional[Dict[MeasurementCode, RangeEntry]] = None):
        self._ranges = dict(_RANGES if ranges is None else ranges)

    def range_for(self, code, age: Optional[float] = None) -> ReferenceRange:
        """
        Return the reference range for `code`.

        Args:
            code: MeasurementCode or its string value.
            age:  Patient age in years; only used by amplitude codes.
                  Defaults to config.DEFAULT_AGE (30).

        Raises:
            UnknownMeasurementCodeError: `code` is not in the table.
        """
        key = MeasurementCode.lookup(code)
        entry = self._ranges.get(key) if key is not None else None
        if entry is None:
            raise UnknownMeasurementCodeError(str(getattr(code, "value", code)))

        if isinstance(entry, ReferenceRange):
            return entry

        effective_age = config.DEFAULT_AGE if age is None else float(age)
        return entry(effective_age)

    def codes(self) -> List[MeasurementCode]:
        """Codes in declaration order."""
        return list(self._ranges.keys())

    def is_age_dependent(self, code) -> bool:
        entry = self._ranges.get(MeasurementCode.lookup(code))
        return entry is not None and not isinstance(entry, ReferenceRange)

    def as_dict(self, age: Optional[float] = None) -> Dict[str, dict]:
        """Whole table evaluated at `age`, keyed by code value."""
        return {code.value: self.range_for(code, age).to_dict() for code in self.codes()}


default_table = ReferenceRangeTable()


def range_for(code, age: Optional[float] = None) -> ReferenceRange:
    """Shortcut for `default_table.range_for`."""
    return default_table.range_for(code, age)
