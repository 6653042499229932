"""
Clinical Decision Layer — Base Types

Data contracts produced by the rule table, the criterion calculators and the
vergence series builder. All are frozen; an EvaluationReport is rebuilt from
scratch on every evaluation.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from optoscreen.core.measurements import MeasurementCode


class Diagnosis(str, Enum):
    """Candidate diagnosis labels. Presence only, no ranking."""
    CONVERGENCE_INSUFFICIENCY   = "Convergence Insufficiency"
    ACCOMMODATIVE_INSUFFICIENCY = "Accommodative Insufficiency"
    ACCOMMODATIVE_INFACILITY    = "Accommodative Infacility"
    CONVERGENCE_EXCESS          = "Convergence Excess"
    EXOPHORIA                   = "Exophoria"
    BASIC_EXOPHORIA             = "Basic Exophoria"


@dataclass(frozen=True)
class Finding:
    """
    One measurement outside its reference range.

    `diagnosis` is the label implied by the rule that produced the finding;
    the aggregator reads it, the report serialises only code and message.
    """
    code: MeasurementCode
    message: str
    diagnosis: Diagnosis

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code.value, "message": self.message}


@dataclass(frozen=True)
class CriterionResult:
    """Outcome of Sheard's or Percival's criterion."""
    valid: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


@dataclass(frozen=True)
class VergenceSeriesPoint:
    """
    Fusional vergence ranges at one test distance, chart-ready.

    Base-in values are negated so BI plots left of zero and BO right.
    """
    label: str                   # "Distance" | "Near"
    bi_break: float
    bi_recovery: float
    bo_break: float
    bo_recovery: float

    def values(self) -> Tuple[float, float, float, float]:
        return (self.bi_break, self.bi_recovery, self.bo_break, self.bo_recovery)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "biBreak": self.bi_break,
            "biRecovery": self.bi_recovery,
            "boBreak": self.bo_break,
            "boRecovery": self.bo_recovery,
        }


@dataclass(frozen=True)
class EvaluationReport:
    """Everything one evaluation call returns."""
    findings: Tuple[Finding, ...]
    diagnoses: Tuple[Diagnosis, ...]
    sheard: CriterionResult
    percival: CriterionResult
    vergence_series: Tuple[VergenceSeriesPoint, ...]
    age: float
    profile: str = "full"

    @property
    def messages(self) -> List[str]:
        return [f.message for f in self.findings]

    # ── Serialisation ─────────────────────────────────────────────────────
    def to_dict(self) -> Dict[str, Any]:
        return {
            "findings": [f.to_dict() for f in self.findings],
            "diagnoses": [d.value for d in self.diagnoses],
            "sheard": self.sheard.to_dict(),
            "percival": self.percival.to_dict(),
            "vergenceSeries": [p.to_dict() for p in self.vergence_series],
            "age": self.age,
            "profile": self.profile,
        }
