"""
Binocular Vision Evaluation Engine

Central dispatcher. Takes the raw measurement record from the intake form and
returns one EvaluationReport: rule findings, candidate diagnoses, Sheard's
and Percival's criteria and the vergence chart series.

Usage:
    from optoscreen.core.clinical import EvaluationEngine

    engine = EvaluationEngine()
    report = engine.evaluate({"npc": "15", "phoria_near": "-4"}, age=25)
    for f in report.findings:
        print(f.code.value, f.message)

The four parts (findings, Sheard, Percival, series) read the same record and
none reads another's output.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from optoscreen import config
from optoscreen.core.measurements import (
    MeasurementCode,
    ReferenceRangeTable,
    default_table,
    parse,
    raw_by_code,
)
from optoscreen.utils import get_logger
from .base import EvaluationReport
from .criteria import percival, sheard
from .diagnosis import aggregate
from .rules import RULE_PROFILES, detect, rules_for
from .vergence import SERIES_COLUMNS, as_matrix, build

logger = get_logger(__name__)

_C = MeasurementCode


class EvaluationEngine:
    """
    Transforms a raw measurement record into an EvaluationReport.

    Stateless; one instance can serve concurrent requests.
    """

    def __init__(
        self,
        table: ReferenceRangeTable = default_table,
        default_profile: Optional[str] = None,
    ):
        self.table = table
        self.default_profile = default_profile or config.DEFAULT_RULE_PROFILE
        rules_for(self.default_profile)   # fail fast on a bad configured profile

    def evaluate(
        self,
        record: Optional[Mapping[Any, Any]],
        age: Optional[float] = None,
        profile: Optional[str] = None,
    ) -> EvaluationReport:
        """
        Evaluate one visit's measurements.

        Args:
            record:  {field: raw text}. Keys may be MeasurementCode members or
                     their string values; unknown keys are ignored.
            age:     Patient age in years. Defaults to config.DEFAULT_AGE.
            profile: Rule profile, "minimal" or "full".

        Returns:
            A fresh EvaluationReport. Blank or malformed values never raise;
            they skip rules and surface as criterion error strings.

        Raises:
            UnknownProfileError: `profile` is not registered.
        """
        profile = profile or self.default_profile
        effective_age = config.DEFAULT_AGE if age is None else float(age)

        raw = raw_by_code(record)
        parsed = {code: parse(raw.get(code)) for code in MeasurementCode}

        findings = detect(parsed, age=effective_age, profile=profile, table=self.table)
        diagnoses = aggregate(findings)

        sheard_result = sheard(raw.get(_C.PHORIA_NEAR), raw.get(_C.BOF_BREAK_NEAR))
        percival_result = percival(
            raw.get(_C.PHORIA_NEAR),
            raw.get(_C.BOF_BREAK_NEAR),
            raw.get(_C.BIF_BREAK_NEAR),
        )
        series = build(raw)

        if findings:
            logger.info(
                f"EvaluationEngine [{profile}]: "
                f"{len(findings)} finding(s), diagnoses: "
                + ", ".join(d.value for d in diagnoses)
            )
        else:
            logger.debug(f"EvaluationEngine [{profile}]: no findings")

        return EvaluationReport(
            findings=tuple(findings),
            diagnoses=tuple(diagnoses),
            sheard=sheard_result,
            percival=percival_result,
            vergence_series=series,
            age=effective_age,
            profile=profile,
        )

    @staticmethod
    def registered_profiles() -> List[str]:
        """Names of the rule profiles that can be passed to evaluate()."""
        return list(RULE_PROFILES.keys())

    @staticmethod
    def summarise(report: EvaluationReport) -> Dict[str, Any]:
        """
        Compact counts for API responses.

        Example output:
        {
            "total_findings": 2,
            "diagnosis_count": 1,
            "criteria_met": {"sheard": True, "percival": False},
            "vergence_range_pd": {"Distance": 26.0, "Near": 42.0},
        }

        `vergence_range_pd` is the total fusional span per test distance,
        base-out break minus (negated) base-in break.
        """
        matrix = as_matrix(report.vergence_series)
        spans = (
            matrix[:, SERIES_COLUMNS.index("boBreak")]
            - matrix[:, SERIES_COLUMNS.index("biBreak")]
        )
        return {
            "total_findings":  len(report.findings),
            "diagnosis_count": len(report.diagnoses),
            "criteria_met": {
                "sheard":   report.sheard.valid,
                "percival": report.percival.valid,
            },
            "vergence_range_pd": {
                point.label: float(span)
                for point, span in zip(report.vergence_series, spans)
            },
        }


_default_engine: Optional[EvaluationEngine] = None


def evaluate(
    record: Optional[Mapping[Any, Any]],
    age: Optional[float] = None,
    profile: Optional[str] = None,
) -> EvaluationReport:
    """Module-level shortcut for EvaluationEngine().evaluate()."""
    global _default_engine
    if _default_engine is None:
        _default_engine = EvaluationEngine()
    return _default_engine.evaluate(record, age=age, profile=profile)
