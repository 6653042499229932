"""
Clinical Decision Layer

Turns a raw measurement record into findings, diagnoses, vergence criteria
and a chart series.

Usage:
    from optoscreen.core.clinical import EvaluationEngine

    engine = EvaluationEngine()
    report = engine.evaluate(record, age=42)
"""
from .engine import EvaluationEngine, evaluate
from .base import (
    CriterionResult,
    Diagnosis,
    EvaluationReport,
    Finding,
    VergenceSeriesPoint,
)

__all__ = [
    "EvaluationEngine",
    "evaluate",
    "CriterionResult",
    "Diagnosis",
    "EvaluationReport",
    "Finding",
    "VergenceSeriesPoint",
]
