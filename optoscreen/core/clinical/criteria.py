"""
Composite vergence criteria.

Sheard's criterion:    the compensating fusional reserve (base-out break at
                       near for exo) should be at least twice the phoria.
Percival's criterion:  the phoria should lie within the middle third of the
                       total near vergence range.

Both take raw field values. A blank value means "missing"; a missing
required value yields an explanatory `error` instead of a verdict.
"""
from __future__ import annotations

from typing import Any

from optoscreen.core.measurements import is_blank, parse, parse_or_zero
from .base import CriterionResult

SHEARD_MISSING = "Missing required values for Sheard Criterion"
SHEARD_INVALID = "Invalid input for Sheard Criterion"
PERCIVAL_MISSING = "Missing required values for Percival's Criterion"
PERCIVAL_NOT_MET = "Percival's Criterion not met"


def sheard(phoria_near: Any, bo_break_near: Any) -> CriterionResult:
    """
    Sheard's criterion at near.

    Returns:
        valid=True, error=None       reserve ≥ |phoria|
        valid=False, error=None      reserve < |phoria|
        valid=False, error=<reason>  missing or non-numeric input

    A failed comparison carries no error string; callers must read `valid`.
    """
    if is_blank(phoria_near) or is_blank(bo_break_near):
        return CriterionResult(valid=False, error=SHEARD_MISSING)

    phoria = parse(phoria_near)
    bo_break = parse(bo_break_near)
    if phoria is None or bo_break is None:
        return CriterionResult(valid=False, error=SHEARD_INVALID)

    compensating_vergence = bo_break / 2
    return CriterionResult(valid=compensating_vergence >= abs(phoria), error=None)


def percival(phoria_near: Any, bo_break_near: Any, bi_break_near: Any) -> CriterionResult:
    """
    Percival's criterion at near.

    Base-out and base-in break are required. Phoria is optional and counts
    as 0 when blank or non-numeric, as do non-numeric break values.
    """
    if is_blank(bo_break_near) or is_blank(bi_break_near):
        return CriterionResult(valid=False, error=PERCIVAL_MISSING)

    ideal = (parse_or_zero(bo_break_near) - parse_or_zero(bi_break_near)) / 3
    if abs(parse_or_zero(phoria_near)) <= ideal:
        return CriterionResult(valid=True, error=None)
    return CriterionResult(valid=False, error=PERCIVAL_NOT_MET)
