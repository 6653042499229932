"""
Binocular Vision Clinical Rules

Threshold checks over a parsed MeasurementRecord. Each rule is pure:
(RuleContext) → Optional[Finding], and fires only when every field it reads
has a value. Rules run in table order, which is also the order findings are
reported in.

Two profiles are registered:
  - "minimal": near points, amplitude, facility and AC/A (rules 1–5)
  - "full":    minimal plus phoria and base-out range checks (rules 1–9)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from optoscreen.core.measurements import (
    MeasurementCode,
    MeasurementRecord,
    ReferenceRange,
    ReferenceRangeTable,
    default_table,
)
from optoscreen.utils import get_logger, UnknownProfileError
from .base import Diagnosis, Finding

logger = get_logger(__name__)

_C = MeasurementCode

# ── Fixed thresholds (not taken from the reference table) ────────────────────
# Amplitude OD is flagged against an absolute floor, independent of age
AMPLITUDE_FLOOR_D          = 15.0

# Basic exophoria pattern: exo at both distances beyond these limits (pd)
BASIC_EXO_DISTANCE_LIMIT   = -2.0
BASIC_EXO_NEAR_LIMIT       = -6.0


@dataclass(frozen=True)
class RuleContext:
    """Inputs shared by every rule in one evaluation."""
    record: MeasurementRecord
    age: Optional[float] = None
    table: ReferenceRangeTable = default_table

    def get(self, code: MeasurementCode) -> Optional[float]:
        return self.record.get(code)

    def range(self, code: MeasurementCode) -> ReferenceRange:
        return self.table.range_for(code, self.age)


def format_value(value: float) -> str:
    """Render 15.0 as "15" and 2.5 as "2.5"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


# ── Rule 1: Receded near point of convergence ────────────────────────────────

def rule_npc_receded(ctx: RuleContext) -> Optional[Finding]:
    npc = ctx.get(_C.NPC)
    if npc is None or npc <= ctx.range(_C.NPC).max:
        return None
    return Finding(
        code=_C.NPC,
        message=f"NPC receded ({format_value(npc)} cm)",
        diagnosis=Diagnosis.CONVERGENCE_INSUFFICIENCY,
    )


# ── Rule 2: Receded near point of accommodation ──────────────────────────────

def rule_npa_receded(ctx: RuleContext) -> Optional[Finding]:
    npa = ctx.get(_C.NPA)
    if npa is None or npa <= ctx.range(_C.NPA).max:
        return None
    return Finding(
        code=_C.NPA,
        message=f"NPA receded ({format_value(npa)} cm)",
        diagnosis=Diagnosis.ACCOMMODATIVE_INSUFFICIENCY,
    )


# ── Rule 3: Reduced amplitude of accommodation (right eye) ───────────────────

def rule_reduced_amplitude_od(ctx: RuleContext) -> Optional[Finding]:
    """Fixed 15 D floor; the age-adjusted range is reported but not used here."""
    amplitude = ctx.get(_C.AMPLITUDE_OD)
    if amplitude is None or amplitude >= AMPLITUDE_FLOOR_D:
        return None
    return Finding(
        code=_C.AMPLITUDE_OD,
        message=f"Reduced accommodative amplitude OD ({format_value(amplitude)} D)",
        diagnosis=Diagnosis.ACCOMMODATIVE_INSUFFICIENCY,
    )


# ── Rule 4: Reduced binocular accommodative facility ─────────────────────────

def rule_reduced_facility(ctx: RuleContext) -> Optional[Finding]:
    facility = ctx.get(_C.AF_OU)
    if facility is None or facility >= ctx.range(_C.AF_OU).min:
        return None
    return Finding(
        code=_C.AF_OU,
        message=f"Reduced accommodative facility ({format_value(facility)} cpm)",
        diagnosis=Diagnosis.ACCOMMODATIVE_INFACILITY,
    )


# ── Rule 5: AC/A ratio out of range (high XOR low) ───────────────────────────

def rule_ac_ratio(ctx: RuleContext) -> Optional[Finding]:
    """
    One value, one branch: a high ratio suggests convergence excess, a low
    one convergence insufficiency. Never both.
    """
    ratio = ctx.get(_C.AC_RATIO)
    if ratio is None:
        return None

    bounds = ctx.range(_C.AC_RATIO)
    if ratio > bounds.max:
        return Finding(
            code=_C.AC_RATIO,
            message=f"High AC/A ratio ({format_value(ratio)}:1)",
            diagnosis=Diagnosis.CONVERGENCE_EXCESS,
        )
    elif ratio < bounds.min:
        return Finding(
            code=_C.AC_RATIO,
            message=f"Low AC/A ratio ({format_value(ratio)}:1)",
            diagnosis=Diagnosis.CONVERGENCE_INSUFFICIENCY,
        )
    return None


# ── Rule 6: Exophoria at both distances ──────────────────────────────────────

def rule_basic_exophoria_pattern(ctx: RuleContext) -> Optional[Finding]:
    distance = ctx.get(_C.PHORIA_DISTANCE)
    near = ctx.get(_C.PHORIA_NEAR)
    if distance is None or near is None:
        return None
    if distance < BASIC_EXO_DISTANCE_LIMIT and near < BASIC_EXO_NEAR_LIMIT:
        return Finding(
            code=_C.PHORIA_DISTANCE,
            message="Basic Exophoria pattern",
            diagnosis=Diagnosis.EXOPHORIA,
        )
    return None


# ── Rule 7: Distance exophoria (independent of rule 6) ───────────────────────

def rule_distance_exophoria(ctx: RuleContext) -> Optional[Finding]:
    phoria = ctx.get(_C.PHORIA_DISTANCE)
    if phoria is None or phoria >= ctx.range(_C.PHORIA_DISTANCE).min:
        return None
    return Finding(
        code=_C.PHORIA_DISTANCE,
        message=f"Distance Exophoria ({format_value(phoria)} pd)",
        diagnosis=Diagnosis.BASIC_EXOPHORIA,
    )


# ── Rule 8: Near exophoria ───────────────────────────────────────────────────

def rule_near_exophoria(ctx: RuleContext) -> Optional[Finding]:
    phoria = ctx.get(_C.PHORIA_NEAR)
    if phoria is None or phoria >= ctx.range(_C.PHORIA_NEAR).min:
        return None
    return Finding(
        code=_C.PHORIA_NEAR,
        message=f"Near Exophoria ({format_value(phoria)} pd)",
        diagnosis=Diagnosis.CONVERGENCE_INSUFFICIENCY,
    )


# ── Rule 9: Reduced base-out break at near ───────────────────────────────────

def rule_reduced_bo_range(ctx: RuleContext) -> Optional[Finding]:
    bo_break = ctx.get(_C.BOF_BREAK_NEAR)
    if bo_break is None or bo_break >= ctx.range(_C.BOF_BREAK_NEAR).min:
        return None
    return Finding(
        code=_C.BOF_BREAK_NEAR,
        message=f"Reduced BO ranges ({format_value(bo_break)} pd)",
        diagnosis=Diagnosis.CONVERGENCE_INSUFFICIENCY,
    )


# ── Registry ─────────────────────────────────────────────────────────────────

Rule = Callable[[RuleContext], Optional[Finding]]

MINIMAL_RULES: Tuple[Rule, ...] = (
    rule_npc_receded,
    rule_npa_receded,
    rule_reduced_amplitude_od,
    rule_reduced_facility,
    rule_ac_ratio,
)

FULL_RULES: Tuple[Rule, ...] = MINIMAL_RULES + (
    rule_basic_exophoria_pattern,
    rule_distance_exophoria,
    rule_near_exophoria,
    rule_reduced_bo_range,
)

RULE_PROFILES: Dict[str, Tuple[Rule, ...]] = {
    "minimal": MINIMAL_RULES,
    "full": FULL_RULES,
}


def rules_for(profile: str) -> Tuple[Rule, ...]:
    """Return the ordered rule tuple for `profile`."""
    try:
        return RULE_PROFILES[profile]
    except KeyError:
        raise UnknownProfileError(profile, RULE_PROFILES.keys()) from None


def detect(
    record: MeasurementRecord,
    age: Optional[float] = None,
    profile: str = "full",
    table: ReferenceRangeTable = default_table,
    rules: Optional[Sequence[Rule]] = None,
) -> List[Finding]:
    """
    Run the rule table over a parsed record.

    Args:
        record:  Parsed MeasurementRecord (see measurements.parse_record).
        age:     Patient age, forwarded to age-dependent range lookups.
        profile: "minimal" or "full". Ignored when `rules` is given.
        table:   Reference ranges to compare against.
        rules:   Explicit rule sequence, for callers assembling their own.

    Returns:
        Findings in rule order. Empty for a record with nothing abnormal.
    """
    active = tuple(rules) if rules is not None else rules_for(profile)
    ctx = RuleContext(record=record, age=age, table=table)

    findings: List[Finding] = []
    for rule in active:
        finding = rule(ctx)
        if finding is not None:
            logger.debug(f"AbnormalityDetector [{rule.__name__}]: {finding.message}")
            findings.append(finding)
    return findings
