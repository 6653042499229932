"""
Measurement Parser

Turns raw form values into numbers. Blank and malformed input become None
("no value"), which disables the single-field rules that depend on it. The
composite criteria and the vergence chart instead read through
`parse_or_zero`, where a missing value counts as 0.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from optoscreen.utils import get_logger
from .codes import MeasurementCode

logger = get_logger(__name__)

# Parsed, immutable-by-convention record: code → value or None
MeasurementRecord = Dict[MeasurementCode, Optional[float]]


def parse(raw: Any) -> Optional[float]:
    """
    Parse one raw field value.

    Returns the numeric value, or None for None / empty / whitespace /
    non-numeric / non-finite input. Never raises.

        >>> parse("-4.5")
        -4.5
        >>> parse("") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except (OverflowError, ValueError):
            return None
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except (TypeError, ValueError):
            return None
    if not math.isfinite(value):
        return None
    return value


def parse_or_zero(raw: Any) -> float:
    """Parse with the zero fallback used by the criteria and the vergence series."""
    value = parse(raw)
    return 0.0 if value is None else value


def is_blank(raw: Any) -> bool:
    """True for None and for strings that are empty after stripping."""
    if raw is None:
        return True
    return isinstance(raw, str) and not raw.strip()


def raw_by_code(raw_record: Optional[Mapping[Any, Any]]) -> Dict[MeasurementCode, Any]:
    """
    Re-key a raw {field: text} mapping by MeasurementCode, values untouched.

    Keys outside the vocabulary are dropped.
    """
    keyed: Dict[MeasurementCode, Any] = {}
    for key, raw in (raw_record or {}).items():
        code = MeasurementCode.lookup(key)
        if code is None:
            logger.debug(f"MeasurementParser: ignoring unknown field {key!r}")
            continue
        keyed[code] = raw
    return keyed


def parse_record(raw_record: Optional[Mapping[Any, Any]]) -> MeasurementRecord:
    """
    Normalise a raw {field: text} mapping into a MeasurementRecord.

    Every MeasurementCode is present in the result (None when not supplied).
    """
    keyed = raw_by_code(raw_record)
    return {code: parse(keyed.get(code)) for code in MeasurementCode}
