"""
Measurement Layer

Vocabulary, reference ranges and raw-value parsing.
"""
from .codes import MeasurementCode
from .reference_ranges import ReferenceRange, ReferenceRangeTable, default_table, range_for
from .parser import MeasurementRecord, is_blank, parse, parse_or_zero, parse_record, raw_by_code

__all__ = [
    "MeasurementCode",
    "ReferenceRange",
    "ReferenceRangeTable",
    "default_table",
    "range_for",
    "MeasurementRecord",
    "parse",
    "parse_or_zero",
    "parse_record",
    "is_blank",
    "raw_by_code",
]
