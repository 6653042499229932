"""
Unit Tests for the Measurement Layer

Tests for the code vocabulary, reference ranges and raw value parsing.
"""
import pytest

from optoscreen.core.measurements import (
    MeasurementCode,
    ReferenceRange,
    ReferenceRangeTable,
    default_table,
    is_blank,
    parse,
    parse_or_zero,
    parse_record,
    range_for,
    raw_by_code,
)
from optoscreen.utils import OptoScreenError, UnknownMeasurementCodeError


class TestParse:
    """Tests for parse / parse_or_zero."""

    @pytest.mark.parametrize("raw, expected", [
        ("15", 15.0),
        ("-4", -4.0),
        ("2.5", 2.5),
        ("  -0.75 ", -0.75),
        ("0", 0.0),
        (7, 7.0),
        (3.25, 3.25),
    ])
    def test_numeric_values(self, raw, expected):
        assert parse(raw) == expected

    @pytest.mark.parametrize("raw", [
        None, "", "   ", "abc", "12cm", "--4", "nan", "inf", "-Infinity",
        float("nan"), float("inf"), 10 ** 400, True, [], {},
    ])
    def test_no_value(self, raw):
        assert parse(raw) is None

    def test_zero_is_a_value(self):
        """"0" must not collapse into "no value"."""
        assert parse("0") == 0.0
        assert parse("0") is not None

    def test_parse_or_zero(self):
        assert parse_or_zero("") == 0.0
        assert parse_or_zero("junk") == 0.0
        assert parse_or_zero("6") == 6.0

    @pytest.mark.parametrize("raw", ["", " ", None])
    def test_is_blank(self, raw):
        assert is_blank(raw)

    @pytest.mark.parametrize("raw", ["0", "x", 0, 0.0])
    def test_is_not_blank(self, raw):
        assert not is_blank(raw)


class TestParseRecord:
    """Tests for record normalisation."""

    def test_every_code_present(self):
        record = parse_record({"npc": "15"})
        assert set(record) == set(MeasurementCode)
        assert record[MeasurementCode.NPC] == 15.0
        assert record[MeasurementCode.NPA] is None

    def test_unknown_fields_dropped(self):
        keyed = raw_by_code({"npc": "15", "patient_name": "x", "NPA": "9"})
        assert keyed == {MeasurementCode.NPC: "15", MeasurementCode.NPA: "9"}

    def test_accepts_enum_keys(self):
        record = parse_record({MeasurementCode.AC_RATIO: "6"})
        assert record[MeasurementCode.AC_RATIO] == 6.0

    def test_none_record(self):
        record = parse_record(None)
        assert all(v is None for v in record.values())


class TestReferenceRangeTable:
    """Tests for reference range lookup."""

    def test_all_codes_covered(self):
        assert set(default_table.codes()) == set(MeasurementCode)
        for code in MeasurementCode:
            assert isinstance(default_table.range_for(code), ReferenceRange)

    def test_constant_range(self):
        npc = range_for("npc")
        assert npc.max == 6
        assert npc.unit == "cm"
        assert range_for(MeasurementCode.NPC, age=70) == npc

    def test_amplitude_default_age(self):
        amp = range_for(MeasurementCode.AMPLITUDE_OD)
        assert amp.min == pytest.approx(7.5)     # 15 - 0.25 * 30
        assert amp.max == pytest.approx(17.5)    # 25 - 0.25 * 30

    @pytest.mark.parametrize("age", [8, 20, 45, 60])
    def test_amplitude_follows_age(self, age):
        amp = range_for("amplitude_os", age=age)
        assert amp.min == pytest.approx(15 - 0.25 * age)
        assert amp.max == pytest.approx(25 - 0.25 * age)

    def test_is_age_dependent(self):
        assert default_table.is_age_dependent("amplitude_od")
        assert default_table.is_age_dependent(MeasurementCode.AMPLITUDE_OS)
        assert not default_table.is_age_dependent("npc")

    def test_unknown_code_fails_fast(self):
        with pytest.raises(UnknownMeasurementCodeError) as exc_info:
            range_for("iop")
        assert exc_info.value.measurement_code == "iop"
        assert isinstance(exc_info.value, OptoScreenError)
        assert isinstance(exc_info.value, KeyError)
        assert exc_info.value.to_dict()["error"] == "UNKNOWN_MEASUREMENT_CODE"

    def test_code_missing_from_custom_table(self):
        table = ReferenceRangeTable({MeasurementCode.NPC: ReferenceRange(0, 5, "cm", "NPC")})
        assert table.range_for("npc").max == 5
        with pytest.raises(UnknownMeasurementCodeError):
            table.range_for("npa")

    def test_as_dict(self):
        table = default_table.as_dict(age=40)
        assert table["amplitude_od"]["min"] == pytest.approx(5.0)
        assert table["phoria_near"] == {
            "min": -6, "max": 0, "unit": "pd", "description": "Near phoria (negative = exo)",
        }

    def test_ranges_are_immutable(self):
        ref = range_for("npc")
        with pytest.raises(AttributeError):
            ref.max = 99

    def test_contains(self):
        ref = range_for("ac_ratio")
        assert ref.contains(4)
        assert ref.contains(3)
        assert not ref.contains(5.5)
