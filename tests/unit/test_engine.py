"""
Unit Tests for the Evaluation Engine

End-to-end scenarios over raw form records.
"""
import pytest

import optoscreen
from optoscreen.core.clinical import Diagnosis, EvaluationEngine, EvaluationReport, evaluate
from optoscreen.utils import UnknownProfileError


class TestScenarios:

    def test_npc_only(self, engine, blank_record):
        record = dict(blank_record, npc="15")
        report = engine.evaluate(record)
        assert report.messages == ["NPC receded (15 cm)"]
        assert [d.value for d in report.diagnoses] == ["Convergence Insufficiency"]

    def test_sheard_met(self, engine, blank_record):
        report = engine.evaluate(dict(blank_record, phoria_near="-4", bof_break_near="10"))
        assert report.sheard.to_dict() == {"valid": True, "error": None}

    def test_sheard_not_met_without_error(self, engine, blank_record):
        report = engine.evaluate(dict(blank_record, phoria_near="-8", bof_break_near="10"))
        assert report.sheard.to_dict() == {"valid": False, "error": None}

    def test_percival_met(self, engine, blank_record):
        record = dict(blank_record, bof_break_near="18", bif_break_near="6", phoria_near="-3")
        report = engine.evaluate(record)
        assert report.percival.to_dict() == {"valid": True, "error": None}

    def test_all_blank(self, engine, blank_record):
        report = engine.evaluate(blank_record)
        assert report.findings == ()
        assert report.diagnoses == ()
        assert report.sheard.error == "Missing required values for Sheard Criterion"
        assert report.percival.error == "Missing required values for Percival's Criterion"
        assert len(report.vergence_series) == 2
        for point in report.to_dict()["vergenceSeries"]:
            assert [point[k] for k in ("biBreak", "biRecovery", "boBreak", "boRecovery")] == [0, 0, 0, 0]

    def test_empty_mapping_same_as_blank(self, engine, blank_record):
        assert engine.evaluate({}) == engine.evaluate(blank_record)
        assert engine.evaluate(None) == engine.evaluate(blank_record)

    def test_normal_visit(self, engine, normal_record):
        report = engine.evaluate(normal_record, age=30)
        assert report.findings == ()
        assert report.sheard.valid is True

    def test_convergence_insufficiency(self, engine, convergence_insufficiency_record):
        report = engine.evaluate(convergence_insufficiency_record)
        assert report.messages == [
            "NPC receded (12 cm)",
            "Near Exophoria (-10 pd)",
            "Reduced BO ranges (8 pd)",
        ]
        assert report.diagnoses == (Diagnosis.CONVERGENCE_INSUFFICIENCY,)
        assert report.sheard.valid is False
        assert report.sheard.error is None
        assert report.percival.error == "Percival's Criterion not met"


class TestEngineBehaviour:

    def test_idempotent(self, engine, convergence_insufficiency_record):
        first = engine.evaluate(convergence_insufficiency_record, age=22)
        second = engine.evaluate(convergence_insufficiency_record, age=22)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_input_not_mutated(self, engine, convergence_insufficiency_record):
        snapshot = dict(convergence_insufficiency_record)
        engine.evaluate(convergence_insufficiency_record)
        assert convergence_insufficiency_record == snapshot

    def test_report_is_frozen(self, engine):
        report = engine.evaluate({"npc": "15"})
        with pytest.raises(AttributeError):
            report.findings = ()

    def test_default_age(self, engine):
        assert engine.evaluate({}).age == 30.0
        assert engine.evaluate({}, age=45).age == 45.0

    def test_profile_override(self, engine):
        record = {"npc": "15", "phoria_near": "-10"}
        assert len(engine.evaluate(record, profile="minimal").findings) == 1
        assert len(engine.evaluate(record, profile="full").findings) == 2
        assert engine.evaluate(record, profile="minimal").profile == "minimal"

    def test_minimal_default_profile(self):
        report = EvaluationEngine(default_profile="minimal").evaluate({"phoria_near": "-10"})
        assert report.findings == ()

    def test_unknown_profile(self, engine):
        with pytest.raises(UnknownProfileError):
            engine.evaluate({}, profile="experimental")
        with pytest.raises(UnknownProfileError):
            EvaluationEngine(default_profile="experimental")

    def test_unknown_fields_ignored(self, engine):
        report = engine.evaluate({"npc": "15", "visual_acuity": "20/20"})
        assert report.messages == ["NPC receded (15 cm)"]

    def test_registered_profiles(self):
        assert EvaluationEngine.registered_profiles() == ["minimal", "full"]

    def test_summarise(self, engine, convergence_insufficiency_record):
        summary = engine.summarise(engine.evaluate(convergence_insufficiency_record))
        assert summary == {
            "total_findings": 3,
            "diagnosis_count": 1,
            "criteria_met": {"sheard": False, "percival": False},
            "vergence_range_pd": {"Distance": 0.0, "Near": 28.0},
        }

    def test_summarise_vergence_range(self, engine, normal_record):
        summary = engine.summarise(engine.evaluate(normal_record))
        # distance 19 BO + 7 BI, near 21 BO + 21 BI
        assert summary["vergence_range_pd"] == {"Distance": 26.0, "Near": 42.0}

    def test_oversized_number_treated_as_missing(self, engine):
        report = engine.evaluate({"npc": 10 ** 400, "bof_break_near": 10 ** 400})
        assert report.findings == ()
        assert report.vergence_series[1].bo_break == 0.0

    def test_to_dict_shape(self, engine):
        data = engine.evaluate({"npc": "15"}).to_dict()
        assert set(data) == {
            "findings", "diagnoses", "sheard", "percival", "vergenceSeries", "age", "profile",
        }
        assert data["findings"] == [{"code": "npc", "message": "NPC receded (15 cm)"}]
        assert data["diagnoses"] == ["Convergence Insufficiency"]


def test_module_level_evaluate():
    report = evaluate({"ac_ratio": "2"})
    assert isinstance(report, EvaluationReport)
    assert report.messages == ["Low AC/A ratio (2:1)"]
    assert optoscreen.evaluate({"ac_ratio": "2"}) == report
