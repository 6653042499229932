"""
Pytest Configuration and Fixtures

Shared fixtures for evaluation engine tests.
"""
import pytest
from pathlib import Path
import sys
from typing import Dict

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from optoscreen.core.clinical import EvaluationEngine
from optoscreen.core.measurements import MeasurementCode


@pytest.fixture
def engine() -> EvaluationEngine:
    return EvaluationEngine(default_profile="full")


@pytest.fixture
def blank_record() -> Dict[str, str]:
    """Every field present but empty, as the intake form submits it."""
    return {code.value: "" for code in MeasurementCode}


@pytest.fixture
def normal_record(blank_record) -> Dict[str, str]:
    """All tested values inside their reference ranges (age 30)."""
    record = dict(blank_record)
    record.update({
        "npc": "5",
        "npa": "8",
        "amplitude_od": "16",
        "amplitude_os": "16",
        "af_ou": "12",
        "ac_ratio": "4",
        "phoria_distance": "-1",
        "phoria_near": "-3",
        "bif_break_near": "21",
        "bif_recovery_near": "13",
        "bof_break_near": "21",
        "bof_recovery_near": "11",
        "bif_break_distance": "7",
        "bif_recovery_distance": "4",
        "bof_break_distance": "19",
        "bof_recovery_distance": "10",
    })
    return record


@pytest.fixture
def convergence_insufficiency_record(blank_record) -> Dict[str, str]:
    """Classic CI presentation: receded NPC, high near exo, low BO at near."""
    record = dict(blank_record)
    record.update({
        "npc": "12",
        "phoria_distance": "-1",
        "phoria_near": "-10",
        "bof_break_near": "8",
        "bif_break_near": "20",
    })
    return record
