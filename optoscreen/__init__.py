"""
OptoScreen - binocular vision measurement evaluation.

    from optoscreen import evaluate

    report = evaluate({"npc": "15", "phoria_near": "-4", "bof_break_near": "10"}, age=25)
    report.findings[0].message      # "NPC receded (15 cm)"
"""
from optoscreen.config import APP_VERSION as __version__
from optoscreen.core.clinical import EvaluationEngine, EvaluationReport, evaluate

__all__ = ["EvaluationEngine", "EvaluationReport", "evaluate", "__version__"]
