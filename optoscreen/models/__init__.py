from .evaluation import (
    EvaluationRequest,
    EvaluationResponse,
    FindingResponse,
    CriterionResponse,
    VergencePointResponse,
    ReferenceRangeResponse,
    ReferenceRangesResponse,
    MeasurementInfo,
    HealthResponse,
)

__all__ = [
    "EvaluationRequest",
    "EvaluationResponse",
    "FindingResponse",
    "CriterionResponse",
    "VergencePointResponse",
    "ReferenceRangeResponse",
    "ReferenceRangesResponse",
    "MeasurementInfo",
    "HealthResponse",
]
