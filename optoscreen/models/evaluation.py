"""
API request / response models for the evaluation endpoints.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class EvaluationRequest(BaseModel):
    """Raw form values for one visit."""
    measurements: Dict[str, Optional[Union[str, float]]] = Field(
        default_factory=dict,
        description="Field code → raw value. Blank or non-numeric values are treated as missing.",
        examples=[{"npc": "15", "phoria_near": "-4", "bof_break_near": "10"}],
    )
    age: Optional[float] = Field(None, ge=0, le=120, description="Patient age in years")
    profile: Optional[Literal["minimal", "full"]] = Field(
        None, description="Rule profile; defaults to the server setting"
    )


class FindingResponse(BaseModel):
    code: str
    message: str


class CriterionResponse(BaseModel):
    valid: bool
    error: Optional[str] = None


class VergencePointResponse(BaseModel):
    label: str
    biBreak: float
    biRecovery: float
    boBreak: float
    boRecovery: float


class EvaluationResponse(BaseModel):
    """EvaluationReport plus summary counts and the advisory notice."""
    findings: List[FindingResponse]
    diagnoses: List[str]
    sheard: CriterionResponse
    percival: CriterionResponse
    vergenceSeries: List[VergencePointResponse]
    age: float
    profile: str
    summary: Dict[str, Any]
    disclaimer: str


class ReferenceRangeResponse(BaseModel):
    min: float
    max: float
    unit: str
    description: str


class ReferenceRangesResponse(BaseModel):
    age: float
    ranges: Dict[str, ReferenceRangeResponse]


class MeasurementInfo(BaseModel):
    code: str
    unit: str
    description: str
    age_dependent: bool


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
