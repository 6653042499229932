"""
OptoScreen - FastAPI Application

HTTP front for the binocular vision evaluation engine:
- Health checks
- Measurement vocabulary and reference ranges
- Evaluation of one visit's measurements
"""
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from optoscreen import config
from optoscreen.core.clinical import EvaluationEngine
from optoscreen.core.measurements import default_table
from optoscreen.models import (
    EvaluationRequest,
    EvaluationResponse,
    HealthResponse,
    MeasurementInfo,
    ReferenceRangesResponse,
)
from optoscreen.utils import OptoScreenError, get_logger, setup_logging

setup_logging(config.LOG_LEVEL, config.LOG_FILE or None)
logger = get_logger(__name__)


# ---- FastAPI Application ----

app = FastAPI(
    title="OptoScreen Binocular Vision API",
    description="Advisory evaluation of optometric binocular vision measurements",
    version=config.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_engine = EvaluationEngine()


@app.exception_handler(OptoScreenError)
async def optoscreen_error_handler(request: Request, exc: OptoScreenError):
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=400, content=exc.to_dict())


# ---- Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """Root endpoint - health info."""
    return HealthResponse(status="healthy", version=config.APP_VERSION, timestamp=datetime.now())


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=config.APP_VERSION, timestamp=datetime.now())


@app.get("/api/v1/measurements", response_model=List[MeasurementInfo], tags=["Reference"])
async def list_measurements():
    """Every measurement code the engine accepts."""
    items = []
    for code in default_table.codes():
        ref = default_table.range_for(code)
        items.append(MeasurementInfo(
            code=code.value,
            unit=ref.unit,
            description=ref.description,
            age_dependent=default_table.is_age_dependent(code),
        ))
    return items


@app.get("/api/v1/reference-ranges", response_model=ReferenceRangesResponse, tags=["Reference"])
async def reference_ranges(age: Optional[float] = Query(None, ge=0, le=120)):
    """Reference table evaluated at `age` (amplitude bounds depend on it)."""
    effective_age = config.DEFAULT_AGE if age is None else age
    return ReferenceRangesResponse(age=effective_age, ranges=default_table.as_dict(effective_age))


@app.post("/api/v1/evaluate", response_model=EvaluationResponse, tags=["Evaluation"])
async def evaluate_measurements(request: EvaluationRequest):
    """
    Evaluate one visit's measurements.

    The result is advisory; `disclaimer` carries the notice the client must show.
    """
    report = _engine.evaluate(request.measurements, age=request.age, profile=request.profile)
    logger.info(
        f"Evaluation: {len(request.measurements)} field(s) in, "
        f"{len(report.findings)} finding(s) out"
    )
    return EvaluationResponse(
        **report.to_dict(),
        summary=_engine.summarise(report),
        disclaimer=config.ADVISORY_DISCLAIMER,
    )


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
