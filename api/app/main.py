import logging
import math
import os
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from extractor.defaults import complete_financial_data
from extractor.html_text import html_to_text, looks_like_html
from extractor.parser import extract_financial_data, missing_fields
from valuation.comps import build_comps
from valuation.dcf import ValuationDomainError, compute_valuation, compute_wacc, project_fcf_detail
from valuation.metrics import rate_key_metrics
from valuation.models import (
    DEFAULT_ASSUMPTIONS,
    DCFAssumptions,
    DCFResult,
    FinancialData,
    PartialFinancialData,
    WACCResult,
)

DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000,http://localhost,http://127.0.0.1"
API_LOG_LEVEL = os.getenv("API_LOG_LEVEL", "INFO").upper()
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("API_ALLOWED_ORIGINS", DEFAULT_ORIGINS).split(",") if o.strip()]

logging.basicConfig(level=API_LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="filing valuation API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ExtractRequest(BaseModel):
    text: str
    html: Optional[bool] = None


class ExtractResponse(BaseModel):
    data: PartialFinancialData
    units: Dict[str, str]
    missing: List[str]


class CompleteRequest(ExtractRequest):
    company_name: str = Field(min_length=1)
    symbol: Optional[str] = None


class CompleteResponse(ExtractResponse):
    completed: FinancialData


class ValuationRequest(BaseModel):
    data: FinancialData
    assumptions: DCFAssumptions = DEFAULT_ASSUMPTIONS
    years: Optional[int] = Field(default=None, ge=1)


class ProjectionResponse(BaseModel):
    rows: List[Dict[str, Any]]


class MetricsRequest(BaseModel):
    data: FinancialData


class CompsRequest(BaseModel):
    subject: FinancialData
    peers: List[FinancialData]


def _filing_text(request: ExtractRequest) -> str:
    as_html = request.html if request.html is not None else looks_like_html(request.text)
    return html_to_text(request.text) if as_html else request.text


@app.get("/health", tags=["health"])
def health() -> dict:
    """Lightweight readiness probe."""
    return {"status": "ok"}


@app.get("/assumptions/default", response_model=DCFAssumptions, tags=["valuation"])
def default_assumptions() -> DCFAssumptions:
    return DEFAULT_ASSUMPTIONS


@app.post("/extract", response_model=ExtractResponse, tags=["extract"])
def extract(request: ExtractRequest) -> ExtractResponse:
    """Pull a partial financial record out of pasted 10-K text or HTML."""
    partial, units = extract_financial_data(_filing_text(request))
    return ExtractResponse(data=partial, units=units, missing=missing_fields(partial))


@app.post("/extract/complete", response_model=CompleteResponse, tags=["extract"])
def extract_complete(request: CompleteRequest) -> CompleteResponse:
    """Extract, then fill missing fields with defaults so the record can be valued."""
    partial, units = extract_financial_data(_filing_text(request))
    try:
        completed, missing = complete_financial_data(partial, request.company_name, symbol=request.symbol)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return CompleteResponse(data=partial, units=units, missing=missing, completed=completed)


@app.post("/wacc", response_model=WACCResult, tags=["valuation"])
def wacc(request: ValuationRequest) -> WACCResult:
    result = compute_wacc(request.data, request.assumptions)
    if not math.isfinite(result.wacc):
        # NaN/inf are not JSON-serializable.
        raise HTTPException(status_code=422, detail="Market cap plus total debt must be non-zero")
    return result


@app.post("/projection", response_model=ProjectionResponse, tags=["valuation"])
def projection(request: ValuationRequest) -> ProjectionResponse:
    return ProjectionResponse(rows=project_fcf_detail(request.data, request.assumptions, request.years))


@app.post("/valuation", response_model=DCFResult, tags=["valuation"])
def valuation(request: ValuationRequest) -> DCFResult:
    """Run the DCF; inputs with no meaningful answer come back as 422 with a reason code."""
    try:
        return compute_valuation(request.data, request.assumptions, request.years)
    except ValuationDomainError as exc:
        logger.info("Valuation rejected for %s: %s", request.data.symbol, exc)
        raise HTTPException(status_code=422, detail={"code": exc.code, "message": str(exc)})


@app.post("/metrics", tags=["valuation"])
def metrics(request: MetricsRequest) -> Dict[str, Any]:
    return {"symbol": request.data.symbol, "metrics": rate_key_metrics(request.data)}


@app.post("/comps", tags=["comps"])
def comps(request: CompsRequest) -> Dict[str, Any]:
    if not request.peers:
        raise HTTPException(status_code=400, detail="At least one peer is required")
    return build_comps(request.subject, request.peers)
