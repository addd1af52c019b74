"""
Analysis Endpoints

POST /api/v1/analysis/analyze - Analyze vendor products
GET  /api/v1/analysis/health  - Health check

Version: analysis_engine_v2
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ranker import config
from ranker.catalog.models import VendorProducts
from ranker.rules.models import VendorConfig
from ranker.shared.dependencies import get_analyzer, analyzer_for_request
from .analyzer import Analyzer
from .batch import analyze_all, sort_by_effective_cost, review_queue
from .models import Analysis, AnalysisBatch

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/analysis",
    tags=["analysis"],
)


class AnalyzeRequest(BaseModel):
    """Products to analyze, grouped by vendor."""
    vendor_products: List[VendorProducts] = Field(
        description="Products grouped by vendor"
    )
    rules: Optional[Dict[str, VendorConfig]] = Field(
        default=None,
        description="Inline vendor rules; replaces the configured rules file"
    )
    supplements: Optional[List[str]] = Field(
        default=None,
        description="Supplement keywords; replaces the configured list"
    )
    sort: bool = Field(
        default=True,
        description="Sort by effective cost ascending"
    )


class AnalyzeResponse(BaseModel):
    success: bool = True
    count: int
    review_count: int
    result_hash: str
    analyses: List[Analysis]
    generated_at: datetime = Field(default_factory=datetime.utcnow)


class AnalysisHealthResponse(BaseModel):
    status: str = "ok"
    module: str = "analysis_engine"
    version: str = "analysis_engine_v2"
    timestamp: str = Field(default_factory=lambda: datetime.utcnow().isoformat())


@router.get("/health", response_model=AnalysisHealthResponse)
async def analysis_health():
    return AnalysisHealthResponse()


@router.post("/analyze", response_model=AnalyzeResponse, response_model_by_alias=True)
def analyze_endpoint(
    request: AnalyzeRequest,
    analyzer: Analyzer = Depends(get_analyzer),
):
    """
    Analyze every product in the request.

    Products that cannot be analyzed are skipped, never rejected; use the
    audit endpoint to see why.
    """
    try:
        active = analyzer_for_request(analyzer, request.rules, request.supplements)
        analyses = analyze_all(
            active,
            request.vendor_products,
            max_workers=config.MAX_WORKERS,
        )
        if request.sort:
            analyses = sort_by_effective_cost(analyses)

        batch = AnalysisBatch.from_analyses(analyses)
        return AnalyzeResponse(
            count=len(batch.analyses),
            review_count=len(review_queue(batch.analyses)),
            result_hash=batch.result_hash,
            analyses=batch.analyses,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Analysis error: {e}")
        raise HTTPException(status_code=500, detail=f"Analysis error: {str(e)}")
