"""
Audit Admin Endpoints

Operator tooling for products that produced no analysis.

Security: Requires X-Admin-API-Key header when ADMIN_API_KEY is set.

POST /api/v1/admin/audit/run    - Detect gaps and render the report
GET  /api/v1/admin/audit/health - Health check

Version: audit_gap_v1
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ranker.analysis.analyzer import Analyzer
from ranker.catalog.models import VendorProducts
from ranker.rules.models import VendorConfig
from ranker.shared.dependencies import get_analyzer, analyzer_for_request
from ranker.shared.security import verify_admin_key
from .detect import audit_all
from .models import AuditResult
from .report import format_audit_report

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/admin/audit",
    tags=["admin", "audit"],
)


class AuditRequest(BaseModel):
    vendor_products: List[VendorProducts]
    rules: Optional[Dict[str, VendorConfig]] = None
    supplements: Optional[List[str]] = None


class AuditResponse(BaseModel):
    success: bool = True
    total_gaps: int
    results: List[AuditResult]
    report: str
    generated_at: datetime = Field(default_factory=datetime.utcnow)


@router.get("/health")
async def audit_health():
    return {
        "status": "ok",
        "module": "audit_gap",
        "version": "audit_gap_v1",
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.post("/run", response_model=AuditResponse)
def run_audit(
    request: AuditRequest,
    analyzer: Analyzer = Depends(get_analyzer),
    api_key: str = Depends(verify_admin_key),
):
    """
    Explain every tracked product that yields no analysis and suggest the
    override that would fix it.
    """
    try:
        active = analyzer_for_request(analyzer, request.rules, request.supplements)
        results = audit_all(active, request.vendor_products)
        return AuditResponse(
            total_gaps=len(results),
            results=results,
            report=format_audit_report(results),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Audit error: {e}")
        raise HTTPException(status_code=500, detail=f"Audit error: {str(e)}")
