"""
Audit Gap Detector

Advisory tooling: explains why a tracked product produced no analysis and
proposes the override that would fix it. Purely read-only.

Version: audit_gap_v1
"""

from .models import AuditResult, SuggestedOverride
from .detect import audit_product, audit_all, suggest_override, diagnose_missing
from .report import format_audit_report

__all__ = [
    "AuditResult",
    "SuggestedOverride",
    "audit_product",
    "audit_all",
    "suggest_override",
    "diagnose_missing",
    "format_audit_report",
]

__version__ = "audit_gap_v1"
