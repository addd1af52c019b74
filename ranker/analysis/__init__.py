"""
Analysis Engine

Extraction, override resolution, classification and triage for supplement
listings. Produces cost per gram of active ingredient, adjusted for
delivery-form bioavailability.

PRINCIPLE: Overrides are trusted. Regex is a guess, and guesses get triaged.

Version: analysis_engine_v2
"""

from .models import (
    Analysis,
    AnalysisBatch,
    MassSource,
    ProductType,
)
from .analyzer import Analyzer, build_analysis, synthesize_subscription
from .batch import (
    analyze_vendor,
    analyze_all,
    sort_by_effective_cost,
    review_queue,
    render_table,
)

__all__ = [
    "Analysis",
    "AnalysisBatch",
    "MassSource",
    "ProductType",
    "Analyzer",
    "build_analysis",
    "synthesize_subscription",
    "analyze_vendor",
    "analyze_all",
    "sort_by_effective_cost",
    "review_queue",
    "render_table",
]

__version__ = "analysis_engine_v2"
