"""
Audit Gap Models

Describe why a tracked, non-blocklisted product produced no analysis, and
what override would fix it.

Version: audit_gap_v1
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

MISSING_NO_VARIANTS = "no variants at all"
MISSING_NO_PRICED_VARIANTS = "no available variants with a valid price"
MISSING_MG = "mg per serving (forceServingMg)"
MISSING_COUNT = "capsule/tablet count"
MISSING_GRAMS = "total grams (forceActiveGrams)"
MISSING_PARTIAL = (
    "data was partially found but activeGrams still computed to 0 (check overrides)"
)


class SuggestedOverride(BaseModel):
    """
    A vendor_rules.json override proposal.

    None values are placeholders the operator must fill in.
    """
    force_type: str = Field(default="Capsules", alias="forceType")
    force_active_grams: Optional[float] = Field(default=None, alias="forceActiveGrams")
    force_serving_mg: Optional[float] = Field(default=None, alias="forceServingMg")

    class Config:
        frozen = True
        populate_by_name = True

    def to_rules_entry(self) -> Dict[str, Any]:
        """Entry shaped like an overrides value in vendor_rules.json."""
        return self.model_dump(by_alias=True)


class AuditResult(BaseModel):
    """
    What was found and what is missing for one product.
    """
    vendor: str
    title: str
    handle: str
    best_price: float = 0.0
    variant_count: int = Field(
        default=0,
        description="Available variants with a valid price"
    )
    mg_found: bool = False
    mg_value: float = 0.0
    count_found: bool = False
    count_value: float = 0.0
    grams_found: bool = False
    grams_value: float = 0.0
    kg_found: bool = False
    kg_value: float = 0.0
    missing: List[str] = Field(default_factory=list)
    suggested_override: SuggestedOverride = Field(default_factory=SuggestedOverride)

    class Config:
        frozen = True

    @property
    def found_summary(self) -> List[str]:
        found = []
        if self.mg_found:
            found.append(f"mg={self.mg_value:.0f}")
        if self.count_found:
            found.append(f"count={self.count_value:.0f}")
        if self.grams_found:
            found.append(f"grams={self.grams_value:.1f}")
        if self.kg_found:
            found.append(f"kg={self.kg_value:.2f}")
        return found
