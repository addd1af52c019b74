"""
Analysis Layer Models

Output records and the small vocabularies they are built from.

Version: analysis_engine_v2
"""

from datetime import datetime
from enum import Enum
from typing import List
from pydantic import BaseModel, Field, field_validator, model_validator

from ranker.shared.hashing import hash_records


class MassSource(str, Enum):
    """Which tier of the priority chain produced the base mass."""
    VARIANT_OVERRIDE = "VARIANT_OVERRIDE"
    FORCE_ACTIVE_GRAMS = "FORCE_ACTIVE_GRAMS"
    REGEX_GRAMS = "REGEX_GRAMS"
    REGEX_CAPSULES = "REGEX_CAPSULES"
    REGEX_FALLBACK_GRAMS = "REGEX_FALLBACK_GRAMS"
    NONE = "NONE"

    @property
    def is_override(self) -> bool:
        return self in (MassSource.VARIANT_OVERRIDE, MassSource.FORCE_ACTIVE_GRAMS)


class ProductType(str, Enum):
    """Form factors the classifier can assign."""
    CAPSULES = "Capsules"
    POWDER = "Powder"
    GEL = "Gel"
    TABLETS = "Tablets"
    MULTI_PACK = "Multi-Pack"
    HYBRID_BUNDLE = "Hybrid Bundle"


ALLOWED_MULTIPLIERS = (1.0, 1.1, 1.5)

SUBSCRIPTION_SUFFIX = " (Subscribe & Save)"


class Analysis(BaseModel):
    """
    One fully computed cost record for a variant.

    cost_per_gram = price / active_grams
    effective_cost = cost_per_gram / multiplier
    gross_grams is display only.
    """
    vendor: str
    name: str
    handle: str = ""
    price: float = Field(gt=0)
    active_grams: float = Field(gt=0, alias="activeGrams")
    gross_grams: float = Field(default=0.0, ge=0, alias="grossGrams")
    cost_per_gram: float = Field(alias="costPerGram")
    effective_cost: float = Field(alias="effectiveCost")
    multiplier: float = 1.0
    multiplier_label: str = Field(default="", alias="multiplierLabel")
    type: str
    image_url: str = Field(default="", alias="imageURL")
    is_subscription: bool = Field(default=False, alias="isSubscription")
    needs_review: bool = Field(default=False, alias="needsReview")
    review_reason: str = Field(default="", alias="reviewReason")
    mass_source: MassSource = Field(
        default=MassSource.NONE,
        alias="massSource",
        description="Priority-chain tier that produced the base mass"
    )

    class Config:
        frozen = True
        populate_by_name = True

    @field_validator("multiplier")
    @classmethod
    def known_multiplier(cls, v: float) -> float:
        if v not in ALLOWED_MULTIPLIERS:
            raise ValueError(f"multiplier must be one of {ALLOWED_MULTIPLIERS}, got {v}")
        return v

    @model_validator(mode="after")
    def label_matches_multiplier(self) -> "Analysis":
        if (self.multiplier == 1.0) != (self.multiplier_label == ""):
            raise ValueError("multiplier_label must be empty exactly when multiplier is 1.0")
        return self


class AnalysisBatch(BaseModel):
    """
    Ordered analysis output for a run, with a deterministic hash.
    """
    analyses: List[Analysis] = Field(default_factory=list)
    result_hash: str
    generated_at: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def from_analyses(cls, analyses: List[Analysis]) -> "AnalysisBatch":
        return cls(analyses=list(analyses), result_hash=hash_records(analyses))

    @property
    def review_count(self) -> int:
        return sum(1 for a in self.analyses if a.needs_review)
