"""
Vendor Rule Models

Per-vendor policy loaded from data/vendor_rules.json.

A ProductSpec holds manually verified facts about one product. When present,
its values bypass regex extraction entirely: they are overrides, not hints.

Version: vendor_rules_v2
"""

from typing import Dict, List, Optional, Any, Iterator
from pydantic import BaseModel, Field, field_validator


class ProductSpec(BaseModel):
    """
    Immutable, manually verified facts about a product.

    force_serving_mg is documentation for operators; the math never reads it.
    """
    force_type: Optional[str] = Field(
        default=None,
        alias="forceType",
        description="Product form factor e.g. 'Capsules', 'Powder'"
    )
    force_active_grams: float = Field(
        default=0.0,
        alias="forceActiveGrams",
        description="Active ingredient grams for every variant"
    )
    force_serving_mg: float = Field(
        default=0.0,
        alias="forceServingMg",
    )
    variant_overrides: Dict[str, float] = Field(
        default_factory=dict,
        alias="variantOverrides",
        description="Exact variant title -> active grams"
    )
    variant_gross_overrides: Dict[str, float] = Field(
        default_factory=dict,
        alias="variantGrossOverrides",
        description="Exact variant title -> label weight grams"
    )

    class Config:
        frozen = True
        populate_by_name = True
        extra = "ignore"

    @field_validator("force_type", mode="before")
    @classmethod
    def blank_type_is_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("force_active_grams", "force_serving_mg", mode="before")
    @classmethod
    def none_to_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @field_validator("variant_overrides", "variant_gross_overrides", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class VendorConfig(BaseModel):
    """
    Per-vendor policy.

    A positive global_subscription_discount makes the analyzer emit a
    "Subscribe & Save" twin for every qualifying variant.
    """
    blocklist: List[str] = Field(
        default_factory=list,
        description="Substrings that reject a whole product"
    )
    variant_blocklist: List[str] = Field(
        default_factory=list,
        alias="variantBlocklist",
        description="Substrings that reject individual variants"
    )
    overrides: Dict[str, ProductSpec] = Field(
        default_factory=dict,
        description="Product handle -> ProductSpec"
    )
    global_subscription_discount: float = Field(
        default=0.0,
        ge=0.0,
        lt=1.0,
        alias="globalSubscriptionDiscount",
    )

    class Config:
        frozen = True
        populate_by_name = True
        extra = "ignore"

    @field_validator("blocklist", "variant_blocklist", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("overrides", mode="before")
    @classmethod
    def none_to_dict(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("global_subscription_discount", mode="before")
    @classmethod
    def none_to_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v


class VendorRegistry:
    """
    Read-only mapping of vendor name -> VendorConfig.

    Vendors missing from the registry are fully permissive.
    """

    def __init__(self, vendors: Optional[Dict[str, VendorConfig]] = None):
        self._vendors: Dict[str, VendorConfig] = dict(vendors or {})

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "VendorRegistry":
        """Build from the decoded JSON rules document."""
        return cls({
            name: VendorConfig.model_validate(config or {})
            for name, config in raw.items()
        })

    @classmethod
    def empty(cls) -> "VendorRegistry":
        return cls()

    def get(self, vendor: str) -> Optional[VendorConfig]:
        return self._vendors.get(vendor)

    def vendors(self) -> List[str]:
        return sorted(self._vendors)

    def __contains__(self, vendor: object) -> bool:
        return vendor in self._vendors

    def __len__(self) -> int:
        return len(self._vendors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.vendors())
