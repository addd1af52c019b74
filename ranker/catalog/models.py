"""
Catalog Input Models

Pydantic models for scraped product listings.

Version: catalog_input_v1
"""

from typing import List, Any
from pydantic import BaseModel, Field, field_validator


class Variant(BaseModel):
    """
    A purchasable SKU under a product.

    The title often encodes size, count or flavor ("60 Capsules", "3 Pack").
    """
    price: str = Field(
        default="",
        description="Price as decimal text e.g. '29.99'"
    )
    title: str = Field(default="")
    available: bool = Field(default=True)

    class Config:
        frozen = True
        extra = "ignore"

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v: Any) -> str:
        """Some storefronts send numeric prices; keep them as text."""
        if v is None:
            return ""
        return str(v)

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: Any) -> str:
        return "" if v is None else str(v)


class Product(BaseModel):
    """
    One merchandise listing from one vendor.

    body_html is only ever used as a last-resort regex source, never for
    type classification.
    """
    title: str = Field(default="")
    context: str = Field(
        default="",
        description="SEO title / hidden context string"
    )
    handle: str = Field(
        default="",
        description="URL slug or full URL; override lookup key"
    )
    body_html: str = Field(default="")
    image_url: str = Field(default="")
    variants: List[Variant] = Field(default_factory=list)

    class Config:
        frozen = True
        extra = "ignore"

    @field_validator("title", "context", "handle", "body_html", "image_url", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)


class VendorProducts(BaseModel):
    """All products scraped for a single vendor."""
    vendor: str
    products: List[Product] = Field(default_factory=list)

    class Config:
        frozen = True
