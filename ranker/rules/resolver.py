"""
Vendor Rule Resolver

Blocklist checks and override lookups. Read-only: nothing here mutates a
product or a config.

Version: vendor_rules_v2
"""

from typing import Optional, Tuple

from ranker.catalog.models import Product
from .models import ProductSpec, VendorConfig


def identity_text(product: Product) -> str:
    """Lowercase title + handle + context used for blocklist matching."""
    return f"{product.title} {product.handle} {product.context}".lower()


def is_allowed(config: Optional[VendorConfig], product: Product) -> bool:
    """
    Return False if any blocklist entry appears in the product identity.

    Matching is case-insensitive substring. No config means no rules.
    """
    if config is None:
        return True

    identity = identity_text(product)
    for blocked in config.blocklist:
        if blocked and blocked.lower() in identity:
            return False
    return True


def lookup_override(
    config: Optional[VendorConfig],
    handle: str
) -> Tuple[Optional[ProductSpec], bool]:
    """
    Find the manual override registered for a product handle.

    Returns:
        (spec, found)
    """
    if config is None:
        return None, False
    spec = config.overrides.get(handle)
    return spec, spec is not None


def variant_blocked(config: Optional[VendorConfig], variant_title: str) -> bool:
    """Return True if the variant title contains any variant blocklist entry."""
    if config is None:
        return False

    title = variant_title.lower()
    for blocked in config.variant_blocklist:
        if blocked and blocked.lower() in title:
            return True
    return False


def subscription_discount(config: Optional[VendorConfig]) -> float:
    if config is None:
        return 0.0
    return config.global_subscription_discount
