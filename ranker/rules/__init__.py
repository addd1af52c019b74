"""
Vendor Rules Layer

Blocklists and manual overrides, injected explicitly into the analyzer.
There is no module-level registry.

Version: vendor_rules_v2
"""

from .models import ProductSpec, VendorConfig, VendorRegistry
from .resolver import (
    is_allowed,
    lookup_override,
    variant_blocked,
    subscription_discount,
)
from .loader import load_rules, load_rules_strict, RulesLoadError

__all__ = [
    "ProductSpec",
    "VendorConfig",
    "VendorRegistry",
    "is_allowed",
    "lookup_override",
    "variant_blocked",
    "subscription_discount",
    "load_rules",
    "load_rules_strict",
    "RulesLoadError",
]
