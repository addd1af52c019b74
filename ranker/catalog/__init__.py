"""
Catalog input records.

Products and variants as supplied by the storefront scrapers. They are
frozen for the duration of a run.
"""

from .models import Product, Variant, VendorProducts

__all__ = [
    "Product",
    "Variant",
    "VendorProducts",
]
