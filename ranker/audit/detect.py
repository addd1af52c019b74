"""
Audit Gap Detector

Read-only diagnostics for products the analyzer rejected. Re-runs the regex
probes across the same tiered search strings, records what was found and
what is missing, and proposes an override.

Never mutates products, rules or the analyzer.

Version: audit_gap_v1
"""

import logging
from typing import Iterable, List, Optional

from ranker.catalog.models import Product, VendorProducts
from ranker.analysis.analyzer import Analyzer
from ranker.analysis.extract import (
    RE_GRAMS,
    RE_KG,
    RE_MG,
    RE_COUNT,
    extract_float,
    extract_float_from,
    parse_price,
)
from ranker.analysis.models import ProductType
from .models import (
    AuditResult,
    SuggestedOverride,
    MISSING_NO_VARIANTS,
    MISSING_NO_PRICED_VARIANTS,
    MISSING_MG,
    MISSING_COUNT,
    MISSING_GRAMS,
    MISSING_PARTIAL,
)

logger = logging.getLogger(__name__)


def suggest_override(
    mg: Optional[float],
    count: Optional[float],
    grams: Optional[float],
    kg: Optional[float],
) -> SuggestedOverride:
    """
    forceActiveGrams = mg x count / 1000 when both are known, else the raw
    grams, else kg x 1000, else a placeholder.
    """
    if mg is not None and count is not None:
        return SuggestedOverride(
            force_type=ProductType.CAPSULES.value,
            force_active_grams=round(mg * count / 1000.0, 3),
            force_serving_mg=mg,
        )
    if grams is not None:
        return SuggestedOverride(
            force_type=ProductType.POWDER.value,
            force_active_grams=grams,
            force_serving_mg=mg,
        )
    if kg is not None:
        return SuggestedOverride(
            force_type=ProductType.POWDER.value,
            force_active_grams=kg * 1000.0,
            force_serving_mg=mg,
        )
    return SuggestedOverride(
        force_type=ProductType.CAPSULES.value,
        force_active_grams=None,
        force_serving_mg=mg,
    )


def diagnose_missing(
    mg: Optional[float],
    count: Optional[float],
    grams: Optional[float],
    kg: Optional[float],
) -> List[str]:
    has_powder_mass = grams is not None or kg is not None
    has_capsule_mass = mg is not None and count is not None

    if has_powder_mass or has_capsule_mass:
        return [MISSING_PARTIAL]

    missing = []
    if mg is None:
        missing.append(MISSING_MG)
    if count is None:
        missing.append(MISSING_COUNT)
    missing.append(MISSING_GRAMS)
    return missing


def audit_product(
    analyzer: Analyzer,
    vendor: str,
    product: Product,
) -> Optional[AuditResult]:
    """
    Explain why a product yields no analysis.

    Returns None when there is no gap: the product is untracked,
    blocklisted, or already analyzable.
    """
    if not analyzer.is_tracked(product):
        return None
    if not analyzer.is_allowed(vendor, product):
        return None

    if not product.variants:
        return AuditResult(
            vendor=vendor,
            title=product.title,
            handle=product.handle,
            missing=[MISSING_NO_VARIANTS],
        )

    if analyzer.analyze_product(vendor, product):
        return None

    prices = [
        price
        for price in (
            parse_price(v.price) for v in product.variants if v.available
        )
        if price is not None
    ]
    if not prices:
        return AuditResult(
            vendor=vendor,
            title=product.title,
            handle=product.handle,
            missing=[MISSING_NO_PRICED_VARIANTS],
        )

    variant_titles = " ".join(v.title for v in product.variants)
    clean_search = f"{product.title} {variant_titles}"
    broad_search = " ".join([
        product.title,
        product.context,
        product.handle.replace("-", " "),
        product.body_html,
        variant_titles,
    ])

    grams = extract_float_from(RE_GRAMS, clean_search, broad_search)
    kg = extract_float(RE_KG, clean_search)
    mg = extract_float(RE_MG, broad_search)
    count = extract_float_from(RE_COUNT, variant_titles, clean_search, broad_search)

    return AuditResult(
        vendor=vendor,
        title=product.title,
        handle=product.handle,
        best_price=min(prices),
        variant_count=len(prices),
        mg_found=mg is not None,
        mg_value=mg or 0.0,
        count_found=count is not None,
        count_value=count or 0.0,
        grams_found=grams is not None,
        grams_value=grams or 0.0,
        kg_found=kg is not None,
        kg_value=kg or 0.0,
        missing=diagnose_missing(mg, count, grams, kg),
        suggested_override=suggest_override(mg, count, grams, kg),
    )


def audit_all(
    analyzer: Analyzer,
    vendor_products: Iterable[VendorProducts],
) -> List[AuditResult]:
    """Audit every product; results keep vendor and product order."""
    results: List[AuditResult] = []
    for group in vendor_products:
        for product in group.products:
            gap = audit_product(analyzer, group.vendor, product)
            if gap is not None:
                results.append(gap)
    logger.info(f"Audit found {len(results)} product(s) needing overrides")
    return results
