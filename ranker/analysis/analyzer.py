"""
Analyzer

Turns one Product into zero or more Analysis records:

Vendor rules -> mass -> pack multiplier -> gross grams -> type ->
bioavailability -> display name -> triage -> cost math ->
(optional) Subscribe & Save twin.

The vendor registry is injected at construction; nothing here reads or
writes module-level state, so one Analyzer can be shared across threads.

Version: analysis_engine_v2
"""

import logging
from typing import List, Optional, Sequence

from ranker.catalog.models import Product, Variant
from ranker.config import DEFAULT_SUPPLEMENTS
from ranker.rules.models import ProductSpec, VendorConfig, VendorRegistry
from ranker.rules.resolver import (
    is_allowed,
    lookup_override,
    variant_blocked,
    subscription_discount,
)
from .models import Analysis, ProductType, SUBSCRIPTION_SUFFIX
from .extract import parse_price, contains_any
from .mass import MassResult, resolve_masses, identity_text
from .classify import classify_type, resolve_multiplier
from .naming import build_display_name
from .triage import TriageResult, triage

logger = logging.getLogger(__name__)


def build_analysis(
    vendor: str,
    product: Product,
    name: str,
    price: float,
    masses: MassResult,
    gross_grams: float,
    product_type: str,
    multiplier: float,
    multiplier_label: str,
    review: TriageResult,
) -> Analysis:
    """Compute the cost fields and assemble the record."""
    cost_per_gram = price / masses.active_grams
    return Analysis(
        vendor=vendor,
        name=name,
        handle=product.handle,
        price=price,
        active_grams=masses.active_grams,
        gross_grams=gross_grams,
        cost_per_gram=cost_per_gram,
        effective_cost=cost_per_gram / multiplier,
        multiplier=multiplier,
        multiplier_label=multiplier_label,
        type=product_type,
        image_url=product.image_url,
        is_subscription=False,
        needs_review=review.needs_review,
        review_reason=review.reason,
        mass_source=masses.resolution.source,
    )


def synthesize_subscription(analysis: Analysis, discount: float) -> Analysis:
    """
    Recurring-purchase twin of a one-time record.

    Only price, name and is_subscription change; mass, type, multiplier and
    the review flag are inherited.
    """
    price = analysis.price * (1.0 - discount)
    cost_per_gram = price / analysis.active_grams
    return analysis.model_copy(update={
        "name": analysis.name + SUBSCRIPTION_SUFFIX,
        "price": price,
        "cost_per_gram": cost_per_gram,
        "effective_cost": cost_per_gram / analysis.multiplier,
        "is_subscription": True,
    })


class Analyzer:
    """
    Stateless product analyzer.

    Args:
        registry: Vendor rules; None means fully permissive
        supplements: Keywords a product must mention to be tracked; an
            empty list tracks everything
    """

    def __init__(
        self,
        registry: Optional[VendorRegistry] = None,
        supplements: Optional[Sequence[str]] = None,
    ):
        self.registry = registry if registry is not None else VendorRegistry.empty()
        if supplements is None:
            supplements = DEFAULT_SUPPLEMENTS
        self.supplements = [s.strip().lower() for s in supplements if s and s.strip()]

    def config_for(self, vendor: str) -> Optional[VendorConfig]:
        return self.registry.get(vendor)

    def is_tracked(self, product: Product) -> bool:
        """Supplement keyword gate over title, context and handle."""
        if not self.supplements:
            return True
        identity = f"{product.title} {product.context} {product.handle}".lower()
        return contains_any(identity, self.supplements)

    def is_allowed(self, vendor: str, product: Product) -> bool:
        return is_allowed(self.config_for(vendor), product)

    def analyze_product(self, vendor: str, product: Product) -> List[Analysis]:
        """
        Analyze every qualifying variant of a product.

        Returns an empty list when the product is untracked, blocklisted or
        has no variant with both a price and a resolvable mass.
        """
        if not product.variants:
            return []
        if not self.is_tracked(product):
            return []

        config = self.config_for(vendor)
        if not is_allowed(config, product):
            return []

        spec, _ = lookup_override(config, product.handle)
        discount = subscription_discount(config)

        results: List[Analysis] = []
        for variant in product.variants:
            analysis = self.analyze_variant(vendor, product, variant, config, spec)
            if analysis is None:
                continue
            results.append(analysis)
            if discount > 0:
                results.append(synthesize_subscription(analysis, discount))
        return results

    def analyze_variant(
        self,
        vendor: str,
        product: Product,
        variant: Variant,
        config: Optional[VendorConfig] = None,
        spec: Optional[ProductSpec] = None,
    ) -> Optional[Analysis]:
        """Analyze a single variant; None when it does not qualify."""
        if not variant.available:
            return None
        if variant_blocked(config, variant.title):
            return None

        price = parse_price(variant.price)
        if price is None:
            return None

        masses = resolve_masses(product, variant, spec)
        if masses.active_grams <= 0:
            logger.debug(
                f"No mass for {vendor} / {product.handle} / {variant.title!r}; excluded"
            )
            return None

        identity = identity_text(product, variant)
        product_type = classify_type(
            identity, masses.resolution, masses.pack_multiplier, spec
        )
        multiplier, multiplier_label = resolve_multiplier(identity, product_type)
        name = build_display_name(vendor, product.title, variant.title)
        review = triage(masses.from_override, name, product.handle, product.title)

        gross_grams = masses.gross_grams
        if (
            product_type == ProductType.POWDER.value
            and gross_grams == 0
            and not review.needs_review
        ):
            gross_grams = masses.active_grams

        return build_analysis(
            vendor=vendor,
            product=product,
            name=name,
            price=price,
            masses=masses,
            gross_grams=gross_grams,
            product_type=product_type,
            multiplier=multiplier,
            multiplier_label=multiplier_label,
            review=review,
        )
