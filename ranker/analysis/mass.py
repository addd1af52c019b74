"""
Mass Extractor

Resolves active grams (the cost denominator) and gross grams (label weight,
display only) for one variant.

Active grams priority chain, first positive value wins:
1. variant_overrides[exact variant title]
2. force_active_grams
3. regex: grams/kg in title+variant, else mg x count, else bare grams anywhere

The pack multiplier is applied last regardless of which tier won.

Version: analysis_engine_v2
"""

from dataclasses import dataclass
from typing import Optional

from ranker.catalog.models import Product, Variant
from ranker.rules.models import ProductSpec
from .models import MassSource
from .extract import (
    RE_GRAMS,
    RE_KG,
    RE_MG,
    RE_COUNT,
    RE_PACK,
    RE_SERVING,
    extract_float,
    extract_float_from,
)
from .triage import scan_dirty_keywords


@dataclass(frozen=True)
class SearchStrings:
    """
    Search strings at increasing breadth.

    variant: variant title alone
    clean:   product title + variant title
    broad:   everything, including the description markup
    """
    variant: str
    clean: str
    broad: str

    @classmethod
    def for_variant(cls, product: Product, variant: Variant) -> "SearchStrings":
        broad = " ".join([
            product.title,
            product.context,
            variant.title,
            product.handle.replace("-", " "),
            product.body_html,
        ])
        return cls(
            variant=variant.title,
            clean=f"{product.title} {variant.title}",
            broad=broad,
        )


@dataclass(frozen=True)
class MassResolution:
    """Base mass before the pack multiplier, with its provenance."""
    base_mass: float
    source: MassSource
    capsule_mass: float = 0.0
    powder_mass: float = 0.0

    @property
    def resolved(self) -> bool:
        return self.base_mass > 0

    @property
    def from_override(self) -> bool:
        return self.source.is_override

    @property
    def capsule_only(self) -> bool:
        return self.capsule_mass > 0 and self.powder_mass == 0


UNRESOLVED = MassResolution(base_mass=0.0, source=MassSource.NONE)


@dataclass(frozen=True)
class MassResult:
    """Final masses for a variant."""
    resolution: MassResolution
    pack_multiplier: float
    active_grams: float
    gross_grams: float

    @property
    def from_override(self) -> bool:
        return self.resolution.from_override


def extract_powder_grams(text: str) -> Optional[float]:
    """Explicit grams, else kilograms converted to grams."""
    grams = extract_float(RE_GRAMS, text)
    if grams is not None:
        return grams
    kg = extract_float(RE_KG, text)
    if kg is not None:
        return kg * 1000.0
    return None


def extract_capsule_count(search: SearchStrings) -> Optional[float]:
    return extract_float_from(RE_COUNT, search.variant, search.clean, search.broad)


def extract_serving_size(text: str) -> float:
    return extract_float(RE_SERVING, text) or 1.0


def resolve_regex_mass(search: SearchStrings) -> MassResolution:
    """
    Heuristic extraction from free text.

    (a) grams/kg in the clean search is treated as powder mass;
    (b) otherwise mg x count, divided by the serving size;
    (c) otherwise a bare grams pattern anywhere.
    """
    powder = extract_powder_grams(search.clean)
    if powder is not None:
        return MassResolution(
            base_mass=powder,
            source=MassSource.REGEX_GRAMS,
            powder_mass=powder,
        )

    mg = extract_float(RE_MG, search.broad)
    count = extract_capsule_count(search)
    if mg is not None and count is not None:
        serving_size = extract_serving_size(search.broad)
        capsule_mass = (mg / serving_size) * count / 1000.0
        if capsule_mass > 0:
            return MassResolution(
                base_mass=capsule_mass,
                source=MassSource.REGEX_CAPSULES,
                capsule_mass=capsule_mass,
            )

    fallback = extract_float(RE_GRAMS, search.broad)
    if fallback is not None:
        return MassResolution(
            base_mass=fallback,
            source=MassSource.REGEX_FALLBACK_GRAMS,
            powder_mass=fallback,
        )

    return UNRESOLVED


def resolve_base_mass(
    search: SearchStrings,
    variant_title: str,
    spec: Optional[ProductSpec] = None,
) -> MassResolution:
    """Walk the priority chain once for a variant."""
    if spec is not None:
        variant_grams = spec.variant_overrides.get(variant_title, 0.0)
        if variant_grams > 0:
            return MassResolution(
                base_mass=variant_grams,
                source=MassSource.VARIANT_OVERRIDE,
            )
        if spec.force_active_grams > 0:
            return MassResolution(
                base_mass=spec.force_active_grams,
                source=MassSource.FORCE_ACTIVE_GRAMS,
            )

    return resolve_regex_mass(search)


def resolve_pack_multiplier(search: SearchStrings) -> float:
    """"N Pack" / "N Bottles" in the variant title, then the broad search; default 1."""
    return extract_float_from(RE_PACK, search.variant, search.broad) or 1.0


def resolve_gross_grams(
    search: SearchStrings,
    variant_title: str,
    resolution: MassResolution,
    pack_multiplier: float,
    spec: Optional[ProductSpec] = None,
) -> float:
    """
    Label weight for display.

    Only the product and variant titles are scanned, never the description,
    and capsule-only products have no gross weight.
    """
    if spec is not None:
        gross_override = spec.variant_gross_overrides.get(variant_title, 0.0)
        if gross_override > 0:
            return gross_override

    if resolution.capsule_only:
        return 0.0

    grams = extract_powder_grams(search.clean)
    if grams is None:
        return 0.0
    return grams * pack_multiplier


def identity_text(product: Product, variant: Variant) -> str:
    """Lowercase identity used for classification; excludes body_html."""
    return " ".join([
        product.title,
        variant.title,
        product.handle,
        product.context,
    ]).lower()


def resolve_masses(
    product: Product,
    variant: Variant,
    spec: Optional[ProductSpec] = None,
) -> MassResult:
    """
    Resolve active and gross grams for a variant.

    Pure-powder fallback: when a regex-sourced, non-capsule product has a
    label weight and no dirty keywords, the whole container is active
    ingredient, so active grams become the gross grams.
    """
    search = SearchStrings.for_variant(product, variant)
    resolution = resolve_base_mass(search, variant.title, spec)
    pack_multiplier = resolve_pack_multiplier(search)

    active_grams = resolution.base_mass * pack_multiplier
    gross_grams = resolve_gross_grams(
        search, variant.title, resolution, pack_multiplier, spec
    )

    if (
        resolution.resolved
        and not resolution.from_override
        and gross_grams > 0
        and not resolution.capsule_only
        and not scan_dirty_keywords(identity_text(product, variant)).needs_review
    ):
        active_grams = gross_grams

    return MassResult(
        resolution=resolution,
        pack_multiplier=pack_multiplier,
        active_grams=active_grams,
        gross_grams=gross_grams,
    )
