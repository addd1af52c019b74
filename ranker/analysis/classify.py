"""
Type Classifier and Bioavailability Multiplier Resolver.

Identity text is lowercase title + variant title + handle + context.
Description markup is never consulted: HTML tags such as <table> would
otherwise read as "tab".
"""

from typing import Optional, Tuple

from ranker.rules.models import ProductSpec
from .models import ProductType
from .mass import MassResolution


def classify_type(
    identity: str,
    resolution: MassResolution,
    pack_multiplier: float,
    spec: Optional[ProductSpec] = None,
) -> str:
    """
    Assign a product form factor; first match wins.

    Mass-shape rules (Hybrid Bundle, Powder) only apply to regex-sourced mass.
    """
    if spec is not None and spec.force_type:
        return spec.force_type

    if pack_multiplier > 1:
        return ProductType.MULTI_PACK.value

    if not resolution.from_override:
        if resolution.capsule_mass > 0 and resolution.powder_mass > 0:
            return ProductType.HYBRID_BUNDLE.value
        if resolution.powder_mass > 0 and resolution.capsule_mass == 0:
            return ProductType.POWDER.value

    if "gel" in identity and "softgel" not in identity:
        return ProductType.GEL.value
    if "tab" in identity:
        return ProductType.TABLETS.value
    if "powder" in identity:
        return ProductType.POWDER.value
    return ProductType.CAPSULES.value


# (multiplier, label)
LIPO_BONUS = (1.5, "Lipo Bonus")
SUBLINGUAL_BONUS = (1.1, "Sublingual")
GEL_BONUS = (1.1, "Gel Bonus")
TABLET_BONUS = (1.1, "Tablet Bonus")
NO_BONUS = (1.0, "")


def resolve_multiplier(identity: str, product_type: str) -> Tuple[float, str]:
    """Map delivery form to a fixed bioavailability multiplier and label."""
    if "liposomal" in identity or "lipo" in identity:
        return LIPO_BONUS
    if "sublingual" in identity:
        return SUBLINGUAL_BONUS
    if product_type == ProductType.GEL.value:
        return GEL_BONUS
    if product_type == ProductType.TABLETS.value:
        return TABLET_BONUS
    return NO_BONUS
