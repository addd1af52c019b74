"""
Extraction Primitives

Compiled patterns and "first numeric match of P in S, else try the next S"
helpers shared by the analyzer and the audit detector. Unparsable or
non-positive captures count as "not found"; nothing here raises.
"""

import re
from typing import Iterable, Optional, Pattern

RE_MG = re.compile(r"(\d+(?:\.\d+)?)\s*mg", re.IGNORECASE)
RE_COUNT = re.compile(
    r"(\d+)\s*(?:capsules|caps|servings|tabs|tablets|ct)",
    re.IGNORECASE,
)
# \b keeps "500mg" from matching as grams
RE_GRAMS = re.compile(r"(\d+(?:\.\d+)?)\s*(?:grams?|gms?|g)\b", re.IGNORECASE)
RE_KG = re.compile(r"(\d+(?:\.\d+)?)\s*kg\b", re.IGNORECASE)
RE_PACK = re.compile(r"(\d+)\s*(?:-\s*)?(?:packs?|bottles?)\b", re.IGNORECASE)
RE_SERVING = re.compile(
    r"(\d+)\s*(?:capsules|caps).*?per\s*serving",
    re.IGNORECASE,
)
RE_PRICE = re.compile(r"(-?\d+(?:\.\d+)?)")


def parse_positive_float(raw: Optional[str]) -> Optional[float]:
    """Parse text as a float; None unless the result is a finite number > 0."""
    if raw is None:
        return None
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    if value <= 0:
        return None
    return value


def parse_price(raw: Optional[str]) -> Optional[float]:
    """
    Parse a variant price.

    Plain decimal text is the norm; a leading currency symbol or trailing
    code is tolerated by taking the first decimal number in the string.
    """
    value = parse_positive_float(raw)
    if value is not None:
        return value
    if not raw:
        return None
    m = RE_PRICE.search(str(raw).replace(",", ""))
    if not m:
        return None
    return parse_positive_float(m.group(1))


def extract_float(pattern: Pattern, text: str) -> Optional[float]:
    """First capture group of pattern in text as a positive float, else None."""
    if not text:
        return None
    m = pattern.search(text)
    if not m:
        return None
    return parse_positive_float(m.group(1))


def extract_float_from(pattern: Pattern, *sources: str) -> Optional[float]:
    """
    Try extract_float against each source in order; first hit wins.

    Used for "variant title -> clean title -> broad search" fallback chains.
    """
    for text in sources:
        value = extract_float(pattern, text)
        if value is not None:
            return value
    return None


def contains_any(text: str, needles: Iterable[str]) -> bool:
    for needle in needles:
        if needle and needle in text:
            return True
    return False
