"""
Triage Engine

Flags regex-derived results whose advertised weight probably includes
non-active filler (flavors, blends, gummies). Override-sourced results are
trusted and never flagged.

The scan walks an ordered rule table and stops at the first genuine match.
A rule may be suppressed by another word in the text ("unflavored" silences
"flavor"), and a suppression may itself be reinstated ("serv" means the size
is servings-based, so the computed mass is unsafe even when unflavored).

Version: triage_v2
"""

from dataclasses import dataclass
from typing import Optional, Sequence

UNFLAVORED_SERVINGS_REASON = (
    "Product is unflavored but uses 'servings' (needs manual math check)"
)


@dataclass(frozen=True)
class DirtyKeywordRule:
    """One row of the dirty-keyword table."""
    keyword: str
    suppressed_by: Optional[str] = None
    reinstated_by: Optional[str] = None
    reinstated_reason: Optional[str] = None


@dataclass(frozen=True)
class TriageResult:
    needs_review: bool = False
    reason: str = ""
    keyword: Optional[str] = None


NOT_FLAGGED = TriageResult()


# Order matters: the first genuine match names the review reason.
DIRTY_KEYWORD_RULES: Sequence[DirtyKeywordRule] = (
    DirtyKeywordRule(
        "flavor",
        suppressed_by="unflavored",
        reinstated_by="serv",
        reinstated_reason=UNFLAVORED_SERVINGS_REASON,
    ),
    DirtyKeywordRule(
        "flavour",
        suppressed_by="unflavoured",
        reinstated_by="serv",
        reinstated_reason=UNFLAVORED_SERVINGS_REASON,
    ),
    # named flavor blends
    DirtyKeywordRule("fruit punch"),
    DirtyKeywordRule("tropical punch"),
    DirtyKeywordRule("pink lemonade"),
    DirtyKeywordRule("blue raspberry"),
    DirtyKeywordRule("cookies & cream"),
    # single flavors
    DirtyKeywordRule("watermelon"),
    DirtyKeywordRule("strawberry"),
    DirtyKeywordRule("raspberry"),
    DirtyKeywordRule("berry"),
    DirtyKeywordRule("lemon"),
    DirtyKeywordRule("orange"),
    DirtyKeywordRule("mango"),
    DirtyKeywordRule("peach"),
    DirtyKeywordRule("cherry"),
    DirtyKeywordRule("chocolate"),
    DirtyKeywordRule("vanilla"),
    DirtyKeywordRule("cinnamon"),
    # formulation
    DirtyKeywordRule("blend"),
    DirtyKeywordRule("complex"),
    DirtyKeywordRule("with"),
    DirtyKeywordRule("+"),
    DirtyKeywordRule("gumm"),
    DirtyKeywordRule("chew"),
    DirtyKeywordRule("bundle"),
)


def scan_dirty_keywords(
    text: str,
    rules: Sequence[DirtyKeywordRule] = DIRTY_KEYWORD_RULES
) -> TriageResult:
    """
    Evaluate the rule table against text in one pass.

    Args:
        text: Free text; lowercased here
        rules: Ordered rule table

    Returns:
        TriageResult for the first genuine match, or NOT_FLAGGED
    """
    text = text.lower()
    for rule in rules:
        if rule.keyword not in text:
            continue
        if rule.suppressed_by and rule.suppressed_by in text:
            if rule.reinstated_by and rule.reinstated_by in text:
                return TriageResult(
                    needs_review=True,
                    reason=rule.reinstated_reason or f"Detected dirty keyword: {rule.keyword}",
                    keyword=rule.keyword,
                )
            continue
        return TriageResult(
            needs_review=True,
            reason=f"Detected dirty keyword: {rule.keyword}",
            keyword=rule.keyword,
        )
    return NOT_FLAGGED


def triage_text(display_name: str, handle: str, product_title: str) -> str:
    return f"{display_name} {handle} {product_title}".lower()


def triage(
    mass_from_override: bool,
    display_name: str,
    handle: str,
    product_title: str,
) -> TriageResult:
    """
    Decide whether a result needs manual review.

    Runs only for regex-sourced mass.
    """
    if mass_from_override:
        return NOT_FLAGGED
    return scan_dirty_keywords(triage_text(display_name, handle, product_title))
