"""
Audit report rendering for operators.

Groups gaps by vendor (first-seen order) and prints, for each product,
what data exists, what is missing, and a ready-to-paste override.
"""

from typing import Dict, List, Optional

from .models import AuditResult

RULES_FILE_HINT = "data/vendor_rules.json"
PLACEHOLDER = "???"
RULE = "-" * 80


def _number(value: Optional[float], fmt: str) -> str:
    if value is None:
        return PLACEHOLDER
    return fmt % value


def format_override_snippet(result: AuditResult) -> List[str]:
    override = result.suggested_override
    return [
        f'"{result.handle}": {{',
        f'  "forceType": "{override.force_type}",',
        f'  "forceActiveGrams": {_number(override.force_active_grams, "%.1f")},',
        f'  "forceServingMg": {_number(override.force_serving_mg, "%.0f")}',
        "}",
    ]


def format_audit_report(results: List[AuditResult]) -> str:
    """Human-readable multi-line report; a one-liner when there are no gaps."""
    if not results:
        return "No gaps detected. All tracked products have enough data for analysis."

    grouped: Dict[str, List[AuditResult]] = {}
    for result in results:
        grouped.setdefault(result.vendor, []).append(result)

    lines = [
        "",
        f"AUDIT: {len(results)} product(s) need manual overrides in {RULES_FILE_HINT}",
        RULE,
    ]

    for vendor, items in grouped.items():
        lines.append("")
        lines.append(f"{vendor} ({len(items)} item(s))")
        for r in items:
            lines.append(f"  |- Product:  {r.title}")
            lines.append(f"  |  Handle:   {r.handle}")
            if r.variant_count > 0:
                lines.append(
                    f"  |  Variants: {r.variant_count} available, "
                    f"best price: ${r.best_price:.2f}"
                )
            else:
                lines.append("  |  Variants: none available")

            found = r.found_summary
            lines.append(
                f"  |  Found:    {', '.join(found) if found else '(nothing extractable)'}"
            )
            lines.append(f"  |  Missing:  {'; '.join(r.missing)}")
            lines.append("  |  Suggested override:")
            for snippet_line in format_override_snippet(r):
                lines.append(f"  |    {snippet_line}")
            lines.append("  |")

    lines.append(RULE)
    return "\n".join(lines) + "\n"
