"""
Batch helpers around the Analyzer.

analyze_all() fans products out over a thread pool when asked to; per-product
results are concatenated in input order either way, so output never depends
on scheduling. Global ordering (by effective cost) is a separate, explicit
step.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from ranker.catalog.models import Product, VendorProducts
from .analyzer import Analyzer
from .models import Analysis

logger = logging.getLogger(__name__)


def analyze_vendor(
    analyzer: Analyzer,
    vendor: str,
    products: Iterable[Product],
) -> List[Analysis]:
    results: List[Analysis] = []
    for product in products:
        results.extend(analyzer.analyze_product(vendor, product))
    return results


def analyze_all(
    analyzer: Analyzer,
    vendor_products: Iterable[VendorProducts],
    max_workers: Optional[int] = None,
) -> List[Analysis]:
    """
    Analyze every product of every vendor.

    Args:
        analyzer: Shared, stateless analyzer
        vendor_products: Products grouped by vendor
        max_workers: Thread pool size; None or <= 1 runs sequentially

    Returns:
        Analyses in vendor, product, variant order (unsorted)
    """
    jobs: List[Tuple[str, Product]] = [
        (group.vendor, product)
        for group in vendor_products
        for product in group.products
    ]

    if max_workers and max_workers > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            per_product = list(executor.map(
                lambda job: analyzer.analyze_product(job[0], job[1]),
                jobs,
            ))
    else:
        per_product = [analyzer.analyze_product(vendor, p) for vendor, p in jobs]

    results: List[Analysis] = []
    for analyses in per_product:
        results.extend(analyses)

    logger.info(
        f"Analyzed {len(jobs)} product(s): {len(results)} record(s), "
        f"{len(review_queue(results))} flagged for review"
    )
    return results


def sort_by_effective_cost(analyses: Iterable[Analysis]) -> List[Analysis]:
    """Cheapest true cost first; stable for ties."""
    return sorted(analyses, key=lambda a: a.effective_cost)


def review_queue(analyses: Iterable[Analysis]) -> List[Analysis]:
    """Records an operator should check by hand."""
    return [a for a in analyses if a.needs_review]


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


TABLE_HEADER = (
    f"{'RANK':<5}{'VENDOR':<20}{'PRODUCT':<48}{'TYPE':<15}"
    f"{'PRICE':>10}{'ACTIVE g':>10}{'GROSS g':>10}{'$/GRAM':>10}{'TRUE COST':>11}"
)


def render_table(analyses: Iterable[Analysis]) -> str:
    """Fixed-width text table of records in the order given."""
    lines = [TABLE_HEADER, "-" * len(TABLE_HEADER)]
    for rank, row in enumerate(analyses, start=1):
        gross = f"{row.gross_grams:.1f}g" if row.gross_grams > 0 else "-"
        flag = " *" if row.needs_review else ""
        lines.append(
            f"{rank:<5}{_truncate(row.vendor, 19):<20}{_truncate(row.name, 47):<48}"
            f"{_truncate(row.type, 14):<15}"
            f"{'$%.2f' % row.price:>10}{'%.1fg' % row.active_grams:>10}{gross:>10}"
            f"{'$%.2f' % row.cost_per_gram:>10}{'$%.2f' % row.effective_cost:>11}{flag}"
        )
    return "\n".join(lines)
