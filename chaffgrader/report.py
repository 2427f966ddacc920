"""Assemble the final report"""

from typing import List, Sequence

from chaffgrader.models import GradedItem, GradingReport


def assemble_report(
    wheat_items: Sequence[GradedItem],
    chaff_items: Sequence[GradedItem],
    functionality_items: Sequence[Sequence[GradedItem]],
    functionality_summaries: Sequence[GradedItem],
    wheat_summary: GradedItem,
    chaff_summary: GradedItem,
) -> GradingReport:
    """
    Concatenate item reports and summaries in report order.

    Student-facing items come first (wheats, chaffs, then the blocks of
    each functionality submission), followed by the hidden summaries
    (one per functionality submission, then wheats, then chaffs).
    """
    tests: List[GradedItem] = []
    tests.extend(wheat_items)
    tests.extend(chaff_items)
    for items in functionality_items:
        tests.extend(items)

    tests.extend(functionality_summaries)
    tests.append(wheat_summary)
    tests.append(chaff_summary)

    return GradingReport(tests=tuple(tests))
