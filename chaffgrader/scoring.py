"""Scoring system for chaffgrader"""

from typing import Iterable, Mapping, Optional
import logging

from chaffgrader.config import SUMMARY_NAMES
from chaffgrader.models import GradedItem, PointTable, Visibility


logger = logging.getLogger(__name__)


class ScoringSystem:
    """Roll graded items up into weighted summaries for TAs"""

    def __init__(self, point_table: Optional[PointTable] = None):
        self.point_table = point_table or PointTable()
        self.summary_names = SUMMARY_NAMES

    def summarize(self, items: Iterable[GradedItem], weights: Mapping[str, float],
                  name: str) -> GradedItem:
        """
        Summarize a list of items.

        An item earns its whole weight only with full marks; there is no
        partial credit per item. Names missing from `weights` weigh 1.

        Args:
            items: Leaf items to roll up
            weights: Weight per item name
            name: Name of the summary item

        Returns:
            Hidden GradedItem with the weighted total and possible score
        """
        total_score = 0
        possible_score = 0

        for item in items:
            points = PointTable.weight(weights, item.name)
            if item.full_marks:
                total_score += points
            possible_score += points

        logger.debug(f"{name}: {total_score}/{possible_score}")

        return GradedItem(
            name=name,
            score=total_score,
            max_score=possible_score,
            message="",
            visibility=Visibility.HIDDEN,
        )

    def functionality_score(self, items: Iterable[GradedItem]) -> GradedItem:
        return self.summarize(items, self.point_table.functionality_weights,
                              self.summary_names["functionality"])

    def wheat_score(self, items: Iterable[GradedItem]) -> GradedItem:
        return self.summarize(items, self.point_table.testing_weights,
                              self.summary_names["wheat"])

    def chaff_score(self, items: Iterable[GradedItem]) -> GradedItem:
        return self.summarize(items, self.point_table.testing_weights,
                              self.summary_names["chaff"])
