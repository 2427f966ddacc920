"""
Grading orchestrator

Coordinates:
1. Partitioning runs into functionality, wheats, and chaffs
2. Building the invalidity registry from the wheats
3. Grading functionality, wheats, and chaffs
4. Weighted summaries
5. Report assembly
"""

from typing import Iterable, Optional
import logging

from chaffgrader.grading import ChaffDetector, grade_functionality, grade_wheat
from chaffgrader.models import ExecutionRecord, GradingReport, PointTable
from chaffgrader.partition import partition_results
from chaffgrader.report import assemble_report
from chaffgrader.scoring import ScoringSystem
from chaffgrader.validity import build_invalidity_registry, sorted_locations


logger = logging.getLogger(__name__)


class Autograder:
    """
    Main entry point for grading.

    Usage:
        autograder = Autograder(point_table)
        report = autograder.grade(records)
    """

    def __init__(self, point_table: Optional[PointTable] = None):
        self.scoring = ScoringSystem(point_table)

    def grade(self, records: Iterable[ExecutionRecord]) -> GradingReport:
        """
        Grade every execution record.

        Args:
            records: Runs from the test-execution phase

        Returns:
            The complete GradingReport
        """
        partition = partition_results(records)

        # The registry is complete before any chaff is graded
        registry = build_invalidity_registry(partition.wheats)
        for location in sorted_locations(registry):
            logger.debug(f"  * masked: {location}")
        detector = ChaffDetector(registry)

        functionality_items = [grade_functionality(record) for record in partition.functionality]
        wheat_items = [grade_wheat(record) for record in partition.wheats]
        chaff_items = [detector.grade(record) for record in partition.chaffs]

        functionality_summaries = [self.scoring.functionality_score(items)
                                   for items in functionality_items]
        wheat_summary = self.scoring.wheat_score(wheat_items)
        chaff_summary = self.scoring.chaff_score(chaff_items)

        logger.info(
            f"Wheats: {wheat_summary.score}/{wheat_summary.max_score}, "
            f"Chaffs: {chaff_summary.score}/{chaff_summary.max_score}"
        )

        return assemble_report(
            wheat_items=wheat_items,
            chaff_items=chaff_items,
            functionality_items=functionality_items,
            functionality_summaries=functionality_summaries,
            wheat_summary=wheat_summary,
            chaff_summary=chaff_summary,
        )


def grade(records: Iterable[ExecutionRecord],
          point_table: Optional[PointTable] = None) -> GradingReport:
    """Convenience function for one-shot grading"""
    return Autograder(point_table).grade(records)
