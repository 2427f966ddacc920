"""
Graders for functionality, wheat, and chaff runs

Each grader turns one execution record into report items:
- Functionality: one item per block of the official suite
- Wheat: one item, valid only if every test passes and no block errors
- Chaff: one item, caught if a test that is still valid fails or errors
"""

from dataclasses import dataclass
from typing import List, Optional
import logging

from chaffgrader.models import (
    BlockOutcome,
    ExecutionRecord,
    Failure,
    GradedItem,
    InvalidityRegistry,
    Success,
    Visibility,
)
from chaffgrader.validity import find_invalid_locations


logger = logging.getLogger(__name__)


class InconsistentWheatError(AssertionError):
    """Raised when a wheat has invalid locations but no violation is found"""
    pass


def _check_result(record: ExecutionRecord) -> None:
    if not isinstance(record.result, (Success, Failure)):
        raise TypeError(f"Unexpected execution result for {record.name}: {record.result!r}")


# ===================================================================
# Functionality
# ===================================================================

def grade_block(block: BlockOutcome) -> GradedItem:
    """Score one block of the official suite: all tests pass or nothing"""
    if block.errored:
        return GradedItem(
            name=block.name,
            score=0,
            max_score=1,
            message="Block errored.",
            visibility=Visibility.AFTER_PUBLISHED,
        )

    total_tests = len(block.tests)
    passed_tests = block.passed_count
    if passed_tests == total_tests:
        message = f"Passed all {total_tests} tests in this block!"
    else:
        message = f"Missing {total_tests - passed_tests} tests in this block"

    return GradedItem(
        name=block.name,
        score=1 if passed_tests == total_tests else 0,
        max_score=1,
        message=message,
        visibility=Visibility.AFTER_PUBLISHED,
    )


def grade_functionality(record: ExecutionRecord) -> List[GradedItem]:
    """
    Grade a student implementation against the official suite.

    A run that failed as a whole gets a single visible 0/1 item with the
    reason; otherwise each block gets its own item, in block order.
    """
    _check_result(record)
    result = record.result

    if isinstance(result, Failure):
        logger.warning(f"Functionality run {record.name} failed ({result.kind.name}): {result.reason}")
        return [GradedItem(
            name=record.name,
            score=0,
            max_score=1,
            message=f"Error: {result.reason}",
            visibility=Visibility.VISIBLE,
        )]

    return [grade_block(block) for block in result.blocks]


# ===================================================================
# Wheats
# ===================================================================

@dataclass(frozen=True)
class Violation:
    """First thing that went wrong in a run"""
    block: BlockOutcome
    errored: bool


def first_violation(blocks) -> Optional[Violation]:
    """First errored block or failed test, in declaration order"""
    for block in blocks:
        if block.errored:
            return Violation(block=block, errored=True)
        for test in block.tests:
            if not test.passed:
                return Violation(block=block, errored=False)
    return None


def grade_wheat(record: ExecutionRecord) -> GradedItem:
    """
    Grade one wheat run.

    Reports the raw first failure; invalidity masking never applies here,
    so a wheat that fails any test is reported as failing.

    Raises:
        InconsistentWheatError: if the wheat contributes invalid locations
            but the scan for its first violation finds nothing
    """
    _check_result(record)
    result = record.result

    if isinstance(result, Failure):
        logger.warning(f"Wheat {record.name} errored ({result.kind.name}): {result.reason}")
        return _wheat_item(record, False, f"Wheat errored; {result.reason}")

    invalid = find_invalid_locations(record)
    if invalid.is_empty():
        return _wheat_item(record, True, "Passed wheat!")

    violation = first_violation(result.blocks)
    if violation is None:
        raise InconsistentWheatError(f"Wheat {record.name} failed but no reason given.")

    if violation.errored:
        message = f"Wheat caused error in block {violation.block.name}"
    else:
        message = f"Wheat failed test in block {violation.block.name}"
    logger.warning(f"{record.name}: {message}")
    return _wheat_item(record, False, message)


def _wheat_item(record: ExecutionRecord, valid: bool, message: str) -> GradedItem:
    return GradedItem(
        name=record.name,
        score=1 if valid else 0,
        max_score=1,
        message=message,
        visibility=Visibility.AFTER_PUBLISHED,
    )


# ===================================================================
# Chaffs
# ===================================================================

class ChaffDetector:
    """
    Decides whether a student's tests catch a chaff.

    Built once from the invalidity registry of all wheats; tests and blocks
    in the registry are ignored when looking for a failure.

    Usage:
        detector = ChaffDetector(build_invalidity_registry(wheats))
        items = [detector.grade(chaff) for chaff in chaffs]
    """

    def __init__(self, registry: InvalidityRegistry):
        self.registry = registry

    def find_catch(self, blocks) -> Optional[Violation]:
        """First errored block or failed test that is not masked"""
        for block in blocks:
            if block.errored:
                if not self.registry.is_block_invalid(block):
                    return Violation(block=block, errored=True)
                continue
            for test in block.tests:
                if not test.passed and not self.registry.is_test_invalid(test):
                    return Violation(block=block, errored=False)
        return None

    def grade(self, record: ExecutionRecord) -> GradedItem:
        """Grade one chaff run; any failure of the run itself counts as caught"""
        _check_result(record)
        result = record.result

        if isinstance(result, Failure):
            message = f"Chaff caught; error: {result.reason}!"
            caught = True
        else:
            catch = self.find_catch(result.blocks)
            caught = catch is not None
            if catch is None:
                message = "Chaff not caught."
            elif catch.errored:
                message = f"Chaff caught; error in block {catch.block.name}!"
            else:
                message = f"Chaff caught; test failed in block {catch.block.name}!"

        if caught:
            logger.debug(f"{record.name}: {message}")
        else:
            logger.warning(f"{record.name}: {message}")

        return GradedItem(
            name=record.name,
            score=1 if caught else 0,
            max_score=1,
            message=message,
            visibility=Visibility.AFTER_PUBLISHED,
        )
