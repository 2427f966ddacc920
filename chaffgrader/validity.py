"""
Validity oracle

A test that fails against a wheat (a correct implementation) cannot tell
a buggy implementation from a correct one. Such tests, and blocks that
error against a wheat, are collected here so chaff grading can ignore them.
"""

from typing import Iterable, List, Set
import logging

from chaffgrader.models import (
    ExecutionRecord,
    Failure,
    InvalidityRegistry,
    Success,
)


logger = logging.getLogger(__name__)


def find_invalid_locations(wheat: ExecutionRecord) -> InvalidityRegistry:
    """
    Invalid tests and blocks according to a single wheat run.

    A wheat that failed to run at all contributes nothing; that is reported
    as a wheat error rather than taken as evidence against the tests.

    Args:
        wheat: Execution record of a wheat

    Returns:
        InvalidityRegistry holding only this wheat's evidence
    """
    result = wheat.result
    if isinstance(result, Failure):
        return InvalidityRegistry()
    if not isinstance(result, Success):
        raise TypeError(f"Unexpected execution result for {wheat.name}: {result!r}")

    invalid_tests: Set[str] = set()
    invalid_blocks: Set[str] = set()

    for block in result.blocks:
        if block.errored:
            invalid_blocks.add(block.location_name)
            continue
        for test in block.tests:
            if not test.passed:
                invalid_tests.add(test.location_name)

    return InvalidityRegistry(
        invalid_test_locations=frozenset(invalid_tests),
        invalid_block_locations=frozenset(invalid_blocks),
    )


def build_invalidity_registry(wheats: Iterable[ExecutionRecord]) -> InvalidityRegistry:
    """Union of the invalid locations found by every wheat"""
    registry = InvalidityRegistry()
    for wheat in wheats:
        contribution = find_invalid_locations(wheat)
        if not contribution.is_empty():
            logger.debug(
                f"{wheat.name}: {len(contribution.invalid_test_locations)} invalid tests, "
                f"{len(contribution.invalid_block_locations)} invalid blocks"
            )
        registry = registry.union(contribution)

    logger.info(
        f"Invalidity registry: {len(registry.invalid_test_locations)} tests, "
        f"{len(registry.invalid_block_locations)} blocks masked"
    )
    return registry


def sorted_locations(registry: InvalidityRegistry) -> List[str]:
    """All masked locations, blocks first, for display"""
    return sorted(registry.invalid_block_locations) + sorted(registry.invalid_test_locations)
