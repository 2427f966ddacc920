"""Split execution records into functionality, wheat, and chaff runs"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List
import logging

from chaffgrader.config import WHEAT_MARKER, CHAFF_MARKER
from chaffgrader.models import ExecutionRecord


logger = logging.getLogger(__name__)


class Role(Enum):
    FUNCTIONALITY = "functionality"
    WHEAT = "wheat"
    CHAFF = "chaff"


@dataclass
class Partition:
    """Records grouped by role, each in input order"""
    functionality: List[ExecutionRecord] = field(default_factory=list)
    wheats: List[ExecutionRecord] = field(default_factory=list)
    chaffs: List[ExecutionRecord] = field(default_factory=list)


def classify_record(record: ExecutionRecord) -> Role:
    """Role of a record, read from the implementation path (wheat before chaff)"""
    if WHEAT_MARKER in record.implementation_id:
        return Role.WHEAT
    if CHAFF_MARKER in record.implementation_id:
        return Role.CHAFF
    return Role.FUNCTIONALITY


def partition_results(records: Iterable[ExecutionRecord]) -> Partition:
    """
    Split records into functionality, wheat, and chaff groups.

    Args:
        records: Execution records in input order

    Returns:
        Partition with relative order preserved inside each group
    """
    partition = Partition()
    groups = {
        Role.FUNCTIONALITY: partition.functionality,
        Role.WHEAT: partition.wheats,
        Role.CHAFF: partition.chaffs,
    }

    for record in records:
        groups[classify_record(record)].append(record)

    logger.info(
        f"Partitioned results: {len(partition.functionality)} functionality, "
        f"{len(partition.wheats)} wheat, {len(partition.chaffs)} chaff"
    )
    return partition
