"""
Outcome model for chaffgrader

Plain data: what the test-execution phase reported for each run, and the
items the grader reports back. No grading logic lives here.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Dict, FrozenSet, List, Mapping, Tuple, Union

from chaffgrader.config import DEFAULT_WEIGHT, REPORT_VISIBILITY, REPORT_STDOUT_VISIBILITY


class ErrorKind(Enum):
    """Reasons a whole run can fail before producing block data."""
    UNKNOWN = "Unknown"
    COMPILATION = "Compilation"
    OUT_OF_MEMORY = "OutOfMemory"
    TIMEOUT = "Timeout"
    RUNTIME = "Runtime"

    @classmethod
    def parse(cls, reason: str) -> "ErrorKind":
        """Map a reported reason to a kind; unrecognised reasons are UNKNOWN"""
        try:
            return cls(reason)
        except ValueError:
            return cls.UNKNOWN


class Visibility(str, Enum):
    """When a graded item is shown to the student"""
    VISIBLE = "visible"
    AFTER_PUBLISHED = "after_published"
    HIDDEN = "hidden"


def location_name(location: str) -> str:
    """
    Strip a full test/block location down to its per-file part.

    "file:///autograder/results/docdiff-wheat-2017.arr;docdiff-tests.arr/tests.arr:8:0-19:3"
    becomes "tests.arr:8:0-19:3", which identifies the same test across runs
    of different implementations.
    """
    return location.rsplit("/", 1)[-1]


def file_name(path: str) -> str:
    """Last path component of an implementation or test-suite path"""
    return PurePosixPath(path).name


@dataclass(frozen=True)
class TestOutcome:
    """Result of a single test"""
    location: str
    passed: bool

    # Keep pytest from collecting this as a test class
    __test__ = False

    @property
    def location_name(self) -> str:
        return location_name(self.location)


@dataclass(frozen=True)
class BlockOutcome:
    """Result of a named block of tests. When errored, tests are not trusted."""
    name: str
    location: str
    errored: bool = False
    tests: Tuple[TestOutcome, ...] = ()

    @property
    def location_name(self) -> str:
        return location_name(self.location)

    @property
    def passed_count(self) -> int:
        return sum(1 for test in self.tests if test.passed)


@dataclass(frozen=True)
class Success:
    """The run completed and reported its blocks"""
    blocks: Tuple[BlockOutcome, ...] = ()


@dataclass(frozen=True)
class Failure:
    """The run itself failed (compile error, timeout, ...)"""
    reason: str

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.parse(self.reason)


ExecutionResult = Union[Success, Failure]


@dataclass(frozen=True)
class ExecutionRecord:
    """One implementation run against one test suite"""
    implementation_id: str
    test_suite_id: str
    result: ExecutionResult

    @property
    def name(self) -> str:
        return file_name(self.implementation_id)


@dataclass(frozen=True)
class InvalidityRegistry:
    """Locations of tests and blocks that fail even against a wheat"""
    invalid_test_locations: FrozenSet[str] = frozenset()
    invalid_block_locations: FrozenSet[str] = frozenset()

    def union(self, other: "InvalidityRegistry") -> "InvalidityRegistry":
        return InvalidityRegistry(
            invalid_test_locations=self.invalid_test_locations | other.invalid_test_locations,
            invalid_block_locations=self.invalid_block_locations | other.invalid_block_locations,
        )

    def is_empty(self) -> bool:
        return not (self.invalid_test_locations or self.invalid_block_locations)

    def is_test_invalid(self, test: TestOutcome) -> bool:
        return test.location_name in self.invalid_test_locations

    def is_block_invalid(self, block: BlockOutcome) -> bool:
        return block.location_name in self.invalid_block_locations


@dataclass(frozen=True)
class PointTable:
    """Weights for functionality blocks and testing items"""
    functionality_weights: Mapping[str, float] = field(default_factory=dict)
    testing_weights: Mapping[str, float] = field(default_factory=dict)

    @staticmethod
    def weight(weights: Mapping[str, float], name: str) -> float:
        return weights.get(name, DEFAULT_WEIGHT)


@dataclass(frozen=True)
class GradedItem:
    """One line of the report: a block, a wheat, a chaff, or a summary"""
    name: str
    score: float
    max_score: float
    message: str
    visibility: Visibility

    @property
    def full_marks(self) -> bool:
        return self.score == self.max_score

    def to_dict(self) -> Dict:
        """Convert to the grading platform's test entry"""
        return {
            "name": self.name,
            "score": self.score,
            "max_score": self.max_score,
            "output": self.message,
            "visibility": self.visibility.value,
        }


@dataclass(frozen=True)
class GradingReport:
    """The final report handed to the output writer"""
    tests: Tuple[GradedItem, ...]
    visibility: str = REPORT_VISIBILITY
    stdout_visibility: str = REPORT_STDOUT_VISIBILITY

    def summaries(self) -> List[GradedItem]:
        return [item for item in self.tests if item.visibility is Visibility.HIDDEN]

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization"""
        return {
            "visibility": self.visibility,
            "stdout_visibility": self.stdout_visibility,
            "tests": [item.to_dict() for item in self.tests],
        }
