"""
Outcome Model Tests
"""
from chaffgrader.models import (
    ErrorKind,
    ExecutionRecord,
    Failure,
    GradedItem,
    GradingReport,
    InvalidityRegistry,
    Visibility,
    file_name,
    location_name,
)


class TestLocations:

    def test_location_name_strips_path(self):
        loc = "file:///autograder/results/docdiff-wheat-2017.arr;docdiff-tests.arr/tests.arr:8:0-19:3"
        assert location_name(loc) == "tests.arr:8:0-19:3"

    def test_location_without_path(self):
        assert location_name("tests.arr:8:0-19:3") == "tests.arr:8:0-19:3"

    def test_file_name(self):
        assert file_name("/autograder/chaffs/docdiff-chaff-1.arr") == "docdiff-chaff-1.arr"
        assert ExecutionRecord("wheat.arr", "t.arr", Failure("Unknown")).name == "wheat.arr"


class TestErrorKind:

    def test_known_reasons(self):
        assert Failure("Timeout").kind is ErrorKind.TIMEOUT
        assert Failure("OutOfMemory").kind is ErrorKind.OUT_OF_MEMORY

    def test_unknown_reason(self):
        assert Failure("segfault").kind is ErrorKind.UNKNOWN


class TestRegistry:

    def test_union_is_monotonic(self):
        a = InvalidityRegistry(frozenset({"t:1"}), frozenset())
        b = InvalidityRegistry(frozenset({"t:2"}), frozenset({"b:1"}))
        merged = a.union(b)

        assert merged.invalid_test_locations == {"t:1", "t:2"}
        assert merged.invalid_block_locations == {"b:1"}
        assert merged.union(a) == merged


class TestSerialization:

    def test_report_to_dict(self):
        item = GradedItem("Block1", 1, 1, "Passed all 2 tests in this block!", Visibility.AFTER_PUBLISHED)
        summary = GradedItem("Functionality score", 1, 1, "", Visibility.HIDDEN)
        report = GradingReport(tests=(item, summary))

        assert report.to_dict() == {
            "visibility": "after_published",
            "stdout_visibility": "after_published",
            "tests": [
                {"name": "Block1", "score": 1, "max_score": 1,
                 "output": "Passed all 2 tests in this block!", "visibility": "after_published"},
                {"name": "Functionality score", "score": 1, "max_score": 1,
                 "output": "", "visibility": "hidden"},
            ],
        }
        assert report.summaries() == [summary]
