"""
Loader Tests

Reading evaluations and point tables, and writing reports.
"""
import json

import pytest

from chaffgrader.loaders import (
    InputFormatError,
    read_evaluations_from_file,
    read_point_table_from_file,
    write_report_to_file,
)
from chaffgrader.models import (
    BlockOutcome,
    Failure,
    GradedItem,
    GradingReport,
    Success,
    TestOutcome,
    Visibility,
)

EVALUATIONS = [
    {
        "code": "/autograder/wheats/docdiff-wheat-2017.arr",
        "tests": "/autograder/submission/docdiff-tests.arr",
        "result": {"Ok": [
            {
                "name": "Block1",
                "loc": "file:///r/docdiff-wheat-2017.arr;docdiff-tests.arr/tests.arr:1:0-9:3",
                "error": False,
                "tests": [
                    {"loc": "file:///r/docdiff-wheat-2017.arr;docdiff-tests.arr/tests.arr:3:2-3:20",
                     "passed": True},
                ],
            },
        ]},
    },
    {
        "code": "/autograder/chaffs/docdiff-chaff-1.arr",
        "tests": "/autograder/submission/docdiff-tests.arr",
        "result": {"Err": "Timeout"},
    },
]


def write_json(path, data):
    path.write_text(json.dumps(data))
    return path


class TestReadEvaluations:

    def test_parses_records(self, tmp_path):
        records = read_evaluations_from_file(write_json(tmp_path / "results.json", EVALUATIONS))

        assert len(records) == 2
        wheat, chaff = records
        assert wheat.implementation_id == "/autograder/wheats/docdiff-wheat-2017.arr"
        assert wheat.test_suite_id == "/autograder/submission/docdiff-tests.arr"
        assert wheat.result == Success((BlockOutcome(
            name="Block1",
            location="file:///r/docdiff-wheat-2017.arr;docdiff-tests.arr/tests.arr:1:0-9:3",
            errored=False,
            tests=(TestOutcome("file:///r/docdiff-wheat-2017.arr;docdiff-tests.arr/tests.arr:3:2-3:20", True),),
        ),))
        assert chaff.result == Failure("Timeout")

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFormatError, match="not found"):
            read_evaluations_from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "results.json"
        path.write_text("[{")
        with pytest.raises(InputFormatError, match="invalid JSON"):
            read_evaluations_from_file(path)

    def test_missing_field(self, tmp_path):
        data = [{"code": "/a.arr", "result": {"Err": "Timeout"}}]
        with pytest.raises(InputFormatError):
            read_evaluations_from_file(write_json(tmp_path / "results.json", data))

    def test_both_result_variants_rejected(self, tmp_path):
        data = [{"code": "/a.arr", "tests": "/t.arr", "result": {"Ok": [], "Err": "Timeout"}}]
        with pytest.raises(InputFormatError):
            read_evaluations_from_file(write_json(tmp_path / "results.json", data))

    def test_neither_result_variant_rejected(self, tmp_path):
        data = [{"code": "/a.arr", "tests": "/t.arr", "result": {}}]
        with pytest.raises(InputFormatError):
            read_evaluations_from_file(write_json(tmp_path / "results.json", data))

    def test_non_utf8_rejected(self, tmp_path):
        path = tmp_path / "results.json"
        path.write_bytes(b'[\xfe\xff]')
        with pytest.raises(InputFormatError, match="invalid JSON"):
            read_evaluations_from_file(path)

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(InputFormatError):
            read_evaluations_from_file(tmp_path)


class TestReadPointTable:

    def test_parses_pairs(self, tmp_path):
        data = {"functionality": [["Block1", 2]], "testing": [["docdiff-chaff-1.arr", 0.5]]}
        table = read_point_table_from_file(write_json(tmp_path / "points.json", data))

        assert dict(table.functionality_weights) == {"Block1": 2}
        assert dict(table.testing_weights) == {"docdiff-chaff-1.arr": 0.5}

    def test_non_positive_weight_rejected(self, tmp_path):
        data = {"functionality": [["Block1", 0]], "testing": []}
        with pytest.raises(InputFormatError):
            read_point_table_from_file(write_json(tmp_path / "points.json", data))

    def test_missing_section_rejected(self, tmp_path):
        with pytest.raises(InputFormatError, match="testing"):
            read_point_table_from_file(write_json(tmp_path / "points.json", {"functionality": []}))


class TestWriteReport:

    def test_writes_json(self, tmp_path):
        report = GradingReport(tests=(GradedItem("Chaffs score", 1, 2, "", Visibility.HIDDEN),))
        path = write_report_to_file(tmp_path / "out" / "results.json", report)

        assert json.loads(path.read_text()) == report.to_dict()
