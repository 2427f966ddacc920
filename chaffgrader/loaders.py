"""Reading execution results and point tables, writing reports"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union
import logging

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from chaffgrader.models import (
    BlockOutcome,
    ExecutionRecord,
    ExecutionResult,
    Failure,
    GradingReport,
    PointTable,
    Success,
    TestOutcome,
)


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class InputFormatError(Exception):
    """Raised when an input file is missing, not JSON, or not in the expected shape"""
    pass


# ===========================================
# Schemas
# ===========================================

TEST_SCHEMA = {
    "type": "object",
    "required": ["loc", "passed"],
    "properties": {
        "loc": {"type": "string"},
        "passed": {"type": "boolean"},
    },
}

BLOCK_SCHEMA = {
    "type": "object",
    "required": ["name", "loc", "error", "tests"],
    "properties": {
        "name": {"type": "string"},
        "loc": {"type": "string"},
        "error": {"type": "boolean"},
        "tests": {"type": "array", "items": TEST_SCHEMA},
    },
}

EVALUATIONS_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["code", "tests", "result"],
        "properties": {
            "code": {"type": "string"},
            "tests": {"type": "string"},
            "result": {
                "oneOf": [
                    {
                        "type": "object",
                        "required": ["Ok"],
                        "not": {"required": ["Err"]},
                        "properties": {"Ok": {"type": "array", "items": BLOCK_SCHEMA}},
                    },
                    {
                        "type": "object",
                        "required": ["Err"],
                        "not": {"required": ["Ok"]},
                        "properties": {"Err": {"type": "string"}},
                    },
                ],
            },
        },
    },
}

WEIGHT_PAIRS_SCHEMA = {
    "type": "array",
    "items": {
        "type": "array",
        "minItems": 2,
        "maxItems": 2,
        "items": [
            {"type": "string"},
            {"type": "number", "exclusiveMinimum": 0},
        ],
    },
}

POINT_TABLE_SCHEMA = {
    "type": "object",
    "required": ["functionality", "testing"],
    "properties": {
        "functionality": WEIGHT_PAIRS_SCHEMA,
        "testing": WEIGHT_PAIRS_SCHEMA,
    },
}


def _load_json(path: PathLike, schema: Dict) -> Any:
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise InputFormatError(f"{path}: file not found")
    except OSError as e:
        raise InputFormatError(f"{path}: cannot read file ({e})")
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InputFormatError(f"{path}: invalid JSON ({e})")

    error = best_match(Draft7Validator(schema).iter_errors(data))
    if error is not None:
        where = "/".join(str(part) for part in error.absolute_path) or "<root>"
        raise InputFormatError(f"{path}: {where}: {error.message}")
    return data


# ===========================================
# Execution results
# ===========================================

def parse_result(raw: Dict) -> ExecutionResult:
    """Convert a raw {"Ok": blocks} / {"Err": reason} result"""
    if "Err" in raw:
        return Failure(reason=raw["Err"])

    return Success(blocks=tuple(
        BlockOutcome(
            name=block["name"],
            location=block["loc"],
            errored=block["error"],
            tests=tuple(
                TestOutcome(location=test["loc"], passed=test["passed"])
                for test in block["tests"]
            ),
        )
        for block in raw["Ok"]
    ))


def parse_evaluations(data: List[Dict]) -> List[ExecutionRecord]:
    """Convert already-validated raw evaluations into records"""
    return [
        ExecutionRecord(
            implementation_id=entry["code"],
            test_suite_id=entry["tests"],
            result=parse_result(entry["result"]),
        )
        for entry in data
    ]


def read_evaluations_from_file(path: PathLike) -> List[ExecutionRecord]:
    """
    Read the execution phase's results.

    Args:
        path: JSON file holding a list of evaluations

    Returns:
        Execution records in file order

    Raises:
        InputFormatError: if the file is missing or malformed
    """
    records = parse_evaluations(_load_json(path, EVALUATIONS_SCHEMA))
    logger.info(f"Loaded {len(records)} evaluations from {path}")
    return records


# ===========================================
# Point tables
# ===========================================

def parse_point_table(data: Dict) -> PointTable:
    """Convert already-validated raw point data"""
    return PointTable(
        functionality_weights={name: weight for name, weight in data["functionality"]},
        testing_weights={name: weight for name, weight in data["testing"]},
    )


def read_point_table_from_file(path: PathLike) -> PointTable:
    """Read point values; raises InputFormatError if missing or malformed"""
    point_table = parse_point_table(_load_json(path, POINT_TABLE_SCHEMA))
    logger.info(
        f"Loaded point table from {path}: {len(point_table.functionality_weights)} functionality, "
        f"{len(point_table.testing_weights)} testing weights"
    )
    return point_table


# ===========================================
# Output
# ===========================================

def write_report_to_file(path: PathLike, report: GradingReport) -> Path:
    """Write a report as JSON, creating parent directories"""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f)

    logger.info(f"Wrote output to {output_path}")
    return output_path
