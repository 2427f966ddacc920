"""Configuration for chaffgrader"""

import logging
import os

# ===========================================
# Role markers
# ===========================================
# An implementation's role is encoded in its path by the grading
# environment. Checked in this order; anything else is functionality.

WHEAT_MARKER = "wheat"
CHAFF_MARKER = "chaff"

# ===========================================
# Report visibility
# ===========================================

# Top-level defaults of the grading platform report
REPORT_VISIBILITY = "after_published"
REPORT_STDOUT_VISIBILITY = "after_published"

# ===========================================
# Scoring
# ===========================================

DEFAULT_WEIGHT = 1

SUMMARY_NAMES = {
    "functionality": "Functionality score",
    "wheat": "Wheats score",
    "chaff": "Chaffs score",
}

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(name: str) -> str:
    """Normalise a log level name; unrecognised names fall back to INFO"""
    level = (name or "").strip().upper()
    if level not in LOG_LEVEL_NAMES:
        logging.getLogger(__name__).warning(f"Unknown log level {name!r}, using INFO")
        return "INFO"
    return level


# Logging level for the CLI (DEBUG shows per-item verdicts)
LOG_LEVEL = resolve_log_level(os.environ.get("CHAFFGRADER_LOG_LEVEL", "INFO"))
