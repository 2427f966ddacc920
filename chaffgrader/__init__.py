"""
chaffgrader - grade student implementations and test suites

Cross-checks three kinds of runs from the test-execution phase:
- Functionality: the student's implementation against the official suite
- Wheats: correct implementations against the student's suite
- Chaffs: buggy implementations against the student's suite

Tests that fail even against a wheat are masked when deciding whether a
chaff was caught.
"""

__version__ = "1.0.0"
