"""
Output normalization and comparison.

Return values are rendered to text the way test cases spell expected output
(``[0,1]``, ``true``, ``null``), then compared with a layered, tolerant
equality. Neither function raises.
"""

import json
import math
import re
from typing import Any, Optional

NUMERIC_TOLERANCE = 0.001

_BOOLEAN_TOKENS = ("true", "false")

# Decimal literals as test cases spell them; no "nan", "inf" or "1_0"
_NUMBER_RE = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?$")


def normalize_output(value: Any) -> str:
    """Render a solution's return value as canonical text."""
    if isinstance(value, (list, tuple, dict)):
        try:
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
        except (TypeError, ValueError, RecursionError):
            return str(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_structure(text: str) -> Optional[Any]:
    try:
        value = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if isinstance(value, (list, dict)):
        return value
    return None


def _parse_number(text: str) -> Optional[float]:
    if not _NUMBER_RE.match(text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _structurally_equal(a: Any, b: Any) -> bool:
    # bool is an int subclass; true must not equal 1
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_structurally_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_structurally_equal(a[k], b[k]) for k in a)
    return type(a) is type(b) and a == b


def compare_outputs(actual: str, expected: str) -> bool:
    """Decide whether actual output matches the expected output.

    First match wins: exact text after trimming, structural equality of
    JSON arrays/objects, numeric equality within NUMERIC_TOLERANCE, then
    boolean tokens. Anything else is a mismatch.
    """
    actual = (actual or "").strip()
    expected = (expected or "").strip()

    if actual == expected:
        return True

    actual_structure = _parse_structure(actual)
    expected_structure = _parse_structure(expected)
    if actual_structure is not None and expected_structure is not None:
        try:
            return _structurally_equal(actual_structure, expected_structure)
        except RecursionError:
            return False

    actual_number = _parse_number(actual)
    expected_number = _parse_number(expected)
    if actual_number is not None and expected_number is not None:
        return abs(actual_number - expected_number) < NUMERIC_TOLERANCE

    if actual in _BOOLEAN_TOKENS and expected in _BOOLEAN_TOKENS:
        return actual == expected

    return False
