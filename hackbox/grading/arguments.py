"""
Argument parsing for test case inputs.

A test case stores its call arguments as one string: comma-separated scalars
(``"2,3"``), optionally led by a single flat JSON array (``"[1,3,5],5"``).
Parsing is best effort and never raises; anything it cannot make sense of is
passed through as a single string argument.
"""

import json
import logging
import re
from typing import Any, List

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)$")


def coerce_scalar(token: str) -> Any:
    """Numeric literal -> int/float, true/false -> bool, anything else -> str."""
    token = token.strip()
    if _NUMBER_RE.match(token):
        if "." in token:
            return float(token)
        return int(token)
    if token == "true":
        return True
    if token == "false":
        return False
    return token


def _parse_array(text: str) -> list:
    value = json.loads(text)
    if not isinstance(value, list):
        raise ValueError(f"expected an array literal, got {type(value).__name__}")
    return value


def parse_arguments(raw: str) -> List[Any]:
    """Turn a test case input string into positional call arguments.

    >>> parse_arguments("2,3")
    [2, 3]
    >>> parse_arguments("[1,3,5],5")
    [[1, 3, 5], 5]
    >>> parse_arguments("[1,2")
    ['[1,2']
    """
    if raw is None or not raw.strip():
        return []

    try:
        if raw.lstrip().startswith("[") and "]" not in raw:
            raise ValueError("unterminated array literal")

        if "[" in raw and "]" in raw:
            end = raw.index("]") + 1
            args: List[Any] = [_parse_array(raw[:end])]
            rest = raw[end:]
            args.extend(coerce_scalar(token) for token in rest.split(",") if token.strip())
            return args

        return [coerce_scalar(token) for token in raw.split(",")]
    except (ValueError, TypeError) as e:
        logger.debug("Falling back to raw string argument for %r: %s", raw, e)
        return [raw]
