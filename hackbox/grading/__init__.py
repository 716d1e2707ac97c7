"""Code grading engine."""

from .arguments import parse_arguments
from .bridge import transliterate
from .comparator import compare_outputs, normalize_output
from .engine import CANDIDATE_NAMES, GradingEngine
from .results import ExecutionResult, TestResult

__all__ = [
    "CANDIDATE_NAMES",
    "ExecutionResult",
    "GradingEngine",
    "TestResult",
    "compare_outputs",
    "normalize_output",
    "parse_arguments",
    "transliterate",
]
