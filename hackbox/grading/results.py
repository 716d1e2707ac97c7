"""Value objects produced by a grading run."""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..tasks.models import TestCase


@dataclass(frozen=True)
class TestResult:
    """Outcome of one test case."""
    __test__ = False  # not a pytest class

    test_case: TestCase
    passed: bool
    actual_output: str
    error: Optional[str] = None


@dataclass(frozen=True)
class ExecutionResult:
    """Verdict for one submission against all of a task's test cases."""
    success: bool  # True iff every test case passed
    output: str  # Actual outputs, one line per test case
    execution_time_ms: int
    passed_tests: int
    total_tests: int
    test_results: Tuple[TestResult, ...]
    error: Optional[str] = None  # Run-level failure only
