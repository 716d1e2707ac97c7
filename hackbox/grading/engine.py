"""
Grading engine.

Runs a submission against every test case of a task:

    parse the input string -> call the solution in the sandbox -> compare

JavaScript submissions are transliterated to Python once per run (see
bridge.py) and then graded exactly like Python submissions. Every failure,
including faults of the engine itself, ends up in the returned
ExecutionResult; nothing is raised to the caller.
"""

import logging
import re
import time
from typing import List, Optional, Sequence

from ..sandbox import SandboxExecutor
from ..tasks.models import Language, Task, TestCase
from .arguments import parse_arguments
from .bridge import transliterate
from .comparator import compare_outputs, normalize_output
from .results import ExecutionResult, TestResult

logger = logging.getLogger(__name__)

# Solution entry points of the bundled challenges, probed in this order
CANDIDATE_NAMES = (
    "helloWorld",
    "sum",
    "findMax",
    "isPalindrome",
    "fibonacci",
    "binarySearch",
    "twoSum",
    "isValid",
    "reverseString",
    "factorial",
)


def snake_case(name: str) -> str:
    """findMax -> find_max"""
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()


def entry_function_names(names: Sequence[str]) -> List[str]:
    """Expand names with their snake_case spelling, keeping priority order."""
    expanded: List[str] = []
    for name in names:
        for spelling in (name, snake_case(name)):
            if spelling not in expanded:
                expanded.append(spelling)
    return expanded


class GradingEngine:
    """
    Grades submissions against a task's test cases.

    Usage:
        engine = GradingEngine()
        result = engine.grade("def sum(a, b):\\n    return a + b", task, "python")
        result.success, result.passed_tests, result.total_tests
    """

    def __init__(
        self,
        executor: Optional[SandboxExecutor] = None,
        candidate_names: Sequence[str] = CANDIDATE_NAMES,
    ):
        self.executor = executor or SandboxExecutor()
        self.candidate_names = tuple(candidate_names)

    def entry_functions_for(self, task: Task) -> List[str]:
        if task.entry_function:
            return entry_function_names([task.entry_function])
        return entry_function_names(self.candidate_names)

    def grade(self, source: str, task: Task, language) -> ExecutionResult:
        """Grade ``source`` written in ``language`` against ``task``."""
        start_time = time.perf_counter()
        total = len(task.test_cases)

        try:
            code = self._prepare_source(source, Language(language))
            entry_functions = self.entry_functions_for(task)

            test_results = [
                self._run_test_case(code, entry_functions, test_case)
                for test_case in task.test_cases
            ]
        except Exception as e:
            logger.exception("Grading run for task %s failed", task.id)
            return ExecutionResult(
                success=False,
                output="",
                error=str(e) or type(e).__name__,
                execution_time_ms=self._elapsed_ms(start_time),
                passed_tests=0,
                total_tests=total,
                test_results=(),
            )

        passed = sum(1 for r in test_results if r.passed)
        result = ExecutionResult(
            success=passed == total,
            output="\n".join(r.actual_output for r in test_results),
            execution_time_ms=self._elapsed_ms(start_time),
            passed_tests=passed,
            total_tests=total,
            test_results=tuple(test_results),
        )
        logger.info(
            "Graded task %s (%s): %d/%d passed in %dms",
            task.id, language, passed, total, result.execution_time_ms,
        )
        return result

    @staticmethod
    def _prepare_source(source: str, language: Language) -> str:
        if language is Language.JAVASCRIPT:
            return transliterate(source)
        return source

    def _run_test_case(self, code: str, entry_functions: List[str], test_case: TestCase) -> TestResult:
        # Per-case faults never abort the remaining cases
        try:
            args = parse_arguments(test_case.input)
            outcome = self.executor.execute(code, entry_functions, args)
        except Exception as e:
            logger.warning("Test case %s could not be executed: %s", test_case.id, e)
            return TestResult(test_case=test_case, passed=False, actual_output="", error=str(e))

        if not outcome.success:
            return TestResult(
                test_case=test_case,
                passed=False,
                actual_output="",
                error=outcome.error,
            )

        actual = normalize_output(outcome.result)
        return TestResult(
            test_case=test_case,
            passed=compare_outputs(actual, test_case.expected_output),
            actual_output=actual,
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int(round((time.perf_counter() - start_time) * 1000))
