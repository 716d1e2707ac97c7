"""Task and test case definitions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Language(str, Enum):
    """Languages a solution may be submitted in."""
    PYTHON = "python"  # executed natively
    JAVASCRIPT = "javascript"  # transliterated to Python first


class Difficulty(str, Enum):
    """Challenge difficulty, ordered from beginner to expert."""
    BEGINNER = "beginner"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        return list(Difficulty).index(self)

    def __lt__(self, other):
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank >= other.rank


@dataclass(frozen=True)
class TestCase:
    """One (input, expected output) pair used to grade a submission.

    ``input`` is the raw argument string (see grading.arguments) and
    ``expected_output`` the textual form of the expected return value.
    Hidden cases are graded like any other; they only hide detail from users.
    """
    __test__ = False  # not a pytest class

    id: str
    input: str
    expected_output: str
    description: str = ""
    is_hidden: bool = False


@dataclass(frozen=True)
class Task:
    """A challenge definition. Read-only during grading."""
    id: str
    title: str
    description: str
    difficulty: Difficulty
    language: Language
    xp_reward: int
    estimated_time: int  # minutes
    instructions: str = ""
    tags: Tuple[str, ...] = ()
    starter_code: Dict[str, str] = field(default_factory=dict)
    hints: Tuple[str, ...] = ()
    test_cases: Tuple[TestCase, ...] = ()
    # When set, the only function name the grader looks for
    entry_function: Optional[str] = None

    def __post_init__(self):
        if self.xp_reward <= 0:
            raise ValueError(f"xp_reward must be positive, got {self.xp_reward}")

    @property
    def visible_test_cases(self) -> Tuple[TestCase, ...]:
        return tuple(tc for tc in self.test_cases if not tc.is_hidden)
