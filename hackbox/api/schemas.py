"""Pydantic schemas for API."""

from datetime import datetime
from typing import Optional, List, Dict
from pydantic import BaseModel, Field

from ..tasks import Difficulty, Language


# Task schemas
class TestCaseInfo(BaseModel):
    __test__ = False  # not a pytest class

    id: str
    input: str
    expected_output: str
    description: str
    is_hidden: bool


class TaskListItem(BaseModel):
    id: str
    title: str
    description: str
    difficulty: Difficulty
    language: Language
    xp_reward: int
    estimated_time: int
    tags: List[str] = []


class TaskInfo(TaskListItem):
    instructions: str
    starter_code: Dict[str, str] = {}
    hints: List[str] = []
    test_cases: List[TestCaseInfo] = []  # Visible cases only
    total_test_cases: int = 0
    entry_function: Optional[str] = None


class TestCaseCreate(BaseModel):
    __test__ = False  # not a pytest class

    input: str = ""
    expected_output: str
    description: str = ""
    is_hidden: bool = False


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(..., min_length=1)
    instructions: str = ""
    difficulty: Difficulty
    language: Language = Language.PYTHON
    xp_reward: int = Field(..., gt=0)
    estimated_time: int = Field(..., gt=0, description="Minutes")
    tags: List[str] = []
    starter_code: Dict[str, str] = {}
    hints: List[str] = []
    entry_function: Optional[str] = Field(None, pattern=r'^[A-Za-z_][A-Za-z0-9_]*$')
    test_cases: List[TestCaseCreate] = []


class TaskUpdate(BaseModel):
    """Partial update; ``test_cases``, when given, replaces all existing cases."""
    title: Optional[str] = Field(None, min_length=1, max_length=256)
    description: Optional[str] = None
    instructions: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    language: Optional[Language] = None
    xp_reward: Optional[int] = Field(None, gt=0)
    estimated_time: Optional[int] = Field(None, gt=0)
    tags: Optional[List[str]] = None
    starter_code: Optional[Dict[str, str]] = None
    hints: Optional[List[str]] = None
    entry_function: Optional[str] = Field(None, pattern=r'^[A-Za-z_][A-Za-z0-9_]*$')
    test_cases: Optional[List[TestCaseCreate]] = None


# Submission schemas
class SubmissionCreate(BaseModel):
    code: str = Field(..., max_length=50_000)
    language: Language
    user_id: Optional[str] = Field(None, min_length=1, max_length=64, pattern=r'^[a-zA-Z0-9_-]+$')


class TestResultInfo(BaseModel):
    """Per-case verdict. Inputs, outputs and errors are withheld for hidden cases."""
    __test__ = False  # not a pytest class

    test_case_id: str
    description: str
    is_hidden: bool
    passed: bool
    input: Optional[str] = None
    expected_output: Optional[str] = None
    actual_output: Optional[str] = None
    error: Optional[str] = None


class ExecutionResultInfo(BaseModel):
    success: bool
    output: str
    error: Optional[str] = None
    execution_time_ms: int
    passed_tests: int
    total_tests: int
    test_results: List[TestResultInfo]
    xp_awarded: int = 0


# User schemas
class UserCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=64, pattern=r'^[a-zA-Z0-9_-]+$')
    username: str = Field(..., min_length=1, max_length=128)
    email: Optional[str] = Field(None, max_length=256)


class UserInfo(BaseModel):
    id: str
    username: str
    email: Optional[str] = None
    total_xp: int
    level: int
    current_streak: int
    is_admin: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TaskProgressInfo(BaseModel):
    attempts: int
    completed: bool
    best_time: Optional[int] = None
    last_attempt: Optional[datetime] = None
    passed_tests: int
    total_tests: int
    language: Optional[Language] = None


class UserProgressInfo(BaseModel):
    user_id: str
    total_xp: int
    level: int
    completed_tasks: List[str]
    current_streak: int
    tasks_progress: Dict[str, TaskProgressInfo] = {}


# Admin schemas
class AdminStats(BaseModel):
    total_users: int
    active_tasks: int
    total_attempts: int
    total_completions: int
    total_xp: int
    average_level: float
    completions_by_task: Dict[str, int] = {}


# Error schemas
class ErrorResponse(BaseModel):
    status: str = "error"
    error_code: str
    message: str
