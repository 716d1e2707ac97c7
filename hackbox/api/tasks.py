"""Task API endpoints: browse challenges and run solutions."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from ..db import get_db, TaskRecord, User
from ..grading import ExecutionResult, GradingEngine
from ..progress import record_attempt
from ..tasks import Difficulty, Task
from .schemas import (
    ExecutionResultInfo, SubmissionCreate, TaskInfo, TaskListItem, TestCaseInfo, TestResultInfo,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

_engine = GradingEngine()


def get_engine() -> GradingEngine:
    """Dependency for the shared grading engine (stateless between runs)."""
    return _engine


def get_task_record(db: Session, task_id: str) -> TaskRecord:
    """Get an active task by ID or raise 404."""
    record = db.query(TaskRecord).filter(
        TaskRecord.id == task_id,
        TaskRecord.is_active == True,
    ).first()
    if not record:
        raise HTTPException(status_code=404, detail=f"Task '{task_id}' not found")
    return record


def get_or_create_user(db: Session, user_id: str) -> User:
    """Get existing user or create one named after the ID."""
    user = db.get(User, user_id)
    if not user:
        user = User(id=user_id, username=user_id, total_xp=0, level=1, current_streak=0)
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def task_list_item(task: Task) -> TaskListItem:
    return TaskListItem(
        id=task.id,
        title=task.title,
        description=task.description,
        difficulty=task.difficulty,
        language=task.language,
        xp_reward=task.xp_reward,
        estimated_time=task.estimated_time,
        tags=list(task.tags),
    )


def task_info(task: Task) -> TaskInfo:
    return TaskInfo(
        **task_list_item(task).model_dump(),
        instructions=task.instructions,
        starter_code=dict(task.starter_code),
        hints=list(task.hints),
        test_cases=[
            TestCaseInfo(
                id=tc.id,
                input=tc.input,
                expected_output=tc.expected_output,
                description=tc.description,
                is_hidden=tc.is_hidden,
            )
            for tc in task.visible_test_cases
        ],
        total_test_cases=len(task.test_cases),
        entry_function=task.entry_function,
    )


def execution_result_info(result: ExecutionResult, xp_awarded: int = 0) -> ExecutionResultInfo:
    """Public view of a grading result; hidden cases only report pass/fail."""
    test_results = []
    for r in result.test_results:
        tc = r.test_case
        if tc.is_hidden:
            test_results.append(TestResultInfo(
                test_case_id=tc.id,
                description=tc.description,
                is_hidden=True,
                passed=r.passed,
            ))
        else:
            test_results.append(TestResultInfo(
                test_case_id=tc.id,
                description=tc.description,
                is_hidden=False,
                passed=r.passed,
                input=tc.input,
                expected_output=tc.expected_output,
                actual_output=r.actual_output,
                error=r.error,
            ))

    return ExecutionResultInfo(
        success=result.success,
        output="\n".join(r.actual_output for r in result.test_results if not r.test_case.is_hidden),
        error=result.error,
        execution_time_ms=result.execution_time_ms,
        passed_tests=result.passed_tests,
        total_tests=result.total_tests,
        test_results=test_results,
        xp_awarded=xp_awarded,
    )


@router.get("", response_model=list[TaskListItem])
async def list_tasks(
    difficulty: Optional[Difficulty] = None,
    tag: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List active tasks, easiest first."""
    records = db.query(TaskRecord).filter(TaskRecord.is_active == True).all()
    tasks = [record.to_task() for record in records]

    if difficulty:
        tasks = [t for t in tasks if t.difficulty == difficulty]
    if tag:
        tasks = [t for t in tasks if tag in t.tags]

    tasks.sort(key=lambda t: (t.difficulty.rank, t.xp_reward, t.title))
    return [task_list_item(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskInfo)
async def get_task_info(task_id: str, db: Session = Depends(get_db)):
    """Get a task with its instructions, starter code and visible test cases."""
    return task_info(get_task_record(db, task_id).to_task())


@router.post("/{task_id}/run", response_model=ExecutionResultInfo)
def run_solution(
    task_id: str,
    submission: SubmissionCreate,
    db: Session = Depends(get_db),
    engine: GradingEngine = Depends(get_engine),
):
    """
    Grade a solution against all of the task's test cases.

    Runs synchronously (in the worker threadpool). When ``user_id`` is given
    the attempt is recorded and XP is awarded on first completion.
    """
    task = get_task_record(db, task_id).to_task()

    result = engine.grade(submission.code, task, submission.language)

    xp_awarded = 0
    if submission.user_id:
        user = get_or_create_user(db, submission.user_id)
        xp_before = user.total_xp
        record_attempt(db, user, task, result, submission.language.value)
        xp_awarded = user.total_xp - xp_before

    return execution_result_info(result, xp_awarded=xp_awarded)
