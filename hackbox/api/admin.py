"""Admin API endpoints: manage tasks and view aggregate statistics.

All routes require the ``X-Admin-Key`` header to match ADMIN_API_KEY. With
no key configured the admin surface is disabled.
"""

import logging
import secrets
import uuid
from typing import List

from fastapi import APIRouter, HTTPException, Depends, Header
from sqlalchemy.orm import Session
from sqlalchemy import func

from ..config import ADMIN_API_KEY
from ..db import get_db, User, TaskRecord, TestCaseRecord, TaskProgress
from .schemas import AdminStats, TaskCreate, TaskInfo, TaskUpdate, TestCaseCreate
from .tasks import get_task_record, task_info

logger = logging.getLogger(__name__)


def require_admin(x_admin_key: str = Header(default="")) -> None:
    if not ADMIN_API_KEY or not secrets.compare_digest(x_admin_key.encode(), ADMIN_API_KEY.encode()):
        raise HTTPException(
            status_code=403,
            detail={"error_code": "FORBIDDEN", "message": "Admin key required"},
        )


router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def build_test_cases(task_id: str, cases: List[TestCaseCreate]) -> List[TestCaseRecord]:
    return [
        TestCaseRecord(
            id=f"{task_id}-{uuid.uuid4().hex[:8]}",
            position=position,
            input_data=tc.input,
            expected_output=tc.expected_output,
            description=tc.description,
            is_hidden=tc.is_hidden,
        )
        for position, tc in enumerate(cases)
    ]


@router.post("/tasks", response_model=TaskInfo, status_code=201)
async def create_task(task: TaskCreate, db: Session = Depends(get_db)):
    """Create a new task with its test cases."""
    task_id = str(uuid.uuid4())
    record = TaskRecord(
        id=task_id,
        title=task.title,
        description=task.description,
        instructions=task.instructions,
        difficulty=task.difficulty.value,
        language=task.language.value,
        xp_reward=task.xp_reward,
        estimated_time=task.estimated_time,
        tags=task.tags,
        starter_code=task.starter_code,
        hints=task.hints,
        entry_function=task.entry_function,
        is_active=True,
        test_cases=build_test_cases(task_id, task.test_cases),
    )
    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info("Created task %s (%s)", record.id, record.title)
    return task_info(record.to_task())


@router.put("/tasks/{task_id}", response_model=TaskInfo)
async def update_task(task_id: str, updates: TaskUpdate, db: Session = Depends(get_db)):
    """Update task fields. A given test case list replaces the stored one."""
    record = get_task_record(db, task_id)

    fields = updates.model_dump(exclude_unset=True, exclude={"test_cases"})
    for name, value in fields.items():
        if value is None and name != "entry_function":
            continue  # column is not nullable
        if name in ("difficulty", "language") and value is not None:
            value = value.value
        setattr(record, name, value)

    if updates.test_cases is not None:
        record.test_cases = build_test_cases(task_id, updates.test_cases)

    db.commit()
    db.refresh(record)

    logger.info("Updated task %s", task_id)
    return task_info(record.to_task())


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(task_id: str, db: Session = Depends(get_db)):
    """Deactivate a task. Progress that references it is kept."""
    record = get_task_record(db, task_id)
    record.is_active = False
    db.commit()
    logger.info("Deactivated task %s", task_id)


@router.get("/stats", response_model=AdminStats)
async def get_stats(db: Session = Depends(get_db)):
    """Aggregate platform statistics."""
    total_users = db.query(func.count(User.id)).scalar() or 0
    active_tasks = db.query(func.count(TaskRecord.id)).filter(TaskRecord.is_active == True).scalar() or 0
    total_attempts = db.query(func.sum(TaskProgress.attempts)).scalar() or 0
    total_completions = db.query(func.count(TaskProgress.id)).filter(TaskProgress.completed == True).scalar() or 0
    total_xp = db.query(func.sum(User.total_xp)).scalar() or 0
    average_level = db.query(func.avg(User.level)).scalar() or 0.0

    completions_by_task = dict(
        db.query(TaskProgress.task_id, func.count(TaskProgress.id))
        .filter(TaskProgress.completed == True)
        .group_by(TaskProgress.task_id)
        .all()
    )

    return AdminStats(
        total_users=total_users,
        active_tasks=active_tasks,
        total_attempts=total_attempts,
        total_completions=total_completions,
        total_xp=total_xp,
        average_level=round(float(average_level), 2),
        completions_by_task=completions_by_task,
    )
