"""
Progress tracking: XP, levels and streaks.

A graded run is recorded against the user's progress on that task. The first
successful run completes the task and awards its XP; later successful runs
only improve the best execution time.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from .config import XP_PER_LEVEL
from .db import TaskProgress, User
from .grading import ExecutionResult
from .tasks import Task

logger = logging.getLogger(__name__)


def level_for_xp(total_xp: int) -> int:
    """Level 1 starts at 0 XP; every XP_PER_LEVEL XP is one more level."""
    return max(total_xp, 0) // XP_PER_LEVEL + 1


def next_streak(current: int, last_completed_on: Optional[date], today: date) -> int:
    """Streak after a completion on ``today``."""
    if last_completed_on == today:
        return max(current, 1)
    if last_completed_on == today - timedelta(days=1):
        return current + 1
    return 1


def effective_streak(user: User, today: date) -> int:
    """Streak as shown to the user; it lapses after a day without completions."""
    if user.last_completed_on is None:
        return 0
    if user.last_completed_on < today - timedelta(days=1):
        return 0
    return user.current_streak


def get_or_create_progress(db: Session, user_id: str, task_id: str) -> TaskProgress:
    progress = db.query(TaskProgress).filter(
        TaskProgress.user_id == user_id,
        TaskProgress.task_id == task_id,
    ).first()
    if not progress:
        progress = TaskProgress(
            user_id=user_id,
            task_id=task_id,
            completed=False,
            attempts=0,
            passed_tests=0,
            total_tests=0,
            xp_earned=0,
        )
        db.add(progress)
    return progress


def record_attempt(
    db: Session,
    user: User,
    task: Task,
    result: ExecutionResult,
    language: str,
    now: Optional[datetime] = None,
) -> TaskProgress:
    """Record a graded run and award XP on first completion."""
    now = now or datetime.utcnow()
    progress = get_or_create_progress(db, user.id, task.id)

    progress.attempts += 1
    progress.passed_tests = result.passed_tests
    progress.total_tests = result.total_tests
    progress.language = language
    progress.last_attempt_at = now

    if result.success:
        if progress.best_execution_time is None or result.execution_time_ms < progress.best_execution_time:
            progress.best_execution_time = result.execution_time_ms

        if not progress.completed:
            progress.completed = True
            progress.xp_earned = task.xp_reward

            user.total_xp = (user.total_xp or 0) + task.xp_reward
            user.level = level_for_xp(user.total_xp)
            user.current_streak = next_streak(user.current_streak or 0, user.last_completed_on, now.date())
            user.last_completed_on = now.date()

            logger.info(
                "User %s completed task %s: +%d XP (total %d, level %d)",
                user.id, task.id, task.xp_reward, user.total_xp, user.level,
            )

    db.commit()
    db.refresh(progress)
    return progress
