"""User API endpoints."""

from datetime import datetime

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from ..db import get_db, User, TaskProgress
from ..progress import effective_streak
from .schemas import UserInfo, UserCreate, UserProgressInfo, TaskProgressInfo

router = APIRouter(prefix="/users", tags=["users"])


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User '{user_id}' not found")
    return user


def user_info(user: User) -> UserInfo:
    return UserInfo(
        id=user.id,
        username=user.username,
        email=user.email,
        total_xp=user.total_xp,
        level=user.level,
        current_streak=effective_streak(user, datetime.utcnow().date()),
        is_admin=bool(user.is_admin),
        created_at=user.created_at,
    )


@router.post("", response_model=UserInfo)
async def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    if db.get(User, user.id):
        raise HTTPException(
            status_code=409,
            detail=f"User '{user.id}' already exists"
        )

    db_user = User(
        id=user.id,
        username=user.username,
        email=user.email,
        total_xp=0,
        level=1,
        current_streak=0,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return user_info(db_user)


@router.get("/{user_id}", response_model=UserInfo)
async def get_user_info(user_id: str, db: Session = Depends(get_db)):
    """Get information about a user."""
    return user_info(get_user(db, user_id))


@router.get("/{user_id}/progress", response_model=UserProgressInfo)
async def get_user_progress(user_id: str, db: Session = Depends(get_db)):
    """Get XP, level, streak and per-task progress of a user."""
    user = get_user(db, user_id)

    rows = db.query(TaskProgress).filter(TaskProgress.user_id == user_id).all()

    return UserProgressInfo(
        user_id=user.id,
        total_xp=user.total_xp,
        level=user.level,
        completed_tasks=sorted(p.task_id for p in rows if p.completed),
        current_streak=effective_streak(user, datetime.utcnow().date()),
        tasks_progress={
            p.task_id: TaskProgressInfo(
                attempts=p.attempts,
                completed=p.completed,
                best_time=p.best_execution_time,
                last_attempt=p.last_attempt_at,
                passed_tests=p.passed_tests,
                total_tests=p.total_tests,
                language=p.language,
            )
            for p in rows
        },
    )
