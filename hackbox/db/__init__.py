"""Database module."""

from .database import get_db, init_db, seed_tasks, SessionLocal
from .models import Base, User, TaskRecord, TestCaseRecord, TaskProgress

__all__ = [
    "get_db", "init_db", "seed_tasks", "SessionLocal",
    "Base", "User", "TaskRecord", "TestCaseRecord", "TaskProgress",
]
