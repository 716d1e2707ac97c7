"""Database connection and session management."""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from ..config import DB_PATH, DATA_DIR
from ..tasks import TASKS
from .models import Base, TaskRecord

logger = logging.getLogger(__name__)

# Ensure data directory exists
DATA_DIR.mkdir(parents=True, exist_ok=True)

engine = create_engine(
    f"sqlite:///{DB_PATH}",
    connect_args={"check_same_thread": False},  # Needed for SQLite + FastAPI
    echo=False,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_tasks(db: Session) -> int:
    """Insert bundled tasks that are not in the database yet. Returns count added."""
    added = 0
    for task in TASKS:
        if db.get(TaskRecord, task.id) is None:
            db.add(TaskRecord.from_task(task))
            added += 1
    if added:
        db.commit()
        logger.info("Seeded %d bundled task(s)", added)
    return added


def init_db():
    """Initialize database tables and bundled tasks."""
    Base.metadata.create_all(bind=engine)
    with get_db_session() as db:
        seed_tasks(db)


def get_db():
    """Dependency for FastAPI to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Session:
    """Context manager for database sessions."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
