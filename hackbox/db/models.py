"""SQLAlchemy models for Hackbox."""

from datetime import datetime
from sqlalchemy import (
    JSON, Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship, declarative_base

from ..tasks.models import Difficulty, Language, Task, TestCase

Base = declarative_base()


class User(Base):
    """A learner (or admin) working through challenges."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)  # User-chosen ID
    username = Column(String(128), nullable=False)
    email = Column(String(256), nullable=True)
    total_xp = Column(Integer, default=0, nullable=False)
    level = Column(Integer, default=1, nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)
    last_completed_on = Column(Date, nullable=True)  # Day of the latest first-time completion
    is_admin = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    progress = relationship("TaskProgress", back_populates="user")

    def __repr__(self):
        return f"<User {self.id}>"


class TaskRecord(Base):
    """A challenge, as stored. Converted to a tasks.Task for grading."""

    __tablename__ = "tasks"

    id = Column(String(64), primary_key=True)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=False)
    instructions = Column(Text, nullable=False, default="")
    difficulty = Column(String(16), nullable=False)
    language = Column(String(16), nullable=False)
    xp_reward = Column(Integer, nullable=False)
    estimated_time = Column(Integer, nullable=False)  # minutes
    tags = Column(JSON, nullable=False, default=list)
    starter_code = Column(JSON, nullable=False, default=dict)  # language -> source
    hints = Column(JSON, nullable=False, default=list)
    entry_function = Column(String(64), nullable=True)
    is_active = Column(Boolean, default=True)  # False once deleted by an admin
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    test_cases = relationship(
        "TestCaseRecord",
        back_populates="task",
        order_by="TestCaseRecord.position",
        cascade="all, delete-orphan",
    )
    progress = relationship("TaskProgress", back_populates="task")

    @classmethod
    def from_task(cls, task: Task) -> "TaskRecord":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            instructions=task.instructions,
            difficulty=task.difficulty.value,
            language=task.language.value,
            xp_reward=task.xp_reward,
            estimated_time=task.estimated_time,
            tags=list(task.tags),
            starter_code=dict(task.starter_code),
            hints=list(task.hints),
            entry_function=task.entry_function,
            is_active=True,
            test_cases=[
                TestCaseRecord(
                    id=tc.id,
                    position=position,
                    input_data=tc.input,
                    expected_output=tc.expected_output,
                    description=tc.description,
                    is_hidden=tc.is_hidden,
                )
                for position, tc in enumerate(task.test_cases)
            ],
        )

    def to_task(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            instructions=self.instructions or "",
            difficulty=Difficulty(self.difficulty),
            language=Language(self.language),
            xp_reward=self.xp_reward,
            estimated_time=self.estimated_time,
            tags=tuple(self.tags or ()),
            starter_code=dict(self.starter_code or {}),
            hints=tuple(self.hints or ()),
            test_cases=tuple(tc.to_test_case() for tc in self.test_cases),
            entry_function=self.entry_function,
        )

    def __repr__(self):
        return f"<TaskRecord {self.id}>"


class TestCaseRecord(Base):
    """One stored test case of a task."""
    __test__ = False  # not a pytest class

    __tablename__ = "test_cases"

    id = Column(String(64), primary_key=True)
    task_id = Column(String(64), ForeignKey("tasks.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)  # Grading order
    input_data = Column(Text, nullable=False, default="")
    expected_output = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    is_hidden = Column(Boolean, default=False)

    task = relationship("TaskRecord", back_populates="test_cases")

    def to_test_case(self) -> TestCase:
        return TestCase(
            id=self.id,
            input=self.input_data or "",
            expected_output=self.expected_output,
            description=self.description or "",
            is_hidden=bool(self.is_hidden),
        )


class TaskProgress(Base):
    """A user's standing on one task."""

    __tablename__ = "user_progress"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    task_id = Column(String(64), ForeignKey("tasks.id"), nullable=False)

    completed = Column(Boolean, default=False, nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    best_execution_time = Column(Integer, nullable=True)  # ms, successful runs only
    last_attempt_at = Column(DateTime, nullable=True)
    passed_tests = Column(Integer, default=0, nullable=False)
    total_tests = Column(Integer, default=0, nullable=False)
    language = Column(String(16), nullable=True)
    xp_earned = Column(Integer, default=0, nullable=False)

    user = relationship("User", back_populates="progress")
    task = relationship("TaskRecord", back_populates="progress")

    __table_args__ = (
        UniqueConstraint("user_id", "task_id", name="uq_user_progress_user_task"),
        Index("ix_user_progress_task_completed", "task_id", "completed"),
    )

    def __repr__(self):
        return f"<TaskProgress {self.user_id}/{self.task_id} completed={self.completed}>"
