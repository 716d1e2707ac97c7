"""Challenge definitions."""

from .models import Difficulty, Language, Task, TestCase
from .bank import TASKS, get_task

__all__ = ["Difficulty", "Language", "Task", "TestCase", "TASKS", "get_task"]
