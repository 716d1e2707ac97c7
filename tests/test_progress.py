"""Tests for XP, levels and streaks."""

from datetime import date, datetime

import pytest
from hackbox.db import TaskProgress, User
from hackbox.grading import ExecutionResult
from hackbox.progress import effective_streak, level_for_xp, next_streak, record_attempt
from hackbox.tasks import get_task


def graded(passed, total, time_ms=10):
    return ExecutionResult(
        success=passed == total,
        output="",
        execution_time_ms=time_ms,
        passed_tests=passed,
        total_tests=total,
        test_results=(),
    )


@pytest.fixture
def user(db_session):
    user = User(id="alice", username="alice", total_xp=0, level=1, current_streak=0)
    db_session.add(user)
    db_session.commit()
    return user


class TestLevels:

    @pytest.mark.parametrize("xp, level", [
        (0, 1),
        (199, 1),
        (200, 2),
        (450, 3),
        (-10, 1),
    ])
    def test_level_for_xp(self, xp, level):
        assert level_for_xp(xp) == level


class TestStreaks:

    def test_first_completion(self):
        assert next_streak(0, None, date(2024, 3, 10)) == 1

    def test_consecutive_day(self):
        assert next_streak(4, date(2024, 3, 9), date(2024, 3, 10)) == 5

    def test_same_day(self):
        assert next_streak(4, date(2024, 3, 10), date(2024, 3, 10)) == 4

    def test_gap_resets(self):
        assert next_streak(4, date(2024, 3, 7), date(2024, 3, 10)) == 1

    def test_effective_streak_lapses(self):
        user = User(current_streak=3, last_completed_on=date(2024, 3, 9))
        assert effective_streak(user, date(2024, 3, 10)) == 3
        assert effective_streak(user, date(2024, 3, 11)) == 0
        assert effective_streak(User(current_streak=0, last_completed_on=None), date(2024, 3, 10)) == 0


class TestRecordAttempt:

    def test_failed_attempt_awards_nothing(self, db_session, user):
        task = get_task("2")
        progress = record_attempt(db_session, user, task, graded(2, 4), "python")

        assert progress.attempts == 1
        assert not progress.completed
        assert progress.passed_tests == 2
        assert progress.total_tests == 4
        assert progress.best_execution_time is None
        assert user.total_xp == 0

    def test_first_completion_awards_xp(self, db_session, user):
        task = get_task("4")  # 200 XP
        progress = record_attempt(db_session, user, task, graded(3, 3), "javascript",
                                  now=datetime(2024, 3, 10, 12, 0))

        assert progress.completed
        assert progress.xp_earned == 200
        assert progress.language == "javascript"
        assert user.total_xp == 200
        assert user.level == 2
        assert user.current_streak == 1
        assert user.last_completed_on == date(2024, 3, 10)

    def test_xp_awarded_once(self, db_session, user):
        task = get_task("2")
        record_attempt(db_session, user, task, graded(4, 4, time_ms=50), "python")
        progress = record_attempt(db_session, user, task, graded(4, 4, time_ms=30), "python")

        assert progress.attempts == 2
        assert user.total_xp == task.xp_reward
        assert progress.best_execution_time == 30

    def test_slower_run_keeps_best_time(self, db_session, user):
        task = get_task("2")
        record_attempt(db_session, user, task, graded(4, 4, time_ms=30), "python")
        progress = record_attempt(db_session, user, task, graded(4, 4, time_ms=90), "python")
        assert progress.best_execution_time == 30

    def test_later_failure_keeps_completion(self, db_session, user):
        task = get_task("2")
        record_attempt(db_session, user, task, graded(4, 4), "python")
        progress = record_attempt(db_session, user, task, graded(1, 4), "python")

        assert progress.completed
        assert progress.passed_tests == 1
        assert db_session.query(TaskProgress).count() == 1

    def test_streak_across_days(self, db_session, user):
        record_attempt(db_session, user, get_task("1"), graded(2, 2), "python", now=datetime(2024, 3, 9, 8, 0))
        record_attempt(db_session, user, get_task("2"), graded(4, 4), "python", now=datetime(2024, 3, 10, 8, 0))
        assert user.current_streak == 2

        record_attempt(db_session, user, get_task("3"), graded(4, 4), "python", now=datetime(2024, 3, 13, 8, 0))
        assert user.current_streak == 1
        assert user.total_xp == 50 + 75 + 125
