"""Tests for the HTTP API."""

import pytest
from hackbox import config
from hackbox.api.tasks import get_engine
from hackbox.grading import ExecutionResult, TestResult
from hackbox.main import app
from hackbox.tasks import TestCase

ADMIN_HEADERS = {"X-Admin-Key": config.ADMIN_API_KEY}

SUM_SOLUTION = "def sum(a, b):\n    return a + b\n"


class FakeEngine:
    """Returns a canned result with one visible and one hidden case."""

    def __init__(self):
        self.calls = []

    def grade(self, source, task, language):
        self.calls.append((source, task.id, language))
        visible = TestCase(id="v", input="2,3", expected_output="5", description="visible")
        hidden = TestCase(id="h", input="-5,3", expected_output="-2", description="hidden", is_hidden=True)
        return ExecutionResult(
            success=False,
            output="5\n7",
            execution_time_ms=12,
            passed_tests=1,
            total_tests=2,
            test_results=(
                TestResult(test_case=visible, passed=True, actual_output="5"),
                TestResult(test_case=hidden, passed=False, actual_output="7", error=None),
            ),
        )


@pytest.fixture
def fake_engine(client):
    engine = FakeEngine()
    app.dependency_overrides[get_engine] = lambda: engine
    return engine


class TestTaskEndpoints:

    def test_list_tasks_easiest_first(self, client):
        response = client.get("/tasks")
        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == ["1", "2", "3", "8", "4", "7", "5", "6"]

    def test_filter_by_difficulty(self, client):
        response = client.get("/tasks", params={"difficulty": "medium"})
        assert [t["id"] for t in response.json()] == ["4", "7", "5"]

    def test_filter_by_tag(self, client):
        response = client.get("/tasks", params={"tag": "strings"})
        assert [t["id"] for t in response.json()] == ["1", "8", "4"]

    def test_task_detail_hides_hidden_cases(self, client):
        response = client.get("/tasks/3")
        assert response.status_code == 200

        data = response.json()
        assert data["title"] == "Array Maximum"
        assert data["total_test_cases"] == 4
        assert [tc["input"] for tc in data["test_cases"]] == ["[1,5,3,9,2]", "[100]"]
        assert set(data["starter_code"]) == {"javascript", "python"}

    def test_unknown_task(self, client):
        assert client.get("/tasks/nope").status_code == 404

    def test_run_withholds_hidden_details(self, client, fake_engine):
        response = client.post("/tasks/2/run", json={"code": "x", "language": "python"})
        assert response.status_code == 200

        data = response.json()
        assert data["passed_tests"] == 1
        assert data["total_tests"] == 2
        assert data["output"] == "5"
        assert data["xp_awarded"] == 0

        visible, hidden = data["test_results"]
        assert visible["actual_output"] == "5"
        assert visible["input"] == "2,3"
        assert hidden["passed"] is False
        assert hidden["input"] is None
        assert hidden["actual_output"] is None
        assert fake_engine.calls == [("x", "2", "python")]

    def test_run_rejects_unknown_language(self, client, fake_engine):
        response = client.post("/tasks/2/run", json={"code": "x", "language": "ruby"})
        assert response.status_code == 422
        assert fake_engine.calls == []

    def test_run_unknown_task(self, client, fake_engine):
        response = client.post("/tasks/nope/run", json={"code": "x", "language": "python"})
        assert response.status_code == 404

    def test_run_records_progress(self, client):
        payload = {"code": SUM_SOLUTION, "language": "python", "user_id": "bob"}

        first = client.post("/tasks/2/run", json=payload).json()
        assert first["success"]
        assert first["passed_tests"] == 4
        assert first["xp_awarded"] == 75

        second = client.post("/tasks/2/run", json=payload).json()
        assert second["success"]
        assert second["xp_awarded"] == 0

        progress = client.get("/users/bob/progress").json()
        assert progress["total_xp"] == 75
        assert progress["level"] == 1
        assert progress["completed_tasks"] == ["2"]
        assert progress["current_streak"] == 1
        assert progress["tasks_progress"]["2"]["attempts"] == 2

    def test_run_javascript(self, client):
        response = client.post("/tasks/2/run", json={"code": "function sum(a,b){return a+b}", "language": "javascript"})
        data = response.json()
        assert data["success"]
        assert data["passed_tests"] == data["total_tests"] == 4


class TestUserEndpoints:

    def test_create_and_get_user(self, client):
        response = client.post("/users", json={"id": "carol", "username": "Carol"})
        assert response.status_code == 200
        assert response.json()["level"] == 1

        data = client.get("/users/carol").json()
        assert data["username"] == "Carol"
        assert data["total_xp"] == 0
        assert data["current_streak"] == 0

    def test_duplicate_user(self, client):
        client.post("/users", json={"id": "carol", "username": "Carol"})
        response = client.post("/users", json={"id": "carol", "username": "Other"})
        assert response.status_code == 409

    def test_invalid_user_id(self, client):
        response = client.post("/users", json={"id": "no spaces", "username": "x"})
        assert response.status_code == 422

    def test_unknown_user(self, client):
        assert client.get("/users/nobody").status_code == 404
        assert client.get("/users/nobody/progress").status_code == 404


class TestAdminEndpoints:

    NEW_TASK = {
        "title": "Double It",
        "description": "Return twice the input",
        "difficulty": "beginner",
        "language": "python",
        "xp_reward": 30,
        "estimated_time": 5,
        "tags": ["math"],
        "entry_function": "double",
        "test_cases": [
            {"input": "2", "expected_output": "4"},
            {"input": "-3", "expected_output": "-6", "is_hidden": True},
        ],
    }

    def test_requires_key(self, client):
        assert client.get("/admin/stats").status_code == 403
        assert client.get("/admin/stats", headers={"X-Admin-Key": "wrong"}).status_code == 403

    def test_non_ascii_key_is_rejected(self, client):
        response = client.get("/admin/stats", headers={"X-Admin-Key": "clé".encode("latin-1")})
        assert response.status_code == 403

    def test_create_task(self, client):
        response = client.post("/admin/tasks", json=self.NEW_TASK, headers=ADMIN_HEADERS)
        assert response.status_code == 201

        data = response.json()
        assert data["total_test_cases"] == 2
        assert len(data["test_cases"]) == 1
        assert data["entry_function"] == "double"

        listed = [t["id"] for t in client.get("/tasks").json()]
        assert data["id"] in listed

    def test_created_task_is_gradable(self, client):
        task_id = client.post("/admin/tasks", json=self.NEW_TASK, headers=ADMIN_HEADERS).json()["id"]

        response = client.post(
            f"/tasks/{task_id}/run",
            json={"code": "def double(n):\n    return n * 2\n", "language": "python"},
        )
        assert response.json()["passed_tests"] == 2

    def test_invalid_task(self, client):
        bad = dict(self.NEW_TASK, xp_reward=0)
        assert client.post("/admin/tasks", json=bad, headers=ADMIN_HEADERS).status_code == 422

    def test_update_task(self, client):
        response = client.put(
            "/admin/tasks/2",
            json={"title": "Add Two Numbers", "test_cases": [{"input": "1,1", "expected_output": "2"}]},
            headers=ADMIN_HEADERS,
        )
        assert response.status_code == 200

        data = client.get("/tasks/2").json()
        assert data["title"] == "Add Two Numbers"
        assert data["xp_reward"] == 75
        assert data["total_test_cases"] == 1

    def test_delete_task(self, client):
        assert client.delete("/admin/tasks/8", headers=ADMIN_HEADERS).status_code == 204
        assert client.get("/tasks/8").status_code == 404
        assert "8" not in [t["id"] for t in client.get("/tasks").json()]

    def test_stats(self, client):
        client.post("/tasks/2/run", json={"code": SUM_SOLUTION, "language": "python", "user_id": "dave"})

        stats = client.get("/admin/stats", headers=ADMIN_HEADERS).json()
        assert stats["total_users"] == 1
        assert stats["active_tasks"] == 8
        assert stats["total_attempts"] == 1
        assert stats["total_completions"] == 1
        assert stats["total_xp"] == 75
        assert stats["completions_by_task"] == {"2": 1}


class TestAppEndpoints:

    def test_root(self, client):
        data = client.get("/").json()
        assert data["name"] == "Hackbox"

    def test_timing_header(self, client):
        response = client.get("/tasks")
        assert response.headers["X-Process-Time"].endswith("s")
