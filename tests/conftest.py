"""
Pytest configuration and shared fixtures.

Provides an isolated config environment, sample tasks, a mocked task
gateway for controller tests, and FakeTaskService: an in-memory stand-in
for the REST backend served through httpx.MockTransport.
"""

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from securetask.core.api.client import ApiClient
from securetask.core.api.credentials import StaticCredentials
from securetask.core.config import clear_cache
from securetask.core.tasks.gateway import TaskGateway
from securetask.core.tasks.models import Task, TaskStatus

API_URL = "http://testserver/api"
TOKEN = "test-token"


# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """
    Keep every test away from the real user config and environment.

    - XDG_CONFIG_HOME points into tmp_path
    - cwd is an empty project directory
    - SECURETASK_* variables are cleared
    - the config cache is reset before and after
    """
    config_home = tmp_path / "config"
    config_home.mkdir()
    project = tmp_path / "project"
    project.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.chdir(project)
    for var in (
        "SECURETASK_API_URL",
        "SECURETASK_TIMEOUT",
        "SECURETASK_TOKEN",
        "SECURETASK_TOKEN_FILE",
    ):
        monkeypatch.delenv(var, raising=False)

    clear_cache()
    yield {"config_home": config_home, "project_dir": project}
    clear_cache()


@pytest.fixture
def user_config_dir(isolated_env) -> Path:
    """Provide the XDG_CONFIG_HOME/securetask directory."""
    config_dir = isolated_env["config_home"] / "securetask"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


# ==============================================================================
# Sample Data Fixtures
# ==============================================================================


@pytest.fixture
def sample_task() -> Task:
    """Provide a pending task."""
    return Task(id="t1", title="Buy milk", description="2 litres", status=TaskStatus.PENDING)


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Provide tasks in a deliberately unsorted server order."""
    return [
        Task(id="t3", title="Write report", status=TaskStatus.PENDING),
        Task(id="t1", title="Buy milk", description="2 litres"),
        Task(id="t2", title="Call plumber", status=TaskStatus.COMPLETED),
    ]


@pytest.fixture
def sample_task_json() -> list[dict[str, Any]]:
    """Provide tasks as the backend serializes them (Mongo-style _id)."""
    return [
        {
            "_id": "t3",
            "title": "Write report",
            "description": "",
            "status": "pending",
            "user": "u1",
            "createdAt": "2026-01-16T14:32:00Z",
        },
        {
            "_id": "t1",
            "title": "Buy milk",
            "description": "2 litres",
            "status": "pending",
            "user": "u1",
        },
        {
            "_id": "t2",
            "title": "Call plumber",
            "description": None,
            "status": "completed",
            "user": "u1",
        },
    ]


# ==============================================================================
# Gateway / Client Fixtures
# ==============================================================================


@pytest.fixture
def gateway() -> AsyncMock:
    """Provide a TaskGateway mock whose list() returns no tasks."""
    mock = AsyncMock(spec=TaskGateway)
    mock.list.return_value = []
    return mock


@pytest.fixture
def make_api():
    """
    Provide a factory for ApiClients whose requests are answered by a handler.

    Usage: ``api = make_api(handler, token="tok")``
    """

    def _make(handler, token: str | None = TOKEN) -> ApiClient:
        return ApiClient(
            API_URL,
            StaticCredentials(token),
            transport=httpx.MockTransport(handler),
        )

    return _make


class FakeTaskService:
    """
    In-memory task service speaking the REST contract.

    Records every request. ``fail[(method, path)] = (status, body)`` forces
    an error response for one route.
    """

    def __init__(self, tasks: list[dict[str, Any]] | None = None, token: str = TOKEN) -> None:
        self.tasks: list[dict[str, Any]] = [dict(t) for t in tasks or []]
        self.token = token
        self.user = {"_id": "u1", "name": "Ada", "email": "ada@example.com"}
        self.password = "secret"
        self.requests: list[httpx.Request] = []
        self.fail: dict[tuple[str, str], tuple[int, Any]] = {}
        self._next_id = 100

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    def _find(self, task_id: str) -> dict[str, Any] | None:
        for task in self.tasks:
            if task["_id"] == task_id:
                return task
        return None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.method
        path = request.url.path.removeprefix("/api")
        body = json.loads(request.content) if request.content else None

        if (method, path) in self.fail:
            status, payload = self.fail[(method, path)]
            return httpx.Response(status, json=payload)

        if path == "/auth/login" and method == "POST":
            if body["email"] == self.user["email"] and body["password"] == self.password:
                return httpx.Response(200, json={"token": self.token, "user": self.user})
            return httpx.Response(401, json={"message": "Invalid credentials"})

        if path == "/auth/register" and method == "POST":
            self.user = {"_id": "u2", "name": body["name"], "email": body["email"]}
            return httpx.Response(201, json={"token": self.token, "user": self.user})

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"message": "Not authorized, no token"})

        if path == "/users/me":
            if method == "PUT":
                self.user.update({k: v for k, v in body.items() if k != "password"})
            return httpx.Response(200, json=self.user)

        if path == "/tasks" and method == "GET":
            result = self.tasks
            if search := request.url.params.get("search"):
                result = [t for t in result if search.lower() in t["title"].lower()]
            if status := request.url.params.get("status"):
                result = [t for t in result if t["status"] == status]
            return httpx.Response(200, json=result)

        if path == "/tasks" and method == "POST":
            if not body.get("title", "").strip():
                return httpx.Response(400, json={"message": "Title is required"})
            task = {"_id": f"t{self._next_id}", **body}
            self._next_id += 1
            self.tasks.append(task)
            return httpx.Response(201, json=task)

        if path.startswith("/tasks/"):
            task = self._find(path.removeprefix("/tasks/"))
            if task is None:
                return httpx.Response(404, json={"message": "Task not found"})
            if method == "PUT":
                task.update(body)
                return httpx.Response(200, json=task)
            if method == "DELETE":
                self.tasks.remove(task)
                return httpx.Response(200, json={"message": "Task removed"})

        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def service(sample_task_json) -> FakeTaskService:
    """Provide a FakeTaskService seeded with the sample tasks."""
    return FakeTaskService(sample_task_json)


@pytest.fixture
def cli_service(service: FakeTaskService, monkeypatch: pytest.MonkeyPatch) -> FakeTaskService:
    """
    Route CLI commands to the FakeTaskService.

    Sets SECURETASK_API_URL and SECURETASK_TOKEN and swaps the CLI's client
    factory for one using the service's transport.
    """
    from securetask.cli import common

    monkeypatch.setenv("SECURETASK_API_URL", API_URL)
    monkeypatch.setenv("SECURETASK_TOKEN", TOKEN)

    def build_client(config):
        return ApiClient.from_config(
            config, common.get_credentials(config), transport=service.transport()
        )

    monkeypatch.setattr(common, "build_client", build_client)
    return service
