"""Shared fixtures: an in-memory Todoist API and a run context wired to it."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest

from todoist_tasks import LocalInternalStorage, RunContext, TodoistConnection
from todoist_tasks.constants import BASE_URL_ENV

API_PREFIX = "/rest/v2"

Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class TodoistStub:
    """
    Fake Todoist API served through httpx.MockTransport.

    Routes are keyed by (method, path without /rest/v2). Each route holds a
    queue of responses; the last one repeats once the queue is drained.
    Unknown routes answer 404.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], List[Responder]] = {}
        self.transport = httpx.MockTransport(self._handle)

    def add(self, method: str, path: str, *responses: Responder) -> "TodoistStub":
        self._routes.setdefault((method.upper(), path), []).extend(responses)
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]

        queue = self._routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, text=f"no route for {request.method} {path}")

        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(responder):
            return responder(request)
        return responder

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1) -> Optional[Any]:
        content = self.requests[index].content
        return json.loads(content) if content else None


@pytest.fixture(autouse=True)
def _no_base_url_override(monkeypatch):
    monkeypatch.delenv(BASE_URL_ENV, raising=False)


@pytest.fixture
def todoist() -> TodoistStub:
    return TodoistStub()


@pytest.fixture
def context(todoist, tmp_path) -> RunContext:
    return RunContext(
        secrets={"TODOIST_API_TOKEN": "test-token"},
        storage=LocalInternalStorage(tmp_path / "storage"),
        working_dir=tmp_path / "work",
        transport=todoist.transport,
        task_id="test_task",
    )


@pytest.fixture
def connection() -> TodoistConnection:
    return TodoistConnection(api_token="{{ secret('TODOIST_API_TOKEN') }}")


def task_json(task_id: str = "7498765432", content: str = "Review pull requests") -> Dict[str, Any]:
    return {
        "id": task_id,
        "project_id": "2203306141",
        "content": content,
        "description": "",
        "priority": 1,
        "url": f"https://todoist.com/showTask?id={task_id}",
    }


@pytest.fixture
def make_task() -> Callable[..., Dict[str, Any]]:
    return task_json
