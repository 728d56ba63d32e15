"""
Shared pieces of the Todoist task shims

- TodoistConnection: token + base URL, composed into every task
- response_field / to_task_output: map API responses to outputs
- put_if_present: build request bodies without null fields
"""

import os
from dataclasses import dataclass
from typing import Any, Dict

from ..client import TodoistClient
from ..constants import BASE_URL_ENV, DEFAULT_BASE_URL, MAX_PRIORITY, MIN_PRIORITY
from ..context import RunContext, require
from ..errors import ConfigurationError, MalformedResponseError
from ..models import TaskOutput


@dataclass
class TodoistConnection:
    """
    Connection settings shared by all Todoist tasks.

    Both values may be templates, e.g. api_token="{{ secret('TODOIST_API_TOKEN') }}".
    base_url falls back to $TODOIST_API_BASE_URL, then to the public API.
    """
    api_token: Any = None
    base_url: Any = None

    def client(self, context: RunContext) -> TodoistClient:
        """Render the settings and build a client for this run"""
        token = require(context.render_string(self.api_token), "apiToken")
        base_url = (
            context.render_string(self.base_url)
            or os.environ.get(BASE_URL_ENV)
            or DEFAULT_BASE_URL
        )
        return TodoistClient(token, base_url, transport=context.transport)


def response_field(result: Dict[str, Any], key: str) -> str:
    """Read a field every success response must carry"""
    value = result.get(key)
    if value is None:
        raise MalformedResponseError(f"Todoist response is missing '{key}'")
    return str(value)


def to_task_output(result: Dict[str, Any]) -> TaskOutput:
    return TaskOutput(
        task_id=response_field(result, "id"),
        content=response_field(result, "content"),
        url=response_field(result, "url"),
    )


def put_if_present(body: Dict[str, Any], key: str, value: Any) -> None:
    """Add key to body only when value was supplied; blank strings count as absent"""
    if value is None or (isinstance(value, str) and not value.strip()):
        return
    body[key] = value


def check_priority(priority: Any) -> Any:
    if priority is not None and not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise ConfigurationError(
            f"Priority must be between {MIN_PRIORITY} (normal) and {MAX_PRIORITY} (urgent), got {priority}"
        )
    return priority
