"""
Create tasks - CreateProject, CreateTask, CreateTaskBatch
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..constants import PROJECTS_ENDPOINT, TASKS_ENDPOINT
from ..context import RunContext, require
from ..errors import TodoistPluginError
from ..models import BatchOutput, ProjectOutput, TaskOutput
from ..registry import todoist_task
from .base import (
    TodoistConnection,
    check_priority,
    put_if_present,
    response_field,
    to_task_output,
)


@todoist_task
@dataclass
class CreateProject:
    """
    Create a new project in Todoist.

    Example:
        type: todoist.CreateProject
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        name: "Personal Goals"
        color: "blue"
        isFavorite: true
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    name: Any = None
    color: Any = None
    is_favorite: Any = None

    async def run(self, context: RunContext) -> ProjectOutput:
        client = self.connection.client(context)
        name = require(context.render_string(self.name), "name")

        body: Dict[str, Any] = {"name": name}
        put_if_present(body, "color", context.render_string(self.color))
        put_if_present(body, "is_favorite", context.render_boolean(self.is_favorite))

        result = await client.post(PROJECTS_ENDPOINT, body)

        context.logger.info(f"Project '{name}' created successfully with ID: {result.get('id')}")

        url = result.get("url")
        return ProjectOutput(
            project_id=response_field(result, "id"),
            name=response_field(result, "name"),
            url=str(url) if url is not None else None,
        )


@todoist_task
@dataclass
class CreateTask:
    """
    Create a new task in Todoist.

    Example:
        type: todoist.CreateTask
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        content: "Deploy to production"
        taskDescription: "Deploy version 2.0 after testing"
        priority: 4
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    content: Any = None
    task_description: Any = None
    priority: Any = None          # 1 (normal) to 4 (urgent)
    project_id: Any = None
    due_string: Any = None        # "tomorrow", "next Monday", "2025-12-31"

    async def run(self, context: RunContext) -> TaskOutput:
        client = self.connection.client(context)
        content = require(context.render_string(self.content), "content")

        body: Dict[str, Any] = {"content": content}
        put_if_present(body, "description", context.render_string(self.task_description))
        put_if_present(body, "priority", check_priority(context.render_integer(self.priority)))
        put_if_present(body, "project_id", context.render_string(self.project_id))
        put_if_present(body, "due_string", context.render_string(self.due_string))

        result = await client.post(TASKS_ENDPOINT, body)

        context.logger.info("Task created successfully")
        return to_task_output(result)


@todoist_task
@dataclass
class CreateTaskBatch:
    """
    Create multiple tasks in Todoist.

    Each element of tasks is sent as-is as the body of POST /tasks. Elements
    are created one after another; a failing element is counted and logged
    but never stops the batch.

    Example:
        type: todoist.CreateTaskBatch
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        tasks:
          - content: "Review PR #123"
            priority: 3
          - content: "Update documentation"
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    tasks: Any = None

    async def run(self, context: RunContext) -> BatchOutput:
        client = self.connection.client(context)
        items: List[Any] = require(context.render_list(self.tasks), "tasks")

        created: List[TaskOutput] = []
        failure_count = 0

        for index, task_data in enumerate(items):
            try:
                if not isinstance(task_data, dict):
                    raise TodoistPluginError(
                        f"Batch element {index} is a {type(task_data).__name__}, not a mapping"
                    )
                result = await client.post(TASKS_ENDPOINT, task_data)
                created.append(to_task_output(result))
                context.logger.info(f"Created task: {result.get('content')}")
            except TodoistPluginError as e:
                failure_count += 1
                context.logger.warning(f"Failed to create task: {e}")

        context.logger.info(
            f"Batch creation completed: {len(created)} succeeded, {failure_count} failed"
        )

        return BatchOutput(
            total_count=len(items),
            success_count=len(created),
            failure_count=failure_count,
            tasks=created,
        )
