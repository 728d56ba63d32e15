"""
Update tasks - UpdateTask, CompleteTask, ReopenTask
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..constants import TASKS_ENDPOINT
from ..context import RunContext, require
from ..errors import ConfigurationError
from ..models import TaskOutput, VoidOutput
from ..registry import todoist_task
from .base import TodoistConnection, check_priority, put_if_present, to_task_output


@todoist_task
@dataclass
class UpdateTask:
    """
    Update an existing task in Todoist.

    Only the fields that are set are sent. At least one of content,
    taskDescription, priority or dueString is required.

    Example:
        type: todoist.UpdateTask
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        taskId: "7498765432"
        priority: 4
        dueString: "tomorrow"
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    task_id: Any = None
    content: Any = None
    task_description: Any = None
    priority: Any = None
    due_string: Any = None

    async def run(self, context: RunContext) -> TaskOutput:
        client = self.connection.client(context)
        task_id = require(context.render_string(self.task_id), "taskId")

        body: Dict[str, Any] = {}
        put_if_present(body, "content", context.render_string(self.content))
        put_if_present(body, "description", context.render_string(self.task_description))
        put_if_present(body, "priority", check_priority(context.render_integer(self.priority)))
        put_if_present(body, "due_string", context.render_string(self.due_string))

        if not body:
            raise ConfigurationError("At least one field must be provided to update")

        result = await client.post(f"{TASKS_ENDPOINT}/{task_id}", body)

        context.logger.info(f"Task {task_id} updated successfully")
        return to_task_output(result)


@todoist_task
@dataclass
class CompleteTask:
    """
    Complete a task in Todoist.

    Example:
        type: todoist.CompleteTask
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        taskId: "7498765432"
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    task_id: Any = None

    async def run(self, context: RunContext) -> VoidOutput:
        client = self.connection.client(context)
        task_id = require(context.render_string(self.task_id), "taskId")

        await client.post_empty(f"{TASKS_ENDPOINT}/{task_id}/close")

        context.logger.info(f"Task {task_id} completed successfully")
        return VoidOutput()


@todoist_task
@dataclass
class ReopenTask:
    """
    Reopen a completed task in Todoist.

    Example:
        type: todoist.ReopenTask
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        taskId: "7498765432"
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    task_id: Any = None

    async def run(self, context: RunContext) -> VoidOutput:
        client = self.connection.client(context)
        task_id = require(context.render_string(self.task_id), "taskId")

        await client.post_empty(f"{TASKS_ENDPOINT}/{task_id}/reopen")

        context.logger.info(f"Task {task_id} reopened successfully")
        return VoidOutput()
