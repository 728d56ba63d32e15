"""
Delete tasks - DeleteProject, DeleteTask

Both are permanent on the Todoist side.
"""

from dataclasses import dataclass, field
from typing import Any

from ..constants import PROJECTS_ENDPOINT, TASKS_ENDPOINT
from ..context import RunContext, require
from ..models import VoidOutput
from ..registry import todoist_task
from .base import TodoistConnection


@todoist_task
@dataclass
class DeleteProject:
    """
    Delete a project in Todoist.

    Example:
        type: todoist.DeleteProject
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        projectId: "2203306141"
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    project_id: Any = None

    async def run(self, context: RunContext) -> VoidOutput:
        client = self.connection.client(context)
        project_id = require(context.render_string(self.project_id), "projectId")

        await client.delete(f"{PROJECTS_ENDPOINT}/{project_id}")

        context.logger.info(f"Project {project_id} deleted successfully")
        return VoidOutput()


@todoist_task
@dataclass
class DeleteTask:
    """
    Delete a task in Todoist.

    Example:
        type: todoist.DeleteTask
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        taskId: "7498765432"
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    task_id: Any = None

    async def run(self, context: RunContext) -> VoidOutput:
        client = self.connection.client(context)
        task_id = require(context.render_string(self.task_id), "taskId")

        await client.delete(f"{TASKS_ENDPOINT}/{task_id}")

        context.logger.info(f"Task {task_id} deleted successfully")
        return VoidOutput()
