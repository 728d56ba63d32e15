"""
Read tasks - GetProject, GetTask, ListProjects, ListTasks

The list tasks support three fetch types:
- FETCH (default): every item in the output
- FETCH_ONE: only the first item
- STORE: items written to internal storage, output holds the URI
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..constants import PROJECTS_ENDPOINT, TASKS_ENDPOINT
from ..context import RunContext, require
from ..fetch import apply_fetch_type
from ..models import (
    FetchType,
    GetProjectOutput,
    GetTaskOutput,
    ListProjectsOutput,
    ListTasksOutput,
)
from ..registry import todoist_task
from .base import TodoistConnection, put_if_present


@todoist_task
@dataclass
class GetProject:
    """
    Get a project from Todoist.

    Example:
        type: todoist.GetProject
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        projectId: "2203306141"
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    project_id: Any = None

    async def run(self, context: RunContext) -> GetProjectOutput:
        client = self.connection.client(context)
        project_id = require(context.render_string(self.project_id), "projectId")

        project = await client.get(f"{PROJECTS_ENDPOINT}/{project_id}")

        context.logger.info(f"Project {project_id} retrieved successfully")
        return GetProjectOutput(project=project)


@todoist_task
@dataclass
class GetTask:
    """
    Get a task from Todoist.

    Example:
        type: todoist.GetTask
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        taskId: "7498765432"
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    task_id: Any = None

    async def run(self, context: RunContext) -> GetTaskOutput:
        client = self.connection.client(context)
        task_id = require(context.render_string(self.task_id), "taskId")

        task = await client.get(f"{TASKS_ENDPOINT}/{task_id}")

        context.logger.info(f"Task {task_id} retrieved successfully")
        return GetTaskOutput(task=task)


@todoist_task
@dataclass
class ListProjects:
    """
    List all projects from Todoist.

    Example:
        type: todoist.ListProjects
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        fetchType: FETCH_ONE
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    fetch_type: Any = FetchType.FETCH

    async def run(self, context: RunContext) -> ListProjectsOutput:
        client = self.connection.client(context)
        fetch_type = context.render_enum(self.fetch_type, FetchType) or FetchType.FETCH

        projects = await client.get_list(PROJECTS_ENDPOINT)
        context.logger.info(f"Retrieved {len(projects)} projects")

        fetched = apply_fetch_type(context, projects, fetch_type, label="projects")
        return ListProjectsOutput(
            count=fetched.count,
            projects=fetched.items,
            project=fetched.item,
            uri=fetched.uri,
        )


@todoist_task
@dataclass
class ListTasks:
    """
    List tasks from Todoist, optionally filtered by project or filter query.

    Example:
        type: todoist.ListTasks
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        projectId: "2203306141"
        filter: "today"
        fetchType: STORE
    """
    connection: TodoistConnection = field(default_factory=TodoistConnection)
    project_id: Any = None
    filter: Any = None            # Todoist filter query: "today", "overdue", "p1"
    fetch_type: Any = FetchType.FETCH

    async def run(self, context: RunContext) -> ListTasksOutput:
        client = self.connection.client(context)
        fetch_type = context.render_enum(self.fetch_type, FetchType) or FetchType.FETCH

        params: Dict[str, Any] = {}
        put_if_present(params, "project_id", context.render_string(self.project_id))
        put_if_present(params, "filter", context.render_string(self.filter))

        tasks = await client.get_list(TASKS_ENDPOINT, params=params or None)
        context.logger.info(f"Retrieved {len(tasks)} tasks")

        fetched = apply_fetch_type(context, tasks, fetch_type, label="tasks")
        return ListTasksOutput(
            count=fetched.count,
            tasks=fetched.items,
            task=fetched.item,
            uri=fetched.uri,
        )
