"""
todoist-tasks - Todoist REST API operations as workflow task types

Each task renders its templated configuration, makes one (or, for batches,
a few) calls to the Todoist REST API v2 and returns a typed output.

Quick Start:
    from todoist_tasks import RunContext, CreateTask, TodoistConnection

    task = CreateTask(
        connection=TodoistConnection(api_token="{{ secret('TODOIST_API_TOKEN') }}"),
        content="Review pull requests",
        priority=3,
    )
    output = await task.run(RunContext())
    output.task_id

From YAML:
    from todoist_tasks import FlowLoader, FlowRunner, RunContext

    flow = FlowLoader().load_from_file("daily-review.yaml")
    outputs = await FlowRunner(RunContext()).run(flow)
"""

from .client import TodoistClient
from .context import RunContext, require
from .errors import (
    TodoistPluginError,
    ConfigurationError,
    TodoistApiError,
    TodoistTransportError,
    MalformedResponseError,
    TaskDefinitionError,
    FlowLoadError,
    StorageError,
)
from .fetch import FetchResult, apply_fetch_type
from .models import (
    FetchType,
    VoidOutput,
    TaskOutput,
    ProjectOutput,
    GetTaskOutput,
    GetProjectOutput,
    ListTasksOutput,
    ListProjectsOutput,
    BatchOutput,
)
from .storage import InternalStorage, LocalInternalStorage
from .tasks import (
    TodoistConnection,
    CreateProject,
    CreateTask,
    CreateTaskBatch,
    GetProject,
    GetTask,
    ListProjects,
    ListTasks,
    UpdateTask,
    CompleteTask,
    ReopenTask,
    DeleteProject,
    DeleteTask,
)
from .registry import TASK_REGISTRY, todoist_task, get_task_class, list_task_types
from .loader import FlowLoader, FlowConfig, TaskDefinition, build_task
from .runner import FlowRunner

__version__ = "0.1.0"

__all__ = [
    # Client
    "TodoistClient",
    # Context
    "RunContext",
    "require",
    # Errors
    "TodoistPluginError",
    "ConfigurationError",
    "TodoistApiError",
    "TodoistTransportError",
    "MalformedResponseError",
    "TaskDefinitionError",
    "FlowLoadError",
    "StorageError",
    # Fetch
    "FetchType",
    "FetchResult",
    "apply_fetch_type",
    # Outputs
    "VoidOutput",
    "TaskOutput",
    "ProjectOutput",
    "GetTaskOutput",
    "GetProjectOutput",
    "ListTasksOutput",
    "ListProjectsOutput",
    "BatchOutput",
    # Storage
    "InternalStorage",
    "LocalInternalStorage",
    # Tasks
    "TodoistConnection",
    "CreateProject",
    "CreateTask",
    "CreateTaskBatch",
    "GetProject",
    "GetTask",
    "ListProjects",
    "ListTasks",
    "UpdateTask",
    "CompleteTask",
    "ReopenTask",
    "DeleteProject",
    "DeleteTask",
    # Registry / flows
    "TASK_REGISTRY",
    "todoist_task",
    "get_task_class",
    "list_task_types",
    "FlowLoader",
    "FlowConfig",
    "TaskDefinition",
    "build_task",
    "FlowRunner",
]
