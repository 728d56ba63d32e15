"""
Todoist task shims - one class per API operation

Importing this package registers every task type with the registry.
"""

from .base import TodoistConnection
from .create import CreateProject, CreateTask, CreateTaskBatch
from .read import GetProject, GetTask, ListProjects, ListTasks
from .update import UpdateTask, CompleteTask, ReopenTask
from .delete import DeleteProject, DeleteTask

__all__ = [
    "TodoistConnection",
    # Create
    "CreateProject",
    "CreateTask",
    "CreateTaskBatch",
    # Read
    "GetProject",
    "GetTask",
    "ListProjects",
    "ListTasks",
    # Update
    "UpdateTask",
    "CompleteTask",
    "ReopenTask",
    # Delete
    "DeleteProject",
    "DeleteTask",
]
