"""
Task Registry - Auto-register task classes with @todoist_task

Usage:
    from todoist_tasks.registry import todoist_task

    @todoist_task
    @dataclass
    class GetTask:
        '''Get a task from Todoist'''

        connection: TodoistConnection
        task_id: Any = None

        async def run(self, context: RunContext) -> GetTaskOutput:
            ...

    # Registered as "todoist.GetTask"
    get_task_class("todoist.GetTask")
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from .constants import TASK_TYPE_PREFIX
from .errors import TaskDefinitionError

logger = logging.getLogger(__name__)


@dataclass
class TaskMetadata:
    """
    Metadata for a registered task class.

    Automatically extracted from:
    - Class name -> name / type
    - Class docstring -> description
    - Dataclass fields -> fields (connection excluded)
    """
    name: str
    type: str
    task_class: Type
    description: str = ""
    fields: List[str] = dataclasses.field(default_factory=list)
    module: str = ""


# Global registry for decorated tasks
# Key: task type ("todoist.CreateTask"), Value: TaskMetadata
TASK_REGISTRY: Dict[str, TaskMetadata] = {}


def todoist_task(cls: Type) -> Type:
    """Register a task dataclass under "todoist.<ClassName>"."""
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__name__} must be a dataclass")
    if not callable(getattr(cls, "run", None)):
        raise TypeError(f"{cls.__name__} must define run(context)")

    doc = (cls.__doc__ or "").strip()
    metadata = TaskMetadata(
        name=cls.__name__,
        type=f"{TASK_TYPE_PREFIX}.{cls.__name__}",
        task_class=cls,
        description=doc.splitlines()[0] if doc else "",
        fields=[f.name for f in dataclasses.fields(cls) if f.name != "connection"],
        module=cls.__module__,
    )

    if metadata.type in TASK_REGISTRY:
        logger.warning(f"Task type {metadata.type} registered twice, keeping {cls.__module__}")
    TASK_REGISTRY[metadata.type] = metadata
    logger.debug(f"Registered task type: {metadata.type}")
    return cls


def get_task_metadata(task_type: str) -> Optional[TaskMetadata]:
    """
    Look up a task type.

    Accepts the full type ("todoist.CreateTask") or the bare class name
    ("CreateTask").
    """
    if task_type in TASK_REGISTRY:
        return TASK_REGISTRY[task_type]
    return TASK_REGISTRY.get(f"{TASK_TYPE_PREFIX}.{task_type}")


def get_task_class(task_type: str) -> Type:
    metadata = get_task_metadata(task_type)
    if metadata is None:
        raise TaskDefinitionError(
            f"Unknown task type: {task_type}. Available: {sorted(TASK_REGISTRY)}"
        )
    return metadata.task_class


def list_task_types() -> List[str]:
    """All registered task types, sorted"""
    return sorted(TASK_REGISTRY)
