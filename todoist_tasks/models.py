"""
Todoist Tasks Models - Outputs returned by the task shims

Each output is created once from the parsed API response and returned as-is.
to_dict() produces the camelCase shape the workflow host exposes to later
tasks (taskId, projectId, totalCount, ...), leaving out unset fields.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional


class FetchType(str, Enum):
    """How a list task returns what it fetched"""
    FETCH = "FETCH"          # Return every item in the output
    FETCH_ONE = "FETCH_ONE"  # Return only the first item
    STORE = "STORE"          # Store items in internal storage, return a URI


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _to_output_value(value: Any) -> Any:
    if isinstance(value, TaskRunOutput):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_output_value(item) for item in value]
    return value


@dataclass
class TaskRunOutput:
    """Base for task outputs; provides the camelCase to_dict()"""

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[_camel_case(f.name)] = _to_output_value(value)
        return result


@dataclass
class VoidOutput(TaskRunOutput):
    """Output of tasks whose only result is that the call succeeded"""
    pass


@dataclass
class TaskOutput(TaskRunOutput):
    """A created or updated Todoist task"""
    task_id: str
    content: str
    url: str


@dataclass
class ProjectOutput(TaskRunOutput):
    """A created Todoist project"""
    project_id: str
    name: str
    url: Optional[str] = None


@dataclass
class GetTaskOutput(TaskRunOutput):
    task: Dict[str, Any]


@dataclass
class GetProjectOutput(TaskRunOutput):
    project: Dict[str, Any]


@dataclass
class ListTasksOutput(TaskRunOutput):
    """
    Result of ListTasks.

    Only one of tasks (FETCH), task (FETCH_ONE) or uri (STORE) is set;
    count is always the number of tasks Todoist returned.
    """
    count: int
    tasks: Optional[List[Dict[str, Any]]] = None
    task: Optional[Dict[str, Any]] = None
    uri: Optional[str] = None


@dataclass
class ListProjectsOutput(TaskRunOutput):
    """Result of ListProjects; same layout as ListTasksOutput"""
    count: int
    projects: Optional[List[Dict[str, Any]]] = None
    project: Optional[Dict[str, Any]] = None
    uri: Optional[str] = None


@dataclass
class BatchOutput(TaskRunOutput):
    """Result of CreateTaskBatch"""
    total_count: int
    success_count: int
    failure_count: int
    tasks: List[TaskOutput] = field(default_factory=list)
