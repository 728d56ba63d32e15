"""
Flow Loader - Load Todoist task definitions from YAML

A flow file lists task definitions in the camelCase shape workflow hosts use:

    id: daily-review
    vars:
      project: "2203306141"
    tasks:
      - id: today
        type: todoist.ListTasks
        apiToken: "{{ secret('TODOIST_API_TOKEN') }}"
        projectId: "{{ vars.project }}"
        filter: today

apiToken and baseUrl go to the task's TodoistConnection; every other key is
mapped to the snake_case field of the task class.
"""

import dataclasses
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import FlowLoadError, TaskDefinitionError
from .registry import get_task_metadata
from .tasks import TodoistConnection

logger = logging.getLogger(__name__)

# Definition keys that configure the connection rather than the task
CONNECTION_FIELDS = {"apiToken": "api_token", "baseUrl": "base_url"}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


class TaskDefinition(BaseModel):
    """One task entry of a flow; task properties are kept as extra fields"""
    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    description: str = ""

    @property
    def properties(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class FlowConfig(BaseModel):
    """A flow file: variables plus an ordered list of task definitions"""
    id: str = "flow"
    description: str = ""
    vars: Dict[str, Any] = Field(default_factory=dict)
    tasks: List[TaskDefinition] = Field(default_factory=list)


def build_task(definition: TaskDefinition) -> Any:
    """
    Instantiate the task class a definition names.

    Raises:
        TaskDefinitionError: Unknown type or unknown property
    """
    metadata = get_task_metadata(definition.type)
    if metadata is None:
        raise TaskDefinitionError(
            f"Task '{definition.id}' has unknown type: {definition.type}"
        )

    connection_kwargs: Dict[str, Any] = {}
    task_kwargs: Dict[str, Any] = {}

    for key, value in definition.properties.items():
        if key in CONNECTION_FIELDS:
            connection_kwargs[CONNECTION_FIELDS[key]] = value
            continue

        field_name = to_snake_case(key)
        if field_name not in metadata.fields:
            raise TaskDefinitionError(
                f"Task '{definition.id}' ({metadata.type}) has unknown property '{key}'"
            )
        task_kwargs[field_name] = value

    task_class = metadata.task_class
    has_connection = any(f.name == "connection" for f in dataclasses.fields(task_class))
    if has_connection:
        task_kwargs["connection"] = TodoistConnection(**connection_kwargs)

    return task_class(**task_kwargs)


class FlowLoader:
    """
    Loads flows from YAML files or dictionaries.

    Example usage:
        loader = FlowLoader()
        flow = loader.load_from_file("flows/daily-review.yaml")
        tasks = [build_task(definition) for definition in flow.tasks]
    """

    def load_from_file(self, file_path: Union[str, Path]) -> FlowConfig:
        """
        Load a flow from a YAML file.

        Raises:
            FlowLoadError: If file cannot be read or parsed
            TaskDefinitionError: If a task definition is invalid
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FlowLoadError(f"Flow file not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise FlowLoadError(f"Invalid YAML in {file_path}: {e}")

        if not data:
            raise FlowLoadError(f"Flow file is empty: {file_path}")

        return self.load_from_dict(data, source=str(file_path))

    def load_from_dict(self, data: Dict[str, Any], source: str = "<dict>") -> FlowConfig:
        """Load a flow from parsed YAML data"""
        if not isinstance(data, dict):
            raise FlowLoadError(f"Flow in {source} must be a mapping")

        try:
            flow = FlowConfig.model_validate(data)
        except ValidationError as e:
            raise TaskDefinitionError(f"Invalid flow in {source}: {e}")

        seen = set()
        for definition in flow.tasks:
            if definition.id in seen:
                raise TaskDefinitionError(f"Duplicate task id '{definition.id}' in {source}")
            seen.add(definition.id)
            # Fail on unknown types/properties at load time, not mid-run
            build_task(definition)

        logger.info(f"Loaded flow '{flow.id}' with {len(flow.tasks)} tasks from {source}")
        return flow
