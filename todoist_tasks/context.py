"""
Run Context - everything a task needs from its host while it runs

Provides:
- Template rendering of configuration values ({{ vars.x }}, {{ secret('NAME') }})
- Typed coercion of rendered values (string, integer, boolean, enum, list)
- Secret lookup (explicit mapping, then environment)
- A working directory for temporary files
- Internal storage for files that outlive the task
- A logger named after the running task
- The httpx transport handed to TodoistClient

Supported template syntax:
- {{ vars.FIELD }} / {{ inputs.FIELD }} - dotted path into the context variables
- {{ outputs.TASK_ID.FIELD }} - output of a task that already ran
- {{ secret('NAME') }} - secret value

A string that is exactly one expression renders to the raw value, so lists
and numbers keep their type. Mixed strings are interpolated.
"""

import base64
import binascii
import copy
import logging
import os
import re
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

import httpx

from .constants import SECRET_ENV_PREFIX
from .errors import ConfigurationError
from .storage import InternalStorage, LocalInternalStorage

E = TypeVar("E", bound=Enum)

_MISSING = object()


def require(value: Any, field_name: str) -> Any:
    """Return value, or raise ConfigurationError if it is absent or blank"""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ConfigurationError(f"Missing required property '{field_name}'")
    return value


class RunContext:
    """
    Per-invocation context passed to every task's run().

    Example:
        context = RunContext(
            variables={"vars": {"project": "2203306141"}},
            secrets={"TODOIST_API_TOKEN": "0123abcd"},
        )
        token = context.render_string("{{ secret('TODOIST_API_TOKEN') }}")
        project_id = context.render_string("{{ vars.project }}")
    """

    # Pattern to match {{ expression }} syntax
    VARIABLE_PATTERN = re.compile(r"\{\{\s*((?:(?!\}\}).)+?)\s*\}\}")
    SECRET_PATTERN = re.compile(r"""^secret\(\s*['"]([\w.-]+)['"]\s*\)$""")
    PATH_PATTERN = re.compile(r"^\w+(?:\.\w+)*$")

    def __init__(
        self,
        variables: Optional[Dict[str, Any]] = None,
        secrets: Optional[Mapping[str, str]] = None,
        storage: Optional[InternalStorage] = None,
        working_dir: Optional[Union[str, Path]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        task_id: Optional[str] = None,
    ):
        self.variables: Dict[str, Any] = variables if variables is not None else {}
        self.secrets: Dict[str, str] = dict(secrets or {})
        self.transport = transport
        self.task_id = task_id
        self._working_dir = Path(working_dir) if working_dir else None
        self._storage = storage

    # ===== Collaborators =====

    @property
    def logger(self) -> logging.Logger:
        """Logger for the running task"""
        name = f"todoist_tasks.run.{self.task_id}" if self.task_id else "todoist_tasks.run"
        return logging.getLogger(name)

    @property
    def working_dir(self) -> Path:
        """Directory for temporary files, created on first use"""
        if self._working_dir is None:
            self._working_dir = Path(tempfile.mkdtemp(prefix="todoist-tasks-"))
        self._working_dir.mkdir(parents=True, exist_ok=True)
        return self._working_dir

    @property
    def storage(self) -> InternalStorage:
        """Internal storage; defaults to a folder inside the working directory"""
        if self._storage is None:
            self._storage = LocalInternalStorage(self.working_dir / "storage")
        return self._storage

    def create_temp_file(self, suffix: str = "") -> Path:
        """Create an empty file in the working directory and return its path"""
        fd, name = tempfile.mkstemp(suffix=suffix, dir=self.working_dir)
        os.close(fd)
        return Path(name)

    def for_task(self, task_id: str) -> "RunContext":
        """Context for one task of a run, sharing variables, secrets and storage"""
        return RunContext(
            variables=self.variables,
            secrets=self.secrets,
            storage=self.storage,
            working_dir=self.working_dir,
            transport=self.transport,
            task_id=task_id,
        )

    def add_output(self, task_id: str, output: Dict[str, Any]) -> None:
        """Expose a finished task's output to later templates as outputs.<task_id>"""
        self.variables.setdefault("outputs", {})[task_id] = output

    # ===== Rendering =====

    def render(self, value: Any) -> Any:
        """Render templates in a value; dicts and lists are rendered recursively"""
        if isinstance(value, str):
            return self._render_string(value)
        if isinstance(value, dict):
            return {key: self.render(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self.render(item) for item in value]
        return value

    def _render_string(self, value: str) -> Any:
        full_match = self.VARIABLE_PATTERN.fullmatch(value.strip())
        if full_match:
            return copy.deepcopy(self._evaluate(full_match.group(1)))

        def replace(match: re.Match) -> str:
            resolved = self._evaluate(match.group(1))
            return str(resolved)

        return self.VARIABLE_PATTERN.sub(replace, value)

    def _evaluate(self, expression: str) -> Any:
        secret_match = self.SECRET_PATTERN.match(expression)
        if secret_match:
            return self.secret(secret_match.group(1))

        if not self.PATH_PATTERN.match(expression):
            raise ConfigurationError(f"Unsupported expression: '{{{{ {expression} }}}}'")

        value = self._lookup(expression)
        if value is _MISSING or value is None:
            raise ConfigurationError(f"Unable to render '{{{{ {expression} }}}}': variable not found")
        return value

    def _lookup(self, path: str) -> Any:
        """Navigate the variables by dot-notation path"""
        current: Any = self.variables
        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
                current = current[int(part)]
            else:
                return _MISSING
        return current

    def secret(self, name: str) -> str:
        """
        Look up a secret.

        Order: explicit secrets mapping, SECRET_<NAME> (base64) in the
        environment, then <NAME> in the environment.
        """
        if name in self.secrets:
            return self.secrets[name]

        encoded = os.environ.get(f"{SECRET_ENV_PREFIX}{name}")
        if encoded is not None:
            try:
                return base64.b64decode(encoded, validate=True).decode("utf-8").strip()
            except (binascii.Error, UnicodeDecodeError) as e:
                raise ConfigurationError(f"Secret '{name}' is not valid base64") from e

        plain = os.environ.get(name)
        if plain is not None:
            return plain

        raise ConfigurationError(f"Cannot find secret '{name}'")

    # ===== Typed rendering =====

    def render_string(self, value: Any) -> Optional[str]:
        if value is None:
            return None
        rendered = self.render(value)
        if isinstance(rendered, (dict, list)):
            raise ConfigurationError(f"Expected a string, got {type(rendered).__name__}")
        return str(rendered)

    def render_integer(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        rendered = self.render(value)
        if isinstance(rendered, bool):
            raise ConfigurationError(f"Expected an integer, got boolean {rendered}")
        if isinstance(rendered, int):
            return rendered
        try:
            return int(str(rendered).strip())
        except ValueError:
            raise ConfigurationError(f"Expected an integer, got '{rendered}'")

    def render_boolean(self, value: Any) -> Optional[bool]:
        if value is None:
            return None
        rendered = self.render(value)
        if isinstance(rendered, bool):
            return rendered
        text = str(rendered).strip().lower()
        if text in ("true", "yes", "1"):
            return True
        if text in ("false", "no", "0"):
            return False
        raise ConfigurationError(f"Expected a boolean, got '{rendered}'")

    def render_enum(self, value: Any, enum_type: Type[E]) -> Optional[E]:
        if value is None:
            return None
        if isinstance(value, enum_type):
            return value
        rendered = str(self.render(value)).strip()
        try:
            return enum_type(rendered.upper())
        except ValueError:
            allowed = [member.value for member in enum_type]
            raise ConfigurationError(
                f"Invalid {enum_type.__name__}: '{rendered}'. Must be one of: {allowed}"
            )

    def render_list(self, value: Any) -> Optional[List[Any]]:
        if value is None:
            return None
        rendered = self.render(value)
        if not isinstance(rendered, list):
            raise ConfigurationError(f"Expected a list, got {type(rendered).__name__}")
        return rendered
