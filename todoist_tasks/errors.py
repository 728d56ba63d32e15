"""
Todoist Tasks Errors - Exception hierarchy shared by the client, the run
context and the task shims.

- ConfigurationError: a task is misconfigured (raised before any network call)
- TodoistApiError: Todoist answered with status >= 400
- TodoistTransportError: the request never got a response
- MalformedResponseError: success status but the body is unusable
- TaskDefinitionError / FlowLoadError: YAML task definitions could not be loaded
- StorageError: an internal storage URI cannot be resolved
"""

from typing import Optional


class TodoistPluginError(Exception):
    """Base class for every error raised by this package"""
    pass


class ConfigurationError(TodoistPluginError):
    """Raised when a required field is missing or a value cannot be rendered"""
    pass


class TodoistApiError(TodoistPluginError):
    """
    Raised when the Todoist API responds with a status code >= 400.

    The raw response body is kept as-is; it is never parsed as a success payload.
    """

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed: {status_code} - {body}")


class TodoistTransportError(TodoistPluginError):
    """Raised on connection failures, timeouts and other network-level errors"""
    pass


class MalformedResponseError(TodoistPluginError):
    """Raised when a successful response is missing data the task depends on"""

    def __init__(self, message: str, body: Optional[str] = None):
        self.body = body
        super().__init__(message)


class TaskDefinitionError(TodoistPluginError):
    """Raised when a task definition names an unknown type or field"""
    pass


class FlowLoadError(TodoistPluginError):
    """Raised when a flow file cannot be read or parsed"""
    pass


class StorageError(TodoistPluginError):
    """Raised when a storage URI cannot be resolved"""
    pass
