"""
Shared constants for the Todoist task plugins.

Centralizes the API location, endpoint paths and task type names so the
client, the shims and the registry agree on them.
"""

# ── Todoist REST API ──

DEFAULT_BASE_URL = "https://api.todoist.com/rest/v2"
BASE_URL_ENV = "TODOIST_API_BASE_URL"

PROJECTS_ENDPOINT = "/projects"
TASKS_ENDPOINT = "/tasks"

# Todoist priorities: 1 is normal, 4 is urgent
MIN_PRIORITY = 1
MAX_PRIORITY = 4

# ── Internal storage ──

STORAGE_SCHEME = "storage"
STORAGE_DIR_ENV = "TODOIST_STORAGE_DIR"
RECORD_FILE_SUFFIX = ".jsonl"

# Secrets stored by the host are base64-encoded under this prefix
SECRET_ENV_PREFIX = "SECRET_"

# ── Task types ──

TASK_TYPE_PREFIX = "todoist"
