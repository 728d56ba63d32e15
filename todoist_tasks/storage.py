"""
Internal Storage - durable home for files produced by tasks

Tasks hand a finished local file to the storage and get back a URI they can
put in their output. Only the URI travels between tasks; readers resolve it
back to a file with get_file().
"""

import logging
import shutil
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

from .constants import STORAGE_SCHEME
from .errors import StorageError

logger = logging.getLogger(__name__)


class InternalStorage(ABC):
    """
    Abstract base class for internal storage backends.

    All backends must implement:
    - put_file()
    - get_file()
    """

    @abstractmethod
    def put_file(self, path: Union[str, Path], prefix: Optional[str] = None) -> str:
        """
        Copy a closed local file into storage.

        Args:
            path: Local file to store
            prefix: Optional namespace (e.g. the task id)

        Returns:
            URI of the stored file ("storage:///...")
        """
        pass

    @abstractmethod
    def get_file(self, uri: str) -> Path:
        """Resolve a URI returned by put_file() to a readable local path"""
        pass


class LocalInternalStorage(InternalStorage):
    """
    Internal storage backed by a local directory.

    Example:
        storage = LocalInternalStorage("/var/lib/todoist-tasks")
        uri = storage.put_file("/tmp/tasks.jsonl", prefix="list_tasks")
        path = storage.get_file(uri)
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def put_file(self, path: Union[str, Path], prefix: Optional[str] = None) -> str:
        source = Path(path)
        # Unique folder per stored file so repeated runs never overwrite
        relative = Path(prefix or "files") / uuid.uuid4().hex / source.name
        target = self.root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)

        uri = f"{STORAGE_SCHEME}:///{relative.as_posix()}"
        logger.debug(f"Stored {source} as {uri}")
        return uri

    def get_file(self, uri: str) -> Path:
        parsed = urlparse(uri)
        if parsed.scheme != STORAGE_SCHEME:
            raise StorageError(f"Not an internal storage URI: {uri}")

        path = (self.root / parsed.path.lstrip("/")).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError(f"URI escapes the storage root: {uri}")
        if not path.is_file():
            raise StorageError(f"No stored file for {uri}")
        return path
