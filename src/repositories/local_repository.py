"""
Local filesystem repository.
Stores files as flat files below a root directory, one file per key.
"""
import logging
import os
from typing import Optional
from src.core import config
from src.core.exceptions import NotFoundException, PersistenceException
from src.repositories.storage_repository import StorageRepository

logger = logging.getLogger(__name__)


class LocalStorageRepository(StorageRepository):
    """Repository for files kept on the local disk."""

    def __init__(self, root: Optional[str] = None):
        self.root = os.path.abspath(root or config.settings.storage_root)

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.root, key))
        if os.path.commonpath([self.root, path]) != self.root:
            raise NotFoundException(f"File '{key}' not found")
        return path

    def put(self, key: str, content: bytes, content_type: Optional[str] = None) -> str:
        """
        Write content to disk, creating parent directories as needed.

        Raises:
            PersistenceException: If the storage location is unwritable
        """
        path = self._path(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, 'wb') as f:
                f.write(content)
        except OSError as e:
            raise PersistenceException(f"Failed to write '{key}'", details=str(e)) from e

        logger.debug("Stored %d bytes at %s", len(content), path)
        return path

    def get(self, key: str) -> bytes:
        """
        Read content from disk.

        Raises:
            NotFoundException: If no file exists for key
            PersistenceException: If the file cannot be read
        """
        path = self._path(key)
        if not os.path.isfile(path):
            raise NotFoundException(f"File '{key}' not found")
        try:
            with open(path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise PersistenceException(f"Failed to read '{key}'", details=str(e)) from e
