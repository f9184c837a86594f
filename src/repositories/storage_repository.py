"""
Abstract base class for storage repositories.
Defines the contract for name-keyed file storage.
"""
from abc import ABC, abstractmethod
from typing import Optional


class StorageRepository(ABC):
    """Abstract repository interface for storing files by key."""

    @abstractmethod
    def put(self, key: str, content: bytes, content_type: Optional[str] = None) -> str:
        """Store content under key, replacing any previous content. Returns its location."""
        pass

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the content stored under key."""
        pass
