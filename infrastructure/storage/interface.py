"""
Storage Interface
=================

Contract every file storage backend implements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO


@dataclass
class StorageFile:
    """
    A stored file and its metadata.

    Attributes:
        key: Path of the file inside the storage backend
        url: URL clients use to fetch the file
        size: File size in bytes
        content_type: MIME type of the file
    """

    key: str
    url: str
    size: int
    content_type: str


class StorageInterface(ABC):
    """Abstract interface for file storage operations."""

    @abstractmethod
    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        """
        Store a file.

        Args:
            file: Binary file object to store
            path: Desired destination path; backends may alter it to stay unique
            content_type: MIME type of the file

        Returns:
            StorageFile describing the stored object

        Raises:
            StorageException: If the file cannot be written
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a file. Returns False if it did not exist."""

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Return the URL clients use to fetch ``key``."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether ``key`` is stored."""


class StorageException(Exception):
    """Base exception for storage operations."""
