"""
Local Storage Adapter
=====================

Stores files under ``MEDIA_ROOT`` using Django's FileSystemStorage.
"""

import logging
from typing import BinaryIO, Optional

from django.core.files.base import File
from django.core.files.storage import FileSystemStorage

from .interface import StorageException, StorageFile, StorageInterface


logger = logging.getLogger(__name__)


class LocalStorageAdapter(StorageInterface):
    def __init__(self, backend: Optional[FileSystemStorage] = None):
        self.backend = backend or FileSystemStorage()

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        try:
            key = self.backend.save(path, File(file))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to store file at {path}: {e}")
            raise StorageException(f"Could not store file: {e}") from e

        size = self.backend.size(key)
        logger.info(f"Stored {key} ({size} bytes, {content_type})")
        return StorageFile(key=key, url=self.get_url(key), size=size, content_type=content_type)

    def delete(self, key: str) -> bool:
        if not self.backend.exists(key):
            return False
        self.backend.delete(key)
        logger.info(f"Deleted {key}")
        return True

    def get_url(self, key: str) -> str:
        return self.backend.url(key)

    def exists(self, key: str) -> bool:
        return self.backend.exists(key)
