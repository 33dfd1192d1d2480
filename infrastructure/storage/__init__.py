"""
Storage Abstraction Layer
==========================

Unified interface for uploaded files (message images, profile pictures).
"""

from .factory import StorageFactory
from .interface import StorageException, StorageFile, StorageInterface
from .local_adapter import LocalStorageAdapter

__all__ = [
    "StorageInterface",
    "StorageFile",
    "StorageException",
    "LocalStorageAdapter",
    "StorageFactory",
]
