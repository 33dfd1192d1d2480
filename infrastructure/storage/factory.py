"""
Storage Factory
===============

Builds the storage backend selected by ``INFRASTRUCTURE["STORAGE_BACKEND"]``.
"""

import logging
from typing import Optional

from django.conf import settings

from .interface import StorageInterface
from .local_adapter import LocalStorageAdapter


logger = logging.getLogger(__name__)


class StorageFactory:
    BACKENDS = {
        "local": LocalStorageAdapter,
    }

    @classmethod
    def create(cls, backend: Optional[str] = None) -> StorageInterface:
        backend = backend or getattr(settings, "INFRASTRUCTURE", {}).get("STORAGE_BACKEND", "local")
        try:
            adapter_class = cls.BACKENDS[backend]
        except KeyError:
            raise ValueError(f"Unknown storage backend: {backend}")

        logger.info(f"Creating {backend} storage backend")
        return adapter_class()
