from __future__ import annotations

from functools import lru_cache

from app.config import get_settings

from .base import StorageBackend
from .gcs import GCSStorage
from .memory import InMemoryStorage


@lru_cache()
def get_storage() -> StorageBackend:
    """Return the configured storage backend, created once per process.

    Also used as a FastAPI dependency so tests can swap in their own backend
    through ``app.dependency_overrides``.
    """

    settings = get_settings()
    backend = settings.storage_backend.lower()
    if backend == "gcs":
        return GCSStorage(project_id=settings.project_id)
    if backend == "memory":
        return InMemoryStorage()
    raise ValueError(f"Unsupported storage backend: {backend}")
