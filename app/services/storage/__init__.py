from __future__ import annotations

from .base import StorageBackend
from .gcs import GCSStorage
from .memory import InMemoryStorage
from .registry import get_storage

__all__ = [
    "StorageBackend",
    "GCSStorage",
    "InMemoryStorage",
    "get_storage",
]
