"""Process-local object store for development and tests."""
from __future__ import annotations

import logging
import threading
from typing import Dict, Tuple

from app.services.errors import StorageFailure

from .base import StorageBackend

logger = logging.getLogger(__name__)


class InMemoryStorage(StorageBackend):
    name = "memory"

    def __init__(self) -> None:
        self._objects: Dict[Tuple[str, str], Tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def exists(self, container_id: str, name: str) -> bool:
        with self._lock:
            return (container_id, name) in self._objects

    def read(self, container_id: str, name: str) -> bytes:
        with self._lock:
            stored = self._objects.get((container_id, name))
        if stored is None:
            raise StorageFailure("read", container_id, name, "No such object")
        return stored[0]

    def write(self, container_id: str, name: str, data: bytes, content_type: str) -> None:
        with self._lock:
            self._objects[(container_id, name)] = (data, content_type)
        logger.debug("Stored %d bytes at %s/%s (%s)", len(data), container_id, name, content_type)

    def content_type(self, container_id: str, name: str) -> str | None:
        with self._lock:
            stored = self._objects.get((container_id, name))
        return stored[1] if stored else None
