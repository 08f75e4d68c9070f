from __future__ import annotations

from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Abstract interface for the object store holding original and derived images.

    Objects are addressed by a container (bucket) and a name inside it.
    Implementations raise ``StorageFailure`` for any failed operation.
    """

    name: str = "abstract"

    @abstractmethod
    def exists(self, container_id: str, name: str) -> bool:
        """Return whether *name* exists in *container_id*."""

    @abstractmethod
    def read(self, container_id: str, name: str) -> bytes:
        """Return the stored bytes of *name*; a missing object is a failure."""

    @abstractmethod
    def write(self, container_id: str, name: str, data: bytes, content_type: str) -> None:
        """Store *data* under *name*, replacing any existing object."""
