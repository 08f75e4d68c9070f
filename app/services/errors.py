"""Exceptions raised while resolving and rendering image variants.

The HTTP layer maps ``InvalidRequest`` to a 400 and every other
``ImageCDNError`` to a 500.
"""
from __future__ import annotations


class ImageCDNError(Exception):
    """Base class for all variant resolution failures."""


class InvalidRequest(ImageCDNError):
    """Raised when the container or variant identifier is missing."""


class SourceNotFound(ImageCDNError):
    """Raised when a variant is absent and carries no dimension tokens to fall back on."""

    def __init__(self, container_id: str, variant_id: str):
        super().__init__(f"No object or base image for {container_id}/{variant_id}")
        self.container_id = container_id
        self.variant_id = variant_id


class StorageFailure(ImageCDNError):
    """Raised when the object store fails an existence check, read or write."""

    def __init__(self, operation: str, container_id: str, name: str, message: str):
        super().__init__(f"Storage {operation} failed for {container_id}/{name}: {message}")
        self.operation = operation
        self.container_id = container_id
        self.name = name


class ProcessingFailure(ImageCDNError):
    """Raised when image bytes cannot be decoded, resized or encoded."""
