"""Resolve a requested image variant to the bytes that should be served.

A variant that already exists in storage is returned as stored. Otherwise
the base image is located by stripping the dimension tokens from the name,
rendered at the requested size and flagged as new so the caller can write it
back for the next request.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from app.services.errors import InvalidRequest, SourceNotFound
from app.services.identifier import extract_dimensions, strip_dimensions
from app.services.materializer import materialize
from app.services.storage import StorageBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedVariant:
    content: bytes
    is_new: bool  # True when the variant was derived and is not yet stored


class VariantResolver:  # pylint: disable=too-few-public-methods
    """Look up or derive image variants from a storage backend."""

    def __init__(self, storage: StorageBackend) -> None:
        self._storage = storage

    def resolve(self, container_id: str, variant_id: str) -> ResolvedVariant:
        if not container_id or not variant_id:
            raise InvalidRequest("Both bucket and file parameters are required.")

        is_new = not self._storage.exists(container_id, variant_id)
        logger.info("Variant %s/%s isNew=%s", container_id, variant_id, is_new)

        if not is_new:
            return ResolvedVariant(content=self._storage.read(container_id, variant_id), is_new=False)

        base_id = strip_dimensions(variant_id)
        if base_id == variant_id:
            raise SourceNotFound(container_id, variant_id)

        logger.info("Requested file name unavailable, deriving from %s", base_id)
        source = self._storage.read(container_id, base_id)
        width, height = extract_dimensions(variant_id)
        output = materialize(source, width, height)
        logger.info("Image processing completed for %s/%s", container_id, variant_id)
        return ResolvedVariant(content=output, is_new=True)
