"""Google Cloud Storage backend.

Each container maps to a bucket and each image name to a blob key, so a
request for ``/{bucket}/{path/to/image.webp}`` reads
``gs://{bucket}/path/to/image.webp``. Client errors are re-raised as
``StorageFailure``; retries are left to the client library's own defaults.
"""
from __future__ import annotations

import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage

from app.services.errors import StorageFailure

from .base import StorageBackend

logger = logging.getLogger(__name__)


class GCSStorage(StorageBackend):  # pylint: disable=too-few-public-methods
    """Wrapper around Google Cloud Storage existence checks, downloads and uploads."""

    name = "gcs"

    def __init__(self, *, project_id: Optional[str] = None, client: storage.Client | None = None) -> None:
        self._client = client or storage.Client(project=project_id)

    def _blob(self, container_id: str, name: str) -> storage.Blob:
        return self._client.bucket(container_id).blob(name)

    def exists(self, container_id: str, name: str) -> bool:
        try:
            return self._blob(container_id, name).exists()
        except GoogleAPIError as exc:
            raise StorageFailure("exists", container_id, name, str(exc)) from exc

    def read(self, container_id: str, name: str) -> bytes:
        logger.info("Attempting to download the image %s from bucket %s from storage...", name, container_id)
        try:
            data = self._blob(container_id, name).download_as_bytes()
        except GoogleAPIError as exc:
            raise StorageFailure("read", container_id, name, str(exc)) from exc
        logger.debug("Downloaded %d bytes from gs://%s/%s", len(data), container_id, name)
        return data

    def write(self, container_id: str, name: str, data: bytes, content_type: str) -> None:
        blob = self._blob(container_id, name)
        try:
            blob.upload_from_string(data, content_type=content_type)
        except GoogleAPIError as exc:
            raise StorageFailure("write", container_id, name, str(exc)) from exc
        logger.debug("Uploaded image to gs://%s/%s", container_id, name)
