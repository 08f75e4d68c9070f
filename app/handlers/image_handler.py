"""Image CDN endpoint: ``GET /{bucket}/{file}``."""
from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from app.config import get_settings
from app.models import ImageRequest
from app.services.errors import ImageCDNError, InvalidRequest
from app.services.identifier import parse_request_path, split_request_path
from app.services.materializer import OUTPUT_CONTENT_TYPE
from app.services.resolver import VariantResolver
from app.services.storage import StorageBackend, get_storage

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _raw_target(request: Request) -> str:
    """Return the request path still percent-encoded, as sent by the client."""

    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1")
    return request.url.path


def _describe(target: ImageRequest) -> str:
    return f"bucket={target.container_id} file={target.variant_id} width={target.width} height={target.height}"


def _unavailable(target: ImageRequest) -> PlainTextResponse:
    return PlainTextResponse(
        f"Image not available: {target.container_id}, file: {target.variant_id}, "
        f"width: {target.width}, height: {target.height}",
        status_code=500,
    )


# ---------------------------------------------------------------------------
# GET image
# ---------------------------------------------------------------------------


@router.get("/{path:path}")
def serve_image(
    request: Request,
    background_tasks: BackgroundTasks,
    storage: StorageBackend = Depends(get_storage),
):
    raw_target = _raw_target(request)
    container_id, variant_id = split_request_path(raw_target)
    target = ImageRequest(container_id=container_id, variant_id=variant_id)

    try:
        target = parse_request_path(raw_target)
        logger.info(
            "Request received for bucket: %s, file: %s, width: %s, height: %s",
            target.container_id,
            target.variant_id,
            target.width,
            target.height,
        )
        resolved = VariantResolver(storage).resolve(target.container_id, target.variant_id)
    except InvalidRequest as exc:
        return PlainTextResponse(str(exc), status_code=400)
    except ImageCDNError as exc:
        logger.error("Image not available: %s (%s)", exc, _describe(target))
        return _unavailable(target)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Unexpected failure serving image (%s): %s", _describe(target), exc)
        return _unavailable(target)

    # Background tasks run once the response has been sent
    if resolved.is_new:
        background_tasks.add_task(store_variant, storage, target, resolved.content)

    return Response(
        content=resolved.content,
        media_type=OUTPUT_CONTENT_TYPE,
        headers={"Cache-Control": f"public, max-age={settings.cache_max_age}"},
    )


def store_variant(storage: StorageBackend, target: ImageRequest, content: bytes) -> None:
    try:
        storage.write(target.container_id, target.variant_id, content, OUTPUT_CONTENT_TYPE)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Saving resized image failed (%s): %s", _describe(target), exc)
        return
    logger.info("Resized image saved back as %s", target.variant_id)
