"""Render image variants with Pillow.

Every output is WebP. When a target size is requested the image is scaled
with "cover" semantics: it fills the requested box, keeps its aspect ratio and
the overflowing edge is cropped around the centre. Output is deterministic for
a given input so cached variants never need re-deriving.
"""
from __future__ import annotations

import io
import logging
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from app.config import get_settings
from app.services.errors import ProcessingFailure

logger = logging.getLogger(__name__)
settings = get_settings()

OUTPUT_CONTENT_TYPE = "image/webp"
_OUTPUT_FORMAT = "WEBP"
_RESAMPLE = Image.Resampling.LANCZOS


def materialize(data: bytes, width: int | None = None, height: int | None = None) -> bytes:
    """Decode *data*, optionally resize it, and encode it as WebP.

    Parameters
    ----------
    data : bytes
        Raw bytes of the source image in any format Pillow can read.
    width, height : int | None
        Target size. ``None`` or ``0`` means the dimension was not requested.
        With both given the output is exactly ``width x height``; with one
        given the other follows the source aspect ratio. Either one above
        ``settings.max_dimension`` is refused before anything is decoded.
    """

    _check_bounds(width, height)
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            frame = _normalise_mode(img)
            if not width and not height:
                logger.debug("No width or height provided, converting to WebP.")
            else:
                logger.debug("Resizing %sx%s -> width=%s height=%s", *frame.size, width, height)
                frame = _resize_cover(frame, width or None, height or None)
            return _encode(frame)
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ProcessingFailure(f"Could not process image: {exc}") from exc


# ------------------------------------------------------------------
# Helper functions
# ------------------------------------------------------------------

def _check_bounds(width: int | None, height: int | None) -> None:
    limit = settings.max_dimension
    for value in (width, height):
        if value and value > limit:
            raise ProcessingFailure(f"Requested size {width}x{height} exceeds the {limit}px limit")


def _normalise_mode(img: Image.Image) -> Image.Image:
    """Return a copy of the first frame in a mode WebP can store."""

    if img.mode in ("RGB", "RGBA"):
        return img.copy()
    has_alpha = "A" in img.getbands() or "transparency" in img.info
    return img.convert("RGBA" if has_alpha else "RGB")


def _resize_cover(img: Image.Image, width: int | None, height: int | None) -> Image.Image:
    if width and height:
        return ImageOps.fit(img, (width, height), method=_RESAMPLE, centering=(0.5, 0.5))
    size = _scaled_size(img.size, width, height)
    _check_bounds(*size)
    return img.resize(size, resample=_RESAMPLE)


def _scaled_size(size: Tuple[int, int], width: int | None, height: int | None) -> Tuple[int, int]:
    """Size that matches the one requested dimension and keeps the aspect ratio."""

    src_w, src_h = size
    if width:
        return width, max(1, round(src_h * width / src_w))
    return max(1, round(src_w * height / src_h)), height


def _encode(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(
        buffer,
        format=_OUTPUT_FORMAT,
        quality=settings.webp_quality,
        method=settings.webp_method,
    )
    return buffer.getvalue()
