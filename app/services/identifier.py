"""Request path parsing for image variants.

Paths have the shape ``/{container}/{variant}`` where *variant* may contain
further ``/`` separators. A variant name asks for a derived size by embedding
dimension tokens, e.g.::

    photos/cat_w100_h200.webp   -> width=100, height=200
    photos/cat_h200_w100.webp   -> width=100, height=200
    photos/cat_w150.webp        -> width=150
    photos/cat_h150.webp        -> height=150

The base image of any variant is the same name with every ``_w<N>`` and
``_h<N>`` token removed (``photos/cat.webp`` above).
"""
from __future__ import annotations

import logging
import re
from typing import Tuple
from urllib.parse import unquote

from app.models import ImageRequest

logger = logging.getLogger(__name__)

# Tried in order; the first pattern found anywhere in the name wins.
_DIMENSION_PATTERNS: Tuple[Tuple[re.Pattern[str], Tuple[str, ...]], ...] = (
    (re.compile(r"w(\d+)_h(\d+)"), ("width", "height")),
    (re.compile(r"h(\d+)_w(\d+)"), ("height", "width")),
    (re.compile(r"w(\d+)"), ("width",)),
    (re.compile(r"h(\d+)"), ("height",)),
)

_DIMENSION_TOKEN_RE = re.compile(r"_h\d+|_w\d+")


def extract_dimensions(name: str) -> Tuple[int | None, int | None]:
    """Return ``(width, height)`` encoded in *name*; missing values are ``None``."""

    for pattern, fields in _DIMENSION_PATTERNS:
        match = pattern.search(name)
        if match is None:
            continue
        found = {field: int(value) for field, value in zip(fields, match.groups())}
        return found.get("width"), found.get("height")
    return None, None


def strip_dimensions(name: str) -> str:
    """Remove every ``_w<N>`` / ``_h<N>`` token from *name*."""

    return _DIMENSION_TOKEN_RE.sub("", name)


def split_request_path(path: str) -> Tuple[str, str]:
    """Return ``(container_id, variant_id)`` for a percent-encoded request target.

    Only a literal ``?`` starts the query string, and only a literal ``/``
    separates segments; each segment is unquoted after splitting, so ``%3F``
    and ``%2F`` stay part of the object name.
    """

    path_without_query = path.split("?", 1)[0]
    segments = [unquote(segment) for segment in path_without_query.split("/") if segment]
    container_id = segments[0] if segments else ""
    variant_id = "/".join(segments[1:])
    return container_id, variant_id


def parse_request_path(path: str) -> ImageRequest:
    """Split an inbound path into container, variant and requested dimensions.

    The query string is ignored. Missing segments come back as empty strings;
    rejecting them is up to the caller. A dimension too long to convert to an
    integer raises ``ValueError``.
    """

    logger.info("Getting request params for: %s", path)
    container_id, variant_id = split_request_path(path)
    width, height = extract_dimensions(variant_id)
    return ImageRequest(container_id=container_id, variant_id=variant_id, width=width, height=height)
