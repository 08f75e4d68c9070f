#!/usr/bin/env python
"""Resolve a single image variant from storage and write it to a local file."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from app.handlers.image_handler import store_variant
from app.services.errors import ImageCDNError
from app.services.identifier import parse_request_path
from app.services.resolver import VariantResolver
from app.services.storage import get_storage


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render an image variant, e.g. my-bucket/photos/cat_w320_h180.webp")
    parser.add_argument("path", help="<bucket>/<file name with optional _w<N>/_h<N> tokens>")
    parser.add_argument("--output", "-o", type=Path, required=True, help="Local file to write the WebP bytes to")
    parser.add_argument("--save", action="store_true", help="Also store a newly derived variant back in the bucket")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    storage = get_storage()
    target = parse_request_path(args.path)
    try:
        resolved = VariantResolver(storage).resolve(target.container_id, target.variant_id)
    except ImageCDNError as exc:
        print(f"Image not available: {exc}", file=sys.stderr)
        return 1

    args.output.write_bytes(resolved.content)
    print(f"Wrote {len(resolved.content)} bytes to {args.output} (new variant: {resolved.is_new})")

    if resolved.is_new and args.save:
        store_variant(storage, target, resolved.content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
