from __future__ import annotations

import logging

from fastapi import FastAPI

from app.config import get_settings
from app.handlers import image_handler

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Image Variant CDN")


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


# Catch-all image route, registered last so it does not shadow /healthz
app.include_router(image_handler.router)
