"""Shared fixtures: an in-memory bucket injected into the app and generated test images."""
from __future__ import annotations

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.main import app
from app.services.storage import InMemoryStorage, get_storage


@pytest.fixture
def memory_storage():
    return InMemoryStorage()


@pytest.fixture
def client(memory_storage):
    app.dependency_overrides[get_storage] = lambda: memory_storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_image():
    """Build encoded image bytes: left half red, right half blue."""

    def _make(size=(400, 300), fmt="PNG", mode="RGB"):
        width, height = size
        img = Image.new("RGB", size, (220, 20, 20))
        img.paste((20, 20, 220), (width // 2, 0, width, height))
        if mode != "RGB":
            img = img.convert(mode)
        buffer = io.BytesIO()
        img.save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture
def png_image(make_image):
    return make_image()


@pytest.fixture
def image_info():
    """Return ``(format, size)`` of encoded image bytes."""

    def _info(data: bytes):
        with Image.open(io.BytesIO(data)) as img:
            return img.format, img.size

    return _info
