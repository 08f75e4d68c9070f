from __future__ import annotations

from pydantic import BaseModel, Field


class ImageRequest(BaseModel):
    """Parsed form of an inbound image path."""

    container_id: str = ""
    variant_id: str = ""  # may contain "/" for folder-like names
    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)

    @property
    def is_complete(self) -> bool:
        return bool(self.container_id and self.variant_id)
