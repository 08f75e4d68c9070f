from .image_request import ImageRequest

__all__ = [
    "ImageRequest",
]
