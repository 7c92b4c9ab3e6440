from pathlib import Path
from typing import Union

from ..models.image import Image
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No recoloring logic, no HTTP."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def decode(self, raw_bytes: bytes) -> Image:
        """Decode raw comic bytes into an Image object."""
        return self.image_repository.decode(raw_bytes)

    def encode(self, image: Image, fmt: str = "PNG") -> bytes:
        return self.image_repository.encode(image, fmt)

    def save(self, image: Image, path: Union[str, Path]) -> Path:
        """
        Business-level method to write the wallpaper to *path*.
        """
        return self.image_repository.save(image, path)
