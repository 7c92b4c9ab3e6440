import logging
from io import BytesIO
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image as PILImage, UnidentifiedImageError

from ..models.errors import DecodeError, SaveError
from ..models.image import Image

logger = logging.getLogger(__name__)

# Pillow keeps 16-bit grayscale in these modes; convert() would clamp, not scale.
_WIDE_GRAY_MODES = {"I", "I;16", "I;16L", "I;16B", "I;16N"}


class ImageRepository:
    """
    Handles codec work and file I/O for Image entities.
    No pixel logic outside of format conversion lives here.
    """

    @staticmethod
    def _to_rgba(pil_img: PILImage.Image) -> PILImage.Image:
        if pil_img.mode in _WIDE_GRAY_MODES:
            wide = np.asarray(pil_img).astype(np.int64)
            gray = np.clip(wide >> 8, 0, 255).astype(np.uint8)
            return PILImage.fromarray(gray).convert("RGBA")
        return pil_img.convert("RGBA")

    def decode(self, raw_bytes: bytes) -> Image:
        """
        Decode PNG/JPEG/GIF/... bytes into an RGBA Image.
        Only the first frame of animated formats is used.
        """
        if not raw_bytes:
            raise DecodeError("No image data received")
        try:
            with PILImage.open(BytesIO(raw_bytes)) as pil_img:
                pil_img.load()
                source_mode = pil_img.mode
                rgba = self._to_rgba(pil_img)
        except (UnidentifiedImageError, PILImage.DecompressionBombError,
                OSError, EOFError, ValueError) as err:
            raise DecodeError(f"Cannot decode image: {err}") from err

        arr = np.asarray(rgba, dtype=np.uint8).copy()
        logger.debug(f"Decoded {rgba.width}x{rgba.height} image (source mode {source_mode})")
        return Image(pixels=arr)

    @staticmethod
    def to_pil(image: Image) -> PILImage.Image:
        np_img = image.pixels
        if not np_img.flags['C_CONTIGUOUS']:
            np_img = np.ascontiguousarray(np_img)
        return PILImage.fromarray(np_img)

    def encode(self, image: Image, fmt: str = "PNG") -> bytes:
        """Encode to bytes. Wallpapers are opaque, so alpha is dropped."""
        buffer = BytesIO()
        try:
            self.to_pil(image).convert("RGB").save(buffer, format=fmt)
        except (OSError, ValueError, KeyError) as err:
            raise SaveError(f"Cannot encode image as {fmt}: {err}") from err
        return buffer.getvalue()

    def save(self, image: Image, path: Union[str, Path]) -> Path:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self.to_pil(image).convert("RGB").save(target)
        except (OSError, ValueError, KeyError) as err:
            raise SaveError(f"Cannot write {target}: {err}") from err

        logger.info(f"Saved {image.width}x{image.height} image to {target}")
        return target
