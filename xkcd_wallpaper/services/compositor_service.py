import logging
from typing import Tuple

import cv2
import numpy as np

from ..models.color import Color
from ..models.errors import InvalidDimensions
from ..models.image import Image

logger = logging.getLogger(__name__)


class CanvasCompositor:
    """
    Places an image, centered and never upscaled, on a solid canvas.
    """

    @staticmethod
    def validate_dimensions(canvas_width: int, canvas_height: int) -> None:
        if canvas_width <= 0 or canvas_height <= 0:
            raise InvalidDimensions(
                f"Canvas must be at least 1x1, got {canvas_width}x{canvas_height}"
            )

    @staticmethod
    def scale_factor(img_width: int, img_height: int, canvas_width: int, canvas_height: int) -> float:
        # Capped at 1.0: a small sharp comic beats a big blurry one.
        return min(canvas_width / img_width, canvas_height / img_height, 1.0)

    def placement(
            self,
            img_width: int,
            img_height: int,
            canvas_width: int,
            canvas_height: int,
    ) -> Tuple[int, int, int, int]:
        """
        Returns (scaled_width, scaled_height, offset_x, offset_y).
        Odd remainders end up on the right/bottom edge.
        """
        self.validate_dimensions(canvas_width, canvas_height)
        scale = self.scale_factor(img_width, img_height, canvas_width, canvas_height)

        scaled_w = min(canvas_width, max(1, round(img_width * scale)))
        scaled_h = min(canvas_height, max(1, round(img_height * scale)))

        offset_x = (canvas_width - scaled_w) // 2
        offset_y = (canvas_height - scaled_h) // 2
        return scaled_w, scaled_h, offset_x, offset_y

    @staticmethod
    def _resize(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
        if pixels.shape[1] == width and pixels.shape[0] == height:
            return pixels
        # INTER_AREA averages source pixels: no ringing around hard edges.
        return cv2.resize(pixels, (width, height), interpolation=cv2.INTER_AREA)

    @staticmethod
    def _compose(fg: np.ndarray, bg: np.ndarray) -> np.ndarray:
        """
        Alpha-blend RGBA *fg* over opaque RGBA *bg* (same shape).
        """
        alpha = fg[:, :, 3:4].astype("float32") / 255.0
        rgb = fg[:, :, :3].astype("float32") * alpha + bg[:, :, :3].astype("float32") * (1.0 - alpha)

        out = bg.copy()
        out[:, :, :3] = np.clip(np.rint(rgb), 0, 255).astype("uint8")
        return out

    # --------------------------------------------------------------
    def composite(self, image: Image, canvas_width: int, canvas_height: int, fill: Color) -> Image:
        scaled_w, scaled_h, offset_x, offset_y = self.placement(
            image.width, image.height, canvas_width, canvas_height
        )
        logger.info(
            f"placing {image.width}x{image.height} comic as {scaled_w}x{scaled_h} "
            f"at ({offset_x}, {offset_y}) on {canvas_width}x{canvas_height} canvas"
        )

        scaled = self._resize(image.pixels, scaled_w, scaled_h)

        canvas = np.empty((canvas_height, canvas_width, 4), dtype=np.uint8)
        canvas[:, :] = fill.rgba()

        region = canvas[offset_y:offset_y + scaled_h, offset_x:offset_x + scaled_w]
        canvas[offset_y:offset_y + scaled_h, offset_x:offset_x + scaled_w] = self._compose(scaled, region)
        return Image(pixels=canvas)
