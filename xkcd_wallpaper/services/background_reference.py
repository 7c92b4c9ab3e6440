"""
Strategies that decide which color counts as "the comic's background".

The classifier only needs one reference color per image; swapping the
strategy lets a caller bypass the border heuristic with an explicit color.
"""
from abc import ABC, abstractmethod
import logging

import numpy as np

from ..models.color import Color
from ..models.image import Image

logger = logging.getLogger(__name__)


class BackgroundReference(ABC):
    @abstractmethod
    def reference_color(self, image: Image) -> Color:
        ...


class BorderSampleReference(BackgroundReference):
    """
    Most frequent color on the outermost ring of pixels.

    Comics are drawn on a uniform light background with no alpha guarantee,
    so the border is almost always background. Ties go to the
    lexicographically smallest (r, g, b).
    """

    @staticmethod
    def border_pixels(rgb: np.ndarray) -> np.ndarray:
        """(N, 3) array with every border pixel exactly once."""
        h, w = rgb.shape[:2]
        if h <= 2 or w <= 2:
            return rgb.reshape(-1, 3)
        return np.concatenate([
            rgb[0, :],
            rgb[-1, :],
            rgb[1:-1, 0],
            rgb[1:-1, -1],
        ])

    def reference_color(self, image: Image) -> Color:
        ring = self.border_pixels(image.pixels[:, :, :3])
        colors, counts = np.unique(ring, axis=0, return_counts=True)
        r, g, b = (int(c) for c in colors[int(np.argmax(counts))])
        color = Color(r, g, b)
        logger.debug(f"border reference color {color.to_hex()} "
                     f"({counts.max()}/{len(ring)} border pixels)")
        return color


class FixedReference(BackgroundReference):
    """Always answers with the same, explicitly chosen color."""

    def __init__(self, color: Color):
        self.color = color

    def reference_color(self, image: Image) -> Color:
        return self.color
