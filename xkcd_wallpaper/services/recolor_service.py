from __future__ import annotations
import logging
import os

import numpy as np
from dotenv import load_dotenv

from ..models.classification_map import ClassificationMap
from ..models.color import Color
from ..models.contrast_mode import ContrastMode
from ..models.image import Image

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class BackgroundRecolorer:
    """
    Business‑level helper for background replacement.

    • Tone-maps pure line art for the requested ContrastMode.
    • Blends every pixel toward the target color, weighted by background-ness.
    • Returns a **new**, fully opaque Image of the same size.
    """

    def __init__(self, line_art_threshold: float | None = None):
        self.line_art_threshold = (line_art_threshold if line_art_threshold is not None
                                   else float(os.getenv("LINE_ART_THRESHOLD", "0.1")))

    @staticmethod
    def _compose(
            fg: np.ndarray,
            bg_weight: np.ndarray,
            target: Color,
    ) -> np.ndarray:
        """
        result = fg * (1 - bg) + target * bg, rounded back to uint8.
        """
        weight = bg_weight[:, :, None]
        tgt = np.asarray(target.rgb(), dtype=np.float32)
        out = fg.astype(np.float32) * (1.0 - weight) + tgt * weight
        return np.clip(np.rint(out), 0, 255).astype(np.uint8)

    def _tone_map(self, rgb: np.ndarray, bg: np.ndarray, mode: ContrastMode) -> np.ndarray:
        """
        LIGHT inverts pure line art so dark drawings stay visible on a dark
        background. DARK keeps the drawing as it is.
        """
        if mode is ContrastMode.DARK:
            return rgb
        line_art = bg < self.line_art_threshold
        toned = rgb.copy()
        toned[line_art] = 255 - rgb[line_art]
        logger.debug(f"inverted {int(line_art.sum())} line-art pixels")
        return toned

    # --------------------------------------------------------------
    def recolor(
            self,
            source: Image,
            classification: ClassificationMap,
            target: Color,
            mode: ContrastMode,
    ) -> Image:
        if classification.shape != source.pixels.shape[:2]:
            raise ValueError(
                f"Classification map {classification.shape} does not match image {source.pixels.shape[:2]}"
            )

        logger.info(f"replacing background pixels with {target.to_hex()} ({mode.value} foreground)")
        rgb = self._tone_map(source.pixels[:, :, :3], classification.values, mode)
        blended = self._compose(rgb, classification.values, target)

        alpha = np.full(blended.shape[:2] + (1,), 255, dtype=np.uint8)
        return Image(pixels=np.concatenate([blended, alpha], axis=2))
