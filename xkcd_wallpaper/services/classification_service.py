# services/classification_service.py
from __future__ import annotations
import logging
import os

import numpy as np
from dotenv import load_dotenv

from ..models.classification_map import ClassificationMap
from ..models.color import Color
from ..models.image import Image
from .background_reference import BackgroundReference, BorderSampleReference

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ColorClassifier:
    """
    Labels every pixel as background, line art, or anti-aliased edge.

    • Finds the reference background color through a BackgroundReference.
    • Measures a luminance-weighted RGB distance to that color.
    • Maps the distance to background-ness with a linear ramp between
      bg_threshold (→ 1.0) and fg_threshold (→ 0.0).
    • Images with a real alpha channel are classified from alpha instead.
    """

    # Rec. 601 luma weights; they sum to 1 so a uniform per-channel
    # difference d gives distance d (range 0-255).
    _CHANNEL_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)

    def __init__(
            self,
            reference: BackgroundReference | None = None,
            bg_threshold: float | None = None,
            fg_threshold: float | None = None,
            alpha_variation_min: int | None = None,
    ):
        self.reference = reference or BorderSampleReference()
        self.bg_threshold = (bg_threshold if bg_threshold is not None
                             else float(os.getenv("CLASSIFIER_BG_THRESHOLD", "24")))
        self.fg_threshold = (fg_threshold if fg_threshold is not None
                             else float(os.getenv("CLASSIFIER_FG_THRESHOLD", "96")))
        self.alpha_variation_min = (alpha_variation_min if alpha_variation_min is not None
                                    else int(os.getenv("ALPHA_VARIATION_MIN", "8")))

        if not 0 <= self.bg_threshold < self.fg_threshold:
            raise ValueError(
                f"Need 0 <= bg_threshold < fg_threshold, got {self.bg_threshold} / {self.fg_threshold}"
            )

    # ---------- private helpers ----------
    @classmethod
    def color_distance(cls, rgb: np.ndarray, reference: Color) -> np.ndarray:
        """
        Args
        ----
        rgb : np.ndarray  (H, W, 3)  uint8

        Returns
        -------
        distance : np.ndarray  (H, W)  float32  [0, 255]
        """
        diff = rgb.astype(np.float32) - np.asarray(reference.rgb(), dtype=np.float32)
        return np.sqrt((diff * diff) @ cls._CHANNEL_WEIGHTS)

    def _distance_to_backgroundness(self, distance: np.ndarray) -> np.ndarray:
        ramp = (self.fg_threshold - distance) / (self.fg_threshold - self.bg_threshold)
        return np.clip(ramp, 0.0, 1.0).astype(np.float32)

    def has_alpha_variation(self, image: Image) -> bool:
        alpha = image.pixels[:, :, 3]
        return int(alpha.max()) - int(alpha.min()) > self.alpha_variation_min

    # ---------- public API ----------
    def classify(self, source: Image) -> ClassificationMap:
        if self.has_alpha_variation(source):
            logger.info("classifying pixels from the alpha channel")
            alpha = source.pixels[:, :, 3].astype(np.float32) / 255.0
            return ClassificationMap(1.0 - alpha)

        reference = self.reference.reference_color(source)
        logger.info(f"classifying pixels against background {reference.to_hex()}")
        distance = self.color_distance(source.pixels[:, :, :3], reference)
        return ClassificationMap(self._distance_to_backgroundness(distance))
