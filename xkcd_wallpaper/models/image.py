from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass
class Image:
    """
    Simple data object: RGBA pixels.
    Stages never write into `pixels`; every transformation returns a new Image.
    """
    pixels: np.ndarray # Shape (H, W, 4), dtype uint8, RGBA order.

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) RGBA pixels, got shape {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise ValueError("Image must be at least 1x1")

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]
