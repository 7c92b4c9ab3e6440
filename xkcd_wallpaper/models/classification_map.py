from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass
class ClassificationMap:
    """
    Per-pixel "background-ness", parallel to the source Image.

    0.0 = pure line art, 1.0 = pure background, in between = anti-aliased edge.
    """
    values: np.ndarray # Shape (H, W), dtype float32, range [0, 1].

    def __post_init__(self):
        self.values = np.clip(np.asarray(self.values, dtype=np.float32), 0.0, 1.0)
        self.values.setflags(write=False)

    @property
    def shape(self):
        return self.values.shape
