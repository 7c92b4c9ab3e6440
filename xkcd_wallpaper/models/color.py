from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import re

from .errors import InvalidColor

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class Color:
    """
    Opaque RGB color. Parsed once from user input, read-only afterwards.
    """
    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise InvalidColor(f"Channel value {channel} outside [0, 255]")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse "#RRGGBB" (the leading '#' is optional)."""
        match = _HEX_RE.match(value.strip()) if value else None
        if match is None:
            raise InvalidColor(f"Hex colour must be 6 hex digits (e.g. #1e90ff), got {value!r}")
        v = int(match.group(1), 16)
        return cls((v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF)

    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def rgba(self) -> Tuple[int, int, int, int]:
        return self.r, self.g, self.b, 255

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
