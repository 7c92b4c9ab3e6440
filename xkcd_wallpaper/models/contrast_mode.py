from enum import Enum


class ContrastMode(Enum):
    """
    How line art is tone-mapped against the new background.

    DARK  -> drawings stay dark (comic is already dark-on-light).
    LIGHT -> drawings are inverted so they show up on a dark background.
    """
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, value: str) -> "ContrastMode":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Foreground must be 'light' or 'dark', got {value!r}") from None
