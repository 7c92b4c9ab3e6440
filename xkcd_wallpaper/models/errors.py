class WallpaperError(Exception):
    """Base class for every error raised while building a wallpaper."""


class DecodeError(WallpaperError):
    """Input bytes are not a valid/recognized raster image."""


class InvalidDimensions(WallpaperError):
    """Requested canvas width or height is not positive."""


class InvalidColor(WallpaperError, ValueError):
    """Malformed hex color string."""


class FetchError(WallpaperError):
    """Comic metadata or image could not be retrieved."""


class SaveError(WallpaperError):
    """Wallpaper could not be encoded or written to disk."""
