"""Turn xkcd comics into desktop wallpapers."""

__version__ = "1.0.0"
