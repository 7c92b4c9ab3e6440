# pipeline/wallpaper_builder.py
from __future__ import annotations
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from ..models.color import Color
from ..models.contrast_mode import ContrastMode
from ..models.image import Image
from ..services.classification_service import ColorClassifier
from ..services.comic_service import ComicService
from ..services.compositor_service import CanvasCompositor
from ..services.image_service import ImageService
from ..services.recolor_service import BackgroundRecolorer

# ------------------------------------------------------------------
# env‑vars
load_dotenv()
OUTPUT_TEMPLATE = os.getenv("OUTPUT_TEMPLATE", "./%y-%m-%d_%t.png")

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
def build_wallpaper(
    raw_bytes: bytes,
    width: int,
    height: int,
    bg_color: Color,
    fg_mode: ContrastMode,
    *,
    classifier: ColorClassifier | None = None,
    recolorer: BackgroundRecolorer | None = None,
    compositor: CanvasCompositor | None = None,
    image_service: ImageService | None = None,
) -> Image:
    """
    Turn encoded comic bytes into a width x height wallpaper:
        • decode
        • classify background / line art / edges
        • recolor the background (and tone-map line art)
        • center on a canvas filled with the same color
    Raises InvalidDimensions before any pixel work, DecodeError on bad bytes.
    """
    classifier = classifier or ColorClassifier()
    recolorer = recolorer or BackgroundRecolorer()
    compositor = compositor or CanvasCompositor()
    image_service = image_service or ImageService()

    compositor.validate_dimensions(width, height)

    source = image_service.decode(raw_bytes)
    logger.info(f"decoded comic: {source.width}x{source.height}")

    classification = classifier.classify(source)
    recolored = recolorer.recolor(source, classification, bg_color, fg_mode)
    del source, classification

    return compositor.composite(recolored, width, height, bg_color)


def create_wallpaper(
    comic_number: int | None,
    width: int,
    height: int,
    bg_color: Color,
    fg_mode: ContrastMode,
    output_template: str = OUTPUT_TEMPLATE,
    *,
    comic_service: ComicService | None = None,
    image_service: ImageService | None = None,
    classifier: ColorClassifier | None = None,
) -> Path:
    """
    Fetch → build → save. Returns the path the wallpaper was written to.
    """
    comic_service = comic_service or ComicService()
    image_service = image_service or ImageService()

    CanvasCompositor.validate_dimensions(width, height)

    comic = comic_service.download_comic(comic_number)
    image = build_wallpaper(
        comic.raw_bytes, width, height, bg_color, fg_mode,
        classifier=classifier, image_service=image_service,
    )
    output_path = comic_service.format_filename(output_template, comic.metadata)
    return image_service.save(image, output_path)
