from __future__ import annotations
import logging
import os

from ..models.comic import Comic, ComicMetadata
from ..repositories.comic_repository import ComicRepository

logger = logging.getLogger(__name__)


class ComicService:
    """
    Business logic on top of the raw xkcd repository.
    """

    def __init__(self, comic_repository: ComicRepository = None):
        self.comic_repository = comic_repository or ComicRepository()

    def download_comic(self, comic_number: int | None = None) -> Comic:
        """Latest comic when *comic_number* is None."""
        metadata = self.comic_repository.fetch_metadata(comic_number)
        raw_bytes = self.comic_repository.fetch_image(metadata.img)
        logger.info(f"downloaded comic #{metadata.num} ({len(raw_bytes)} bytes)")
        return Comic(raw_bytes=raw_bytes, metadata=metadata)

    @staticmethod
    def format_filename(template: str, metadata: ComicMetadata) -> str:
        """
        Substitute filename placeholders with comic metadata.

        %y  year (e.g. 2025)
        %m  two-digit month (e.g. 06)
        %d  two-digit day (e.g. 22)
        %n  comic number
        %t  title
        """
        title = metadata.safe_title.replace("/", "_")
        if os.sep != "/":
            title = title.replace(os.sep, "_")

        output = template.replace("%y", metadata.year)
        output = output.replace("%m", metadata.month.zfill(2))
        output = output.replace("%d", metadata.day.zfill(2))
        output = output.replace("%n", str(metadata.num))
        output = output.replace("%t", title)
        logger.info(f"converted filename from {template} to {output}")
        return output
