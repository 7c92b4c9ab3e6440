from __future__ import annotations
import logging
import os

import requests
from dotenv import load_dotenv

from ..models.comic import ComicMetadata
from ..models.errors import FetchError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ComicRepository:
    """
    Thin wrapper around the xkcd JSON API and image host.
    """

    def __init__(self, base_url: str = None, timeout: float = None, session: requests.Session = None):
        self.base_url = (base_url or os.getenv("XKCD_BASE_URL", "https://xkcd.com")).rstrip("/")
        self.timeout = timeout if timeout is not None else float(os.getenv("HTTP_TIMEOUT", "30"))
        self.session = session or requests.Session()
        self.session.headers.setdefault(
            "User-Agent", os.getenv("HTTP_USER_AGENT", "xkcd-wallpaper/1.0")
        )

    def metadata_url(self, comic_number: int | None = None) -> str:
        if comic_number is None:
            return f"{self.base_url}/info.0.json"
        return f"{self.base_url}/{comic_number}/info.0.json"

    def _get(self, url: str) -> requests.Response:
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response

    def fetch_metadata(self, comic_number: int | None = None) -> ComicMetadata:
        url = self.metadata_url(comic_number)
        logger.info(f"downloading metadata from url {url}")
        try:
            raw = self._get(url).json()
            metadata = ComicMetadata.from_json(raw)
        except requests.RequestException as err:
            raise FetchError(f"Cannot download metadata from {url}: {err}") from err
        except (ValueError, KeyError, TypeError) as err:
            raise FetchError(f"Malformed metadata from {url}: {err}") from err

        logger.info(f"metadata downloaded successfully (#{metadata.num} {metadata.safe_title!r})")
        return metadata

    def fetch_image(self, image_url: str) -> bytes:
        """
        Download the 2x variant when the host has one, otherwise the regular image.
        """
        scaled_url = image_url.replace(".png", "_2x.png")
        if scaled_url != image_url:
            logger.info(f"downloading img {scaled_url}")
            try:
                return self._get(scaled_url).content
            except requests.RequestException as err:
                logger.warning(
                    f"cannot get image with 2x resolution, falling back to regular res. {image_url} ({err})"
                )

        logger.info(f"downloading img {image_url}")
        try:
            return self._get(image_url).content
        except requests.RequestException as err:
            raise FetchError(f"Cannot download image from {image_url}: {err}") from err
