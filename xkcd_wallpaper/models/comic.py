from __future__ import annotations
from dataclasses import dataclass


@dataclass
class ComicMetadata:
    num: int               # comic number
    safe_title: str        # title without markup
    img: str               # image URL
    day: str
    month: str
    year: str

    @classmethod
    def from_json(cls, raw: dict) -> "ComicMetadata":
        return cls(
            num=int(raw["num"]),
            safe_title=str(raw["safe_title"]),
            img=str(raw["img"]),
            day=str(raw["day"]),
            month=str(raw["month"]),
            year=str(raw["year"]),
        )


@dataclass
class Comic:
    """Encoded comic image exactly as downloaded, plus its metadata."""
    raw_bytes: bytes
    metadata: ComicMetadata

