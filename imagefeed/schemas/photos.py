"""
Pydantic models for the photo feed.

``PhotoResult`` mirrors the wire shape of ``GET /photos``; ``PhotoRecord`` is
the immutable record the feed cache holds.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PhotoUrls(BaseModel):
    """Rendition URLs published for a photo."""

    raw: str
    full: str
    regular: str
    small: str
    thumb: str


class PhotoResult(BaseModel):
    """A single photo as returned by the API."""

    id: str
    created_at: Optional[str] = Field(
        None, description="ISO 8601 timestamp; kept raw so a bad value is not fatal."
    )
    width: int
    height: int
    description: Optional[str] = None
    liked_by_user: bool
    urls: PhotoUrls


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp, returning ``None`` when absent or malformed."""
    if not value:
        return None
    candidate = value.strip()
    if candidate.endswith(("Z", "z")):
        candidate = f"{candidate[:-1]}+00:00"
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


class PhotoRecord(BaseModel):
    """Cached photo metadata. Only ``is_liked`` changes after creation."""

    model_config = ConfigDict(frozen=True)

    id: str
    width: int
    height: int
    created_at: Optional[datetime] = None
    description: Optional[str] = None
    thumbnail_url: str
    full_image_url: str
    is_liked: bool = False

    @classmethod
    def from_result(cls, result: PhotoResult) -> "PhotoRecord":
        return cls(
            id=result.id,
            width=result.width,
            height=result.height,
            created_at=parse_timestamp(result.created_at),
            description=result.description,
            thumbnail_url=result.urls.thumb,
            full_image_url=result.urls.regular,
            is_liked=result.liked_by_user,
        )

    def with_like(self, is_liked: bool) -> "PhotoRecord":
        """Return a copy carrying every field over except ``is_liked``."""
        return self.model_copy(update={"is_liked": is_liked})


class FeedPage(BaseModel):
    """Slice of the cached feed returned by the companion API."""

    photos: list[PhotoRecord] = Field(default_factory=list)
    total: int
    last_loaded_page: int
    is_loading: bool


class AppendedRange(BaseModel):
    start: int
    end: int


class FetchNextPageResult(BaseModel):
    status: str
    appended: Optional[AppendedRange] = None
    last_loaded_page: int


__all__ = [
    "AppendedRange",
    "FeedPage",
    "FetchNextPageResult",
    "PhotoRecord",
    "PhotoResult",
    "PhotoUrls",
    "parse_timestamp",
]
