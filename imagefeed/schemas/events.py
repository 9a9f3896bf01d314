"""Typed change events broadcast by the feed and profile components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from imagefeed.schemas.profile import Profile


@dataclass(frozen=True, slots=True)
class PhotosAppended:
    """Records were appended at indices ``[start, end)``."""

    start: int
    end: int

    @property
    def indices(self) -> range:
        return range(self.start, self.end)


@dataclass(frozen=True, slots=True)
class PhotoReplaced:
    """The record at ``index`` (identified by ``photo_id``) was replaced."""

    index: int
    photo_id: str


@dataclass(frozen=True, slots=True)
class FeedCleared:
    """Every cached record was dropped, typically on logout."""

    removed: int


FeedChangeEvent = Union[PhotosAppended, PhotoReplaced, FeedCleared]


@dataclass(frozen=True, slots=True)
class ProfileUpdated:
    profile: Profile


@dataclass(frozen=True, slots=True)
class AvatarChanged:
    avatar_url: str


@dataclass(frozen=True, slots=True)
class ProfileCleared:
    pass


ProfileEvent = Union[ProfileUpdated, AvatarChanged, ProfileCleared]


__all__ = [
    "AvatarChanged",
    "FeedChangeEvent",
    "FeedCleared",
    "PhotoReplaced",
    "PhotosAppended",
    "ProfileCleared",
    "ProfileEvent",
    "ProfileUpdated",
]
