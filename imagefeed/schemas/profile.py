"""Schemas describing the authenticated user's profile."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ProfileResult(BaseModel):
    """Wire shape of ``GET /me``."""

    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None


class ProfileImage(BaseModel):
    small: str
    medium: str
    large: str


class UserResult(BaseModel):
    """Wire shape of ``GET /users/{username}``; only the avatar is consumed."""

    profile_image: ProfileImage


class Profile(BaseModel):
    """Profile cached after login; replaced wholesale when it changes."""

    model_config = ConfigDict(frozen=True)

    username: str
    display_name: str
    login_handle: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_result(cls, result: ProfileResult, avatar_url: Optional[str] = None) -> "Profile":
        names = [name for name in (result.first_name, result.last_name) if name]
        return cls(
            username=result.username,
            display_name=" ".join(names),
            login_handle=f"@{result.username}",
            bio=result.bio,
            avatar_url=avatar_url,
        )


__all__ = ["Profile", "ProfileImage", "ProfileResult", "UserResult"]
