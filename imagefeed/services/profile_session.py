"""Profile and avatar lookups for the authenticated user."""

from __future__ import annotations

import logging
from typing import Callable, Optional
from urllib.parse import quote

import httpx

from imagefeed.clients.http_exchange import HTTPExchange
from imagefeed.core.config import UnsplashSettings
from imagefeed.core.context import MainContext
from imagefeed.core.errors import MissingCredentialError
from imagefeed.schemas.events import (
    AvatarChanged,
    ProfileCleared,
    ProfileEvent,
    ProfileUpdated,
)
from imagefeed.schemas.profile import Profile, ProfileResult, UserResult
from imagefeed.services.observers import Observable
from imagefeed.services.tasks import LatestCallGuard

logger = logging.getLogger(__name__)


def _bearer_request(url: str, token: Optional[str]) -> httpx.Request:
    if not token:
        raise MissingCredentialError("A bearer token is required for this call.")
    return httpx.Request("GET", url, headers={"Authorization": f"Bearer {token}"})


class ProfileSession:
    """Caches the profile and avatar URL fetched once per login."""

    def __init__(
        self,
        settings: UnsplashSettings,
        exchange: HTTPExchange,
        context: MainContext | None = None,
    ) -> None:
        self._settings = settings
        self._exchange = exchange
        self._context = context or MainContext()
        self._profile_guard = LatestCallGuard("profile fetch")
        self._avatar_guard = LatestCallGuard("avatar fetch")
        self._events: Observable[ProfileEvent] = Observable(self._context, "ProfileSession")
        self._profile: Optional[Profile] = None
        self._avatar_url: Optional[str] = None

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def avatar_url(self) -> Optional[str]:
        return self._avatar_url

    def subscribe(self, observer: Callable[[ProfileEvent], None]) -> Callable[[], None]:
        return self._events.subscribe(observer)

    def unsubscribe(self, observer: Callable[[ProfileEvent], None]) -> None:
        self._events.unsubscribe(observer)

    async def fetch_profile(self, token: Optional[str]) -> Profile:
        """Fetch ``/me``; only the latest call in flight may update the cache."""
        self._context.assert_main("ProfileSession.fetch_profile")
        request = _bearer_request(f"{self._settings.api_base_url}/me", token)

        result = await self._profile_guard.run(
            self._exchange.execute_typed(request, ProfileResult)
        )

        profile = Profile.from_result(result, avatar_url=self._avatar_url)
        self._profile = profile
        logger.info("Loaded profile for %s", profile.login_handle)
        self._events.emit(ProfileUpdated(profile))
        return profile

    async def fetch_avatar_url(self, username: str, token: Optional[str]) -> str:
        """Fetch the large avatar URL for ``username`` and broadcast the change."""
        self._context.assert_main("ProfileSession.fetch_avatar_url")
        url = f"{self._settings.api_base_url}/users/{quote(username, safe='')}"
        request = _bearer_request(url, token)

        result = await self._avatar_guard.run(
            self._exchange.execute_typed(request, UserResult)
        )

        avatar_url = result.profile_image.large
        self._avatar_url = avatar_url
        if self._profile is not None and self._profile.username == username:
            self._profile = self._profile.model_copy(update={"avatar_url": avatar_url})
        self._events.emit(AvatarChanged(avatar_url))
        return avatar_url

    def clear(self) -> None:
        self._context.assert_main("ProfileSession.clear")
        self._profile_guard.cancel()
        self._avatar_guard.cancel()
        self._profile = None
        self._avatar_url = None
        self._events.emit(ProfileCleared())


__all__ = ["ProfileSession"]
