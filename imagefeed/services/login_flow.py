"""Sequence that turns an intercepted redirect into a loaded session."""

from __future__ import annotations

import logging
from typing import Optional

from imagefeed.core.errors import ImageFeedError
from imagefeed.schemas.profile import Profile
from imagefeed.services.auth_session import AuthSession
from imagefeed.services.profile_session import ProfileSession

logger = logging.getLogger(__name__)


class LoginFlow:
    """Exchange the redirect's code, then load the profile and avatar."""

    def __init__(self, auth_session: AuthSession, profile_session: ProfileSession) -> None:
        self._auth = auth_session
        self._profile = profile_session

    async def complete(self, redirect_url: str) -> Optional[Profile]:
        """
        Finish login from ``redirect_url``.

        Returns ``None`` when the URL is not the native redirect (the user is
        still browsing the consent pages). Exchange and profile failures
        propagate; a failed avatar lookup only leaves the avatar unset.
        """
        code = self._auth.extract_code(redirect_url)
        if code is None:
            return None

        token = await self._auth.exchange_code_for_token(code)
        profile = await self._profile.fetch_profile(token)

        try:
            await self._profile.fetch_avatar_url(profile.username, token)
        except ImageFeedError as exc:
            logger.warning("Avatar lookup for %s failed: %r", profile.login_handle, exc)

        return self._profile.profile or profile


__all__ = ["LoginFlow"]
