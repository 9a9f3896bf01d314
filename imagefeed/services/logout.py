"""Tear down everything that belongs to the signed-in user."""

from __future__ import annotations

import logging

from imagefeed.clients.token_store import TokenStore
from imagefeed.core.context import MainContext
from imagefeed.services.auth_session import AuthSession
from imagefeed.services.feed_store import FeedStore
from imagefeed.services.profile_session import ProfileSession

logger = logging.getLogger(__name__)


class LogoutService:
    """Clear the token and every cache derived from it."""

    def __init__(
        self,
        token_store: TokenStore,
        auth_session: AuthSession,
        profile_session: ProfileSession,
        feed_store: FeedStore,
        context: MainContext | None = None,
    ) -> None:
        self._token_store = token_store
        self._auth = auth_session
        self._profile = profile_session
        self._feed = feed_store
        self._context = context or MainContext()

    async def logout(self) -> None:
        self._context.assert_main("LogoutService.logout")
        self._token_store.clear()
        self._auth.reset()
        self._profile.clear()
        self._feed.clear()
        logger.info("Signed out; token and caches cleared")


__all__ = ["LogoutService"]
