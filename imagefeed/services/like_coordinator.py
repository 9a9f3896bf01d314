"""Remote like/unlike calls whose confirmed result is applied to the feed."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from imagefeed.clients.http_exchange import HTTPExchange
from imagefeed.clients.token_store import TokenStore
from imagefeed.core.config import UnsplashSettings
from imagefeed.core.context import MainContext
from imagefeed.core.errors import MissingCredentialError
from imagefeed.services.feed_store import FeedStore

logger = logging.getLogger(__name__)


class LikeCoordinator:
    """
    Toggle the like state of a photo.

    The feed is only touched after the server confirms the change; callers are
    responsible for not submitting the same toggle twice.
    """

    def __init__(
        self,
        settings: UnsplashSettings,
        exchange: HTTPExchange,
        token_store: TokenStore,
        feed_store: FeedStore,
        context: MainContext | None = None,
    ) -> None:
        self._settings = settings
        self._exchange = exchange
        self._token_store = token_store
        self._feed_store = feed_store
        self._context = context or MainContext()

    def _build_request(self, photo_id: str, is_liked: bool, token: str) -> httpx.Request:
        url = f"{self._settings.api_base_url}/photos/{quote(photo_id, safe='')}/like"
        return httpx.Request(
            "POST" if is_liked else "DELETE",
            url,
            headers={"Authorization": f"Bearer {token}"},
        )

    async def toggle_like(self, photo_id: str, is_liked: bool) -> None:
        self._context.assert_main("LikeCoordinator.toggle_like")
        token = self._token_store.get()
        if not token:
            logger.warning("Like toggle for %s rejected: no bearer token", photo_id)
            raise MissingCredentialError("Log in before liking photos.")

        await self._exchange.execute(self._build_request(photo_id, is_liked, token))

        self._feed_store.apply_like_result(photo_id, is_liked)
        logger.info("Photo %s is now %s", photo_id, "liked" if is_liked else "unliked")


__all__ = ["LikeCoordinator"]
