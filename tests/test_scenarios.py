"""End-to-end flows across the session, feed and like components."""

from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import httpx
import pytest

from fakes import FakeUnsplashAPI, page_reply
from imagefeed.clients import HTTPExchange, InMemoryTokenStore
from imagefeed.core.config import UnsplashSettings
from imagefeed.core.context import MainContext
from imagefeed.core.errors import HTTPStatusCodeError
from imagefeed.services import AuthSession, FeedStore, LikeCoordinator


@pytest.mark.asyncio
async def test_login_then_like_fourth_photo(
    unsplash_settings: UnsplashSettings,
    exchange: HTTPExchange,
    token_store: InMemoryTokenStore,
    main_context: MainContext,
    fake_api: FakeUnsplashAPI,
) -> None:
    auth = AuthSession(unsplash_settings, exchange, token_store, main_context)
    feed = FeedStore(unsplash_settings, exchange, token_store, main_context)
    likes = LikeCoordinator(unsplash_settings, exchange, token_store, feed, main_context)
    fake_api.on("POST", "/oauth/token", httpx.Response(200, json={"access_token": "tok-1"}))
    fake_api.on("GET", "/photos", page_reply)

    await auth.exchange_code_for_token("abc123")
    assert token_store.get() == "tok-1"

    appended = await feed.fetch_next_page()
    assert appended is not None and list(appended.indices) == list(range(10))
    assert feed.last_loaded_page == 1

    before = feed.photos
    target = before[3]
    fake_api.on("POST", f"/photos/{target.id}/like", httpx.Response(201, json={}))

    await likes.toggle_like(target.id, True)

    after = feed.photos
    assert after[3].is_liked is True
    assert after[3] == target.with_like(True)
    assert [p for i, p in enumerate(after) if i != 3] == [p for i, p in enumerate(before) if i != 3]


@pytest.mark.asyncio
async def test_server_error_then_retry_same_page(
    unsplash_settings: UnsplashSettings,
    exchange: HTTPExchange,
    main_context: MainContext,
    fake_api: FakeUnsplashAPI,
) -> None:
    feed = FeedStore(unsplash_settings, exchange, context=main_context)
    fake_api.on("GET", "/photos", httpx.Response(500), page_reply)

    with pytest.raises(HTTPStatusCodeError):
        await feed.fetch_next_page()
    assert feed.last_loaded_page == 0
    assert not feed.is_loading

    await feed.fetch_next_page()

    first, retry = fake_api.calls("GET", "/photos")
    assert first.url.params["page"] == retry.url.params["page"] == "1"
    assert feed.last_loaded_page == 1
    assert len(feed) == 10
