from __future__ import annotations

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import asyncio

import httpx
import pytest

from fakes import FakeUnsplashAPI, page_reply, settle
from imagefeed.clients import HTTPExchange, InMemoryTokenStore
from imagefeed.core.config import UnsplashSettings
from imagefeed.core.context import MainContext
from imagefeed.core.errors import HTTPStatusCodeError
from imagefeed.schemas import FeedCleared, ProfileCleared
from imagefeed.services import (
    AuthSession,
    AuthState,
    FeedStore,
    LoginFlow,
    LogoutService,
    ProfileSession,
)

REDIRECT = "https://unsplash.test/oauth/authorize/native?code=abc123"
ME = {"username": "jdoe", "first_name": "Jane", "last_name": "Doe"}
AVATAR = {
    "profile_image": {
        "small": "https://images.test/jdoe/small",
        "medium": "https://images.test/jdoe/medium",
        "large": "https://images.test/jdoe/large",
    }
}


class Wiring:
    def __init__(
        self,
        settings: UnsplashSettings,
        exchange: HTTPExchange,
        token_store: InMemoryTokenStore,
        context: MainContext,
    ) -> None:
        self.token_store = token_store
        self.auth = AuthSession(settings, exchange, token_store, context)
        self.profiles = ProfileSession(settings, exchange, context)
        self.feed = FeedStore(settings, exchange, token_store, context)
        self.login = LoginFlow(self.auth, self.profiles)
        self.logout = LogoutService(token_store, self.auth, self.profiles, self.feed, context)


@pytest.fixture
def wiring(
    unsplash_settings: UnsplashSettings,
    exchange: HTTPExchange,
    token_store: InMemoryTokenStore,
    main_context: MainContext,
    fake_api: FakeUnsplashAPI,
) -> Wiring:
    fake_api.on("POST", "/oauth/token", httpx.Response(200, json={"access_token": "tok-1"}))
    fake_api.on("GET", "/me", httpx.Response(200, json=ME))
    fake_api.on("GET", "/users/jdoe", httpx.Response(200, json=AVATAR))
    fake_api.on("GET", "/photos", page_reply)
    return Wiring(unsplash_settings, exchange, token_store, main_context)


@pytest.mark.asyncio
async def test_login_loads_profile_and_avatar(wiring: Wiring, fake_api: FakeUnsplashAPI) -> None:
    profile = await wiring.login.complete(REDIRECT)

    assert profile is not None
    assert profile.username == "jdoe"
    assert profile.avatar_url == "https://images.test/jdoe/large"
    assert wiring.token_store.get() == "tok-1"
    assert wiring.auth.state is AuthState.AUTHENTICATED
    paths = [request.url.path for request in fake_api.requests]
    assert paths == ["/oauth/token", "/me", "/users/jdoe"]


@pytest.mark.asyncio
async def test_non_redirect_urls_are_ignored(wiring: Wiring, fake_api: FakeUnsplashAPI) -> None:
    assert await wiring.login.complete("https://unsplash.test/oauth/authorize?client_id=x") is None

    assert fake_api.requests == []
    assert wiring.auth.state is AuthState.IDLE


@pytest.mark.asyncio
async def test_avatar_failure_does_not_fail_login(wiring: Wiring, fake_api: FakeUnsplashAPI) -> None:
    fake_api.on("GET", "/users/jdoe", httpx.Response(500))

    profile = await wiring.login.complete(REDIRECT)

    assert profile is not None
    assert profile.username == "jdoe"
    assert profile.avatar_url is None


@pytest.mark.asyncio
async def test_exchange_failure_propagates(wiring: Wiring, fake_api: FakeUnsplashAPI) -> None:
    fake_api.on("POST", "/oauth/token", httpx.Response(400, json={"error": "invalid_grant"}))

    with pytest.raises(HTTPStatusCodeError):
        await wiring.login.complete(REDIRECT)

    assert wiring.auth.state is AuthState.FAILED
    assert wiring.profiles.profile is None
    assert fake_api.calls("GET", "/me") == []


@pytest.mark.asyncio
async def test_logout_clears_token_and_caches(wiring: Wiring) -> None:
    await wiring.login.complete(REDIRECT)
    await wiring.feed.fetch_next_page()
    profile_events: list = []
    feed_events: list = []
    wiring.profiles.subscribe(profile_events.append)
    wiring.feed.subscribe(feed_events.append)

    await wiring.logout.logout()

    assert wiring.token_store.get() is None
    assert wiring.auth.state is AuthState.IDLE
    assert not wiring.auth.is_authenticated
    assert wiring.profiles.profile is None
    assert len(wiring.feed) == 0
    assert wiring.feed.last_loaded_page == 0
    assert profile_events == [ProfileCleared()]
    assert feed_events == [FeedCleared(removed=10)]


@pytest.mark.asyncio
async def test_page_arriving_after_logout_is_discarded(
    wiring: Wiring, fake_api: FakeUnsplashAPI
) -> None:
    await wiring.login.complete(REDIRECT)
    gate = fake_api.hold("GET", "/photos")

    pending = asyncio.create_task(wiring.feed.fetch_next_page())
    await settle()
    await wiring.logout.logout()
    gate.set()

    assert await pending is None
    assert len(wiring.feed) == 0
    assert not wiring.feed.is_loading


@pytest.mark.asyncio
async def test_logout_allows_signing_in_again(wiring: Wiring, fake_api: FakeUnsplashAPI) -> None:
    await wiring.login.complete(REDIRECT)
    await wiring.logout.logout()

    profile = await wiring.login.complete(
        "https://unsplash.test/oauth/authorize/native?code=second"
    )

    assert profile is not None
    assert wiring.token_store.get() == "tok-1"
    assert len(fake_api.calls("POST", "/oauth/token")) == 2
