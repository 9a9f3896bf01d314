"""
Factory functions providing one long-lived instance of each service per process.

FastAPI routes receive these through ``Depends``; tests swap them out through
``app.dependency_overrides``.
"""

from functools import lru_cache

from imagefeed.clients import HTTPExchange, InMemoryTokenStore, SQLiteTokenStore, TokenCipher
from imagefeed.clients.token_store import TokenStore
from imagefeed.core.config import get_settings
from imagefeed.core.context import MainContext
from imagefeed.services import (
    AuthSession,
    FeedStore,
    LikeCoordinator,
    LoginFlow,
    LogoutService,
    ProfileSession,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for service factories."""
    return get_settings()


@lru_cache()
def get_main_context() -> MainContext:
    """Single-writer context shared by every stateful service."""
    return MainContext()


@lru_cache()
def get_http_exchange() -> HTTPExchange:
    return HTTPExchange(timeout=_settings().http_timeout_seconds)


@lru_cache()
def get_token_store() -> TokenStore:
    """Encrypted SQLite store when a path is configured, memory otherwise."""
    settings = _settings()
    db_path = settings.security.token_db_path
    if not db_path:
        return InMemoryTokenStore()
    secret = settings.security.token_encryption_secret or settings.unsplash.secret_key
    return SQLiteTokenStore(db_path, TokenCipher(secret=secret))


@lru_cache()
def get_auth_session() -> AuthSession:
    return AuthSession(
        _settings().unsplash,
        get_http_exchange(),
        get_token_store(),
        get_main_context(),
    )


@lru_cache()
def get_profile_session() -> ProfileSession:
    return ProfileSession(_settings().unsplash, get_http_exchange(), get_main_context())


@lru_cache()
def get_feed_store() -> FeedStore:
    settings = _settings()
    return FeedStore(
        settings.unsplash,
        get_http_exchange(),
        get_token_store(),
        get_main_context(),
        page_size=settings.feed.page_size,
    )


@lru_cache()
def get_like_coordinator() -> LikeCoordinator:
    return LikeCoordinator(
        _settings().unsplash,
        get_http_exchange(),
        get_token_store(),
        get_feed_store(),
        get_main_context(),
    )


def get_login_flow() -> LoginFlow:
    return LoginFlow(get_auth_session(), get_profile_session())


def get_logout_service() -> LogoutService:
    return LogoutService(
        get_token_store(),
        get_auth_session(),
        get_profile_session(),
        get_feed_store(),
        get_main_context(),
    )


__all__ = [
    "get_auth_session",
    "get_feed_store",
    "get_http_exchange",
    "get_like_coordinator",
    "get_login_flow",
    "get_logout_service",
    "get_main_context",
    "get_profile_session",
    "get_token_store",
]
