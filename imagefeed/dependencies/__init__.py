"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_auth_session,
    get_feed_store,
    get_http_exchange,
    get_like_coordinator,
    get_login_flow,
    get_logout_service,
    get_main_context,
    get_profile_session,
    get_token_store,
)
from .config import (
    AppSettingsDep,
    UnsplashSettingsDep,
    get_app_settings,
    get_unsplash_settings,
)

__all__ = [
    "AppSettingsDep",
    "UnsplashSettingsDep",
    "get_app_settings",
    "get_auth_session",
    "get_feed_store",
    "get_http_exchange",
    "get_like_coordinator",
    "get_login_flow",
    "get_logout_service",
    "get_main_context",
    "get_profile_session",
    "get_token_store",
    "get_unsplash_settings",
]
