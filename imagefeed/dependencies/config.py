"""
Settings dependencies for the companion API routes.
"""

from typing import Annotated

from fastapi import Depends

from imagefeed.core.config import AppSettings, UnsplashSettings, get_settings


def get_app_settings() -> AppSettings:
    return get_settings()


def get_unsplash_settings() -> UnsplashSettings:
    """Only the Unsplash section, for routes that echo endpoints or scopes."""
    return get_settings().unsplash


AppSettingsDep = Annotated[AppSettings, Depends(get_app_settings)]
UnsplashSettingsDep = Annotated[UnsplashSettings, Depends(get_unsplash_settings)]

__all__ = [
    "AppSettingsDep",
    "UnsplashSettingsDep",
    "get_app_settings",
    "get_unsplash_settings",
]
