"""
Unsplash OAuth utilities.

Builds the authorization URL, recognizes the native redirect that carries the
authorization code, and exchanges that code for a bearer token.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

import httpx

from imagefeed.clients.http_exchange import HTTPExchange
from imagefeed.clients.token_store import TokenStore
from imagefeed.core.config import UnsplashSettings
from imagefeed.core.context import MainContext
from imagefeed.core.errors import (
    CredentialStoreError,
    DuplicateCodeError,
    ImageFeedError,
    InvalidRequestError,
    OperationCancelledError,
)
from imagefeed.schemas.auth import OAuthTokenResponseBody
from imagefeed.services.tasks import LatestCallGuard

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    IDLE = "idle"
    AUTHORIZING = "authorizing"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


def _parse_http_url(raw: str) -> Optional[httpx.URL]:
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError):
        return None
    if url.scheme not in ("http", "https") or not url.host:
        return None
    return url


class AuthSession:
    """Own the authorization-code flow and the resulting token lifecycle."""

    AUTHORIZE_PATH = "/oauth/authorize"
    TOKEN_PATH = "/oauth/token"
    NATIVE_REDIRECT_PATH = "/oauth/authorize/native"
    GRANT_TYPE = "authorization_code"

    def __init__(
        self,
        settings: UnsplashSettings,
        exchange: HTTPExchange,
        token_store: TokenStore,
        context: MainContext | None = None,
    ) -> None:
        self._settings = settings
        self._exchange = exchange
        self._token_store = token_store
        self._context = context or MainContext()
        self._guard = LatestCallGuard("token exchange")
        self._state = AuthState.IDLE
        self._pending_code: Optional[str] = None
        self._submitted_codes: set[str] = set()

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def pending_code(self) -> Optional[str]:
        """Code of the exchange currently in flight, if any."""
        return self._pending_code

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token_store.get())

    def build_authorization_url(self) -> Optional[str]:
        """Construct the consent URL, or ``None`` if the auth base URL is unusable."""
        base = _parse_http_url(f"{self._settings.auth_base_url}{self.AUTHORIZE_PATH}")
        if base is None:
            logger.error("Cannot build authorization URL from %r", self._settings.auth_base_url)
            return None

        params = {
            "client_id": self._settings.access_key,
            "redirect_uri": self._settings.redirect_uri,
            "response_type": "code",
            "scope": self._settings.access_scope,
        }
        return str(httpx.URL(base, params=params))

    def extract_code(self, redirect_url: str) -> Optional[str]:
        """Return the ``code`` carried by the native redirect, else ``None``."""
        try:
            url = httpx.URL(redirect_url)
        except (httpx.InvalidURL, TypeError):
            return None
        if url.path != self.NATIVE_REDIRECT_PATH:
            return None
        return url.params.get("code") or None

    def _build_token_request(self, code: str) -> httpx.Request:
        params = {
            "client_id": self._settings.access_key,
            "client_secret": self._settings.secret_key,
            "redirect_uri": self._settings.redirect_uri,
            "code": code,
            "grant_type": self.GRANT_TYPE,
        }
        url = _parse_http_url(f"{self._settings.auth_base_url}{self.TOKEN_PATH}")
        if url is None:
            raise InvalidRequestError(
                f"Token endpoint cannot be built from {self._settings.auth_base_url!r}."
            )
        return httpx.Request("POST", url, params=params)

    async def exchange_code_for_token(self, code: str) -> str:
        """
        Exchange an authorization code for a bearer token.

        The token is persisted before it is returned. A code may be submitted
        once per session; a repeat raises ``DuplicateCodeError`` without any
        network traffic. Starting an exchange supersedes the one in flight.
        """
        self._context.assert_main("AuthSession.exchange_code_for_token")

        if code in self._submitted_codes:
            logger.warning("Rejected repeated authorization code")
            raise DuplicateCodeError("Authorization code was already submitted.")

        request = self._build_token_request(code)
        self._submitted_codes.add(code)
        self._pending_code = code
        self._state = AuthState.AUTHORIZING

        try:
            body = await self._guard.run(
                self._exchange.execute_typed(request, OAuthTokenResponseBody)
            )
        except OperationCancelledError:
            logger.info("Token exchange superseded by a newer authorization code")
            raise
        except (ImageFeedError, asyncio.CancelledError) as exc:
            self._pending_code = None
            self._state = AuthState.FAILED
            logger.warning("Token exchange failed: %r", exc)
            raise

        try:
            self._token_store.set(body.access_token)
        except CredentialStoreError:
            self._pending_code = None
            self._state = AuthState.FAILED
            logger.error("Token exchange succeeded but the token could not be stored")
            raise
        self._pending_code = None
        self._state = AuthState.AUTHENTICATED
        logger.info("Token exchange succeeded; bearer token stored")
        return body.access_token

    def reset(self) -> None:
        """Abandon any exchange in flight and return to ``IDLE``."""
        self._guard.cancel()
        self._pending_code = None
        self._state = AuthState.IDLE


__all__ = ["AuthSession", "AuthState"]
