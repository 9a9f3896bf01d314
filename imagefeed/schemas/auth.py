"""Schemas related to OAuth flows."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OAuthTokenResponseBody(BaseModel):
    """Body returned by the token endpoint after a successful code exchange."""

    access_token: str = Field(..., min_length=1)
    token_type: str | None = None
    scope: str | None = None


class AuthorizationURLResponse(BaseModel):
    authorization_url: str
    scope: str | None = None


class LoginResult(BaseModel):
    status: str = "connected"
    username: str | None = None


class AuthStatus(BaseModel):
    authenticated: bool
    state: str


__all__ = [
    "AuthStatus",
    "AuthorizationURLResponse",
    "LoginResult",
    "OAuthTokenResponseBody",
]
