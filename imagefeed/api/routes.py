"""
FastAPI routes exposing the session and feed core to a local front-end.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from imagefeed.core.errors import (
    CredentialStoreError,
    DuplicateCodeError,
    HTTPStatusCodeError,
    ImageFeedError,
    MissingCredentialError,
    OperationCancelledError,
    RequestTransportError,
)
from imagefeed.dependencies import (
    AppSettingsDep,
    UnsplashSettingsDep,
    get_auth_session,
    get_feed_store,
    get_like_coordinator,
    get_login_flow,
    get_logout_service,
    get_profile_session,
)
from imagefeed.schemas import (
    AppendedRange,
    AuthStatus,
    AuthorizationURLResponse,
    FeedPage,
    FetchNextPageResult,
    LoginResult,
    PhotoRecord,
    Profile,
)

router = APIRouter()
oauth_router = APIRouter()
logger = logging.getLogger(__name__)


def _http_error(exc: ImageFeedError) -> HTTPException:
    """Translate a core failure into an HTTP error for the front-end."""
    if isinstance(exc, DuplicateCodeError):
        return HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(exc))
    if isinstance(exc, OperationCancelledError):
        return HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(exc))
    if isinstance(exc, MissingCredentialError):
        return HTTPException(status_code=HTTPStatus.UNAUTHORIZED, detail=str(exc))
    if isinstance(exc, CredentialStoreError):
        return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=str(exc))
    if isinstance(exc, RequestTransportError):
        return HTTPException(status_code=HTTPStatus.GATEWAY_TIMEOUT, detail=str(exc))
    if isinstance(exc, HTTPStatusCodeError):
        return HTTPException(
            status_code=HTTPStatus.BAD_GATEWAY,
            detail={"message": str(exc), "upstream_status": exc.status_code},
        )
    return HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=str(exc))


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck(settings: AppSettingsDep) -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok", "environment": settings.environment}


@router.get("/auth/authorize", status_code=HTTPStatus.OK)
async def start_authorization(
    request: Request,
    auth_session: Annotated[Any, Depends(get_auth_session)],
    unsplash: UnsplashSettingsDep,
    redirect: bool = Query(
        default=False,
        description="When true, respond with a redirect to the consent screen.",
    ),
) -> Any:
    authorization_url = auth_session.build_authorization_url()
    if authorization_url is None:
        raise HTTPException(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            detail="Authorization URL could not be built from configuration.",
        )

    wants_html = "text/html" in request.headers.get("accept", "").lower()
    if redirect or wants_html:
        return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)
    return AuthorizationURLResponse(
        authorization_url=authorization_url, scope=unsplash.access_scope
    )


@oauth_router.get("/oauth/authorize/native", status_code=HTTPStatus.OK)
async def handle_native_redirect(
    request: Request,
    login_flow: Annotated[Any, Depends(get_login_flow)],
) -> LoginResult:
    """Intercept the redirect carrying the authorization code and log in."""
    try:
        profile = await login_flow.complete(str(request.url))
    except ImageFeedError as exc:
        logger.warning("Login from redirect failed: %r", exc)
        raise _http_error(exc) from exc

    if profile is None:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="Redirect did not carry an authorization code.",
        )
    return LoginResult(username=profile.username)


@router.get("/auth/status", status_code=HTTPStatus.OK)
async def authorization_status(
    auth_session: Annotated[Any, Depends(get_auth_session)],
) -> AuthStatus:
    return AuthStatus(
        authenticated=auth_session.is_authenticated,
        state=auth_session.state.value,
    )


@router.post("/auth/logout", status_code=HTTPStatus.OK)
async def logout(
    logout_service: Annotated[Any, Depends(get_logout_service)],
) -> dict:
    await logout_service.logout()
    return {"status": "signed_out"}


@router.get("/profile", status_code=HTTPStatus.OK)
async def current_profile(
    profile_session: Annotated[Any, Depends(get_profile_session)],
) -> Profile:
    profile = profile_session.profile
    if profile is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="No profile loaded.")
    return profile


@router.get("/feed", status_code=HTTPStatus.OK)
async def read_feed(
    feed_store: Annotated[Any, Depends(get_feed_store)],
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
) -> FeedPage:
    photos: tuple[PhotoRecord, ...] = feed_store.photos
    return FeedPage(
        photos=list(photos[offset : offset + limit]),
        total=len(photos),
        last_loaded_page=feed_store.last_loaded_page,
        is_loading=feed_store.is_loading,
    )


@router.post("/feed/next", status_code=HTTPStatus.OK)
async def fetch_next_page(
    feed_store: Annotated[Any, Depends(get_feed_store)],
) -> FetchNextPageResult:
    try:
        event = await feed_store.fetch_next_page()
    except ImageFeedError as exc:
        raise _http_error(exc) from exc

    if event is None:
        return FetchNextPageResult(status="busy", last_loaded_page=feed_store.last_loaded_page)
    return FetchNextPageResult(
        status="appended",
        appended=AppendedRange(start=event.start, end=event.end),
        last_loaded_page=feed_store.last_loaded_page,
    )


async def _toggle(like_coordinator: Any, feed_store: Any, photo_id: str, is_liked: bool) -> PhotoRecord:
    try:
        await like_coordinator.toggle_like(photo_id, is_liked)
    except ImageFeedError as exc:
        raise _http_error(exc) from exc

    index = feed_store.index_of(photo_id)
    if index is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail="Like recorded remotely but the photo is not cached.",
        )
    return feed_store.photo(index)


@router.post("/photos/{photo_id}/like", status_code=HTTPStatus.OK)
async def like_photo(
    photo_id: str,
    like_coordinator: Annotated[Any, Depends(get_like_coordinator)],
    feed_store: Annotated[Any, Depends(get_feed_store)],
) -> PhotoRecord:
    return await _toggle(like_coordinator, feed_store, photo_id, True)


@router.delete("/photos/{photo_id}/like", status_code=HTTPStatus.OK)
async def unlike_photo(
    photo_id: str,
    like_coordinator: Annotated[Any, Depends(get_like_coordinator)],
    feed_store: Annotated[Any, Depends(get_feed_store)],
) -> PhotoRecord:
    return await _toggle(like_coordinator, feed_store, photo_id, False)


__all__ = ["oauth_router", "router"]
