"""
Paginated photo feed cache.

The store owns the ordered collection of ``PhotoRecord`` values. Pages are
fetched strictly one at a time: a busy flag drops (never queues) any request
for the next page while one is in flight, and a failed fetch leaves the page
counter where it was so the next call retries the same page.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx

from imagefeed.clients.http_exchange import HTTPExchange
from imagefeed.clients.token_store import TokenStore
from imagefeed.core.config import UnsplashSettings
from imagefeed.core.context import MainContext
from imagefeed.schemas.events import (
    FeedChangeEvent,
    FeedCleared,
    PhotoReplaced,
    PhotosAppended,
)
from imagefeed.schemas.photos import PhotoRecord, PhotoResult
from imagefeed.services.observers import Observable

logger = logging.getLogger(__name__)


class FeedStore:
    """Growing, append-only photo list with sequential pagination."""

    DEFAULT_PAGE_SIZE = 10

    def __init__(
        self,
        settings: UnsplashSettings,
        exchange: HTTPExchange,
        token_store: TokenStore | None = None,
        context: MainContext | None = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._settings = settings
        self._exchange = exchange
        self._token_store = token_store
        self._context = context or MainContext()
        self._page_size = page_size
        self._events: Observable[FeedChangeEvent] = Observable(self._context, "FeedStore")
        self._photos: list[PhotoRecord] = []
        self._index_by_id: dict[str, int] = {}
        self._last_loaded_page = 0
        self._is_loading = False
        self._generation = 0

    @property
    def photos(self) -> tuple[PhotoRecord, ...]:
        return tuple(self._photos)

    @property
    def last_loaded_page(self) -> int:
        """Highest page merged so far; ``0`` before the first page arrives."""
        return self._last_loaded_page

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def page_size(self) -> int:
        return self._page_size

    def __len__(self) -> int:
        return len(self._photos)

    def photo(self, index: int) -> PhotoRecord:
        return self._photos[index]

    def index_of(self, photo_id: str) -> Optional[int]:
        return self._index_by_id.get(photo_id)

    def subscribe(self, observer: Callable[[FeedChangeEvent], None]) -> Callable[[], None]:
        return self._events.subscribe(observer)

    def unsubscribe(self, observer: Callable[[FeedChangeEvent], None]) -> None:
        self._events.unsubscribe(observer)

    def _build_page_request(self, page: int) -> httpx.Request:
        params = {
            "page": str(page),
            "per_page": str(self._page_size),
            "client_id": self._settings.access_key,
        }
        headers = {}
        token = self._token_store.get() if self._token_store is not None else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return httpx.Request(
            "GET", f"{self._settings.api_base_url}/photos", params=params, headers=headers
        )

    async def fetch_next_page(self) -> Optional[PhotosAppended]:
        """
        Fetch and merge the page after ``last_loaded_page``.

        Returns the appended range, or ``None`` when the call was dropped
        because a fetch is already running (or the feed was cleared meanwhile).
        Failures propagate after the busy flag is released.
        """
        self._context.assert_main("FeedStore.fetch_next_page")
        if self._is_loading:
            logger.debug("Page fetch already in flight; dropping request")
            return None

        self._is_loading = True
        generation = self._generation
        next_page = self._last_loaded_page + 1
        try:
            results = await self._exchange.execute_typed(
                self._build_page_request(next_page), list[PhotoResult]
            )
        except BaseException as exc:
            if generation == self._generation:
                self._is_loading = False
            logger.warning("Fetching page %s failed: %r", next_page, exc)
            raise

        if generation != self._generation:
            logger.info("Discarding page %s fetched before the feed was cleared", next_page)
            return None

        start = len(self._photos)
        for result in results:
            if result.id in self._index_by_id:
                logger.debug("Skipping photo %s already present in the feed", result.id)
                continue
            self._index_by_id[result.id] = len(self._photos)
            self._photos.append(PhotoRecord.from_result(result))
        end = len(self._photos)

        self._last_loaded_page = next_page
        self._is_loading = False
        logger.info("Merged page %s: photos [%s, %s)", next_page, start, end)

        event = PhotosAppended(start=start, end=end)
        self._events.emit(event)
        return event

    def apply_like_result(self, photo_id: str, is_liked: bool) -> Optional[PhotoReplaced]:
        """Replace the record for ``photo_id`` with its ``is_liked`` flag updated."""
        self._context.assert_main("FeedStore.apply_like_result")
        index = self._index_by_id.get(photo_id)
        if index is None:
            logger.debug("Photo %s is no longer cached; like result dropped", photo_id)
            return None

        self._photos[index] = self._photos[index].with_like(is_liked)
        event = PhotoReplaced(index=index, photo_id=photo_id)
        self._events.emit(event)
        return event

    def clear(self) -> None:
        """Drop every record and invalidate any page fetch still in flight."""
        self._context.assert_main("FeedStore.clear")
        removed = len(self._photos)
        self._generation += 1
        self._photos = []
        self._index_by_id = {}
        self._last_loaded_page = 0
        # A request from the discarded generation may still be on the wire
        # while a new page 1 is fetched; its result is dropped on arrival.
        self._is_loading = False
        self._events.emit(FeedCleared(removed=removed))


__all__ = ["FeedStore"]
