"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import shutil
from pathlib import Path

import httpx
import pytest

from imagefeed.clients import HTTPExchange, InMemoryTokenStore, SQLiteTokenStore, TokenCipher
from imagefeed.core.config import UnsplashSettings
from imagefeed.core.context import MainContext
from fakes import FakeUnsplashAPI


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def fake_api() -> FakeUnsplashAPI:
    return FakeUnsplashAPI()


@pytest.fixture
def unsplash_settings() -> UnsplashSettings:
    return UnsplashSettings(
        UNSPLASH_ACCESS_KEY="access-key",
        UNSPLASH_SECRET_KEY="secret-key",
        UNSPLASH_REDIRECT_URI="urn:ietf:wg:oauth:2.0:oob",
        UNSPLASH_ACCESS_SCOPE="public read_user write_likes",
        UNSPLASH_AUTH_BASE_URL="https://unsplash.test",
        UNSPLASH_API_BASE_URL="https://api.unsplash.test",
    )


@pytest.fixture
def exchange(fake_api: FakeUnsplashAPI) -> HTTPExchange:
    return HTTPExchange(httpx.AsyncClient(transport=httpx.MockTransport(fake_api)))


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def main_context() -> MainContext:
    return MainContext()


@pytest.fixture
def unreachable_token_store(tmp_path: Path) -> SQLiteTokenStore:
    """SQLite store whose directory disappears after it was opened."""
    state_dir = tmp_path / "state"
    store = SQLiteTokenStore(str(state_dir / "token.db"), TokenCipher(secret="s3cret"))
    shutil.rmtree(state_dir)
    return store
