"""
Secret stores for the single bearer token.

``SQLiteTokenStore`` keeps the token encrypted at rest with a Fernet key
derived from a configured secret; ``InMemoryTokenStore`` lives for the process.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Protocol

from cryptography.fernet import Fernet, InvalidToken

from imagefeed.core.errors import CredentialStoreError

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Opaque single-cell credential store."""

    def get(self) -> Optional[str]:
        ...

    def set(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...


class TokenCipher:
    """Encrypt and decrypt the token with a SHA-256 derived Fernet key."""

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())
        self._fernet = Fernet(key)

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError("Stored token could not be decrypted.") from exc
        return plaintext.decode("utf-8")


class InMemoryTokenStore:
    """Keeps the token for the lifetime of the process only."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        if not token:
            raise ValueError("Refusing to store an empty token.")
        self._token = token

    def clear(self) -> None:
        self._token = None


class SQLiteTokenStore:
    """Single-row SQLite table holding the encrypted token."""

    _KEY = "bearer_token"

    def __init__(self, db_path: str, cipher: TokenCipher) -> None:
        self._db_path = Path(db_path)
        self._cipher = cipher
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a committed-on-exit connection; SQLite failures become ``CredentialStoreError``."""
        try:
            conn = sqlite3.connect(self._db_path)
            try:
                with conn:
                    yield conn
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.error("Token store at %s failed: %s", self._db_path, exc)
            raise CredentialStoreError(f"Token store unavailable: {exc}") from exc

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS credentials (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self) -> Optional[str]:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT value FROM credentials WHERE key = ?", (self._KEY,)
            ).fetchone()
        if not row:
            return None
        try:
            return self._cipher.decrypt(row[0])
        except ValueError:
            # Written with a different secret; treat as logged out.
            logger.warning("Discarding stored token that no longer decrypts")
            self.clear()
            return None

    def set(self, token: str) -> None:
        if not token:
            raise ValueError("Refusing to store an empty token.")
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO credentials (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (self._KEY, self._cipher.encrypt(token)),
            )

    def clear(self) -> None:
        with self._connection() as conn:
            conn.execute("DELETE FROM credentials WHERE key = ?", (self._KEY,))


__all__ = ["InMemoryTokenStore", "SQLiteTokenStore", "TokenCipher", "TokenStore"]
