"""Expose transport and credential primitives."""

from .http_exchange import HTTPExchange
from .token_store import InMemoryTokenStore, SQLiteTokenStore, TokenCipher, TokenStore

__all__ = [
    "HTTPExchange",
    "InMemoryTokenStore",
    "SQLiteTokenStore",
    "TokenCipher",
    "TokenStore",
]
