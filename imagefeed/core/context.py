"""Single-writer execution context for the session and feed state."""

from __future__ import annotations

import asyncio

from imagefeed.core.errors import MainContextViolation


class MainContext:
    """
    Tracks the event loop that owns all mutable core state.

    The context binds lazily to the first running loop that passes through
    ``assert_main`` unless a loop is supplied explicitly. Completions of httpx
    calls resume on that same loop, so state touched only from guarded entry
    points never needs a lock.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def assert_main(self, operation: str) -> None:
        """Raise ``MainContextViolation`` unless called on the owning loop."""
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            raise MainContextViolation(
                f"{operation} must be called from the main event loop."
            ) from None

        if self._loop is None:
            self._loop = running
        elif running is not self._loop:
            raise MainContextViolation(
                f"{operation} was called from a foreign event loop."
            )


__all__ = ["MainContext"]
