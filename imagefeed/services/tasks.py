"""Latest-call-wins execution for operations that supersede each other."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from imagefeed.core.errors import OperationCancelledError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class LatestCallGuard:
    """
    Run at most one operation of a kind at a time.

    Starting a new operation cancels the one in flight. Each caller holds its
    own task as a ticket; a caller whose ticket is no longer current when the
    task settles receives ``OperationCancelledError`` whatever the outcome, so
    stale results never reach shared state. Callers must apply their result
    synchronously after ``run`` returns.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._task: Optional[asyncio.Future] = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Supersede the in-flight operation without starting a new one."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            logger.debug("Cancelling in-flight %s", self._name)
            task.cancel()

    async def run(self, operation: Awaitable[T]) -> T:
        self.cancel()
        task = asyncio.ensure_future(operation)
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if self._task is not task:
                raise OperationCancelledError(f"{self._name} was superseded.") from None
            # The caller itself was cancelled.
            self._task = None
            raise
        except Exception:
            if self._task is not task:
                raise OperationCancelledError(f"{self._name} was superseded.") from None
            self._task = None
            raise

        if self._task is not task:
            logger.debug("Discarding stale %s result", self._name)
            raise OperationCancelledError(f"{self._name} was superseded.")
        self._task = None
        return result


__all__ = ["LatestCallGuard"]
