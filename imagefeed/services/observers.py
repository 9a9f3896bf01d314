"""Typed subscriber lists owned by the components that emit change events."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from imagefeed.core.context import MainContext

E = TypeVar("E")
Observer = Callable[[E], None]

logger = logging.getLogger(__name__)


class Observable(Generic[E]):
    """Synchronous broadcast of ``E`` events on the main context."""

    def __init__(self, context: MainContext, name: str) -> None:
        self._context = context
        self._name = name
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` and return a callable that unsubscribes it."""
        if observer not in self._observers:
            self._observers.append(observer)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def emit(self, event: E) -> None:
        self._context.assert_main(f"{self._name}.emit")
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception("%s observer failed handling %r", self._name, event)

    def __len__(self) -> int:
        return len(self._observers)


__all__ = ["Observable", "Observer"]
