from __future__ import annotations

from typing import Callable


class Event:
    """Synchronous, fire-and-forget notification surface."""

    def __init__(self) -> None:
        self._handlers: list[Callable[..., None]] = []

    def subscribe(self, handler: Callable[..., None]) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: Callable[..., None]) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args: object) -> None:
        for handler in list(self._handlers):
            handler(*args)

    def __len__(self) -> int:
        return len(self._handlers)
