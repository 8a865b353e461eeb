from __future__ import annotations

from typing import Callable

from idlecore.events import Event

DEFAULT_TICK_RATE = 10.0


class FixedStepTicker:
    """Turns irregular real-time deltas into fixed simulation steps."""

    def __init__(self, tick_rate: float = DEFAULT_TICK_RATE) -> None:
        self.tick_rate = max(0.1, tick_rate)
        self.running = True
        self.stepped = Event()
        self._accumulator = 0.0

    @property
    def step(self) -> float:
        return 1.0 / max(1.0, self.tick_rate)

    def subscribe(self, handler: Callable[[float], None]) -> None:
        self.stepped.subscribe(handler)

    def set_tick_rate(self, ticks_per_second: float) -> None:
        self.tick_rate = max(0.1, ticks_per_second)

    def pause(self) -> None:
        self.running = False

    def resume(self) -> None:
        self.running = True

    def advance(self, real_delta: float) -> int:
        """Feed elapsed real time; returns how many steps fired."""
        if not self.running:
            return 0
        self._accumulator += real_delta
        step = self.step
        steps = 0
        while self._accumulator >= step:
            self._accumulator -= step
            steps += 1
            self.stepped.emit(step)
        return steps
