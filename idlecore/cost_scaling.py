from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from idlecore.errors import ConfigurationError

if TYPE_CHECKING:
    from idlecore.generator import CostCurveDef


def linear(base_cost: float, step: float, level: int) -> float:
    """Cost = base + step * level."""
    return base_cost + step * level


def geometric(base_cost: float, growth: float, level: int) -> float:
    """Cost = base * growth^level."""
    return base_cost * growth ** level


def polynomial(base_cost: float, a: float, b: float, level: int) -> float:
    """Cost = base * (1 + a*level + b*level^2)."""
    return base_cost * (1.0 + a * level + b * level * level)


class CostScaling:
    """Maps a generator's owned level to the price of its next level."""

    def __init__(self, name: str, fn: Callable[[float, int], float]) -> None:
        self.name = name
        self._fn = fn

    def compute(self, base_cost: float, current_level: int) -> float:
        return self._fn(base_cost, max(0, current_level))

    def __repr__(self) -> str:
        return f"CostScaling({self.name})"

    @classmethod
    def linear(cls, step: float = 1.0) -> CostScaling:
        return cls("linear", lambda base, level: linear(base, step, level))

    @classmethod
    def geometric(cls, growth: float = 1.07) -> CostScaling:
        return cls("geometric", lambda base, level: geometric(base, growth, level))

    @classmethod
    def polynomial(cls, a: float = 0.0, b: float = 0.0) -> CostScaling:
        return cls("polynomial", lambda base, level: polynomial(base, a, b, level))

    @classmethod
    def from_def(cls, curve: CostCurveDef) -> CostScaling:
        """Compile a declarative curve. Unknown types are a configuration error."""
        kind = (curve.type or "").lower()
        if kind == "linear":
            return cls.linear(curve.step)
        if kind == "geometric":
            return cls.geometric(curve.growth)
        if kind == "polynomial":
            return cls.polynomial(curve.a, curve.b)
        raise ConfigurationError(f"Unknown cost curve {curve.type!r}")
