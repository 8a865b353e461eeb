from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from idlecore.errors import ConfigurationError
from idlecore.upgrade import ALL_GENERATORS

if TYPE_CHECKING:
    from idlecore.upgrade import UpgradeEffectDef


class EffectType(Enum):
    MULTIPLIER = "multiplier"
    ADDITIVE = "additive"
    COST_REDUCTION = "costreduction"


def normalize_target(target: str | None) -> str:
    """Empty targets and any casing of "all" mean every generator."""
    if not target or target.lower() == ALL_GENERATORS:
        return ALL_GENERATORS
    return target


@dataclass(frozen=True)
class Effect:
    """Compiled, stateless upgrade effect.

    ``value`` is a fraction for MULTIPLIER and COST_REDUCTION (0.25 = 25%)
    and an amount per second for ADDITIVE.
    """

    type: EffectType
    target: str
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", normalize_target(self.target))

    @staticmethod
    def multiplier(target: str, percent: float) -> Effect:
        return Effect(EffectType.MULTIPLIER, target, percent)

    @staticmethod
    def additive(target: str, amount_per_sec: float) -> Effect:
        return Effect(EffectType.ADDITIVE, target, amount_per_sec)

    @staticmethod
    def cost_reduction(target: str, percent: float) -> Effect:
        return Effect(EffectType.COST_REDUCTION, target, percent)

    @staticmethod
    def compile(definition: UpgradeEffectDef) -> Effect:
        """Build the runtime effect for a declarative definition."""
        kind = (definition.type or "").lower()
        if kind == EffectType.MULTIPLIER.value:
            return Effect.multiplier(definition.target, definition.percent)
        if kind == EffectType.ADDITIVE.value:
            amount = definition.amount_per_sec if definition.amount_per_sec != 0 else definition.amount
            return Effect.additive(definition.target, amount)
        if kind == EffectType.COST_REDUCTION.value:
            return Effect.cost_reduction(definition.target, definition.percent)
        raise ConfigurationError(f"Unknown upgrade effect type {definition.type!r}")
