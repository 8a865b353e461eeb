from __future__ import annotations

from typing import Iterable

from idlecore.effect import Effect, EffectType, normalize_target
from idlecore.upgrade import ALL_GENERATORS


class ModifierIndex:
    """Keyed aggregates of every active upgrade effect.

    Three independent aggregates, each keyed by "all" or a generator id:
    multipliers (start 1.0, multiplied by 1+percent), additives (start 0.0,
    summed) and cost reductions (start 1.0, multiplied by max(0, 1-percent)).
    The index is only ever rebuilt from a full list of effects.
    """

    def __init__(self) -> None:
        self.multipliers: dict[str, float] = {}
        self.additives: dict[str, float] = {}
        self.cost_reductions: dict[str, float] = {}

    @classmethod
    def build(cls, effects: Iterable[Effect]) -> ModifierIndex:
        index = cls()
        index.rebuild(effects)
        return index

    def rebuild(self, effects: Iterable[Effect]) -> None:
        """Clear every aggregate and replay *effects* in order."""
        self.multipliers.clear()
        self.additives.clear()
        self.cost_reductions.clear()
        for effect in effects:
            self.apply(effect)

    def apply(self, effect: Effect) -> None:
        key = normalize_target(effect.target)
        if effect.type is EffectType.MULTIPLIER:
            self.multipliers[key] = self.multipliers.get(key, 1.0) * (1.0 + effect.value)
        elif effect.type is EffectType.ADDITIVE:
            self.additives[key] = self.additives.get(key, 0.0) + effect.value
        elif effect.type is EffectType.COST_REDUCTION:
            self.cost_reductions[key] = self.cost_reductions.get(key, 1.0) * max(
                0.0, 1.0 - effect.value
            )

    # ── Effective values per generator ───────────────────────────────

    def multiplier(self, generator_id: str, external: float = 1.0) -> float:
        # all-then-specific, external last
        value = 1.0
        if ALL_GENERATORS in self.multipliers:
            value *= self.multipliers[ALL_GENERATORS]
        if generator_id in self.multipliers:
            value *= self.multipliers[generator_id]
        return value * external

    def additive(self, generator_id: str) -> float:
        value = 0.0
        if ALL_GENERATORS in self.additives:
            value += self.additives[ALL_GENERATORS]
        if generator_id in self.additives:
            value += self.additives[generator_id]
        return value

    def cost_reduction(self, generator_id: str) -> float:
        value = 1.0
        if ALL_GENERATORS in self.cost_reductions:
            value *= self.cost_reductions[ALL_GENERATORS]
        if generator_id in self.cost_reductions:
            value *= self.cost_reductions[generator_id]
        return value

    def snapshot(self) -> dict[str, dict[str, float]]:
        return {
            "multipliers": dict(self.multipliers),
            "additives": dict(self.additives),
            "cost_reductions": dict(self.cost_reductions),
        }


def production_rate(
    base_rate_per_sec: float, level: int, multiplier: float, additive: float
) -> float:
    """Per-second output of one generator, floored at zero."""
    if level <= 0:
        return 0.0
    return max(0.0, base_rate_per_sec * level * multiplier + additive)
