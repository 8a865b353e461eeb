from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class OfflineEarnings:
    """Production credited for time the simulation was not ticking.

    Computing this never touches balances; pass it to
    ``EconomyEngine.apply_offline_earnings`` to commit.
    """

    hours: float = 0.0
    seconds: float = 0.0
    currency_earnings: dict[str, float] = field(default_factory=dict)
    generator_breakdown: dict[str, float] = field(default_factory=dict)
    total_earned: float = 0.0

    def add(self, currency_id: str, generator_id: str, amount: float) -> None:
        self.currency_earnings[currency_id] = (
            self.currency_earnings.get(currency_id, 0.0) + amount
        )
        self.generator_breakdown[generator_id] = (
            self.generator_breakdown.get(generator_id, 0.0) + amount
        )
        self.total_earned += amount

    @property
    def is_empty(self) -> bool:
        return not self.currency_earnings


def clamp_offline_hours(elapsed_seconds: float, cap_hours: float) -> float:
    """Elapsed time in hours, clamped to ``[0, cap_hours]``."""
    return max(0.0, min(elapsed_seconds / 3600.0, cap_hours))
