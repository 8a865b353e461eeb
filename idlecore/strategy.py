from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from idlecore.economy import EconomyEngine
    from idlecore.prestige import PrestigeEngine


@dataclass(frozen=True)
class Purchase:
    """One purchase a strategy wants to make."""

    kind: str  # "generator" or "upgrade"
    id: str
    cost: float


class Strategy(ABC):
    """Decides what an automated player buys each step."""

    @abstractmethod
    def choose(self, economy: EconomyEngine) -> Purchase | None: ...

    def should_prestige(self, prestige: PrestigeEngine) -> bool:
        return False

    @abstractmethod
    def describe(self) -> str: ...

    def play_step(self, economy: EconomyEngine, max_purchases: int = 100) -> list[Purchase]:
        """Buy until the strategy passes or the cap is hit."""
        bought: list[Purchase] = []
        while len(bought) < max_purchases:
            choice = self.choose(economy)
            if choice is None:
                break
            if choice.kind == "upgrade":
                result = economy.try_buy_upgrade(choice.id)
            else:
                result = economy.try_buy_generator_level(choice.id)
            if not result:
                break
            bought.append(choice)
        return bought


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable generator level or upgrade first."""

    def __init__(self, buy_upgrades: bool = True, prestige_at: int = 0) -> None:
        self.buy_upgrades = buy_upgrades
        self.prestige_at = prestige_at  # minimum payout; 0 = never

    def choose(self, economy: EconomyEngine) -> Purchase | None:
        options: list[Purchase] = []
        for gdef in economy.catalog.generators:
            result = economy.can_buy_generator_level(gdef.id)
            if result:
                options.append(Purchase("generator", gdef.id, result.cost))
        if self.buy_upgrades:
            for udef in economy.catalog.upgrades:
                result = economy.can_purchase_upgrade(udef.id)
                if result:
                    options.append(Purchase("upgrade", udef.id, result.cost))
        if not options:
            return None
        return min(options, key=lambda p: p.cost)

    def should_prestige(self, prestige: PrestigeEngine) -> bool:
        return self.prestige_at > 0 and prestige.preview_prestige() >= self.prestige_at

    def describe(self) -> str:
        parts = ["GreedyCheapest"]
        if not self.buy_upgrades:
            parts.append("generators only")
        if self.prestige_at > 0:
            parts.append(f"prestige at {self.prestige_at}")
        return " / ".join(parts)
