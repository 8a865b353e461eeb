from __future__ import annotations

from typing import TYPE_CHECKING

from idlecore.generator import GeneratorState

if TYPE_CHECKING:
    from idlecore.definition import ContentCatalog


class EconomyState:
    """Mutable runtime container for balances, levels and purchases."""

    def __init__(self, catalog: ContentCatalog) -> None:
        self.balances: dict[str, float] = {}
        self.generators: dict[str, GeneratorState] = {}
        # purchase order is kept so modifier replay is reproducible
        self.purchased_upgrades: list[str] = []
        self.total_lifetime_produced: float = 0.0

        for cdef in catalog.currencies:
            self.balances[cdef.id] = catalog.starting_balance(cdef.id)

        for gdef in catalog.generators:
            self.generators[gdef.id] = GeneratorState()

    def balance(self, id: str) -> float:
        return self.balances.get(id, 0.0)

    def level(self, id: str) -> int:
        gs = self.generators.get(id)
        return gs.level if gs else 0

    def lifetime_produced(self, id: str) -> float:
        gs = self.generators.get(id)
        return gs.lifetime_produced if gs else 0.0

    def has_upgrade(self, id: str) -> bool:
        return id in self.purchased_upgrades
