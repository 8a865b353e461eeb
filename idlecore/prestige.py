from __future__ import annotations

import logging
import math
from datetime import datetime

from idlecore.clock import Clock, system_clock
from idlecore.definition import ContentCatalog
from idlecore.economy import EconomyEngine
from idlecore.events import Event

logger = logging.getLogger(__name__)

MULTIPLIER_PER_POINT = 0.05


def prestige_multiplier(prestige_currency: float) -> float:
    return 1.0 + prestige_currency * MULTIPLIER_PER_POINT


class PrestigeEngine:
    """Converts lifetime production into a permanent global multiplier."""

    def __init__(
        self,
        economy: EconomyEngine,
        catalog: ContentCatalog,
        clock: Clock = system_clock,
    ) -> None:
        self.economy = economy
        self.catalog = catalog
        self.clock = clock
        self.prestige_occurred = Event()
        self.prestige_currency: float = 0.0
        self.last_prestige_at: datetime = clock()
        self._push_multiplier()

    @property
    def multiplier(self) -> float:
        return prestige_multiplier(self.prestige_currency)

    def calculate_prestige(self, total_lifetime_produced: float) -> int:
        formula = self.catalog.theme.prestige_formula
        safe_b = max(1.0, formula.b)
        value = formula.a * math.sqrt(max(0.0, total_lifetime_produced) / safe_b)
        return max(0, math.floor(value))

    def preview_prestige(self) -> int:
        """Payout a prestige would award right now."""
        return self.calculate_prestige(self.economy.state.total_lifetime_produced)

    def perform_prestige(self) -> int:
        """Reset the economy for prestige currency. Returns the payout (0 = no-op)."""
        earned = self.preview_prestige()
        if earned <= 0:
            return 0

        self.prestige_currency += earned
        self.economy.reset_progress()
        self._push_multiplier()
        self.last_prestige_at = self.clock()
        logger.debug(
            "Prestige awarded %d (total %.2f, multiplier %.2f)",
            earned,
            self.prestige_currency,
            self.multiplier,
        )
        self.prestige_occurred.emit(earned)
        return earned

    def load_state(self, prestige_currency: float, last_prestige_at: datetime) -> None:
        self.prestige_currency = prestige_currency
        self.last_prestige_at = last_prestige_at
        self._push_multiplier()

    def _push_multiplier(self) -> None:
        self.economy.set_external_multiplier(self.multiplier)
