from __future__ import annotations

import logging

from idlecore.cipher import SaveCipher
from idlecore.clock import Clock, system_clock
from idlecore.definition import ContentCatalog
from idlecore.economy import EconomyEngine
from idlecore.offline import OfflineEarnings
from idlecore.persistence import SaveConfig, SavePersistence
from idlecore.prestige import PrestigeEngine
from idlecore.ticker import DEFAULT_TICK_RATE, FixedStepTicker

logger = logging.getLogger(__name__)


class GameSession:
    """Wires the engines together with explicit dependencies.

    The ticker drives ``EconomyEngine.tick`` and the autosave cadence at a
    fixed step; callers feed it real elapsed time through ``advance``.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        clock: Clock = system_clock,
        cipher: SaveCipher | None = None,
        save_config: SaveConfig | None = None,
        tick_rate: float = DEFAULT_TICK_RATE,
    ) -> None:
        self.catalog = catalog
        self.clock = clock
        self.economy = EconomyEngine(catalog)
        self.prestige = PrestigeEngine(self.economy, catalog, clock)
        self.persistence = SavePersistence(
            self.economy, self.prestige, clock, cipher=cipher, config=save_config
        )
        self.ticker = FixedStepTicker(tick_rate)
        self.ticker.subscribe(self._on_step)

    def start(self, apply_offline: bool = True) -> OfflineEarnings | None:
        """Restore the save and reconcile time spent away.

        Returns the offline earnings computed from the save timestamp, or
        None when there was no save to restore.
        """
        had_save = self.persistence.save_path.exists()
        model = self.persistence.load_or_default()
        if not had_save:
            return None

        earnings = self.economy.compute_offline_earnings(
            model.last_save_at, self.clock(), self.catalog.theme.offline_cap_hours
        )
        if apply_offline and not earnings.is_empty:
            self.economy.apply_offline_earnings(earnings)
            logger.info("Applied %.2fh of offline earnings", earnings.hours)
        return earnings

    def advance(self, real_delta: float) -> int:
        return self.ticker.advance(real_delta)

    def _on_step(self, delta: float) -> None:
        self.economy.tick(delta)
        self.persistence.update(delta)
