from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from idlecore.definition import ContentCatalog
from idlecore.events import Event
from idlecore.generator import GeneratorStatus
from idlecore.offline import OfflineEarnings, clamp_offline_hours
from idlecore.pipeline import ModifierIndex, production_rate
from idlecore.purchase import PurchaseFailure, PurchaseResult
from idlecore.state import EconomyState

if TYPE_CHECKING:
    from idlecore.save_model import SaveModel

logger = logging.getLogger(__name__)


class EconomyEngine:
    """Authoritative owner of balances, generator levels and upgrades.

    All calls are expected to arrive serially from one thread of control.
    ``tick`` is the only path by which production grows balances.
    """

    def __init__(self, catalog: ContentCatalog) -> None:
        self.catalog = catalog
        self.state = EconomyState(catalog)
        self.modifiers = ModifierIndex()
        self.state_changed = Event()
        self._external_multiplier = 1.0

    # ── Core loop ────────────────────────────────────────────────────

    def tick(self, delta: float) -> None:
        """Advance production by *delta* seconds."""
        if delta <= 0:
            return

        for gdef in self.catalog.generators:
            gs = self.state.generators[gdef.id]
            if gs.level <= 0:
                continue
            produced = self.production_per_sec(gdef.id) * delta
            if produced <= 0:
                continue
            self.add_currency(gdef.currency_id, produced)
            gs.lifetime_produced += produced
            self.state.total_lifetime_produced += produced

        self.state_changed.emit()

    # ── Player actions ───────────────────────────────────────────────

    def can_buy_generator_level(self, generator_id: str) -> PurchaseResult:
        gdef = self.catalog.get_generator(generator_id)
        if gdef is None:
            return PurchaseResult.fail(PurchaseFailure.GENERATOR_NOT_FOUND)

        if not self.is_generator_unlocked(generator_id):
            return PurchaseResult.fail(PurchaseFailure.GENERATOR_LOCKED)

        level = self.state.level(generator_id)
        if gdef.max_level is not None and level >= gdef.max_level:
            return PurchaseResult.fail(PurchaseFailure.MAX_LEVEL_REACHED)

        cost = self.next_generator_cost(generator_id)
        if self.state.balance(gdef.currency_id) < cost:
            return PurchaseResult.fail(PurchaseFailure.INSUFFICIENT_CURRENCY)

        return PurchaseResult.ok(gdef.currency_id, cost)

    def try_buy_generator_level(self, generator_id: str) -> PurchaseResult:
        """Buy one level. Mutates nothing unless every check passes."""
        result = self.can_buy_generator_level(generator_id)
        if not result:
            return result

        self._spend(result.currency_id, result.cost)
        self.state.generators[generator_id].level += 1
        logger.debug(
            "Bought %s level %d for %.4f %s",
            generator_id,
            self.state.level(generator_id),
            result.cost,
            result.currency_id,
        )
        self.state_changed.emit()
        return result

    def can_purchase_upgrade(self, upgrade_id: str) -> PurchaseResult:
        if self.state.has_upgrade(upgrade_id):
            return PurchaseResult.fail(PurchaseFailure.ALREADY_PURCHASED)

        udef = self.catalog.get_upgrade(upgrade_id)
        if udef is None:
            return PurchaseResult.fail(PurchaseFailure.UPGRADE_NOT_FOUND)

        unmet = self.catalog.upgrade_conditions(upgrade_id).unmet(self.state)
        if unmet is not None:
            return PurchaseResult.fail(unmet.failure)

        currency_id = self.catalog.upgrade_currency_id(upgrade_id)
        if self.state.balance(currency_id) < udef.price:
            return PurchaseResult.fail(PurchaseFailure.INSUFFICIENT_CURRENCY)

        return PurchaseResult.ok(currency_id, udef.price)

    def try_buy_upgrade(self, upgrade_id: str) -> PurchaseResult:
        result = self.can_purchase_upgrade(upgrade_id)
        if not result:
            return result

        self._spend(result.currency_id, result.cost)
        self.state.purchased_upgrades.append(upgrade_id)
        self.rebuild_modifiers()
        logger.debug("Bought upgrade %s for %.4f %s", upgrade_id, result.cost, result.currency_id)
        self.state_changed.emit()
        return result

    def add_currency(self, currency_id: str, amount: float) -> None:
        """Credit a balance, creating it if unseen."""
        self.state.balances[currency_id] = self.state.balance(currency_id) + amount

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def external_multiplier(self) -> float:
        return self._external_multiplier

    def set_external_multiplier(self, multiplier: float) -> None:
        """Global multiplier applied on top of upgrades (prestige)."""
        self._external_multiplier = max(0.0, multiplier)

    def is_generator_unlocked(self, generator_id: str) -> bool:
        return self.catalog.unlock_requirement(generator_id).evaluate(self.state)

    def production_per_sec(self, generator_id: str) -> float:
        gdef = self.catalog.get_generator(generator_id)
        if gdef is None:
            raise KeyError(f"Unknown generator {generator_id!r}")
        level = self.state.level(generator_id)
        if level <= 0:
            return 0.0
        return production_rate(
            gdef.base_rate_per_sec,
            level,
            self.modifiers.multiplier(generator_id, self._external_multiplier),
            self.modifiers.additive(generator_id),
        )

    def total_production_per_sec(self) -> float:
        total = 0.0
        for gdef in self.catalog.generators:
            total += self.production_per_sec(gdef.id)
        return total

    def next_generator_cost(self, generator_id: str) -> float:
        """Price of the next level after cost reductions."""
        if self.catalog.get_generator(generator_id) is None:
            raise KeyError(f"Unknown generator {generator_id!r}")
        base = self.catalog.generator_cost(generator_id, self.state.level(generator_id))
        return base * self.modifiers.cost_reduction(generator_id)

    def generator_statuses(self) -> list[GeneratorStatus]:
        result: list[GeneratorStatus] = []
        for gdef in self.catalog.generators:
            result.append(
                GeneratorStatus(
                    id=gdef.id,
                    name=gdef.name,
                    currency_id=gdef.currency_id,
                    level=self.state.level(gdef.id),
                    max_level=gdef.max_level,
                    production_per_sec=self.production_per_sec(gdef.id),
                    next_cost=self.next_generator_cost(gdef.id),
                    unlocked=self.is_generator_unlocked(gdef.id),
                    affordable=bool(self.can_buy_generator_level(gdef.id)),
                )
            )
        return result

    # ── Offline earnings ─────────────────────────────────────────────

    def compute_offline_earnings(
        self, last: datetime, now: datetime, cap_hours: float
    ) -> OfflineEarnings:
        """What the generators would have produced between *last* and *now*."""
        hours = clamp_offline_hours((now - last).total_seconds(), cap_hours)
        seconds = hours * 3600.0
        result = OfflineEarnings(hours=hours, seconds=seconds)
        if seconds <= 0:
            return result

        for gdef in self.catalog.generators:
            per_sec = self.production_per_sec(gdef.id)
            if per_sec <= 0:
                continue
            result.add(gdef.currency_id, gdef.id, per_sec * seconds)
        return result

    def apply_offline_earnings(self, result: OfflineEarnings) -> None:
        for currency_id, amount in result.currency_earnings.items():
            self.add_currency(currency_id, amount)
        self.state_changed.emit()

    # ── Reset / restore ──────────────────────────────────────────────

    def reset_progress(self) -> None:
        """Wipe run progress back to catalog starting values."""
        for gs in self.state.generators.values():
            gs.level = 0
            gs.lifetime_produced = 0.0

        for currency_id in self.state.balances:
            self.state.balances[currency_id] = self.catalog.starting_balance(currency_id)

        self.state.purchased_upgrades.clear()
        self.rebuild_modifiers()
        self.state.total_lifetime_produced = 0.0
        self.state_changed.emit()

    def load_state(self, model: SaveModel) -> None:
        """Overwrite runtime state from a (migrated) save model."""
        for currency_id, balance in model.currencies.items():
            self.state.balances[currency_id] = max(0.0, balance)

        for generator_id, gs in self.state.generators.items():
            gs.level = max(0, int(model.generators.get(generator_id, 0)))
            gs.lifetime_produced = float(model.lifetime_per_generator.get(generator_id, 0.0))

        self.state.purchased_upgrades.clear()
        for upgrade_id in model.purchased_upgrades:
            if self.catalog.get_upgrade(upgrade_id) is None:
                logger.warning("Dropping unknown upgrade %r from save", upgrade_id)
                continue
            if upgrade_id not in self.state.purchased_upgrades:
                self.state.purchased_upgrades.append(upgrade_id)

        self.rebuild_modifiers()
        self.state.total_lifetime_produced = model.total_lifetime_produced
        self.state_changed.emit()

    def rebuild_modifiers(self) -> None:
        """Replay every purchased upgrade into a fresh modifier index."""
        self.modifiers.rebuild(
            self.catalog.upgrade_effect(uid) for uid in self.state.purchased_upgrades
        )

    # ── Private helpers ──────────────────────────────────────────────

    def _spend(self, currency_id: str, amount: float) -> None:
        # floor only; callers have already checked affordability
        self.state.balances[currency_id] = max(0.0, self.state.balance(currency_id) - amount)
