from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from idlecore.purchase import PurchaseFailure

if TYPE_CHECKING:
    from idlecore.generator import UnlockRequirementDef
    from idlecore.state import EconomyState
    from idlecore.upgrade import UpgradeConditionDef


class Requirement(ABC):
    """Base class for purchase preconditions on economy state."""

    failure: PurchaseFailure = PurchaseFailure.GENERATOR_LOCKED

    @abstractmethod
    def evaluate(self, state: EconomyState) -> bool: ...

    def unmet(self, state: EconomyState) -> Requirement | None:
        """Return the first requirement that does not hold, or None."""
        return None if self.evaluate(state) else self

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _BalanceRequirement(Requirement):
    def __init__(
        self, currency_id: str, threshold: float, failure: PurchaseFailure
    ) -> None:
        self.currency_id = currency_id
        self.threshold = threshold
        self.failure = failure

    def evaluate(self, state: EconomyState) -> bool:
        return state.balance(self.currency_id) >= self.threshold


class _LevelRequirement(Requirement):
    def __init__(
        self, generator_id: str, min_level: int, failure: PurchaseFailure
    ) -> None:
        self.generator_id = generator_id
        self.min_level = min_level
        self.failure = failure

    def evaluate(self, state: EconomyState) -> bool:
        if self.generator_id not in state.generators:
            return True
        return state.level(self.generator_id) >= self.min_level


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: EconomyState) -> bool:
        return all(r.evaluate(state) for r in self.reqs)

    def unmet(self, state: EconomyState) -> Requirement | None:
        for r in self.reqs:
            failed = r.unmet(state)
            if failed is not None:
                return failed
        return None


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def balance(
        currency_id: str,
        threshold: float,
        failure: PurchaseFailure = PurchaseFailure.GENERATOR_LOCKED,
    ) -> Requirement:
        return _BalanceRequirement(currency_id, threshold, failure)

    @staticmethod
    def level(
        generator_id: str,
        min_level: int,
        failure: PurchaseFailure = PurchaseFailure.GENERATOR_LOCKED,
    ) -> Requirement:
        return _LevelRequirement(generator_id, min_level, failure)

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def unlock(definition: UnlockRequirementDef) -> Requirement:
        """Generator unlock: currency threshold and prerequisite level, each optional."""
        reqs: list[Requirement] = []
        if definition.currency_id:
            reqs.append(Req.balance(definition.currency_id, definition.amount))
        if definition.generator_id:
            reqs.append(Req.level(definition.generator_id, definition.min_level))
        return _AllRequirement(reqs)

    @staticmethod
    def upgrade_conditions(
        definition: UpgradeConditionDef, primary_currency_id: str
    ) -> Requirement:
        """Upgrade gate: generator level, then currency total when positive."""
        reqs: list[Requirement] = []
        if definition.generator_id:
            reqs.append(
                Req.level(
                    definition.generator_id,
                    definition.min_level,
                    PurchaseFailure.GENERATOR_LEVEL_TOO_LOW,
                )
            )
        if definition.min_total > 0:
            reqs.append(
                Req.balance(
                    definition.currency_id or primary_currency_id,
                    definition.min_total,
                    PurchaseFailure.INSUFFICIENT_TOTAL,
                )
            )
        return _AllRequirement(reqs)
