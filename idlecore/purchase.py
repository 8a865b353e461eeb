from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PurchaseFailure(Enum):
    """Why a purchase was refused. Values are display strings."""

    GENERATOR_NOT_FOUND = "Generator not found"
    GENERATOR_LOCKED = "Generator locked"
    MAX_LEVEL_REACHED = "Max level reached"
    INSUFFICIENT_CURRENCY = "Insufficient currency"
    ALREADY_PURCHASED = "Already purchased"
    UPGRADE_NOT_FOUND = "Upgrade not found"
    GENERATOR_LEVEL_TOO_LOW = "Generator level too low"
    INSUFFICIENT_TOTAL = "Insufficient total currency"


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a purchase check or attempt. Truthy on success."""

    success: bool
    reason: PurchaseFailure | None = None
    currency_id: str = ""
    cost: float = 0.0

    def __bool__(self) -> bool:
        return self.success

    @property
    def message(self) -> str:
        return self.reason.value if self.reason is not None else ""

    @classmethod
    def ok(cls, currency_id: str, cost: float) -> PurchaseResult:
        return cls(success=True, currency_id=currency_id, cost=cost)

    @classmethod
    def fail(cls, reason: PurchaseFailure) -> PurchaseResult:
        return cls(success=False, reason=reason)
