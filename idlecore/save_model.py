from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from idlecore.clock import EPOCH
from idlecore.errors import PersistenceError

CURRENT_VERSION = 1


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _parse_timestamp(value: Any) -> datetime:
    if value in (None, ""):
        return EPOCH
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class SaveModel:
    """Persisted snapshot of economy and prestige state.

    Wire keys are camelCase so records stay compatible with older clients.
    A record without a ``version`` key is treated as version 0.
    """

    version: int = CURRENT_VERSION
    last_save_at: datetime = EPOCH
    currencies: dict[str, float] = field(default_factory=dict)
    generators: dict[str, int] = field(default_factory=dict)
    purchased_upgrades: list[str] = field(default_factory=list)
    lifetime_per_generator: dict[str, float] = field(default_factory=dict)
    total_lifetime_produced: float = 0.0
    prestige_currency: float = 0.0
    last_prestige_at: datetime = EPOCH

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "lastSaveUtc": _format_timestamp(self.last_save_at),
            "currencies": dict(self.currencies),
            "generators": dict(self.generators),
            "purchasedUpgrades": list(self.purchased_upgrades),
            "lifetimePerGenerator": dict(self.lifetime_per_generator),
            "totalLifetimeProduced": self.total_lifetime_produced,
            "prestigeCurrency": self.prestige_currency,
            "lastPrestigeUtc": _format_timestamp(self.last_prestige_at),
        }

    @classmethod
    def from_dict(cls, data: Any) -> SaveModel:
        if not isinstance(data, dict):
            raise PersistenceError(
                f"Save record must be an object, got {type(data).__name__}"
            )
        try:
            return cls(
                version=int(data.get("version", 0)),
                last_save_at=_parse_timestamp(data.get("lastSaveUtc")),
                currencies={
                    str(k): float(v) for k, v in (data.get("currencies") or {}).items()
                },
                generators={
                    str(k): int(v) for k, v in (data.get("generators") or {}).items()
                },
                purchased_upgrades=[str(u) for u in data.get("purchasedUpgrades") or []],
                lifetime_per_generator={
                    str(k): float(v)
                    for k, v in (data.get("lifetimePerGenerator") or {}).items()
                },
                total_lifetime_produced=float(data.get("totalLifetimeProduced", 0.0)),
                prestige_currency=float(data.get("prestigeCurrency", 0.0)),
                last_prestige_at=_parse_timestamp(data.get("lastPrestigeUtc")),
            )
        except (TypeError, ValueError, AttributeError) as exc:
            raise PersistenceError(f"Malformed save record: {exc}") from exc
