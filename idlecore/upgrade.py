from __future__ import annotations

from dataclasses import dataclass, field

ALL_GENERATORS = "all"


@dataclass(frozen=True)
class UpgradeConditionDef:
    """Conditions that gate an upgrade purchase."""

    generator_id: str | None = None
    min_level: int = 0
    currency_id: str | None = None
    min_total: float = 0.0


@dataclass(frozen=True)
class UpgradeEffectDef:
    """Raw, declarative description of an upgrade's effect."""

    type: str = ""
    target: str = ALL_GENERATORS
    percent: float = 0.0
    amount_per_sec: float = 0.0
    amount: float = 0.0


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of a one-shot upgrade."""

    id: str
    name: str = ""
    description: str = ""
    price: float = 0.0
    conditions: UpgradeConditionDef = field(default_factory=UpgradeConditionDef)
    effect: UpgradeEffectDef = field(default_factory=UpgradeEffectDef)
    icon_id: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.id)


@dataclass(frozen=True)
class AchievementDef:
    """Achievement metadata. Carried for platform sinks, never evaluated."""

    id: str
    name: str = ""
    description: str = ""
