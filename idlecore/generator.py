from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CostCurveDef:
    """How a generator's price grows with its level."""

    type: str = "linear"
    step: float = 1.0
    growth: float = 1.07
    a: float = 0.0
    b: float = 0.0


@dataclass(frozen=True)
class UnlockRequirementDef:
    """Unlock conditions for a generator. Each one is optional."""

    currency_id: str | None = None
    amount: float = 0.0
    generator_id: str | None = None
    min_level: int = 0


@dataclass(frozen=True)
class GeneratorDef:
    """Static definition of a generator."""

    id: str
    currency_id: str
    name: str = ""
    base_cost: float = 0.0
    cost_curve: CostCurveDef = field(default_factory=CostCurveDef)
    base_rate_per_sec: float = 0.0
    unlock: UnlockRequirementDef = field(default_factory=UnlockRequirementDef)
    max_level: int | None = None
    icon_id: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.id)


@dataclass
class GeneratorState:
    """Mutable runtime state for a generator."""

    level: int = 0
    lifetime_produced: float = 0.0


@dataclass(frozen=True)
class GeneratorStatus:
    """Read-only snapshot of a generator for query results."""

    id: str
    name: str
    currency_id: str
    level: int
    max_level: int | None
    production_per_sec: float
    next_cost: float
    unlocked: bool
    affordable: bool
