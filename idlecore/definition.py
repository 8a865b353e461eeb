from __future__ import annotations

from dataclasses import dataclass, field

from idlecore.cost_scaling import CostScaling
from idlecore.currency import CurrencyDef
from idlecore.effect import Effect, normalize_target
from idlecore.errors import ConfigurationError
from idlecore.generator import GeneratorDef
from idlecore.requirement import Req, Requirement
from idlecore.upgrade import ALL_GENERATORS, AchievementDef, UpgradeDef


@dataclass(frozen=True)
class PrestigeFormulaDef:
    """Parameters of ``floor(A * sqrt(total / B))``."""

    a: float = 1.0
    b: float = 1.0


@dataclass(frozen=True)
class ThemeDef:
    """Skin presentation and meta tuning."""

    starting_balances: dict[str, float] = field(default_factory=dict)
    offline_cap_hours: float = 12.0
    prestige_formula: PrestigeFormulaDef = field(default_factory=PrestigeFormulaDef)
    primary_color: str = "#FFFFFF"
    font_id: str = "default"
    sfx_pack_id: str = ""
    art_atlas_id: str = ""


@dataclass
class ContentCatalog:
    """Complete, validated content for one skin. Read-only once built.

    Construction compiles cost curves, upgrade effects and purchase
    requirements, then checks every cross reference. Any problem raises a
    single ConfigurationError listing all of them.
    """

    currencies: list[CurrencyDef] = field(default_factory=list)
    generators: list[GeneratorDef] = field(default_factory=list)
    upgrades: list[UpgradeDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)
    theme: ThemeDef = field(default_factory=ThemeDef)
    name: str = ""

    # Lookup dicts built in __post_init__
    _currencies_by_id: dict[str, CurrencyDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _generators_by_id: dict[str, GeneratorDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _upgrades_by_id: dict[str, UpgradeDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _starting_balances: dict[str, float] = field(
        default_factory=dict, init=False, repr=False
    )
    _cost_scalings: dict[str, CostScaling] = field(
        default_factory=dict, init=False, repr=False
    )
    _unlocks: dict[str, Requirement] = field(
        default_factory=dict, init=False, repr=False
    )
    _effects: dict[str, Effect] = field(default_factory=dict, init=False, repr=False)
    _conditions: dict[str, Requirement] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.currencies = list(self.currencies)
        self.generators = list(self.generators)
        self.upgrades = list(self.upgrades)
        self.achievements = list(self.achievements)

        self._currencies_by_id = {c.id: c for c in self.currencies}
        self._generators_by_id = {g.id: g for g in self.generators}
        self._upgrades_by_id = {u.id: u for u in self.upgrades}

        self._starting_balances = dict(self.theme.starting_balances)
        for c in self.currencies:
            self._starting_balances.setdefault(c.id, c.start)

        errors = self.validate()
        errors.extend(self._compile())
        if errors:
            raise ConfigurationError(
                "Invalid ContentCatalog:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    # ── Lookups ──────────────────────────────────────────────────────

    @property
    def primary_currency_id(self) -> str:
        """The default soft currency: the first one declared."""
        return self.currencies[0].id if self.currencies else ""

    def get_currency(self, id: str) -> CurrencyDef | None:
        return self._currencies_by_id.get(id)

    def get_generator(self, id: str) -> GeneratorDef | None:
        return self._generators_by_id.get(id)

    def get_upgrade(self, id: str) -> UpgradeDef | None:
        return self._upgrades_by_id.get(id)

    def starting_balance(self, currency_id: str) -> float:
        """Theme override, else the currency's own start, else 0."""
        return self._starting_balances.get(currency_id, 0.0)

    def cost_scaling(self, generator_id: str) -> CostScaling:
        return self._cost_scalings[generator_id]

    def unlock_requirement(self, generator_id: str) -> Requirement:
        return self._unlocks[generator_id]

    def upgrade_effect(self, upgrade_id: str) -> Effect:
        try:
            return self._effects[upgrade_id]
        except KeyError:
            raise KeyError(f"Upgrade effect not found for id {upgrade_id!r}") from None

    def upgrade_conditions(self, upgrade_id: str) -> Requirement:
        return self._conditions[upgrade_id]

    def upgrade_currency_id(self, upgrade_id: str) -> str:
        """Currency an upgrade is priced in: its condition currency, else primary."""
        udef = self._upgrades_by_id[upgrade_id]
        return udef.conditions.currency_id or self.primary_currency_id

    def generator_cost(self, generator_id: str, level: int) -> float:
        """Undiscounted price of level ``level + 1``."""
        gdef = self._generators_by_id[generator_id]
        return self._cost_scalings[generator_id].compute(gdef.base_cost, level)

    # ── Validation ───────────────────────────────────────────────────

    def validate(self) -> list[str]:
        """Check cross references. Returns list of error messages."""
        errors: list[str] = []
        currency_ids = {c.id for c in self.currencies}
        generator_ids = {g.id for g in self.generators}

        for kind, items in (
            ("currency", self.currencies),
            ("generator", self.generators),
            ("upgrade", self.upgrades),
            ("achievement", self.achievements),
        ):
            seen: set[str] = set()
            for item in items:
                if not item.id:
                    errors.append(f"Empty {kind} ID")
                elif item.id in seen:
                    errors.append(f"Duplicate {kind} ID: {item.id!r}")
                seen.add(item.id)

        for g in self.generators:
            if g.currency_id not in currency_ids:
                errors.append(
                    f"Generator {g.id!r} references missing currency {g.currency_id!r}"
                )
            if g.unlock.currency_id and g.unlock.currency_id not in currency_ids:
                errors.append(
                    f"Generator {g.id!r} unlock requires missing currency "
                    f"{g.unlock.currency_id!r}"
                )
            if g.unlock.generator_id and g.unlock.generator_id not in generator_ids:
                errors.append(
                    f"Generator {g.id!r} unlock requires missing generator "
                    f"{g.unlock.generator_id!r}"
                )
            if g.max_level is not None and g.max_level < 0:
                errors.append(f"Generator {g.id!r} has negative max level")

        for u in self.upgrades:
            cond = u.conditions
            if cond.generator_id and cond.generator_id not in generator_ids:
                errors.append(
                    f"Upgrade {u.id!r} references missing generator {cond.generator_id!r}"
                )
            if cond.currency_id and cond.currency_id not in currency_ids:
                errors.append(
                    f"Upgrade {u.id!r} references missing currency {cond.currency_id!r}"
                )
            target = normalize_target(u.effect.target)
            if target != ALL_GENERATORS and target not in generator_ids:
                errors.append(
                    f"Upgrade {u.id!r} effect targets missing generator {u.effect.target!r}"
                )

        if self.upgrades and not self.currencies:
            errors.append("Upgrades are defined but there is no currency to price them in")

        return errors

    def _compile(self) -> list[str]:
        """Build the runtime objects derived from definitions."""
        errors: list[str] = []
        for g in self.generators:
            try:
                self._cost_scalings[g.id] = CostScaling.from_def(g.cost_curve)
            except ConfigurationError as exc:
                errors.append(f"Generator {g.id!r}: {exc}")
            self._unlocks[g.id] = Req.unlock(g.unlock)

        for u in self.upgrades:
            try:
                self._effects[u.id] = Effect.compile(u.effect)
            except ConfigurationError as exc:
                errors.append(f"Upgrade {u.id!r}: {exc}")
            self._conditions[u.id] = Req.upgrade_conditions(
                u.conditions, self.primary_currency_id
            )
        return errors
