"""Build a ContentCatalog from JSON skin files.

A skin is a directory holding ``currencies.json``, ``generators.json``,
``upgrades.json``, ``achievements.json`` and ``theme.json`` using the
camelCase keys of the content format.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from idlecore.currency import CurrencyDef
from idlecore.definition import ContentCatalog, PrestigeFormulaDef, ThemeDef
from idlecore.errors import ConfigurationError
from idlecore.generator import CostCurveDef, GeneratorDef, UnlockRequirementDef
from idlecore.upgrade import (
    ALL_GENERATORS,
    AchievementDef,
    UpgradeConditionDef,
    UpgradeDef,
    UpgradeEffectDef,
)

SKIN_FILES = {
    "currencies": "currencies.json",
    "generators": "generators.json",
    "upgrades": "upgrades.json",
    "achievements": "achievements.json",
    "theme": "theme.json",
}


def _currency(raw: dict[str, Any]) -> CurrencyDef:
    return CurrencyDef(
        id=raw.get("id", ""),
        name=raw.get("name", ""),
        start=float(raw.get("start", 0.0)),
    )


def _generator(raw: dict[str, Any]) -> GeneratorDef:
    curve = raw.get("costCurve") or {}
    unlock = raw.get("unlockReq") or {}
    max_level = raw.get("maxLevel")
    return GeneratorDef(
        id=raw.get("id", ""),
        name=raw.get("name", ""),
        icon_id=raw.get("iconId", ""),
        currency_id=raw.get("currencyId", ""),
        base_cost=float(raw.get("baseCost", 0.0)),
        cost_curve=CostCurveDef(
            type=curve.get("type", "linear"),
            step=float(curve.get("step", 1.0)),
            growth=float(curve.get("growth", 1.07)),
            a=float(curve.get("a", 0.0)),
            b=float(curve.get("b", 0.0)),
        ),
        base_rate_per_sec=float(raw.get("baseRatePerSec", 0.0)),
        unlock=UnlockRequirementDef(
            currency_id=unlock.get("currencyId") or None,
            amount=float(unlock.get("amount", 0.0)),
            generator_id=unlock.get("generatorId") or None,
            min_level=int(unlock.get("minLevel", 0)),
        ),
        max_level=int(max_level) if max_level is not None else None,
    )


def _upgrade(raw: dict[str, Any]) -> UpgradeDef:
    cond = raw.get("conditions") or {}
    effect = raw.get("effect") or {}
    return UpgradeDef(
        id=raw.get("id", ""),
        name=raw.get("name", ""),
        description=raw.get("desc", ""),
        price=float(raw.get("price", 0.0)),
        icon_id=raw.get("iconId", ""),
        conditions=UpgradeConditionDef(
            generator_id=cond.get("generatorId") or None,
            min_level=int(cond.get("minLevel", 0)),
            currency_id=cond.get("currencyId") or None,
            min_total=float(cond.get("minTotal", 0.0)),
        ),
        effect=UpgradeEffectDef(
            type=effect.get("type", ""),
            target=effect.get("target") or ALL_GENERATORS,
            percent=float(effect.get("percent", 0.0)),
            amount_per_sec=float(effect.get("amountPerSec", 0.0)),
            amount=float(effect.get("amount", 0.0)),
        ),
    )


def _achievement(raw: dict[str, Any]) -> AchievementDef:
    return AchievementDef(
        id=raw.get("id", ""),
        name=raw.get("name", ""),
        description=raw.get("desc", ""),
    )


def _theme(raw: dict[str, Any]) -> ThemeDef:
    formula = raw.get("prestigeFormula") or {}
    return ThemeDef(
        starting_balances={
            str(k): float(v) for k, v in (raw.get("startingBalances") or {}).items()
        },
        offline_cap_hours=float(raw.get("offlineCapHours", 12.0)),
        prestige_formula=PrestigeFormulaDef(
            a=float(formula.get("A", 1.0)),
            b=float(formula.get("B", 1.0)),
        ),
        primary_color=raw.get("primaryColor", "#FFFFFF"),
        font_id=raw.get("fontId", "default"),
        sfx_pack_id=raw.get("sfxPackId", ""),
        art_atlas_id=raw.get("artAtlasId", ""),
    )


def catalog_from_dict(data: dict[str, Any], name: str = "") -> ContentCatalog:
    """Build a catalog from an in-memory mapping shaped like the skin files."""
    try:
        return ContentCatalog(
            currencies=[_currency(c) for c in data.get("currencies") or []],
            generators=[_generator(g) for g in data.get("generators") or []],
            upgrades=[_upgrade(u) for u in data.get("upgrades") or []],
            achievements=[_achievement(a) for a in data.get("achievements") or []],
            theme=_theme(data.get("theme") or {}),
            name=name,
        )
    except ConfigurationError:
        raise
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Malformed content for skin {name!r}: {exc}") from exc


def _read_json(path: Path) -> Any:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {path}: {exc}") from exc


def load_skin(root: str | Path, skin_name: str | None = None) -> ContentCatalog:
    """Load and validate a skin directory.

    With *skin_name*, the skin lives at ``root/skin_name``; otherwise *root*
    is the skin directory itself. Missing optional files count as empty.
    """
    folder = Path(root) / skin_name if skin_name else Path(root)
    if not folder.is_dir():
        raise ConfigurationError(f"Skin folder not found: {folder}")

    data = {key: _read_json(folder / filename) for key, filename in SKIN_FILES.items()}
    return catalog_from_dict(data, name=skin_name or folder.name)
