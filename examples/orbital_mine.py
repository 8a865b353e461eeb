"""Orbital Mine: a catalog defined in code rather than JSON.

Run with ``idlecore play examples.orbital_mine`` from the repository root.
"""
from __future__ import annotations

from idlecore.currency import CurrencyDef
from idlecore.definition import ContentCatalog, PrestigeFormulaDef, ThemeDef
from idlecore.generator import CostCurveDef, GeneratorDef, UnlockRequirementDef
from idlecore.upgrade import (
    AchievementDef,
    UpgradeConditionDef,
    UpgradeDef,
    UpgradeEffectDef,
)


def define_catalog() -> ContentCatalog:
    return ContentCatalog(
        name="Orbital Mine",
        currencies=[
            CurrencyDef("ore", name="Ore", start=20),
        ],
        generators=[
            GeneratorDef(
                id="gen_pick",
                name="Laser Pick",
                currency_id="ore",
                base_cost=10,
                cost_curve=CostCurveDef("geometric", growth=1.1),
                base_rate_per_sec=1.0,
            ),
            GeneratorDef(
                id="gen_rig",
                name="Drill Rig",
                currency_id="ore",
                base_cost=150,
                cost_curve=CostCurveDef("geometric", growth=1.14),
                base_rate_per_sec=12.0,
                unlock=UnlockRequirementDef(generator_id="gen_pick", min_level=8),
            ),
            GeneratorDef(
                id="gen_smelter",
                name="Orbital Smelter",
                currency_id="ore",
                base_cost=2000,
                cost_curve=CostCurveDef("linear", step=400),
                base_rate_per_sec=90.0,
                unlock=UnlockRequirementDef(currency_id="ore", amount=1000),
                max_level=25,
            ),
        ],
        upgrades=[
            UpgradeDef(
                id="upg_tungsten_bits",
                name="Tungsten Bits",
                description="Laser picks mine 50% faster.",
                price=250,
                conditions=UpgradeConditionDef(generator_id="gen_pick", min_level=10),
                effect=UpgradeEffectDef("multiplier", target="gen_pick", percent=0.5),
            ),
            UpgradeDef(
                id="upg_autopilot",
                name="Autopilot",
                description="Drill rigs add a flat 5 ore per second.",
                price=1500,
                conditions=UpgradeConditionDef(generator_id="gen_rig", min_level=5),
                effect=UpgradeEffectDef("additive", target="gen_rig", amount_per_sec=5.0),
            ),
            UpgradeDef(
                id="upg_salvage",
                name="Salvage Rights",
                description="All equipment costs 8% less.",
                price=4000,
                conditions=UpgradeConditionDef(currency_id="ore", min_total=3000),
                effect=UpgradeEffectDef("costReduction", target="all", percent=0.08),
            ),
        ],
        achievements=[
            AchievementDef("ach_first_strike", "First Strike", "Buy a laser pick."),
        ],
        theme=ThemeDef(
            offline_cap_hours=6,
            prestige_formula=PrestigeFormulaDef(a=1.5, b=2500),
            primary_color="#5AB1FF",
        ),
    )
