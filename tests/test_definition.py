"""Tests for definition module (ContentCatalog construction and validation)."""
import pytest

from idlecore.currency import CurrencyDef
from idlecore.definition import ContentCatalog, ThemeDef
from idlecore.effect import EffectType
from idlecore.errors import ConfigurationError
from idlecore.generator import CostCurveDef, GeneratorDef, UnlockRequirementDef
from idlecore.upgrade import UpgradeConditionDef, UpgradeDef, UpgradeEffectDef


def _make_catalog(**overrides) -> ContentCatalog:
    kwargs = dict(
        currencies=[CurrencyDef("soft", name="Coins", start=5), CurrencyDef("gems")],
        generators=[
            GeneratorDef(
                "gen_a", "soft", base_cost=10,
                cost_curve=CostCurveDef("geometric", growth=2),
                base_rate_per_sec=1.0,
            ),
            GeneratorDef(
                "gen_b", "soft", base_cost=100,
                unlock=UnlockRequirementDef(generator_id="gen_a", min_level=3),
            ),
        ],
        upgrades=[
            UpgradeDef(
                "upg_a", price=50,
                effect=UpgradeEffectDef("multiplier", "gen_a", percent=0.5),
            ),
            UpgradeDef(
                "upg_gems", price=3,
                conditions=UpgradeConditionDef(currency_id="gems"),
                effect=UpgradeEffectDef("additive", "all", amount_per_sec=1.0),
            ),
        ],
        theme=ThemeDef(starting_balances={"gems": 2}),
    )
    kwargs.update(overrides)
    return ContentCatalog(**kwargs)


def test_valid_catalog_lookups():
    catalog = _make_catalog()
    assert catalog.primary_currency_id == "soft"
    assert catalog.get_currency("soft").name == "Coins"
    assert catalog.get_currency("gems").name == "gems"
    assert catalog.get_generator("gen_b").unlock.min_level == 3
    assert catalog.get_upgrade("upg_a").price == 50
    assert catalog.get_generator("missing") is None


def test_starting_balances_merge_theme_over_currency():
    catalog = _make_catalog()
    assert catalog.starting_balance("soft") == 5
    assert catalog.starting_balance("gems") == 2
    assert catalog.starting_balance("unknown") == 0.0


def test_compiled_objects():
    catalog = _make_catalog()
    assert catalog.cost_scaling("gen_a").name == "geometric"
    assert catalog.generator_cost("gen_a", 3) == 80.0
    assert catalog.upgrade_effect("upg_a").type is EffectType.MULTIPLIER
    with pytest.raises(KeyError):
        catalog.upgrade_effect("nope")


def test_upgrade_currency():
    catalog = _make_catalog()
    assert catalog.upgrade_currency_id("upg_a") == "soft"
    assert catalog.upgrade_currency_id("upg_gems") == "gems"


def test_missing_generator_currency():
    with pytest.raises(ConfigurationError, match="missing currency 'gold'"):
        _make_catalog(generators=[GeneratorDef("gen_x", "gold")])


def test_duplicate_ids():
    with pytest.raises(ConfigurationError, match="Duplicate generator ID"):
        _make_catalog(
            generators=[GeneratorDef("gen_x", "soft"), GeneratorDef("gen_x", "soft")],
            upgrades=[],
        )


def test_unknown_effect_target():
    bad = UpgradeDef("upg_x", effect=UpgradeEffectDef("multiplier", "gen_zzz", percent=1))
    with pytest.raises(ConfigurationError, match="targets missing generator"):
        _make_catalog(upgrades=[bad])


def test_unknown_cost_curve_and_effect_type():
    with pytest.raises(ConfigurationError) as excinfo:
        _make_catalog(
            generators=[GeneratorDef("gen_x", "soft", cost_curve=CostCurveDef("zigzag"))],
            upgrades=[UpgradeDef("upg_x", effect=UpgradeEffectDef("teleport", "all"))],
        )
    message = str(excinfo.value)
    assert "Unknown cost curve" in message
    assert "Unknown upgrade effect type" in message


def test_all_errors_reported_together():
    with pytest.raises(ConfigurationError) as excinfo:
        _make_catalog(
            generators=[
                GeneratorDef(
                    "gen_x", "gold",
                    unlock=UnlockRequirementDef(generator_id="gen_missing"),
                    max_level=-1,
                ),
            ],
            upgrades=[
                UpgradeDef(
                    "upg_x",
                    conditions=UpgradeConditionDef(generator_id="gen_nope"),
                    effect=UpgradeEffectDef("multiplier", "all"),
                ),
            ],
        )
    message = str(excinfo.value)
    assert message.startswith("Invalid ContentCatalog")
    assert "missing currency 'gold'" in message
    assert "missing generator 'gen_missing'" in message
    assert "negative max level" in message
    assert "missing generator 'gen_nope'" in message


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        _make_catalog(generators=[GeneratorDef("", "soft")])


def test_empty_catalog_is_valid():
    catalog = ContentCatalog()
    assert catalog.primary_currency_id == ""
    assert catalog.generators == []
