"""Tests for effect module."""
from dataclasses import FrozenInstanceError

import pytest

from idlecore.effect import Effect, EffectType, normalize_target
from idlecore.errors import ConfigurationError
from idlecore.upgrade import UpgradeEffectDef


def test_normalize_target():
    assert normalize_target("") == "all"
    assert normalize_target(None) == "all"
    assert normalize_target("ALL") == "all"
    assert normalize_target("All") == "all"
    assert normalize_target("gen_oven") == "gen_oven"


def test_effect_normalizes_target():
    assert Effect.multiplier("ALL", 0.1).target == "all"
    assert Effect.additive("", 1.0).target == "all"


def test_compile_multiplier():
    effect = Effect.compile(UpgradeEffectDef("multiplier", "gen_oven", percent=0.25))
    assert effect == Effect(EffectType.MULTIPLIER, "gen_oven", 0.25)


def test_compile_additive_prefers_amount_per_sec():
    effect = Effect.compile(
        UpgradeEffectDef("additive", "gen_drone", amount_per_sec=1.5, amount=9.0)
    )
    assert effect.type is EffectType.ADDITIVE
    assert effect.value == 1.5


def test_compile_additive_falls_back_to_amount():
    effect = Effect.compile(UpgradeEffectDef("additive", "gen_drone", amount=2.0))
    assert effect.value == 2.0


def test_compile_cost_reduction_case_insensitive():
    effect = Effect.compile(UpgradeEffectDef("costReduction", "all", percent=0.1))
    assert effect.type is EffectType.COST_REDUCTION
    assert effect.value == pytest.approx(0.1)


def test_compile_unknown_type():
    with pytest.raises(ConfigurationError, match="Unknown upgrade effect type"):
        Effect.compile(UpgradeEffectDef("teleport", "all"))


def test_effect_is_immutable():
    effect = Effect.multiplier("all", 0.1)
    with pytest.raises(FrozenInstanceError):
        effect.value = 0.5
