"""Tests for JSON skin loading."""
import json
from pathlib import Path

import pytest

from idlecore.content import catalog_from_dict, load_skin
from idlecore.effect import EffectType
from idlecore.errors import ConfigurationError

SKINS = Path(__file__).resolve().parent.parent / "examples" / "skins"


def _write_skin(folder: Path, **files) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    for name, payload in files.items():
        (folder / f"{name}.json").write_text(json.dumps(payload), encoding="utf-8")
    return folder


def test_load_classic_skin():
    catalog = load_skin(SKINS, "Classic")
    assert catalog.name == "Classic"
    assert [c.id for c in catalog.currencies] == ["soft", "gems"]
    assert [g.id for g in catalog.generators] == ["gen_oven", "gen_factory", "gen_bakery"]
    oven = catalog.get_generator("gen_oven")
    assert oven.base_rate_per_sec == pytest.approx(0.2)
    assert oven.cost_curve.type == "geometric"
    assert oven.icon_id == "icon_oven"
    assert catalog.get_generator("gen_bakery").max_level == 50
    assert catalog.get_generator("gen_factory").unlock.generator_id == "gen_oven"
    assert catalog.starting_balance("soft") == 15
    assert catalog.theme.prestige_formula.b == 1000
    assert len(catalog.achievements) == 2


def test_load_skin_directory_directly():
    catalog = load_skin(SKINS / "Neon")
    assert catalog.name == "Neon"
    assert catalog.achievements == []
    assert catalog.theme.offline_cap_hours == 8
    assert catalog.upgrade_effect("upg_energy_market").type is EffectType.COST_REDUCTION
    assert catalog.upgrade_effect("upg_drone_swarm").value == 1.0


def test_missing_folder(tmp_path):
    with pytest.raises(ConfigurationError, match="Skin folder not found"):
        load_skin(tmp_path, "Nope")


def test_missing_files_mean_empty(tmp_path):
    folder = _write_skin(tmp_path / "Bare", currencies=[{"id": "soft"}])
    catalog = load_skin(folder)
    assert catalog.generators == []
    assert catalog.theme.offline_cap_hours == 12.0
    assert catalog.theme.prestige_formula.a == 1.0


def test_invalid_json(tmp_path):
    folder = tmp_path / "Broken"
    folder.mkdir()
    (folder / "currencies.json").write_text("[{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_skin(folder)


def test_cross_reference_errors_surface(tmp_path):
    folder = _write_skin(
        tmp_path / "Dangling",
        currencies=[{"id": "soft"}],
        generators=[{"id": "gen_a", "currencyId": "gold", "baseCost": 5}],
    )
    with pytest.raises(ConfigurationError, match="missing currency 'gold'"):
        load_skin(folder)


def test_malformed_values_become_configuration_errors():
    with pytest.raises(ConfigurationError, match="Malformed content"):
        catalog_from_dict(
            {
                "currencies": [{"id": "soft"}],
                "generators": [{"id": "gen_a", "currencyId": "soft", "baseCost": "cheap"}],
            },
            name="Bad",
        )


def test_effect_target_defaults_to_all():
    catalog = catalog_from_dict({
        "currencies": [{"id": "soft"}],
        "generators": [{"id": "gen_a", "currencyId": "soft"}],
        "upgrades": [
            {"id": "upg", "price": 5, "effect": {"type": "Multiplier", "percent": 0.2}},
        ],
    })
    effect = catalog.upgrade_effect("upg")
    assert effect.target == "all"
    assert effect.type is EffectType.MULTIPLIER
