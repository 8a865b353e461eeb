"""Tests for the command-line interface."""
import json
import os
import sys
from pathlib import Path

import pytest

# Ensure examples can be imported
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from idlecore.cli import build_cipher, describe_catalog, load_catalog, main
from idlecore.cipher import PlainSaveCipher, XorSaveCipher

SKINS = Path(__file__).resolve().parent.parent / "examples" / "skins"


def test_load_catalog_from_skin_dir():
    catalog = load_catalog(str(SKINS / "Classic"))
    assert catalog.get_generator("gen_oven") is not None


def test_load_catalog_from_module():
    catalog = load_catalog("examples.orbital_mine")
    assert catalog.name == "Orbital Mine"
    assert catalog.primary_currency_id == "ore"


def test_load_catalog_module_without_factory():
    with pytest.raises(SystemExit) as excinfo:
        load_catalog("idlecore.errors")
    assert excinfo.value.code == 1


def test_build_cipher():
    assert isinstance(build_cipher("k", plain=True), PlainSaveCipher)
    cipher = build_cipher("k", plain=False)
    assert isinstance(cipher, XorSaveCipher)
    assert cipher.key == b"k"


def test_describe_catalog():
    text = describe_catalog(load_catalog(str(SKINS / "Neon")))
    assert text.startswith("Catalog: Neon")
    assert "gen_drone" in text
    assert "costreduction 0.1 on gen_drone" in text
    assert "Offline cap: 8h" in text


def test_info_command(capsys):
    main(["info", str(SKINS / "Classic")])
    out = capsys.readouterr().out
    assert "GENERATORS:" in out
    assert "upg_universal_fans" in out


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_invalid_skin_exit_code(tmp_path, capsys):
    (tmp_path / "generators.json").write_text(
        json.dumps([{"id": "gen_a", "currencyId": "missing"}]), encoding="utf-8"
    )
    with pytest.raises(SystemExit) as excinfo:
        main(["info", str(tmp_path)])
    assert excinfo.value.code == 2
    assert "Configuration error" in capsys.readouterr().err


def test_play_then_inspect(tmp_path, capsys):
    save_dir = tmp_path / "saves"
    main([
        "play", str(SKINS / "Classic"),
        "--seconds", "60",
        "--tick-rate", "4",
        "--save-dir", str(save_dir),
        "--no-offline",
    ])
    out = capsys.readouterr().out
    assert "Strategy: GreedyCheapest" in out
    assert "Simulated 60.0s" in out
    save_file = save_dir / "idle_save.dat"
    assert save_file.exists()

    main(["inspect-save", str(save_file)])
    record = json.loads(capsys.readouterr().out)
    assert record["version"] == 1
    assert record["generators"]["gen_oven"] >= 1


def test_play_plain_save_is_readable(tmp_path, capsys):
    main([
        "play", str(SKINS / "Neon"),
        "--seconds", "5",
        "--tick-rate", "4",
        "--save-dir", str(tmp_path),
        "--plain",
    ])
    record = json.loads((tmp_path / "idle_save.dat").read_text(encoding="utf-8"))
    assert "currencies" in record


def test_inspect_missing_file_exit_code(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["inspect-save", str(tmp_path / "absent.dat")])
    assert excinfo.value.code == 3
    assert "Save error" in capsys.readouterr().err


def test_inspect_with_wrong_key_fails(tmp_path, capsys):
    main([
        "play", str(SKINS / "Neon"),
        "--seconds", "1",
        "--tick-rate", "4",
        "--save-dir", str(tmp_path),
    ])
    capsys.readouterr()
    with pytest.raises(SystemExit) as excinfo:
        main(["inspect-save", str(tmp_path / "idle_save.dat"), "--plain"])
    assert excinfo.value.code == 3
