"""Tests for formatting module."""
from idlecore.formatting import SUFFIXES, format_number, format_offline_report
from idlecore.offline import OfflineEarnings


def test_small_numbers():
    assert format_number(0) == "0.00"
    assert format_number(5.256) == "5.26"
    assert format_number(12.34) == "12.3"
    assert format_number(999) == "999"


def test_suffixes():
    assert format_number(1500) == "1.50K"
    assert format_number(2_000_000) == "2.00M"
    assert format_number(3.2e9) == "3.20B"
    assert format_number(4e12) == "4.00T"
    assert format_number(1e15) == "1.00aa"
    assert format_number(1e18) == "1.00ab"


def test_negative_values_keep_sign():
    assert format_number(-1500) == "-1.50K"
    assert format_number(-5) == "-5.00"


def test_non_finite():
    assert format_number(float("nan")) == "0"
    assert format_number(float("inf")) == "0"


def test_suffix_table():
    assert SUFFIXES[:4] == ["K", "M", "B", "T"]
    assert SUFFIXES[4] == "aa"
    assert SUFFIXES[-1] == "zz"
    assert len(SUFFIXES) == 4 + 26 * 26


def test_offline_report():
    earnings = OfflineEarnings(hours=1.5, seconds=5400)
    earnings.add("soft", "gen_oven", 2500)
    earnings.add("soft", "gen_factory", 40)
    text = format_offline_report(earnings)
    assert text.splitlines()[0] == "Offline for 1.50h:"
    assert "+2.54K soft" in text
    assert "gen_factory" in text


def test_offline_report_empty():
    assert format_offline_report(OfflineEarnings()) == "No offline earnings."
