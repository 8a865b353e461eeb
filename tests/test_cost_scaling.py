"""Tests for cost_scaling module."""
import pytest

from idlecore.cost_scaling import CostScaling, geometric, linear, polynomial
from idlecore.errors import ConfigurationError
from idlecore.generator import CostCurveDef


def test_linear_formula():
    assert linear(10.0, 5.0, 3) == 25.0


def test_geometric_formula():
    assert geometric(10.0, 2.0, 3) == 80.0


def test_polynomial_formula():
    assert polynomial(10.0, 0.1, 0.01, 4) == pytest.approx(15.6)


def test_level_zero_is_base_cost():
    for cs in (
        CostScaling.linear(5.0),
        CostScaling.geometric(1.15),
        CostScaling.polynomial(0.1, 0.01),
    ):
        assert cs.compute(42.0, 0) == pytest.approx(42.0)


def test_negative_level_clamped():
    cs = CostScaling.geometric(2.0)
    assert cs.compute(10.0, -3) == cs.compute(10.0, 0)


def test_geometric_default_growth():
    cs = CostScaling.geometric()
    assert cs.compute(100.0, 1) == pytest.approx(107.0)


def test_from_def_dispatch():
    assert CostScaling.from_def(CostCurveDef("linear", step=5)).compute(10, 3) == 25.0
    assert CostScaling.from_def(CostCurveDef("geometric", growth=2)).compute(10, 3) == 80.0
    poly = CostScaling.from_def(CostCurveDef("polynomial", a=0.1, b=0.01))
    assert poly.compute(10, 4) == pytest.approx(15.6)


def test_from_def_case_insensitive():
    cs = CostScaling.from_def(CostCurveDef("Geometric", growth=2))
    assert cs.name == "geometric"
    assert cs.compute(1.0, 4) == 16.0


def test_from_def_unknown_type():
    with pytest.raises(ConfigurationError, match="Unknown cost curve"):
        CostScaling.from_def(CostCurveDef("exponential"))


def test_repr():
    assert repr(CostScaling.linear()) == "CostScaling(linear)"
