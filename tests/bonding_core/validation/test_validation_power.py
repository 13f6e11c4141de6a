import pytest

from bonding_core.common.model import Power
from bonding_core.curves.single.linear import LinearCurve
from bonding_core.curves.single.power import PowerCurve
from bonding_core.validation.power_validator import PowerCurveValidator


SUPPLY = 100
RESERVE = 100
RATIO = 500000


def _make_curve(base_n=100, base_d=100, exp_n=1, exp_d=1):
    return PowerCurve(Power(base_n=base_n, base_d=base_d, exp_n=exp_n, exp_d=exp_d))


def test_validate_params_ok():
    result = PowerCurveValidator.validate_params(_make_curve(), SUPPLY, RESERVE, RATIO)
    assert result["errors"] == []
    assert result["warnings"] == []
    assert result["info"]["param_summary"]["precision"] == "10"


@pytest.mark.parametrize(
    "supply, reserve_balance, reserve_ratio",
    [
        (0, RESERVE, RATIO),
        (SUPPLY, 0, RATIO),
        (SUPPLY, RESERVE, 0),
        (SUPPLY, RESERVE, 2000000),
    ]
)
def test_validate_params_preconditions(supply, reserve_balance, reserve_ratio):
    result = PowerCurveValidator.validate_params(_make_curve(), supply, reserve_balance, reserve_ratio)
    assert len(result["errors"]) == 1
    assert result["errors"][0].startswith("PowerCurve: ")


@pytest.mark.parametrize(
    "curve, expected_fragment",
    [
        (_make_curve(exp_n=1, exp_d=2), "truncates to 0"),
        (_make_curve(base_n=50), "base_n < supply"),
        (_make_curve(base_d=1000), "reserve_balance < base_d"),
    ]
)
def test_validate_params_warnings(curve, expected_fragment):
    result = PowerCurveValidator.validate_params(curve, SUPPLY, RESERVE, RATIO)
    assert result["errors"] == []
    assert any(expected_fragment in w for w in result["warnings"])


def test_boundary_tests():
    # deposit of 100 into a reserve of 100 mints 102300, see the power curve tests
    result = PowerCurveValidator.boundary_tests(_make_curve(), SUPPLY, RESERVE, RATIO)
    assert result["errors"] == []
    assert result["info"]["purchase_return_of_reserve_deposit"] == "102300"


def test_boundary_tests_collapsed_approximation():
    result = PowerCurveValidator.boundary_tests(_make_curve(exp_n=1, exp_d=2), SUPPLY, RESERVE, RATIO)
    assert result["errors"] == []
    assert any("collapsed" in w for w in result["warnings"])


def test_boundary_tests_underflow_is_reported():
    # (100 + 100) // 1000 = 0, the new supply collapses below the old one
    result = PowerCurveValidator.boundary_tests(_make_curve(base_d=1000), SUPPLY, RESERVE, RATIO)
    assert any("purchase_return" in e for e in result["errors"])


def test_run_all_validations():
    result = PowerCurveValidator.run_all_validations(_make_curve(), SUPPLY, RESERVE, RATIO)
    assert result["errors"] == []
    assert "param_summary" in result["info"]
    assert "purchase_return_of_reserve_deposit" in result["info"]


def test_run_all_validations_stops_on_param_errors():
    result = PowerCurveValidator.run_all_validations(_make_curve(), 0, RESERVE, RATIO)
    assert result["errors"]
    assert "purchase_return_of_reserve_deposit" not in result["info"]


def test_run_all_validations_wrong_curve():
    with pytest.raises(ValueError):
        PowerCurveValidator.run_all_validations(LinearCurve(), SUPPLY, RESERVE, RATIO)
