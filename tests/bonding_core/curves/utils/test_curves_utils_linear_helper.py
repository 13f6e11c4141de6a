import pytest

from bonding_core.common.errors import ArithmeticOverflow
from bonding_core.common.math import U128_MAX
from bonding_core.curves.utils.linear_curve_helper import LinearCurveHelper


@pytest.mark.parametrize(
    "x, exponent, slope, expected",
    [
        (0, 1, 1, 0),
        (100, 1, 1, 5000),
        # 100^2 * 4 / 2 = 20000
        (100, 1, 4, 20000),
        # 5^4 * 2 / 4 = 312.5 -> 312
        (5, 3, 2, 312),
    ]
)
def test_integral(x, exponent, slope, expected):
    assert LinearCurveHelper.integral(x, exponent, slope) == expected


def test_integral_overflow_in_multiplication():
    # (2^63)^2 = 2^126 fits, times slope 4 is 2^128 which does not
    with pytest.raises(ArithmeticOverflow):
        LinearCurveHelper.integral(2 ** 63, 1, 4)


def test_integral_rejects_negative():
    with pytest.raises(ValueError):
        LinearCurveHelper.integral(-5, 1, 1)


def test_max_issuance_no_overflow():
    """When the whole range is representable, the ceiling itself comes back."""
    assert LinearCurveHelper.max_issuance(1, 1, 10 ** 6) == 10 ** 6


def test_max_issuance_bounded():
    # x^2 <= U128_MAX holds up to x = 2^64 - 1
    safe = LinearCurveHelper.max_issuance(1, 1, U128_MAX)
    assert safe == 2 ** 64 - 1
    LinearCurveHelper.integral(safe, 1, 1)
    with pytest.raises(ArithmeticOverflow):
        LinearCurveHelper.integral(safe + 1, 1, 1)
