from bonding_core.common.errors import ArithmeticOverflow
from bonding_core.common.math import checked_div, checked_mul, checked_pow, ensure_amount


class LinearCurveHelper:
    """A separate helper class for shared or complex logic used by LinearCurve."""

    @staticmethod
    def integral(x: int, exponent: int, slope: int) -> int:
        """
        Computes the integral of the price function slope * x^exponent from 0 to 'x':
            integral = floor(x^(exponent + 1) * slope / (exponent + 1)).
        Every step is checked against the unsigned 128-bit range.
        """
        ensure_amount(x, "issuance")
        nexp = exponent + 1
        raised = checked_pow(x, nexp)
        return checked_div(checked_mul(raised, slope), nexp)

    @staticmethod
    def max_issuance(exponent: int, slope: int, ceiling: int) -> int:
        """
        Largest issuance x <= ceiling whose integral is still representable,
        found by binary search over the checked integral.
        """
        lo, hi = 0, ceiling
        while lo < hi:
            mid = (lo + hi + 1) // 2
            try:
                LinearCurveHelper.integral(mid, exponent, slope)
            except ArithmeticOverflow:
                hi = mid - 1
            else:
                lo = mid
        return lo
