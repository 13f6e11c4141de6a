from bonding_core.common.enums import MAX_RESERVE_RATIO
from bonding_core.common.errors import InvalidCurveParameters
from bonding_core.common.math import checked_div, checked_mul, checked_pow
from bonding_core.common.model import Power


class PowerCurveHelper:
    """
    A helper class for the Bancor-style power curve, including:
      - Caller-side precondition checks
      - The fixed-point power approximation shared by purchase and sale returns
    """

    @staticmethod
    def validate_preconditions(supply: int, reserve_balance: int, reserve_ratio: int, power: Power):
        """
        Validates that:
          - supply > 0
          - reserve_balance > 0
          - 0 < reserve_ratio <= MAX_RESERVE_RATIO
          - base_d > 0 and exp_d > 0
        Raises InvalidCurveParameters if invalid. PowerCurve itself does not call this.
        """
        if supply <= 0:
            raise InvalidCurveParameters("Power curve requires supply > 0.")
        if reserve_balance <= 0:
            raise InvalidCurveParameters("Power curve requires reserve_balance > 0.")
        if not 0 < reserve_ratio <= MAX_RESERVE_RATIO:
            raise InvalidCurveParameters(
                f"Power curve requires 0 < reserve_ratio <= {MAX_RESERVE_RATIO}, got {reserve_ratio}."
            )
        if power.base_d <= 0 or power.exp_d <= 0:
            raise InvalidCurveParameters("Power curve requires base_d > 0 and exp_d > 0.")

    @staticmethod
    def power_with_precision(base_n: int, base_d: int, exp_n: int, exp_d: int, precision: int) -> int:
        """
        The fixed-point power approximation:
            power = (base_n // base_d) ^ (exp_n // exp_d) * 2
            value = power ^ precision

        Both divisions truncate, so small ratios collapse to 0 (ratio < 1) or to a
        constant (fractional exponent). Treat the result as an approximation.
        """
        ratio = checked_div(base_n, base_d)
        exponent = checked_div(exp_n, exp_d)
        power = checked_mul(checked_pow(ratio, exponent), 2)
        return checked_pow(power, precision)
