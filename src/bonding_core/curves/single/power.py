import logging

from bonding_core.common.enums import CurveType
from bonding_core.common.math import (
    checked_add,
    checked_div,
    checked_mul,
    checked_shl,
    checked_sub,
    ensure_amount,
)
from bonding_core.common.model import Power
from bonding_core.curves.utils.power_curve_helper import PowerCurveHelper as helper


logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 10


class PowerCurve:
    """
    A Bancor-style power curve. Instead of pricing a quantity of tokens, it answers:
      - purchase_return: how many tokens a reserve deposit mints
      - sale_return: how much reserve selling a quantity of tokens releases

    Both use a truncating fixed-point power approximation (see PowerCurveHelper), so results
    are numerically fragile and must be treated as approximations.

    Preconditions on supply, reserve balance and reserve ratio are the caller's job:
    run PowerCurveHelper.validate_preconditions or PowerCurveValidator first.
    """

    def __init__(self, power: Power, precision: int = DEFAULT_PRECISION):
        if precision < 0:
            raise ValueError("Precision must be non-negative.")
        self.power = power
        self.precision = precision

    @staticmethod
    def for_curve_type(curve_type: CurveType) -> int:
        """Nominal reserve ratio, in parts per million, for a curve archetype."""
        return curve_type.reserve_ratio_ppm()

    def integral_purchase(self, base_n: int) -> int:
        return helper.power_with_precision(
            base_n, self.power.base_d, self.power.exp_n, self.power.exp_d, self.precision
        )

    def integral_sell(self, base_d: int) -> int:
        return helper.power_with_precision(
            self.power.base_n, base_d, self.power.exp_n, self.power.exp_d, self.precision
        )

    def purchase_return(self, supply: int, reserve_balance: int, reserve_ratio: int, deposit_amount: int) -> int:
        """
        Tokens minted for depositing 'deposit_amount' of reserve:
            new_supply = (supply * power_with_precision) >> precision
            return = new_supply - supply

        :param reserve_ratio: unused by the approximation; kept for the caller's validation.
        """
        ensure_amount(deposit_amount, "deposit_amount")
        if deposit_amount == 0:
            return 0

        base_n = checked_add(deposit_amount, reserve_balance)
        value = self.integral_purchase(base_n)
        new_supply = checked_mul(supply, value) >> self.precision
        logger.debug(f"purchase_return: base_n={base_n} value={value} new_supply={new_supply}")
        return checked_sub(new_supply, supply)

    def sale_return(self, supply: int, reserve_balance: int, reserve_ratio: int, sell_amount: int) -> int:
        """
        Reserve released for selling 'sell_amount' tokens:
            result = reserve_balance * sell_amount // supply
            old_balance = reserve_balance * power_with_precision
            new_balance = reserve_balance << precision
            return = (old_balance - new_balance) // result
        """
        ensure_amount(sell_amount, "sell_amount")
        if sell_amount == 0:
            return 0

        result = checked_div(checked_mul(reserve_balance, sell_amount), supply)
        base_d = checked_sub(supply, sell_amount)
        value = self.integral_sell(base_d)
        old_balance = checked_mul(reserve_balance, value)
        new_balance = checked_shl(reserve_balance, self.precision)
        logger.debug(f"sale_return: result={result} value={value} old={old_balance} new={new_balance}")
        return checked_div(checked_sub(old_balance, new_balance), result)
