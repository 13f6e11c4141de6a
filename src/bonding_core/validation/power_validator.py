from typing import Any, Dict, List

from bonding_core.common.errors import BondingCurveError, InvalidCurveParameters
from bonding_core.curves.single.power import PowerCurve
from bonding_core.curves.utils.power_curve_helper import PowerCurveHelper as helper


class PowerCurveValidator:
    """
    Validator for the Bancor-style PowerCurve. The curve trusts its inputs, so callers run
    this (or PowerCurveHelper.validate_preconditions) before pricing anything.
    Performs:
      1) Precondition checks (supply, reserve balance, reserve ratio, power divisors)
      2) Approximation warnings (fractional exponents, ratios that truncate to zero)
      3) Boundary tests (zero deposit and zero sale, one reserve-sized deposit)
    """

    @staticmethod
    def validate_params(curve: "PowerCurve", supply: int, reserve_balance: int, reserve_ratio: int) -> Dict[str, Any]:
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        power = curve.power
        try:
            helper.validate_preconditions(supply, reserve_balance, reserve_ratio, power)
        except InvalidCurveParameters as e:
            errors.append(f"PowerCurve: {e}")

        if power.exp_d > 0 and power.exp_n % power.exp_d != 0:
            warnings.append(
                f"PowerCurve: exponent {power.exp_n}/{power.exp_d} truncates to {power.exp_n // power.exp_d}."
            )
        if power.base_n < supply:
            warnings.append("PowerCurve: base_n < supply, small sales truncate to a zero power.")
        if power.base_d > 0 and reserve_balance < power.base_d:
            warnings.append("PowerCurve: reserve_balance < base_d, small deposits truncate to a zero power.")

        info["param_summary"] = {
            "base_n": str(power.base_n),
            "base_d": str(power.base_d),
            "exp_n": str(power.exp_n),
            "exp_d": str(power.exp_d),
            "precision": str(curve.precision),
            "supply": str(supply),
            "reserve_balance": str(reserve_balance),
            "reserve_ratio": str(reserve_ratio),
        }

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def boundary_tests(curve: "PowerCurve", supply: int, reserve_balance: int, reserve_ratio: int) -> Dict[str, Any]:
        """
        - purchase_return with a zero deposit must be 0
        - sale_return with a zero sale must be 0
        - a deposit equal to the reserve balance must be computable; a zero result is a warning
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        if curve.purchase_return(supply, reserve_balance, reserve_ratio, 0) != 0:
            errors.append("Purchase return of a zero deposit is not zero.")
        if curve.sale_return(supply, reserve_balance, reserve_ratio, 0) != 0:
            errors.append("Sale return of a zero sale is not zero.")

        try:
            minted = curve.purchase_return(supply, reserve_balance, reserve_ratio, reserve_balance)
            info["purchase_return_of_reserve_deposit"] = str(minted)
            if minted == 0:
                warnings.append("Depositing the full reserve balance mints nothing; the approximation collapsed.")
        except BondingCurveError as e:
            errors.append(f"Exception calling purchase_return with deposit={reserve_balance}: {e}")

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def run_all_validations(curve: "PowerCurve", supply: int, reserve_balance: int, reserve_ratio: int) -> Dict[str, Any]:
        if not isinstance(curve, PowerCurve):
            raise ValueError("Invalid curve type for PowerCurveValidator.")

        results = {
            "errors": [],
            "warnings": [],
            "info": {}
        }

        param_check = PowerCurveValidator.validate_params(curve, supply, reserve_balance, reserve_ratio)
        results["errors"].extend(param_check["errors"])
        results["warnings"].extend(param_check["warnings"])
        results["info"].update(param_check["info"])
        if param_check["errors"]:
            return results

        boundary = PowerCurveValidator.boundary_tests(curve, supply, reserve_balance, reserve_ratio)
        results["errors"].extend(boundary["errors"])
        results["warnings"].extend(boundary["warnings"])
        results["info"].update(boundary["info"])

        return results
