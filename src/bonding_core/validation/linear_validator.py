from typing import Any, Dict, List

from bonding_core.common.errors import BondingCurveError
from bonding_core.common.math import U128_MAX
from bonding_core.common.model import CurveParams
from bonding_core.curves.single.linear import LinearCurve
from bonding_core.curves.utils.linear_curve_helper import LinearCurveHelper as helper
from bonding_core.validation.common_validator import CommonValidator


DEFAULT_SAMPLE_POINTS = 16


class LinearCurveValidator:
    """
    Specialized validator for the LinearCurve.
    Performs:
      1) Param checks (common checks plus integral overflow at max_supply)
      2) Boundary tests (integral at 0, integral at max_supply)
      3) Monotonicity tests (integral never decreases over sampled issuance)
      4) Scenario tests (buy a quarter of max_supply from 0 and sell it back)

    Each step returns a dict with:
      {
        "errors": [str...],
        "warnings": [str...],
        "info": {...}
      }
    and 'run_all_validations' aggregates them into a single result.
    """

    @staticmethod
    def validate_params(curve_params: "CurveParams", options: Dict[str, Any]) -> Dict[str, Any]:
        """
        Runs the common parameter checks, then verifies the integral is still representable
        at max_supply. When it is not, reports the largest issuance that is.
        """
        result = CommonValidator.validate_params(curve_params, options)
        if result["errors"]:
            return result

        max_supply = options["max_supply"]
        try:
            helper.integral(max_supply, curve_params.exponent, curve_params.slope)
        except BondingCurveError:
            safe = helper.max_issuance(curve_params.exponent, curve_params.slope, min(max_supply, U128_MAX))
            result["errors"].append(
                f"LinearCurve: integral overflows at max_supply={max_supply}; largest safe issuance is {safe}."
            )
            result["info"]["max_safe_issuance"] = str(safe)

        return result

    @staticmethod
    def boundary_tests(curve: "LinearCurve", max_supply: int) -> Dict[str, Any]:
        """
        Calls a few boundary conditions on the linear curve:
          - integral(0) must be 0
          - cost_between(0, 0) must be 0
          - integral(max_supply) must not overflow
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        # 1) Integral at issuance=0
        try:
            at_zero = curve.integral(0)
            if at_zero != 0:
                errors.append(f"Integral at issuance=0 is {at_zero}, expected 0.")
        except BondingCurveError as e:
            errors.append(f"Exception calling integral(0): {e}")

        # 2) Cost of an empty trade
        try:
            cost_zero = curve.cost_between(0, 0)
            if cost_zero != 0:
                warnings.append(f"Cost between 0 and 0 is not zero: got {cost_zero}")
        except BondingCurveError as e:
            errors.append(f"Exception calling cost_between(0, 0): {e}")

        # 3) Integral at the hard supply limit
        try:
            info["integral_at_max_supply"] = str(curve.integral(max_supply))
        except BondingCurveError as e:
            errors.append(f"Exception calling integral({max_supply}): {e}")

        info["boundary_tests_run"] = True
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def monotonicity_tests(curve: "LinearCurve", max_supply: int, points: int = DEFAULT_SAMPLE_POINTS) -> Dict[str, Any]:
        """
        Samples 'points' + 1 evenly spaced issuance values in [0, max_supply] and checks the
        integral never decreases between neighbours.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        previous = None
        checked = 0
        for i in range(points + 1):
            issuance = max_supply * i // points
            try:
                value = curve.integral(issuance)
            except BondingCurveError as e:
                warnings.append(f"Monotonicity sampling stopped at issuance={issuance}: {e}")
                break
            if previous is not None and value < previous[1]:
                errors.append(
                    f"Integral decreases from {previous[1]} at {previous[0]} to {value} at {issuance}."
                )
            previous = (issuance, value)
            checked += 1

        info["monotonic_points_checked"] = checked
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def scenario_tests(curve: "LinearCurve", max_supply: int) -> Dict[str, Any]:
        """
        Runs a small scenario:
          1) buy max_supply // 4 starting from issuance 0
          2) sell the same amount back to issuance 0
        The refund must equal the cost.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        amount = max_supply // 4
        try:
            cost = curve.cost_between(0, amount)
            refund = curve.integral_before(amount) - curve.integral_after(0)
            if cost != refund:
                errors.append(f"Round trip of {amount} tokens costs {cost} but refunds {refund}.")
            info["round_trip_amount"] = str(amount)
            info["round_trip_cost"] = str(cost)
        except BondingCurveError as e:
            errors.append(f"Exception in round trip scenario: {e}")

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def run_all_validations(curve: "LinearCurve", curve_params: "CurveParams", options: Dict[str, Any]) -> Dict[str, Any]:
        """
        Aggregates:
          - param check
          - boundary tests
          - monotonicity tests
          - scenario tests
        Returns a dict with keys: errors, warnings, info
        """
        if not isinstance(curve, LinearCurve):
            raise ValueError("Invalid curve type for LinearCurveValidator.")

        results = {
            "errors": [],
            "warnings": [],
            "info": {}
        }

        # 1) Param checks
        param_check = LinearCurveValidator.validate_params(curve_params, options)
        results["errors"].extend(param_check["errors"])
        results["warnings"].extend(param_check["warnings"])
        results["info"].update(param_check["info"])
        if param_check["errors"]:
            return results

        max_supply = options["max_supply"]
        points = options.get("points", DEFAULT_SAMPLE_POINTS)

        for check in (
            LinearCurveValidator.boundary_tests(curve, max_supply),
            LinearCurveValidator.monotonicity_tests(curve, max_supply, points),
            LinearCurveValidator.scenario_tests(curve, max_supply),
        ):
            results["errors"].extend(check["errors"])
            results["warnings"].extend(check["warnings"])
            results["info"].update(check["info"])

        return results
