from typing import Any, Dict, List

from bonding_core.common.enums import CurveType
from bonding_core.common.model import CurveParams


class CommonValidator:
    """
    Common validator for the parameters every bonding curve asset is created with.
    1) Curve shape checks (exponent, slope, whether the variant has an integral at all)
    2) Supply checks (max_supply, minting_cap, initial mint amount)
    """

    @staticmethod
    def validate_params(curve_params: "CurveParams", options: Dict[str, Any]) -> Dict[str, Any]:
        """
        Checks that the curve parameters are usable:
          - LINEAR: exponent >= 0, slope >= 0 (slope == 0 is only a warning)
          - every other variant: reported, it has no integral implementation
        Also checks the supply fields in 'options':
          - max_supply > 0
          - minting_cap <= max_supply
          - mint_amount < max_supply
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        exponent = getattr(curve_params, "exponent", None)
        slope = getattr(curve_params, "slope", None)

        if curve_params.curve_type == CurveType.LINEAR:
            if not isinstance(exponent, int) or exponent < 0:
                errors.append("LinearCurve: 'exponent' must be an integer >= 0.")
            if not isinstance(slope, int) or slope < 0:
                errors.append("LinearCurve: 'slope' must be an integer >= 0.")
            elif slope == 0:
                warnings.append("LinearCurve: 'slope' is 0, every trade settles for nothing.")
        else:
            errors.append(f"{curve_params.curve_type}: no integral implementation is defined.")

        max_supply = options.get("max_supply", None)
        if not max_supply:
            errors.append("Curve: 'max_supply' is required.")
        if max_supply is not None and max_supply < 0:
            errors.append("Curve: 'max_supply' cannot be negative.")

        minting_cap = options.get("minting_cap", None)
        if minting_cap is not None and max_supply is not None and minting_cap > max_supply:
            errors.append("Curve: 'minting_cap' cannot exceed 'max_supply'.")

        mint_amount = options.get("mint_amount", None)
        if mint_amount is not None and max_supply is not None and mint_amount >= max_supply:
            errors.append("Curve: 'mint_amount' must be below 'max_supply'.")

        info["param_summary"] = {
            "curve_type": str(curve_params.curve_type),
            "exponent": str(exponent),
            "slope": str(slope),
            "max_supply": str(max_supply),
            "minting_cap": str(minting_cap),
            "mint_amount": str(mint_amount),
        }

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def run_all_validations(curve_params: "CurveParams", options: Dict[str, Any]) -> Dict[str, Any]:
        """
        Aggregates the common checks into a dict with keys: errors, warnings, info
        """
        results = {
            "errors": [],
            "warnings": [],
            "info": {}
        }

        param_check = CommonValidator.validate_params(curve_params, options)
        results["errors"].extend(param_check["errors"])
        results["warnings"].extend(param_check["warnings"])
        results["info"].update(param_check["info"])

        return results
