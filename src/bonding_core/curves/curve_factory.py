from bonding_core.common.enums import CurveType
from bonding_core.common.errors import CurveTypeNotDefined
from bonding_core.common.model import CurveParams
from bonding_core.curves.single.base import CurveModel
from bonding_core.curves.single.linear import LinearCurve


def curve_for(params: CurveParams) -> CurveModel:
    """
    Resolves the integral implementation for a curve variant.
    Raises CurveTypeNotDefined for variants that have none.
    """
    if params.curve_type == CurveType.LINEAR:
        return LinearCurve(params.exponent, params.slope)
    elif params.curve_type in (CurveType.EXPONENTIAL, CurveType.FLAT, CurveType.LOGARITHMIC):
        raise CurveTypeNotDefined(f"No integral implementation for {params.curve_type} curves.")
    else:
        raise CurveTypeNotDefined(f"Unknown curve type {params.curve_type!r}.")
