import pytest

from bonding_core.common.enums import CurveType
from bonding_core.common.errors import CurveTypeNotDefined
from bonding_core.common.model import CurveParams
from bonding_core.curves.curve_factory import curve_for
from bonding_core.curves.single.linear import LinearCurve


def test_linear_resolves():
    curve = curve_for(CurveParams(curve_type=CurveType.LINEAR, exponent=2, slope=3))
    assert curve == LinearCurve(2, 3)


@pytest.mark.parametrize("curve_type", [CurveType.EXPONENTIAL, CurveType.FLAT, CurveType.LOGARITHMIC])
def test_other_variants_have_no_integral(curve_type):
    with pytest.raises(CurveTypeNotDefined):
        curve_for(CurveParams(curve_type=curve_type))
