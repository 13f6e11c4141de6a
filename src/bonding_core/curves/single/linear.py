from bonding_core.curves.single.base import CurveModel
from bonding_core.curves.utils.linear_curve_helper import LinearCurveHelper as helper


class LinearCurve(CurveModel):
    """
        A polynomial bonding curve priced by its closed-form integral.

        The price function is:
          price(x) = slope * x^exponent

        Its integral from 0 to x, evaluated with truncating integer division, is:
          integral(x) = floor(x^(exponent+1) * slope / (exponent+1))

        The defaults (exponent=1, slope=1) give integral(x) = floor(x^2 / 2).
        Buying from issuance a to b costs integral(b) - integral(a), and selling from b back
        to a refunds exactly the same amount.
    """

    def __init__(self, exponent: int = 1, slope: int = 1):
        if exponent < 0:
            raise ValueError("Exponent must be non-negative.")
        if slope < 0:
            raise ValueError("Slope must be non-negative.")
        self.exponent = exponent
        self.slope = slope

    def integral(self, issuance: int) -> int:
        return helper.integral(issuance, self.exponent, self.slope)

    def __eq__(self, other):
        if not isinstance(other, LinearCurve):
            return NotImplemented
        return (self.exponent, self.slope) == (other.exponent, other.slope)

    def __repr__(self):
        return f"LinearCurve(exponent={self.exponent}, slope={self.slope})"
