from enum import Enum
from typing import Tuple


MAX_RESERVE_RATIO = 1000000


class CurveType(Enum):
    LINEAR = "LINEAR"
    EXPONENTIAL = "EXPONENTIAL"
    FLAT = "FLAT"
    LOGARITHMIC = "LOGARITHMIC"

    @classmethod
    def from_str(cls, curve_str: str) -> "CurveType":
        """
        Convert a string to a CurveType enum.
        :param curve_str: str
        :return: CurveType or NotImplementedError
        """
        if curve_str.upper() == CurveType.LINEAR.name:
            return CurveType.LINEAR
        elif curve_str.upper() == CurveType.EXPONENTIAL.name:
            return CurveType.EXPONENTIAL
        elif curve_str.upper() == CurveType.FLAT.name:
            return CurveType.FLAT
        elif curve_str.upper() == CurveType.LOGARITHMIC.name:
            return CurveType.LOGARITHMIC
        else:
            raise NotImplementedError(f"No curve type enum for {curve_str}")

    def reserve_ratio(self) -> Tuple[int, int]:
        """
        Nominal reserve ratio of the curve family as (numerator, denominator).
        Only the power-curve pricing uses it.
        """
        if self == CurveType.EXPONENTIAL:
            return 10, 100
        elif self == CurveType.FLAT:
            return 100, 100
        elif self == CurveType.LINEAR:
            return 50, 100
        else:
            return 90, 100

    def reserve_ratio_ppm(self) -> int:
        """The nominal reserve ratio in parts per million of MAX_RESERVE_RATIO."""
        numerator, denominator = self.reserve_ratio()
        return numerator * MAX_RESERVE_RATIO // denominator

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()


class OrderSide(Enum):
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def from_str(cls, side_str):
        if side_str.upper() == OrderSide.BUY.name:
            return OrderSide.BUY
        elif side_str.upper() == OrderSide.SELL.name:
            return OrderSide.SELL
        else:
            raise NotImplementedError(f"No order side enum for {side_str}")

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()
