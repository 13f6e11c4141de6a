from abc import ABC, abstractmethod

from bonding_core.common.math import checked_sub, ensure_amount


class CurveModel(ABC):
    """Abstract base class defining the interface for any integral-priced bonding curve."""

    @abstractmethod
    def integral(self, issuance: int) -> int:
        """
        Returns the area under the price curve from 0 up to 'issuance'.

        :param issuance: int - Total token issuance.
        :return: int: The integral value at the given issuance.
        """
        pass

    def integral_before(self, issuance: int) -> int:
        """
        Integral at the issuance observed before a trade.

        :param issuance: int - Pre-trade issuance.
        :return: int
        """
        return self.integral(ensure_amount(issuance, "issuance"))

    def integral_after(self, issuance: int) -> int:
        """
        Integral at the issuance a trade leads to. Same formula as integral_before;
        only the issuance passed in differs.

        :param issuance: int - Post-trade issuance.
        :return: int
        """
        return self.integral(ensure_amount(issuance, "issuance"))

    def cost_between(self, start: int, end: int) -> int:
        """
        The area under the curve between two issuance points, start <= end.
        Raises ArithmeticUnderflow if the curve decreases over that range.
        """
        if start > end:
            raise ValueError("'start' must not be greater than 'end'.")
        return checked_sub(self.integral_after(end), self.integral_before(start))
