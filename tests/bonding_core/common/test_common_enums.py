import pytest
from bonding_core.common.enums import (
    MAX_RESERVE_RATIO,
    CurveType,
    OrderSide,
)


class TestCurveType:
    @pytest.mark.parametrize(
        "input_str, expected_enum",
        [
            ("LINEAR", CurveType.LINEAR),
            ("linear", CurveType.LINEAR),
            ("EXPONENTIAL", CurveType.EXPONENTIAL),
            ("exponential", CurveType.EXPONENTIAL),
            ("Flat", CurveType.FLAT),
            ("logarithmic", CurveType.LOGARITHMIC),
        ],
    )
    def test_from_str_valid(self, input_str, expected_enum):
        """Test that from_str returns the correct CurveType for valid inputs."""
        assert CurveType.from_str(input_str) == expected_enum

    @pytest.mark.parametrize("input_str", ["", "stepwise", "linearr", "custom"])
    def test_from_str_invalid(self, input_str):
        """Test that from_str raises NotImplementedError for invalid inputs."""
        with pytest.raises(NotImplementedError):
            CurveType.from_str(input_str)

    @pytest.mark.parametrize(
        "curve_type, expected",
        [
            (CurveType.EXPONENTIAL, (10, 100)),
            (CurveType.FLAT, (100, 100)),
            (CurveType.LINEAR, (50, 100)),
            (CurveType.LOGARITHMIC, (90, 100)),
        ],
    )
    def test_reserve_ratio(self, curve_type, expected):
        """Each curve family maps to its nominal reserve ratio."""
        assert curve_type.reserve_ratio() == expected

    @pytest.mark.parametrize(
        "curve_type, expected",
        [
            (CurveType.EXPONENTIAL, 100000),
            (CurveType.FLAT, MAX_RESERVE_RATIO),
            (CurveType.LINEAR, 500000),
            (CurveType.LOGARITHMIC, 900000),
        ],
    )
    def test_reserve_ratio_ppm(self, curve_type, expected):
        """The ratio scaled to parts per million never exceeds MAX_RESERVE_RATIO."""
        assert curve_type.reserve_ratio_ppm() == expected
        assert 0 < curve_type.reserve_ratio_ppm() <= MAX_RESERVE_RATIO

    def test_hashable(self):
        """CurveType can be used as a dict key."""
        lookup = {CurveType.LINEAR: "a", CurveType.FLAT: "b"}
        assert lookup[CurveType.LINEAR] == "a"

    def test_str_and_repr(self):
        assert str(CurveType.LINEAR) == "LINEAR"
        assert repr(CurveType.LOGARITHMIC) == "LOGARITHMIC"


class TestOrderSide:
    @pytest.mark.parametrize(
        "input_str, expected_enum",
        [
            ("BUY", OrderSide.BUY),
            ("buy", OrderSide.BUY),
            ("SELL", OrderSide.SELL),
            ("sell", OrderSide.SELL),
        ],
    )
    def test_from_str_valid(self, input_str, expected_enum):
        assert OrderSide.from_str(input_str) == expected_enum

    @pytest.mark.parametrize("input_str", ["", "hold", "buyy"])
    def test_from_str_invalid(self, input_str):
        with pytest.raises(NotImplementedError):
            OrderSide.from_str(input_str)

    def test_str(self):
        assert str(OrderSide.BUY) == "BUY"
        assert repr(OrderSide.SELL) == "SELL"
