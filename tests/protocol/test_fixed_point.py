"""Tests for checked fixed-point helpers."""

import pytest

from jumprate.data.constants import SCALE, UINT256_MAX
from jumprate.protocol import fixed_point as fp
from jumprate.protocol.errors import ArithmeticFault, RateModelError


class TestCheckUint:
    def test_accepts_zero_and_max(self) -> None:
        assert fp.check_uint(0) == 0
        assert fp.check_uint(UINT256_MAX) == UINT256_MAX

    def test_rejects_negative(self) -> None:
        with pytest.raises(ArithmeticFault, match="underflow"):
            fp.check_uint(-1)

    def test_rejects_overflow(self) -> None:
        with pytest.raises(ArithmeticFault, match="overflow"):
            fp.check_uint(UINT256_MAX + 1)

    @pytest.mark.parametrize("value", [1.5, "1", True, None])
    def test_rejects_non_integers(self, value: object) -> None:
        with pytest.raises(ArithmeticFault):
            fp.check_uint(value)  # type: ignore[arg-type]


class TestCheckedOps:
    def test_sub(self) -> None:
        assert fp.sub(5, 3) == 2
        assert fp.sub(3, 3) == 0

    def test_sub_underflow(self) -> None:
        with pytest.raises(ArithmeticFault, match="underflow"):
            fp.sub(3, 5)

    def test_div_truncates(self) -> None:
        assert fp.div(7, 2) == 3

    def test_div_by_zero(self) -> None:
        with pytest.raises(ArithmeticFault, match="division by zero"):
            fp.div(1, 0)

    def test_mul_overflow(self) -> None:
        with pytest.raises(ArithmeticFault, match="overflow"):
            fp.mul(UINT256_MAX, 2)

    def test_add_overflow(self) -> None:
        with pytest.raises(ArithmeticFault):
            fp.add(UINT256_MAX, 1)

    def test_mul_scaled(self) -> None:
        assert fp.mul_scaled(2 * SCALE, 3 * SCALE) == 6 * SCALE
        assert fp.mul_scaled(SCALE // 2, SCALE // 2) == SCALE // 4

    def test_div_scaled(self) -> None:
        assert fp.div_scaled(SCALE, 4 * SCALE) == SCALE // 4
        assert fp.div_scaled(3, 2) == 3 * SCALE // 2

    def test_faults_are_arithmetic_errors(self) -> None:
        with pytest.raises(ArithmeticError):
            fp.sub(0, 1)
        with pytest.raises(RateModelError):
            fp.div(0, 0)


class TestConversions:
    def test_to_scaled(self) -> None:
        assert fp.to_scaled(0.8) == 8 * 10**17
        assert fp.to_scaled(0.075) == 75 * 10**15
        assert fp.to_scaled(1.09) == 109 * 10**16
        assert fp.to_scaled(0.0) == 0

    def test_to_scaled_rejects_negative(self) -> None:
        with pytest.raises(ArithmeticFault):
            fp.to_scaled(-0.1)

    def test_from_scaled(self) -> None:
        assert fp.from_scaled(SCALE // 2) == pytest.approx(0.5)
        assert fp.from_scaled(0) == 0.0
