"""Tests for volfee/core/fixed_point.py (64.64 arithmetic)."""

import math

import pytest

from volfee.core import fixed_point as fp
from volfee.core.errors import FixedPointOverflowError


def _to_float(x: int) -> float:
    return x / fp.ONE


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

class TestConversions:
    def test_from_int(self):
        assert fp.from_int(3) == 3 << 64
        assert fp.from_int(-3) == -(3 << 64)

    def test_from_int_range(self):
        assert fp.from_int((1 << 63) - 1) == ((1 << 63) - 1) << 64
        with pytest.raises(FixedPointOverflowError):
            fp.from_int(1 << 63)
        with pytest.raises(FixedPointOverflowError):
            fp.from_int(-(1 << 63) - 1)

    def test_to_int_floors(self):
        assert fp.to_int(fp.from_fraction(7, 2)) == 3
        assert fp.to_int(fp.from_fraction(-7, 2)) == -4

    def test_from_fraction_truncates_toward_zero(self):
        third = fp.from_fraction(1, 3)
        assert third == fp.ONE // 3
        assert fp.from_fraction(-1, 3) == -third
        assert fp.from_fraction(1, -3) == -third

    def test_from_fraction_zero_denominator(self):
        with pytest.raises(ZeroDivisionError):
            fp.from_fraction(1, 0)

    def test_from_decimal(self):
        assert fp.from_decimal(500_000, 5) == fp.from_int(5)
        assert fp.from_decimal(150, 2) == fp.from_fraction(3, 2)

    def test_from_decimal_rejects_negative_decimals(self):
        with pytest.raises(ValueError):
            fp.from_decimal(1, -1)


# ---------------------------------------------------------------------------
# Basic arithmetic
# ---------------------------------------------------------------------------

class TestArithmetic:
    def test_add_sub(self):
        a = fp.from_int(5)
        b = fp.from_fraction(1, 2)
        assert fp.add(a, b) == fp.from_fraction(11, 2)
        assert fp.sub(a, b) == fp.from_fraction(9, 2)

    def test_add_overflow(self):
        with pytest.raises(FixedPointOverflowError):
            fp.add(fp.MAX_64X64, 1)

    def test_sub_overflow(self):
        with pytest.raises(FixedPointOverflowError):
            fp.sub(fp.MIN_64X64, 1)

    def test_neg(self):
        assert fp.neg(fp.ONE) == -fp.ONE
        assert fp.neg(fp.MAX_64X64) == -fp.MAX_64X64

    def test_neg_min_overflows(self):
        with pytest.raises(FixedPointOverflowError):
            fp.neg(fp.MIN_64X64)

    def test_mul(self):
        assert fp.mul(fp.from_int(6), fp.from_fraction(1, 2)) == fp.from_int(3)
        assert fp.mul(fp.from_int(-6), fp.from_int(7)) == fp.from_int(-42)

    def test_mul_floors_negative(self):
        # -1 ulp * 0.5 = -0.5 ulp, floored to -1 ulp
        assert fp.mul(-1, fp.from_fraction(1, 2)) == -1
        assert fp.mul(1, fp.from_fraction(1, 2)) == 0

    def test_mul_overflow(self):
        big = fp.from_int(1 << 40)
        with pytest.raises(FixedPointOverflowError):
            fp.mul(big, big)

    def test_div(self):
        assert fp.div(fp.from_int(3), fp.from_int(2)) == fp.from_fraction(3, 2)
        assert fp.div(fp.ONE, fp.from_int(2)) == fp.ONE // 2

    def test_div_truncates_toward_zero(self):
        assert fp.div(fp.from_int(-1), fp.from_int(3)) == -(fp.ONE // 3)
        assert fp.div(-1, fp.from_int(2)) == 0

    def test_div_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            fp.div(fp.ONE, 0)

    def test_div_overflow(self):
        with pytest.raises(FixedPointOverflowError):
            fp.div(fp.from_int(1 << 62), 1)


# ---------------------------------------------------------------------------
# Exponentials
# ---------------------------------------------------------------------------

class TestExp2:
    def test_integer_powers_are_exact(self):
        for n in range(-64, 63):
            assert fp.exp2(fp.from_int(n)) == 1 << (64 + n)

    def test_half(self):
        assert _to_float(fp.exp2(fp.from_fraction(1, 2))) == pytest.approx(math.sqrt(2), rel=1e-15)

    def test_fraction_accuracy(self):
        for num, den in ((1, 3), (7, 10), (-5, 4), (31, 7)):
            got = _to_float(fp.exp2(fp.from_fraction(num, den)))
            assert got == pytest.approx(2 ** (num / den), rel=1e-14)

    def test_overflow(self):
        with pytest.raises(FixedPointOverflowError):
            fp.exp2(fp.from_int(64))
        with pytest.raises(FixedPointOverflowError):
            fp.exp2(fp.from_int(63))

    def test_underflow_to_zero(self):
        assert fp.exp2(fp.from_int(-65)) == 0

    def test_never_negative(self):
        for x in (fp.from_int(-64), fp.from_fraction(-1, 3), 0, fp.from_int(10)):
            assert fp.exp2(x) >= 0


class TestExp:
    def test_log2_e_constant(self):
        assert fp.LOG2_E_X128 / (1 << 128) == pytest.approx(math.log2(math.e), rel=1e-15)

    def test_zero(self):
        assert fp.exp(0) == fp.ONE

    def test_one(self):
        assert _to_float(fp.exp(fp.ONE)) == pytest.approx(math.e, rel=1e-14)

    def test_accuracy(self):
        for x in (-20, -3, -1, 2, 8, 30, 43):
            got = _to_float(fp.exp(fp.from_int(x)))
            assert got == pytest.approx(math.exp(x), rel=1e-12, abs=1e-18)

    def test_monotone_on_grid(self):
        xs = [fp.from_fraction(k, 4) for k in range(-160, 161)]
        ys = [fp.exp(x) for x in xs]
        assert ys == sorted(ys)

    def test_overflow(self):
        with pytest.raises(FixedPointOverflowError):
            fp.exp(fp.from_int(44))
        with pytest.raises(FixedPointOverflowError):
            fp.exp(fp.from_int(64))

    def test_underflow_to_zero(self):
        assert fp.exp(fp.from_int(-65)) == 0
        assert fp.exp(fp.from_int(-50)) == 0
