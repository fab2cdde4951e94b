"""Signed 64.64 fixed-point arithmetic on plain Python ints.

A value ``x`` represents ``x / 2**64``. Every function is stateless, takes and
returns raw ints, and raises ``FixedPointOverflowError`` when a result leaves
``[MIN_64X64, MAX_64X64]`` (the signed 128-bit range).

Rounding is explicit:
- ``mul`` and ``to_int`` shift right, so they floor toward -inf.
- ``div`` and ``from_fraction`` truncate toward zero.
- ``exp2`` and ``exp`` truncate toward zero (results are never negative).

No floats are used anywhere, so results are bit-identical across platforms.
"""

from __future__ import annotations

from math import isqrt

from .errors import FixedPointOverflowError


Fixed64x64 = int  # raw mantissa, 64 fractional bits

FRACTIONAL_BITS = 64
ONE = 1 << FRACTIONAL_BITS
ZERO = 0
MIN_64X64 = -(1 << 127)
MAX_64X64 = (1 << 127) - 1

# exp2 domain: 2**64 does not fit, 2**-64 is below one ulp
EXP2_UPPER = 64 << FRACTIONAL_BITS
EXP2_LOWER = -(64 << FRACTIONAL_BITS)

# log2(e) with 128 fractional bits
LOG2_E_X128 = 0x171547652B82FE1777D0FFDA0D23A7D12

_INTERNAL_BITS = 128


def _exp2_fraction_constants() -> tuple[int, ...]:
    """``floor(2**(2**-k) * 2**128)`` for k = 1..64, by repeated integer sqrt."""
    out: list[int] = []
    c = isqrt(2 << (2 * _INTERNAL_BITS))
    for _ in range(FRACTIONAL_BITS):
        out.append(c)
        c = isqrt(c << _INTERNAL_BITS)
    return tuple(out)


_EXP2_FRACTION_CONSTANTS = _exp2_fraction_constants()


def _checked(x: int) -> Fixed64x64:
    if not (MIN_64X64 <= x <= MAX_64X64):
        raise FixedPointOverflowError(f"64.64 overflow: {x}")
    return x


def _div_toward_zero(num: int, den: int) -> int:
    q = abs(num) // abs(den)
    return q if (num >= 0) == (den >= 0) else -q


# -- Conversions -------------------------------------------------------------

def from_int(x: int) -> Fixed64x64:
    """Convert a signed integer to 64.64."""
    if not (-(1 << 63) <= x < (1 << 63)):
        raise FixedPointOverflowError(f"integer out of 64.64 range: {x}")
    return x << FRACTIONAL_BITS


def to_int(x: Fixed64x64) -> int:
    """Integer part of ``x``, rounded toward -inf."""
    return _checked(x) >> FRACTIONAL_BITS


def from_fraction(numerator: int, denominator: int) -> Fixed64x64:
    """``numerator / denominator`` as 64.64, truncated toward zero."""
    if denominator == 0:
        raise ZeroDivisionError("from_fraction: zero denominator")
    return _checked(_div_toward_zero(numerator << FRACTIONAL_BITS, denominator))


def from_decimal(value: int, decimals: int) -> Fixed64x64:
    """Interpret ``value`` as a decimal fixed-point number with ``decimals`` digits."""
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative: {decimals}")
    return from_fraction(value, 10**decimals)


# -- Basic arithmetic --------------------------------------------------------

def add(x: Fixed64x64, y: Fixed64x64) -> Fixed64x64:
    return _checked(x + y)


def sub(x: Fixed64x64, y: Fixed64x64) -> Fixed64x64:
    return _checked(x - y)


def neg(x: Fixed64x64) -> Fixed64x64:
    return _checked(-x)


def mul(x: Fixed64x64, y: Fixed64x64) -> Fixed64x64:
    """``x * y``, floored."""
    return _checked((x * y) >> FRACTIONAL_BITS)


def div(x: Fixed64x64, y: Fixed64x64) -> Fixed64x64:
    """``x / y``, truncated toward zero."""
    if y == 0:
        raise ZeroDivisionError("64.64 division by zero")
    return _checked(_div_toward_zero(x << FRACTIONAL_BITS, y))


# -- Exponentials ------------------------------------------------------------

def exp2(x: Fixed64x64) -> Fixed64x64:
    """Binary exponent ``2**x``.

    Raises for ``x >= 64`` and returns 0 for ``x < -64``. The fractional part
    is applied bit by bit from 128-bit constants, then shifted by the integer
    part.
    """
    if x >= EXP2_UPPER:
        raise FixedPointOverflowError(f"exp2 overflow: {x}")
    if x < EXP2_LOWER:
        return 0

    int_part = x >> FRACTIONAL_BITS
    frac = x - (int_part << FRACTIONAL_BITS)

    result = 1 << _INTERNAL_BITS
    for k, c in enumerate(_EXP2_FRACTION_CONSTANTS, start=1):
        if frac & (1 << (FRACTIONAL_BITS - k)):
            result = (result * c) >> _INTERNAL_BITS

    # result carries 128 fractional bits; move to 64 and apply 2**int_part
    return _checked(result >> (_INTERNAL_BITS - FRACTIONAL_BITS - int_part))


def exp(x: Fixed64x64) -> Fixed64x64:
    """Natural exponent ``e**x`` computed as ``2**(x * log2(e))``."""
    if x >= EXP2_UPPER:
        raise FixedPointOverflowError(f"exp overflow: {x}")
    if x < EXP2_LOWER:
        return 0
    return exp2((x * LOG2_E_X128) >> _INTERNAL_BITS)
