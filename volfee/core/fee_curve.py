"""Sigmoid fee curve (deterministic, integer-only).

Maps a volatility reading to a fee inside ``[lower_fee, upper_fee]``:

    fee = lower_fee + (upper_fee - lower_fee) / (1 + exp(-steepness * (v - midpoint)))

where ``v`` is the reading as a percentage. The logistic term is evaluated in
64.64 fixed point (see ``fixed_point``) and the result is floored to an integer
fee, so the output never leaves the band.

Edge cases are resolved before any transcendental math:
- ``v >= SATURATION_PERCENT`` returns ``upper_fee`` exactly.
- ``v <= 0`` returns ``lower_fee`` exactly.
- When ``-steepness * (v - midpoint)`` exceeds ``EXP_INPUT_LIMIT`` the logistic
  term is taken as 0; ``exp`` of anything larger would not fit in 64.64.

Fees are in hundredths of a basis point (1_000_000 = 100%).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from . import fixed_point as fp
from .errors import ConfigurationError


MAX_LP_FEE = 1_000_000

SATURATION_PERCENT = 100
DEFAULT_STEEPNESS = 2
DEFAULT_MIDPOINT = 5

# |steepness| * (|midpoint| + SATURATION_PERCENT) stays far below 2**63
MAX_CURVE_PARAM = 1 << 30

EXP_INPUT_LIMIT = fp.from_int(43)


def _require_int(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class CurveParameters:
    """Immutable sigmoid parameters.

    ``steepness`` and ``midpoint`` are signed ints in whole percentage units:
    ``steepness=2`` means the exponent grows by 2 per percentage point of
    volatility, ``midpoint=5`` centres the curve at 5%. Fractional values such as
    a steepness of 0.5 cannot be expressed; floats and 64.64 mantissas are
    rejected with ``TypeError`` or ``ConfigurationError`` (a 64.64 value is far
    above ``MAX_CURVE_PARAM``). A zero value for either means "use the default",
    never a flat or zero-centred curve.
    """

    lower_fee: int
    upper_fee: int
    steepness: int = 0
    midpoint: int = 0

    def __post_init__(self) -> None:
        for name, val in (
            ("lower_fee", self.lower_fee),
            ("upper_fee", self.upper_fee),
            ("steepness", self.steepness),
            ("midpoint", self.midpoint),
        ):
            _require_int(name, val)

        if self.lower_fee < 0:
            raise ConfigurationError(f"lower_fee must be non-negative: {self.lower_fee}")
        if self.upper_fee > MAX_LP_FEE:
            raise ConfigurationError(f"upper_fee must be <= {MAX_LP_FEE}: {self.upper_fee}")
        if self.lower_fee >= self.upper_fee:
            raise ConfigurationError(
                f"lower_fee must be < upper_fee: lower={self.lower_fee}, upper={self.upper_fee}"
            )

        if self.steepness == 0:
            object.__setattr__(self, "steepness", DEFAULT_STEEPNESS)
        if self.midpoint == 0:
            object.__setattr__(self, "midpoint", DEFAULT_MIDPOINT)

        if self.steepness < 0:
            raise ConfigurationError(f"steepness must be positive: {self.steepness}")
        if self.steepness > MAX_CURVE_PARAM:
            raise ConfigurationError(f"steepness must be <= {MAX_CURVE_PARAM}: {self.steepness}")
        if abs(self.midpoint) > MAX_CURVE_PARAM:
            raise ConfigurationError(f"|midpoint| must be <= {MAX_CURVE_PARAM}: {self.midpoint}")

    @property
    def fee_band(self) -> int:
        return self.upper_fee - self.lower_fee


def saturation_threshold(decimals: int) -> int:
    """Raw reading at and above which the curve returns ``upper_fee``."""
    return SATURATION_PERCENT * 10**decimals


def sigmoid(z: fp.Fixed64x64) -> fp.Fixed64x64:
    """Logistic ``1 / (1 + exp(-z))`` in 64.64, within ``[0, ONE]``."""
    neg_z = fp.neg(z)
    if neg_z > EXP_INPUT_LIMIT:
        return fp.ZERO
    return fp.div(fp.ONE, fp.add(fp.ONE, fp.exp(neg_z)))


def evaluate_fee(volatility: int, params: CurveParameters, decimals: int) -> int:
    """
    Fee for a raw volatility reading.

    `volatility / 10**decimals` is the reading in percent. The result always
    satisfies ``params.lower_fee <= fee <= params.upper_fee``.
    """
    _require_int("volatility", volatility)
    _require_int("decimals", decimals)
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative: {decimals}")

    if volatility >= saturation_threshold(decimals):
        return params.upper_fee
    if volatility <= 0:
        return params.lower_fee

    centered = fp.sub(fp.from_decimal(volatility, decimals), fp.from_int(params.midpoint))
    s = sigmoid(fp.mul(fp.from_int(params.steepness), centered))
    return params.lower_fee + fp.to_int(fp.mul(fp.from_int(params.fee_band), s))


def curve_points(
    params: CurveParameters,
    readings: Iterable[int],
    decimals: int,
) -> list[tuple[int, int]]:
    """(reading, fee) pairs for a batch of raw readings, in input order."""
    return [(int(v), evaluate_fee(int(v), params, decimals)) for v in readings]
