"""
Pool keys as seen by the host exchange.

The fee engine treats pool ids as opaque; this module only exists so hosts (and
tests) can derive a stable id from a pool key and check whether a pool opted
into dynamic fees.
"""

from __future__ import annotations

from dataclasses import dataclass
import hashlib

from ..core.fee_curve import MAX_LP_FEE


# Fee field marker: the pool's fee is supplied per swap by a fee hook.
DYNAMIC_FEE_FLAG = 0x800000

# Set on a per-swap fee returned to the host to make it override the stored fee.
OVERRIDE_FEE_FLAG = 0x400000


def is_dynamic_fee(fee: int) -> bool:
    """True when the fee field is exactly the dynamic fee marker."""
    return fee == DYNAMIC_FEE_FLAG


@dataclass(frozen=True)
class PoolKey:
    """
    Identity of a pool on the host exchange.

    Attributes:
        currency0: First currency id (must be < currency1 lexicographically)
        currency1: Second currency id
        fee: Static LP fee (<= MAX_LP_FEE) or DYNAMIC_FEE_FLAG
        tick_spacing: Positive tick spacing
        hooks: Hook contract id ("" when the pool has no hook)
    """

    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str = ""

    def __post_init__(self) -> None:
        for name, val in (("currency0", self.currency0), ("currency1", self.currency1), ("hooks", self.hooks)):
            if not isinstance(val, str):
                raise TypeError(f"{name} must be a str")
        for name, val in (("fee", self.fee), ("tick_spacing", self.tick_spacing)):
            if not isinstance(val, int) or isinstance(val, bool):
                raise TypeError(f"{name} must be an int")
        if self.currency0 >= self.currency1:
            raise ValueError(f"Currencies must be in canonical order: {self.currency0} < {self.currency1}")
        if not is_dynamic_fee(self.fee) and not (0 <= self.fee <= MAX_LP_FEE):
            raise ValueError(f"fee must be in [0, {MAX_LP_FEE}] or the dynamic fee flag: {self.fee}")
        if self.tick_spacing <= 0:
            raise ValueError(f"tick_spacing must be positive: {self.tick_spacing}")

    @property
    def dynamic_fee(self) -> bool:
        return is_dynamic_fee(self.fee)


POOL_ID_DOMAIN = b"volfee:pool-id:v1\x00"


def _uvarint(value: int) -> bytes:
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _text(value: str, *, name: str) -> bytes:
    try:
        raw = value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{name} is not valid UTF-8 text") from exc
    return _uvarint(len(raw)) + raw


def pool_key_bytes(key: PoolKey) -> bytes:
    """
    Unambiguous byte encoding of a pool key.

    Layout: domain prefix, currency0, currency1, fee, tick_spacing, hooks.
    Strings are length-prefixed UTF-8; ints are unsigned LEB128.
    """
    return b"".join(
        (
            POOL_ID_DOMAIN,
            _text(key.currency0, name="currency0"),
            _text(key.currency1, name="currency1"),
            _uvarint(key.fee),
            _uvarint(key.tick_spacing),
            _text(key.hooks, name="hooks"),
        )
    )


def compute_pool_id(key: PoolKey) -> str:
    """Deterministic ``0x``-prefixed sha256 id for a pool key."""
    return "0x" + hashlib.sha256(pool_key_bytes(key)).hexdigest()
