"""
Linear trade fees (deterministic, integer-only).

The fee is always taken on the native leg and always floors:

    fee = floor(amount * fee_bps / 10_000)
"""

from __future__ import annotations

from typing import Tuple


BPS_DENOM = 10_000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def validate_fee_bps(fee_bps: int) -> None:
    _require_int("fee_bps", fee_bps)
    if not (0 <= fee_bps <= BPS_DENOM):
        raise ValueError(f"fee_bps must be in [0, {BPS_DENOM}]: {fee_bps}")


def compute_fee(amount: int, fee_bps: int) -> int:
    """`floor(amount * fee_bps / 10_000)` for a non-negative amount."""
    _require_int("amount", amount)
    validate_fee_bps(fee_bps)
    if amount < 0:
        raise ValueError(f"amount must be non-negative: {amount}")
    return (amount * fee_bps) // BPS_DENOM


def add_fee(amount: int, fee_bps: int) -> Tuple[int, int]:
    """Fee charged on top of `amount`. Returns (amount_with_fee, fee)."""
    fee = compute_fee(amount, fee_bps)
    return amount + fee, fee


def deduct_fee(amount: int, fee_bps: int) -> Tuple[int, int]:
    """Fee carved out of `amount`. Returns (amount_without_fee, fee)."""
    fee = compute_fee(amount, fee_bps)
    if fee > amount:
        raise AssertionError("fee exceeds amount")
    return amount - fee, fee
