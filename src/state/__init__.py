"""
Curve supply state for the settlement layer
"""

from .curve_state import (
    CurveState,
    apply_buy_exact_in,
    apply_buy_exact_out,
    apply_sell_exact_in,
    initial_state,
    remaining_native_capacity,
    state_at,
)

__all__ = [
    "CurveState",
    "apply_buy_exact_in",
    "apply_buy_exact_out",
    "apply_sell_exact_in",
    "initial_state",
    "remaining_native_capacity",
    "state_at",
]
