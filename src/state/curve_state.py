"""
Curve supply snapshot and pure trade transitions.

The quote engine never mutates anything. This module is the thin functional
shell a settlement layer would use: each `apply_*` call quotes against the
current snapshot and returns the accepted quote with the next snapshot. A
rejected quote raises before any new state exists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core.config import CurveConfig
from ..core.quoter import TradeQuote, quote_buy_exact_in, quote_buy_exact_out, quote_sell_exact_in
from ..core.range_walker import buy_exact_out


@dataclass(frozen=True)
class CurveState:
    """Tokens still on the curve, and native still payable before the supply floor."""

    remaining_total_supply: int
    remaining_native_supply: int

    def __post_init__(self) -> None:
        for name, v in (
            ("remaining_total_supply", self.remaining_total_supply),
            ("remaining_native_supply", self.remaining_native_supply),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")


def remaining_native_capacity(config: CurveConfig, remaining_total_supply: int) -> int:
    """Native needed to buy the curve down to `min_remaining_supply` from here."""
    drainable = remaining_total_supply - config.min_remaining_supply
    if drainable <= 0:
        return 0
    return buy_exact_out(
        config.ranges,
        remaining_total_supply,
        drainable,
        config.max_supply,
        config.min_remaining_supply,
    )


def initial_state(config: CurveConfig) -> CurveState:
    """A freshly deployed curve: nothing sold yet."""
    return state_at(config, config.max_supply)


def state_at(config: CurveConfig, remaining_total_supply: int) -> CurveState:
    return CurveState(
        remaining_total_supply=remaining_total_supply,
        remaining_native_supply=remaining_native_capacity(config, remaining_total_supply),
    )


def apply_buy_exact_in(config: CurveConfig, state: CurveState, native_payment: int) -> Tuple[TradeQuote, CurveState]:
    quote = quote_buy_exact_in(
        config,
        state.remaining_total_supply,
        state.remaining_native_supply,
        native_payment,
    )
    return quote, state_at(config, state.remaining_total_supply - quote.token_amount)


def apply_buy_exact_out(config: CurveConfig, state: CurveState, token_amount: int) -> Tuple[TradeQuote, CurveState]:
    quote = quote_buy_exact_out(config, state.remaining_total_supply, token_amount)
    return quote, state_at(config, state.remaining_total_supply - quote.token_amount)


def apply_sell_exact_in(config: CurveConfig, state: CurveState, token_amount: int) -> Tuple[TradeQuote, CurveState]:
    quote = quote_sell_exact_in(config, state.remaining_total_supply, token_amount)
    return quote, state_at(config, state.remaining_total_supply + quote.token_amount)
