"""
Fee-wrapped curve quotes.

These are the entry points the settlement layer calls. Each one validates the
caller's amounts, runs the range walker, and applies the linear fee on the
native leg:

- buy exact in:  fee comes out of the payment, the net amount buys tokens;
- buy exact out: the curve cost is computed first, the fee is added on top;
- sell exact in: the curve proceeds are computed first, the fee is deducted.

`native_with_fee - native_without_fee == fee` holds for every quote.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import CurveConfig
from .errors import BoundsViolation
from .fees import add_fee, deduct_fee
from .range_walker import buy_exact_in, buy_exact_out, sell_exact_in

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeQuote:
    token_amount: int
    native_with_fee: int
    native_without_fee: int
    fee: int

    def __post_init__(self) -> None:
        for name, v in (
            ("token_amount", self.token_amount),
            ("native_with_fee", self.native_with_fee),
            ("native_without_fee", self.native_without_fee),
            ("fee", self.fee),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")
        if self.native_with_fee - self.native_without_fee != self.fee:
            raise AssertionError("quote fee does not match native amounts")


def _require_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value <= 0:
        raise BoundsViolation(f"{name} must be positive: {value}")


def quote_buy_exact_out(config: CurveConfig, remaining_total_supply: int, token_amount: int) -> TradeQuote:
    """Native (plus fee) needed to buy exactly `token_amount` tokens."""
    _require_amount("token_amount", token_amount)
    if token_amount > remaining_total_supply:
        raise BoundsViolation(
            f"token_amount ({token_amount}) exceeds remaining supply ({remaining_total_supply})"
        )

    cost = buy_exact_out(
        config.ranges,
        remaining_total_supply,
        token_amount,
        config.max_supply,
        config.min_remaining_supply,
    )
    if cost <= 0:
        raise BoundsViolation(f"native cost is non-positive: {cost}")

    total, fee = add_fee(cost, config.fee_bps)
    logger.debug("buy exact out: tokens=%d cost=%d fee=%d", token_amount, cost, fee)
    return TradeQuote(token_amount=token_amount, native_with_fee=total, native_without_fee=cost, fee=fee)


def quote_buy_exact_in(
    config: CurveConfig,
    remaining_total_supply: int,
    remaining_native_supply: int,
    native_payment: int,
) -> TradeQuote:
    """Tokens bought with exactly `native_payment` (fee included)."""
    _require_amount("native_payment", native_payment)

    net, fee = deduct_fee(native_payment, config.fee_bps)
    if net > remaining_native_supply:
        raise BoundsViolation(
            f"net payment ({net}) exceeds remaining native supply ({remaining_native_supply})"
        )

    tokens = buy_exact_in(
        config.ranges,
        remaining_total_supply,
        net,
        config.max_supply,
        config.min_remaining_supply,
        config.root_tolerance,
    )
    if tokens <= 0:
        raise BoundsViolation(f"token amount is zero (trade too small): payment={native_payment}")

    logger.debug("buy exact in: payment=%d fee=%d tokens=%d", native_payment, fee, tokens)
    return TradeQuote(token_amount=tokens, native_with_fee=native_payment, native_without_fee=net, fee=fee)


def quote_sell_exact_in(config: CurveConfig, remaining_total_supply: int, token_amount: int) -> TradeQuote:
    """Native (after fee) returned for selling exactly `token_amount` tokens."""
    _require_amount("token_amount", token_amount)
    if token_amount > config.max_supply - remaining_total_supply:
        raise BoundsViolation(
            f"token_amount ({token_amount}) exceeds sold supply ({config.max_supply - remaining_total_supply})"
        )

    proceeds = sell_exact_in(config.ranges, remaining_total_supply, token_amount, config.max_supply)
    if proceeds <= 0:
        raise BoundsViolation(f"native proceeds are non-positive for token_amount={token_amount}")

    net, fee = deduct_fee(proceeds, config.fee_bps)
    logger.debug("sell exact in: tokens=%d proceeds=%d fee=%d", token_amount, proceeds, fee)
    return TradeQuote(token_amount=token_amount, native_with_fee=proceeds, native_without_fee=net, fee=fee)
