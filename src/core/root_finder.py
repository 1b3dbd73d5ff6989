"""
Bounded binary search that inverts a range formula.

Given a native payment that ends strictly inside one range, find the remaining
supply `s*` with `evaluate(range, s*) == cumulative + pay`. The search stops once
the bracket is narrower than `tolerance` and answers from the high (more supply
left) end, so the buyer is never credited more tokens than the payment covers.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .curve_formula import evaluate
from .errors import BoundsViolation
from .fixed_point import Rounding
from .ranges import Range, upper_bound

logger = logging.getLogger(__name__)

# Absolute tolerance on remaining supply: up to 9 of the 18 decimal digits.
ROOT_TOLERANCE = 10**9


def find_root(
    ranges: Sequence[Range],
    range_index: int,
    remaining_token_supply: int,
    cumulative_native_at_remaining: int,
    pay_amount: int,
    max_supply: int,
    tolerance: int = ROOT_TOLERANCE,
) -> int:
    """
    Tokens bought inside `ranges[range_index]` for `pay_amount` native.

    The caller picks the range; it must bracket the target
    (`cumulative_native_at_remaining + pay_amount` below the range's boundary native).
    """
    for name, v in (
        ("range_index", range_index),
        ("remaining_token_supply", remaining_token_supply),
        ("cumulative_native_at_remaining", cumulative_native_at_remaining),
        ("pay_amount", pay_amount),
        ("max_supply", max_supply),
        ("tolerance", tolerance),
    ):
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{name} must be an int")
    if tolerance < 1:
        raise BoundsViolation(f"tolerance must be >= 1: {tolerance}")
    if pay_amount < 0:
        raise BoundsViolation(f"pay_amount must be non-negative: {pay_amount}")
    if pay_amount == 0:
        return 0
    if not (0 <= range_index < len(ranges)):
        raise BoundsViolation(f"range_index out of bounds: {range_index}")

    rng = ranges[range_index]
    low = rng.token_supply_at_boundary
    high = remaining_token_supply
    if not (low < high <= upper_bound(ranges, range_index, max_supply)):
        raise BoundsViolation(
            f"remaining_token_supply ({remaining_token_supply}) outside range {range_index}"
        )

    target = cumulative_native_at_remaining + pay_amount
    steps = 0
    while high - low > tolerance:
        mid = (low + high) // 2
        if evaluate(rng, mid, max_supply, Rounding.UP) > target:
            low = mid
        else:
            high = mid
        steps += 1

    logger.debug(
        "root found in range %d after %d steps: supply %d -> %d (bracket %d)",
        range_index,
        steps,
        remaining_token_supply,
        high,
        high - low,
    )
    return remaining_token_supply - high
