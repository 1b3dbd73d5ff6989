"""
Piecewise accumulation across curve ranges.

All three quote algorithms share one traversal: `walk_ranges()` locates the
segment containing the current remaining supply and yields segments in the
direction the trade moves supply. Cumulative native values come from
`native_at()`, which prefers the stored boundary amounts and otherwise defers
to `evaluate()`; nothing here computes the formula itself.

Rounding policy:
- the side already paid (current supply) is rounded down,
- the side being paid for (target supply) is rounded up,
so buyers never pay less than the curve price and sellers never receive more.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Iterator, Optional, Sequence

from .curve_formula import evaluate
from .errors import BoundsViolation, InvalidNativeAmounts
from .fixed_point import Rounding
from .ranges import Range, terminal_supply, upper_bound
from .root_finder import ROOT_TOLERANCE, find_root

logger = logging.getLogger(__name__)


@unique
class Direction(Enum):
    CONSUME = "consume"  # buys: remaining supply falls, ranges ascend
    RETURN = "return"  # sells: remaining supply rises, ranges descend


@dataclass(frozen=True)
class RangeSegment:
    """One range together with the supply interval it covers."""

    index: int
    range: Range
    lower: int
    upper: int
    upper_native: Optional[int] = None  # boundary native of the previous range

    @property
    def lower_native(self) -> int:
        return self.range.native_amount_at_boundary

    def contains(self, supply: int, direction: Direction) -> bool:
        if direction is Direction.CONSUME:
            return self.lower < supply <= self.upper
        return self.lower <= supply < self.upper


def _segment(ranges: Sequence[Range], index: int, max_supply: int) -> RangeSegment:
    return RangeSegment(
        index=index,
        range=ranges[index],
        lower=ranges[index].token_supply_at_boundary,
        upper=upper_bound(ranges, index, max_supply),
        upper_native=ranges[index - 1].native_amount_at_boundary if index > 0 else None,
    )


def walk_ranges(
    ranges: Sequence[Range],
    max_supply: int,
    supply: int,
    direction: Direction,
) -> Iterator[RangeSegment]:
    """
    Yield segments starting at the one containing `supply`, moving in `direction`.

    Raises BoundsViolation if no segment contains `supply`.
    """
    if direction is Direction.CONSUME:
        order = range(len(ranges))
    else:
        order = range(len(ranges) - 1, -1, -1)

    started = False
    for i in order:
        seg = _segment(ranges, i, max_supply)
        if not started:
            if not seg.contains(supply, direction):
                continue
            started = True
        yield seg

    if not started:
        raise BoundsViolation(f"remaining supply {supply} is outside the curve ({direction.value})")


def native_at(seg: RangeSegment, supply: int, max_supply: int, rounding: Rounding) -> int:
    """
    Cumulative native at `supply` within `seg`, using stored boundary amounts when exact.

    An upward-rounded interior value is capped at the segment's lower boundary
    native: the power margin can lift it past the stored amount just inside the
    boundary, which would make buying fewer tokens cost more.
    """
    if supply == seg.lower:
        return seg.lower_native
    if supply == seg.upper and seg.upper_native is not None:
        return seg.upper_native
    value = evaluate(seg.range, supply, max_supply, rounding)
    if rounding is Rounding.UP and value > seg.lower_native:
        return seg.lower_native
    return value


def buy_exact_out(
    ranges: Sequence[Range],
    remaining_total_supply: int,
    buy_amount: int,
    max_supply: int,
    min_remaining_supply: int,
) -> int:
    """Native cost of taking `buy_amount` tokens off the curve."""
    if buy_amount < 0:
        raise BoundsViolation(f"buy_amount must be non-negative: {buy_amount}")
    if buy_amount > remaining_total_supply:
        raise BoundsViolation(
            f"buy_amount ({buy_amount}) exceeds remaining supply ({remaining_total_supply})"
        )
    target = remaining_total_supply - buy_amount
    if target < min_remaining_supply:
        raise BoundsViolation(
            f"purchase would leave {target} below minimum remaining supply {min_remaining_supply}"
        )

    start_native: Optional[int] = None
    end_native: Optional[int] = None
    for seg in walk_ranges(ranges, max_supply, remaining_total_supply, Direction.CONSUME):
        if start_native is None:
            start_native = native_at(seg, remaining_total_supply, max_supply, Rounding.DOWN)
        if target >= seg.lower:
            end_native = native_at(seg, target, max_supply, Rounding.UP)
            break
    if start_native is None or end_native is None:
        raise BoundsViolation(f"target supply {target} is below the curve terminal {terminal_supply(ranges)}")

    if end_native < start_native:
        raise InvalidNativeAmounts(start_native, end_native)
    return end_native - start_native


def buy_exact_in(
    ranges: Sequence[Range],
    remaining_total_supply: int,
    pay_amount: int,
    max_supply: int,
    min_remaining_supply: int,
    tolerance: int = ROOT_TOLERANCE,
) -> int:
    """Tokens obtained for exactly `pay_amount` native."""
    if remaining_total_supply < min_remaining_supply:
        raise BoundsViolation(
            f"remaining supply {remaining_total_supply} already below minimum {min_remaining_supply}"
        )
    if pay_amount < 0:
        raise BoundsViolation(f"pay_amount must be non-negative: {pay_amount}")
    if pay_amount == 0:
        return 0

    supply = remaining_total_supply
    tokens = 0
    settled = False
    for seg in walk_ranges(ranges, max_supply, remaining_total_supply, Direction.CONSUME):
        start_native = native_at(seg, supply, max_supply, Rounding.DOWN)
        if start_native > seg.lower_native:
            raise InvalidNativeAmounts(start_native, seg.lower_native)
        budget = seg.lower_native - start_native

        if pay_amount < budget:
            tokens += find_root(
                ranges, seg.index, supply, start_native, pay_amount, max_supply, tolerance
            )
            settled = True
            break
        tokens += supply - seg.lower
        if pay_amount == budget:
            settled = True
            break
        pay_amount -= budget
        supply = seg.lower
        logger.debug("buy crossed range %d, %d native left to spend", seg.index, pay_amount)

    if not settled:
        raise BoundsViolation(f"payment exceeds curve capacity by {pay_amount}")
    if remaining_total_supply - tokens < min_remaining_supply:
        raise BoundsViolation(
            f"purchase would leave {remaining_total_supply - tokens} below minimum remaining supply "
            f"{min_remaining_supply}"
        )
    return tokens


def sell_exact_in(
    ranges: Sequence[Range],
    remaining_total_supply: int,
    sell_amount: int,
    max_supply: int,
) -> int:
    """Native returned for putting `sell_amount` tokens back on the curve."""
    if sell_amount < 0:
        raise BoundsViolation(f"sell_amount must be non-negative: {sell_amount}")
    target = remaining_total_supply + sell_amount
    if target > max_supply:
        raise BoundsViolation(f"sale would take remaining supply to {target}, above max_supply {max_supply}")

    end_native: Optional[int] = None
    start_native: Optional[int] = None
    for seg in walk_ranges(ranges, max_supply, remaining_total_supply, Direction.RETURN):
        if end_native is None:
            end_native = native_at(seg, remaining_total_supply, max_supply, Rounding.DOWN)
        if target <= seg.upper:
            start_native = native_at(seg, target, max_supply, Rounding.UP)
            break
    if start_native is None or end_native is None:
        raise BoundsViolation(f"target supply {target} is outside the curve")

    # Opposite rounding at the two ends can cross for tiny sales; pay nothing rather than underflow.
    if end_native <= start_native:
        logger.debug(
            "sell of %d clamped to zero: end_native=%d start_native=%d",
            sell_amount,
            end_native,
            start_native,
        )
        return 0
    return end_native - start_native
