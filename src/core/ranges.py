"""
Piecewise curve ranges.

A curve is an ordered tuple of `Range` values. `ranges[0]` is consumed first
when buying from a full curve; range `i` covers remaining supply in
`(ranges[i].token_supply_at_boundary, upper_i]`, where `upper_0 = max_supply`
and `upper_i = ranges[i - 1].token_supply_at_boundary`.

Units/conventions:
- supplies and native amounts are WAD-scaled ints,
- `coefficient` (k) and `constant_term` (c) are native WAD values,
- `power` (n) is a plain positive int.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .errors import ConfigurationViolation


@dataclass(frozen=True)
class Range:
    token_supply_at_boundary: int
    native_amount_at_boundary: int
    coefficient: int
    power: int
    constant_term: int

    def __post_init__(self) -> None:
        for name, v in (
            ("token_supply_at_boundary", self.token_supply_at_boundary),
            ("native_amount_at_boundary", self.native_amount_at_boundary),
            ("coefficient", self.coefficient),
            ("power", self.power),
            ("constant_term", self.constant_term),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if self.token_supply_at_boundary <= 0:
            raise ConfigurationViolation(
                f"token_supply_at_boundary must be positive: {self.token_supply_at_boundary}"
            )
        if self.native_amount_at_boundary < 0:
            raise ConfigurationViolation(
                f"native_amount_at_boundary must be non-negative: {self.native_amount_at_boundary}"
            )
        if self.coefficient <= 0:
            raise ConfigurationViolation(f"coefficient must be positive: {self.coefficient}")
        if self.power < 1:
            raise ConfigurationViolation(f"power must be >= 1: {self.power}")
        if self.constant_term < 0:
            raise ConfigurationViolation(f"constant_term must be non-negative: {self.constant_term}")


RangeList = Tuple[Range, ...]


def validate_ranges(ranges: Sequence[Range], max_supply: int) -> RangeList:
    """
    Check the ordering invariants of a range list and return it as a tuple.

    - non-empty, every element a `Range`
    - boundaries strictly decreasing, the first strictly below `max_supply`
    - native amounts at the boundaries strictly increasing
    """
    if not isinstance(max_supply, int) or isinstance(max_supply, bool):
        raise TypeError("max_supply must be an int")
    if max_supply <= 0:
        raise ConfigurationViolation(f"max_supply must be positive: {max_supply}")

    out = tuple(ranges)
    if not out:
        raise ConfigurationViolation("ranges must be non-empty")
    for i, rng in enumerate(out):
        if not isinstance(rng, Range):
            raise TypeError(f"ranges[{i}] must be a Range")

    if out[0].token_supply_at_boundary >= max_supply:
        raise ConfigurationViolation(
            f"ranges[0] boundary ({out[0].token_supply_at_boundary}) must be below max_supply ({max_supply})"
        )
    for i in range(1, len(out)):
        prev, cur = out[i - 1], out[i]
        if cur.token_supply_at_boundary >= prev.token_supply_at_boundary:
            raise ConfigurationViolation(
                f"ranges[{i}] boundary must be below ranges[{i - 1}] boundary: "
                f"{cur.token_supply_at_boundary} >= {prev.token_supply_at_boundary}"
            )
        if cur.native_amount_at_boundary <= prev.native_amount_at_boundary:
            raise ConfigurationViolation(
                f"ranges[{i}] native amount must exceed ranges[{i - 1}] native amount: "
                f"{cur.native_amount_at_boundary} <= {prev.native_amount_at_boundary}"
            )
    return out


def upper_bound(ranges: Sequence[Range], index: int, max_supply: int) -> int:
    """Remaining supply at which range `index` starts (exclusive end of the previous range)."""
    if index == 0:
        return max_supply
    return ranges[index - 1].token_supply_at_boundary


def terminal_supply(ranges: Sequence[Range]) -> int:
    """Remaining supply at the end of the last range."""
    return ranges[-1].token_supply_at_boundary
