"""
Per-range price-integral formula.

For a range with parameters (k, n, c) and remaining supply `s`:

    x = s / max_supply          (WAD ratio)
    y = k / x^n - c             (cumulative native paid into the curve at `s`)

`rounding` names the direction the *result* may err in. The ratio and the
power term are denominators, so they are rounded the opposite way:

    Rounding.UP   -> x, x^n rounded down, k / x^n rounded up   (never understated)
    Rounding.DOWN -> x, x^n rounded up,   k / x^n rounded down (never overstated)

so `evaluate(..., UP) >= evaluate(..., DOWN)` for every input.
"""

from __future__ import annotations

from ..kernels.python.wad_math_v1 import WAD
from .errors import BoundsViolation, DomainViolation
from .fixed_point import Rounding
from .ranges import Range


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def evaluate(rng: Range, target_supply: int, max_supply: int, rounding: Rounding) -> int:
    """Cumulative native amount at remaining supply `target_supply` under `rng`'s formula."""
    _require_int("target_supply", target_supply)
    _require_int("max_supply", max_supply)
    if not isinstance(rounding, Rounding):
        raise TypeError("rounding must be a Rounding")
    if max_supply <= 0:
        raise BoundsViolation(f"max_supply must be positive: {max_supply}")
    if not (0 < target_supply <= max_supply):
        raise BoundsViolation(f"target_supply must be in (0, {max_supply}]: {target_supply}")

    inner = rounding.opposite()
    ratio = inner.div_wad(target_supply, max_supply)
    if rng.power == 1:
        denominator = ratio
    else:
        denominator = inner.pow_wad(ratio, rng.power * WAD)
    if denominator == 0:
        raise DomainViolation(
            f"supply ratio underflows to zero: target_supply={target_supply}, power={rng.power}"
        )

    y = rounding.div_wad(rng.coefficient, denominator)
    if y < rng.constant_term:
        raise DomainViolation(
            f"formula result ({y}) below constant_term ({rng.constant_term}) at supply {target_supply}"
        )
    return y - rng.constant_term


def range_from_formula(
    *,
    token_supply_at_boundary: int,
    coefficient: int,
    power: int,
    constant_term: int,
    max_supply: int,
) -> Range:
    """
    Build a `Range` whose stored boundary native amount is the formula's value
    at the boundary, rounded up.
    """
    probe = Range(
        token_supply_at_boundary=token_supply_at_boundary,
        native_amount_at_boundary=0,
        coefficient=coefficient,
        power=power,
        constant_term=constant_term,
    )
    native = evaluate(probe, token_supply_at_boundary, max_supply, Rounding.UP)
    return Range(
        token_supply_at_boundary=token_supply_at_boundary,
        native_amount_at_boundary=native,
        coefficient=coefficient,
        power=power,
        constant_term=constant_term,
    )
