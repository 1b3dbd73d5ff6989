"""Shared curves for the quote-engine tests.

The reference curve (whole units, scaled by 1e18):

    remaining 100 -> 80: y = 400 / x - 400   (boundary native 100)
    remaining  80 -> 50: y =  64 / x^2       (boundary native 256)
    remaining  50 -> 10: y =  32 / x^3       (boundary native 32000)

Every boundary value is exact in WAD arithmetic.
"""

from __future__ import annotations

import pytest

from src.core import CurveConfig, Range

W = 10**18


def three_range_ranges() -> tuple[Range, ...]:
    return (
        Range(
            token_supply_at_boundary=80 * W,
            native_amount_at_boundary=100 * W,
            coefficient=400 * W,
            power=1,
            constant_term=400 * W,
        ),
        Range(
            token_supply_at_boundary=50 * W,
            native_amount_at_boundary=256 * W,
            coefficient=64 * W,
            power=2,
            constant_term=0,
        ),
        Range(
            token_supply_at_boundary=10 * W,
            native_amount_at_boundary=32_000 * W,
            coefficient=32 * W,
            power=3,
            constant_term=0,
        ),
    )


def three_range_config(fee_bps: int = 0) -> CurveConfig:
    return CurveConfig(
        ranges=three_range_ranges(),
        max_supply=100 * W,
        min_remaining_supply=10 * W,
        fee_bps=fee_bps,
    )


@pytest.fixture(scope="session")
def curve() -> CurveConfig:
    return three_range_config()


@pytest.fixture(scope="session")
def fee_curve() -> CurveConfig:
    return three_range_config(fee_bps=100)
