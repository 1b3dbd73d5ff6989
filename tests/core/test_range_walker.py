"""Tests for src/core/range_walker.py: multi-range buy/sell accumulation."""

from __future__ import annotations

import hypothesis.strategies as st
import pytest
from hypothesis import assume, given, settings

from src.core import (
    BoundsViolation,
    Direction,
    InvalidNativeAmounts,
    Range,
    buy_exact_in,
    buy_exact_out,
    sell_exact_in,
    walk_ranges,
)

W = 10**18
MAX = 100 * W
FLOOR = 10 * W
CAPACITY = 32_000 * W

RANGES = (
    Range(80 * W, 100 * W, 400 * W, 1, 400 * W),
    Range(50 * W, 256 * W, 64 * W, 2, 0),
    Range(10 * W, 32_000 * W, 32 * W, 3, 0),
)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

class TestWalkRanges:
    @pytest.mark.parametrize(
        "supply,direction,expected",
        [
            (100 * W, Direction.CONSUME, [0, 1, 2]),
            (80 * W, Direction.CONSUME, [1, 2]),
            (11 * W, Direction.CONSUME, [2]),
            (80 * W, Direction.RETURN, [0]),
            (50 * W, Direction.RETURN, [1, 0]),
            (10 * W, Direction.RETURN, [2, 1, 0]),
        ],
    )
    def test_starting_segment_and_order(self, supply, direction, expected):
        assert [seg.index for seg in walk_ranges(RANGES, MAX, supply, direction)] == expected

    def test_segment_bounds(self):
        segs = list(walk_ranges(RANGES, MAX, MAX, Direction.CONSUME))
        assert [(s.lower, s.upper) for s in segs] == [(80 * W, MAX), (50 * W, 80 * W), (10 * W, 50 * W)]
        assert segs[0].upper_native is None
        assert segs[2].upper_native == 256 * W
        assert segs[2].lower_native == 32_000 * W

    def test_supply_outside_curve(self):
        with pytest.raises(BoundsViolation):
            list(walk_ranges(RANGES, MAX, 10 * W, Direction.CONSUME))
        with pytest.raises(BoundsViolation):
            list(walk_ranges(RANGES, MAX, MAX, Direction.RETURN))


# ---------------------------------------------------------------------------
# buy_exact_out
# ---------------------------------------------------------------------------

class TestBuyExactOut:
    @pytest.mark.parametrize(
        "supply,amount,cost",
        [
            (MAX, 20 * W, 100 * W),
            (MAX, 50 * W, 256 * W),
            (80 * W, 30 * W, 156 * W),
            (MAX, 90 * W, 32_000 * W),
            (MAX, 10 * W, 44_444_444_444_444_444_445),
            (MAX, 0, 0),
        ],
    )
    def test_costs(self, supply, amount, cost):
        assert buy_exact_out(RANGES, supply, amount, MAX, FLOOR) == cost

    @pytest.mark.parametrize("supply,amount", [(MAX, 20 * W), (MAX, 50 * W), (MAX, 90 * W), (80 * W, 70 * W)])
    def test_one_wei_short_of_a_boundary_costs_no_more(self, supply, amount):
        assert buy_exact_out(RANGES, supply, amount - 1, MAX, FLOOR) <= buy_exact_out(
            RANGES, supply, amount, MAX, FLOOR
        )

    @settings(max_examples=100, deadline=None)
    @given(
        boundary=st.sampled_from([80 * W, 50 * W, 10 * W]),
        short=st.integers(min_value=1, max_value=10**12),
    )
    def test_cost_below_boundary_is_capped_by_boundary_native(self, boundary, short):
        at_boundary = buy_exact_out(RANGES, MAX, MAX - boundary, MAX, FLOOR)
        assert buy_exact_out(RANGES, MAX, MAX - boundary - short, MAX, FLOOR) <= at_boundary

    def test_rejects_buying_below_floor(self):
        with pytest.raises(BoundsViolation, match="minimum remaining supply"):
            buy_exact_out(RANGES, MAX, 91 * W, MAX, FLOOR)

    def test_rejects_buying_more_than_remaining(self):
        with pytest.raises(BoundsViolation, match="exceeds remaining supply"):
            buy_exact_out(RANGES, MAX, 101 * W, MAX, FLOOR)

    def test_rejects_negative_amount(self):
        with pytest.raises(BoundsViolation):
            buy_exact_out(RANGES, MAX, -1, MAX, FLOOR)

    def test_inconsistent_boundary_native(self):
        bad = (Range(80 * W, 10 * W, 400 * W, 1, 400 * W),) + RANGES[1:]
        with pytest.raises(InvalidNativeAmounts) as exc:
            buy_exact_out(bad, 90 * W, 10 * W, MAX, FLOOR)
        assert exc.value.end == 10 * W


# ---------------------------------------------------------------------------
# buy_exact_in
# ---------------------------------------------------------------------------

class TestBuyExactIn:
    @pytest.mark.parametrize(
        "pay,tokens",
        [
            (100 * W, 20 * W),
            (256 * W, 50 * W),
            (CAPACITY, 90 * W),
            (0, 0),
        ],
    )
    def test_exact_boundaries(self, pay, tokens):
        assert buy_exact_in(RANGES, MAX, pay, MAX, FLOOR) == tokens

    def test_payment_inside_a_range(self):
        tokens = buy_exact_in(RANGES, MAX, 50 * W, MAX, FLOOR)
        assert 100 * W // 9 - 2 * 10**9 <= tokens <= 100 * W // 9

    def test_tolerance_is_forwarded(self):
        tokens = buy_exact_in(RANGES, MAX, 50 * W, MAX, FLOOR, tolerance=1)
        assert 100 * W // 9 - 200 <= tokens <= 100 * W // 9

    def test_crossing_ranges_then_root(self):
        # 100 buys the first range; the remaining 100 lands inside the quadratic range.
        tokens = buy_exact_in(RANGES, MAX, 200 * W, MAX, FLOOR)
        assert 20 * W < tokens < 50 * W
        assert buy_exact_out(RANGES, MAX, tokens, MAX, FLOOR) <= 200 * W

    def test_rejects_payment_over_capacity(self):
        with pytest.raises(BoundsViolation, match="exceeds curve capacity"):
            buy_exact_in(RANGES, MAX, CAPACITY + 1, MAX, FLOOR)

    def test_rejects_supply_already_below_floor(self):
        with pytest.raises(BoundsViolation, match="already below minimum"):
            buy_exact_in(RANGES, 9 * W, W, MAX, FLOOR)

    def test_rejects_negative_payment(self):
        with pytest.raises(BoundsViolation):
            buy_exact_in(RANGES, MAX, -1, MAX, FLOOR)

    def test_floor_above_terminal_is_enforced(self):
        with pytest.raises(BoundsViolation, match="minimum remaining supply"):
            buy_exact_in(RANGES, MAX, CAPACITY, MAX, 20 * W)

    def test_inconsistent_boundary_native(self):
        bad = (Range(80 * W, 10 * W, 400 * W, 1, 400 * W),) + RANGES[1:]
        with pytest.raises(InvalidNativeAmounts):
            buy_exact_in(bad, 90 * W, W, MAX, FLOOR)


# ---------------------------------------------------------------------------
# sell_exact_in
# ---------------------------------------------------------------------------

class TestSellExactIn:
    @pytest.mark.parametrize(
        "supply,amount,proceeds",
        [
            (80 * W, 20 * W, 100 * W),
            (50 * W, 50 * W, 256 * W),
            (10 * W, 90 * W, 32_000 * W),
            (80 * W, 10 * W, 55_555_555_555_555_555_555),
        ],
    )
    def test_proceeds(self, supply, amount, proceeds):
        assert sell_exact_in(RANGES, supply, amount, MAX) == proceeds

    def test_tiny_sales_clamp_to_zero(self):
        assert sell_exact_in(RANGES, 90 * W, 0, MAX) == 0
        assert sell_exact_in(RANGES, 90 * W, 1, MAX) == 0

    def test_rejects_selling_past_max_supply(self):
        with pytest.raises(BoundsViolation, match="above max_supply"):
            sell_exact_in(RANGES, 80 * W, 21 * W, MAX)

    def test_rejects_negative_amount(self):
        with pytest.raises(BoundsViolation):
            sell_exact_in(RANGES, 80 * W, -1, MAX)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

class TestProperties:
    @settings(max_examples=100, deadline=None)
    @given(pay=st.integers(min_value=10**15, max_value=CAPACITY))
    def test_buy_exact_in_never_overpays(self, pay):
        tokens = buy_exact_in(RANGES, MAX, pay, MAX, FLOOR)
        assume(tokens > 0)
        cost = buy_exact_out(RANGES, MAX, tokens, MAX, FLOOR)
        assert cost <= pay
        assert pay - cost <= 10**14

    @settings(max_examples=100, deadline=None)
    @given(
        start=st.integers(min_value=FLOOR + 1, max_value=MAX),
        frac=st.integers(min_value=1, max_value=10**6),
    )
    def test_buy_exact_in_never_overpays_from_any_supply(self, start, frac):
        capacity = buy_exact_out(RANGES, start, start - FLOOR, MAX, FLOOR)
        pay = capacity * frac // 10**6
        tokens = buy_exact_in(RANGES, start, pay, MAX, FLOOR)
        assume(tokens > 0)
        cost = buy_exact_out(RANGES, start, tokens, MAX, FLOOR)
        assert cost <= pay
        assert pay - cost <= 10**14

    @settings(max_examples=100, deadline=None)
    @given(
        start=st.integers(min_value=FLOOR + 1, max_value=MAX),
        frac=st.integers(min_value=0, max_value=10**6),
    )
    def test_buy_then_sell_never_profits(self, start, frac):
        amount = (start - FLOOR) * frac // 10**6
        cost = buy_exact_out(RANGES, start, amount, MAX, FLOOR)
        proceeds = sell_exact_in(RANGES, start - amount, amount, MAX)
        assert proceeds <= cost

    @settings(max_examples=100, deadline=None)
    @given(
        start=st.integers(min_value=FLOOR + 1, max_value=MAX),
        a=st.integers(min_value=0, max_value=10**6),
        b=st.integers(min_value=0, max_value=10**6),
    )
    def test_cost_is_monotonic_in_amount(self, start, a, b):
        room = start - FLOOR
        small = room * min(a, b) // 10**6
        large = room * max(a, b) // 10**6
        assume(large - small >= 10**12)
        assert buy_exact_out(RANGES, start, small, MAX, FLOOR) <= buy_exact_out(
            RANGES, start, large, MAX, FLOOR
        )
