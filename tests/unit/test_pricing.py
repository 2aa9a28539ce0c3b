"""Tests for virtual price and slippage guards."""

import pytest

from stableswap.errors import InvalidInvariant
from stableswap.pricing import min_output_with_slippage, virtual_price
from stableswap.safe_int import UINT64_MAX
from stableswap.swap import swap_breakdown
from tests.helpers import AMOUNT_10K, AMP, BALANCE_1M, FEE_BPS

ONE = 10**18


class TestVirtualPrice:
    """Tests for virtual_price."""

    def test_balanced_pool_is_one(self):
        """D equals the LP supply for a freshly seeded balanced pool."""
        assert virtual_price(BALANCE_1M, BALANCE_1M, 2 * BALANCE_1M, AMP) == ONE

    def test_imbalance_lowers_price(self):
        """Same token total, less invariant."""
        price = virtual_price(1_500_000_000_000, 500_000_000_000, 2 * BALANCE_1M, AMP)
        assert price < ONE

    def test_fees_raise_price(self):
        """Fees retained by the pool grow the invariant per LP token."""
        before = virtual_price(BALANCE_1M, BALANCE_1M, 2 * BALANCE_1M, AMP)
        b = swap_breakdown(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, FEE_BPS)
        after = virtual_price(
            BALANCE_1M + AMOUNT_10K,
            BALANCE_1M - b.amount_out - b.admin_fee,
            2 * BALANCE_1M,
            AMP,
        )
        assert after > before

    def test_exceeds_u64(self):
        """The scaled result is u128-wide."""
        assert virtual_price(BALANCE_1M, BALANCE_1M, 1, AMP) == 2 * BALANCE_1M * ONE

    def test_empty_pool_with_supply_is_zero(self):
        assert virtual_price(0, 0, 1000, AMP) == 0

    def test_zero_supply_raises(self):
        with pytest.raises(InvalidInvariant):
            virtual_price(BALANCE_1M, BALANCE_1M, 0, AMP)


class TestMinOutputWithSlippage:
    """Tests for min_output_with_slippage."""

    def test_half_percent(self):
        assert min_output_with_slippage(1_000_000, 50) == 995_000

    def test_zero_slippage(self):
        assert min_output_with_slippage(1_000_000, 0) == 1_000_000

    def test_full_slippage(self):
        assert min_output_with_slippage(1_000_000, 10_000) == 0

    def test_rounds_in_favour_of_trader(self):
        """The deduction truncates, so the minimum rounds up."""
        assert min_output_with_slippage(999, 50) == 995

    def test_zero_amount(self):
        assert min_output_with_slippage(0, 50) == 0

    def test_saturates_on_large_amount(self):
        """The product clamps at u64 max instead of failing."""
        assert min_output_with_slippage(UINT64_MAX, 10_000) == UINT64_MAX - UINT64_MAX // 10_000

    def test_tolerance_above_hundred_percent_clamps_to_zero(self):
        assert min_output_with_slippage(100, 20_000) == 0

    def test_never_exceeds_expected(self):
        for bps in (0, 1, 30, 50, 100, 9_999):
            assert min_output_with_slippage(123_456_789, bps) <= 123_456_789
