"""Tests for swap simulation."""

from unittest.mock import patch

import pytest

from stableswap.config import SolverConfig
from stableswap.errors import ConvergenceFailure, InsufficientLiquidity, InvalidFee, MathOverflow
from stableswap.swap import SwapBreakdown, simulate_swap, swap_breakdown
from tests.helpers import AMOUNT_10K, AMP, BALANCE_1M, FEE_BPS


class TestSimulateSwap:
    """Tests for simulate_swap."""

    def test_reference_vector(self) -> None:
        """10k into a 1M/1M pool at A=1000 and 30 bps stays close to 1:1."""
        out = simulate_swap(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, FEE_BPS)
        assert 9_900_000_000 < out < 10_000_000_000

    def test_zero_amount_returns_zero(self) -> None:
        """No input, no output, no solver call."""
        with patch("stableswap.swap.compute_invariant") as mock_invariant:
            assert simulate_swap(BALANCE_1M, BALANCE_1M, 0, AMP, FEE_BPS) == 0
        mock_invariant.assert_not_called()

    def test_zero_fee_returns_gross(self) -> None:
        """With no fee the trader receives the full curve output."""
        breakdown = swap_breakdown(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, 0)
        assert breakdown.fee == 0
        assert breakdown.amount_out == breakdown.gross_out

    def test_full_fee_returns_zero(self) -> None:
        """A 100% fee withholds the whole output."""
        assert simulate_swap(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, 10_000) == 0

    def test_fee_monotonicity(self) -> None:
        """Output never increases as the fee grows."""
        fees = [0, 1, 5, 30, 100, 1000, 10_000]
        outputs = [simulate_swap(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, f) for f in fees]
        assert outputs == sorted(outputs, reverse=True)

    def test_amount_monotonicity(self) -> None:
        """Output strictly increases with input and stays below balance_out."""
        amounts = [1_000_000, 100_000_000, AMOUNT_10K, 100_000_000_000, 900_000_000_000]
        outputs = [simulate_swap(BALANCE_1M, BALANCE_1M, a, AMP, FEE_BPS) for a in amounts]
        assert all(a < b for a, b in zip(outputs, outputs[1:], strict=False))
        assert outputs[-1] < BALANCE_1M

    def test_larger_swap_has_more_slippage(self) -> None:
        """The effective rate worsens as the trade grows."""
        small = simulate_swap(BALANCE_1M, BALANCE_1M, 1_000_000_000, AMP, 0)
        large = simulate_swap(BALANCE_1M, BALANCE_1M, 500_000_000_000, AMP, 0)
        # Cross-multiplied: large / 500e9 < small / 1e9
        assert large * 1_000_000_000 < small * 500_000_000_000

    def test_selling_scarce_side_pays_more(self) -> None:
        """Selling the abundant token into an imbalanced pool yields less."""
        into_abundant = simulate_swap(2 * BALANCE_1M, BALANCE_1M // 2, AMOUNT_10K, 100, 0)
        into_scarce = simulate_swap(BALANCE_1M // 2, 2 * BALANCE_1M, AMOUNT_10K, 100, 0)
        assert into_abundant < AMOUNT_10K < into_scarce

    def test_low_amp_approaches_constant_product(self) -> None:
        """At A=1 a large trade slips much more than at A=1000."""
        flat = simulate_swap(BALANCE_1M, BALANCE_1M, 200_000_000_000, 1000, 0)
        curved = simulate_swap(BALANCE_1M, BALANCE_1M, 200_000_000_000, 1, 0)
        assert curved < flat

    def test_idempotent(self) -> None:
        """Identical inputs give identical outputs."""
        args = (BALANCE_1M, 800_000_000_000, AMOUNT_10K, AMP, FEE_BPS)
        assert simulate_swap(*args) == simulate_swap(*args)

    def test_invalid_fee_raises(self) -> None:
        """Fees above 100% are rejected."""
        with pytest.raises(InvalidFee):
            simulate_swap(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, 10_001)
        with pytest.raises(InvalidFee):
            simulate_swap(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, -1)

    def test_input_overflow_raises(self) -> None:
        """balance_in + amount_in must fit in u64."""
        with pytest.raises(MathOverflow):
            simulate_swap(2**63, 2**62, 2**63, AMP, FEE_BPS)

    def test_output_not_decreasing_raises(self) -> None:
        """A solver result at or above balance_out is insufficient liquidity."""
        with patch("stableswap.swap.solve_for_balance", return_value=BALANCE_1M + 1):
            with pytest.raises(InsufficientLiquidity):
                simulate_swap(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, FEE_BPS)

    def test_convergence_failure_propagates(self) -> None:
        """Solver failures surface unchanged; no partial result is returned."""
        config = SolverConfig(max_iterations=1)
        with pytest.raises(ConvergenceFailure):
            simulate_swap(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, FEE_BPS, config)


class TestSwapBreakdown:
    """Tests for the itemized swap result."""

    def test_amounts_add_up(self) -> None:
        """gross_out = amount_out + fee, and the fee truncates down."""
        b = swap_breakdown(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, FEE_BPS)
        assert b.amount_in == AMOUNT_10K
        assert b.gross_out == b.amount_out + b.fee
        assert b.fee == b.gross_out * FEE_BPS // 10_000

    def test_admin_fee_is_half_of_fee(self) -> None:
        """The protocol takes ADMIN_FEE_PCT of the fee; the rest stays with LPs."""
        b = swap_breakdown(BALANCE_1M, BALANCE_1M, AMOUNT_10K, AMP, FEE_BPS)
        assert b.admin_fee == b.fee * 50 // 100
        assert b.lp_fee == b.fee - b.admin_fee

    def test_matches_simulate_swap(self) -> None:
        """simulate_swap returns the breakdown's amount_out."""
        b = swap_breakdown(BALANCE_1M, 600_000_000_000, AMOUNT_10K, AMP, FEE_BPS)
        assert b.amount_out == simulate_swap(BALANCE_1M, 600_000_000_000, AMOUNT_10K, AMP, FEE_BPS)

    def test_zero_breakdown(self) -> None:
        """An empty trade itemizes to zeros."""
        assert swap_breakdown(BALANCE_1M, BALANCE_1M, 0, AMP, FEE_BPS) == SwapBreakdown.zero()
