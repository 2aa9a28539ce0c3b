"""Advisory swap analytics.

This is the only module that uses floating point. Its values are for
display only: no settlement path (curve, swap, liquidity, pricing) may import
from here, which scripts/check_safe_math.py enforces.
"""

from stableswap.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from stableswap.errors import InvalidAmount
from stableswap.swap import simulate_swap


def price_impact(
    balance_in: int,
    balance_out: int,
    amount_in: int,
    amp: int,
    fee_bps: int,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> float:
    """Calculate the price impact of a swap as a fraction.

    Price impact = 1 - amount_out / amount_in. It includes both curve
    slippage and the swap fee.

    Args:
        balance_in: Reserve of the input token
        balance_out: Reserve of the output token
        amount_in: Input amount (must be non-zero)
        amp: Effective amplification coefficient
        fee_bps: Swap fee in basis points
        config: Iteration policy for the solvers

    Returns:
        Fractional deviation from a 1:1 exchange (0.003 = 0.3%)

    Raises:
        InvalidAmount: If amount_in is zero
        StableSwapError: Any failure of simulate_swap
    """
    if amount_in == 0:
        raise InvalidAmount("Price impact is undefined for a zero input amount")

    amount_out = simulate_swap(balance_in, balance_out, amount_in, amp, fee_bps, config)
    return impact_from_amounts(amount_in, amount_out)


def impact_from_amounts(amount_in: int, amount_out: int) -> float:
    """Price impact of an already simulated swap: 1 - amount_out / amount_in.

    Raises:
        InvalidAmount: If amount_in is zero
    """
    if amount_in == 0:
        raise InvalidAmount("Price impact is undefined for a zero input amount")
    return 1.0 - amount_out / amount_in
