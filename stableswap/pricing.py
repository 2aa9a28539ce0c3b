"""Derived integer pricing utilities.

Read-only helpers built on the curve math. Everything here stays in integer
arithmetic; the floating-point price impact lives in analytics.py.
"""

from stableswap.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from stableswap.constants import BPS_DENOMINATOR, PRICE_PRECISION
from stableswap.curve import compute_invariant
from stableswap.errors import InvalidInvariant
from stableswap.safe_int import S


def virtual_price(
    balance0: int,
    balance1: int,
    lp_supply: int,
    amp: int,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> int:
    """Calculate the invariant value per LP token, scaled by 1e18.

    Args:
        balance0: Pool reserve of token 0 (u64)
        balance1: Pool reserve of token 1 (u64)
        lp_supply: Total LP supply (u64)
        amp: Effective amplification coefficient
        config: Iteration policy for the invariant solver

    Returns:
        D * 1e18 / lp_supply as a u128 integer

    Raises:
        InvalidInvariant: If lp_supply is zero
        MathOverflow: If any step leaves its integer width
        ConvergenceFailure: If the invariant solver doesn't converge
    """
    supply = S(lp_supply)
    if supply == 0:
        raise InvalidInvariant("Virtual price is undefined for zero LP supply")

    d = compute_invariant(balance0, balance1, amp, config)
    return ((S(d).widen() * PRICE_PRECISION) // supply).value


def min_output_with_slippage(expected: int, slippage_bps: int) -> int:
    """Calculate the minimum acceptable output for a slippage tolerance.

    Uses saturating arithmetic: this is a client-side guardrail, so it clamps
    instead of failing.

    Args:
        expected: Expected output amount (u64)
        slippage_bps: Tolerated slippage in basis points

    Returns:
        expected - floor(expected * slippage_bps / 10000), clamped at zero
        (a tolerance above 10000 bps yields 0)
    """
    amount = S(expected)
    slippage = amount.saturating_mul(S(slippage_bps)) // BPS_DENOMINATOR
    return amount.saturating_sub(slippage).value
