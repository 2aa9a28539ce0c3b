"""Swap simulation for 2-token StableSwap pools.

Projects the output of a trade without touching any pool state. The fee is
taken from the output side and always truncates down, so a quote never
promises more than settlement pays.
"""

from __future__ import annotations

from dataclasses import dataclass

from stableswap.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from stableswap.constants import ADMIN_FEE_PCT, BPS_DENOMINATOR
from stableswap.curve import compute_invariant, solve_for_balance
from stableswap.errors import InsufficientLiquidity, InvalidFee
from stableswap.safe_int import S, SafeInt, Underflow


@dataclass(frozen=True)
class SwapBreakdown:
    """Itemized result of a simulated swap.

    Attributes:
        amount_in: Input amount
        gross_out: Output before the fee (balance_out - new_balance_out)
        fee: Fee withheld from gross_out (gross_out * fee_bps / 10000)
        admin_fee: Protocol share of the fee (fee * ADMIN_FEE_PCT / 100)
        amount_out: Output delivered to the trader (gross_out - fee)
    """

    amount_in: int
    gross_out: int
    fee: int
    admin_fee: int
    amount_out: int

    @property
    def lp_fee(self) -> int:
        """Part of the fee that stays in the pool for liquidity providers."""
        return self.fee - self.admin_fee

    @classmethod
    def zero(cls) -> SwapBreakdown:
        """Breakdown of an empty trade."""
        return cls(amount_in=0, gross_out=0, fee=0, admin_fee=0, amount_out=0)


def validate_bps(bps: int, name: str = "fee_bps") -> SafeInt:
    """Validate a basis-point value in [0, 10000].

    Raises:
        InvalidFee: If bps is outside the range
    """
    if bps < 0 or bps > BPS_DENOMINATOR:
        raise InvalidFee(f"{name} must be in [0, {BPS_DENOMINATOR}], got {bps}")
    return S(bps)


def swap_breakdown(
    balance_in: int,
    balance_out: int,
    amount_in: int,
    amp: int,
    fee_bps: int,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> SwapBreakdown:
    """Simulate a swap and itemize gross output and fees.

    Algorithm:
        1. D = compute_invariant(balance_in, balance_out, amp)
        2. new_balance_out = solve_for_balance(balance_in + amount_in, D, amp)
        3. gross_out = balance_out - new_balance_out
        4. fee = gross_out * fee_bps / 10000 (truncating)

    Args:
        balance_in: Reserve of the input token (u64)
        balance_out: Reserve of the output token (u64)
        amount_in: Input amount (u64)
        amp: Effective amplification coefficient
        fee_bps: Swap fee in basis points
        config: Iteration policy for the solvers

    Returns:
        SwapBreakdown with all amounts

    Raises:
        InvalidFee: If fee_bps is outside [0, 10000]
        InsufficientLiquidity: If the trade would not decrease balance_out
        MathOverflow: If any step leaves its integer width
        ConvergenceFailure: If a solver doesn't converge
    """
    fee_rate = validate_bps(fee_bps)
    s_in, s_out, s_amount = S(balance_in), S(balance_out), S(amount_in)

    if s_amount == 0:
        return SwapBreakdown.zero()

    d = compute_invariant(s_in.value, s_out.value, amp, config)
    new_balance_in = s_in + s_amount
    new_balance_out = solve_for_balance(new_balance_in.value, d, amp, config)

    try:
        gross_out = s_out - new_balance_out
    except Underflow as err:
        raise InsufficientLiquidity(
            f"Swap would not decrease output balance: {balance_out} -> {new_balance_out}"
        ) from err

    fee = (gross_out * fee_rate) // BPS_DENOMINATOR
    admin_fee = (fee * ADMIN_FEE_PCT) // 100
    amount_out = gross_out - fee

    return SwapBreakdown(
        amount_in=s_amount.value,
        gross_out=gross_out.value,
        fee=fee.value,
        admin_fee=admin_fee.value,
        amount_out=amount_out.value,
    )


def simulate_swap(
    balance_in: int,
    balance_out: int,
    amount_in: int,
    amp: int,
    fee_bps: int,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> int:
    """Calculate the output amount a trade of amount_in would yield.

    See swap_breakdown for the algorithm and failure modes.

    Returns:
        Output amount after fee (u64)
    """
    return swap_breakdown(balance_in, balance_out, amount_in, amp, fee_bps, config).amount_out
