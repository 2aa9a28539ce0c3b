"""StableSwap curve math for 2-token pools.

Core solvers for the StableSwap invariant:

    A*n^n*sum(x_i) + D = A*n^n*D + D^(n+1) / (n^n * prod(x_i)),  n = 2

Both solvers use Newton-Raphson iteration in unsigned integer arithmetic
with the same intermediate rounding as the on-chain program, so results are
bit-identical with settlement.

IMPORTANT: All arithmetic goes through SafeInt. Working values are u64,
products that can exceed 64 bits are computed in u128, and any step that
leaves its width raises instead of wrapping.
"""

from stableswap.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from stableswap.constants import N_COINS
from stableswap.safe_int import S, SafeInt

from .errors import ConvergenceFailure

# n^n for the 2-token pool
_N_POW_N = N_COINS**N_COINS


def _ann(amp: int) -> SafeInt:
    """Amplification scaled by n^n (A * 4 for two tokens)."""
    return S(amp) * _N_POW_N


def compute_invariant(
    balance0: int,
    balance1: int,
    amp: int,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> int:
    """Calculate the StableSwap invariant D using Newton-Raphson iteration.

    Algorithm:
        1. Initial guess: D = balance0 + balance1
        2. D_P = D^3 / (4 * balance0 * balance1), evaluated as
           ((D * D) / (2 * balance0)) * D / (2 * balance1) in u128
        3. D = (ann*S + 2*D_P) * D / ((ann - 1)*D + 3*D_P)
        4. Stop when |D_new - D_prev| <= tolerance

    A pool with exactly one empty side has no product term and fails with
    MathOverflow (division by zero), as it does on-chain.

    Args:
        balance0: Reserve of token 0 (u64)
        balance1: Reserve of token 1 (u64)
        amp: Amplification coefficient (unscaled A, >= 1)
        config: Iteration policy (default: 255 steps, tolerance 1)

    Returns:
        The invariant D (u64)

    Raises:
        MathOverflow: If any step leaves u64/u128, amp is zero, or exactly
            one balance is zero
        ConvergenceFailure: If iteration doesn't converge
    """
    x, y = S(balance0), S(balance1)
    sum_balances = x + y
    if sum_balances == 0:
        return 0

    ann = _ann(amp)
    ann_minus_one = ann - 1

    # 2 * balance_i in the working width, widened for the D_P divisions
    two_x = (x * 2).widen()
    two_y = (y * 2).widen()

    d = sum_balances
    for _ in range(config.max_iterations):
        d_p = ((d.widen() * d) // two_x) * d // two_y

        d_prev = d

        numerator = (ann.widen() * sum_balances + d_p * 2) * d
        denominator = ann_minus_one.widen() * d + d_p * 3

        d = (numerator // denominator).narrow()

        if d.abs_diff(d_prev) <= config.tolerance:
            return d.value

    raise ConvergenceFailure(
        f"Invariant did not converge after {config.max_iterations} iterations "
        f"(balances={balance0},{balance1}, amp={amp})"
    )


def solve_for_balance(
    new_balance_in: int,
    d: int,
    amp: int,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> int:
    """Solve for the output-side balance that restores invariant D.

    Uses Newton-Raphson iteration on y^2 + (b - D)*y = c:

        c = D^3 / (4 * x * ann), evaluated as ((D * D) / (2 * x)) * D / (2 * ann)
        b = x + D / ann
        y_next = (y^2 + c) / (2*y + b - D), starting from y = D

    Args:
        new_balance_in: Input-side balance after the trade (u64, > 0)
        d: Invariant to preserve (u64)
        amp: Amplification coefficient (unscaled A, >= 1)
        config: Iteration policy (default: 255 steps, tolerance 1)

    Returns:
        The output-side balance (u64)

    Raises:
        MathOverflow: If any step leaves its width, the denominator
            underflows, or new_balance_in/amp is zero
        ConvergenceFailure: If iteration doesn't converge
    """
    x = S(new_balance_in)
    inv = S(d)
    ann = _ann(amp)

    c = ((inv.widen() * inv) // (x * 2).widen()) * inv // (ann * 2).widen()
    b = x + inv // ann

    y = inv
    for _ in range(config.max_iterations):
        y_prev = y

        numerator = y.widen() * y + c
        denominator = y * 2 + b - inv

        y = (numerator // denominator).narrow()

        if y.abs_diff(y_prev) <= config.tolerance:
            return y.value

    raise ConvergenceFailure(
        f"Balance did not converge after {config.max_iterations} iterations "
        f"(new_balance_in={new_balance_in}, d={d}, amp={amp})"
    )
