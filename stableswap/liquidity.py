"""Liquidity token math for 2-token StableSwap pools.

Mint and burn amounts are proportional and always round down, so the pool
(not the depositor or withdrawer) keeps any remainder dust.
"""

from stableswap.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from stableswap.curve import compute_invariant
from stableswap.errors import InsufficientLiquidity, InvalidInvariant
from stableswap.safe_int import S, SafeInt, W


def isqrt(n: int | SafeInt) -> int:
    """Integer square root using Newton's method.

    Exact for perfect squares and floor-correct otherwise.

    Args:
        n: Non-negative value up to u128

    Returns:
        floor(sqrt(n))

    Raises:
        MathOverflow: If n is negative or exceeds u128
    """
    value = W(n).value
    if value == 0:
        return 0
    if value <= 3:
        return 1

    x = value
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + value // x) // 2
    return x


def calc_deposit(
    amount0: int,
    amount1: int,
    balance0: int,
    balance1: int,
    lp_supply: int,
    amp: int,
    config: SolverConfig = DEFAULT_SOLVER_CONFIG,
) -> int:
    """Calculate LP tokens minted for a deposit.

    First deposit (lp_supply == 0) bootstraps at the geometric mean:
        lp = floor(sqrt(amount0 * amount1))

    Later deposits mint in proportion to invariant growth:
        lp = floor(lp_supply * (D1 - D0) / D0)

    Args:
        amount0: Deposit of token 0 (u64)
        amount1: Deposit of token 1 (u64)
        balance0: Pool reserve of token 0 before the deposit (u64)
        balance1: Pool reserve of token 1 before the deposit (u64)
        lp_supply: Total LP supply before the deposit (u64)
        amp: Effective amplification coefficient
        config: Iteration policy for the invariant solver

    Returns:
        LP tokens minted (u64)

    Raises:
        InvalidInvariant: If D0 is zero or the invariant decreased
        MathOverflow: If any step leaves its integer width
        ConvergenceFailure: If the invariant solver doesn't converge
    """
    a0, a1 = S(amount0), S(amount1)
    b0, b1 = S(balance0), S(balance1)
    supply = S(lp_supply)

    if supply == 0:
        return S(isqrt(a0.widen() * a1)).value

    d0 = compute_invariant(b0.value, b1.value, amp, config)
    d1 = compute_invariant((b0 + a0).value, (b1 + a1).value, amp, config)

    if d0 == 0:
        raise InvalidInvariant("Cannot mint against a pool with zero invariant")
    if d1 < d0:
        raise InvalidInvariant(f"Invariant decreased on deposit: {d0} -> {d1}")

    minted = (supply.widen() * (S(d1) - d0)) // d0
    return minted.narrow().value


def calc_withdraw(
    lp_amount: int,
    balance0: int,
    balance1: int,
    lp_supply: int,
) -> tuple[int, int]:
    """Calculate token amounts returned for burning LP tokens.

    Each amount is floor(balance_i * lp_amount / lp_supply).

    Args:
        lp_amount: LP tokens burned (u64)
        balance0: Pool reserve of token 0 (u64)
        balance1: Pool reserve of token 1 (u64)
        lp_supply: Total LP supply (u64)

    Returns:
        Tuple of (amount0, amount1)

    Raises:
        InvalidInvariant: If lp_supply is zero
        InsufficientLiquidity: If lp_amount exceeds lp_supply
    """
    burn = S(lp_amount)
    supply = S(lp_supply)
    if supply == 0:
        raise InvalidInvariant("Cannot withdraw from a pool with zero LP supply")
    if burn > supply:
        raise InsufficientLiquidity(f"LP amount {lp_amount} exceeds supply {lp_supply}")

    amount0 = (S(balance0).widen() * burn) // supply
    amount1 = (S(balance1).widen() * burn) // supply
    return amount0.narrow().value, amount1.narrow().value
