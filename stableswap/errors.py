"""StableSwap error classes.

These errors mirror the failure codes of the on-chain pool program that the
math reproduces. Every failure of a quoting function is one of these types.
"""


class StableSwapError(Exception):
    """Base error for StableSwap operations."""

    code = "stableswap_error"


class MathOverflow(StableSwapError, ArithmeticError):
    """An arithmetic step left the working integer width.

    Covers overflow, underflow and division by zero: the on-chain program
    reports every failed checked operation the same way.
    """

    code = "math_overflow"


class ConvergenceFailure(StableSwapError):
    """Newton-Raphson iteration did not stabilize within the iteration budget."""

    code = "convergence_failure"


class InsufficientLiquidity(StableSwapError):
    """A swap or withdrawal would require more output than the pool holds."""

    code = "insufficient_liquidity"


class InvalidInvariant(StableSwapError):
    """Operation attempted against a pool with no invariant basis."""

    code = "invalid_invariant"


class InvalidAmp(StableSwapError):
    """Amplification coefficient outside [MIN_AMP, MAX_AMP]."""

    code = "invalid_amp"


class RampConstraint(StableSwapError):
    """Amplification ramp schedule violates the ramp constraints."""

    code = "ramp_constraint"


class InvalidFee(StableSwapError):
    """Basis-point value outside [0, 10000]."""

    code = "invalid_fee"


class InvalidAmount(StableSwapError):
    """Amount is zero where a non-zero amount is required."""

    code = "invalid_amount"
