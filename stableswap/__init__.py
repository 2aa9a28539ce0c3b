"""StableSwap curve math and off-chain quoting for 2-token pools."""

from stableswap.amp import RampSchedule, effective_amp, validate_amp, validate_ramp
from stableswap.analytics import price_impact
from stableswap.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from stableswap.curve import compute_invariant, solve_for_balance
from stableswap.errors import (
    ConvergenceFailure,
    InsufficientLiquidity,
    InvalidAmount,
    InvalidAmp,
    InvalidFee,
    InvalidInvariant,
    MathOverflow,
    RampConstraint,
    StableSwapError,
)
from stableswap.liquidity import calc_deposit, calc_withdraw, isqrt
from stableswap.pricing import min_output_with_slippage, virtual_price
from stableswap.swap import SwapBreakdown, simulate_swap, swap_breakdown

__version__ = "0.1.0"
__all__ = [
    # Curve math
    "compute_invariant",
    "solve_for_balance",
    "simulate_swap",
    "swap_breakdown",
    "SwapBreakdown",
    # Liquidity
    "calc_deposit",
    "calc_withdraw",
    "isqrt",
    # Amplification
    "effective_amp",
    "RampSchedule",
    "validate_amp",
    "validate_ramp",
    # Derived
    "virtual_price",
    "min_output_with_slippage",
    "price_impact",
    # Config
    "SolverConfig",
    "DEFAULT_SOLVER_CONFIG",
    # Errors
    "StableSwapError",
    "MathOverflow",
    "ConvergenceFailure",
    "InsufficientLiquidity",
    "InvalidInvariant",
    "InvalidAmp",
    "RampConstraint",
    "InvalidFee",
    "InvalidAmount",
    "__version__",
]
