"""Solver configuration for the Newton-Raphson curve math."""

from dataclasses import dataclass

from stableswap.constants import CONVERGENCE_TOLERANCE, NEWTON_ITERATIONS


@dataclass(frozen=True)
class SolverConfig:
    """Iteration policy shared by the invariant and balance solvers.

    The defaults reproduce the on-chain program. Tests pass a smaller
    iteration ceiling to exercise non-convergence deterministically.

    Attributes:
        max_iterations: Newton-Raphson step ceiling (default: 255)
        tolerance: Convergence threshold on |x_next - x| in base units
            (default: 1)
    """

    max_iterations: int = NEWTON_ITERATIONS
    tolerance: int = CONVERGENCE_TOLERANCE

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")


# Default configuration instance
DEFAULT_SOLVER_CONFIG = SolverConfig()
