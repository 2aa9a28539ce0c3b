"""Quote service over pool snapshots.

The Quoter composes the curve math for a PoolSnapshot. It resolves the
effective amplification for the quote time, applies the client-side
minimums the pool program enforces, and reports failures as typed
QuoteResult values instead of raising across the service boundary.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

import structlog

from stableswap.analytics import impact_from_amounts
from stableswap.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from stableswap.constants import MIN_DEPOSIT, MIN_SWAP
from stableswap.errors import StableSwapError
from stableswap.liquidity import calc_deposit, calc_withdraw
from stableswap.models.pool import PoolSnapshot, SwapDirection
from stableswap.pricing import min_output_with_slippage, virtual_price
from stableswap.swap import SwapBreakdown, swap_breakdown

logger = structlog.get_logger()

T = TypeVar("T")


class QuoteError(str, Enum):
    """Types of quote failures."""

    MATH_OVERFLOW = "math_overflow"
    CONVERGENCE_FAILURE = "convergence_failure"
    INSUFFICIENT_LIQUIDITY = "insufficient_liquidity"
    INVALID_INVARIANT = "invalid_invariant"
    INVALID_AMP = "invalid_amp"
    RAMP_CONSTRAINT = "ramp_constraint"
    INVALID_FEE = "invalid_fee"
    INVALID_AMOUNT = "invalid_amount"
    BELOW_MINIMUM = "below_minimum"

    @classmethod
    def from_exception(cls, err: StableSwapError) -> QuoteError:
        """Map a math-layer exception to its error type."""
        return cls(err.code)


@dataclass(frozen=True)
class QuoteResult(Generic[T]):
    """Result of a quote.

    Provides explicit success/failure handling for quotes so that callers
    never mistake a failed quote for a zero amount.

    Attributes:
        value: The quote on success, None on failure
        error: If the quote failed, the type of failure
        error_detail: Optional human-readable detail about the failure

    Examples:
        result = quoter.quote_swap(pool, 1_000_000)
        if result.is_valid:
            send(result.value.amount_out)
        else:
            log(result.error, result.error_detail)
    """

    value: T | None
    error: QuoteError | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if the quote succeeded."""
        return self.error is None

    @property
    def is_error(self) -> bool:
        """True if the quote failed."""
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, raising ValueError on a failed quote."""
        if self.error is not None:
            raise ValueError(f"Quote failed: {self.error.value} ({self.error_detail})")
        if self.value is None:
            raise ValueError("Quote has no value")
        return self.value

    @classmethod
    def ok(cls, value: T) -> QuoteResult[T]:
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def with_error(cls, error: QuoteError, detail: str | None = None) -> QuoteResult[T]:
        """Create an error result."""
        return cls(value=None, error=error, error_detail=detail)


@dataclass(frozen=True)
class SwapQuote:
    """A swap quote at a given amplification.

    Attributes:
        breakdown: Itemized amounts from the swap simulation
        amp: Effective amplification used for the quote
        min_amount_out: amount_out reduced by the slippage tolerance
        price_impact: Advisory 1 - amount_out / amount_in
    """

    breakdown: SwapBreakdown
    amp: int
    min_amount_out: int
    price_impact: float

    @property
    def amount_out(self) -> int:
        return self.breakdown.amount_out


@dataclass(frozen=True)
class DepositQuote:
    lp_minted: int
    amp: int


@dataclass(frozen=True)
class VirtualPriceQuote:
    virtual_price: int
    amp: int


class Quoter:
    """Quotes swaps, deposits and withdrawals against pool snapshots.

    Args:
        config: Iteration policy passed to the solvers
        clock: Returns the current unix time in seconds. Used when a quote
            does not carry an explicit timestamp.
    """

    def __init__(
        self,
        config: SolverConfig = DEFAULT_SOLVER_CONFIG,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self._clock = clock

    def _now(self, now: int | None) -> int:
        return int(self._clock()) if now is None else now

    def quote_swap(
        self,
        pool: PoolSnapshot,
        amount_in: int,
        direction: SwapDirection = SwapDirection.T0_T1,
        slippage_bps: int = 0,
        now: int | None = None,
    ) -> QuoteResult[SwapQuote]:
        """Quote selling `amount_in` into the pool.

        Args:
            pool: Pool snapshot
            amount_in: Input amount in base units
            direction: Which token is sold
            slippage_bps: Tolerance used for min_amount_out
            now: Quote time (unix seconds); defaults to the clock

        Returns:
            QuoteResult holding a SwapQuote, or the failure
        """
        if amount_in < MIN_SWAP:
            return QuoteResult.with_error(
                QuoteError.BELOW_MINIMUM,
                f"Swap amount {amount_in} is below the minimum of {MIN_SWAP}",
            )

        amp = pool.amp_at(self._now(now))
        balance_in, balance_out = pool.reserves(direction)
        try:
            breakdown = swap_breakdown(
                balance_in, balance_out, amount_in, amp, pool.fee_bps, self.config
            )
        except StableSwapError as err:
            return self._failed("swap", err, amount_in=amount_in, direction=direction.value)

        quote = SwapQuote(
            breakdown=breakdown,
            amp=amp,
            min_amount_out=min_output_with_slippage(breakdown.amount_out, slippage_bps),
            price_impact=impact_from_amounts(breakdown.amount_in, breakdown.amount_out),
        )
        logger.debug(
            "swap_quoted",
            direction=direction.value,
            amount_in=amount_in,
            amount_out=breakdown.amount_out,
            fee=breakdown.fee,
            amp=amp,
        )
        return QuoteResult.ok(quote)

    def quote_deposit(
        self,
        pool: PoolSnapshot,
        amount0: int,
        amount1: int,
        now: int | None = None,
    ) -> QuoteResult[DepositQuote]:
        """Quote the LP tokens minted for depositing (amount0, amount1)."""
        amp = pool.amp_at(self._now(now))
        try:
            lp_minted = calc_deposit(
                amount0,
                amount1,
                pool.balance0,
                pool.balance1,
                pool.lp_supply,
                amp,
                self.config,
            )
        except StableSwapError as err:
            return self._failed("deposit", err, amount0=amount0, amount1=amount1)

        if pool.lp_supply == 0 and lp_minted < MIN_DEPOSIT:
            return QuoteResult.with_error(
                QuoteError.BELOW_MINIMUM,
                f"Initial deposit mints {lp_minted} LP, below the minimum of {MIN_DEPOSIT}",
            )

        logger.debug("deposit_quoted", amount0=amount0, amount1=amount1, lp_minted=lp_minted)
        return QuoteResult.ok(DepositQuote(lp_minted=lp_minted, amp=amp))

    def quote_withdraw(self, pool: PoolSnapshot, lp_amount: int) -> QuoteResult[tuple[int, int]]:
        """Quote the token amounts returned for burning `lp_amount`."""
        try:
            amounts = calc_withdraw(lp_amount, pool.balance0, pool.balance1, pool.lp_supply)
        except StableSwapError as err:
            return self._failed("withdraw", err, lp_amount=lp_amount)

        logger.debug("withdraw_quoted", lp_amount=lp_amount, amount0=amounts[0], amount1=amounts[1])
        return QuoteResult.ok(amounts)

    def quote_virtual_price(
        self, pool: PoolSnapshot, now: int | None = None
    ) -> QuoteResult[VirtualPriceQuote]:
        """Quote the invariant value per LP token (scaled by 1e18)."""
        amp = pool.amp_at(self._now(now))
        try:
            price = virtual_price(pool.balance0, pool.balance1, pool.lp_supply, amp, self.config)
        except StableSwapError as err:
            return self._failed("virtual_price", err)

        return QuoteResult.ok(VirtualPriceQuote(virtual_price=price, amp=amp))

    @staticmethod
    def _failed(operation: str, err: StableSwapError, **context: object) -> QuoteResult:
        error = QuoteError.from_exception(err)
        logger.info(
            "quote_failed",
            operation=operation,
            error=error.value,
            detail=str(err),
            **context,
        )
        return QuoteResult.with_error(error, str(err))


# Module-level default instance
_default_quoter: Quoter | None = None


def get_default_quoter() -> Quoter:
    """Return the shared Quoter instance, creating it on first use."""
    global _default_quoter
    if _default_quoter is None:
        _default_quoter = Quoter()
    return _default_quoter
