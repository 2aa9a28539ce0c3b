"""Request and response bodies for the quote service."""

from pydantic import BaseModel, Field

from stableswap.models.pool import PoolSnapshot, SwapDirection
from stableswap.models.types import U64, U128, Bps, Timestamp


class QuoteRequest(BaseModel):
    """Fields shared by every quote request."""

    pool: PoolSnapshot
    now: Timestamp | None = Field(
        default=None,
        description="Quote time (unix seconds). Defaults to the server clock.",
    )

    model_config = {"populate_by_name": True}


class SwapQuoteRequest(QuoteRequest):
    """Quote the output of selling `amount_in` into the pool."""

    amount_in: U64 = Field(alias="amountIn")
    direction: SwapDirection = SwapDirection.T0_T1
    slippage_bps: Bps = Field(default=50, alias="slippageBps")


class DepositQuoteRequest(QuoteRequest):
    """Quote the LP tokens minted for a two-sided deposit."""

    amount0: U64
    amount1: U64


class WithdrawQuoteRequest(QuoteRequest):
    """Quote the tokens returned for burning `lp_amount` LP tokens."""

    lp_amount: U64 = Field(alias="lpAmount")


class SwapQuoteResponse(BaseModel):
    """Itemized swap quote."""

    amount_in: U64 = Field(alias="amountIn")
    gross_out: U64 = Field(alias="grossOut")
    fee: U64
    admin_fee: U64 = Field(alias="adminFee")
    amount_out: U64 = Field(alias="amountOut")
    min_amount_out: U64 = Field(alias="minAmountOut")
    amp: int
    price_impact: float | None = Field(
        default=None,
        alias="priceImpact",
        description="Advisory only: 1 - amountOut / amountIn.",
    )

    model_config = {"populate_by_name": True}


class DepositQuoteResponse(BaseModel):
    """LP tokens minted by a deposit."""

    lp_minted: U64 = Field(alias="lpMinted")
    amp: int

    model_config = {"populate_by_name": True}


class WithdrawQuoteResponse(BaseModel):
    """Token amounts returned by an LP burn."""

    amount0: U64
    amount1: U64

    model_config = {"populate_by_name": True}


class VirtualPriceResponse(BaseModel):
    """Invariant value per LP token, scaled by 1e18."""

    virtual_price: U128 = Field(alias="virtualPrice")
    amp: int

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Body returned when a quote fails."""

    error: str = Field(description="Machine-readable error code.")
    detail: str | None = None
