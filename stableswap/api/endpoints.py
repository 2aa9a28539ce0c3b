"""API endpoints for the StableSwap quote service."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from stableswap.models.quote import (
    DepositQuoteRequest,
    DepositQuoteResponse,
    ErrorResponse,
    QuoteRequest,
    SwapQuoteRequest,
    SwapQuoteResponse,
    VirtualPriceResponse,
    WithdrawQuoteRequest,
    WithdrawQuoteResponse,
)
from stableswap.quoter import QuoteResult, Quoter, get_default_quoter

logger = structlog.get_logger()

router = APIRouter(prefix="/quote")

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {422: {"model": ErrorResponse}}


def get_quoter() -> Quoter:
    """Dependency provider for the quoter instance.

    Override this in tests to inject a quoter with a fixed clock:
        app.dependency_overrides[get_quoter] = lambda: Quoter(clock=lambda: 1000)

    Returns:
        The quoter instance to use for quotes.
    """
    return get_default_quoter()


def _error_response(result: QuoteResult) -> JSONResponse:
    """Render a failed quote as a 422 response."""
    if result.error is None:
        raise ValueError("Cannot render a successful quote as an error response")
    logger.debug("quote_rejected", error=result.error.value, status_code=422)
    body = ErrorResponse(error=result.error.value, detail=result.error_detail)
    return JSONResponse(status_code=422, content=body.model_dump())


@router.post("/swap", response_model=SwapQuoteResponse, responses=_ERROR_RESPONSES)
async def quote_swap(
    request: SwapQuoteRequest,
    quoter: Quoter = Depends(get_quoter),
) -> SwapQuoteResponse | JSONResponse:
    """Quote the output of a swap against a pool snapshot.

    Error Handling:
        - Invalid request schema: Returns 422 Validation Error (Pydantic)
        - Math failure (overflow, non-convergence, ...): Returns 422 with
          an ErrorResponse body
    """
    result = quoter.quote_swap(
        request.pool,
        request.amount_in,
        direction=request.direction,
        slippage_bps=request.slippage_bps,
        now=request.now,
    )
    if result.is_error:
        return _error_response(result)

    quote = result.unwrap()
    breakdown = quote.breakdown
    return SwapQuoteResponse(
        amount_in=breakdown.amount_in,
        gross_out=breakdown.gross_out,
        fee=breakdown.fee,
        admin_fee=breakdown.admin_fee,
        amount_out=breakdown.amount_out,
        min_amount_out=quote.min_amount_out,
        amp=quote.amp,
        price_impact=quote.price_impact,
    )


@router.post("/deposit", response_model=DepositQuoteResponse, responses=_ERROR_RESPONSES)
async def quote_deposit(
    request: DepositQuoteRequest,
    quoter: Quoter = Depends(get_quoter),
) -> DepositQuoteResponse | JSONResponse:
    """Quote the LP tokens minted for a deposit."""
    result = quoter.quote_deposit(request.pool, request.amount0, request.amount1, now=request.now)
    if result.is_error:
        return _error_response(result)

    quote = result.unwrap()
    return DepositQuoteResponse(lp_minted=quote.lp_minted, amp=quote.amp)


@router.post("/withdraw", response_model=WithdrawQuoteResponse, responses=_ERROR_RESPONSES)
async def quote_withdraw(
    request: WithdrawQuoteRequest,
    quoter: Quoter = Depends(get_quoter),
) -> WithdrawQuoteResponse | JSONResponse:
    """Quote the token amounts returned for an LP burn."""
    result = quoter.quote_withdraw(request.pool, request.lp_amount)
    if result.is_error:
        return _error_response(result)

    amount0, amount1 = result.unwrap()
    return WithdrawQuoteResponse(amount0=amount0, amount1=amount1)


@router.post("/virtual-price", response_model=VirtualPriceResponse, responses=_ERROR_RESPONSES)
async def quote_virtual_price(
    request: QuoteRequest,
    quoter: Quoter = Depends(get_quoter),
) -> VirtualPriceResponse | JSONResponse:
    """Quote the pool's virtual price (invariant per LP token, scaled by 1e18)."""
    result = quoter.quote_virtual_price(request.pool, now=request.now)
    if result.is_error:
        return _error_response(result)

    quote = result.unwrap()
    return VirtualPriceResponse(virtual_price=quote.virtual_price, amp=quote.amp)
