"""Pydantic models for pool snapshots and quote requests."""

from stableswap.models.pool import PoolSnapshot, SwapDirection
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
from stableswap.models.types import U64, U128, Bps, Timestamp

__all__ = [
    # Types
    "U64",
    "U128",
    "Bps",
    "Timestamp",
    # Pool
    "PoolSnapshot",
    "SwapDirection",
    # Requests
    "QuoteRequest",
    "SwapQuoteRequest",
    "DepositQuoteRequest",
    "WithdrawQuoteRequest",
    # Responses
    "SwapQuoteResponse",
    "DepositQuoteResponse",
    "WithdrawQuoteResponse",
    "VirtualPriceResponse",
    "ErrorResponse",
]
