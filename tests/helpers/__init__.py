"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Pool balances, amounts and parameters
- factories: Pool snapshot factory functions
"""

from tests.helpers.constants import AMOUNT_10K, AMP, BALANCE_1M, FEE_BPS, NOW
from tests.helpers.factories import make_pool, make_pool_payload

__all__ = [
    # Constants
    "BALANCE_1M",
    "AMOUNT_10K",
    "AMP",
    "FEE_BPS",
    "NOW",
    # Factories
    "make_pool",
    "make_pool_payload",
]
