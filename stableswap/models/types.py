"""Shared type definitions for pool and quote models.

Integers that can exceed the JavaScript safe range travel as decimal
strings in JSON; on the Python side they are plain ints.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

from stableswap.constants import BPS_DENOMINATOR
from stableswap.safe_int import INT64_MAX, INT64_MIN


def _parse_uint(value: Any, bits: int) -> int:
    """Parse an unsigned integer from an int or a decimal string.

    Args:
        value: Value to validate (string or int)
        bits: Bit width the value must fit in

    Returns:
        The integer value

    Raises:
        ValueError: If value is not a non-negative integer within the width
    """
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool):
        raise ValueError(f"U{bits} must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"U{bits} must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"U{bits} must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"U{bits} cannot be negative: {value}")
    if int_value > 2**bits - 1:
        raise ValueError(f"U{bits} overflow: {value} > 2^{bits}-1")
    return int_value


def validate_u64(value: Any) -> int:
    """Validate a u64 amount given as int or decimal string."""
    return _parse_uint(value, 64)


def validate_u128(value: Any) -> int:
    """Validate a u128 amount given as int or decimal string."""
    return _parse_uint(value, 128)


# 64-bit unsigned amount (decimal string in JSON)
U64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    PlainSerializer(str, return_type=str),
    Field(description="64-bit unsigned integer as decimal string"),
]

# 128-bit unsigned value, used for scaled prices (decimal string in JSON)
U128 = Annotated[
    int,
    BeforeValidator(validate_u128),
    PlainSerializer(str, return_type=str),
    Field(description="128-bit unsigned integer as decimal string"),
]

# Signed 64-bit unix timestamp in seconds
Timestamp = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]

# Basis points in [0, 10000]
Bps = Annotated[int, Field(ge=0, le=BPS_DENOMINATOR)]
