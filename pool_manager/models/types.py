"""Shared type definitions for pool manager models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from pool_manager.constants import MAX_POOL_IDENTIFIER_LENGTH, POOL_IDENTIFIER_PATTERN
from pool_manager.safe_int import UINT128_MAX


def validate_uint128(value: Any) -> int:
    """Validate that a value is a valid Uint128 amount.

    Args:
        value: Value to validate (int or decimal string)

    Returns:
        The amount as int

    Raises:
        ValueError: If value is not a non-negative integer within Uint128 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint128 cannot be a bool")

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint128 must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"Uint128 must be string or int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"Uint128 cannot be negative: {value}")
    if value > UINT128_MAX:
        raise ValueError(f"Uint128 overflow: {value} > 2^128-1")

    return value


# 128-bit unsigned token amount
Uint128 = Annotated[
    int,
    BeforeValidator(validate_uint128),
    Field(description="128-bit unsigned integer"),
]

# Pool identifier as stored in the registry
PoolIdentifier = Annotated[
    str,
    Field(
        min_length=1,
        max_length=MAX_POOL_IDENTIFIER_LENGTH,
        pattern=POOL_IDENTIFIER_PATTERN,
    ),
]

# Token denomination
Denom = Annotated[str, Field(min_length=1)]
