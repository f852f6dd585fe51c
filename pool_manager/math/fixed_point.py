"""Fixed-point ratio used for fee shares, tolerances and prices.

Values are stored as integers scaled by 10^18, matching the on-chain
Decimal type the pool fees are configured with. No float ever enters or
leaves this module: ratios are built from decimal strings or integer
fractions and applied to integer amounts with explicit rounding direction.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic_core import core_schema

from pool_manager.safe_int import DivisionByZero, Underflow

__all__ = ["Ratio", "ONE_18", "DECIMAL_PLACES"]

DECIMAL_PLACES = 18
ONE_18 = 10**DECIMAL_PLACES


class Ratio:
    """18-decimal fixed-point number stored as int.

    Example: 0.003 is stored as 3_000_000_000_000_000
    """

    ONE: ClassVar[int] = ONE_18

    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        """Create Ratio from raw scaled value."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Ratio requires int atomics, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"Ratio cannot be negative: {value}")
        self.value = value

    # --- Construction ---

    @classmethod
    def zero(cls) -> Ratio:
        return cls(0)

    @classmethod
    def one(cls) -> Ratio:
        return cls(cls.ONE)

    @classmethod
    def from_int(cls, i: int) -> Ratio:
        return cls(i * cls.ONE)

    @classmethod
    def from_str(cls, s: str) -> Ratio:
        """Parse a plain decimal string such as "0.003" or "1".

        Raises:
            ValueError: If the string is not a non-negative decimal with at
                most 18 fractional digits
        """
        text = s.strip()
        whole, dot, fraction = text.partition(".")
        if not whole and not fraction:
            raise ValueError(f"Invalid decimal: '{s}'")
        if not (whole or "0").isdigit() or (dot and not fraction.isdigit()):
            raise ValueError(f"Invalid decimal: '{s}'")
        if len(fraction) > DECIMAL_PLACES:
            raise ValueError(f"Too many fractional digits (max {DECIMAL_PLACES}): '{s}'")
        atomics = int(whole or "0") * cls.ONE + int(fraction.ljust(DECIMAL_PLACES, "0") or "0")
        return cls(atomics)

    @classmethod
    def coerce(cls, value: Any) -> Ratio:
        """Build a Ratio from a Ratio, a decimal string or a whole int.

        Floats are rejected: they would silently lose precision.
        """
        if isinstance(value, Ratio):
            return value
        if isinstance(value, str):
            return cls.from_str(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_int(value)
        raise ValueError(f"Ratio must be a decimal string or int, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.coerce,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> dict[str, Any]:
        return {"type": "string", "pattern": r"^\d+(\.\d{1,18})?$"}

    # --- Arithmetic ---

    def is_zero(self) -> bool:
        return self.value == 0

    def add(self, other: Ratio) -> Ratio:
        return Ratio(self.value + other.value)

    def sub(self, other: Ratio) -> Ratio:
        """Subtract other from self.

        Raises:
            Underflow: If other > self
        """
        if other.value > self.value:
            raise Underflow(f"Ratio underflow: {self} - {other}")
        return Ratio(self.value - other.value)

    def complement(self) -> Ratio:
        """1 - self.

        Raises:
            Underflow: If self > 1
        """
        return Ratio.one().sub(self)

    # --- Application to integer amounts ---

    def mul_floor(self, amount: int) -> int:
        """amount * self, rounded down."""
        return (amount * self.value) // self.ONE

    def div_ceil(self, amount: int) -> int:
        """amount / self, rounded up.

        Raises:
            DivisionByZero: If self is zero
        """
        if self.value == 0:
            raise DivisionByZero(f"Division of {amount} by zero ratio")
        return -(-(amount * self.ONE) // self.value)

    def div_floor(self, amount: int) -> int:
        """amount / self, rounded down.

        Raises:
            DivisionByZero: If self is zero
        """
        if self.value == 0:
            raise DivisionByZero(f"Division of {amount} by zero ratio")
        return (amount * self.ONE) // self.value

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ratio):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: Ratio) -> bool:
        return self.value < other.value

    def __le__(self, other: Ratio) -> bool:
        return self.value <= other.value

    def __gt__(self, other: Ratio) -> bool:
        return self.value > other.value

    def __ge__(self, other: Ratio) -> bool:
        return self.value >= other.value

    def __repr__(self) -> str:
        return f'Ratio("{self}")'

    def __str__(self) -> str:
        whole, fraction = divmod(self.value, self.ONE)
        if fraction == 0:
            return str(whole)
        return f"{whole}.{str(fraction).rjust(DECIMAL_PLACES, '0').rstrip('0')}"
