"""Width-checked unsigned integer wrapper for curve arithmetic.

This module provides SafeInt, a lightweight wrapper that reproduces the
checked unsigned arithmetic of the on-chain program:
- Every value carries a bit width (64 for working values, 128 for wide
  intermediates) and every result is checked against it
- Subtraction underflow raises Underflow
- Division by zero raises DivisionByZero
- Leaving the width raises WidthOverflow (values are never wrapped)

Usage pattern:
    from stableswap.safe_int import S, W

    def calculate(a: int, b: int, c: int) -> int:
        # Wrap at entry (validates the u64 range)
        sa, sb, sc = S(a), S(b), S(c)

        # Widen before products that may exceed 64 bits
        result = (sa.widen() * sb) // sc  # Raises if sc == 0

        # Narrow back to the working width at exit
        return result.narrow().value
"""

from __future__ import annotations

from stableswap.errors import MathOverflow

UINT64_MAX = 2**64 - 1
UINT128_MAX = 2**128 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_WIDTH_MAX = {64: UINT64_MAX, 128: UINT128_MAX}


class SafeIntError(MathOverflow):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    pass


class WidthOverflow(SafeIntError):
    """Value exceeds the maximum of its bit width."""

    pass


class SafeInt:
    """Unsigned integer with width-checked arithmetic.

    Wraps a non-negative integer together with a bit width and provides
    arithmetic operators that raise descriptive errors instead of producing
    values the on-chain program could not represent. Operations between a
    64-bit and a 128-bit value produce a 128-bit value; plain int operands
    take the width of the SafeInt they are combined with.

    Attributes:
        value: The underlying integer value (read-only)
        bits: The bit width the value is checked against (read-only)
    """

    __slots__ = ("_value", "_bits")
    _value: int
    _bits: int

    def __init__(self, value: int | SafeInt, bits: int = 64) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Args:
            value: Integer value to wrap, or SafeInt to copy
            bits: Bit width, 64 or 128

        Raises:
            TypeError: If value is not an int or SafeInt
            ValueError: If bits is not a supported width
            Underflow: If value is negative
            WidthOverflow: If value does not fit in the width
        """
        if bits not in _WIDTH_MAX:
            raise ValueError(f"Unsupported width: {bits}")
        if isinstance(value, SafeInt):
            raw = value._value
        elif isinstance(value, int):
            raw = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

        if raw < 0:
            raise Underflow(f"Negative value cannot be u{bits}: {raw}")
        if raw > _WIDTH_MAX[bits]:
            raise WidthOverflow(f"Value exceeds u{bits} max: {raw}")
        self._value = raw
        self._bits = bits

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    @property
    def bits(self) -> int:
        """The bit width of this value."""
        return self._bits

    def __repr__(self) -> str:
        return f"SafeInt({self._value}, bits={self._bits})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two values.

        Raises:
            WidthOverflow: If the sum does not fit in the result width
        """
        other_val, bits = _operand(self, other)
        return SafeInt(self._value + other_val, bits)

    def __radd__(self, other: int) -> SafeInt:
        return self.__add__(other)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val, bits = _operand(self, other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result, bits)

    def __rsub__(self, other: int) -> SafeInt:
        """Subtract self from other (other - self).

        Raises:
            Underflow: If result would be negative
        """
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result, self._bits)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            WidthOverflow: If the product does not fit in the result width
        """
        other_val, bits = _operand(self, other)
        product = self._value * other_val
        if product > _WIDTH_MAX[bits]:
            raise WidthOverflow(f"Overflow: {self._value} * {other_val} exceeds u{bits}")
        return SafeInt(product, bits)

    def __rmul__(self, other: int) -> SafeInt:
        return self.__mul__(other)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division (rounds down).

        Raises:
            DivisionByZero: If other is zero
        """
        other_val, bits = _operand(self, other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val, bits)

    def __truediv__(self, other: object) -> SafeInt:
        """True division is rejected so that no float enters the curve math."""
        raise TypeError("SafeInt does not support true division; use floor division (//)")

    def __rtruediv__(self, other: object) -> SafeInt:
        raise TypeError("SafeInt does not support true division; use floor division (//)")

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        """Convert to int."""
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    def widen(self) -> SafeInt:
        """Return the same value as a 128-bit SafeInt."""
        return SafeInt(self._value, 128)

    def narrow(self, bits: int = 64) -> SafeInt:
        """Return the same value checked against a narrower width.

        Unlike a Rust `as` cast, this never truncates.

        Raises:
            WidthOverflow: If the value does not fit in the target width
        """
        return SafeInt(self._value, bits)

    # --- Named operations ---

    def abs_diff(self, other: SafeInt | int) -> SafeInt:
        """Absolute difference |self - other|."""
        other_val, bits = _operand(self, other)
        return SafeInt(abs(self._value - other_val), bits)

    def saturating_mul(self, other: SafeInt | int) -> SafeInt:
        """Multiply, clamping the result at the width maximum instead of raising."""
        other_val, bits = _operand(self, other)
        return SafeInt(min(self._value * other_val, _WIDTH_MAX[bits]), bits)

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract, clamping result to zero instead of raising.

        Unlike __sub__, this never raises Underflow.
        """
        other_val, bits = _operand(self, other)
        return SafeInt(max(0, self._value - other_val), bits)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


def _operand(this: SafeInt, other: SafeInt | int) -> tuple[int, int]:
    """Return (value, result width) for a binary operation on `this`."""
    if isinstance(other, SafeInt):
        return other._value, max(this._bits, other._bits)
    if isinstance(other, int):
        return other, this._bits
    raise TypeError(f"SafeInt operand must be int, got {type(other).__name__}")


def W(value: int | SafeInt) -> SafeInt:
    """Wrap a value as a 128-bit (wide) SafeInt."""
    return SafeInt(value, 128)


def check_i64(value: int, name: str = "value") -> int:
    """Validate a signed 64-bit timestamp.

    Raises:
        WidthOverflow: If value is outside the i64 range
    """
    if not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if value < INT64_MIN or value > INT64_MAX:
        raise WidthOverflow(f"{name} outside i64 range: {value}")
    return value


# Convenience alias for concise code (64-bit working width)
S = SafeInt
