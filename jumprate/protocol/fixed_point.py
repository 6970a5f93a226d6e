"""Checked unsigned fixed-point arithmetic on 1e18-scaled integers.

Every helper works on plain Python ``int`` values interpreted as uint256
quantities.  Instead of wrapping or silently truncating past the domain,
operations raise :class:`ArithmeticFault`:

- negative operands or results (underflow),
- results above ``UINT256_MAX`` (overflow),
- division by zero.

Division truncates toward zero, matching integer division on-chain.
"""

from __future__ import annotations

from decimal import Decimal

from jumprate.data.constants import SCALE, UINT256_MAX
from jumprate.protocol.errors import ArithmeticFault


def check_uint(value: int, name: str = "value") -> int:
    """Return *value* if it is a uint256-range integer, else raise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArithmeticFault(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ArithmeticFault(f"{name} underflow: {value} < 0")
    if value > UINT256_MAX:
        raise ArithmeticFault(f"{name} overflow: {value} exceeds uint256")
    return value


def add(a: int, b: int) -> int:
    return check_uint(check_uint(a, "a") + check_uint(b, "b"), "a + b")


def sub(a: int, b: int) -> int:
    """``a - b``; raises on underflow."""
    check_uint(a, "a")
    check_uint(b, "b")
    if b > a:
        raise ArithmeticFault(f"subtraction underflow: {a} - {b}")
    return a - b


def mul(a: int, b: int) -> int:
    return check_uint(check_uint(a, "a") * check_uint(b, "b"), "a * b")


def div(a: int, b: int) -> int:
    """Truncating ``a // b``; raises on division by zero."""
    check_uint(a, "a")
    if check_uint(b, "b") == 0:
        raise ArithmeticFault(f"division by zero: {a} / 0")
    return a // b


def mul_scaled(a: int, b: int) -> int:
    """Multiply two scaled values: ``a * b / SCALE``."""
    return div(mul(a, b), SCALE)


def div_scaled(a: int, b: int) -> int:
    """Divide two scaled values: ``a * SCALE / b``."""
    return div(mul(a, SCALE), b)


def to_scaled(value: float) -> int:
    """Convert a decimal fraction (e.g. 0.8) to its 1e18-scaled integer."""
    return check_uint(int(Decimal(str(value)) * SCALE), "scaled value")


def from_scaled(value: int) -> float:
    """Convert a 1e18-scaled integer to a decimal fraction."""
    return value / SCALE
