"""
Checked unsigned-integer arithmetic (uint256 semantics).

Balance and share accounting never wraps: every result outside
[0, UINT256_MAX] raises `ArithmeticOverflowError`. The only fields allowed to
wrap are the 32-bit timestamp window and the 256-bit price accumulators, which
use `wrapping_add` / `wrapping_sub` explicitly.
"""

from __future__ import annotations

from ..errors import ArithmeticOverflowError


UINT32_MAX = (1 << 32) - 1
UINT112_MAX = (1 << 112) - 1
UINT256_MAX = (1 << 256) - 1


def _require_uint(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"{name} must be in [0, 2**256): {value}")


def add(x: int, y: int) -> int:
    _require_uint("x", x)
    _require_uint("y", y)
    z = x + y
    if z > UINT256_MAX:
        raise ArithmeticOverflowError("ds-math-add-overflow")
    return z


def sub(x: int, y: int) -> int:
    _require_uint("x", x)
    _require_uint("y", y)
    if y > x:
        raise ArithmeticOverflowError("ds-math-sub-underflow")
    return x - y


def mul(x: int, y: int) -> int:
    _require_uint("x", x)
    _require_uint("y", y)
    z = x * y
    if z > UINT256_MAX:
        raise ArithmeticOverflowError("ds-math-mul-overflow")
    return z


def sqrt(y: int) -> int:
    """
    Floor of the square root of `y` (Babylonian method).

    Converges from above: the first iterate that stops decreasing is
    floor(sqrt(y)).
    """
    _require_uint("y", y)
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
        return z
    if y != 0:
        return 1
    return 0


def minimum(x: int, y: int) -> int:
    return x if x < y else y


def wrapping_add(x: int, y: int, *, bits: int = 256) -> int:
    """Addition modulo 2**bits (intentional wraparound)."""
    return (x + y) & ((1 << bits) - 1)


def wrapping_sub(x: int, y: int, *, bits: int = 256) -> int:
    """Subtraction modulo 2**bits; differences stay correct across one wrap."""
    return (x - y) & ((1 << bits) - 1)
