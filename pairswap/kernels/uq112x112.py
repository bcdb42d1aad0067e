"""
UQ112x112 fixed-point codec.

A value is an unsigned integer with 112 fractional bits stored in 224 bits;
range [0, 2**112 - 1], resolution 1 / 2**112. Used to accumulate reserve ratios
without losing sub-unit precision.
"""

from __future__ import annotations

from .safe_math import UINT112_MAX


Q112 = 1 << 112
RESOLUTION = 112


def encode(y: int) -> int:
    """Encode a uint112 as a UQ112x112 (never overflows 224 bits)."""
    if not isinstance(y, int) or isinstance(y, bool):
        raise TypeError("y must be an int")
    if not (0 <= y <= UINT112_MAX):
        raise ValueError(f"y must fit in uint112: {y}")
    return y * Q112


def uqdiv(x: int, y: int) -> int:
    """Divide a UQ112x112 by a uint112, truncating; returns a UQ112x112."""
    if not (0 <= y <= UINT112_MAX):
        raise ValueError(f"y must fit in uint112: {y}")
    if y == 0:
        raise ValueError("division by zero reserve")
    return x // y


def decode(x: int) -> int:
    """Integer part of a UQ112x112 (or UQ144x112) value."""
    return x >> RESOLUTION


def mul(x: int, y: int) -> int:
    """Multiply a UQ112x112 by a uint; the result keeps 112 fractional bits."""
    if y < 0:
        raise ValueError(f"y must be non-negative: {y}")
    return x * y
