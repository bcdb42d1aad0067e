from __future__ import annotations

import math

import pytest

from pairswap.errors import ArithmeticOverflowError
from pairswap.kernels import safe_math
from pairswap.kernels.safe_math import UINT256_MAX


def test_add_sub_mul_in_range() -> None:
    assert safe_math.add(2, 3) == 5
    assert safe_math.sub(5, 3) == 2
    assert safe_math.mul(7, 6) == 42
    assert safe_math.add(UINT256_MAX - 1, 1) == UINT256_MAX


def test_add_overflow_raises() -> None:
    with pytest.raises(ArithmeticOverflowError, match="add-overflow"):
        safe_math.add(UINT256_MAX, 1)


def test_sub_underflow_raises() -> None:
    with pytest.raises(ArithmeticOverflowError, match="sub-underflow"):
        safe_math.sub(1, 2)


def test_mul_overflow_raises() -> None:
    with pytest.raises(ArithmeticOverflowError, match="mul-overflow"):
        safe_math.mul(1 << 200, 1 << 60)
    assert safe_math.mul(0, UINT256_MAX) == 0


def test_rejects_non_uint_operands() -> None:
    with pytest.raises(TypeError):
        safe_math.add(True, 1)
    with pytest.raises(ValueError):
        safe_math.add(-1, 1)
    with pytest.raises(ValueError):
        safe_math.mul(UINT256_MAX + 1, 1)


@pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 5, 8, 9, 10, 15, 16, 17, 99, 100, 101, 400_000_000])
def test_sqrt_small_values_are_floor(n: int) -> None:
    assert safe_math.sqrt(n) == math.isqrt(n)


def test_sqrt_large_values_are_floor() -> None:
    for n in ((1 << 224) - 1, 1 << 224, (10**38) ** 2 - 1, UINT256_MAX):
        assert safe_math.sqrt(n) == math.isqrt(n)


def test_minimum() -> None:
    assert safe_math.minimum(3, 4) == 3
    assert safe_math.minimum(4, 3) == 3
    assert safe_math.minimum(5, 5) == 5


def test_wrapping_arithmetic_is_modular() -> None:
    assert safe_math.wrapping_add(UINT256_MAX, 2) == 1
    assert safe_math.wrapping_sub(1, 2) == UINT256_MAX
    # Differences survive a single wrap of the 32-bit window.
    assert safe_math.wrapping_sub(5, (1 << 32) - 5, bits=32) == 10
