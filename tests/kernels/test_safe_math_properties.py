"""Property tests for the checked arithmetic kernels."""

from __future__ import annotations

import importlib.util
import math

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from pairswap.errors import ArithmeticOverflowError
from pairswap.kernels import safe_math
from pairswap.kernels.safe_math import UINT256_MAX

uint256 = st.integers(min_value=0, max_value=UINT256_MAX)


@given(uint256)
@settings(max_examples=300)
def test_sqrt_matches_isqrt(n: int) -> None:
    r = safe_math.sqrt(n)
    assert r == math.isqrt(n)
    assert r * r <= n < (r + 1) * (r + 1)


@given(uint256, uint256)
def test_add_either_exact_or_raises(x: int, y: int) -> None:
    if x + y > UINT256_MAX:
        with pytest.raises(ArithmeticOverflowError):
            safe_math.add(x, y)
    else:
        assert safe_math.add(x, y) == x + y


@given(uint256, uint256)
def test_mul_either_exact_or_raises(x: int, y: int) -> None:
    if x * y > UINT256_MAX:
        with pytest.raises(ArithmeticOverflowError):
            safe_math.mul(x, y)
    else:
        assert safe_math.mul(x, y) == x * y
