from __future__ import annotations

import pytest

from pairswap.errors import IdenticalAssetsError, NullAssetError
from pairswap.kernels.safe_math import UINT112_MAX
from pairswap.state.canonical import ZERO_ADDRESS, canonical_address
from pairswap.state.pools import PairState, compute_pair_address, sort_assets

FACTORY = "0x" + "fa" * 20
ASSET_LO = "0x" + "11" * 20
ASSET_HI = "0x" + "22" * 20


def test_sort_assets_orders_by_identifier() -> None:
    assert sort_assets(ASSET_HI, ASSET_LO) == (ASSET_LO, ASSET_HI)
    assert sort_assets(ASSET_LO, ASSET_HI) == (ASSET_LO, ASSET_HI)


def test_sort_assets_rejects_identical_and_null() -> None:
    with pytest.raises(IdenticalAssetsError):
        sort_assets(ASSET_LO, ASSET_LO)
    with pytest.raises(NullAssetError):
        sort_assets(ASSET_LO, ZERO_ADDRESS)
    with pytest.raises(NullAssetError):
        sort_assets(ZERO_ADDRESS, ASSET_HI)


def test_pair_address_is_deterministic_and_order_independent() -> None:
    a = compute_pair_address(FACTORY, ASSET_LO, ASSET_HI)
    b = compute_pair_address(FACTORY, ASSET_HI, ASSET_LO)
    assert a == b
    assert a == canonical_address(a)
    assert a != compute_pair_address("0x" + "fb" * 20, ASSET_LO, ASSET_HI)
    assert a != compute_pair_address(FACTORY, ASSET_LO, "0x" + "33" * 20)


def test_pair_state_bounds() -> None:
    s = PairState(reserve0=UINT112_MAX, reserve1=1)
    assert s.get_reserves() == (UINT112_MAX, 1, 0)
    assert s.get_constant_product() == UINT112_MAX
    assert not s.initialized
    with pytest.raises(ValueError):
        PairState(reserve0=UINT112_MAX + 1)
    with pytest.raises(ValueError):
        PairState(block_timestamp_last=1 << 32)


def test_canonical_address_normalizes_case_and_prefix() -> None:
    assert canonical_address("AB" * 20) == "0x" + "ab" * 20
    assert canonical_address("0X" + "Ab" * 20) == "0x" + "ab" * 20
    with pytest.raises(ValueError):
        canonical_address("0x1234")
    with pytest.raises(ValueError):
        canonical_address("0x" + "zz" * 20)
    with pytest.raises(TypeError):
        canonical_address(1234)
