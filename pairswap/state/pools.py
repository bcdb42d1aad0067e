"""
Pool state for constant-product pairs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..errors import IdenticalAssetsError, NullAssetError
from ..kernels.safe_math import UINT32_MAX, UINT112_MAX, UINT256_MAX
from .balances import Address, Amount
from .canonical import ZERO_ADDRESS, address_from_hash, address_to_bytes, keccak256, keccak256_text


# Stand-in for the pair creation code hash in the CREATE2 derivation; bumping it
# changes every pair address.
PAIR_INIT_CODE_HASH = keccak256_text("pairswap.core.pair.Pair/v2")


def sort_assets(asset_a: Address, asset_b: Address) -> Tuple[Address, Address]:
    """
    Return the pair's assets in canonical order (asset0 < asset1).

    Raises:
        IdenticalAssetsError: If both identifiers are equal
        NullAssetError: If the smaller identifier is the null address
    """
    if asset_a == asset_b:
        raise IdenticalAssetsError()
    asset0, asset1 = (asset_a, asset_b) if asset_a < asset_b else (asset_b, asset_a)
    if asset0 == ZERO_ADDRESS:
        raise NullAssetError()
    return asset0, asset1


def compute_pair_address(factory: Address, asset_a: Address, asset_b: Address) -> Address:
    """
    Deterministically compute the address of the pair for (asset_a, asset_b).

    CREATE2-style: keccak256(0xff || factory || salt || init_code_hash)[12:],
    with salt = keccak256(asset0 || asset1) over the sorted pair. Two callers
    creating the same pair always get the same address.
    """
    asset0, asset1 = sort_assets(asset_a, asset_b)
    salt = keccak256(address_to_bytes(asset0) + address_to_bytes(asset1))
    digest = keccak256(b"\xff" + address_to_bytes(factory) + salt + PAIR_INIT_CODE_HASH)
    return address_from_hash(digest)


@dataclass
class PairState:
    """
    Mutable state of one constant-product pair.

    Attributes:
        asset0: First asset identifier (asset0 < asset1)
        asset1: Second asset identifier
        reserve0: Last synchronized balance of asset0 (uint112)
        reserve1: Last synchronized balance of asset1 (uint112)
        block_timestamp_last: Timestamp of the last update, modulo 2**32
        price0_cumulative_last: Sum of reserve1/reserve0 (UQ112x112) * seconds, modulo 2**256
        price1_cumulative_last: Sum of reserve0/reserve1 (UQ112x112) * seconds, modulo 2**256
        k_last: reserve0 * reserve1 right after the last liquidity event, when the protocol fee is on
        unlocked: False while an entry point is executing
    """

    asset0: Address = ZERO_ADDRESS
    asset1: Address = ZERO_ADDRESS
    reserve0: Amount = 0
    reserve1: Amount = 0
    block_timestamp_last: int = 0
    price0_cumulative_last: int = 0
    price1_cumulative_last: int = 0
    k_last: int = 0
    unlocked: bool = True

    def __post_init__(self):
        if not (0 <= self.reserve0 <= UINT112_MAX and 0 <= self.reserve1 <= UINT112_MAX):
            raise ValueError(f"Reserves must fit in uint112: ({self.reserve0}, {self.reserve1})")
        if not (0 <= self.block_timestamp_last <= UINT32_MAX):
            raise ValueError(f"block_timestamp_last must fit in uint32: {self.block_timestamp_last}")
        for name in ("price0_cumulative_last", "price1_cumulative_last", "k_last"):
            v = getattr(self, name)
            if not (0 <= v <= UINT256_MAX):
                raise ValueError(f"{name} must fit in uint256: {v}")

    @property
    def initialized(self) -> bool:
        return self.asset0 != ZERO_ADDRESS

    def get_reserves(self) -> Tuple[Amount, Amount, int]:
        return self.reserve0, self.reserve1, self.block_timestamp_last

    def get_constant_product(self) -> int:
        """k = reserve0 * reserve1."""
        return self.reserve0 * self.reserve1

    def __repr__(self) -> str:
        return (
            f"PairState(assets=({self.asset0[:10]}..., {self.asset1[:10]}...), "
            f"reserves=({self.reserve0}, {self.reserve1}), "
            f"t={self.block_timestamp_last}, unlocked={self.unlocked})"
        )
