"""
Pair registry: deterministic pair creation and the protocol fee switch.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from ..errors import PairExistsError, UnauthorizedError
from ..state.balances import Address
from ..state.canonical import ZERO_ADDRESS, canonical_address
from ..state.pools import compute_pair_address, sort_assets
from .contract import Contract
from .pair import Pair


logger = logging.getLogger(__name__)


class Factory(Contract):
    """
    Creates one `Pair` per unordered asset pair and exposes `fee_to`.

    `fee_to` is the protocol fee recipient; the null address switches the
    protocol fee off. Only `fee_to_setter` may change either setting.
    """

    def __init__(self, fee_to_setter: Address) -> None:
        self.fee_to: Address = ZERO_ADDRESS
        self.fee_to_setter: Address = canonical_address(fee_to_setter, name="fee_to_setter")
        self._pairs: Dict[Tuple[Address, Address], Address] = {}

    def get_pair(self, asset_a: Address, asset_b: Address) -> Address:
        """Pair address for the two assets in either order, or the null address."""
        key = (canonical_address(asset_a), canonical_address(asset_b))
        if key[0] > key[1]:
            key = (key[1], key[0])
        return self._pairs.get(key, ZERO_ADDRESS)

    def create_pair(self, asset_a: Address, asset_b: Address) -> Address:
        """
        Deploy and initialize the pair for (asset_a, asset_b).

        Raises:
            IdenticalAssetsError: If both identifiers are equal
            NullAssetError: If either identifier is the null address
            PairExistsError: If the pair was already created
        """
        asset0, asset1 = sort_assets(
            canonical_address(asset_a, name="asset_a"),
            canonical_address(asset_b, name="asset_b"),
        )
        if (asset0, asset1) in self._pairs:
            raise PairExistsError()
        pair_address = compute_pair_address(self.address, asset0, asset1)
        self.chain.deploy(Pair(factory=self.address), address=pair_address)
        self._call(pair_address, "initialize", asset0, asset1)
        self._pairs[(asset0, asset1)] = pair_address
        logger.info("pair created: %s (%s, %s)", pair_address, asset0, asset1)
        self._emit("PairCreated", asset0=asset0, asset1=asset1, pair=pair_address)
        return pair_address

    def set_fee_to(self, fee_to: Address) -> None:
        if self.msg_sender != self.fee_to_setter:
            raise UnauthorizedError()
        self.fee_to = canonical_address(fee_to, name="fee_to")

    def set_fee_to_setter(self, fee_to_setter: Address) -> None:
        if self.msg_sender != self.fee_to_setter:
            raise UnauthorizedError()
        self.fee_to_setter = canonical_address(fee_to_setter, name="fee_to_setter")
