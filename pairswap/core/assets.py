"""
Pooled fungible-asset ledgers.

Pools only see these through `balance_of` and `transfer`. Two flavours exist
in the wild and both must be accepted: ledgers whose `transfer` returns True,
and legacy ledgers whose `transfer` returns nothing.
"""

from __future__ import annotations

from typing import Optional

from ..state.balances import Address, Amount
from ..state.canonical import canonical_address
from .claim_token import ClaimToken


class FungibleAsset(ClaimToken):
    """Standard fungible ledger with an open `mint` for funding accounts."""

    def __init__(self, name: str, symbol: str, initial_supply: Amount = 0, holder: Optional[Address] = None) -> None:
        super().__init__(name=name, symbol=symbol)
        self._initial = (initial_supply, holder)

    def on_deploy(self) -> None:
        super().on_deploy()
        supply, holder = self._initial
        if supply:
            self._mint(canonical_address(holder, name="holder"), supply)

    def mint(self, to: Address, value: Amount) -> None:
        self._mint(canonical_address(to, name="to"), value)


class LegacyFungibleAsset(FungibleAsset):
    """Ledger whose `transfer` has no return value."""

    def transfer(self, to: Address, value: Amount) -> None:  # type: ignore[override]
        super().transfer(to, value)
