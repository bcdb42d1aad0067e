"""
Flash-swap callback interface.

When `Pair.swap` is called with non-empty `data`, the pool transfers the
requested outputs first and then calls `pair_call` on the recipient. The
recipient may do anything, including calling other pools, before returning;
the pool only observes the outcome by re-reading its balances.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..state.balances import Address, Amount
from .contract import Contract


class PairCallee(Contract, ABC):
    @abstractmethod
    def pair_call(self, sender: Address, amount0_out: Amount, amount1_out: Amount, data: bytes) -> None:
        """Called by the pool (as `msg_sender`) mid-swap; `sender` is the swap's caller."""
