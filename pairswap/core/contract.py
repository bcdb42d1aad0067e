"""
Base class for objects deployed on a `pairswap.integration.chain.Chain`.

A contract owns its state as plain attributes. The host binds `chain` and
`address` at deployment and snapshots/restores everything else to make each
call atomic. Restoring replaces attribute objects, so a contract that catches
a failed nested call must re-read its attributes rather than keep aliases.
"""

from __future__ import annotations

import copy
from typing import Any, Dict

from ..state.balances import Address
from ..state.canonical import ZERO_ADDRESS


class Contract:
    # Attributes owned by the host, excluded from snapshots.
    _HOST_ATTRS = ("chain", "address")

    chain: Any = None
    address: Address = ZERO_ADDRESS

    def on_deploy(self) -> None:
        """Hook run once the contract has an address and a chain."""

    @property
    def msg_sender(self) -> Address:
        return self.chain.msg_sender

    @property
    def block_timestamp(self) -> int:
        return self.chain.timestamp

    def _emit(self, name: str, **args: Any) -> None:
        self.chain.emit(self.address, name, args)

    def _call(self, target: Address, method: str, *args: Any) -> Any:
        """Call another contract with this contract as `msg_sender`."""
        return self.chain.call(self.address, target, method, *args)

    def snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy({k: v for k, v in vars(self).items() if k not in self._HOST_ATTRS})

    def restore(self, snap: Dict[str, Any]) -> None:
        host = {k: vars(self)[k] for k in self._HOST_ATTRS if k in vars(self)}
        vars(self).clear()
        vars(self).update(snap)
        vars(self).update(host)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address})"
