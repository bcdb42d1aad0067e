"""
In-memory host chain (imperative shell).

Supplies what contracts assume from their environment:
- a caller stack (`msg_sender`) and a settable block timestamp,
- the chain id used in signature domain separators,
- an event log for external indexing,
- atomic calls: every `call`, top-level or nested, snapshots every contract
  and the event log first and restores them if anything raises, so a failed
  call leaves no partial effects even when its caller catches the error.

Execution is single-threaded and synchronous. `transact` is the top-level
entry point; contracts call each other through `call`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.contract import Contract
from ..state.balances import Address
from ..state.canonical import address_from_hash, canonical_address, keccak256


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainConfig:
    chain_id: int = 1
    genesis_timestamp: int = 1_700_000_000

    def __post_init__(self) -> None:
        if not isinstance(self.chain_id, int) or isinstance(self.chain_id, bool) or self.chain_id <= 0:
            raise ValueError(f"chain_id must be a positive int: {self.chain_id!r}")
        if not isinstance(self.genesis_timestamp, int) or isinstance(self.genesis_timestamp, bool):
            raise TypeError("genesis_timestamp must be an int")
        if self.genesis_timestamp < 0:
            raise ValueError(f"genesis_timestamp must be non-negative: {self.genesis_timestamp}")


@dataclass(frozen=True)
class Event:
    address: Address
    name: str
    args: Mapping[str, Any] = field(default_factory=dict)


_Snapshot = Tuple[Dict[Address, Dict[str, Any]], int]


class Chain:
    def __init__(self, config: ChainConfig = ChainConfig()) -> None:
        self.config = config
        self.chain_id = config.chain_id
        self.timestamp = config.genesis_timestamp
        self.logs: List[Event] = []
        self._contracts: Dict[Address, Contract] = {}
        self._callers: List[Address] = []
        self._address_nonce = 0

    # -- environment ---------------------------------------------------------

    @property
    def msg_sender(self) -> Address:
        if not self._callers:
            raise RuntimeError("msg_sender read outside of a call")
        return self._callers[-1]

    def advance_time(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"cannot move time backwards: {seconds}")
        self.timestamp += seconds
        return self.timestamp

    def set_timestamp(self, timestamp: int) -> None:
        if timestamp < 0:
            raise ValueError(f"timestamp must be non-negative: {timestamp}")
        self.timestamp = timestamp

    # -- contracts -----------------------------------------------------------

    def new_address(self, label: str = "") -> Address:
        self._address_nonce += 1
        seed = f"{self.chain_id}:{self._address_nonce}:{label}".encode("utf-8")
        return address_from_hash(keccak256(seed))

    def deploy(self, contract: Contract, *, address: Optional[Address] = None) -> Contract:
        """
        Bind `contract` to this chain at `address` (or a fresh one) and run its
        `on_deploy` hook.
        """
        if address is None:
            address = self.new_address(type(contract).__name__)
        address = canonical_address(address)
        if address in self._contracts:
            raise ValueError(f"address already in use: {address}")
        contract.chain = self
        contract.address = address
        self._contracts[address] = contract
        contract.on_deploy()
        logger.debug("deployed %s at %s", type(contract).__name__, address)
        return contract

    def at(self, address: Address) -> Contract:
        try:
            return self._contracts[canonical_address(address)]
        except KeyError:
            raise LookupError(f"no contract at {address}") from None

    def has_code(self, address: Address) -> bool:
        return canonical_address(address) in self._contracts

    # -- calls ---------------------------------------------------------------

    def call(self, sender: Address, target: Address, method: str, *args: Any) -> Any:
        """
        Invoke `method` on the contract at `target` with `sender` as `msg_sender`.

        Non-callable public attributes are returned as-is (getter semantics).
        A method call is atomic: if it raises, every contract and the event log
        are restored to their state at entry before the error propagates.
        """
        if method.startswith("_"):
            raise AttributeError(f"{method!r} is not externally callable")
        contract = self.at(target)
        member = getattr(contract, method)
        if not callable(member):
            if args:
                raise TypeError(f"{method!r} is not callable")
            return member
        snapshot = self._snapshot()
        self._callers.append(canonical_address(sender, name="sender"))
        try:
            return member(*args)
        except Exception:
            self._restore(snapshot)
            raise
        finally:
            self._callers.pop()

    def transact(self, sender: Address, target: Address, method: str, *args: Any) -> Any:
        """Top-level call: on any exception all state is rolled back and the error re-raised."""
        try:
            return self.call(sender, target, method, *args)
        except Exception as exc:
            logger.info("reverted %s.%s from %s: %s", target, method, sender, exc)
            raise

    # -- events --------------------------------------------------------------

    def emit(self, address: Address, name: str, args: Mapping[str, Any]) -> None:
        event = Event(address=address, name=name, args=dict(args))
        self.logs.append(event)
        logger.debug("event %s@%s %s", name, address, event.args)

    def events(self, name: Optional[str] = None, address: Optional[Address] = None) -> List[Event]:
        return [
            e
            for e in self.logs
            if (name is None or e.name == name) and (address is None or e.address == address)
        ]

    # -- atomicity -----------------------------------------------------------

    def _snapshot(self) -> _Snapshot:
        return {addr: c.snapshot() for addr, c in self._contracts.items()}, len(self.logs)

    def _restore(self, snapshot: _Snapshot) -> None:
        states, log_len = snapshot
        for addr in list(self._contracts):
            if addr not in states:
                del self._contracts[addr]
        for addr, state in states.items():
            self._contracts[addr].restore(state)
        del self.logs[log_len:]
