"""
Deployment configuration and bootstrap.

A deployment is described by a small YAML mapping:

    chain_id: 1
    genesis_timestamp: 1700000000
    fee_to_setter: "0x..."
    fee_to: "0x..."        # optional; omit to leave the protocol fee off
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from ..core.factory import Factory
from ..state.balances import Address
from ..state.canonical import ZERO_ADDRESS, canonical_address
from .chain import Chain, ChainConfig


_KNOWN_KEYS = frozenset({"chain_id", "genesis_timestamp", "fee_to_setter", "fee_to"})


@dataclass(frozen=True)
class DeploymentConfig:
    fee_to_setter: Address
    fee_to: Optional[Address] = None
    chain: ChainConfig = ChainConfig()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fee_to_setter", canonical_address(self.fee_to_setter, name="fee_to_setter"))
        if self.fee_to is not None:
            object.__setattr__(self, "fee_to", canonical_address(self.fee_to, name="fee_to"))


def _require_int(obj: Mapping[str, Any], key: str, default: int) -> int:
    v = obj.get(key, default)
    if not isinstance(v, int) or isinstance(v, bool):
        raise TypeError(f"{key} must be an int")
    return int(v)


def deployment_config_from_dict(obj: Any) -> DeploymentConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("deployment config must be a mapping")
    unknown = set(obj) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"unknown deployment config keys: {sorted(unknown)}")
    if "fee_to_setter" not in obj:
        raise ValueError("deployment config requires fee_to_setter")
    defaults = ChainConfig()
    chain = ChainConfig(
        chain_id=_require_int(obj, "chain_id", defaults.chain_id),
        genesis_timestamp=_require_int(obj, "genesis_timestamp", defaults.genesis_timestamp),
    )
    fee_to = obj.get("fee_to")
    if fee_to == ZERO_ADDRESS:
        fee_to = None
    return DeploymentConfig(fee_to_setter=obj["fee_to_setter"], fee_to=fee_to, chain=chain)


def load_deployment_config(path: Union[str, Path]) -> DeploymentConfig:
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    return deployment_config_from_dict(obj)


def deploy_from_config(config: DeploymentConfig) -> Tuple[Chain, Factory]:
    """Start a chain and deploy the registry; switch the protocol fee on if configured."""
    chain = Chain(config.chain)
    factory = chain.deploy(Factory(fee_to_setter=config.fee_to_setter))
    if config.fee_to is not None:
        chain.transact(config.fee_to_setter, factory.address, "set_fee_to", config.fee_to)
    return chain, factory
