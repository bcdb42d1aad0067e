"""
Host environment and deployment wiring for PairSwap contracts
"""

from .chain import Chain, ChainConfig, Event
from .deployment import DeploymentConfig, deploy_from_config, load_deployment_config

__all__ = [
    "Chain",
    "ChainConfig",
    "DeploymentConfig",
    "Event",
    "deploy_from_config",
    "load_deployment_config",
]
