from __future__ import annotations

import pytest

from pair_harness import FEE_TO_SETTER, OTHER
from pairswap.integration.deployment import (
    DeploymentConfig,
    deploy_from_config,
    deployment_config_from_dict,
    load_deployment_config,
)
from pairswap.state.canonical import ZERO_ADDRESS


def test_load_yaml_config(tmp_path) -> None:
    path = tmp_path / "deployment.yaml"
    path.write_text(
        "chain_id: 5\n"
        "genesis_timestamp: 1000\n"
        f'fee_to_setter: "{FEE_TO_SETTER.upper().replace("0X", "0x")}"\n'
        f'fee_to: "{OTHER}"\n',
        encoding="utf-8",
    )
    config = load_deployment_config(path)
    assert config.chain.chain_id == 5
    assert config.chain.genesis_timestamp == 1000
    assert config.fee_to_setter == FEE_TO_SETTER
    assert config.fee_to == OTHER


def test_defaults_and_null_fee_to() -> None:
    config = deployment_config_from_dict({"fee_to_setter": FEE_TO_SETTER, "fee_to": ZERO_ADDRESS})
    assert config.fee_to is None
    assert config.chain.chain_id == 1


@pytest.mark.parametrize(
    "obj, error",
    [
        ([], TypeError),
        ({}, ValueError),
        ({"fee_to_setter": FEE_TO_SETTER, "fee": OTHER}, ValueError),
        ({"fee_to_setter": FEE_TO_SETTER, "chain_id": "1"}, TypeError),
        ({"fee_to_setter": FEE_TO_SETTER, "chain_id": 0}, ValueError),
        ({"fee_to_setter": 1234}, TypeError),
    ],
)
def test_invalid_configs_rejected(obj, error) -> None:
    with pytest.raises(error):
        deployment_config_from_dict(obj)


def test_deploy_with_fee_on() -> None:
    chain, factory = deploy_from_config(DeploymentConfig(fee_to_setter=FEE_TO_SETTER, fee_to=OTHER))
    assert factory.fee_to == OTHER
    assert factory.fee_to_setter == FEE_TO_SETTER
    assert chain.at(factory.address) is factory


def test_deploy_with_fee_off() -> None:
    _, factory = deploy_from_config(DeploymentConfig(fee_to_setter=FEE_TO_SETTER))
    assert factory.fee_to == ZERO_ADDRESS
