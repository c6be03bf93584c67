import json
from datetime import datetime

import pytest

from bridge_deployment.recorder import (
    DeploymentRecord,
    deployment_filepath,
    format_deployment,
    load_deployment,
    save_deployment,
)
from tests.conftest import DEPLOYER, IMPLEMENTATION, PROXY, TEST_ACCOUNTS, make_hash


@pytest.fixture
def record():
    return DeploymentRecord(
        network_name="columbus",
        description="Camino Columbus Testnet",
        network_class="testnet",
        chain_id=501,
        proxy_address=PROXY,
        implementation_address=IMPLEMENTATION,
        proxy_tx_hash=make_hash(2),
        implementation_tx_hash=make_hash(1),
        fee_major_units="5",
        fee_minor_units="5000000000000000000",
        validators=TEST_ACCOUNTS[1:4],
        deployer=DEPLOYER,
    )


def test_save_creates_directory(record, deployments_dir):
    assert not deployments_dir.exists()
    filepath = save_deployment(record, "columbus", deployments_dir)
    assert filepath == deployments_dir / "columbus.json"
    assert filepath == deployment_filepath("columbus", deployments_dir)
    assert filepath.exists()


def test_saved_file_contents(record, deployments_dir):
    filepath = save_deployment(record, "columbus", deployments_dir)
    with open(filepath) as file:
        data = json.load(file)

    assert set(data) == set(DeploymentRecord._fields)
    assert data["chain_id"] == 501
    assert data["implementation_tx_hash"] == make_hash(1)
    assert data["validators"] == TEST_ACCOUNTS[1:4]
    assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None


def test_load_missing_record(deployments_dir):
    assert load_deployment("columbus", deployments_dir) is None


def test_save_then_load(record, deployments_dir):
    save_deployment(record, "columbus", deployments_dir)
    loaded = load_deployment("columbus", deployments_dir)

    assert loaded.timestamp is not None
    assert loaded._replace(timestamp=None) == record
    for saved_value, loaded_value in zip(record[:-1], loaded[:-1]):
        assert type(saved_value) is type(loaded_value)


def test_save_then_load_without_implementation_tx(record, deployments_dir):
    record = record._replace(implementation_tx_hash=None)
    save_deployment(record, "columbus", deployments_dir)
    assert load_deployment("columbus", deployments_dir).implementation_tx_hash is None


def test_save_overwrites_previous_record(record, deployments_dir):
    save_deployment(record, "columbus", deployments_dir)
    redeployed = record._replace(proxy_address=DEPLOYER)
    save_deployment(redeployed, "columbus", deployments_dir)

    assert load_deployment("columbus", deployments_dir).proxy_address == DEPLOYER
    assert [p.name for p in deployments_dir.iterdir()] == ["columbus.json"]


def test_records_are_keyed_by_network(record, deployments_dir):
    save_deployment(record, "columbus", deployments_dir)
    assert load_deployment("camino", deployments_dir) is None


def test_format_deployment(record):
    output = format_deployment(record._replace(timestamp="2024-01-01T00:00:00+00:00"))
    lines = output.splitlines()

    assert "Bridge Deployment - columbus" in lines
    assert "Network: columbus (Camino Columbus Testnet)" in lines
    assert "Chain ID: 501" in lines
    assert f"Proxy Address: {PROXY}" in lines
    assert f"Implementation Address: {IMPLEMENTATION}" in lines
    assert f"Proxy Deployment Tx: {make_hash(2)}" in lines
    assert f"Implementation Deployment Tx: {make_hash(1)}" in lines
    assert "Validator Fee: 5 (5000000000000000000 wei)" in lines
    assert "Validators (3):" in lines
    assert f"  1. {TEST_ACCOUNTS[1]}" in lines
    assert f"  3. {TEST_ACCOUNTS[3]}" in lines
    assert f"Deployer: {DEPLOYER}" in lines
    assert "Deployment Time: 2024-01-01T00:00:00+00:00" in lines


def test_format_deployment_omits_missing_tx_hashes(record):
    output = format_deployment(record._replace(implementation_tx_hash=None))
    assert "Implementation Deployment Tx" not in output
    assert "Proxy Deployment Tx" in output


def test_format_deployment_is_deterministic(record):
    assert format_deployment(record) == format_deployment(record)
