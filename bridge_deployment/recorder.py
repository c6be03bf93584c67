import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, NamedTuple, Optional

import click
from eth_typing import ChecksumAddress

from bridge_deployment.constants import DEPLOYMENTS_DIR, STANDARD_DEPLOYMENT_JSON_FORMAT

RULE = "=" * 60


class DeploymentRecord(NamedTuple):
    """Facts about the bridge deployment on a single network."""

    network_name: str
    description: str
    network_class: str
    chain_id: int
    proxy_address: ChecksumAddress
    implementation_address: ChecksumAddress
    proxy_tx_hash: str
    implementation_tx_hash: Optional[str]
    fee_major_units: str
    fee_minor_units: str
    validators: List[ChecksumAddress]
    deployer: ChecksumAddress
    timestamp: Optional[str] = None


def deployment_filepath(network_name: str, deployments_dir: Path = DEPLOYMENTS_DIR) -> Path:
    return Path(deployments_dir) / f"{network_name}.json"


def save_deployment(
    record: DeploymentRecord, network_name: str, deployments_dir: Path = DEPLOYMENTS_DIR
) -> Path:
    """
    Writes the deployment record for a network, stamped with the current UTC time.

    Any previous record for the same network is overwritten.
    """
    filepath = deployment_filepath(network_name, deployments_dir)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(timezone.utc).isoformat()
    data = record._replace(timestamp=timestamp)._asdict()
    data["validators"] = list(record.validators)

    with open(filepath, "w") as file:
        json.dump(data, file, **STANDARD_DEPLOYMENT_JSON_FORMAT)

    click.echo(f"\n(i) Deployment information saved to: {filepath}")
    return filepath


def load_deployment(
    network_name: str, deployments_dir: Path = DEPLOYMENTS_DIR
) -> Optional[DeploymentRecord]:
    """Returns the stored deployment record for a network, or None if there is none yet."""
    filepath = deployment_filepath(network_name, deployments_dir)
    if not filepath.exists():
        return None

    with open(filepath, "r") as file:
        data = json.load(file)

    return DeploymentRecord(
        network_name=data["network_name"],
        description=data["description"],
        network_class=data["network_class"],
        chain_id=int(data["chain_id"]),
        proxy_address=data["proxy_address"],
        implementation_address=data["implementation_address"],
        proxy_tx_hash=data["proxy_tx_hash"],
        implementation_tx_hash=data.get("implementation_tx_hash"),
        fee_major_units=data["fee_major_units"],
        fee_minor_units=data["fee_minor_units"],
        validators=list(data["validators"]),
        deployer=data["deployer"],
        timestamp=data.get("timestamp"),
    )


def format_deployment(record: DeploymentRecord) -> str:
    lines = [
        f"\n{RULE}",
        f"Bridge Deployment - {record.network_name}",
        RULE,
        f"Network: {record.network_name} ({record.description})",
        f"Chain ID: {record.chain_id}",
        f"Proxy Address: {record.proxy_address}",
        f"Implementation Address: {record.implementation_address}",
    ]

    if record.proxy_tx_hash:
        lines.append(f"Proxy Deployment Tx: {record.proxy_tx_hash}")
    if record.implementation_tx_hash:
        lines.append(f"Implementation Deployment Tx: {record.implementation_tx_hash}")

    lines.append(f"Validator Fee: {record.fee_major_units} ({record.fee_minor_units} wei)")
    lines.append(f"Validators ({len(record.validators)}):")
    lines.extend(f"  {index}. {validator}" for index, validator in enumerate(record.validators, 1))
    lines.append(f"Deployer: {record.deployer}")
    lines.append(f"Deployment Time: {record.timestamp}")
    lines.append(f"{RULE}\n")

    return "\n".join(lines)
