from typing import Any, Iterator, NamedTuple, Optional

import click
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from hexbytes import HexBytes

from bridge_deployment.config import ResolvedDeploymentConfig
from bridge_deployment.constants import (
    BRIDGE_INITIALIZER,
    DISCOVERY_WINDOW,
    EIP1967_IMPLEMENTATION_SLOT,
    PROXY_KIND,
)
from bridge_deployment.exceptions import DeploymentError, DiscoveryWarning
from bridge_deployment.provider import ChainProvider, ProxyDeployer, ProxyDeployment


class DeploymentFacts(NamedTuple):
    proxy_address: ChecksumAddress
    implementation_address: ChecksumAddress
    proxy_tx_hash: str
    implementation_tx_hash: Optional[str]


def get_implementation_address(provider: ChainProvider, proxy_address: str) -> ChecksumAddress:
    """Reads the implementation address from the EIP1967 slot of a proxy."""
    try:
        implementation_slot = HexBytes(
            provider.get_storage_at(proxy_address, EIP1967_IMPLEMENTATION_SLOT)
        )
    except Exception as e:
        raise DeploymentError(
            f"Could not read the implementation slot of {proxy_address}: {e}"
        ) from e
    if int.from_bytes(implementation_slot, "big") == 0:
        raise DeploymentError(
            f"Implementation slot for contract at {proxy_address} is empty. "
            "Are you sure this is an EIP1967-compatible proxy?"
        )
    return to_checksum_address(implementation_slot[-20:])


def _creation_transactions(
    provider: ChainProvider, start_block: int, window: int
) -> Iterator[str]:
    """Yields contract-creation transaction hashes, newest block first, over at most `window` blocks."""
    last_block = max(start_block - window + 1, 0)
    for block_number in range(start_block, last_block - 1, -1):
        for transaction in provider.get_block_transactions(block_number):
            if transaction.receiver is None:
                yield transaction.txn_hash


def find_creation_transaction(
    provider: ChainProvider, contract_address: str, window: int = DISCOVERY_WINDOW
) -> Optional[str]:
    """
    Searches the most recent `window` blocks for the transaction that created `contract_address`.

    Only top-level contract-creation transactions are inspected, so contracts
    created from within another contract (factories, CREATE2) are never found.
    Returns None when there is no match.
    """
    current_block = provider.get_block_number()
    target = contract_address.lower()
    for txn_hash in _creation_transactions(provider, current_block, window):
        receipt = provider.get_receipt(txn_hash)
        if receipt.contract_address and receipt.contract_address.lower() == target:
            return txn_hash
    return None


class BridgeDeployer:
    """
    Deploys the bridge behind a UUPS proxy and collects the deployment facts.
    """

    def __init__(
        self,
        provider: ChainProvider,
        proxy_deployer: ProxyDeployer,
        discovery_window: int = DISCOVERY_WINDOW,
    ):
        self.provider = provider
        self.proxy_deployer = proxy_deployer
        self.discovery_window = discovery_window

    def deploy(self, config: ResolvedDeploymentConfig, container: Any) -> DeploymentFacts:
        click.echo(f"\nDeploying bridge to {config.network_name}...")
        click.echo(f"Chain ID: {config.chain_id}")
        click.echo(f"Validator Fee: {config.fee_minor_units}")
        click.echo(f"Validators: {len(config.validators)}")

        proxy = self._deploy_proxy(config, container)
        implementation_address = get_implementation_address(self.provider, proxy.address)
        click.echo(f"Implementation deployed to: {implementation_address}")
        implementation_tx_hash = self._discover_implementation_tx(implementation_address)

        return DeploymentFacts(
            proxy_address=proxy.address,
            implementation_address=implementation_address,
            proxy_tx_hash=proxy.txn_hash,
            implementation_tx_hash=implementation_tx_hash,
        )

    def _deploy_proxy(self, config: ResolvedDeploymentConfig, container: Any) -> ProxyDeployment:
        click.echo("\nDeploying UUPS proxy...")
        init_args = [config.chain_id, int(config.fee_minor_units), list(config.validators)]
        try:
            proxy = self.proxy_deployer.deploy_proxy(
                container, init_args, initializer=BRIDGE_INITIALIZER, kind=PROXY_KIND
            )
        except Exception as e:
            raise DeploymentError(f"Proxy deployment failed: {e}") from e
        click.echo(f"Proxy deployed to: {proxy.address}")
        click.echo(f"Proxy deployment tx: {proxy.txn_hash}")
        return proxy

    def _discover_implementation_tx(self, implementation_address: str) -> Optional[str]:
        """Best effort: failures are reported as a warning and yield None."""
        try:
            txn_hash = find_creation_transaction(
                self.provider, implementation_address, window=self.discovery_window
            )
            if txn_hash is None:
                raise DiscoveryWarning(
                    f"no contract creation for {implementation_address} "
                    f"in the last {self.discovery_window} blocks"
                )
        except Exception as e:
            click.secho(
                f"WARNING: Could not find implementation deployment transaction: {e}",
                fg="yellow",
                err=True,
            )
            return None

        click.echo(f"Implementation deployment tx: {txn_hash}")
        return txn_hash
