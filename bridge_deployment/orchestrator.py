import traceback
from pathlib import Path
from typing import Any, Callable, Optional

import click
from web3 import Web3

from bridge_deployment.config import (
    DeploymentEnvironment,
    ResolvedDeploymentConfig,
    apply_development_fallback,
    needs_development_fallback,
    resolve_deployment_config,
)
from bridge_deployment.confirm import confirm_deployment
from bridge_deployment.constants import (
    DEPLOYER_PASSPHRASE_ENVVAR,
    DEPLOYMENTS_DIR,
    DISCOVERY_WINDOW,
    FEE_UNIT,
    LOCAL,
    LOCAL_FALLBACK_VALIDATOR_COUNT,
    PRIVATE_KEY_ENVVAR,
    VALIDATORS_ENVVARS,
)
from bridge_deployment.engine import BridgeDeployer
from bridge_deployment.networks import NetworkConfig, get_default_validators, get_network_config
from bridge_deployment.provider import ChainProvider, ProxyDeployer
from bridge_deployment.recorder import (
    DeploymentRecord,
    format_deployment,
    load_deployment,
    save_deployment,
)
from bridge_deployment.validation import validate_validators
from bridge_deployment.verifier import verify_chain_id

Confirmation = Callable[[ResolvedDeploymentConfig, NetworkConfig], bool]

RULE = "=" * 60


class BridgeDeployment:
    """
    A single bridge deployment run against one registered network.

    Everything that can be checked without a chain (registry lookup, environment
    overrides, validator set, required credentials) is checked on construction,
    so configuration errors surface before any provider is touched.
    """

    def __init__(
        self,
        network_name: str,
        environment: DeploymentEnvironment,
        confirm: Confirmation = confirm_deployment,
        deployments_dir: Path = DEPLOYMENTS_DIR,
        discovery_window: int = DISCOVERY_WINDOW,
    ):
        self.network_name = network_name
        self.network_config = get_network_config(network_name)
        network_class = self.network_config.network_class

        click.echo(f"Network: {self.network_config.description}")
        click.echo(f"Network Type: {network_class}")

        self.config = resolve_deployment_config(
            network_config=self.network_config,
            network_name=network_name,
            network_class=network_class,
            default_validators=get_default_validators(network_class),
            environment=environment,
        )
        if not needs_development_fallback(self.config):
            self.config = self._validated(self.config)

        if network_class != LOCAL:
            environment.require(PRIVATE_KEY_ENVVAR)
            environment.require(DEPLOYER_PASSPHRASE_ENVVAR)

        self._confirm = confirm
        self.deployments_dir = deployments_dir
        self.discovery_window = discovery_window

    @staticmethod
    def _validated(config: ResolvedDeploymentConfig) -> ResolvedDeploymentConfig:
        validators = validate_validators(
            config.validators, envvar=VALIDATORS_ENVVARS.get(config.network_class)
        )
        return config._replace(validators=validators)

    def _development_validators(self, provider: ChainProvider, deployer: str):
        test_accounts = provider.get_test_accounts(LOCAL_FALLBACK_VALIDATOR_COUNT + 1)
        test_accounts = [account for account in test_accounts if account != deployer]
        return test_accounts[:LOCAL_FALLBACK_VALIDATOR_COUNT]

    def run(
        self, provider: ChainProvider, proxy_deployer: ProxyDeployer, container: Any
    ) -> Optional[DeploymentRecord]:
        """
        Deploys the bridge and records the result.

        Returns the stored record, or None if the operator cancelled.
        """
        config = self.config
        deployer = proxy_deployer.address

        if needs_development_fallback(config):
            click.echo("\nUsing test accounts as validators...")
            config = apply_development_fallback(
                config, self._development_validators(provider, deployer)
            )
            config = self._validated(config)
        self.config = config

        click.echo("\nVerifying chain ID...")
        verify_chain_id(provider, config.chain_id, self.network_name)
        click.secho("Chain ID verified successfully", fg="green")

        balance = provider.get_balance(deployer)
        click.echo(f"\nDeployer address: {deployer}")
        click.echo(
            f"Deployer balance: {Web3.from_wei(balance, FEE_UNIT)} {self.network_config.currency}"
        )

        if config.network_class != LOCAL:
            if not self._confirm(config, self.network_config):
                click.echo("\nDeployment cancelled.")
                return None
            click.echo("")

        bridge_deployer = BridgeDeployer(
            provider=provider,
            proxy_deployer=proxy_deployer,
            discovery_window=self.discovery_window,
        )
        facts = bridge_deployer.deploy(config, container)

        record = DeploymentRecord(
            network_name=config.network_name,
            description=self.network_config.description,
            network_class=config.network_class,
            chain_id=config.chain_id,
            proxy_address=facts.proxy_address,
            implementation_address=facts.implementation_address,
            proxy_tx_hash=facts.proxy_tx_hash,
            implementation_tx_hash=facts.implementation_tx_hash,
            fee_major_units=config.fee_major_units,
            fee_minor_units=config.fee_minor_units,
            validators=list(config.validators),
            deployer=deployer,
        )
        save_deployment(record, self.network_name, self.deployments_dir)

        record = load_deployment(self.network_name, self.deployments_dir)
        click.echo(format_deployment(record))
        click.echo("Next: Don't forget to verify contracts on block explorer!\n")
        return record


def report_failure(error: BaseException) -> None:
    """Prints a delimited failure block with the error message and its stack trace."""
    click.secho(f"\n{RULE}\nDEPLOYMENT FAILED\n{RULE}", fg="red", err=True)
    click.echo(str(error), err=True)
    if error.__traceback__ is not None:
        stack = traceback.format_exception(type(error), error, error.__traceback__)
        click.echo("\nStack trace:", err=True)
        click.echo("".join(stack), err=True)
    click.echo(f"{RULE}\n", err=True)
