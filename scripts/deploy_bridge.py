#!/usr/bin/python3

import sys

import click
from ape.cli import ConnectedProviderCommand, network_option

from bridge_deployment.chain import (
    ApeChainProvider,
    ApeProxyDeployer,
    get_contract_container,
    get_deployer_account,
)
from bridge_deployment.config import DeploymentEnvironment
from bridge_deployment.options import (
    contract_name_option,
    discovery_window_option,
    target_option,
)
from bridge_deployment.orchestrator import BridgeDeployment, report_failure
from bridge_deployment.recorder import format_deployment, load_deployment


@click.group()
def cli():
    """Bridge deployment CLI"""


@cli.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@target_option
@contract_name_option
@discovery_window_option
def deploy(network, target, contract_name, discovery_window):
    """
    Deploy the bridge behind a UUPS proxy and record the deployment.

    ape run deploy_bridge deploy --target columbus --network <ecosystem>:<network>:<provider>
    """
    click.echo(f"Connected to {network.name} network.")
    click.echo(f"Starting deployment on network: {target}")
    try:
        environment = DeploymentEnvironment.from_environ()
        deployment = BridgeDeployment(
            network_name=target,
            environment=environment,
            discovery_window=discovery_window,
        )
        account = get_deployer_account(deployment.config.network_class, environment)
        deployment.run(
            provider=ApeChainProvider(),
            proxy_deployer=ApeProxyDeployer(account),
            container=get_contract_container(contract_name),
        )
    except Exception as e:
        report_failure(e)
        sys.exit(1)


@cli.command()
@target_option
def show(target):
    """Show the recorded bridge deployment for a network."""
    record = load_deployment(target)
    if record is None:
        click.secho(f"No deployment recorded for {target}.", fg="yellow")
        return
    click.echo(format_deployment(record))


if __name__ == "__main__":
    cli()
