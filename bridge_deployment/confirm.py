import click

from bridge_deployment.config import ResolvedDeploymentConfig
from bridge_deployment.networks import NetworkConfig

CONFIRMATION_ANSWER = "yes"


def _print_deployment_summary(config: ResolvedDeploymentConfig, network_config: NetworkConfig):
    click.echo("\n" + "=" * 60)
    click.secho(f"WARNING: Deploying to {config.network_class.upper()}", fg="yellow")
    click.echo(f"Network: {network_config.description}")
    click.echo(f"Chain ID: {config.chain_id}")
    click.echo(f"Validators: {len(config.validators)}")
    for validator in config.validators:
        click.echo(f"\t{validator}")
    click.echo(
        f"Validator Fee: {config.fee_major_units} {network_config.currency} "
        f"({config.fee_minor_units} wei)"
    )
    click.echo("=" * 60)


def confirm_deployment(config: ResolvedDeploymentConfig, network_config: NetworkConfig) -> bool:
    """Shows the pending deployment and asks the operator to type 'yes' to go ahead."""
    _print_deployment_summary(config, network_config)
    answer = input(f'\nType "{CONFIRMATION_ANSWER}" to continue with deployment: ')
    return answer.strip().lower() == CONFIRMATION_ANSWER
