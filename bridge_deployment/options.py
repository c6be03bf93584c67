import click

from bridge_deployment.constants import BRIDGE_CONTRACT_NAME, DISCOVERY_WINDOW
from bridge_deployment.networks import SUPPORTED_NETWORKS

target_option = click.option(
    "--target",
    "-t",
    help="Bridge network from the network registry",
    type=click.Choice(SUPPORTED_NETWORKS),
    required=True,
)

contract_name_option = click.option(
    "--contract-name",
    "-c",
    help="Name of the bridge contract to deploy behind the proxy",
    default=BRIDGE_CONTRACT_NAME,
    show_default=True,
)

discovery_window_option = click.option(
    "--discovery-window",
    help="Number of recent blocks searched for the implementation deployment transaction",
    type=click.IntRange(min=1),
    default=DISCOVERY_WINDOW,
    show_default=True,
)
