from typing import List, NamedTuple

from bridge_deployment.constants import DEFAULT_VALIDATORS, LOCAL, MAINNET, TESTNET
from bridge_deployment.exceptions import UnknownNetwork


class NetworkConfig(NamedTuple):
    """Static deployment parameters of a single registered network."""

    chain_id: int
    network_class: str
    default_fee: str  # major units of the native currency
    description: str
    currency: str


NETWORKS = {
    "columbus": NetworkConfig(
        chain_id=501,
        network_class=TESTNET,
        default_fee="5",
        description="Camino Columbus Testnet",
        currency="CAM",
    ),
    "camino": NetworkConfig(
        chain_id=500,
        network_class=MAINNET,
        default_fee="5",
        description="Camino Mainnet",
        currency="CAM",
    ),
    "sepolia": NetworkConfig(
        chain_id=11155111,
        network_class=TESTNET,
        default_fee="0.0001",
        description="Ethereum Sepolia Testnet",
        currency="ETH",
    ),
    "ethereum": NetworkConfig(
        chain_id=1,
        network_class=MAINNET,
        default_fee="0.0001",
        description="Ethereum Mainnet",
        currency="ETH",
    ),
    "bscTestnet": NetworkConfig(
        chain_id=97,
        network_class=TESTNET,
        default_fee="0.0002",
        description="BNB Smart Chain Testnet",
        currency="tBNB",
    ),
    "bsc": NetworkConfig(
        chain_id=56,
        network_class=MAINNET,
        default_fee="0.0002",
        description="BNB Smart Chain Mainnet",
        currency="BNB",
    ),
    "local": NetworkConfig(
        chain_id=31337,
        network_class=LOCAL,
        default_fee="0.042",
        description="Local Development Network",
        currency="ETH",
    ),
}

SUPPORTED_NETWORKS = list(NETWORKS)


def get_network_config(network_name: str) -> NetworkConfig:
    """Returns a copy of the registry entry for the given network."""
    try:
        network_config = NETWORKS[network_name]
    except KeyError:
        raise UnknownNetwork(
            f"No configuration found for network: {network_name}. "
            f"Available networks: {', '.join(SUPPORTED_NETWORKS)}"
        )
    return network_config._replace()


def get_network_class(network_name: str) -> str:
    return get_network_config(network_name).network_class


def _has_class(network_name: str, network_class: str) -> bool:
    network_config = NETWORKS.get(network_name)
    return network_config is not None and network_config.network_class == network_class


def is_testnet(network_name: str) -> bool:
    return _has_class(network_name, TESTNET)


def is_mainnet(network_name: str) -> bool:
    return _has_class(network_name, MAINNET)


def is_local_network(network_name: str) -> bool:
    return _has_class(network_name, LOCAL)


def get_default_validators(network_class: str) -> List[str]:
    """
    Returns the default validator set for a network class.

    Mainnet and local networks have no defaults: mainnet validators must be configured
    explicitly and local networks fall back to test accounts at deployment time.
    The result is not validated.
    """
    return list(DEFAULT_VALIDATORS.get(network_class, []))
