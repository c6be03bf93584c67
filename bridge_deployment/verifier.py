from bridge_deployment.exceptions import ChainIdMismatch
from bridge_deployment.provider import ChainProvider


def verify_chain_id(provider: ChainProvider, expected_chain_id: int, network_name: str) -> None:
    """
    Checks that the connected chain is the one the deployment was resolved for.

    Must be called before any state-changing call.
    """
    actual_chain_id = provider.chain_id
    if actual_chain_id != expected_chain_id:
        raise ChainIdMismatch(
            expected=expected_chain_id, actual=actual_chain_id, network_name=network_name
        )
