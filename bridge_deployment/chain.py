from typing import Any, List, Sequence

import click
from ape import accounts, chain, networks, project
from ape.api import AccountAPI
from ape.contracts import ContractContainer
from ape_accounts import import_account_from_private_key
from eth_account import Account
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address, to_hex
from hexbytes import HexBytes

from bridge_deployment.config import DeploymentEnvironment
from bridge_deployment.constants import (
    DEPLOYER_ACCOUNT_ALIAS,
    DEPLOYER_PASSPHRASE_ENVVAR,
    LOCAL,
    OZ_DEPENDENCY_NAME,
    OZ_DEPENDENCY_VERSION,
    PRIVATE_KEY_ENVVAR,
    PROXY_KIND,
)
from bridge_deployment.exceptions import ConfigurationError
from bridge_deployment.provider import (
    BlockTransaction,
    ChainProvider,
    ProxyDeployer,
    ProxyDeployment,
    TransactionReceipt,
)


class ApeChainProvider(ChainProvider):
    """ChainProvider backed by the provider of the active ape network connection."""

    @property
    def chain_id(self) -> int:
        return networks.provider.chain_id

    def get_block_number(self) -> int:
        return chain.blocks.height

    def get_block_transactions(self, block_number: int) -> List[BlockTransaction]:
        block = networks.provider.web3.eth.get_block(block_number, full_transactions=True)
        return [
            BlockTransaction(txn_hash=to_hex(HexBytes(tx["hash"])), receiver=tx.get("to") or None)
            for tx in block["transactions"]
        ]

    def get_receipt(self, txn_hash: str) -> TransactionReceipt:
        receipt = chain.provider.get_receipt(txn_hash)
        return TransactionReceipt(txn_hash=txn_hash, contract_address=receipt.contract_address)

    def get_storage_at(self, address: str, slot: int) -> bytes:
        return chain.provider.get_storage_at(address=to_checksum_address(address), slot=slot)

    def get_balance(self, address: str) -> int:
        return chain.provider.get_balance(address)

    def get_test_accounts(self, count: int) -> List[ChecksumAddress]:
        return [accounts.test_accounts[index].address for index in range(count)]


def get_oz_dependency():
    return project.dependencies[OZ_DEPENDENCY_NAME][OZ_DEPENDENCY_VERSION]


class ApeProxyDeployer(ProxyDeployer):
    """
    Deploys the implementation contract and an OpenZeppelin ERC1967Proxy pointing at it,
    calling the initializer through the proxy constructor.
    """

    def __init__(self, account: AccountAPI):
        self._account = account

    @property
    def address(self) -> ChecksumAddress:
        return self._account.address

    def deploy_proxy(
        self,
        container: ContractContainer,
        init_args: Sequence[Any],
        initializer: str,
        kind: str = PROXY_KIND,
    ) -> ProxyDeployment:
        if kind != PROXY_KIND:
            raise ValueError(f"Unsupported proxy kind '{kind}'; only '{PROXY_KIND}' is supported.")

        implementation = self._account.deploy(container)
        init_data = getattr(implementation, initializer).encode_input(*init_args)
        proxy = self._account.deploy(
            get_oz_dependency().ERC1967Proxy, implementation.address, init_data
        )
        return ProxyDeployment(
            address=to_checksum_address(proxy.address),
            txn_hash=to_hex(HexBytes(proxy.txn_hash)),
        )


def get_contract_container(contract_name: str) -> ContractContainer:
    try:
        return getattr(project, contract_name)
    except AttributeError:
        raise ValueError(f"No contract found with name '{contract_name}'.")


def get_deployer_account(network_class: str, environment: DeploymentEnvironment) -> AccountAPI:
    """
    Returns the account that signs the deployment.

    Local networks use the first test account. Other networks use PRIVATE_KEY,
    imported once into the ape keystore and unlocked with DEPLOYER_PASSPHRASE.
    """
    if network_class == LOCAL:
        return accounts.test_accounts[0]

    private_key = environment.require(PRIVATE_KEY_ENVVAR)
    passphrase = environment.require(DEPLOYER_PASSPHRASE_ENVVAR)
    expected_address = Account.from_key(private_key).address

    if DEPLOYER_ACCOUNT_ALIAS in accounts.aliases:
        account = accounts.load(DEPLOYER_ACCOUNT_ALIAS)
        if account.address != expected_address:
            raise ConfigurationError(
                f"Keystore account '{DEPLOYER_ACCOUNT_ALIAS}' ({account.address}) does not "
                f"match {PRIVATE_KEY_ENVVAR} ({expected_address})."
            )
    else:
        account = import_account_from_private_key(DEPLOYER_ACCOUNT_ALIAS, passphrase, private_key)
        click.echo(f"Account imported: {account.address}")

    account.set_autosign(True, passphrase=passphrase)
    return account
