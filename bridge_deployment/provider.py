from abc import ABC, abstractmethod
from typing import Any, List, NamedTuple, Optional, Sequence

from eth_typing import ChecksumAddress


class BlockTransaction(NamedTuple):
    txn_hash: str
    receiver: Optional[str]  # None for contract-creation transactions


class TransactionReceipt(NamedTuple):
    txn_hash: str
    contract_address: Optional[str]


class ProxyDeployment(NamedTuple):
    address: ChecksumAddress
    txn_hash: str


class ChainProvider(ABC):
    """Read-only view of the connected chain used by the deployment."""

    @property
    @abstractmethod
    def chain_id(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_block_number(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_block_transactions(self, block_number: int) -> List[BlockTransaction]:
        raise NotImplementedError

    @abstractmethod
    def get_receipt(self, txn_hash: str) -> TransactionReceipt:
        raise NotImplementedError

    @abstractmethod
    def get_storage_at(self, address: str, slot: int) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def get_balance(self, address: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_test_accounts(self, count: int) -> List[ChecksumAddress]:
        """Returns the addresses of the first `count` ephemeral accounts of a development chain."""
        raise NotImplementedError


class ProxyDeployer(ABC):
    """
    Deploys a contract behind an upgradeable proxy on behalf of a deployer account.

    Only the proxy deployment is reported back; the implementation contract is
    created as a side effect.
    """

    @property
    @abstractmethod
    def address(self) -> ChecksumAddress:
        raise NotImplementedError

    @abstractmethod
    def deploy_proxy(
        self, container: Any, init_args: Sequence[Any], initializer: str, kind: str
    ) -> ProxyDeployment:
        raise NotImplementedError
