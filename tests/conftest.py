import pytest
from eth_utils import to_checksum_address

from bridge_deployment.config import DeploymentEnvironment
from bridge_deployment.constants import EIP1967_IMPLEMENTATION_SLOT
from bridge_deployment.provider import (
    BlockTransaction,
    ChainProvider,
    ProxyDeployer,
    ProxyDeployment,
    TransactionReceipt,
)

COLUMBUS_CHAIN_ID = 501
ONE_ETHER = 10**18


def make_address(byte: int) -> str:
    return to_checksum_address("0x" + f"{byte:02x}" * 20)


def make_hash(value: int) -> str:
    return "0x" + f"{value:064x}"


DEPLOYER = make_address(0x01)
PROXY = make_address(0xBB)
IMPLEMENTATION = make_address(0xAA)
TEST_ACCOUNTS = [DEPLOYER] + [make_address(byte) for byte in (0x02, 0x03, 0x04, 0x05)]


class FakeChain(ChainProvider):
    """In-memory chain: a list of blocks, each a list of transactions."""

    def __init__(self, chain_id: int = COLUMBUS_CHAIN_ID, test_accounts=None):
        self._chain_id = chain_id
        self.test_accounts = list(test_accounts or TEST_ACCOUNTS)
        self.blocks = [[]]  # genesis
        self.receipts = {}
        self.storage = {}
        self.balances = {DEPLOYER: 10 * ONE_ETHER}
        self.block_requests = []
        self._nonce = 0

    @property
    def chain_id(self) -> int:
        return self._chain_id

    def _next_hash(self) -> str:
        self._nonce += 1
        return make_hash(self._nonce)

    def mine(self, transactions=None) -> int:
        self.blocks.append(list(transactions or []))
        return len(self.blocks) - 1

    def mine_empty(self, count: int) -> None:
        for _ in range(count):
            self.mine()

    def mine_creation(self, contract_address: str) -> str:
        txn_hash = self._next_hash()
        self.receipts[txn_hash] = TransactionReceipt(txn_hash, contract_address)
        self.mine([BlockTransaction(txn_hash=txn_hash, receiver=None)])
        return txn_hash

    def mine_call(self, receiver: str) -> str:
        txn_hash = self._next_hash()
        self.receipts[txn_hash] = TransactionReceipt(txn_hash, None)
        self.mine([BlockTransaction(txn_hash=txn_hash, receiver=receiver)])
        return txn_hash

    def get_block_number(self) -> int:
        return len(self.blocks) - 1

    def get_block_transactions(self, block_number: int):
        self.block_requests.append(block_number)
        return list(self.blocks[block_number])

    def get_receipt(self, txn_hash: str) -> TransactionReceipt:
        return self.receipts[txn_hash]

    def get_storage_at(self, address: str, slot: int) -> bytes:
        return self.storage.get((address, slot), bytes(32))

    def get_balance(self, address: str) -> int:
        return self.balances.get(address, 0)

    def get_test_accounts(self, count: int):
        return self.test_accounts[:count]


class FakeProxyDeployer(ProxyDeployer):
    """
    Mines an implementation creation followed by a proxy creation,
    then `trailing_blocks` empty blocks, and only reports the proxy.
    """

    def __init__(
        self,
        chain: FakeChain,
        address: str = DEPLOYER,
        implementation_address: str = IMPLEMENTATION,
        proxy_address: str = PROXY,
        trailing_blocks: int = 0,
        error: Exception = None,
    ):
        self.chain = chain
        self._address = address
        self.implementation_address = implementation_address
        self.proxy_address = proxy_address
        self.trailing_blocks = trailing_blocks
        self.error = error
        self.calls = []
        self.implementation_tx_hash = None

    @property
    def address(self) -> str:
        return self._address

    def deploy_proxy(self, container, init_args, initializer, kind) -> ProxyDeployment:
        self.calls.append((container, list(init_args), initializer, kind))
        if self.error:
            raise self.error

        self.implementation_tx_hash = self.chain.mine_creation(self.implementation_address)
        proxy_tx_hash = self.chain.mine_creation(self.proxy_address)
        self.chain.storage[(self.proxy_address, EIP1967_IMPLEMENTATION_SLOT)] = bytes(
            12
        ) + bytes.fromhex(self.implementation_address[2:])
        self.chain.mine_empty(self.trailing_blocks)
        return ProxyDeployment(address=self.proxy_address, txn_hash=proxy_tx_hash)


@pytest.fixture
def fake_chain():
    chain = FakeChain()
    chain.mine_empty(5)
    return chain


@pytest.fixture
def proxy_deployer(fake_chain):
    return FakeProxyDeployer(fake_chain)


@pytest.fixture
def environment():
    return DeploymentEnvironment()


@pytest.fixture
def deployments_dir(tmp_path):
    return tmp_path / "deployments"
