from pathlib import Path

#
# Filesystem
#

PROJECT_ROOT = Path(__file__).parent.parent
DEPLOYMENTS_DIR = PROJECT_ROOT / "deployments"

STANDARD_DEPLOYMENT_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}

#
# Network classes
#

LOCAL = "local"
TESTNET = "testnet"
MAINNET = "mainnet"

#
# Environment
#

CHAIN_ID_ENVVAR = "CHAIN_ID"
VALIDATOR_FEE_ENVVAR = "VALIDATOR_FEE"
PRIVATE_KEY_ENVVAR = "PRIVATE_KEY"
DEPLOYER_PASSPHRASE_ENVVAR = "DEPLOYER_PASSPHRASE"

VALIDATORS_ENVVARS = {
    TESTNET: "TESTNET_VALIDATORS",
    MAINNET: "MAINNET_VALIDATORS",
    LOCAL: "LOCAL_VALIDATORS",
}

#
# Validators
#

DEFAULT_VALIDATORS = {
    TESTNET: [
        "0x291981335f930c2a06499fa5fd6e380ea5d59d46",  # Camino Network Foundation
        "0xb2bd61961963448210a5f3c2994ce935f7daae2c",  # Chain4Travel
        "0xb53aded16afe08d14e5c95dbdba4e6b30d9f8319",  # DeVest
    ],
    MAINNET: [],
    LOCAL: [],
}

# number of test accounts used as validators on local networks when none are configured
LOCAL_FALLBACK_VALIDATOR_COUNT = 3

#
# Contracts
#

BRIDGE_CONTRACT_NAME = "DvBridge"
BRIDGE_INITIALIZER = "initialize"
PROXY_KIND = "uups"

OZ_DEPENDENCY_NAME = "openzeppelin"
OZ_DEPENDENCY_VERSION = "5.0.0"

# EIP1967 Implementation slot - https://eips.ethereum.org/EIPS/eip-1967#logic-contract-address
EIP1967_IMPLEMENTATION_SLOT = 0x360894A13BA1A3210667C828492DB98DCA3E2076CC3735A920A3CA505D382BBC

# all supported chains use 18 decimals for their native currency
FEE_DECIMALS = 18
FEE_UNIT = "ether"

#
# Implementation discovery
#

DISCOVERY_WINDOW = 100

DEPLOYER_ACCOUNT_ALIAS = "bridge-deployer"
