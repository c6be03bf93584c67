import os
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence

from web3 import Web3

from bridge_deployment.constants import (
    CHAIN_ID_ENVVAR,
    DEPLOYER_PASSPHRASE_ENVVAR,
    FEE_DECIMALS,
    FEE_UNIT,
    LOCAL,
    PRIVATE_KEY_ENVVAR,
    VALIDATOR_FEE_ENVVAR,
    VALIDATORS_ENVVARS,
)
from bridge_deployment.exceptions import InvalidChainId, InvalidFee, MissingEnvironmentVariable
from bridge_deployment.networks import NetworkConfig
from bridge_deployment.validation import validate_chain_id, validate_fee

ENVIRONMENT_VARIABLES = (
    CHAIN_ID_ENVVAR,
    VALIDATOR_FEE_ENVVAR,
    *VALIDATORS_ENVVARS.values(),
    PRIVATE_KEY_ENVVAR,
    DEPLOYER_PASSPHRASE_ENVVAR,
)


class DeploymentEnvironment:
    """
    Snapshot of the environment variables that influence a deployment.

    This is the only object that reads the process environment; everything
    downstream receives it explicitly. Empty values are treated as unset.
    """

    def __init__(self, variables: Optional[Mapping[str, str]] = None):
        variables = variables or dict()
        self._variables: Dict[str, str] = {
            name: value
            for name, value in variables.items()
            if name in ENVIRONMENT_VARIABLES and value
        }

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "DeploymentEnvironment":
        if environ is None:
            environ = os.environ
        return cls(variables=environ)

    def get(self, name: str) -> Optional[str]:
        return self._variables.get(name)

    def require(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise MissingEnvironmentVariable(f"{name} environment variable is not set.")
        return value

    @property
    def chain_id(self) -> Optional[str]:
        return self.get(CHAIN_ID_ENVVAR)

    @property
    def validator_fee(self) -> Optional[str]:
        return self.get(VALIDATOR_FEE_ENVVAR)

    def validators_for(self, network_class: str) -> Optional[str]:
        """Returns the raw comma-separated validator override for a network class, if any."""
        envvar = VALIDATORS_ENVVARS.get(network_class)
        if envvar is None:
            return None
        return self.get(envvar)


class ResolvedDeploymentConfig(NamedTuple):
    chain_id: int
    fee_minor_units: str
    fee_major_units: str
    validators: List[str]
    network_name: str
    network_class: str
    development_fallback_applied: bool = False


def parse_chain_id(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidChainId(f"Invalid {CHAIN_ID_ENVVAR} environment variable: {value}")


def to_minor_units(fee_major_units: str) -> str:
    """
    Converts a fee in major units (e.g. "5" CAM) into minor units (wei).

    The conversion is exact: amounts with more fractional digits than the
    native currency supports are rejected rather than rounded.
    """
    invalid = InvalidFee(
        f"Invalid {VALIDATOR_FEE_ENVVAR}: {fee_major_units}. "
        f'Must be a valid native currency amount (e.g., "5" for 5 CAM).'
    )
    try:
        amount = Decimal(fee_major_units.strip())
    except (AttributeError, InvalidOperation):
        raise invalid
    if not amount.is_finite() or amount.normalize().as_tuple().exponent < -FEE_DECIMALS:
        raise invalid
    if amount < 0:
        raise InvalidFee(f"Invalid validator fee: {fee_major_units}. Must be non-negative.")

    try:
        fee_minor_units = Web3.to_wei(fee_major_units.strip(), FEE_UNIT)
    except (ValueError, TypeError, ArithmeticError):
        raise invalid

    validate_fee(fee_minor_units)
    return str(fee_minor_units)


def split_validators(value: str) -> List[str]:
    return [address.strip() for address in value.split(",") if address.strip()]


def resolve_deployment_config(
    network_config: NetworkConfig,
    network_name: str,
    network_class: str,
    default_validators: Sequence[str],
    environment: DeploymentEnvironment,
) -> ResolvedDeploymentConfig:
    """
    Merges registry values with environment overrides (environment wins).

    Chain id and fee are validated here; the validator set is validated
    separately so that an intentionally empty set can be told apart from an
    invalid one.
    """
    chain_id = network_config.chain_id
    if environment.chain_id is not None:
        chain_id = parse_chain_id(environment.chain_id)
    validate_chain_id(chain_id)

    fee_major_units = network_config.default_fee
    if environment.validator_fee is not None:
        fee_major_units = environment.validator_fee.strip()
    fee_minor_units = to_minor_units(fee_major_units)

    validators = list(default_validators)
    validators_override = environment.validators_for(network_class)
    if validators_override is not None:
        validators = split_validators(validators_override)

    return ResolvedDeploymentConfig(
        chain_id=chain_id,
        fee_minor_units=fee_minor_units,
        fee_major_units=fee_major_units,
        validators=validators,
        network_name=network_name,
        network_class=network_class,
    )


def needs_development_fallback(config: ResolvedDeploymentConfig) -> bool:
    return config.network_class == LOCAL and not config.validators


def apply_development_fallback(
    config: ResolvedDeploymentConfig, test_accounts: Sequence[str]
) -> ResolvedDeploymentConfig:
    """Substitutes test accounts for an empty validator set on local networks only."""
    if not needs_development_fallback(config):
        return config
    return config._replace(validators=list(test_accounts), development_fallback_applied=True)
