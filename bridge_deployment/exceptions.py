class ConfigurationError(ValueError):
    """Raised when the deployment configuration cannot be resolved or is invalid."""


class UnknownNetwork(ConfigurationError):
    """Raised when a network name is not in the registry."""


class InvalidChainId(ConfigurationError):
    """Raised when a chain id is not a positive integer."""


class InvalidFee(ConfigurationError):
    """Raised when a validator fee cannot be converted or is negative."""


class InvalidValidatorSet(ConfigurationError):
    """Raised when a validator set is empty, malformed or contains duplicates."""


class MissingEnvironmentVariable(ConfigurationError):
    """Raised when a required environment variable is not set."""


class ChainIdMismatch(ConfigurationError):
    """Raised when the connected chain is not the chain the deployment was resolved for."""

    def __init__(self, expected: int, actual: int, network_name: str):
        self.expected = expected
        self.actual = actual
        self.network_name = network_name
        super().__init__(
            f"Chain ID mismatch!\n"
            f"Expected: {expected}\n"
            f"Connected to: {actual}\n"
            f"Network: {network_name}"
        )


class DeploymentError(Exception):
    """Raised when the proxy deployment fails."""


class DiscoveryWarning(UserWarning):
    pass
