from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Sequence

from eth_typing import ChecksumAddress
from eth_utils import is_address, is_checksum_address, to_checksum_address

from bridge_deployment.exceptions import InvalidChainId, InvalidFee, InvalidValidatorSet


def is_valid_address(value: Any) -> bool:
    """Returns True if the value is a well-formed (and correctly checksummed, if mixed-case) address."""
    if not isinstance(value, str) or not is_address(value):
        return False
    hex_digits = value[2:]
    return hex_digits.islower() or hex_digits.isupper() or is_checksum_address(value)


def validate_chain_id(chain_id: Any) -> None:
    # bool is an int subclass
    if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id <= 0:
        raise InvalidChainId(f"Invalid chain ID: {chain_id}. Must be a positive integer.")


def validate_fee(fee: Any) -> None:
    """Checks that a fee expressed in minor units is a non-negative integer."""
    try:
        value = Decimal(str(fee))
    except InvalidOperation:
        raise InvalidFee(f"Invalid validator fee: {fee}. Must be an integer amount.")
    if not value.is_finite() or value != value.to_integral_value():
        raise InvalidFee(f"Invalid validator fee: {fee}. Must be an integer amount.")
    if value < 0:
        raise InvalidFee(f"Invalid validator fee: {fee}. Must be non-negative.")


def validate_validators(
    validators: Sequence[str], envvar: Optional[str] = None
) -> List[ChecksumAddress]:
    """
    Validates a validator set and returns it checksummed, in input order.

    Every offending entry is reported, not only the first one.
    """
    if not validators:
        message = "At least one validator is required."
        if envvar:
            message += (
                f"\nPlease set the {envvar} environment variable with comma-separated addresses."
                f"\nExample: {envvar}=0x123...,0x456...,0x789..."
            )
        raise InvalidValidatorSet(message)

    invalid_addresses = [address for address in validators if not is_valid_address(address)]
    if invalid_addresses:
        raise InvalidValidatorSet(
            f"Invalid validator addresses found: {', '.join(map(str, invalid_addresses))}"
        )

    seen, duplicates = set(), list()
    for address in validators:
        key = address.lower()
        if key in seen:
            duplicates.append(address)
        seen.add(key)
    if duplicates:
        raise InvalidValidatorSet(
            f"Duplicate validator addresses found: {', '.join(duplicates)}"
        )

    return [to_checksum_address(address) for address in validators]
