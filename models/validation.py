"""Field rules for network records.

Every rule raises ``ValidationError(field, reason)`` on the first violation and
returns ``None`` otherwise. They touch no storage, so use cases can run them
before any repository call.
"""
from typing import Any

from eth_utils import is_hex_address

from models.errors import ValidationError
from utils.utils import to_decimal

URL_SCHEMES = ("http://", "https://")
MAX_URL_LENGTH = 500
MAX_NAME_LENGTH = 100
MAX_OTHER_RPC_URLS = 10
# networks.chain_id is a 32-bit INTEGER column
MAX_CHAIN_ID = 2**31 - 1
# multipliers are stored as NUMERIC(10, 4)
MULTIPLIER_SCALE = 4
MULTIPLIER_LIMIT = 10**6


def validate_url(value: Any, field: str = "rpc_url") -> None:
    if not isinstance(value, str) or not value.startswith(URL_SCHEMES):
        raise ValidationError(field, "must start with http:// or https://")

    host = value.split("://", 1)[1]
    if not host or host.startswith("/"):
        raise ValidationError(field, "must include a valid host")

    if len(value) > MAX_URL_LENGTH:
        raise ValidationError(field, f"must be at most {MAX_URL_LENGTH} characters")


def validate_address(value: Any, field: str = "default_signer_address") -> None:
    # is_hex_address alone also accepts an unprefixed or "0X" address
    if not isinstance(value, str) or not value.startswith("0x") or not is_hex_address(value):
        raise ValidationError(field, "invalid address format")


def validate_multiplier(value: Any, field: str) -> None:
    amount = to_decimal(value)
    if amount is None or not amount.is_finite():
        raise ValidationError(field, "must be a finite number")
    if amount < 0:
        raise ValidationError(field, "must be >= 0")
    if amount >= MULTIPLIER_LIMIT:
        raise ValidationError(field, f"must be < {MULTIPLIER_LIMIT}")
    if amount.normalize().as_tuple().exponent < -MULTIPLIER_SCALE:
        raise ValidationError(field, f"at most {MULTIPLIER_SCALE} decimal places")


def validate_other_rpc_urls(values: Any) -> None:
    if not isinstance(values, (list, tuple)):
        raise ValidationError("other_rpc_urls", "must be a list of URLs")
    if len(values) > MAX_OTHER_RPC_URLS:
        raise ValidationError("other_rpc_urls", f"max {MAX_OTHER_RPC_URLS} items")

    for idx, url in enumerate(values):
        validate_url(url, f"other_rpc_urls[{idx}]")


def validate_chain_id(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError("chain_id", "must be a positive integer")
    if value > MAX_CHAIN_ID:
        raise ValidationError("chain_id", f"must be at most {MAX_CHAIN_ID}")


def validate_name(value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("name", "must not be empty")
    if len(value) > MAX_NAME_LENGTH:
        raise ValidationError("name", f"must be at most {MAX_NAME_LENGTH} characters")


def validate_test_net(value: Any) -> None:
    if not isinstance(value, bool):
        raise ValidationError("test_net", "must be a boolean")


def validate_active(value: Any) -> None:
    if not isinstance(value, bool):
        raise ValidationError("active", "must be a boolean")


FIELD_VALIDATORS = {
    "chain_id": validate_chain_id,
    "name": validate_name,
    "rpc_url": lambda value: validate_url(value, "rpc_url"),
    "other_rpc_urls": validate_other_rpc_urls,
    "test_net": validate_test_net,
    "block_explorer_url": lambda value: validate_url(value, "block_explorer_url"),
    "fee_multiplier": lambda value: validate_multiplier(value, "fee_multiplier"),
    "gas_limit_multiplier": lambda value: validate_multiplier(value, "gas_limit_multiplier"),
    "default_signer_address": lambda value: validate_address(value, "default_signer_address"),
    "active": validate_active,
}


def validate_fields(values: dict[str, Any]) -> None:
    for field, value in values.items():
        FIELD_VALIDATORS[field](value)


def validate_network_data(data) -> None:
    validate_fields(data.as_dict())


def validate_patch(patch) -> None:
    validate_fields(patch.changes())
