from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from utils.utils import next_timestamp, to_decimal, utc_now


@dataclass
class NetworkData:
    """Full candidate field set for create and full update."""

    chain_id: int
    name: str
    rpc_url: str
    block_explorer_url: str
    default_signer_address: str
    fee_multiplier: Decimal
    gas_limit_multiplier: Decimal
    test_net: bool = False
    other_rpc_urls: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class NetworkPatch:
    """Sparse update. ``None`` means the field was not supplied."""

    chain_id: int | None = None
    name: str | None = None
    rpc_url: str | None = None
    other_rpc_urls: list[str] | None = None
    test_net: bool | None = None
    block_explorer_url: str | None = None
    fee_multiplier: Decimal | None = None
    gas_limit_multiplier: Decimal | None = None
    default_signer_address: str | None = None
    active: bool | None = None

    def changes(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def _normalized(values: dict[str, Any]) -> dict[str, Any]:
    result = dict(values)
    for name in ("fee_multiplier", "gas_limit_multiplier"):
        if name in result:
            result[name] = to_decimal(result[name])
    if "other_rpc_urls" in result:
        result["other_rpc_urls"] = list(result["other_rpc_urls"])
    return result


@dataclass
class Network:
    """Registry entry. Transitions assume their input was already validated."""

    id: UUID
    chain_id: int
    name: str
    rpc_url: str
    other_rpc_urls: list[str]
    test_net: bool
    block_explorer_url: str
    fee_multiplier: Decimal
    gas_limit_multiplier: Decimal
    active: bool
    default_signer_address: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, data: NetworkData) -> "Network":
        now = utc_now()
        return cls(
            id=uuid4(),
            active=True,
            created_at=now,
            updated_at=now,
            **_normalized(data.as_dict()),
        )

    def with_data(self, data: NetworkData) -> "Network":
        """Full replace of every field except id, created_at and active."""
        return replace(
            self,
            updated_at=next_timestamp(self.updated_at),
            **_normalized(data.as_dict()),
        )

    def with_patch(self, patch: NetworkPatch) -> "Network":
        return replace(
            self,
            updated_at=next_timestamp(self.updated_at),
            **_normalized(patch.changes()),
        )

    def deactivate(self) -> "Network":
        return replace(self, active=False, updated_at=next_timestamp(self.updated_at))

    def __repr__(self) -> str:
        return (
            f"<Network(id={self.id}, name={self.name}, "
            f"chain_id={self.chain_id}, active={self.active})>"
        )
