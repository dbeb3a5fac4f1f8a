from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.network import Network, NetworkData, NetworkPatch


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NetworkRequest(CamelModel):
    chain_id: int
    name: str
    rpc_url: str
    other_rpc_urls: list[str] = Field(default_factory=list)
    test_net: bool
    block_explorer_url: str
    fee_multiplier: Decimal
    gas_limit_multiplier: Decimal
    default_signer_address: str

    def to_data(self) -> NetworkData:
        return NetworkData(**self.model_dump())


class CreateNetworkRequest(NetworkRequest):
    pass


class UpdateNetworkRequest(NetworkRequest):
    """PUT body. ``active`` is not accepted here."""


class PatchNetworkRequest(CamelModel):
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

    def to_patch(self) -> NetworkPatch:
        return NetworkPatch(**self.model_dump(exclude_unset=True))


class NetworkResponse(CamelModel):
    id: UUID
    chain_id: int
    name: str
    rpc_url: str
    other_rpc_urls: list[str]
    test_net: bool
    block_explorer_url: str
    fee_multiplier: float
    gas_limit_multiplier: float
    active: bool
    default_signer_address: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, network: Network) -> "NetworkResponse":
        return cls(
            id=network.id,
            chain_id=network.chain_id,
            name=network.name,
            rpc_url=network.rpc_url,
            other_rpc_urls=network.other_rpc_urls,
            test_net=network.test_net,
            block_explorer_url=network.block_explorer_url,
            fee_multiplier=float(network.fee_multiplier),
            gas_limit_multiplier=float(network.gas_limit_multiplier),
            active=network.active,
            default_signer_address=network.default_signer_address,
            created_at=network.created_at,
            updated_at=network.updated_at,
        )
