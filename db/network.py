from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB

from models.network import Network

from .base import Base
from .mixins import TimestampMixin

MUTABLE_FIELDS = (
    "chain_id",
    "name",
    "rpc_url",
    "other_rpc_urls",
    "test_net",
    "block_explorer_url",
    "fee_multiplier",
    "gas_limit_multiplier",
    "active",
    "default_signer_address",
    "updated_at",
)


class NetworkRecord(Base, TimestampMixin):
    __tablename__ = "networks"

    id = Column(
        Uuid,
        primary_key=True,
    )
    chain_id = Column(
        Integer,
        nullable=False,
    )
    name = Column(
        String(100),
        nullable=False,
    )
    rpc_url = Column(
        String(500),
        nullable=False,
    )
    other_rpc_urls = Column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=list,
    )
    test_net = Column(
        Boolean,
        default=False,
        nullable=False,
    )
    block_explorer_url = Column(
        String(500),
        nullable=False,
    )
    fee_multiplier = Column(
        Numeric(10, 4),
        nullable=False,
        default=1,
    )
    gas_limit_multiplier = Column(
        Numeric(10, 4),
        nullable=False,
        default=1,
    )
    active = Column(
        Boolean,
        default=True,
        nullable=False,
    )
    default_signer_address = Column(
        String(42),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("chain_id", name="uq_networks_chain_id"),
        Index("idx_networks_active", "active"),
        Index("idx_networks_name", "name"),
        CheckConstraint("chain_id >= 1", name="chk_chain_id_positive"),
        CheckConstraint("fee_multiplier >= 0", name="chk_fee_multiplier_positive"),
        CheckConstraint(
            "gas_limit_multiplier >= 0", name="chk_gas_limit_multiplier_positive"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<NetworkRecord(id={self.id}, name={self.name}, "
            f"chain_id={self.chain_id}, active={self.active})>"
        )

    @classmethod
    def from_entity(cls, network: Network) -> "NetworkRecord":
        return cls(
            id=network.id,
            created_at=network.created_at,
            **{name: getattr(network, name) for name in MUTABLE_FIELDS},
        )

    def apply(self, network: Network) -> None:
        for name in MUTABLE_FIELDS:
            setattr(self, name, getattr(network, name))

    def to_entity(self) -> Network:
        return Network(
            id=self.id,
            chain_id=self.chain_id,
            name=self.name,
            rpc_url=self.rpc_url,
            other_rpc_urls=list(self.other_rpc_urls or []),
            test_net=self.test_net,
            block_explorer_url=self.block_explorer_url,
            fee_multiplier=self.fee_multiplier,
            gas_limit_multiplier=self.gas_limit_multiplier,
            active=self.active,
            default_signer_address=self.default_signer_address,
            created_at=self.created_at_utc,
            updated_at=self.updated_at_utc,
        )
