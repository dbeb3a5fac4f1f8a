import asyncio
import logging
from contextlib import asynccontextmanager
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db import NetworkRecord
from db.repositories.base import BaseRepository
from models.errors import ConflictError, NotFoundError, StorageError
from models.network import Network
from models.repository import NetworkRepository

module_logger = logging.getLogger(__name__)

CHAIN_ID_CONSTRAINTS = ("uq_networks_chain_id", "networks.chain_id")


def is_chain_id_violation(error: IntegrityError) -> bool:
    message = str(error.orig)
    return any(name in message for name in CHAIN_ID_CONSTRAINTS)


class SqlNetworkRepository(BaseRepository[NetworkRecord], NetworkRepository):
    """Network storage on an async SQLAlchemy session.

    Every mutating call is committed as its own transaction, so the unique
    constraint on ``chain_id`` is checked before the call returns.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, NetworkRecord)

    @asynccontextmanager
    async def _guard(self, action: str, chain_id: int | None = None):
        try:
            yield
        except IntegrityError as e:
            await self.session.rollback()
            if chain_id is not None and is_chain_id_violation(e):
                module_logger.warning(f"Unique violation on chain_id {chain_id} while {action}")
                raise ConflictError(f"chain_id {chain_id} already exists") from e
            module_logger.error(f"Integrity error while {action}: {e}")
            raise StorageError() from e
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            await self.session.rollback()
            module_logger.error(f"Storage error while {action}: {e}")
            raise StorageError() from e

    async def find_by_id(self, network_id: UUID) -> Network | None:
        async with self._guard("loading network"):
            record = await self.get_by_id(network_id)
        return record.to_entity() if record else None

    async def find_by_chain_id(self, chain_id: int) -> Network | None:
        async with self._guard("loading network by chain_id"):
            record = await self._query_one(chain_id=chain_id)
        return record.to_entity() if record else None

    async def list_active(self) -> list[Network]:
        async with self._guard("listing active networks"):
            records = await self._query_all(
                {"active": True}, order_by=("created_at", "id")
            )
        return [record.to_entity() for record in records]

    async def insert(self, network: Network) -> Network:
        async with self._guard("inserting network", network.chain_id):
            record = NetworkRecord.from_entity(network)
            self.session.add(record)
            await self.session.flush()
            created = record.to_entity()
            await self.session.commit()
        return created

    async def update(self, network: Network) -> Network:
        async with self._guard("updating network", network.chain_id):
            record = await self.get_by_id(network.id)
            if record is None:
                raise NotFoundError(network.id)

            record.apply(network)
            await self.session.flush()
            updated = record.to_entity()
            await self.session.commit()
        return updated

    async def soft_delete(self, network_id: UUID) -> Network:
        async with self._guard("deleting network"):
            record = await self.get_by_id(network_id)
            if record is None:
                raise NotFoundError(network_id)

            record.active = False
            record.touch()
            await self.session.flush()
            deleted = record.to_entity()
            await self.session.commit()
        return deleted
