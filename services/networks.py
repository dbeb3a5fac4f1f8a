import logging
from uuid import UUID

from models.errors import ConflictError, NotFoundError
from models.network import Network, NetworkData, NetworkPatch
from models.repository import NetworkRepository
from models.validation import validate_network_data, validate_patch

module_logger = logging.getLogger(__name__)


class NetworkUseCase:
    def __init__(self, repository: NetworkRepository):
        self.repository = repository

    async def _load(self, network_id: UUID) -> Network:
        network = await self.repository.find_by_id(network_id)
        if network is None:
            module_logger.warning(f"Network {network_id} not found")
            raise NotFoundError(network_id)
        return network

    async def _ensure_chain_id_free(self, chain_id: int, network_id: UUID | None = None) -> None:
        # advisory only, the storage unique constraint has the final word
        existing = await self.repository.find_by_chain_id(chain_id)
        if existing is not None and existing.id != network_id:
            module_logger.warning(f"chain_id {chain_id} already taken by network {existing.id}")
            raise ConflictError(f"chain_id {chain_id} already exists")


class CreateNetwork(NetworkUseCase):
    async def execute(self, data: NetworkData) -> Network:
        module_logger.info(f"Creating network chain_id={data.chain_id} name={data.name!r}")

        validate_network_data(data)
        await self._ensure_chain_id_free(data.chain_id)

        created = await self.repository.insert(Network.new(data))

        module_logger.info(f"Network {created.id} created for chain_id={created.chain_id}")
        return created


class GetNetworkById(NetworkUseCase):
    async def execute(self, network_id: UUID) -> Network:
        return await self._load(network_id)


class GetActiveNetworks(NetworkUseCase):
    async def execute(self) -> list[Network]:
        return await self.repository.list_active()


class UpdateNetwork(NetworkUseCase):
    """PUT semantics: every field is replaced except id, created_at and active."""

    async def execute(self, network_id: UUID, data: NetworkData) -> Network:
        module_logger.info(f"Updating network {network_id}")

        existing = await self._load(network_id)
        validate_network_data(data)

        if data.chain_id != existing.chain_id:
            await self._ensure_chain_id_free(data.chain_id, network_id)

        updated = await self.repository.update(existing.with_data(data))

        module_logger.info(f"Network {network_id} updated")
        return updated


class PartialUpdateNetwork(NetworkUseCase):
    """PATCH semantics. The only way to flip ``active`` directly."""

    async def execute(self, network_id: UUID, patch: NetworkPatch) -> Network:
        module_logger.info(
            f"Partially updating network {network_id} fields={sorted(patch.changes())}"
        )

        existing = await self._load(network_id)
        validate_patch(patch)

        if patch.chain_id is not None and patch.chain_id != existing.chain_id:
            await self._ensure_chain_id_free(patch.chain_id, network_id)

        updated = await self.repository.update(existing.with_patch(patch))

        module_logger.info(f"Network {network_id} partially updated")
        return updated


class DeleteNetwork(NetworkUseCase):
    async def execute(self, network_id: UUID) -> Network:
        module_logger.info(f"Deleting network {network_id}")

        await self._load(network_id)
        deleted = await self.repository.soft_delete(network_id)

        module_logger.info(f"Network {network_id} deactivated")
        return deleted
