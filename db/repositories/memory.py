from copy import deepcopy
from uuid import UUID

from models.errors import ConflictError, NotFoundError
from models.network import Network
from models.repository import NetworkRepository


class InMemoryNetworkRepository(NetworkRepository):
    """Dict-backed repository for tests and local runs.

    Holds the same uniqueness rule as the ``networks`` table, so callers see a
    ``ConflictError`` from ``insert``/``update`` even without a pre-check.
    """

    def __init__(self, networks: list[Network] | None = None):
        self._networks: dict[UUID, Network] = {}
        for network in networks or []:
            self._networks[network.id] = deepcopy(network)

    def _chain_id_taken(self, chain_id: int, network_id: UUID) -> bool:
        return any(
            n.chain_id == chain_id and n.id != network_id
            for n in self._networks.values()
        )

    async def find_by_id(self, network_id: UUID) -> Network | None:
        network = self._networks.get(network_id)
        return deepcopy(network) if network else None

    async def find_by_chain_id(self, chain_id: int) -> Network | None:
        for network in self._networks.values():
            if network.chain_id == chain_id:
                return deepcopy(network)
        return None

    async def list_active(self) -> list[Network]:
        active = [n for n in self._networks.values() if n.active]
        active.sort(key=lambda n: (n.created_at, str(n.id)))
        return deepcopy(active)

    async def insert(self, network: Network) -> Network:
        if network.id in self._networks:
            raise ConflictError(f"network {network.id} already exists")
        if self._chain_id_taken(network.chain_id, network.id):
            raise ConflictError(f"chain_id {network.chain_id} already exists")

        self._networks[network.id] = deepcopy(network)
        return deepcopy(network)

    async def update(self, network: Network) -> Network:
        if network.id not in self._networks:
            raise NotFoundError(network.id)
        if self._chain_id_taken(network.chain_id, network.id):
            raise ConflictError(f"chain_id {network.chain_id} already exists")

        self._networks[network.id] = deepcopy(network)
        return deepcopy(network)

    async def soft_delete(self, network_id: UUID) -> Network:
        network = self._networks.get(network_id)
        if network is None:
            raise NotFoundError(network_id)

        self._networks[network_id] = network.deactivate()
        return deepcopy(self._networks[network_id])
