from abc import ABC, abstractmethod
from uuid import UUID

from models.network import Network


class NetworkRepository(ABC):
    """Persistence contract consumed by the network use cases.

    Implementations must hand out detached copies, report a duplicate
    ``chain_id`` on write as ``ConflictError`` and wrap driver faults in
    ``StorageError``.
    """

    @abstractmethod
    async def find_by_id(self, network_id: UUID) -> Network | None:
        ...

    @abstractmethod
    async def find_by_chain_id(self, chain_id: int) -> Network | None:
        ...

    @abstractmethod
    async def list_active(self) -> list[Network]:
        """Active networks, oldest first."""

    @abstractmethod
    async def insert(self, network: Network) -> Network:
        ...

    @abstractmethod
    async def update(self, network: Network) -> Network:
        """Replace the mutable fields of an existing network.

        Raises ``NotFoundError`` when no network has ``network.id``.
        """

    @abstractmethod
    async def soft_delete(self, network_id: UUID) -> Network:
        """Mark a network inactive. Deleting an inactive network is not an error."""
