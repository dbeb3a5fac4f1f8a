"""Network use cases over the in-memory repository."""

from decimal import Decimal
from uuid import uuid4

import pytest

from conftest import make_network_data
from db.repositories.memory import InMemoryNetworkRepository
from models import validation
from models.errors import ConflictError, NotFoundError, StorageError, ValidationError
from models.network import Network, NetworkPatch
from services.networks import (
    CreateNetwork,
    DeleteNetwork,
    GetActiveNetworks,
    GetNetworkById,
    PartialUpdateNetwork,
    UpdateNetwork,
)


class RacingRepository(InMemoryNetworkRepository):
    """Pre-check never sees the competing row, as when two requests interleave."""

    async def find_by_chain_id(self, chain_id):
        return None


class RecordingRepository(InMemoryNetworkRepository):
    def __init__(self):
        super().__init__()
        self.writes = 0

    async def insert(self, network):
        self.writes += 1
        return await super().insert(network)

    async def update(self, network):
        self.writes += 1
        return await super().update(network)


class BrokenRepository(InMemoryNetworkRepository):
    async def find_by_id(self, network_id):
        raise StorageError()


class TestCreateNetwork:
    @pytest.mark.asyncio
    async def test_creates_active_network(self, repository, network_data):
        network = await CreateNetwork(repository).execute(network_data)

        assert network.active is True
        assert str(network.id)
        assert network.created_at == network.updated_at
        assert await repository.find_by_id(network.id) == network

    @pytest.mark.asyncio
    async def test_duplicate_chain_id_conflicts(self, repository):
        await CreateNetwork(repository).execute(make_network_data(chain_id=137))

        with pytest.raises(ConflictError, match="chain_id 137 already exists"):
            await CreateNetwork(repository).execute(make_network_data(chain_id=137, name="Other"))

    @pytest.mark.asyncio
    async def test_duplicate_of_deleted_network_conflicts(self, repository):
        created = await CreateNetwork(repository).execute(make_network_data(chain_id=10))
        await DeleteNetwork(repository).execute(created.id)

        with pytest.raises(ConflictError):
            await CreateNetwork(repository).execute(make_network_data(chain_id=10))

    @pytest.mark.asyncio
    async def test_storage_layer_has_final_word_on_uniqueness(self):
        repository = RacingRepository()
        await CreateNetwork(repository).execute(make_network_data(chain_id=1))

        with pytest.raises(ConflictError):
            await CreateNetwork(repository).execute(make_network_data(chain_id=1))

    @pytest.mark.asyncio
    async def test_invalid_data_writes_nothing(self):
        repository = RecordingRepository()

        with pytest.raises(ValidationError):
            await CreateNetwork(repository).execute(make_network_data(rpc_url="mainnet.io"))

        assert repository.writes == 0
        assert await repository.list_active() == []


class TestValidationRunsOnce:
    @pytest.fixture
    def validated(self, monkeypatch):
        calls = []
        original = validation.validate_fields

        def recording(values):
            calls.append(sorted(values))
            original(values)

        monkeypatch.setattr(validation, "validate_fields", recording)
        return calls

    @pytest.mark.asyncio
    async def test_create(self, repository, network_data, validated):
        await CreateNetwork(repository).execute(network_data)
        assert len(validated) == 1

    @pytest.mark.asyncio
    async def test_update_and_patch(self, network_data, validated):
        network = Network.new(network_data)
        repository = InMemoryNetworkRepository([network])

        await UpdateNetwork(repository).execute(network.id, make_network_data(name="Renamed"))
        await PartialUpdateNetwork(repository).execute(network.id, NetworkPatch(test_net=True))

        assert validated == [sorted(network_data.as_dict()), ["test_net"]]


class TestGetNetworks:
    @pytest.mark.asyncio
    async def test_get_by_id_ignores_active_flag(self, repository, network_data):
        created = await CreateNetwork(repository).execute(network_data)
        await DeleteNetwork(repository).execute(created.id)

        found = await GetNetworkById(repository).execute(created.id)

        assert found.id == created.id
        assert found.active is False

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, repository):
        with pytest.raises(NotFoundError):
            await GetNetworkById(repository).execute(uuid4())

    @pytest.mark.asyncio
    async def test_storage_errors_surface_verbatim(self):
        with pytest.raises(StorageError):
            await GetNetworkById(BrokenRepository()).execute(uuid4())

    @pytest.mark.asyncio
    async def test_active_list_empty(self, repository):
        assert await GetActiveNetworks(repository).execute() == []

    @pytest.mark.asyncio
    async def test_active_list_excludes_inactive_in_creation_order(self, repository):
        create = CreateNetwork(repository)
        eth = await create.execute(make_network_data(chain_id=1, name="Ethereum"))
        bsc = await create.execute(make_network_data(chain_id=56, name="BSC"))
        polygon = await create.execute(make_network_data(chain_id=137, name="Polygon"))
        await DeleteNetwork(repository).execute(bsc.id)

        networks = await GetActiveNetworks(repository).execute()

        assert [n.id for n in networks] == [eth.id, polygon.id]
        assert all(n.active for n in networks)


class TestUpdateNetwork:
    @pytest.mark.asyncio
    async def test_replaces_fields_but_not_identity_or_active(self, repository, network_data):
        created = await CreateNetwork(repository).execute(network_data)
        await DeleteNetwork(repository).execute(created.id)

        updated = await UpdateNetwork(repository).execute(
            created.id,
            make_network_data(
                name="Updated Ethereum",
                rpc_url="https://new-rpc.infura.io",
                test_net=True,
                fee_multiplier=Decimal("2.0"),
            ),
        )

        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.active is False
        assert updated.name == "Updated Ethereum"
        assert updated.fee_multiplier == Decimal("2.0")
        assert updated.test_net is True

    @pytest.mark.asyncio
    async def test_not_found(self, repository, network_data):
        with pytest.raises(NotFoundError):
            await UpdateNetwork(repository).execute(uuid4(), network_data)

    @pytest.mark.asyncio
    async def test_chain_id_collision_conflicts(self, repository):
        create = CreateNetwork(repository)
        await create.execute(make_network_data(chain_id=1))
        second = await create.execute(make_network_data(chain_id=2))

        with pytest.raises(ConflictError):
            await UpdateNetwork(repository).execute(second.id, make_network_data(chain_id=1))

    @pytest.mark.asyncio
    async def test_keeping_own_chain_id_is_allowed(self, repository, network_data):
        created = await CreateNetwork(repository).execute(network_data)

        updated = await UpdateNetwork(repository).execute(
            created.id, make_network_data(name="Same chain")
        )

        assert updated.chain_id == created.chain_id
        assert updated.name == "Same chain"

    @pytest.mark.asyncio
    async def test_invalid_data_writes_nothing(self, network_data):
        repository = RecordingRepository()
        created = await CreateNetwork(repository).execute(network_data)

        with pytest.raises(ValidationError):
            await UpdateNetwork(repository).execute(
                created.id, make_network_data(default_signer_address="0xZZZ")
            )

        assert repository.writes == 1
        assert await repository.find_by_id(created.id) == created


class TestPartialUpdateNetwork:
    @pytest.mark.asyncio
    async def test_single_field(self, repository, network_data):
        created = await CreateNetwork(repository).execute(network_data)

        patched = await PartialUpdateNetwork(repository).execute(
            created.id, NetworkPatch(name="Patched Ethereum")
        )

        assert patched.name == "Patched Ethereum"
        assert patched.chain_id == created.chain_id
        assert patched.rpc_url == created.rpc_url

    @pytest.mark.asyncio
    async def test_empty_patch_changes_nothing_but_updated_at(self, repository, network_data):
        created = await CreateNetwork(repository).execute(network_data)

        patched = await PartialUpdateNetwork(repository).execute(created.id, NetworkPatch())

        assert patched.created_at == created.created_at
        assert patched.updated_at >= created.updated_at
        for field in ("id", "chain_id", "name", "rpc_url", "other_rpc_urls", "active"):
            assert getattr(patched, field) == getattr(created, field)

    @pytest.mark.asyncio
    async def test_chain_id_collision_conflicts(self, repository):
        create = CreateNetwork(repository)
        await create.execute(make_network_data(chain_id=1))
        second = await create.execute(make_network_data(chain_id=2))

        with pytest.raises(ConflictError):
            await PartialUpdateNetwork(repository).execute(second.id, NetworkPatch(chain_id=1))

    @pytest.mark.asyncio
    async def test_invalid_field_rejected(self, repository, network_data):
        created = await CreateNetwork(repository).execute(network_data)

        with pytest.raises(ValidationError) as exc_info:
            await PartialUpdateNetwork(repository).execute(
                created.id, NetworkPatch(other_rpc_urls=["https://x.io"] * 11)
            )
        assert exc_info.value.field == "other_rpc_urls"

    @pytest.mark.asyncio
    async def test_not_found(self, repository):
        with pytest.raises(NotFoundError):
            await PartialUpdateNetwork(repository).execute(uuid4(), NetworkPatch(name="x"))


class TestDeleteNetwork:
    @pytest.mark.asyncio
    async def test_soft_deletes(self, repository, network_data):
        created = await CreateNetwork(repository).execute(network_data)

        deleted = await DeleteNetwork(repository).execute(created.id)

        assert deleted.active is False
        assert deleted.id == created.id
        assert await repository.find_by_id(created.id) is not None

    @pytest.mark.asyncio
    async def test_is_idempotent(self, repository, network_data):
        created = await CreateNetwork(repository).execute(network_data)

        first = await DeleteNetwork(repository).execute(created.id)
        second = await DeleteNetwork(repository).execute(created.id)

        assert first.active is False
        assert second.active is False

    @pytest.mark.asyncio
    async def test_not_found(self, repository):
        with pytest.raises(NotFoundError):
            await DeleteNetwork(repository).execute(uuid4())


class TestLifecycleScenario:
    @pytest.mark.asyncio
    async def test_create_conflict_delete_reactivate(self, repository):
        created = await CreateNetwork(repository).execute(make_network_data(chain_id=1))

        with pytest.raises(ConflictError):
            await CreateNetwork(repository).execute(make_network_data(chain_id=1))

        deleted = await DeleteNetwork(repository).execute(created.id)
        assert deleted.active is False

        reactivated = await PartialUpdateNetwork(repository).execute(
            created.id, NetworkPatch(active=True)
        )

        assert reactivated.active is True
        assert reactivated.updated_at > deleted.updated_at
        assert reactivated.created_at == created.created_at
        assert [n.id for n in await GetActiveNetworks(repository).execute()] == [created.id]
