from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from handlers.dependencies import get_network_repository
from models.dtos import (
    CreateNetworkRequest,
    NetworkResponse,
    PatchNetworkRequest,
    UpdateNetworkRequest,
)
from models.repository import NetworkRepository
from services.networks import (
    CreateNetwork,
    DeleteNetwork,
    GetActiveNetworks,
    GetNetworkById,
    PartialUpdateNetwork,
    UpdateNetwork,
)

router = APIRouter(prefix="/networks", tags=["networks"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=NetworkResponse)
async def create_network(
    payload: CreateNetworkRequest,
    repository: NetworkRepository = Depends(get_network_repository),
) -> NetworkResponse:
    network = await CreateNetwork(repository).execute(payload.to_data())
    return NetworkResponse.from_entity(network)


@router.get("", response_model=list[NetworkResponse])
async def get_active_networks(
    repository: NetworkRepository = Depends(get_network_repository),
) -> list[NetworkResponse]:
    networks = await GetActiveNetworks(repository).execute()
    return [NetworkResponse.from_entity(n) for n in networks]


@router.get("/{network_id}", response_model=NetworkResponse)
async def get_network_by_id(
    network_id: UUID,
    repository: NetworkRepository = Depends(get_network_repository),
) -> NetworkResponse:
    network = await GetNetworkById(repository).execute(network_id)
    return NetworkResponse.from_entity(network)


@router.put("/{network_id}", response_model=NetworkResponse)
async def update_network(
    network_id: UUID,
    payload: UpdateNetworkRequest,
    repository: NetworkRepository = Depends(get_network_repository),
) -> NetworkResponse:
    network = await UpdateNetwork(repository).execute(network_id, payload.to_data())
    return NetworkResponse.from_entity(network)


@router.patch("/{network_id}", response_model=NetworkResponse)
async def partial_update_network(
    network_id: UUID,
    payload: PatchNetworkRequest,
    repository: NetworkRepository = Depends(get_network_repository),
) -> NetworkResponse:
    network = await PartialUpdateNetwork(repository).execute(network_id, payload.to_patch())
    return NetworkResponse.from_entity(network)


@router.delete("/{network_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_network(
    network_id: UUID,
    repository: NetworkRepository = Depends(get_network_repository),
) -> Response:
    await DeleteNetwork(repository).execute(network_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
