from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from db.repositories.network import SqlNetworkRepository
from models.repository import NetworkRepository


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield session


async def get_network_repository(
    session: AsyncSession = Depends(get_session),
) -> NetworkRepository:
    return SqlNetworkRepository(session)
