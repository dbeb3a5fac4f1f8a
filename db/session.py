from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from config import Settings
from db import Base


def create_engine(settings: Settings) -> AsyncEngine:
    url = settings.DATABASE_URL

    if url.startswith("sqlite"):
        # one shared connection, otherwise every checkout sees an empty :memory: db
        return create_async_engine(
            url,
            echo=settings.DB_ECHO,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    connect_args = {}
    if url.startswith("postgresql+asyncpg"):
        connect_args["command_timeout"] = settings.DB_COMMAND_TIMEOUT_SECONDS

    return create_async_engine(
        url,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
