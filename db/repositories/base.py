from typing import Any, TypeVar, Generic, Type
from collections.abc import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc, asc
from db import Base


ModelType = TypeVar("ModelType", bound=Base)

class BaseRepository(Generic[ModelType]):

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        self.session = session
        self.model = model

    async def _query_all(
        self,
        filters: dict[str, Any] | None = None,
        order_by: Sequence[str] = ("id",),
        ascending: bool = True
    ) -> Sequence[ModelType]:
        query = select(self.model)

        if filters:
            for field, value in filters.items():
                if value is not None:
                    column = getattr(self.model, field)
                    query = query.where(column == value)

        direction = asc if ascending else desc
        query = query.order_by(
            *(direction(getattr(self.model, name, self.model.id)) for name in order_by)
        )

        result = await self.session.execute(query)
        return result.scalars().all()

    async def _query_one(self, **filters: Any) -> ModelType | None:
        query = select(self.model)
        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_id(self, id: Any) -> ModelType | None:
        return await self._query_one(id=id)
