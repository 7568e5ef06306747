"""Generic data access shared by the entity repositories."""

from typing import Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Single-table access bound to one session.

    Repositories never commit; the calling service owns the transaction.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: int) -> ModelType | None:
        query = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        return (await self.session.execute(query)).scalar_one_or_none()

    async def count(self) -> int:
        """Number of rows in the table."""
        query = select(func.count()).select_from(self.model)
        return (await self.session.execute(query)).scalar_one()

    def add(self, entity: ModelType) -> None:
        """Stage ``entity`` for insert; nothing is flushed."""
        self.session.add(entity)
