"""
Generic async repository (Data Access Layer).

Implements the Repository pattern on top of SQLAlchemy's ``AsyncSession``.
Concrete repositories inherit from ``BaseRepository[T]`` and add
entity-specific queries.

- Every write commits on its own, so a failed row in a bulk import never
  takes earlier rows with it.
- **IntegrityError** and other statement failures are NOT caught here.
  Services roll back and translate them into domain errors; the import
  pipeline records them per row.
- **OperationalError** (connection loss, deadlock) IS caught here: the
  session is rolled back and the error re-raised, so a broken transaction
  never leaks into the next statement on the same session.
"""

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic CRUD repository for SQLModel entities.

    Parameters
    ----------
    model : Type[ModelType]
        The SQLModel class this repository manages.
    db : AsyncSession
        An active async database session (injected per-request).
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def dialect_name(self) -> str:
        """Name of the bound database dialect (``postgresql`` or ``sqlite``)."""
        return self.db.get_bind().dialect.name

    async def _commit(self, action: str) -> None:
        try:
            await self.db.commit()
        except OperationalError:
            await self.db.rollback()
            logger.error("OperationalError during %s for %s", action, self.model.__name__)
            raise

    async def get(self, id: Any) -> Optional[ModelType]:
        """Fetch a single entity by primary key.  Returns ``None`` if not found."""
        return await self.db.get(self.model, id)

    async def create(self, obj_in: ModelType) -> ModelType:
        """Insert a new entity, commit, and return the refreshed instance."""
        self.db.add(obj_in)
        await self._commit("create")
        await self.db.refresh(obj_in)
        return obj_in

    async def update(self, entity: ModelType) -> ModelType:
        """
        Persist changes to an entity.

        The caller mutates the entity's attributes first; we merge, commit,
        then refresh so the returned object reflects DB-side values.
        """
        merged = await self.db.merge(entity)
        await self._commit("update")
        await self.db.refresh(merged)
        return merged

    async def delete(self, id: Any) -> bool:
        """
        Delete an entity by primary key.

        Returns ``True`` if the entity was found and deleted, ``False`` if
        it did not exist.  Dependent rows go with it through the foreign
        keys' ``ON DELETE CASCADE``.
        """
        entity = await self.db.get(self.model, id)
        if entity is None:
            return False
        await self.db.delete(entity)
        await self._commit("delete")
        return True
