"""Generic CRUD Repository: create/get/list/update/delete for plain lookup tables.

Invariants:
    - A unique-key collision on create/update raises DuplicateResourceError (409)
      when the subclass names its unique key; otherwise it surfaces as StorageError
    - update() and delete() return None/False for a missing id, never raise
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from wardrobe_api.core.errors import DuplicateResourceError
from wardrobe_api.db.base import Base
from wardrobe_api.infrastructure.database import DatabaseSessionManager

ModelT = TypeVar("ModelT", bound=Base)


class CrudRepository(Generic[ModelT]):
    model: type[ModelT]
    resource_name: str = "Resource"
    unique_key: str | None = None

    def __init__(self, manager: DatabaseSessionManager):
        self._db = manager

    def _order_by(self) -> list:
        return [self.model.id]

    async def create(self, data: dict[str, Any]) -> ModelT:
        async with self._db.session() as db:
            row = self.model(**data)
            db.add(row)
            await self._commit(db, data)
            await db.refresh(row)
            return row

    async def get(self, row_id: UUID) -> ModelT | None:
        async with self._db.session() as db:
            return await db.get(self.model, row_id)

    async def list_all(self) -> list[ModelT]:
        async with self._db.session() as db:
            result = await db.execute(
                select(self.model).order_by(*self._order_by()),
            )
            return list(result.scalars().all())

    async def update(self, row_id: UUID, changes: dict[str, Any]) -> ModelT | None:
        async with self._db.session() as db:
            row = await db.get(self.model, row_id)
            if row is None:
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            await self._commit(db, changes)
            await db.refresh(row)
            return row

    async def delete(self, row_id: UUID) -> bool:
        async with self._db.session() as db:
            row = await db.get(self.model, row_id)
            if row is None:
                return False
            await db.delete(row)
            await db.commit()
            return True

    async def _commit(self, db, data: dict[str, Any]) -> None:
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            if self.unique_key and self.unique_key in data:
                raise DuplicateResourceError(
                    self.resource_name, str(data[self.unique_key]),
                )
            raise
