"""Link Repository: one link table (wardrobe_dresses or wardrobe_outfits).

Invariants:
    - link() adds at most one row per (wardrobe, document) pair; an existing pair
      returns None and adds nothing
    - A unique-constraint race is resolved by re-reading: if the pair now exists the
      call reports it as existing, any other integrity failure becomes StorageError
    - unlink() and unlink_all() are idempotent and report what they removed

Design Decisions:
    - Parameterized by model class so dresses and outfits share one implementation;
      both models expose the document column as the `document_id` attribute
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from wardrobe_api.infrastructure.database import DatabaseSessionManager
from wardrobe_api.models.wardrobe_dress import WardrobeDress
from wardrobe_api.models.wardrobe_outfit import WardrobeOutfit

LinkModel = type[WardrobeDress] | type[WardrobeOutfit]


class LinkRepository:
    def __init__(self, manager: DatabaseSessionManager, model: LinkModel):
        self._db = manager
        self._model = model

    def _pair(self, wardrobe_id: UUID, document_id: str):
        return select(self._model).where(
            self._model.wardrobe_id == wardrobe_id,
            self._model.document_id == document_id,
        )

    async def exists(self, wardrobe_id: UUID, document_id: str) -> bool:
        async with self._db.session() as db:
            result = await db.execute(self._pair(wardrobe_id, document_id))
            return result.scalar_one_or_none() is not None

    async def link(self, wardrobe_id: UUID, document_id: str):
        """Insert the pair; None if it was already there."""
        async with self._db.session() as db:
            existing = await db.execute(self._pair(wardrobe_id, document_id))
            if existing.scalar_one_or_none() is not None:
                return None
            row = self._model(wardrobe_id=wardrobe_id, document_id=document_id)
            db.add(row)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                again = await db.execute(self._pair(wardrobe_id, document_id))
                if again.scalar_one_or_none() is not None:
                    return None
                raise
            await db.refresh(row)
            return row

    async def unlink(self, wardrobe_id: UUID, document_id: str) -> bool:
        async with self._db.session() as db:
            result = await db.execute(
                delete(self._model).where(
                    self._model.wardrobe_id == wardrobe_id,
                    self._model.document_id == document_id,
                ),
            )
            await db.commit()
            return result.rowcount > 0

    async def unlink_all(self, document_id: str) -> int:
        async with self._db.session() as db:
            result = await db.execute(
                delete(self._model).where(self._model.document_id == document_id),
            )
            await db.commit()
            return result.rowcount

    async def document_ids_for_wardrobe(self, wardrobe_id: UUID) -> list[str]:
        async with self._db.session() as db:
            result = await db.execute(
                select(self._model.document_id)
                .where(self._model.wardrobe_id == wardrobe_id)
                .order_by(self._model.created_at),
            )
            return list(result.scalars().all())

    async def wardrobe_ids_for_document(self, document_id: str) -> list[UUID]:
        async with self._db.session() as db:
            result = await db.execute(
                select(self._model.wardrobe_id)
                .where(self._model.document_id == document_id),
            )
            return list(result.scalars().all())
