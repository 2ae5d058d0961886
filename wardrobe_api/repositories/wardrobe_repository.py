"""Wardrobe Repository: wardrobe rows, ordering and the all-or-nothing reorder.

Invariants:
    - list_by_user orders by position, then creation time
    - New wardrobes without an explicit position go after the user's last one
    - delete removes the wardrobe's link rows with it (explicit, not only FK cascade)
    - reorder runs every position update in ONE transaction; an id that is missing
      or owned by someone else rolls the whole batch back

Design Decisions:
    - Reorder updates are sequential: an AsyncSession admits one in-flight statement
"""

from uuid import UUID

from sqlalchemy import delete, func, select, update

from wardrobe_api.core.errors import ResourceNotFoundError, ErrorContext
from wardrobe_api.infrastructure.database import DatabaseSessionManager
from wardrobe_api.models.wardrobe import Wardrobe
from wardrobe_api.models.wardrobe_dress import WardrobeDress
from wardrobe_api.models.wardrobe_outfit import WardrobeOutfit


class WardrobeRepository:
    def __init__(self, manager: DatabaseSessionManager):
        self._db = manager

    async def create(self, user_id: UUID, data: dict) -> Wardrobe:
        async with self._db.session() as db:
            fields = dict(data)
            if fields.get("position") is None:
                fields["position"] = await self._next_position(db, user_id)
            wardrobe = Wardrobe(user_id=user_id, **fields)
            db.add(wardrobe)
            await db.commit()
            await db.refresh(wardrobe)
            return wardrobe

    async def _next_position(self, db, user_id: UUID) -> int:
        result = await db.execute(
            select(func.max(Wardrobe.position)).where(Wardrobe.user_id == user_id),
        )
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def get(self, wardrobe_id: UUID) -> Wardrobe | None:
        async with self._db.session() as db:
            return await db.get(Wardrobe, wardrobe_id)

    async def list_all(self) -> list[Wardrobe]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Wardrobe).order_by(Wardrobe.created_at.desc()),
            )
            return list(result.scalars().all())

    async def list_by_user(self, user_id: UUID) -> list[Wardrobe]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Wardrobe)
                .where(Wardrobe.user_id == user_id)
                .order_by(Wardrobe.position, Wardrobe.created_at),
            )
            return list(result.scalars().all())

    async def find_by_name(self, user_id: UUID, name: str) -> Wardrobe | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(Wardrobe)
                .where(Wardrobe.user_id == user_id, Wardrobe.name == name)
                .order_by(Wardrobe.created_at)
                .limit(1),
            )
            return result.scalar_one_or_none()

    async def update(self, wardrobe_id: UUID, changes: dict) -> Wardrobe | None:
        async with self._db.session() as db:
            wardrobe = await db.get(Wardrobe, wardrobe_id)
            if wardrobe is None:
                return None
            for key, value in changes.items():
                setattr(wardrobe, key, value)
            await db.commit()
            await db.refresh(wardrobe)
            return wardrobe

    async def delete(self, wardrobe_id: UUID) -> bool:
        async with self._db.session() as db:
            wardrobe = await db.get(Wardrobe, wardrobe_id)
            if wardrobe is None:
                return False
            await db.execute(
                delete(WardrobeDress).where(WardrobeDress.wardrobe_id == wardrobe_id),
            )
            await db.execute(
                delete(WardrobeOutfit).where(WardrobeOutfit.wardrobe_id == wardrobe_id),
            )
            await db.delete(wardrobe)
            await db.commit()
            return True

    async def reorder(self, user_id: UUID, ordered_ids: list[UUID]) -> None:
        """Set position = index for each id; all rows or none."""
        async with self._db.session() as db:
            for position, wardrobe_id in enumerate(ordered_ids):
                result = await db.execute(
                    update(Wardrobe)
                    .where(Wardrobe.id == wardrobe_id, Wardrobe.user_id == user_id)
                    .values(position=position),
                )
                if result.rowcount != 1:
                    raise ResourceNotFoundError(
                        "Wardrobe", wardrobe_id,
                        ErrorContext(user_id=str(user_id)),
                    )
            await db.commit()
