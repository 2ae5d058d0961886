"""Activity Log Repository: append, read and purge user_actions_log rows."""

from uuid import UUID

from sqlalchemy import delete, select

from wardrobe_api.infrastructure.database import DatabaseSessionManager
from wardrobe_api.models.activity_log import ActivityLog


class ActivityLogRepository:
    def __init__(self, manager: DatabaseSessionManager):
        self._db = manager

    async def create(self, entry: dict) -> ActivityLog:
        async with self._db.session() as db:
            row = ActivityLog(**entry)
            db.add(row)
            await db.commit()
            await db.refresh(row)
            return row

    async def list_all(self) -> list[ActivityLog]:
        async with self._db.session() as db:
            result = await db.execute(
                select(ActivityLog).order_by(ActivityLog.created_at.desc()),
            )
            return list(result.scalars().all())

    async def get(self, log_id: UUID) -> ActivityLog | None:
        async with self._db.session() as db:
            return await db.get(ActivityLog, log_id)

    async def list_by_user(self, user_id: UUID) -> list[ActivityLog]:
        async with self._db.session() as db:
            result = await db.execute(
                select(ActivityLog)
                .where(ActivityLog.user_id == user_id)
                .order_by(ActivityLog.created_at.desc()),
            )
            return list(result.scalars().all())

    async def delete(self, log_id: UUID) -> bool:
        async with self._db.session() as db:
            row = await db.get(ActivityLog, log_id)
            if row is None:
                return False
            await db.delete(row)
            await db.commit()
            return True

    async def purge(self) -> int:
        async with self._db.session() as db:
            result = await db.execute(delete(ActivityLog))
            await db.commit()
            return result.rowcount
