"""User Repository: account rows, soft delete and the admin hard delete.

Invariants:
    - Duplicate active email surfaces as DuplicateUserError, on create and on update;
      any other integrity failure surfaces as StorageError
    - get() hides soft-deleted users unless include_inactive=True
    - hard_delete removes the user's links, wardrobes and billing rows in one
      transaction, so it also holds on SQLite where FKs are not enforced
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from wardrobe_api.core.errors import DuplicateUserError
from wardrobe_api.infrastructure.database import DatabaseSessionManager
from wardrobe_api.models.credit_transaction import CreditTransaction
from wardrobe_api.models.payment import Payment
from wardrobe_api.models.subscription import Subscription
from wardrobe_api.models.user import User
from wardrobe_api.models.wardrobe import Wardrobe
from wardrobe_api.models.wardrobe_dress import WardrobeDress
from wardrobe_api.models.wardrobe_outfit import WardrobeOutfit


class UserRepository:
    def __init__(self, manager: DatabaseSessionManager):
        self._db = manager

    async def create(
        self, email: str, password_hash: str, profile: dict | None = None,
    ) -> User:
        async with self._db.session() as db:
            user = User(email=email, password_hash=password_hash, **(profile or {}))
            db.add(user)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                if await self._email_taken(db, email):
                    raise DuplicateUserError(email) from e
                raise
            await db.refresh(user)
            return user

    async def _email_taken(
        self, db, email: str, exclude_id: UUID | None = None,
    ) -> bool:
        query = select(User.id).where(User.email == email, User.is_active.is_(True))
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        return (await db.execute(query)).first() is not None

    async def get(self, user_id: UUID, include_inactive: bool = False) -> User | None:
        async with self._db.session() as db:
            user = await db.get(User, user_id)
            if user is None or (not user.is_active and not include_inactive):
                return None
            return user

    async def get_by_email(self, email: str) -> User | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(User).where(User.email == email, User.is_active.is_(True)),
            )
            return result.scalar_one_or_none()

    async def list_active(self) -> list[User]:
        async with self._db.session() as db:
            result = await db.execute(
                select(User)
                .where(User.is_active.is_(True))
                .order_by(User.created_at.desc()),
            )
            return list(result.scalars().all())

    async def update(self, user_id: UUID, changes: dict) -> User | None:
        async with self._db.session() as db:
            user = await db.get(User, user_id)
            if user is None or not user.is_active:
                return None
            current_email = user.email
            for key, value in changes.items():
                setattr(user, key, value)
            try:
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                email = changes.get("email", current_email)
                if await self._email_taken(db, email, exclude_id=user_id):
                    raise DuplicateUserError(email) from e
                raise
            await db.refresh(user)
            return user

    async def soft_delete(self, user_id: UUID) -> bool:
        async with self._db.session() as db:
            user = await db.get(User, user_id)
            if user is None or not user.is_active:
                return False
            user.is_active = False
            await db.commit()
            return True

    async def hard_delete(self, user_id: UUID) -> bool:
        async with self._db.session() as db:
            user = await db.get(User, user_id)
            if user is None:
                return False
            wardrobe_ids = select(Wardrobe.id).where(Wardrobe.user_id == user_id)
            await db.execute(
                delete(WardrobeDress).where(WardrobeDress.wardrobe_id.in_(wardrobe_ids)),
            )
            await db.execute(
                delete(WardrobeOutfit).where(WardrobeOutfit.wardrobe_id.in_(wardrobe_ids)),
            )
            await db.execute(delete(Wardrobe).where(Wardrobe.user_id == user_id))
            await db.execute(
                delete(CreditTransaction).where(CreditTransaction.user_id == user_id),
            )
            await db.execute(delete(Payment).where(Payment.user_id == user_id))
            await db.execute(delete(Subscription).where(Subscription.user_id == user_id))
            await db.delete(user)
            await db.commit()
            return True
