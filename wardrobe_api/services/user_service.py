"""User Service: profile reads/updates, soft delete and admin hard delete."""

import asyncio
from uuid import UUID

from wardrobe_api.core.domain_types import (
    ActionStatus, ActionType, SourceFeature, TargetEntityType,
)
from wardrobe_api.core.errors import ResourceNotFoundError
from wardrobe_api.models.user import User
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.services.activity_logger import ActivityLogger
from wardrobe_api.services.credentials import hash_password


class UserService:
    def __init__(
        self, users: UserRepository, activity: ActivityLogger,
        bcrypt_rounds: int = 12,
    ):
        self._users = users
        self._activity = activity
        self._bcrypt_rounds = bcrypt_rounds

    async def get_user(self, user_id: UUID) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user

    async def list_users(self) -> list[User]:
        return await self._users.list_active()

    async def update_user(
        self, user_id: UUID, changes: dict, *, ip_address: str | None = None,
    ) -> User:
        changes = dict(changes)
        # Password is re-hashed, never stored or logged as given
        password = changes.pop("password", None)
        if password is not None:
            changes["password_hash"] = await asyncio.to_thread(
                hash_password, password, self._bcrypt_rounds,
            )
        user = await self._users.update(user_id, changes)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        await self._activity.record(
            ActionType.UPDATE_USER_PROFILE, ActionStatus.SUCCESS,
            user_id=user_id, source_feature=SourceFeature.USER_MANAGEMENT,
            target_entity_type=TargetEntityType.USER, target_entity_id=user_id,
            metadata={"updated_fields": sorted(changes)},
            ip_address=ip_address,
        )
        return user

    async def delete_user(
        self, user_id: UUID, *, ip_address: str | None = None,
    ) -> None:
        if not await self._users.soft_delete(user_id):
            raise ResourceNotFoundError("User", user_id)
        await self._activity.record(
            ActionType.DELETE_USER, ActionStatus.SUCCESS,
            user_id=user_id, source_feature=SourceFeature.USER_MANAGEMENT,
            target_entity_type=TargetEntityType.USER, target_entity_id=user_id,
            ip_address=ip_address,
        )

    async def hard_delete_user(
        self, user_id: UUID, *, ip_address: str | None = None,
    ) -> None:
        if not await self._users.hard_delete(user_id):
            raise ResourceNotFoundError("User", user_id)
        await self._activity.record(
            ActionType.HARD_DELETE_USER, ActionStatus.SUCCESS,
            user_id=user_id, source_feature=SourceFeature.USER_MANAGEMENT,
            target_entity_type=TargetEntityType.USER, target_entity_id=user_id,
            ip_address=ip_address,
        )
