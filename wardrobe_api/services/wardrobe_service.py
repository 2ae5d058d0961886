"""Wardrobe Service: every wardrobe mutation, routed through the invariant guard.

Invariants:
    - Reserved-name decisions come from WardrobeInvariantGuard, never re-implemented here
    - Listing a user's wardrobes fails loudly (MissingDefaultWardrobeError) when
      "Your Dresses" is absent; nothing is repaired on the read path
    - Each mutation writes one activity entry (best-effort)
    - Reorder is all-or-nothing

Design Decisions:
    - source_feature is a parameter: signup creates the reserved wardrobes through
      the same path as a user-created wardrobe, but logs as AuthenticationService
"""

import logging
from uuid import UUID

from wardrobe_api.core.domain_types import (
    ActionStatus, ActionType, SourceFeature, TargetEntityType,
)
from wardrobe_api.core.errors import ResourceNotFoundError, WardrobeError
from wardrobe_api.core.wardrobe_guard import WARDROBE_GUARD, WardrobeInvariantGuard
from wardrobe_api.models.wardrobe import Wardrobe
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.repositories.wardrobe_repository import WardrobeRepository
from wardrobe_api.services.activity_logger import ActivityLogger

logger = logging.getLogger(__name__)


class WardrobeService:
    def __init__(
        self,
        wardrobes: WardrobeRepository,
        users: UserRepository,
        activity: ActivityLogger,
        guard: WardrobeInvariantGuard = WARDROBE_GUARD,
    ):
        self._wardrobes = wardrobes
        self._users = users
        self._activity = activity
        self._guard = guard

    async def _require_user(self, user_id: UUID) -> None:
        if await self._users.get(user_id) is None:
            raise ResourceNotFoundError("User", user_id)

    async def get_wardrobe(self, wardrobe_id: UUID) -> Wardrobe:
        wardrobe = await self._wardrobes.get(wardrobe_id)
        if wardrobe is None:
            raise ResourceNotFoundError("Wardrobe", wardrobe_id)
        return wardrobe

    async def list_all_wardrobes(self) -> list[Wardrobe]:
        return await self._wardrobes.list_all()

    async def list_for_user(self, user_id: UUID) -> list[Wardrobe]:
        await self._require_user(user_id)
        wardrobes = await self._wardrobes.list_by_user(user_id)
        self._guard.require_default(wardrobes, user_id)
        return wardrobes

    async def create_wardrobe(
        self,
        user_id: UUID,
        data: dict,
        *,
        source_feature: SourceFeature = SourceFeature.WARDROBE_MANAGEMENT,
        ip_address: str | None = None,
    ) -> Wardrobe:
        name = data["name"]
        try:
            await self._require_user(user_id)
            existing = await self._wardrobes.list_by_user(user_id)
            self._guard.check_create(name, user_id, [w.name for w in existing])
            wardrobe = await self._wardrobes.create(user_id, data)
        except WardrobeError as e:
            await self._activity.record(
                ActionType.CREATE_WARDROBE_FAILURE, ActionStatus.FAILURE,
                user_id=user_id, source_feature=source_feature,
                target_entity_type=TargetEntityType.WARDROBE,
                metadata={"name": name, "error": e.code, "ip": ip_address},
                ip_address=ip_address,
            )
            raise
        await self._activity.record(
            ActionType.CREATE_WARDROBE, ActionStatus.SUCCESS,
            user_id=user_id, source_feature=source_feature,
            target_entity_type=TargetEntityType.WARDROBE,
            target_entity_id=wardrobe.id,
            metadata={"name": name, "position": wardrobe.position},
            ip_address=ip_address,
        )
        return wardrobe

    async def update_wardrobe(
        self,
        wardrobe_id: UUID,
        changes: dict,
        *,
        source_feature: SourceFeature = SourceFeature.WARDROBE_MANAGEMENT,
        ip_address: str | None = None,
    ) -> Wardrobe:
        wardrobe = await self.get_wardrobe(wardrobe_id)
        siblings = await self._wardrobes.list_by_user(wardrobe.user_id)
        self._guard.check_update(
            wardrobe, changes, wardrobe.user_id,
            [w.name for w in siblings if w.id != wardrobe.id],
        )
        updated = await self._wardrobes.update(wardrobe_id, changes)
        if updated is None:
            raise ResourceNotFoundError("Wardrobe", wardrobe_id)
        await self._activity.record(
            ActionType.UPDATE_WARDROBE, ActionStatus.SUCCESS,
            user_id=wardrobe.user_id, source_feature=source_feature,
            target_entity_type=TargetEntityType.WARDROBE,
            target_entity_id=wardrobe_id,
            metadata={"updated_fields": sorted(changes)},
            ip_address=ip_address,
        )
        return updated

    async def delete_wardrobe(
        self, wardrobe_id: UUID, *, ip_address: str | None = None,
    ) -> Wardrobe:
        wardrobe = await self.get_wardrobe(wardrobe_id)
        self._guard.check_delete(wardrobe)
        if not await self._wardrobes.delete(wardrobe_id):
            raise ResourceNotFoundError("Wardrobe", wardrobe_id)
        await self._activity.record(
            ActionType.DELETE_WARDROBE, ActionStatus.SUCCESS,
            user_id=wardrobe.user_id,
            source_feature=SourceFeature.WARDROBE_MANAGEMENT,
            target_entity_type=TargetEntityType.WARDROBE,
            target_entity_id=wardrobe_id,
            metadata={"name": wardrobe.name},
            ip_address=ip_address,
        )
        return wardrobe

    async def reorder_wardrobes(
        self, user_id: UUID, ordered_ids: list[UUID],
        *, ip_address: str | None = None,
    ) -> list[Wardrobe]:
        await self._require_user(user_id)
        await self._wardrobes.reorder(user_id, ordered_ids)
        logger.info(
            f"Reordered {len(ordered_ids)} wardrobes",
            extra={"user_id": user_id},
        )
        await self._activity.record(
            ActionType.REORDER_WARDROBES, ActionStatus.SUCCESS,
            user_id=user_id,
            source_feature=SourceFeature.WARDROBE_MANAGEMENT,
            target_entity_type=TargetEntityType.USER,
            target_entity_id=user_id,
            metadata={"order": [str(w) for w in ordered_ids]},
            ip_address=ip_address,
        )
        return await self._wardrobes.list_by_user(user_id)
