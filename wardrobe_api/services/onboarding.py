"""Onboarding Service: signup bootstrap, full onboarding and onboarding updates.

Invariants:
    - bootstrap_user returns the user id and all three reserved wardrobe ids, or raises
    - Reserved wardrobes are created sequentially at positions 0, 1, 2
    - A wardrobe failure after the user row exists does NOT remove the user; a
      SIGNUP_WARDROBE_FAILURE entry records which wardrobes were created
    - Activity-log failures never abort onboarding
    - Onboarding dresses go through the same create_and_link workflow as any dress

Design Decisions:
    - bcrypt runs in a worker thread: hashing is CPU-bound and would stall the loop
    - Profile fields split from credentials here, not in the route: the service owns
      what "apply the rest of the profile" means
"""

import asyncio
import logging
from uuid import UUID

from wardrobe_api.core.domain_types import (
    ActionStatus, ActionType, SourceFeature, TargetEntityType,
)
from wardrobe_api.core.errors import ResourceNotFoundError, WardrobeError
from wardrobe_api.core.outcomes import BootstrapResult, CreateAndLinkResult
from wardrobe_api.core.wardrobe_guard import (
    DRESSES_WARDROBE, FAVORITES_WARDROBE, OUTFITS_WARDROBE,
    RESERVED_WARDROBE_NAMES,
)
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.services.activity_logger import ActivityLogger
from wardrobe_api.services.credentials import hash_password
from wardrobe_api.services.document_linking import DocumentLinkingService
from wardrobe_api.services.wardrobe_service import WardrobeService

logger = logging.getLogger(__name__)

_CREDENTIAL_FIELDS = ("email", "password", "name")


class OnboardingService:
    def __init__(
        self,
        users: UserRepository,
        wardrobes: WardrobeService,
        dresses: DocumentLinkingService,
        activity: ActivityLogger,
        bcrypt_rounds: int = 12,
    ):
        self._users = users
        self._wardrobes = wardrobes
        self._dresses = dresses
        self._activity = activity
        self._bcrypt_rounds = bcrypt_rounds

    async def bootstrap_user(
        self,
        email: str,
        password: str,
        name: str | None = None,
        *,
        ip_address: str | None = None,
    ) -> BootstrapResult:
        password_hash = await asyncio.to_thread(
            hash_password, password, self._bcrypt_rounds,
        )
        user = await self._users.create(
            email, password_hash, {"name": name} if name else {},
        )
        await self._activity.record(
            ActionType.SIGNUP_USER, ActionStatus.SUCCESS,
            user_id=user.id, source_feature=SourceFeature.AUTHENTICATION,
            target_entity_type=TargetEntityType.USER, target_entity_id=user.id,
            metadata={"ip": ip_address}, ip_address=ip_address,
        )

        created: dict[str, UUID] = {}
        for position, wardrobe_name in enumerate(RESERVED_WARDROBE_NAMES):
            try:
                wardrobe = await self._wardrobes.create_wardrobe(
                    user.id, {"name": wardrobe_name, "position": position},
                    source_feature=SourceFeature.AUTHENTICATION,
                    ip_address=ip_address,
                )
            except WardrobeError as e:
                logger.error(
                    f"Signup left user without '{wardrobe_name}': {e.message}",
                    extra={"user_id": user.id, "error_code": e.code},
                )
                await self._activity.record(
                    ActionType.SIGNUP_WARDROBE_FAILURE, ActionStatus.FAILURE,
                    user_id=user.id, source_feature=SourceFeature.AUTHENTICATION,
                    target_entity_type=TargetEntityType.USER,
                    target_entity_id=user.id,
                    metadata={
                        "error": e.message,
                        "failed_wardrobe": wardrobe_name,
                        "created_wardrobes": sorted(created),
                        "ip": ip_address,
                    },
                    ip_address=ip_address,
                )
                raise
            created[wardrobe_name] = wardrobe.id

        return BootstrapResult(
            user_id=user.id,
            dresses_wardrobe_id=created[DRESSES_WARDROBE],
            outfits_wardrobe_id=created[OUTFITS_WARDROBE],
            favorites_wardrobe_id=created[FAVORITES_WARDROBE],
        )

    async def complete_onboarding(
        self,
        user_details: dict,
        preferences: dict | None = None,
        dresses: list[dict] | None = None,
        *,
        ip_address: str | None = None,
    ) -> tuple[BootstrapResult, list[CreateAndLinkResult]]:
        """Signup, then the rest of the profile, then every initial dress."""
        try:
            result = await self.bootstrap_user(
                user_details["email"], user_details["password"],
                user_details.get("name"), ip_address=ip_address,
            )
            profile = {
                key: value for key, value in {**user_details, **(preferences or {})}.items()
                if key not in _CREDENTIAL_FIELDS and value is not None
            }
            if profile:
                await self._update_profile(
                    result.user_id, profile, SourceFeature.ONBOARDING, ip_address,
                )
            created = [
                await self._dresses.create_and_link(
                    result.user_id, dress, result.dresses_wardrobe_id,
                    source_feature=SourceFeature.ONBOARDING,
                    ip_address=ip_address,
                )
                for dress in dresses or []
            ]
        except WardrobeError as e:
            await self._activity.record(
                ActionType.ONBOARDING_FAILURE, ActionStatus.FAILURE,
                source_feature=SourceFeature.ONBOARDING,
                metadata={"error": e.message, "code": e.code, "ip": ip_address},
                ip_address=ip_address,
            )
            raise
        return result, created

    async def update_onboarding_details(
        self,
        user_id: UUID,
        wardrobe_id: UUID,
        user_details: dict | None = None,
        wardrobe_details: dict | None = None,
        dresses: list[dict] | None = None,
        *,
        ip_address: str | None = None,
    ) -> list[CreateAndLinkResult]:
        try:
            wardrobe = await self._wardrobes.get_wardrobe(wardrobe_id)
            if wardrobe.user_id != user_id:
                raise ResourceNotFoundError("Wardrobe", wardrobe_id)
            if user_details:
                await self._update_profile(
                    user_id, user_details, SourceFeature.ONBOARDING_UPDATE,
                    ip_address,
                )
            if wardrobe_details:
                await self._wardrobes.update_wardrobe(
                    wardrobe_id, wardrobe_details,
                    source_feature=SourceFeature.ONBOARDING_UPDATE,
                    ip_address=ip_address,
                )
            return [
                await self._dresses.create_and_link(
                    user_id, dress, wardrobe_id,
                    source_feature=SourceFeature.ONBOARDING_UPDATE,
                    ip_address=ip_address,
                )
                for dress in dresses or []
            ]
        except WardrobeError as e:
            await self._activity.record(
                ActionType.ONBOARDING_UPDATE_FAILURE, ActionStatus.FAILURE,
                user_id=user_id, source_feature=SourceFeature.ONBOARDING_UPDATE,
                metadata={"error": e.message, "code": e.code, "ip": ip_address},
                ip_address=ip_address,
            )
            raise

    async def _update_profile(
        self, user_id: UUID, profile: dict, feature: SourceFeature,
        ip_address: str | None,
    ) -> None:
        if await self._users.update(user_id, profile) is None:
            raise ResourceNotFoundError("User", user_id)
        await self._activity.record(
            ActionType.UPDATE_USER_PROFILE, ActionStatus.SUCCESS,
            user_id=user_id, source_feature=feature,
            target_entity_type=TargetEntityType.USER, target_entity_id=user_id,
            metadata={"updated_fields": sorted(profile), "ip": ip_address},
            ip_address=ip_address,
        )
