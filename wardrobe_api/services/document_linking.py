"""Document Linking Service: dress/outfit documents and their wardrobe links across two stores.

Invariants:
    - create_and_link writes the document first, then links it to the kind's default
      wardrobe and, when given and different, to the target wardrobe
    - Link failures after the document exists never roll it back; they are reported
      in LinkOutcome (partial / failed) next to the created document
    - Exactly one activity entry per create_and_link call: SUCCESS, PARTIAL_SUCCESS or FAILURE
    - Links in "Your Dresses" / "Your Outfits" are only removed by delete_document_cascade
    - Deleting a document removes it first, then every link row pointing at it;
      a cleanup failure is reported, never raised
    - Reading a wardrobe tolerates links whose document is gone (stale ids reported)

Design Decisions:
    - One service parameterized by DocumentKind: dresses and outfits share every
      workflow, only the default wardrobe and activity vocabulary differ (KindProfile)
    - Target wardrobe is validated (exists, same owner) BEFORE the document is written,
      so the only partial state left behind is a missing link
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from wardrobe_api.core.domain_types import (
    ActionStatus, ActionType, DocumentKind, LinkStatus, SourceFeature,
    TargetEntityType,
)
from wardrobe_api.core.errors import (
    DuplicateLinkError, ErrorContext, MissingDefaultWardrobeError,
    ResourceNotFoundError, WardrobeError,
)
from wardrobe_api.core.outcomes import (
    CreateAndLinkResult, DeletedDocument, LinkOutcome, WardrobeContents,
)
from wardrobe_api.core.repository_protocols import (
    DocumentRepository, LinkRepository,
)
from wardrobe_api.core.wardrobe_guard import WARDROBE_GUARD, WardrobeInvariantGuard
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.repositories.wardrobe_repository import WardrobeRepository
from wardrobe_api.services.activity_logger import ActivityLogger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KindProfile:
    """Per-kind vocabulary for logging and errors."""
    label: str
    add_action: ActionType
    update_action: ActionType
    delete_action: ActionType
    link_action: ActionType
    unlink_action: ActionType
    source_feature: SourceFeature
    entity_type: TargetEntityType
    link_entity_type: TargetEntityType


KIND_PROFILES = {
    DocumentKind.DRESS: KindProfile(
        label="Dress",
        add_action=ActionType.ADD_DRESS,
        update_action=ActionType.UPDATE_DRESS,
        delete_action=ActionType.DELETE_DRESS,
        link_action=ActionType.LINK_DRESS_TO_WARDROBE,
        unlink_action=ActionType.REMOVE_DRESS_FROM_WARDROBE,
        source_feature=SourceFeature.DRESS_MANAGEMENT,
        entity_type=TargetEntityType.DRESS,
        link_entity_type=TargetEntityType.WARDROBE_DRESS_LINK,
    ),
    DocumentKind.OUTFIT: KindProfile(
        label="Outfit",
        add_action=ActionType.ADD_OUTFIT,
        update_action=ActionType.UPDATE_OUTFIT,
        delete_action=ActionType.DELETE_OUTFIT,
        link_action=ActionType.LINK_OUTFIT_TO_WARDROBE,
        unlink_action=ActionType.REMOVE_OUTFIT_FROM_WARDROBE,
        source_feature=SourceFeature.OUTFIT_MANAGEMENT,
        entity_type=TargetEntityType.OUTFIT,
        link_entity_type=TargetEntityType.WARDROBE_OUTFIT_LINK,
    ),
}


def _owner_of(document: dict) -> UUID | None:
    try:
        return UUID(str(document.get("user_id")))
    except ValueError:
        return None


class DocumentLinkingService:
    def __init__(
        self,
        kind: DocumentKind,
        documents: DocumentRepository,
        links: LinkRepository,
        wardrobes: WardrobeRepository,
        users: UserRepository,
        activity: ActivityLogger,
        guard: WardrobeInvariantGuard = WARDROBE_GUARD,
    ):
        self.kind = kind
        self.profile = KIND_PROFILES[kind]
        self.documents = documents
        self._links = links
        self._wardrobes = wardrobes
        self._users = users
        self._activity = activity
        self._guard = guard

    # ─── Create ──────────────────────────────────────────────────

    async def create_and_link(
        self,
        owner_user_id: UUID,
        document_data: dict,
        target_wardrobe_id: UUID | None = None,
        *,
        source_feature: SourceFeature | None = None,
        ip_address: str | None = None,
    ) -> CreateAndLinkResult:
        feature = source_feature or self.profile.source_feature

        async def fail(error: WardrobeError, step: str) -> None:
            await self._activity.record(
                self.profile.add_action, ActionStatus.FAILURE,
                user_id=owner_user_id, source_feature=feature,
                target_entity_type=self.profile.entity_type,
                metadata={"step": step, "error": error.code, "ip": ip_address},
                ip_address=ip_address,
            )

        try:
            if await self._users.get(owner_user_id) is None:
                raise ResourceNotFoundError("User", owner_user_id)
            default = await self._resolve_default(owner_user_id)
            target = await self._resolve_target(
                owner_user_id, target_wardrobe_id, default.id,
            )
        except WardrobeError as e:
            await fail(e, "resolve_wardrobes")
            raise

        try:
            document = await self.documents.create(owner_user_id, document_data)
        except WardrobeError as e:
            await fail(e, "create_document")
            raise

        wardrobe_ids = [default.id] + ([target.id] if target else [])
        outcome = await self._link_all(wardrobe_ids, document["id"])

        await self._activity.record(
            self.profile.add_action,
            (
                ActionStatus.SUCCESS if outcome.status is LinkStatus.LINKED
                else ActionStatus.PARTIAL_SUCCESS
            ),
            user_id=owner_user_id, source_feature=feature,
            target_entity_type=self.profile.entity_type,
            target_entity_id=document["id"],
            metadata={
                "name": document.get("name"),
                "link_status": outcome.status.value,
                "linked_wardrobe_ids": [str(w) for w in outcome.linked_wardrobe_ids],
                "failed_wardrobe_ids": [str(w) for w in outcome.failed_wardrobe_ids],
                "ip": ip_address,
            },
            ip_address=ip_address,
        )
        return CreateAndLinkResult(document=document, link=outcome)

    async def _resolve_default(self, owner_user_id: UUID):
        name = self._guard.default_name_for(self.kind)
        default = await self._wardrobes.find_by_name(owner_user_id, name)
        if default is None:
            raise MissingDefaultWardrobeError(owner_user_id, name)
        return default

    async def _resolve_target(
        self, owner_user_id: UUID, target_wardrobe_id: UUID | None, default_id: UUID,
    ):
        if target_wardrobe_id is None or target_wardrobe_id == default_id:
            return None
        target = await self._wardrobes.get(target_wardrobe_id)
        if target is None or target.user_id != owner_user_id:
            raise ResourceNotFoundError(
                "Wardrobe", target_wardrobe_id,
                ErrorContext(user_id=str(owner_user_id)),
            )
        return target

    async def _link_all(
        self, wardrobe_ids: list[UUID], document_id: str,
    ) -> LinkOutcome:
        linked, failed, errors = [], [], []
        for wardrobe_id in wardrobe_ids:
            try:
                await self._links.link(wardrobe_id, document_id)
                linked.append(wardrobe_id)
            except Exception as e:
                logger.error(
                    f"Link step failed after document write: {e}",
                    extra={
                        "wardrobe_id": wardrobe_id, "document_id": document_id,
                        "error_code": getattr(e, "code", None),
                    },
                )
                failed.append(wardrobe_id)
                errors.append(str(e))
        return LinkOutcome.from_attempts(linked, failed, errors)

    # ─── Link / unlink ───────────────────────────────────────────

    async def link_document(
        self, wardrobe_id: UUID, document_id: str,
        *, ip_address: str | None = None,
    ):
        wardrobe = await self._wardrobes.get(wardrobe_id)
        if wardrobe is None:
            raise ResourceNotFoundError("Wardrobe", wardrobe_id)
        await self.get_document(document_id)
        row = await self._links.link(wardrobe_id, document_id)
        if row is None:
            raise DuplicateLinkError(self.kind.value, wardrobe_id, document_id)
        await self._activity.record(
            self.profile.link_action, ActionStatus.SUCCESS,
            user_id=wardrobe.user_id,
            source_feature=self.profile.source_feature,
            target_entity_type=self.profile.link_entity_type,
            target_entity_id=row.id,
            metadata={"wardrobe_id": str(wardrobe_id), "document_id": document_id},
            ip_address=ip_address,
        )
        return row

    async def unlink_document(
        self, wardrobe_id: UUID, document_id: str,
        *, ip_address: str | None = None,
    ) -> bool:
        """False when no such link existed."""
        wardrobe = await self._wardrobes.get(wardrobe_id)
        if wardrobe is None:
            raise ResourceNotFoundError("Wardrobe", wardrobe_id)
        self._guard.check_unlink(wardrobe)
        removed = await self._links.unlink(wardrobe_id, document_id)
        if removed:
            await self._activity.record(
                self.profile.unlink_action, ActionStatus.SUCCESS,
                user_id=wardrobe.user_id,
                source_feature=self.profile.source_feature,
                target_entity_type=self.profile.link_entity_type,
                target_entity_id=document_id,
                metadata={"wardrobe_id": str(wardrobe_id)},
                ip_address=ip_address,
            )
        return removed

    # ─── Delete ──────────────────────────────────────────────────

    async def delete_document_cascade(
        self, document_id: str, *, ip_address: str | None = None,
    ) -> DeletedDocument:
        document = await self.documents.delete(document_id)
        if document is None:
            raise ResourceNotFoundError(self.profile.label, document_id)

        links_removed, cleanup_error = None, None
        try:
            links_removed = await self._links.unlink_all(document_id)
        except Exception as e:
            cleanup_error = str(e)
            logger.error(
                f"Link cleanup failed; stale links left behind: {e}",
                extra={"document_id": document_id},
            )

        await self._activity.record(
            self.profile.delete_action,
            ActionStatus.SUCCESS if cleanup_error is None else ActionStatus.PARTIAL_SUCCESS,
            user_id=_owner_of(document),
            source_feature=self.profile.source_feature,
            target_entity_type=self.profile.entity_type,
            target_entity_id=document_id,
            metadata={
                "name": document.get("name"),
                "links_removed": links_removed,
                "cleanup_error": cleanup_error,
            },
            ip_address=ip_address,
        )
        return DeletedDocument(
            document=document, links_removed=links_removed,
            cleanup_error=cleanup_error,
        )

    # ─── Reads / update ──────────────────────────────────────────

    async def get_document(self, document_id: str) -> dict:
        document = await self.documents.find_by_id(document_id)
        if document is None:
            raise ResourceNotFoundError(self.profile.label, document_id)
        return document

    async def list_all(self) -> list[dict]:
        return await self.documents.find_all()

    async def list_for_user(self, user_id: UUID) -> list[dict]:
        return await self.documents.find_by_user(user_id)

    async def list_wardrobe_contents(self, wardrobe_id: UUID) -> WardrobeContents:
        if await self._wardrobes.get(wardrobe_id) is None:
            raise ResourceNotFoundError("Wardrobe", wardrobe_id)
        ids = await self._links.document_ids_for_wardrobe(wardrobe_id)
        found = {d["id"]: d for d in await self.documents.find_by_ids(ids)}
        stale = [i for i in ids if i not in found]
        if stale:
            logger.warning(
                f"{len(stale)} stale {self.kind.value} link(s) in wardrobe",
                extra={"wardrobe_id": wardrobe_id},
            )
        return WardrobeContents(
            wardrobe_id=wardrobe_id,
            documents=[found[i] for i in ids if i in found],
            stale_document_ids=stale,
        )

    async def update_document(
        self, document_id: str, changes: dict,
        *, ip_address: str | None = None,
    ) -> dict:
        document = await self.documents.update(document_id, changes)
        if document is None:
            raise ResourceNotFoundError(self.profile.label, document_id)
        await self._activity.record(
            self.profile.update_action, ActionStatus.SUCCESS,
            user_id=_owner_of(document),
            source_feature=self.profile.source_feature,
            target_entity_type=self.profile.entity_type,
            target_entity_id=document_id,
            metadata={"updated_fields": sorted(changes)},
            ip_address=ip_address,
        )
        return document

    async def wardrobes_containing(self, document_id: str) -> list[UUID]:
        await self.get_document(document_id)
        return await self._links.wardrobe_ids_for_document(document_id)
