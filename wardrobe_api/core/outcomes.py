"""Workflow Outcomes: tagged results for multi-store workflows.

Invariants:
    - Document creation status and link status are separate fields, never one bool
    - A LinkOutcome other than LINKED carries the PARTIAL_WORKFLOW_FAILURE warning
    - Stale links (link row whose document is gone) are reported, never raised

Design Decisions:
    - Dataclasses with to_dict(): routes serialize them directly into JSON bodies
"""

from dataclasses import dataclass, field
from uuid import UUID

from wardrobe_api.core.domain_types import LinkStatus

PARTIAL_WORKFLOW_FAILURE = "PARTIAL_WORKFLOW_FAILURE"


@dataclass
class BootstrapResult:
    """Ids produced by a completed signup."""
    user_id: UUID
    dresses_wardrobe_id: UUID
    outfits_wardrobe_id: UUID
    favorites_wardrobe_id: UUID

    def to_dict(self) -> dict:
        return {
            "user_id": str(self.user_id),
            "dresses_wardrobe_id": str(self.dresses_wardrobe_id),
            "outfits_wardrobe_id": str(self.outfits_wardrobe_id),
            "favorites_wardrobe_id": str(self.favorites_wardrobe_id),
        }


@dataclass
class LinkOutcome:
    """Result of the link steps that follow a successful document write."""
    status: LinkStatus
    linked_wardrobe_ids: list[UUID] = field(default_factory=list)
    failed_wardrobe_ids: list[UUID] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_attempts(
        cls, linked: list[UUID], failed: list[UUID], errors: list[str],
    ) -> "LinkOutcome":
        if not failed:
            status = LinkStatus.LINKED
        elif linked:
            status = LinkStatus.PARTIAL
        else:
            status = LinkStatus.FAILED
        return cls(
            status=status,
            linked_wardrobe_ids=linked,
            failed_wardrobe_ids=failed,
            error="; ".join(errors) or None,
        )

    @property
    def warning(self) -> str | None:
        return None if self.status is LinkStatus.LINKED else PARTIAL_WORKFLOW_FAILURE

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "linked_wardrobe_ids": [str(w) for w in self.linked_wardrobe_ids],
            "failed_wardrobe_ids": [str(w) for w in self.failed_wardrobe_ids],
            "warning": self.warning,
            "error": self.error,
        }


@dataclass
class CreateAndLinkResult:
    document: dict
    link: LinkOutcome


@dataclass
class DeletedDocument:
    """Document removed from the document store, plus how cleanup went."""
    document: dict
    links_removed: int | None
    cleanup_error: str | None = None

    @property
    def cleanup_complete(self) -> bool:
        return self.cleanup_error is None

    def to_dict(self) -> dict:
        return {
            "document": self.document,
            "links_removed": self.links_removed,
            "cleanup_complete": self.cleanup_complete,
            "warning": None if self.cleanup_complete else PARTIAL_WORKFLOW_FAILURE,
        }


@dataclass
class WardrobeContents:
    """Documents resolved from a wardrobe's link rows."""
    wardrobe_id: UUID
    documents: list[dict]
    stale_document_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "wardrobe_id": str(self.wardrobe_id),
            "documents": self.documents,
            "stale_document_ids": self.stale_document_ids,
        }
