"""Boundary Protocols: contracts between orchestration services and storage.

Invariants:
    - Services depend on these Protocols, never on concrete repository classes
    - Implementations live in repositories/ and are wired in services/wiring.py

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy; test
      doubles are plain classes or AsyncMock
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from typing import Protocol
from uuid import UUID

from wardrobe_api.core.domain_types import DocumentId, UserId, WardrobeId


class WardrobeLike(Protocol):
    """Structural contract for wardrobe rows handed to the guard and services."""
    id: UUID
    user_id: UUID
    name: str
    position: int


class UserLike(Protocol):
    id: UUID
    email: str
    is_active: bool


class WardrobeRepository(Protocol):
    """Contract for wardrobe persistence."""
    async def create(self, user_id: UserId, data: dict) -> WardrobeLike: ...
    async def get(self, wardrobe_id: WardrobeId) -> WardrobeLike | None: ...
    async def list_all(self) -> list[WardrobeLike]: ...
    async def list_by_user(self, user_id: UserId) -> list[WardrobeLike]: ...
    async def find_by_name(
        self, user_id: UserId, name: str,
    ) -> WardrobeLike | None: ...
    async def update(
        self, wardrobe_id: WardrobeId, changes: dict,
    ) -> WardrobeLike | None: ...
    async def delete(self, wardrobe_id: WardrobeId) -> bool: ...
    async def reorder(
        self, user_id: UserId, ordered_ids: list[WardrobeId],
    ) -> None: ...


class LinkRepository(Protocol):
    """Contract for one link table (wardrobe_dresses or wardrobe_outfits)."""
    async def exists(
        self, wardrobe_id: WardrobeId, document_id: DocumentId,
    ) -> bool: ...
    async def link(
        self, wardrobe_id: WardrobeId, document_id: DocumentId,
    ) -> dict | None: ...
    async def unlink(
        self, wardrobe_id: WardrobeId, document_id: DocumentId,
    ) -> bool: ...
    async def unlink_all(self, document_id: DocumentId) -> int: ...
    async def document_ids_for_wardrobe(
        self, wardrobe_id: WardrobeId,
    ) -> list[str]: ...
    async def wardrobe_ids_for_document(
        self, document_id: DocumentId,
    ) -> list[UUID]: ...


class DocumentRepository(Protocol):
    """Contract for one document collection (dresses or outfits)."""
    async def create(self, owner_id: UserId, data: dict) -> dict: ...
    async def find_by_id(self, document_id: DocumentId) -> dict | None: ...
    async def find_by_user(self, owner_id: UserId) -> list[dict]: ...
    async def find_by_ids(self, document_ids: list[str]) -> list[dict]: ...
    async def update(
        self, document_id: DocumentId, changes: dict,
    ) -> dict | None: ...
    async def delete(self, document_id: DocumentId) -> dict | None: ...


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def create(
        self, email: str, password_hash: str, profile: dict,
    ) -> UserLike: ...
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def update(self, user_id: UserId, changes: dict) -> UserLike | None: ...


class ActivityLogRepository(Protocol):
    """Contract for the append-only activity log."""
    async def create(self, entry: dict) -> dict: ...
