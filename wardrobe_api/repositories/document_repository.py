"""Document Repository: dress and outfit documents in the document store.

Invariants:
    - Every query is scoped to one collection (the repository's DocumentKind)
    - Returned documents are plain dicts carrying id, user_id, created_at, updated_at
    - update() merges changes into the stored body and bumps updated_at
    - delete() returns the removed document, or None when nothing matched

Design Decisions:
    - Nested filters (outfits by dress component) run in Python over the owner's
      or collection's documents: the JSON column is dialect-neutral
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select

from wardrobe_api.core.domain_types import DocumentKind
from wardrobe_api.infrastructure.database import DatabaseSessionManager
from wardrobe_api.models.document import StoredDocument

_RESERVED_KEYS = ("id", "user_id", "created_at", "updated_at")


def _clean(data: dict) -> dict:
    return {k: v for k, v in data.items() if k not in _RESERVED_KEYS}


class DocumentRepository:
    def __init__(self, manager: DatabaseSessionManager, kind: DocumentKind):
        self._db = manager
        self.kind = kind

    def _query(self):
        return select(StoredDocument).where(
            StoredDocument.collection == self.kind.value,
        )

    async def create(self, owner_id: UUID, data: dict) -> dict:
        async with self._db.session() as db:
            doc = StoredDocument(
                collection=self.kind.value,
                owner_id=str(owner_id),
                body=_clean(data),
            )
            db.add(doc)
            await db.commit()
            await db.refresh(doc)
            return doc.to_dict()

    async def find_by_id(self, document_id: str) -> dict | None:
        async with self._db.session() as db:
            doc = await self._get(db, document_id)
            return doc.to_dict() if doc else None

    async def find_by_user(self, owner_id: UUID) -> list[dict]:
        async with self._db.session() as db:
            result = await db.execute(
                self._query()
                .where(StoredDocument.owner_id == str(owner_id))
                .order_by(StoredDocument.created_at.desc()),
            )
            return [doc.to_dict() for doc in result.scalars().all()]

    async def find_by_ids(self, document_ids: list[str]) -> list[dict]:
        if not document_ids:
            return []
        async with self._db.session() as db:
            result = await db.execute(
                self._query().where(StoredDocument.id.in_(document_ids)),
            )
            return [doc.to_dict() for doc in result.scalars().all()]

    async def find_all(self) -> list[dict]:
        async with self._db.session() as db:
            result = await db.execute(
                self._query().order_by(StoredDocument.created_at.desc()),
            )
            return [doc.to_dict() for doc in result.scalars().all()]

    async def update(self, document_id: str, changes: dict) -> dict | None:
        async with self._db.session() as db:
            doc = await self._get(db, document_id)
            if doc is None:
                return None
            doc.body = {**doc.body, **_clean(changes)}
            doc.updated_at = datetime.now(timezone.utc)
            await db.commit()
            await db.refresh(doc)
            return doc.to_dict()

    async def delete(self, document_id: str) -> dict | None:
        async with self._db.session() as db:
            doc = await self._get(db, document_id)
            if doc is None:
                return None
            removed = doc.to_dict()
            await db.delete(doc)
            await db.commit()
            return removed

    async def _get(self, db, document_id: str) -> StoredDocument | None:
        result = await db.execute(
            self._query().where(StoredDocument.id == document_id),
        )
        return result.scalar_one_or_none()


class OutfitRepository(DocumentRepository):
    """Outfit collection, plus lookups through dress_components."""

    def __init__(self, manager: DatabaseSessionManager):
        super().__init__(manager, DocumentKind.OUTFIT)

    async def find_by_dress_component(
        self, dress_id: str, owner_id: UUID | None = None,
    ) -> list[dict]:
        candidates = (
            await self.find_by_user(owner_id) if owner_id is not None
            else await self.find_all()
        )
        return [
            outfit for outfit in candidates
            if any(
                component.get("dress_id") == dress_id
                for component in outfit.get("dress_components") or []
            )
        ]
