"""Document Linking: create-and-link, link/unlink, cascading delete across two stores.

Invariants:
    - A created dress is always linked to "Your Dresses", plus the target wardrobe
    - Link failures after the document write never remove the document; the outcome
      says partial or failed and exactly one activity entry is written
    - A target wardrobe of another user is rejected before anything is written
    - Duplicate links are 409 with no row added
    - Explicit unlink from "Your Dresses" / "Your Outfits" is 403
    - Deleting a document removes every link; a second delete is 404
    - Stale links are reported by readers, never raised
"""

from uuid import uuid4

import pytest

from wardrobe_api.core.domain_types import DocumentKind, LinkStatus
from wardrobe_api.core.errors import (
    DuplicateLinkError, MissingDefaultWardrobeError, ReservedWardrobeError,
    ResourceNotFoundError, StorageError,
)
from wardrobe_api.models.wardrobe_dress import WardrobeDress
from wardrobe_api.repositories.document_repository import DocumentRepository
from wardrobe_api.repositories.link_repository import LinkRepository
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.repositories.wardrobe_repository import WardrobeRepository
from wardrobe_api.services.activity_logger import ActivityLogger
from wardrobe_api.services.document_linking import DocumentLinkingService


def _dress_service_with(stores, activity_log, links) -> DocumentLinkingService:
    return DocumentLinkingService(
        DocumentKind.DRESS,
        DocumentRepository(stores.documents, DocumentKind.DRESS),
        links,
        WardrobeRepository(stores.relational),
        UserRepository(stores.relational),
        ActivityLogger(activity_log),
    )


def _failing_links(stores, fail_for, error=None) -> LinkRepository:
    """Real link repository whose insert fails for the given wardrobe ids."""
    links = LinkRepository(stores.relational, WardrobeDress)
    real_link = links.link

    async def link(wardrobe_id, document_id):
        if wardrobe_id in fail_for:
            raise error or StorageError("connection reset", "insert")
        return await real_link(wardrobe_id, document_id)

    links.link = link
    return links


@pytest.fixture
async def summer(signed_up, wardrobe_service):
    return await wardrobe_service.create_wardrobe(signed_up.user_id, {"name": "Summer"})


# ─── Create and link ────────────────────────────────────────────

async def test_dress_linked_to_default_wardrobe(signed_up, dress_service, logged):
    """New dress lands in "Your Dresses" and is logged as SUCCESS."""
    result = await dress_service.create_and_link(
        signed_up.user_id, {"name": "Blue maxi", "size": "M"},
    )

    assert result.document["name"] == "Blue maxi"
    assert result.document["user_id"] == str(signed_up.user_id)
    assert result.link.status is LinkStatus.LINKED
    assert result.link.linked_wardrobe_ids == [signed_up.dresses_wardrobe_id]

    [entry] = await logged("ADD_DRESS")
    assert entry.status == "SUCCESS"
    assert entry.target_entity_id == result.document["id"]


async def test_dress_with_target_linked_to_both(signed_up, summer, dress_service):
    """A target wardrobe gets a link next to the default one."""
    result = await dress_service.create_and_link(
        signed_up.user_id, {"name": "Sundress"}, summer.id,
    )

    assert result.link.linked_wardrobe_ids == [signed_up.dresses_wardrobe_id, summer.id]
    assert set(await dress_service.wardrobes_containing(result.document["id"])) == {
        signed_up.dresses_wardrobe_id, summer.id,
    }


async def test_target_equal_to_default_links_once(signed_up, dress_service):
    """Target equal to the default wardrobe is linked once."""
    result = await dress_service.create_and_link(
        signed_up.user_id, {"name": "Plain"}, signed_up.dresses_wardrobe_id,
    )
    assert result.link.linked_wardrobe_ids == [signed_up.dresses_wardrobe_id]


async def test_foreign_target_rejected_before_write(
    signed_up, onboarding_service, dress_service, logged,
):
    """Another user's wardrobe → 404 and no document written."""
    other = await onboarding_service.bootstrap_user("eve@example.com", "password1")

    with pytest.raises(ResourceNotFoundError):
        await dress_service.create_and_link(
            signed_up.user_id, {"name": "Stolen"}, other.favorites_wardrobe_id,
        )

    assert await dress_service.list_for_user(signed_up.user_id) == []
    [entry] = await logged("ADD_DRESS")
    assert entry.status == "FAILURE"


async def test_missing_default_wardrobe_rejected(stores, dress_service, logged):
    """User without "Your Dresses" → error before the document write."""
    user = await UserRepository(stores.relational).create("nowardrobe@example.com", "x")

    with pytest.raises(MissingDefaultWardrobeError):
        await dress_service.create_and_link(user.id, {"name": "Orphan"})

    assert await dress_service.list_for_user(user.id) == []
    [entry] = await logged("ADD_DRESS")
    assert entry.status == "FAILURE"


async def test_unknown_owner_rejected(dress_service):
    """Unknown owner → 404."""
    with pytest.raises(ResourceNotFoundError):
        await dress_service.create_and_link(uuid4(), {"name": "Ghost"})


async def test_partial_link_failure_keeps_document(
    stores, signed_up, summer, activity_log, logged,
):
    """Target link fails → document kept, outcome PARTIAL."""
    service = _dress_service_with(
        stores, activity_log, _failing_links(stores, {summer.id}),
    )

    result = await service.create_and_link(
        signed_up.user_id, {"name": "Half linked"}, summer.id,
    )

    assert result.link.status is LinkStatus.PARTIAL
    assert result.link.linked_wardrobe_ids == [signed_up.dresses_wardrobe_id]
    assert result.link.failed_wardrobe_ids == [summer.id]
    assert result.link.warning == "PARTIAL_WORKFLOW_FAILURE"
    assert await service.get_document(result.document["id"])

    [entry] = await logged("ADD_DRESS")
    assert entry.status == "PARTIAL_SUCCESS"
    assert entry.details["failed_wardrobe_ids"] == [str(summer.id)]


async def test_all_links_failing_still_returns_document(
    stores, signed_up, activity_log, logged,
):
    """Every link fails → document returned, outcome FAILED, one log entry."""
    service = _dress_service_with(
        stores, activity_log,
        _failing_links(stores, {signed_up.dresses_wardrobe_id}),
    )

    result = await service.create_and_link(signed_up.user_id, {"name": "Unlinked"})

    assert result.link.status is LinkStatus.FAILED
    assert await service.get_document(result.document["id"])
    assert len(await logged("ADD_DRESS")) == 1


async def test_unexpected_link_error_reported_as_partial(
    stores, signed_up, summer, activity_log, logged,
):
    """A non-domain exception from the link store is still a partial outcome."""
    service = _dress_service_with(
        stores, activity_log,
        _failing_links(stores, {summer.id}, RuntimeError("driver crashed")),
    )

    result = await service.create_and_link(
        signed_up.user_id, {"name": "Crashed link"}, summer.id,
    )

    assert result.link.status is LinkStatus.PARTIAL
    assert result.link.failed_wardrobe_ids == [summer.id]
    assert await service.get_document(result.document["id"])
    [entry] = await logged("ADD_DRESS")
    assert entry.status == "PARTIAL_SUCCESS"


async def test_document_write_failure_logged_without_links(
    stores, signed_up, summer, activity_log, logged,
):
    """A failed document write records one FAILURE entry and attempts no link."""
    links = _failing_links(stores, set())
    attempted = []
    real_link = links.link

    async def link(wardrobe_id, document_id):
        attempted.append(wardrobe_id)
        return await real_link(wardrobe_id, document_id)

    links.link = link
    service = _dress_service_with(stores, activity_log, links)

    async def create(owner_user_id, data):
        raise StorageError("disk full", "insert", "documents")

    service.documents.create = create

    with pytest.raises(StorageError):
        await service.create_and_link(
            signed_up.user_id, {"name": "Never stored"}, summer.id,
        )

    assert attempted == []
    [entry] = await logged("ADD_DRESS")
    assert entry.status == "FAILURE"
    assert entry.details["step"] == "create_document"
    assert entry.details["error"] == "STORAGE_ERROR"
    contents = await service.list_wardrobe_contents(signed_up.dresses_wardrobe_id)
    assert contents.documents == []
    assert contents.stale_document_ids == []


async def test_outfit_linked_to_your_outfits(signed_up, outfit_service):
    """Outfits default to "Your Outfits"."""
    result = await outfit_service.create_and_link(
        signed_up.user_id, {"name": "Office look", "dress_components": []},
    )
    assert result.link.linked_wardrobe_ids == [signed_up.outfits_wardrobe_id]


async def test_outfits_found_by_dress_component(signed_up, dress_service, outfit_service):
    """Outfits are searchable by the dresses they contain."""
    dress = (await dress_service.create_and_link(signed_up.user_id, {"name": "Tee"})).document
    await outfit_service.create_and_link(
        signed_up.user_id,
        {"name": "Casual", "dress_components": [{"dress_id": dress["id"]}]},
    )
    await outfit_service.create_and_link(
        signed_up.user_id, {"name": "Formal", "dress_components": []},
    )

    found = await outfit_service.documents.find_by_dress_component(dress["id"])
    assert [o["name"] for o in found] == ["Casual"]


# ─── Link / unlink ──────────────────────────────────────────────

async def test_link_existing_dress_to_wardrobe(signed_up, summer, dress_service, logged):
    """Linking an existing dress adds one row and one log entry."""
    dress = (await dress_service.create_and_link(signed_up.user_id, {"name": "Kaftan"})).document

    row = await dress_service.link_document(summer.id, dress["id"])

    assert row.wardrobe_id == summer.id
    assert len(await logged("LINK_DRESS_TO_WARDROBE")) == 1


async def test_duplicate_link_rejected(signed_up, summer, dress_service):
    """Linking the same pair twice → 409, no second row."""
    dress = (await dress_service.create_and_link(
        signed_up.user_id, {"name": "Kaftan"}, summer.id,
    )).document

    with pytest.raises(DuplicateLinkError) as exc_info:
        await dress_service.link_document(summer.id, dress["id"])

    assert exc_info.value.http_status == 409
    contents = await dress_service.list_wardrobe_contents(summer.id)
    assert [d["id"] for d in contents.documents] == [dress["id"]]


async def test_link_to_missing_wardrobe_or_dress(signed_up, summer, dress_service):
    """Either side missing → 404."""
    dress = (await dress_service.create_and_link(signed_up.user_id, {"name": "A"})).document
    with pytest.raises(ResourceNotFoundError):
        await dress_service.link_document(uuid4(), dress["id"])
    with pytest.raises(ResourceNotFoundError):
        await dress_service.link_document(summer.id, "no-such-dress")


async def test_unlink_from_default_wardrobe_forbidden(signed_up, dress_service):
    """Unlink from "Your Dresses" → 403, link kept."""
    dress = (await dress_service.create_and_link(signed_up.user_id, {"name": "Keep"})).document

    with pytest.raises(ReservedWardrobeError) as exc_info:
        await dress_service.unlink_document(signed_up.dresses_wardrobe_id, dress["id"])

    assert exc_info.value.http_status == 403
    assert signed_up.dresses_wardrobe_id in await dress_service.wardrobes_containing(dress["id"])


async def test_unlink_from_favorites_is_idempotent(signed_up, dress_service):
    """Second unlink from favorites reports nothing removed."""
    dress = (await dress_service.create_and_link(
        signed_up.user_id, {"name": "Fav"}, signed_up.favorites_wardrobe_id,
    )).document

    assert await dress_service.unlink_document(signed_up.favorites_wardrobe_id, dress["id"])
    assert not await dress_service.unlink_document(signed_up.favorites_wardrobe_id, dress["id"])


# ─── Delete ─────────────────────────────────────────────────────

async def test_delete_removes_document_and_every_link(
    signed_up, summer, dress_service, logged,
):
    """Delete removes the document and both links; a second delete is 404."""
    dress = (await dress_service.create_and_link(
        signed_up.user_id, {"name": "Gone"}, summer.id,
    )).document

    deleted = await dress_service.delete_document_cascade(dress["id"])

    assert deleted.links_removed == 2
    assert deleted.cleanup_complete
    assert deleted.document["name"] == "Gone"
    assert (await dress_service.list_wardrobe_contents(summer.id)).documents == []
    [entry] = await logged("DELETE_DRESS")
    assert entry.status == "SUCCESS"

    with pytest.raises(ResourceNotFoundError):
        await dress_service.delete_document_cascade(dress["id"])


async def test_link_cleanup_failure_is_reported(
    stores, signed_up, activity_log, logged,
):
    """Link cleanup failure is reported as partial and leaves stale ids."""
    links = LinkRepository(stores.relational, WardrobeDress)
    service = _dress_service_with(stores, activity_log, links)
    dress = (await service.create_and_link(signed_up.user_id, {"name": "Sticky"})).document

    async def unlink_all(document_id):
        raise StorageError("connection reset", "delete")

    links.unlink_all = unlink_all
    deleted = await service.delete_document_cascade(dress["id"])

    assert deleted.links_removed is None
    assert not deleted.cleanup_complete
    [entry] = await logged("DELETE_DRESS")
    assert entry.status == "PARTIAL_SUCCESS"

    contents = await service.list_wardrobe_contents(signed_up.dresses_wardrobe_id)
    assert contents.documents == []
    assert contents.stale_document_ids == [dress["id"]]


async def test_contents_skip_stale_links(signed_up, dress_service):
    """Links to vanished documents are skipped and reported."""
    kept = (await dress_service.create_and_link(signed_up.user_id, {"name": "Kept"})).document
    lost = (await dress_service.create_and_link(signed_up.user_id, {"name": "Lost"})).document
    await dress_service.documents.delete(lost["id"])

    contents = await dress_service.list_wardrobe_contents(signed_up.dresses_wardrobe_id)

    assert [d["id"] for d in contents.documents] == [kept["id"]]
    assert contents.stale_document_ids == [lost["id"]]


# ─── Reads / update ─────────────────────────────────────────────

async def test_update_dress_logged(signed_up, dress_service, logged):
    """Update keeps the id and logs the changed fields."""
    dress = (await dress_service.create_and_link(signed_up.user_id, {"name": "Old"})).document

    updated = await dress_service.update_document(dress["id"], {"name": "New", "is_favorite": True})

    assert updated["name"] == "New"
    assert updated["is_favorite"] is True
    assert updated["id"] == dress["id"]
    [entry] = await logged("UPDATE_DRESS")
    assert entry.details["updated_fields"] == ["is_favorite", "name"]


async def test_update_missing_dress(dress_service):
    """Updating an unknown dress → 404."""
    with pytest.raises(ResourceNotFoundError):
        await dress_service.update_document("missing", {"name": "x"})


async def test_list_for_user_only_returns_own_dresses(
    signed_up, onboarding_service, dress_service,
):
    """list_for_user filters by owner."""
    other = await onboarding_service.bootstrap_user("zoe@example.com", "password1")
    await dress_service.create_and_link(signed_up.user_id, {"name": "Mine"})
    await dress_service.create_and_link(other.user_id, {"name": "Theirs"})

    mine = await dress_service.list_for_user(signed_up.user_id)
    assert [d["name"] for d in mine] == ["Mine"]
    assert len(await dress_service.list_all()) == 2
