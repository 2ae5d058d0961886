"""Wardrobe Service: guarded create/update/delete and all-or-nothing reorder.

Invariants:
    - New wardrobes are appended after the current highest position
    - Reserved wardrobes cannot be renamed or deleted; their metadata can change
    - A reorder naming any wardrobe the user does not own changes nothing
"""

from uuid import uuid4

import pytest

from wardrobe_api.core.errors import (
    DuplicateReservedWardrobeError, ReservedWardrobeError, ResourceNotFoundError,
)


async def _positions(wardrobe_service, user_id) -> dict:
    return {w.name: w.position for w in await wardrobe_service.list_for_user(user_id)}


async def test_new_wardrobe_appended(signed_up, wardrobe_service, logged):
    """New wardrobes go after the defaults and are logged."""
    wardrobe = await wardrobe_service.create_wardrobe(
        signed_up.user_id, {"name": "Summer", "lifestyle": "outdoors"},
    )
    assert wardrobe.position == 3
    assert wardrobe.lifestyle == "outdoors"
    assert len(await logged("CREATE_WARDROBE")) == 4


async def test_second_reserved_wardrobe_rejected(signed_up, wardrobe_service, logged):
    """Duplicate reserved wardrobe → error and a failure entry."""
    with pytest.raises(DuplicateReservedWardrobeError):
        await wardrobe_service.create_wardrobe(
            signed_up.user_id, {"name": "Your Favorites"},
        )
    [entry] = await logged("CREATE_WARDROBE_FAILURE")
    assert entry.details["error"] == "DUPLICATE_RESERVED_WARDROBE"


async def test_create_for_unknown_user(wardrobe_service):
    """Unknown user → 404."""
    with pytest.raises(ResourceNotFoundError):
        await wardrobe_service.create_wardrobe(uuid4(), {"name": "Nowhere"})


async def test_rename_plain_wardrobe(signed_up, wardrobe_service):
    """Plain wardrobes can be renamed."""
    wardrobe = await wardrobe_service.create_wardrobe(signed_up.user_id, {"name": "Summer"})
    renamed = await wardrobe_service.update_wardrobe(wardrobe.id, {"name": "Beach"})
    assert renamed.name == "Beach"


async def test_rename_reserved_wardrobe_forbidden(signed_up, wardrobe_service):
    """Reserved wardrobe rename → 403, name unchanged."""
    with pytest.raises(ReservedWardrobeError):
        await wardrobe_service.update_wardrobe(
            signed_up.outfits_wardrobe_id, {"name": "Looks"},
        )
    wardrobe = await wardrobe_service.get_wardrobe(signed_up.outfits_wardrobe_id)
    assert wardrobe.name == "Your Outfits"


async def test_reserved_wardrobe_metadata_editable(signed_up, wardrobe_service):
    """Reserved wardrobes accept metadata edits."""
    updated = await wardrobe_service.update_wardrobe(
        signed_up.dresses_wardrobe_id, {"intent": "capsule wardrobe"},
    )
    assert updated.intent == "capsule wardrobe"
    assert updated.name == "Your Dresses"


async def test_rename_to_owned_reserved_name_rejected(signed_up, wardrobe_service):
    """Cannot rename into a reserved name the user already holds."""
    wardrobe = await wardrobe_service.create_wardrobe(signed_up.user_id, {"name": "Summer"})
    with pytest.raises(DuplicateReservedWardrobeError):
        await wardrobe_service.update_wardrobe(wardrobe.id, {"name": "Your Dresses"})


async def test_delete_reserved_wardrobe_forbidden(signed_up, wardrobe_service):
    """Reserved wardrobe delete → 403."""
    with pytest.raises(ReservedWardrobeError) as exc_info:
        await wardrobe_service.delete_wardrobe(signed_up.favorites_wardrobe_id)
    assert exc_info.value.http_status == 403


async def test_delete_wardrobe_drops_its_links(signed_up, wardrobe_service, dress_service):
    """Deleting a wardrobe removes its link rows only."""
    summer = await wardrobe_service.create_wardrobe(signed_up.user_id, {"name": "Summer"})
    dress = (await dress_service.create_and_link(
        signed_up.user_id, {"name": "Sarong"}, summer.id,
    )).document

    await wardrobe_service.delete_wardrobe(summer.id)

    assert await dress_service.wardrobes_containing(dress["id"]) == [
        signed_up.dresses_wardrobe_id,
    ]
    with pytest.raises(ResourceNotFoundError):
        await wardrobe_service.get_wardrobe(summer.id)


async def test_reorder_sets_positions(signed_up, wardrobe_service):
    """Reorder assigns positions by list index."""
    summer = await wardrobe_service.create_wardrobe(signed_up.user_id, {"name": "Summer"})
    order = [
        summer.id, signed_up.favorites_wardrobe_id,
        signed_up.dresses_wardrobe_id, signed_up.outfits_wardrobe_id,
    ]

    wardrobes = await wardrobe_service.reorder_wardrobes(signed_up.user_id, order)

    assert [w.id for w in wardrobes] == order
    assert [w.position for w in wardrobes] == [0, 1, 2, 3]


async def test_reorder_with_foreign_wardrobe_changes_nothing(
    signed_up, onboarding_service, wardrobe_service,
):
    """Foreign wardrobe in the list → 404, positions unchanged."""
    other = await onboarding_service.bootstrap_user("mallory@example.com", "password1")
    before = await _positions(wardrobe_service, signed_up.user_id)

    with pytest.raises(ResourceNotFoundError):
        await wardrobe_service.reorder_wardrobes(
            signed_up.user_id,
            [signed_up.outfits_wardrobe_id, signed_up.dresses_wardrobe_id,
             other.favorites_wardrobe_id],
        )

    assert await _positions(wardrobe_service, signed_up.user_id) == before


async def test_list_for_unknown_user(wardrobe_service):
    """Listing for an unknown user → 404."""
    with pytest.raises(ResourceNotFoundError):
        await wardrobe_service.list_for_user(uuid4())
