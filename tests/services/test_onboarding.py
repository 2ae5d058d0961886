"""Onboarding: signup bootstrap, full onboarding and onboarding updates.

Invariants:
    - Signup yields the user plus "Your Dresses", "Your Outfits", "Your Favorites"
      at positions 0, 1, 2
    - A wardrobe failure mid-bootstrap keeps the user row and records which
      wardrobes were created
    - A broken activity log never aborts signup
    - Onboarding dresses land in "Your Dresses" (and the target wardrobe on update)
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from wardrobe_api.core.domain_types import LinkStatus
from wardrobe_api.core.errors import (
    DuplicateUserError, MissingDefaultWardrobeError, ReservedWardrobeError,
    ResourceNotFoundError, StorageError,
)
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.repositories.wardrobe_repository import WardrobeRepository
from wardrobe_api.services.activity_logger import ActivityLogger
from wardrobe_api.services.credentials import verify_password
from wardrobe_api.services.onboarding import OnboardingService
from wardrobe_api.services.wardrobe_service import WardrobeService


async def test_bootstrap_creates_three_default_wardrobes(
    signed_up, wardrobe_service,
):
    """Signup creates the three reserved wardrobes at positions 0..2."""
    wardrobes = await wardrobe_service.list_for_user(signed_up.user_id)
    assert [(w.name, w.position) for w in wardrobes] == [
        ("Your Dresses", 0), ("Your Outfits", 1), ("Your Favorites", 2),
    ]
    assert {w.id for w in wardrobes} == {
        signed_up.dresses_wardrobe_id,
        signed_up.outfits_wardrobe_id,
        signed_up.favorites_wardrobe_id,
    }


async def test_bootstrap_hashes_password(signed_up, stores):
    """Password is stored as a bcrypt hash; profile defaults applied."""
    user = await UserRepository(stores.relational).get(signed_up.user_id)
    assert user.password_hash != "correct horse"
    assert verify_password("correct horse", user.password_hash)
    assert user.name == "Ada"
    assert user.credit_balance == 0


async def test_bootstrap_logs_signup_and_wardrobes(signed_up, logged):
    """Signup logs one SIGNUP_USER and three CREATE_WARDROBE entries."""
    assert len(await logged("SIGNUP_USER")) == 1
    created = await logged("CREATE_WARDROBE")
    assert len(created) == 3
    assert {e.source_feature for e in created} == {"AuthenticationService"}


async def test_duplicate_active_email_rejected(signed_up, onboarding_service):
    """Same active email twice → 409."""
    with pytest.raises(DuplicateUserError) as exc_info:
        await onboarding_service.bootstrap_user("ada@example.com", "another pw")
    assert exc_info.value.http_status == 409


async def test_email_reusable_after_soft_delete(
    signed_up, onboarding_service, user_service,
):
    """A soft-deleted user's email can sign up again."""
    await user_service.delete_user(signed_up.user_id)
    again = await onboarding_service.bootstrap_user("ada@example.com", "new password")
    assert again.user_id != signed_up.user_id


def _flaky_wardrobes(wardrobe_service, fail_on: int) -> WardrobeService:
    real_create = wardrobe_service.create_wardrobe
    calls = {"n": 0}

    async def create_wardrobe(user_id, data, **kwargs):
        calls["n"] += 1
        if calls["n"] == fail_on:
            raise StorageError("connection reset", "insert")
        return await real_create(user_id, data, **kwargs)

    wardrobe_service.create_wardrobe = create_wardrobe
    return wardrobe_service


async def test_wardrobe_failure_keeps_user(
    stores, settings, wardrobe_service, dress_service, activity_log, logged,
):
    """Wardrobe creation failure keeps the user row and is logged."""
    users = UserRepository(stores.relational)
    service = OnboardingService(
        users, _flaky_wardrobes(wardrobe_service, fail_on=2), dress_service,
        ActivityLogger(activity_log), bcrypt_rounds=settings.bcrypt_rounds,
    )

    with pytest.raises(StorageError):
        await service.bootstrap_user("grace@example.com", "hopper123")

    user = await users.get_by_email("grace@example.com")
    assert user is not None
    wardrobes = await WardrobeRepository(stores.relational).list_by_user(user.id)
    assert [w.name for w in wardrobes] == ["Your Dresses"]

    [failure] = await logged("SIGNUP_WARDROBE_FAILURE")
    assert failure.status == "FAILURE"
    assert failure.details["failed_wardrobe"] == "Your Outfits"
    assert failure.details["created_wardrobes"] == ["Your Dresses"]


async def test_half_bootstrapped_user_fails_wardrobe_listing(
    stores, settings, wardrobe_service, dress_service, activity_log,
):
    """User missing a default wardrobe surfaces MISSING_DEFAULT_WARDROBE."""
    users = UserRepository(stores.relational)
    service = OnboardingService(
        users, _flaky_wardrobes(wardrobe_service, fail_on=1), dress_service,
        ActivityLogger(activity_log), bcrypt_rounds=settings.bcrypt_rounds,
    )
    with pytest.raises(StorageError):
        await service.bootstrap_user("linus@example.com", "penguins")

    user = await users.get_by_email("linus@example.com")
    with pytest.raises(MissingDefaultWardrobeError):
        await wardrobe_service.list_for_user(user.id)


async def test_broken_activity_log_never_aborts_signup(stores, settings, dress_service):
    """Activity log outage never aborts signup."""
    broken = ActivityLogger(AsyncMock(create=AsyncMock(side_effect=RuntimeError("log db down"))))
    users = UserRepository(stores.relational)
    wardrobes = WardrobeService(WardrobeRepository(stores.relational), users, broken)
    service = OnboardingService(
        users, wardrobes, dress_service, broken, bcrypt_rounds=settings.bcrypt_rounds,
    )

    result = await service.bootstrap_user("ken@example.com", "unix1969")

    assert result.favorites_wardrobe_id is not None
    assert len(await wardrobes.list_for_user(result.user_id)) == 3


async def test_complete_onboarding_applies_profile_and_dresses(
    onboarding_service, stores, dress_service,
):
    """Complete onboarding stores profile fields and initial dresses."""
    result, dresses = await onboarding_service.complete_onboarding(
        {
            "email": "maya@example.com", "password": "angelou!",
            "name": "Maya", "gender": "female", "body_type": "hourglass",
            "date_of_birth": date(1990, 4, 4),
        },
        {"intent": "work wear", "lifestyle": "busy"},
        [{"name": "Blue maxi"}, {"name": "Red wrap", "brand": "Acme"}],
    )

    user = await UserRepository(stores.relational).get(result.user_id)
    assert user.body_type == "hourglass"
    assert user.intent == "work wear"
    assert user.date_of_birth == date(1990, 4, 4)
    assert [d.link.status for d in dresses] == [LinkStatus.LINKED] * 2

    contents = await dress_service.list_wardrobe_contents(result.dresses_wardrobe_id)
    assert {d["name"] for d in contents.documents} == {"Blue maxi", "Red wrap"}


async def test_complete_onboarding_duplicate_email_logs_failure(
    signed_up, onboarding_service, logged,
):
    """Duplicate email during onboarding → ONBOARDING_FAILURE entry."""
    with pytest.raises(DuplicateUserError):
        await onboarding_service.complete_onboarding(
            {"email": "ada@example.com", "password": "whatever", "name": "Ada"},
        )
    assert len(await logged("ONBOARDING_FAILURE")) == 1


async def test_update_onboarding_links_dresses_to_target(
    signed_up, onboarding_service, wardrobe_service, dress_service,
):
    """Onboarding update links new dresses to the chosen wardrobe."""
    summer = await wardrobe_service.create_wardrobe(
        signed_up.user_id, {"name": "Summer"},
    )
    [created] = await onboarding_service.update_onboarding_details(
        signed_up.user_id, summer.id,
        user_details={"top_size": "M"},
        wardrobe_details={"intent": "beach"},
        dresses=[{"name": "Linen shift"}],
    )

    assert set(created.link.linked_wardrobe_ids) == {
        signed_up.dresses_wardrobe_id, summer.id,
    }
    assert (await wardrobe_service.get_wardrobe(summer.id)).intent == "beach"


async def test_update_onboarding_cannot_rename_default(
    signed_up, onboarding_service, logged,
):
    """Onboarding update cannot rename a reserved wardrobe."""
    with pytest.raises(ReservedWardrobeError):
        await onboarding_service.update_onboarding_details(
            signed_up.user_id, signed_up.dresses_wardrobe_id,
            wardrobe_details={"name": "My Stuff"},
        )
    assert len(await logged("ONBOARDING_UPDATE_FAILURE")) == 1


async def test_update_onboarding_rejects_foreign_wardrobe(
    signed_up, onboarding_service,
):
    """Another user's wardrobe → 404."""
    other = await onboarding_service.bootstrap_user("bob@example.com", "builder1")
    with pytest.raises(ResourceNotFoundError):
        await onboarding_service.update_onboarding_details(
            signed_up.user_id, other.dresses_wardrobe_id,
            dresses=[{"name": "Sneaky"}],
        )
