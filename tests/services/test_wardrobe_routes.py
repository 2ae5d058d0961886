"""Wardrobe & Onboarding Routes: signup over HTTP and the wardrobe endpoints.

Invariants:
    - Signup is 201 with the user id and three default wardrobe ids
    - Reserved-wardrobe violations map to 403 (rename/delete) and 409 (duplicate)
    - Malformed bodies are 400 VALIDATION_ERROR, never 422
"""

from uuid import uuid4

import pytest


@pytest.fixture
async def account(client) -> dict:
    res = await client.post("/api/v1/onboarding/signup", json={
        "email": "Ada@Example.com", "password": "correct horse", "name": "Ada",
    })
    assert res.status_code == 201
    return res.json()


async def test_signup_returns_default_wardrobe_ids(account, client):
    """Signup response ids match the listed default wardrobes."""
    res = await client.get(f"/api/v1/wardrobes/user/{account['user_id']}")

    assert res.status_code == 200
    by_name = {w["name"]: w for w in res.json()}
    assert by_name["Your Dresses"]["id"] == account["dresses_wardrobe_id"]
    assert by_name["Your Outfits"]["id"] == account["outfits_wardrobe_id"]
    assert by_name["Your Favorites"]["id"] == account["favorites_wardrobe_id"]
    assert [w["position"] for w in res.json()] == [0, 1, 2]


async def test_signup_duplicate_email_returns_409(account, client):
    """Duplicate signup → 409 DUPLICATE_USER."""
    res = await client.post("/api/v1/onboarding/signup", json={
        "email": "ada@example.com", "password": "another one",
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_USER"


async def test_signup_invalid_body_returns_400(client):
    """Validation errors use the 400 error envelope."""
    res = await client.post("/api/v1/onboarding/signup", json={
        "email": "not-an-email", "password": "short",
    })

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert {d["field"] for d in error["details"]} == {"body.email", "body.password"}


async def test_complete_onboarding(client):
    """POST /onboarding/complete creates user, profile and dresses."""
    res = await client.post("/api/v1/onboarding/complete", json={
        "user_details": {
            "email": "grace@example.com", "password": "hopper1906", "name": "Grace",
            "body_type": "athletic",
        },
        "user_preferences": {"lifestyle": "travel"},
        "dresses": [{"name": "Linen shirt dress", "style_tags": ["casual"]}],
    })

    assert res.status_code == 201
    body = res.json()
    [dress] = body["dresses"]
    assert dress["document"]["name"] == "Linen shirt dress"
    assert dress["link"]["linked_wardrobe_ids"] == [body["dresses_wardrobe_id"]]

    user = (await client.get(f"/api/v1/users/{body['user_id']}")).json()
    assert user["body_type"] == "athletic"
    assert user["lifestyle"] == "travel"


async def test_update_onboarding_requires_a_change(account, client):
    """Onboarding update with nothing to change → 400."""
    res = await client.put("/api/v1/onboarding/update", json={
        "user_id": account["user_id"],
        "wardrobe_id": account["dresses_wardrobe_id"],
    })
    assert res.status_code == 400


async def test_create_wardrobe_and_rename(account, client):
    """Wardrobe create trims the name; PATCH renames it."""
    res = await client.post("/api/v1/wardrobes", json={
        "user_id": account["user_id"], "name": "  Summer  ",
    })
    assert res.status_code == 201
    wardrobe = res.json()
    assert wardrobe["name"] == "Summer"
    assert wardrobe["position"] == 3

    res = await client.patch(
        f"/api/v1/wardrobes/{wardrobe['id']}", json={"name": "Beach"},
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Beach"


async def test_create_reserved_duplicate_returns_409(account, client):
    """Second "Your Outfits" → 409."""
    res = await client.post("/api/v1/wardrobes", json={
        "user_id": account["user_id"], "name": "Your Outfits",
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_RESERVED_WARDROBE"


async def test_rename_default_wardrobe_returns_403(account, client):
    """Renaming a reserved wardrobe → 403."""
    res = await client.patch(
        f"/api/v1/wardrobes/{account['dresses_wardrobe_id']}",
        json={"name": "Everything"},
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "RESERVED_WARDROBE"


async def test_empty_patch_returns_400(account, client):
    """Empty PATCH body → 400."""
    res = await client.patch(
        f"/api/v1/wardrobes/{account['dresses_wardrobe_id']}", json={},
    )
    assert res.status_code == 400


async def test_delete_default_wardrobe_returns_403(account, client):
    """Deleting a reserved wardrobe → 403."""
    res = await client.delete(f"/api/v1/wardrobes/{account['favorites_wardrobe_id']}")
    assert res.status_code == 403


async def test_delete_wardrobe(account, client):
    """Plain wardrobes can be deleted."""
    created = (await client.post("/api/v1/wardrobes", json={
        "user_id": account["user_id"], "name": "Winter",
    })).json()

    res = await client.delete(f"/api/v1/wardrobes/{created['id']}")
    assert res.status_code == 200

    res = await client.get(f"/api/v1/wardrobes/{created['id']}")
    assert res.status_code == 404


async def test_reorder(account, client):
    """PUT /wardrobes/reorder sets positions in the given order."""
    order = [
        account["favorites_wardrobe_id"],
        account["outfits_wardrobe_id"],
        account["dresses_wardrobe_id"],
    ]
    res = await client.put("/api/v1/wardrobes/reorder", json={
        "user_id": account["user_id"], "wardrobe_ids": order,
    })

    assert res.status_code == 200
    assert [w["id"] for w in res.json()] == order


async def test_reorder_with_unknown_wardrobe_returns_404(account, client):
    """Reorder naming an unknown wardrobe → 404."""
    res = await client.put("/api/v1/wardrobes/reorder", json={
        "user_id": account["user_id"],
        "wardrobe_ids": [account["favorites_wardrobe_id"], str(uuid4())],
    })
    assert res.status_code == 404

    listed = (await client.get(f"/api/v1/wardrobes/user/{account['user_id']}")).json()
    assert listed[0]["id"] == account["dresses_wardrobe_id"]


async def test_unknown_wardrobe_returns_404(client):
    """Unknown wardrobe → 404 on "Wardrobe"."""
    res = await client.get(f"/api/v1/wardrobes/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["details"]["resource_type"] == "Wardrobe"


async def test_soft_deleted_user_is_404(account, client):
    """A soft-deleted user reads as 404."""
    res = await client.delete(f"/api/v1/users/{account['user_id']}")
    assert res.status_code == 200

    res = await client.get(f"/api/v1/users/{account['user_id']}")
    assert res.status_code == 404
