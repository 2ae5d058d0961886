"""Service test fixtures: two in-memory stores, wired services, FastAPI test client.

Invariants:
    - Every test gets fresh in-memory SQLite databases for BOTH stores
    - get_stores is overridden so routes use the same handles as the service fixtures
    - The payment gateway is a real RazorpayGateway on httpx.MockTransport;
      gateway_requests records every order request it received

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for workflow tests
      (PostgreSQL-only features such as FK cascades are covered by explicit cleanup)
    - StaticPool: every session of one engine shares the same in-memory database
"""

import json
from itertools import count

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from wardrobe_api.api.dependencies import get_payment_gateway
from wardrobe_api.config import Settings, get_settings
from wardrobe_api.core.domain_types import DocumentKind
from wardrobe_api.db.base import Base, DocumentBase
from wardrobe_api.infrastructure.database import (
    DatabaseSessionManager, StoreHandles, get_stores,
)
from wardrobe_api.infrastructure.payment_gateway import RazorpayGateway
from wardrobe_api.main import app
from wardrobe_api.repositories.activity_log_repository import ActivityLogRepository
from wardrobe_api.services import wiring

TEST_SECRET = "test-razorpay-secret"


async def _engine_for(metadata):
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    return engine


@pytest.fixture
async def relational_engine():
    engine = await _engine_for(Base.metadata)
    yield engine
    await engine.dispose()


@pytest.fixture
async def document_engine():
    engine = await _engine_for(DocumentBase.metadata)
    yield engine
    await engine.dispose()


@pytest.fixture
def stores(relational_engine, document_engine) -> StoreHandles:
    return StoreHandles(
        relational=DatabaseSessionManager.from_engine(relational_engine, "relational"),
        documents=DatabaseSessionManager.from_engine(document_engine, "documents"),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bcrypt_rounds=4,
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret=TEST_SECRET,
    )


@pytest.fixture
def gateway_requests() -> list[dict]:
    return []


@pytest.fixture
def gateway(gateway_requests) -> RazorpayGateway:
    order_numbers = count(1)

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        gateway_requests.append(body)
        return httpx.Response(200, json={
            "id": f"order_test_{next(order_numbers)}",
            "amount": body["amount"],
            "currency": body["currency"],
            "status": "created",
        })

    return RazorpayGateway(
        "rzp_test_key", TEST_SECRET, transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def wardrobe_service(stores):
    return wiring.build_wardrobe_service(stores)


@pytest.fixture
def dress_service(stores):
    return wiring.build_linking_service(stores, DocumentKind.DRESS)


@pytest.fixture
def outfit_service(stores):
    return wiring.build_linking_service(stores, DocumentKind.OUTFIT)


@pytest.fixture
def onboarding_service(stores, settings):
    return wiring.build_onboarding_service(stores, settings)


@pytest.fixture
def user_service(stores, settings):
    return wiring.build_user_service(stores, settings)


@pytest.fixture
def payment_service(stores, settings, gateway):
    return wiring.build_payment_service(stores, settings, gateway)


@pytest.fixture
async def signed_up(onboarding_service):
    """A user with the three default wardrobes."""
    return await onboarding_service.bootstrap_user(
        "ada@example.com", "correct horse", "Ada",
    )


@pytest.fixture
async def client(stores, settings, gateway):
    """FastAPI test client bound to the in-memory stores."""
    app.dependency_overrides[get_stores] = lambda: stores
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_payment_gateway] = lambda: gateway

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def activity_log(stores):
    """Read side of user_actions_log, for asserting what the workflows recorded."""
    return ActivityLogRepository(stores.relational)


@pytest.fixture
def logged(activity_log):
    """Entries of one action type, newest first."""
    async def find(action_type: str) -> list:
        return [
            entry for entry in await activity_log.list_all()
            if entry.action_type == action_type
        ]
    return find
