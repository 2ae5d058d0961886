"""Payments: gateway orders, signature verification and exactly-once crediting.

Invariants:
    - Orders are sent to the gateway in minor units and stored as "created"
    - A bad signature changes nothing
    - Verifying the same payment twice credits the user once
    - Gateway failures leave no payment row behind
"""

from decimal import Decimal
from uuid import uuid4

import httpx
import pytest

from wardrobe_api.core.errors import (
    DuplicatePaymentError, PaymentGatewayError, PaymentVerificationError,
    ResourceNotFoundError,
)
from wardrobe_api.core.payment_signature import compute_signature
from wardrobe_api.infrastructure.payment_gateway import RazorpayGateway
from wardrobe_api.repositories.billing_repository import (
    PlanRepository, ProductRepository,
)
from wardrobe_api.repositories.payment_repository import PaymentRepository
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.services import wiring
from wardrobe_api.services.payment_service import to_minor_units



@pytest.fixture
async def plan(stores):
    product = await ProductRepository(stores.relational).create({"name": "Stylist credits"})
    return await PlanRepository(stores.relational).create({
        "product_id": product.id,
        "name": "Starter pack",
        "type": "one_time",
        "price": Decimal("499.50"),
        "currency": "INR",
        "credits_granted": 50,
    })


def test_minor_units():
    """Decimal amounts convert to integer paise."""
    assert to_minor_units(Decimal("499.50")) == 49950
    assert to_minor_units(Decimal("0.01")) == 1
    assert to_minor_units(Decimal("10")) == 1000


async def test_create_order(signed_up, plan, payment_service, gateway_requests, logged):
    """Order creation calls the gateway and stores a "created" payment."""
    payment = await payment_service.create_order(signed_up.user_id, plan.id)

    assert payment.status == "created"
    assert payment.razorpay_order_id == "order_test_1"
    assert payment.amount == Decimal("499.50")
    assert gateway_requests[0]["amount"] == 49950
    assert gateway_requests[0]["currency"] == "INR"
    assert len(await logged("CREATE_ORDER")) == 1


async def test_order_for_inactive_plan_rejected(
    signed_up, plan, stores, payment_service, gateway_requests,
):
    """Inactive plan → 404 before any gateway call."""
    await PlanRepository(stores.relational).deactivate(plan.id)
    with pytest.raises(ResourceNotFoundError):
        await payment_service.create_order(signed_up.user_id, plan.id)
    assert gateway_requests == []


async def test_order_for_unknown_user_rejected(plan, payment_service):
    """Unknown user → 404."""
    with pytest.raises(ResourceNotFoundError):
        await payment_service.create_order(uuid4(), plan.id)


async def test_gateway_failure_leaves_no_payment(signed_up, plan, stores, settings):
    """Gateway rejection → no payment row written."""
    rejecting = RazorpayGateway(
        "rzp_test_key", settings.razorpay_key_secret,
        transport=httpx.MockTransport(
            lambda request: httpx.Response(401, json={"error": "bad key"}),
        ),
    )
    service = wiring.build_payment_service(stores, settings, rejecting)

    with pytest.raises(PaymentGatewayError) as exc_info:
        await service.create_order(signed_up.user_id, plan.id)

    assert exc_info.value.http_status == 502
    assert await PaymentRepository(stores.relational).list_by_user(signed_up.user_id) == []


async def test_bad_signature_changes_nothing(signed_up, plan, stores, payment_service):
    """Bad signature → no credit and payment unchanged."""
    payment = await payment_service.create_order(signed_up.user_id, plan.id)

    with pytest.raises(PaymentVerificationError):
        await payment_service.verify_payment(
            payment.razorpay_order_id, "pay_1", "deadbeef",
        )

    stored = await PaymentRepository(stores.relational).get(payment.id)
    assert stored.status == "created"
    user = await UserRepository(stores.relational).get(signed_up.user_id)
    assert user.credit_balance == 0


async def test_verify_credits_once(
    signed_up, plan, stores, settings, payment_service, logged,
):
    """Verified payment credits once; replay raises DuplicatePaymentError."""
    payment = await payment_service.create_order(signed_up.user_id, plan.id)
    signature = compute_signature(
        payment.razorpay_order_id, "pay_1", settings.razorpay_key_secret,
    )

    result = await payment_service.verify_payment(
        payment.razorpay_order_id, "pay_1", signature,
    )

    assert result["payment"].status == "success"
    assert result["payment"].razorpay_payment_id == "pay_1"
    assert result["credit_transaction"].amount == 50
    assert result["credit_transaction"].related_payment_id == payment.id
    assert result["credit_balance"] == 50

    with pytest.raises(DuplicatePaymentError):
        await payment_service.verify_payment(
            payment.razorpay_order_id, "pay_1", signature,
        )

    user = await UserRepository(stores.relational).get(signed_up.user_id)
    assert user.credit_balance == 50
    ledger = await PaymentRepository(stores.relational).list_credit_transactions(
        signed_up.user_id,
    )
    assert len(ledger) == 1
    assert len(await logged("VERIFY_PAYMENT")) == 1


async def test_verify_unknown_order(settings, payment_service):
    """Unknown order id → 404."""
    signature = compute_signature(
        "order_missing", "pay_1", settings.razorpay_key_secret,
    )
    with pytest.raises(ResourceNotFoundError):
        await payment_service.verify_payment("order_missing", "pay_1", signature)
