"""Payment Service: order creation through the gateway and signature-checked crediting.

Invariants:
    - Only active plans can be ordered; the order amount is price in minor units
    - verify_payment checks HMAC-SHA256("order_id|payment_id") before touching storage
    - A verified payment credits the plan's credits_granted exactly once

Design Decisions:
    - The gateway client is injected: tests swap in httpx.MockTransport, and
      signature verification stays a pure function in core/
"""

import logging
from decimal import Decimal
from uuid import UUID, uuid4

from wardrobe_api.core.domain_types import (
    ActionStatus, ActionType, SourceFeature, TargetEntityType,
)
from wardrobe_api.core.errors import (
    ErrorContext, PaymentVerificationError, ResourceNotFoundError,
)
from wardrobe_api.core.payment_signature import verify_signature
from wardrobe_api.infrastructure.payment_gateway import RazorpayGateway
from wardrobe_api.models.payment import Payment
from wardrobe_api.repositories.billing_repository import PlanRepository
from wardrobe_api.repositories.payment_repository import PaymentRepository
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.services.activity_logger import ActivityLogger

logger = logging.getLogger(__name__)


def to_minor_units(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).to_integral_value())


class PaymentService:
    def __init__(
        self,
        payments: PaymentRepository,
        plans: PlanRepository,
        users: UserRepository,
        gateway: RazorpayGateway,
        activity: ActivityLogger,
        key_secret: str,
    ):
        self._payments = payments
        self._plans = plans
        self._users = users
        self._gateway = gateway
        self._activity = activity
        self._key_secret = key_secret

    async def create_order(
        self, user_id: UUID, plan_id: UUID, *, ip_address: str | None = None,
    ) -> Payment:
        if await self._users.get(user_id) is None:
            raise ResourceNotFoundError("User", user_id)
        plan = await self._plans.get(plan_id)
        if plan is None or not plan.is_active:
            raise ResourceNotFoundError(
                "Plan", plan_id, ErrorContext(user_id=str(user_id)),
            )
        order = await self._gateway.create_order(
            to_minor_units(plan.price), plan.currency,
            receipt=f"rcpt_{uuid4().hex[:20]}",
            notes={"user_id": str(user_id), "plan_id": str(plan_id)},
        )
        payment = await self._payments.create({
            "user_id": user_id,
            "plan_id": plan_id,
            "razorpay_order_id": order["id"],
            "amount": plan.price,
            "currency": plan.currency,
            "status": "created",
        })
        await self._activity.record(
            ActionType.CREATE_ORDER, ActionStatus.SUCCESS,
            user_id=user_id, source_feature=SourceFeature.BILLING,
            target_entity_type=TargetEntityType.PAYMENT,
            target_entity_id=payment.id,
            metadata={"order_id": order["id"], "plan_id": str(plan_id)},
            ip_address=ip_address,
        )
        return payment

    async def verify_payment(
        self, order_id: str, payment_id: str, signature: str,
        *, ip_address: str | None = None,
    ) -> dict:
        if not verify_signature(order_id, payment_id, signature, self._key_secret):
            logger.warning(
                "Payment signature mismatch",
                extra={"error_code": "INVALID_PAYMENT_SIGNATURE"},
            )
            raise PaymentVerificationError(order_id)

        pending = await self._payments.get_by_order_id(order_id)
        if pending is None:
            raise ResourceNotFoundError("Payment", order_id)
        credits = 0
        if pending.plan_id is not None:
            plan = await self._plans.get(pending.plan_id)
            credits = (plan.credits_granted or 0) if plan else 0

        payment, ledger, balance = await self._payments.apply_verified_payment(
            order_id, payment_id, signature, credits,
        )
        await self._activity.record(
            ActionType.VERIFY_PAYMENT, ActionStatus.SUCCESS,
            user_id=payment.user_id, source_feature=SourceFeature.BILLING,
            target_entity_type=TargetEntityType.PAYMENT,
            target_entity_id=payment.id,
            metadata={"order_id": order_id, "credits": credits},
            ip_address=ip_address,
        )
        return {
            "payment": payment,
            "credit_transaction": ledger,
            "credit_balance": balance,
        }
