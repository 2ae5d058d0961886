"""Payment Repository: order rows, the credit ledger and verified-payment application.

Invariants:
    - apply_verified_payment marks the payment, writes the ledger row and bumps the
      balance in ONE transaction; any failure leaves all three untouched
    - A payment already marked success, or a ledger row already pointing at it,
      raises DuplicatePaymentError and the balance is not incremented again

Design Decisions:
    - The unique related_payment_id is the idempotency key: the status check catches
      the sequential replay, the constraint catches the concurrent one
"""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from wardrobe_api.core.errors import (
    DuplicatePaymentError, ErrorContext, ResourceNotFoundError,
)
from wardrobe_api.infrastructure.database import DatabaseSessionManager
from wardrobe_api.models.credit_transaction import CreditTransaction
from wardrobe_api.models.payment import Payment
from wardrobe_api.models.user import User

PAYMENT_SUCCESS = "success"


class PaymentRepository:
    def __init__(self, manager: DatabaseSessionManager):
        self._db = manager

    async def create(self, data: dict) -> Payment:
        async with self._db.session() as db:
            payment = Payment(**data)
            db.add(payment)
            await db.commit()
            await db.refresh(payment)
            return payment

    async def get(self, payment_id: UUID) -> Payment | None:
        async with self._db.session() as db:
            return await db.get(Payment, payment_id)

    async def get_by_order_id(self, order_id: str) -> Payment | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(Payment).where(Payment.razorpay_order_id == order_id),
            )
            return result.scalar_one_or_none()

    async def list_by_user(self, user_id: UUID) -> list[Payment]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Payment)
                .where(Payment.user_id == user_id)
                .order_by(Payment.created_at.desc()),
            )
            return list(result.scalars().all())

    async def apply_verified_payment(
        self, order_id: str, payment_id: str, signature: str, credits: int,
    ) -> tuple[Payment, CreditTransaction, int]:
        """Returns (payment, ledger row, new balance)."""
        async with self._db.session() as db:
            result = await db.execute(
                select(Payment).where(Payment.razorpay_order_id == order_id),
            )
            payment = result.scalar_one_or_none()
            if payment is None:
                raise ResourceNotFoundError(
                    "Payment", order_id,
                    ErrorContext(details={"lookup": "razorpay_order_id"}),
                )
            payment_pk = payment.id
            if payment.status == PAYMENT_SUCCESS:
                raise DuplicatePaymentError(payment_pk)

            payment.status = PAYMENT_SUCCESS
            payment.razorpay_payment_id = payment_id
            payment.razorpay_signature = signature
            ledger = CreditTransaction(
                user_id=payment.user_id,
                transaction_type="purchase",
                amount=credits,
                related_payment_id=payment.id,
                description=f"Credits for order {order_id}",
            )
            db.add(ledger)
            try:
                await db.flush()
                await db.execute(
                    update(User)
                    .where(User.id == payment.user_id)
                    .values(credit_balance=User.credit_balance + credits)
                    .execution_options(synchronize_session=False),
                )
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise DuplicatePaymentError(payment_pk) from e

            balance = await db.execute(
                select(User.credit_balance).where(User.id == payment.user_id),
            )
            return payment, ledger, balance.scalar_one()

    async def list_credit_transactions(
        self, user_id: UUID | None = None,
    ) -> list[CreditTransaction]:
        query = select(CreditTransaction)
        if user_id is not None:
            query = query.where(CreditTransaction.user_id == user_id)
        async with self._db.session() as db:
            result = await db.execute(
                query.order_by(CreditTransaction.created_at.desc()),
            )
            return list(result.scalars().all())

    async def get_credit_transaction(
        self, transaction_id: UUID,
    ) -> CreditTransaction | None:
        async with self._db.session() as db:
            return await db.get(CreditTransaction, transaction_id)
