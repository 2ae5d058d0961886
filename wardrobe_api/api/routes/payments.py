"""Payment Routes: order creation, signature verification and the credit ledger.

Invariants:
    - A bad signature is 400 and changes nothing
    - Verifying an already-credited payment is 409 and leaves the balance untouched
    - Gateway failures are 502; no payment row is written for them
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from wardrobe_api.api.dependencies import (
    client_ip, get_payment_repository, get_payment_service,
)
from wardrobe_api.core.errors import ResourceNotFoundError
from wardrobe_api.repositories.payment_repository import PaymentRepository
from wardrobe_api.schemas.billing import (
    CreditTransactionResponse, OrderCreate, PaymentResponse, PaymentVerify,
    VerifyPaymentResponse,
)
from wardrobe_api.services.payment_service import PaymentService

payments = APIRouter(prefix="/api/v1/payments", tags=["payments"])
credit_transactions = APIRouter(
    prefix="/api/v1/credit-transactions", tags=["payments"],
)


@payments.post(
    "/orders", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_order(
    body: OrderCreate,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.create_order(
        body.user_id, body.plan_id, ip_address=client_ip(request),
    )


@payments.post("/verify", response_model=VerifyPaymentResponse)
async def verify_payment(
    body: PaymentVerify,
    request: Request,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.verify_payment(
        body.razorpay_order_id,
        body.razorpay_payment_id,
        body.razorpay_signature,
        ip_address=client_ip(request),
    )


@payments.get("", response_model=list[PaymentResponse])
async def list_user_payments(
    user_id: UUID,
    repository: PaymentRepository = Depends(get_payment_repository),
):
    return await repository.list_by_user(user_id)


@payments.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: UUID,
    repository: PaymentRepository = Depends(get_payment_repository),
):
    payment = await repository.get(payment_id)
    if payment is None:
        raise ResourceNotFoundError("Payment", payment_id)
    return payment


@credit_transactions.get("", response_model=list[CreditTransactionResponse])
async def list_credit_transactions(
    user_id: UUID | None = None,
    repository: PaymentRepository = Depends(get_payment_repository),
):
    return await repository.list_credit_transactions(user_id)


@credit_transactions.get(
    "/{transaction_id}", response_model=CreditTransactionResponse,
)
async def get_credit_transaction(
    transaction_id: UUID,
    repository: PaymentRepository = Depends(get_payment_repository),
):
    transaction = await repository.get_credit_transaction(transaction_id)
    if transaction is None:
        raise ResourceNotFoundError("CreditTransaction", transaction_id)
    return transaction
