"""Billing Schemas: products, plans, features, orders, payment verification, credits,
subscriptions.

Invariants:
    - Plan prices carry at most two decimal places and are never negative
    - Verification payloads carry the three gateway values verbatim
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator

from wardrobe_api.schemas.common import (
    CreateModel, ORMResponse, UpdateModel, strip_required,
)


class ProductCreate(CreateModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class ProductUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    is_active: bool | None = None


class ProductResponse(ORMResponse):
    id: UUID
    name: str
    description: str | None = None
    is_active: bool
    created_at: datetime


class PlanCreate(CreateModel):
    product_id: UUID
    razorpay_plan_id: str | None = Field(None, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    type: Literal["subscription", "one_time"]
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    currency: str = Field(min_length=3, max_length=10)
    billing_interval: str | None = Field(None, max_length=20)
    interval_count: int | None = Field(None, ge=1)
    credits_granted: int | None = Field(None, ge=0)


class PlanUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    credits_granted: int | None = Field(None, ge=0)
    is_active: bool | None = None

    def changes(self) -> dict:
        # price stays a Decimal for the Numeric column
        return self.model_dump(exclude_unset=True)


class PlanResponse(ORMResponse):
    id: UUID
    product_id: UUID
    razorpay_plan_id: str | None = None
    name: str
    type: str
    price: Decimal
    currency: str
    billing_interval: str | None = None
    interval_count: int | None = None
    credits_granted: int | None = None
    is_active: bool


class FeatureCreate(CreateModel):
    feature_code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    credit_cost: int = Field(1, ge=0)

    @field_validator("feature_code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        return strip_required(v)


class FeatureUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    credit_cost: int | None = Field(None, ge=0)
    is_active: bool | None = None


class FeatureResponse(ORMResponse):
    id: UUID
    feature_code: str
    name: str
    credit_cost: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class OrderCreate(CreateModel):
    user_id: UUID
    plan_id: UUID


class PaymentVerify(CreateModel):
    razorpay_order_id: str = Field(min_length=1, max_length=255)
    razorpay_payment_id: str = Field(min_length=1, max_length=255)
    razorpay_signature: str = Field(min_length=1, max_length=255)


class PaymentResponse(ORMResponse):
    id: UUID
    user_id: UUID
    plan_id: UUID | None = None
    razorpay_order_id: str
    razorpay_payment_id: str | None = None
    amount: Decimal
    currency: str
    status: str
    created_at: datetime


class CreditTransactionResponse(ORMResponse):
    id: UUID
    user_id: UUID
    transaction_type: str
    amount: int
    related_payment_id: UUID | None = None
    related_feature_code: str | None = None
    description: str | None = None
    created_at: datetime


class VerifyPaymentResponse(ORMResponse):
    payment: PaymentResponse
    credit_transaction: CreditTransactionResponse
    credit_balance: int


class SubscriptionCreate(CreateModel):
    user_id: UUID
    plan_id: UUID
    razorpay_subscription_id: str = Field(min_length=1, max_length=255)
    status: str = Field(min_length=1, max_length=50)
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    trial_ends_at: datetime | None = None


class SubscriptionResponse(ORMResponse):
    id: UUID
    user_id: UUID
    plan_id: UUID
    razorpay_subscription_id: str
    status: str
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    trial_ends_at: datetime | None = None
    cancelled_at: datetime | None = None
    ended_at: datetime | None = None
    created_at: datetime
