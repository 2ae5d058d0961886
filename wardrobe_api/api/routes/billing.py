"""Billing Catalog Routes: products, plans, features and subscriptions.

Invariants:
    - DELETE on a product, plan or feature deactivates it; rows stay for history
    - Feature codes are unique (409 on collision)
    - Plans listed by default are active ones only
    - Cancelling a subscription twice keeps the first cancellation time
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from wardrobe_api.api.dependencies import (
    get_feature_repository, get_plan_repository, get_product_repository,
    get_subscription_repository,
)
from wardrobe_api.core.errors import ResourceNotFoundError
from wardrobe_api.repositories.billing_repository import (
    FeatureRepository, PlanRepository, ProductRepository,
    SubscriptionRepository,
)
from wardrobe_api.schemas.billing import (
    FeatureCreate, FeatureResponse, FeatureUpdate, PlanCreate, PlanResponse,
    PlanUpdate, ProductCreate, ProductResponse, ProductUpdate,
    SubscriptionCreate, SubscriptionResponse,
)

products = APIRouter(prefix="/api/v1/products", tags=["billing"])
plans = APIRouter(prefix="/api/v1/plans", tags=["billing"])
features = APIRouter(prefix="/api/v1/features", tags=["billing"])
subscriptions = APIRouter(prefix="/api/v1/subscriptions", tags=["billing"])


# ─── Products ───────────────────────────────────────────────────

@products.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate,
    repository: ProductRepository = Depends(get_product_repository),
):
    return await repository.create(body.model_dump())


@products.get("", response_model=list[ProductResponse])
async def list_products(
    include_inactive: bool = False,
    repository: ProductRepository = Depends(get_product_repository),
):
    if include_inactive:
        return await repository.list_all()
    return await repository.list_active()


@products.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    repository: ProductRepository = Depends(get_product_repository),
):
    product = await repository.get(product_id)
    if product is None:
        raise ResourceNotFoundError("Product", product_id)
    return product


@products.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    body: ProductUpdate,
    repository: ProductRepository = Depends(get_product_repository),
):
    product = await repository.update(product_id, body.changes())
    if product is None:
        raise ResourceNotFoundError("Product", product_id)
    return product


@products.delete("/{product_id}", response_model=ProductResponse)
async def deactivate_product(
    product_id: UUID,
    repository: ProductRepository = Depends(get_product_repository),
):
    product = await repository.deactivate(product_id)
    if product is None:
        raise ResourceNotFoundError("Product", product_id)
    return product


# ─── Plans ──────────────────────────────────────────────────────

@plans.post("", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    body: PlanCreate,
    plan_repository: PlanRepository = Depends(get_plan_repository),
    product_repository: ProductRepository = Depends(get_product_repository),
):
    if await product_repository.get(body.product_id) is None:
        raise ResourceNotFoundError("Product", body.product_id)
    return await plan_repository.create(body.model_dump())


@plans.get("", response_model=list[PlanResponse])
async def list_plans(
    product_id: UUID | None = None,
    repository: PlanRepository = Depends(get_plan_repository),
):
    return await repository.list_active(product_id)


@plans.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(
    plan_id: UUID, repository: PlanRepository = Depends(get_plan_repository),
):
    plan = await repository.get(plan_id)
    if plan is None:
        raise ResourceNotFoundError("Plan", plan_id)
    return plan


@plans.patch("/{plan_id}", response_model=PlanResponse)
async def update_plan(
    plan_id: UUID,
    body: PlanUpdate,
    repository: PlanRepository = Depends(get_plan_repository),
):
    plan = await repository.update(plan_id, body.changes())
    if plan is None:
        raise ResourceNotFoundError("Plan", plan_id)
    return plan


@plans.delete("/{plan_id}", response_model=PlanResponse)
async def deactivate_plan(
    plan_id: UUID, repository: PlanRepository = Depends(get_plan_repository),
):
    plan = await repository.deactivate(plan_id)
    if plan is None:
        raise ResourceNotFoundError("Plan", plan_id)
    return plan


# ─── Features ───────────────────────────────────────────────────

@features.post(
    "", response_model=FeatureResponse, status_code=status.HTTP_201_CREATED,
)
async def create_feature(
    body: FeatureCreate,
    repository: FeatureRepository = Depends(get_feature_repository),
):
    return await repository.create(body.model_dump())


@features.get("", response_model=list[FeatureResponse])
async def list_features(
    repository: FeatureRepository = Depends(get_feature_repository),
):
    return await repository.list_active()


@features.get("/{feature_id}", response_model=FeatureResponse)
async def get_feature(
    feature_id: UUID,
    repository: FeatureRepository = Depends(get_feature_repository),
):
    feature = await repository.get(feature_id)
    if feature is None:
        raise ResourceNotFoundError("Feature", feature_id)
    return feature


@features.patch("/{feature_id}", response_model=FeatureResponse)
async def update_feature(
    feature_id: UUID,
    body: FeatureUpdate,
    repository: FeatureRepository = Depends(get_feature_repository),
):
    feature = await repository.update(feature_id, body.changes())
    if feature is None:
        raise ResourceNotFoundError("Feature", feature_id)
    return feature


@features.delete("/{feature_id}", response_model=FeatureResponse)
async def deactivate_feature(
    feature_id: UUID,
    repository: FeatureRepository = Depends(get_feature_repository),
):
    feature = await repository.deactivate(feature_id)
    if feature is None:
        raise ResourceNotFoundError("Feature", feature_id)
    return feature


# ─── Subscriptions ──────────────────────────────────────────────

@subscriptions.post(
    "", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED,
)
async def create_subscription(
    body: SubscriptionCreate,
    subscription_repository: SubscriptionRepository = Depends(get_subscription_repository),
    plan_repository: PlanRepository = Depends(get_plan_repository),
):
    if await plan_repository.get(body.plan_id) is None:
        raise ResourceNotFoundError("Plan", body.plan_id)
    return await subscription_repository.create(body.model_dump())


@subscriptions.get("", response_model=list[SubscriptionResponse])
async def list_subscriptions(
    user_id: UUID | None = None,
    repository: SubscriptionRepository = Depends(get_subscription_repository),
):
    if user_id is not None:
        return await repository.list_by_user(user_id)
    return await repository.list_all()


@subscriptions.get("/{subscription_id}", response_model=SubscriptionResponse)
async def get_subscription(
    subscription_id: UUID,
    repository: SubscriptionRepository = Depends(get_subscription_repository),
):
    subscription = await repository.get(subscription_id)
    if subscription is None:
        raise ResourceNotFoundError("Subscription", subscription_id)
    return subscription


@subscriptions.post("/{subscription_id}/cancel", response_model=SubscriptionResponse)
async def cancel_subscription(
    subscription_id: UUID,
    repository: SubscriptionRepository = Depends(get_subscription_repository),
):
    subscription = await repository.cancel(subscription_id)
    if subscription is None:
        raise ResourceNotFoundError("Subscription", subscription_id)
    return subscription
