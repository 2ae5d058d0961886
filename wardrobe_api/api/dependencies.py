"""Request Dependencies: services and repositories bound to the app's store handles.

Invariants:
    - Every dependency resolves its stores through get_stores (app.state), never a module global
    - The payment gateway is its own dependency so tests can override it alone
"""

from fastapi import Depends, Request

from wardrobe_api.config import Settings, get_settings
from wardrobe_api.core.domain_types import DocumentKind
from wardrobe_api.infrastructure.database import StoreHandles, get_stores
from wardrobe_api.infrastructure.payment_gateway import RazorpayGateway
from wardrobe_api.repositories.activity_log_repository import ActivityLogRepository
from wardrobe_api.repositories.billing_repository import (
    FeatureRepository, PlanRepository, ProductRepository,
    SubscriptionRepository,
)
from wardrobe_api.repositories.payment_repository import PaymentRepository
from wardrobe_api.repositories.taxonomy_repository import (
    CategoryRepository, ColourFamilyRepository, FunctionOccasionRepository,
)
from wardrobe_api.services import wiring
from wardrobe_api.services.document_linking import DocumentLinkingService
from wardrobe_api.services.onboarding import OnboardingService
from wardrobe_api.services.payment_service import PaymentService
from wardrobe_api.services.user_service import UserService
from wardrobe_api.services.wardrobe_service import WardrobeService


def client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


# ─── Services ───────────────────────────────────────────────────

def get_wardrobe_service(
    stores: StoreHandles = Depends(get_stores),
) -> WardrobeService:
    return wiring.build_wardrobe_service(stores)


def get_dress_service(
    stores: StoreHandles = Depends(get_stores),
) -> DocumentLinkingService:
    return wiring.build_linking_service(stores, DocumentKind.DRESS)


def get_outfit_service(
    stores: StoreHandles = Depends(get_stores),
) -> DocumentLinkingService:
    return wiring.build_linking_service(stores, DocumentKind.OUTFIT)


def get_onboarding_service(
    stores: StoreHandles = Depends(get_stores),
    settings: Settings = Depends(get_settings),
) -> OnboardingService:
    return wiring.build_onboarding_service(stores, settings)


def get_user_service(
    stores: StoreHandles = Depends(get_stores),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return wiring.build_user_service(stores, settings)


def get_payment_gateway(
    settings: Settings = Depends(get_settings),
) -> RazorpayGateway:
    return wiring.build_payment_gateway(settings)


def get_payment_service(
    stores: StoreHandles = Depends(get_stores),
    settings: Settings = Depends(get_settings),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
) -> PaymentService:
    return wiring.build_payment_service(stores, settings, gateway)


# ─── Plain repositories (CRUD routes) ──────────────────────────

def get_activity_log_repository(
    stores: StoreHandles = Depends(get_stores),
) -> ActivityLogRepository:
    return ActivityLogRepository(stores.relational)


def get_product_repository(
    stores: StoreHandles = Depends(get_stores),
) -> ProductRepository:
    return ProductRepository(stores.relational)


def get_plan_repository(
    stores: StoreHandles = Depends(get_stores),
) -> PlanRepository:
    return PlanRepository(stores.relational)


def get_feature_repository(
    stores: StoreHandles = Depends(get_stores),
) -> FeatureRepository:
    return FeatureRepository(stores.relational)

def get_subscription_repository(
    stores: StoreHandles = Depends(get_stores),
) -> SubscriptionRepository:
    return SubscriptionRepository(stores.relational)


def get_payment_repository(
    stores: StoreHandles = Depends(get_stores),
) -> PaymentRepository:
    return PaymentRepository(stores.relational)


def get_category_repository(
    stores: StoreHandles = Depends(get_stores),
) -> CategoryRepository:
    return CategoryRepository(stores.relational)


def get_colour_family_repository(
    stores: StoreHandles = Depends(get_stores),
) -> ColourFamilyRepository:
    return ColourFamilyRepository(stores.relational)


def get_occasion_repository(
    stores: StoreHandles = Depends(get_stores),
) -> FunctionOccasionRepository:
    return FunctionOccasionRepository(stores.relational)
