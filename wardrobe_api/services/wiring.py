"""Service Wiring: builds services from the two store handles.

Invariants:
    - The only place repositories are bound to a store manager
    - Dresses and outfits get the same DocumentLinkingService, different kind
"""

from wardrobe_api.config import Settings
from wardrobe_api.core.domain_types import DocumentKind
from wardrobe_api.infrastructure.database import StoreHandles
from wardrobe_api.infrastructure.payment_gateway import RazorpayGateway
from wardrobe_api.models.wardrobe_dress import WardrobeDress
from wardrobe_api.models.wardrobe_outfit import WardrobeOutfit
from wardrobe_api.repositories.activity_log_repository import ActivityLogRepository
from wardrobe_api.repositories.billing_repository import PlanRepository
from wardrobe_api.repositories.document_repository import (
    DocumentRepository, OutfitRepository,
)
from wardrobe_api.repositories.link_repository import LinkRepository
from wardrobe_api.repositories.payment_repository import PaymentRepository
from wardrobe_api.repositories.user_repository import UserRepository
from wardrobe_api.repositories.wardrobe_repository import WardrobeRepository
from wardrobe_api.services.activity_logger import ActivityLogger
from wardrobe_api.services.document_linking import DocumentLinkingService
from wardrobe_api.services.onboarding import OnboardingService
from wardrobe_api.services.payment_service import PaymentService
from wardrobe_api.services.user_service import UserService
from wardrobe_api.services.wardrobe_service import WardrobeService

_LINK_MODELS = {
    DocumentKind.DRESS: WardrobeDress,
    DocumentKind.OUTFIT: WardrobeOutfit,
}


def build_activity_logger(stores: StoreHandles) -> ActivityLogger:
    return ActivityLogger(ActivityLogRepository(stores.relational))


def build_wardrobe_service(stores: StoreHandles) -> WardrobeService:
    return WardrobeService(
        WardrobeRepository(stores.relational),
        UserRepository(stores.relational),
        build_activity_logger(stores),
    )


def build_linking_service(
    stores: StoreHandles, kind: DocumentKind,
) -> DocumentLinkingService:
    documents = (
        OutfitRepository(stores.documents) if kind is DocumentKind.OUTFIT
        else DocumentRepository(stores.documents, kind)
    )
    return DocumentLinkingService(
        kind,
        documents,
        LinkRepository(stores.relational, _LINK_MODELS[kind]),
        WardrobeRepository(stores.relational),
        UserRepository(stores.relational),
        build_activity_logger(stores),
    )


def build_onboarding_service(
    stores: StoreHandles, settings: Settings,
) -> OnboardingService:
    return OnboardingService(
        UserRepository(stores.relational),
        build_wardrobe_service(stores),
        build_linking_service(stores, DocumentKind.DRESS),
        build_activity_logger(stores),
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def build_user_service(stores: StoreHandles, settings: Settings) -> UserService:
    return UserService(
        UserRepository(stores.relational),
        build_activity_logger(stores),
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def build_payment_gateway(settings: Settings) -> RazorpayGateway:
    return RazorpayGateway(
        settings.razorpay_key_id,
        settings.razorpay_key_secret,
        base_url=settings.razorpay_base_url,
    )


def build_payment_service(
    stores: StoreHandles, settings: Settings, gateway: RazorpayGateway,
) -> PaymentService:
    return PaymentService(
        PaymentRepository(stores.relational),
        PlanRepository(stores.relational),
        UserRepository(stores.relational),
        gateway,
        build_activity_logger(stores),
        key_secret=settings.razorpay_key_secret,
    )
