"""Domain Types: identity aliases and the enums shared by services and storage.

Invariants:
    - UserId, WardrobeId wrap UUIDs (relational rows); DocumentId wraps the
      document store's opaque string id
    - Activity-log vocabulary (action, status, feature, entity) is encoded as
      Enums; repositories persist .value

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
WardrobeId = NewType("WardrobeId", UUID)
DocumentId = NewType("DocumentId", str)


# ─── Document kinds ──────────────────────────────────────────────

class DocumentKind(str, Enum):
    """Document collections living in the document store."""
    DRESS = "dress"
    OUTFIT = "outfit"


class LinkStatus(str, Enum):
    """How far a create-and-link workflow got after the document was written."""
    LINKED = "linked"
    PARTIAL = "partial"
    FAILED = "failed"


# ─── Activity log vocabulary ─────────────────────────────────────

class ActionStatus(str, Enum):
    SUCCESS = "SUCCESS"
    PARTIAL_SUCCESS = "PARTIAL_SUCCESS"
    FAILURE = "FAILURE"


class SourceFeature(str, Enum):
    AUTHENTICATION = "AuthenticationService"
    ONBOARDING = "OnboardingService"
    ONBOARDING_UPDATE = "OnboardingUpdateService"
    USER_MANAGEMENT = "UserManagement"
    WARDROBE_MANAGEMENT = "WardrobeManagement"
    DRESS_MANAGEMENT = "DressManagement"
    OUTFIT_MANAGEMENT = "OutfitManagement"
    BILLING = "Billing"


class TargetEntityType(str, Enum):
    USER = "USER"
    WARDROBE = "WARDROBE"
    DRESS = "DRESS"
    OUTFIT = "OUTFIT"
    WARDROBE_DRESS_LINK = "WARDROBE_DRESS_LINK"
    WARDROBE_OUTFIT_LINK = "WARDROBE_OUTFIT_LINK"
    PAYMENT = "PAYMENT"


class ActionType(str, Enum):
    # Signup / onboarding
    SIGNUP_USER = "SIGNUP_USER"
    SIGNUP_WARDROBE_FAILURE = "SIGNUP_WARDROBE_FAILURE"
    ONBOARDING_FAILURE = "ONBOARDING_FAILURE"
    ONBOARDING_UPDATE_FAILURE = "ONBOARDING_UPDATE_FAILURE"
    UPDATE_USER_PROFILE = "UPDATE_USER_PROFILE"
    DELETE_USER = "DELETE_USER"
    HARD_DELETE_USER = "HARD_DELETE_USER"

    # Wardrobes
    CREATE_WARDROBE = "CREATE_WARDROBE"
    CREATE_WARDROBE_FAILURE = "CREATE_WARDROBE_FAILURE"
    UPDATE_WARDROBE = "UPDATE_WARDROBE"
    DELETE_WARDROBE = "DELETE_WARDROBE"
    REORDER_WARDROBES = "REORDER_WARDROBES"

    # Dresses
    ADD_DRESS = "ADD_DRESS"
    UPDATE_DRESS = "UPDATE_DRESS"
    DELETE_DRESS = "DELETE_DRESS"
    LINK_DRESS_TO_WARDROBE = "LINK_DRESS_TO_WARDROBE"
    REMOVE_DRESS_FROM_WARDROBE = "REMOVE_DRESS_FROM_WARDROBE"

    # Outfits
    ADD_OUTFIT = "ADD_OUTFIT"
    UPDATE_OUTFIT = "UPDATE_OUTFIT"
    DELETE_OUTFIT = "DELETE_OUTFIT"
    LINK_OUTFIT_TO_WARDROBE = "LINK_OUTFIT_TO_WARDROBE"
    REMOVE_OUTFIT_FROM_WARDROBE = "REMOVE_OUTFIT_FROM_WARDROBE"

    # Billing
    CREATE_ORDER = "CREATE_ORDER"
    VERIFY_PAYMENT = "VERIFY_PAYMENT"
