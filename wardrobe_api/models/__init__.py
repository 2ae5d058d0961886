"""ORM Models: SQLAlchemy declarative models for both stores.

Invariants:
    - Relational models inherit from Base; StoredDocument inherits from DocumentBase
    - User is the aggregate root for wardrobes, payments and subscriptions

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from wardrobe_api.models.user import User  # noqa: F401
from wardrobe_api.models.wardrobe import Wardrobe  # noqa: F401
from wardrobe_api.models.wardrobe_dress import WardrobeDress  # noqa: F401
from wardrobe_api.models.wardrobe_outfit import WardrobeOutfit  # noqa: F401
from wardrobe_api.models.activity_log import ActivityLog  # noqa: F401
from wardrobe_api.models.product import Product  # noqa: F401
from wardrobe_api.models.feature import Feature  # noqa: F401
from wardrobe_api.models.plan import Plan  # noqa: F401
from wardrobe_api.models.payment import Payment  # noqa: F401
from wardrobe_api.models.credit_transaction import CreditTransaction  # noqa: F401
from wardrobe_api.models.subscription import Subscription  # noqa: F401
from wardrobe_api.models.category import Category, SubCategory  # noqa: F401
from wardrobe_api.models.colour_family import ColourFamily  # noqa: F401
from wardrobe_api.models.function_occasion import FunctionOccasion  # noqa: F401
from wardrobe_api.models.document import StoredDocument  # noqa: F401
