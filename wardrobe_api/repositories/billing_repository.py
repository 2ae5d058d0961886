"""Billing Repositories: products, plans, features and subscriptions.

Invariants:
    - Products, plans and features are deactivated, never deleted: payments
      reference plans and credit spends reference features
    - list_active() only returns rows with is_active = True
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select

from wardrobe_api.models.feature import Feature
from wardrobe_api.models.plan import Plan
from wardrobe_api.models.product import Product
from wardrobe_api.models.subscription import Subscription
from wardrobe_api.repositories.crud import CrudRepository


class ProductRepository(CrudRepository[Product]):
    model = Product
    resource_name = "Product"

    def _order_by(self) -> list:
        return [Product.name]

    async def list_active(self) -> list[Product]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Product)
                .where(Product.is_active.is_(True))
                .order_by(Product.name),
            )
            return list(result.scalars().all())

    async def deactivate(self, product_id: UUID) -> Product | None:
        return await self.update(product_id, {"is_active": False})


class PlanRepository(CrudRepository[Plan]):
    model = Plan
    resource_name = "Plan"

    def _order_by(self) -> list:
        return [Plan.price]

    async def list_active(self, product_id: UUID | None = None) -> list[Plan]:
        query = select(Plan).where(Plan.is_active.is_(True))
        if product_id is not None:
            query = query.where(Plan.product_id == product_id)
        async with self._db.session() as db:
            result = await db.execute(query.order_by(Plan.price))
            return list(result.scalars().all())

    async def deactivate(self, plan_id: UUID) -> Plan | None:
        return await self.update(plan_id, {"is_active": False})


class FeatureRepository(CrudRepository[Feature]):
    model = Feature
    resource_name = "Feature"
    unique_key = "feature_code"

    def _order_by(self) -> list:
        return [Feature.feature_code]

    async def list_active(self) -> list[Feature]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Feature)
                .where(Feature.is_active.is_(True))
                .order_by(Feature.feature_code),
            )
            return list(result.scalars().all())

    async def deactivate(self, feature_id: UUID) -> Feature | None:
        return await self.update(feature_id, {"is_active": False})


class SubscriptionRepository(CrudRepository[Subscription]):
    model = Subscription
    resource_name = "Subscription"

    def _order_by(self) -> list:
        return [Subscription.created_at.desc()]

    async def list_by_user(self, user_id: UUID) -> list[Subscription]:
        async with self._db.session() as db:
            result = await db.execute(
                select(Subscription)
                .where(Subscription.user_id == user_id)
                .order_by(Subscription.created_at.desc()),
            )
            return list(result.scalars().all())

    async def cancel(self, subscription_id: UUID) -> Subscription | None:
        """Mark cancelled; a second cancel keeps the first cancelled_at."""
        async with self._db.session() as db:
            row = await db.get(Subscription, subscription_id)
            if row is None:
                return None
            if row.cancelled_at is None:
                row.status = "cancelled"
                row.cancelled_at = datetime.now(timezone.utc)
                await db.commit()
                await db.refresh(row)
            return row
