"""Taxonomy Repositories: dress categories (with sub-categories), colour families, occasions.

Invariants:
    - Names are unique per table (sub-category names per category); collisions are 409
    - Categories are always returned with their sub-categories loaded
"""

from uuid import UUID

from sqlalchemy import select

from wardrobe_api.models.category import Category, SubCategory
from wardrobe_api.models.colour_family import ColourFamily
from wardrobe_api.models.function_occasion import FunctionOccasion
from wardrobe_api.repositories.crud import CrudRepository


class CategoryRepository(CrudRepository[Category]):
    model = Category
    resource_name = "Category"
    unique_key = "name"

    def _order_by(self) -> list:
        return [Category.name]

    async def create(self, data: dict) -> Category:
        # Empty collection up front: the row is returned detached, with nothing to lazy-load
        return await super().create({**data, "sub_categories": []})

    async def create_sub_category(
        self, category_id: UUID, data: dict,
    ) -> SubCategory:
        async with self._db.session() as db:
            row = SubCategory(category_id=category_id, **data)
            db.add(row)
            await self._commit(db, data)
            await db.refresh(row)
            return row

    async def list_sub_categories(self, category_id: UUID) -> list[SubCategory]:
        async with self._db.session() as db:
            result = await db.execute(
                select(SubCategory)
                .where(SubCategory.category_id == category_id)
                .order_by(SubCategory.name),
            )
            return list(result.scalars().all())

    async def update_sub_category(
        self, sub_category_id: UUID, changes: dict,
    ) -> SubCategory | None:
        async with self._db.session() as db:
            row = await db.get(SubCategory, sub_category_id)
            if row is None:
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            await self._commit(db, changes)
            await db.refresh(row)
            return row

    async def delete_sub_category(self, sub_category_id: UUID) -> bool:
        async with self._db.session() as db:
            row = await db.get(SubCategory, sub_category_id)
            if row is None:
                return False
            await db.delete(row)
            await db.commit()
            return True


class ColourFamilyRepository(CrudRepository[ColourFamily]):
    model = ColourFamily
    resource_name = "ColourFamily"
    unique_key = "name"

    def _order_by(self) -> list:
        return [ColourFamily.name]


class FunctionOccasionRepository(CrudRepository[FunctionOccasion]):
    model = FunctionOccasion
    resource_name = "FunctionOccasion"
    unique_key = "name"

    def _order_by(self) -> list:
        return [FunctionOccasion.name]
