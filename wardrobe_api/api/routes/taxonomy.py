"""Taxonomy Routes: dress categories with sub-categories, colour families, occasions.

Invariants:
    - Names are unique per table; a collision is 409 DUPLICATE_RESOURCE
    - Category responses always embed their sub-categories
    - Deleting a category deletes its sub-categories
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from wardrobe_api.api.dependencies import (
    get_category_repository, get_colour_family_repository, get_occasion_repository,
)
from wardrobe_api.core.errors import ResourceNotFoundError
from wardrobe_api.repositories.taxonomy_repository import (
    CategoryRepository, ColourFamilyRepository, FunctionOccasionRepository,
)
from wardrobe_api.schemas.taxonomy import (
    CategoryCreate, CategoryResponse, CategoryUpdate, ColourFamilyCreate,
    ColourFamilyResponse, ColourFamilyUpdate, OccasionCreate, OccasionResponse,
    OccasionUpdate, SubCategoryResponse,
)

categories = APIRouter(prefix="/api/v1/categories", tags=["taxonomy"])
colour_families = APIRouter(prefix="/api/v1/colour-families", tags=["taxonomy"])
occasions = APIRouter(prefix="/api/v1/occasions", tags=["taxonomy"])


def _found(row, resource_type: str, row_id: UUID):
    if row is None:
        raise ResourceNotFoundError(resource_type, row_id)
    return row


def _deleted(removed: bool, resource_type: str, row_id: UUID) -> dict:
    if not removed:
        raise ResourceNotFoundError(resource_type, row_id)
    return {"message": f"{resource_type} deleted", "id": str(row_id)}


# ─── Categories ─────────────────────────────────────────────────

@categories.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate,
    repository: CategoryRepository = Depends(get_category_repository),
):
    return await repository.create(body.model_dump())


@categories.get("", response_model=list[CategoryResponse])
async def list_categories(
    repository: CategoryRepository = Depends(get_category_repository),
):
    return await repository.list_all()


@categories.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    repository: CategoryRepository = Depends(get_category_repository),
):
    return _found(await repository.get(category_id), "Category", category_id)


@categories.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    body: CategoryUpdate,
    repository: CategoryRepository = Depends(get_category_repository),
):
    return _found(
        await repository.update(category_id, body.changes()),
        "Category", category_id,
    )


@categories.delete("/{category_id}")
async def delete_category(
    category_id: UUID,
    repository: CategoryRepository = Depends(get_category_repository),
):
    return _deleted(await repository.delete(category_id), "Category", category_id)


@categories.post(
    "/{category_id}/sub-categories",
    response_model=SubCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_sub_category(
    category_id: UUID,
    body: CategoryCreate,
    repository: CategoryRepository = Depends(get_category_repository),
):
    _found(await repository.get(category_id), "Category", category_id)
    return await repository.create_sub_category(category_id, body.model_dump())


@categories.get(
    "/{category_id}/sub-categories", response_model=list[SubCategoryResponse],
)
async def list_sub_categories(
    category_id: UUID,
    repository: CategoryRepository = Depends(get_category_repository),
):
    _found(await repository.get(category_id), "Category", category_id)
    return await repository.list_sub_categories(category_id)


@categories.patch(
    "/sub-categories/{sub_category_id}", response_model=SubCategoryResponse,
)
async def update_sub_category(
    sub_category_id: UUID,
    body: CategoryUpdate,
    repository: CategoryRepository = Depends(get_category_repository),
):
    return _found(
        await repository.update_sub_category(sub_category_id, body.changes()),
        "SubCategory", sub_category_id,
    )


@categories.delete("/sub-categories/{sub_category_id}")
async def delete_sub_category(
    sub_category_id: UUID,
    repository: CategoryRepository = Depends(get_category_repository),
):
    return _deleted(
        await repository.delete_sub_category(sub_category_id),
        "SubCategory", sub_category_id,
    )


# ─── Colour families ────────────────────────────────────────────

@colour_families.post(
    "", response_model=ColourFamilyResponse, status_code=status.HTTP_201_CREATED,
)
async def create_colour_family(
    body: ColourFamilyCreate,
    repository: ColourFamilyRepository = Depends(get_colour_family_repository),
):
    return await repository.create(body.model_dump())


@colour_families.get("", response_model=list[ColourFamilyResponse])
async def list_colour_families(
    repository: ColourFamilyRepository = Depends(get_colour_family_repository),
):
    return await repository.list_all()


@colour_families.get("/{family_id}", response_model=ColourFamilyResponse)
async def get_colour_family(
    family_id: UUID,
    repository: ColourFamilyRepository = Depends(get_colour_family_repository),
):
    return _found(await repository.get(family_id), "ColourFamily", family_id)


@colour_families.patch("/{family_id}", response_model=ColourFamilyResponse)
async def update_colour_family(
    family_id: UUID,
    body: ColourFamilyUpdate,
    repository: ColourFamilyRepository = Depends(get_colour_family_repository),
):
    return _found(
        await repository.update(family_id, body.changes()),
        "ColourFamily", family_id,
    )


@colour_families.delete("/{family_id}")
async def delete_colour_family(
    family_id: UUID,
    repository: ColourFamilyRepository = Depends(get_colour_family_repository),
):
    return _deleted(await repository.delete(family_id), "ColourFamily", family_id)


# ─── Function occasions ─────────────────────────────────────────

@occasions.post(
    "", response_model=OccasionResponse, status_code=status.HTTP_201_CREATED,
)
async def create_occasion(
    body: OccasionCreate,
    repository: FunctionOccasionRepository = Depends(get_occasion_repository),
):
    return await repository.create(body.model_dump())


@occasions.get("", response_model=list[OccasionResponse])
async def list_occasions(
    repository: FunctionOccasionRepository = Depends(get_occasion_repository),
):
    return await repository.list_all()


@occasions.get("/{occasion_id}", response_model=OccasionResponse)
async def get_occasion(
    occasion_id: UUID,
    repository: FunctionOccasionRepository = Depends(get_occasion_repository),
):
    return _found(await repository.get(occasion_id), "Occasion", occasion_id)


@occasions.patch("/{occasion_id}", response_model=OccasionResponse)
async def update_occasion(
    occasion_id: UUID,
    body: OccasionUpdate,
    repository: FunctionOccasionRepository = Depends(get_occasion_repository),
):
    return _found(
        await repository.update(occasion_id, body.changes()),
        "Occasion", occasion_id,
    )


@occasions.delete("/{occasion_id}")
async def delete_occasion(
    occasion_id: UUID,
    repository: FunctionOccasionRepository = Depends(get_occasion_repository),
):
    return _deleted(await repository.delete(occasion_id), "Occasion", occasion_id)
