"""Wardrobe Routes: CRUD, per-user listing, reorder and contents.

Invariants:
    - Reserved wardrobes ("Your Dresses", "Your Outfits", "Your Favorites") cannot be
      renamed or deleted; that decision lives in the service's guard
    - Listing a user's wardrobes is 500 MISSING_DEFAULT_WARDROBE if "Your Dresses" is gone
    - Contents endpoints report stale links next to the resolved documents
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from wardrobe_api.api.dependencies import (
    client_ip, get_dress_service, get_outfit_service, get_wardrobe_service,
)
from wardrobe_api.schemas.wardrobe import (
    WardrobeCreate, WardrobeReorder, WardrobeResponse, WardrobeUpdate,
)
from wardrobe_api.services.document_linking import DocumentLinkingService
from wardrobe_api.services.wardrobe_service import WardrobeService

router = APIRouter(prefix="/api/v1/wardrobes", tags=["wardrobes"])


@router.post(
    "", response_model=WardrobeResponse, status_code=status.HTTP_201_CREATED,
)
async def create_wardrobe(
    body: WardrobeCreate,
    request: Request,
    service: WardrobeService = Depends(get_wardrobe_service),
):
    return await service.create_wardrobe(
        body.user_id,
        body.model_dump(exclude={"user_id"}, exclude_none=True),
        ip_address=client_ip(request),
    )


@router.get("", response_model=list[WardrobeResponse])
async def list_wardrobes(
    service: WardrobeService = Depends(get_wardrobe_service),
):
    return await service.list_all_wardrobes()


@router.get("/user/{user_id}", response_model=list[WardrobeResponse])
async def list_user_wardrobes(
    user_id: UUID, service: WardrobeService = Depends(get_wardrobe_service),
):
    return await service.list_for_user(user_id)


@router.put("/reorder", response_model=list[WardrobeResponse])
async def reorder_wardrobes(
    body: WardrobeReorder,
    request: Request,
    service: WardrobeService = Depends(get_wardrobe_service),
):
    return await service.reorder_wardrobes(
        body.user_id, body.wardrobe_ids, ip_address=client_ip(request),
    )


@router.get("/{wardrobe_id}", response_model=WardrobeResponse)
async def get_wardrobe(
    wardrobe_id: UUID,
    service: WardrobeService = Depends(get_wardrobe_service),
):
    return await service.get_wardrobe(wardrobe_id)


@router.patch("/{wardrobe_id}", response_model=WardrobeResponse)
async def update_wardrobe(
    wardrobe_id: UUID,
    body: WardrobeUpdate,
    request: Request,
    service: WardrobeService = Depends(get_wardrobe_service),
):
    return await service.update_wardrobe(
        wardrobe_id, body.changes(), ip_address=client_ip(request),
    )


@router.delete("/{wardrobe_id}")
async def delete_wardrobe(
    wardrobe_id: UUID,
    request: Request,
    service: WardrobeService = Depends(get_wardrobe_service),
):
    wardrobe = await service.delete_wardrobe(
        wardrobe_id, ip_address=client_ip(request),
    )
    return {
        "message": "Wardrobe deleted",
        "wardrobe": WardrobeResponse.model_validate(wardrobe).model_dump(mode="json"),
    }


@router.get("/{wardrobe_id}/dresses")
async def list_wardrobe_dresses(
    wardrobe_id: UUID,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    return (await service.list_wardrobe_contents(wardrobe_id)).to_dict()


@router.get("/{wardrobe_id}/outfits")
async def list_wardrobe_outfits(
    wardrobe_id: UUID,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    return (await service.list_wardrobe_contents(wardrobe_id)).to_dict()
