"""Outfit Routes: same workflows as dresses, defaulting to "Your Outfits".

Invariants:
    - Every outfit is linked to "Your Outfits", plus wardrobe_id when given
    - GET /outfits/by-dress/{dress_id} lists outfits whose components reference the dress
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from wardrobe_api.api.dependencies import client_ip, get_outfit_service
from wardrobe_api.api.routes.document_helpers import created_body, link_not_found
from wardrobe_api.schemas.document import (
    OutfitCreate, OutfitUpdate, WardrobeLinkRequest,
)
from wardrobe_api.services.document_linking import DocumentLinkingService

router = APIRouter(prefix="/api/v1/outfits", tags=["outfits"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_outfit(
    body: OutfitCreate,
    request: Request,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    result = await service.create_and_link(
        body.user_id, body.document(), body.wardrobe_id,
        ip_address=client_ip(request),
    )
    return created_body("Outfit", result)


@router.get("")
async def list_outfits(
    user_id: UUID | None = None,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    if user_id is not None:
        return await service.list_for_user(user_id)
    return await service.list_all()


@router.get("/by-dress/{dress_id}")
async def list_outfits_with_dress(
    dress_id: str,
    user_id: UUID | None = None,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    return await service.documents.find_by_dress_component(dress_id, user_id)


@router.get("/{outfit_id}")
async def get_outfit(
    outfit_id: str,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    return await service.get_document(outfit_id)


@router.patch("/{outfit_id}")
async def update_outfit(
    outfit_id: str,
    body: OutfitUpdate,
    request: Request,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    return await service.update_document(
        outfit_id, body.changes(), ip_address=client_ip(request),
    )


@router.delete("/{outfit_id}")
async def delete_outfit(
    outfit_id: str,
    request: Request,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    deleted = await service.delete_document_cascade(
        outfit_id, ip_address=client_ip(request),
    )
    return {"message": "Outfit deleted", **deleted.to_dict()}


@router.get("/{outfit_id}/wardrobes")
async def list_outfit_wardrobes(
    outfit_id: str,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    wardrobe_ids = await service.wardrobes_containing(outfit_id)
    return {"outfit_id": outfit_id, "wardrobe_ids": [str(w) for w in wardrobe_ids]}


@router.post("/{outfit_id}/wardrobes", status_code=status.HTTP_201_CREATED)
async def add_outfit_to_wardrobe(
    outfit_id: str,
    body: WardrobeLinkRequest,
    request: Request,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    link = await service.link_document(
        body.wardrobe_id, outfit_id, ip_address=client_ip(request),
    )
    return {
        "message": "Outfit added to wardrobe",
        "link_id": str(link.id),
        "wardrobe_id": str(body.wardrobe_id),
        "outfit_id": outfit_id,
    }


@router.delete("/{outfit_id}/wardrobes/{wardrobe_id}")
async def remove_outfit_from_wardrobe(
    outfit_id: str,
    wardrobe_id: UUID,
    request: Request,
    service: DocumentLinkingService = Depends(get_outfit_service),
):
    if not await service.unlink_document(
        wardrobe_id, outfit_id, ip_address=client_ip(request),
    ):
        raise link_not_found(wardrobe_id, outfit_id)
    return {
        "message": "Outfit removed from wardrobe",
        "wardrobe_id": str(wardrobe_id),
        "outfit_id": outfit_id,
    }
