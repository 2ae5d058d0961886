"""Dress Routes: create-and-link, reads, updates, wardrobe links and cascading delete.

Invariants:
    - POST /dresses is 201 whenever the document was written; link shortfalls are
      reported in "link" with warning PARTIAL_WORKFLOW_FAILURE
    - Removing a dress from "Your Dresses" is 403; deleting the dress is the only way out
    - Unlinking a pair that is not linked is 404
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from wardrobe_api.api.dependencies import client_ip, get_dress_service
from wardrobe_api.api.routes.document_helpers import created_body, link_not_found
from wardrobe_api.schemas.document import (
    DressCreate, DressUpdate, WardrobeLinkRequest,
)
from wardrobe_api.services.document_linking import DocumentLinkingService

router = APIRouter(prefix="/api/v1/dresses", tags=["dresses"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_dress(
    body: DressCreate,
    request: Request,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    result = await service.create_and_link(
        body.user_id, body.document(), body.wardrobe_id,
        ip_address=client_ip(request),
    )
    return created_body("Dress", result)


@router.get("")
async def list_dresses(
    user_id: UUID | None = None,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    if user_id is not None:
        return await service.list_for_user(user_id)
    return await service.list_all()


@router.get("/{dress_id}")
async def get_dress(
    dress_id: str,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    return await service.get_document(dress_id)


@router.patch("/{dress_id}")
async def update_dress(
    dress_id: str,
    body: DressUpdate,
    request: Request,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    return await service.update_document(
        dress_id, body.changes(), ip_address=client_ip(request),
    )


@router.delete("/{dress_id}")
async def delete_dress(
    dress_id: str,
    request: Request,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    deleted = await service.delete_document_cascade(
        dress_id, ip_address=client_ip(request),
    )
    return {"message": "Dress deleted", **deleted.to_dict()}


@router.get("/{dress_id}/wardrobes")
async def list_dress_wardrobes(
    dress_id: str,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    wardrobe_ids = await service.wardrobes_containing(dress_id)
    return {"dress_id": dress_id, "wardrobe_ids": [str(w) for w in wardrobe_ids]}


@router.post("/{dress_id}/wardrobes", status_code=status.HTTP_201_CREATED)
async def add_dress_to_wardrobe(
    dress_id: str,
    body: WardrobeLinkRequest,
    request: Request,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    link = await service.link_document(
        body.wardrobe_id, dress_id, ip_address=client_ip(request),
    )
    return {
        "message": "Dress added to wardrobe",
        "link_id": str(link.id),
        "wardrobe_id": str(body.wardrobe_id),
        "dress_id": dress_id,
    }


@router.delete("/{dress_id}/wardrobes/{wardrobe_id}")
async def remove_dress_from_wardrobe(
    dress_id: str,
    wardrobe_id: UUID,
    request: Request,
    service: DocumentLinkingService = Depends(get_dress_service),
):
    if not await service.unlink_document(
        wardrobe_id, dress_id, ip_address=client_ip(request),
    ):
        raise link_not_found(wardrobe_id, dress_id)
    return {
        "message": "Dress removed from wardrobe",
        "wardrobe_id": str(wardrobe_id),
        "dress_id": dress_id,
    }
