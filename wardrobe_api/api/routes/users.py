"""User Routes: profile reads, updates, soft and hard delete.

Invariants:
    - Only active users are visible; a soft-deleted user is 404 everywhere
    - password is accepted on update and never returned
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from wardrobe_api.api.dependencies import client_ip, get_user_service
from wardrobe_api.schemas.user import UserResponse, UserUpdate
from wardrobe_api.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    return await service.get_user(user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    return await service.update_user(
        user_id, body.changes(), ip_address=client_ip(request),
    )


@router.delete("/{user_id}", status_code=status.HTTP_200_OK)
async def delete_user(
    user_id: UUID,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    """Soft delete: the row stays, is_active becomes false."""
    await service.delete_user(user_id, ip_address=client_ip(request))
    return {"message": "User deactivated", "user_id": str(user_id)}


@router.delete("/{user_id}/hard", status_code=status.HTTP_200_OK)
async def hard_delete_user(
    user_id: UUID,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    """Admin delete: removes the user, wardrobes, links and billing rows."""
    await service.hard_delete_user(user_id, ip_address=client_ip(request))
    return {"message": "User permanently deleted", "user_id": str(user_id)}
