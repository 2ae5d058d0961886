"""Activity Log Routes: manual entries, reads, delete and purge of user_actions_log.

Invariants:
    - Listings are newest first
    - The stored "details" column is exposed as "metadata"
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from wardrobe_api.api.dependencies import client_ip, get_activity_log_repository
from wardrobe_api.core.errors import ResourceNotFoundError
from wardrobe_api.repositories.activity_log_repository import ActivityLogRepository
from wardrobe_api.schemas.activity_log import ActivityLogCreate, ActivityLogResponse

router = APIRouter(prefix="/api/v1/logs", tags=["activity-logs"])


@router.post(
    "", response_model=ActivityLogResponse, status_code=status.HTTP_201_CREATED,
)
async def create_log(
    body: ActivityLogCreate,
    request: Request,
    repository: ActivityLogRepository = Depends(get_activity_log_repository),
):
    entry = body.model_dump(exclude={"metadata"})
    entry["details"] = body.metadata
    entry["ip_address"] = client_ip(request)
    return await repository.create(entry)


@router.get("", response_model=list[ActivityLogResponse])
async def list_logs(
    repository: ActivityLogRepository = Depends(get_activity_log_repository),
):
    return await repository.list_all()


@router.get("/user/{user_id}", response_model=list[ActivityLogResponse])
async def list_user_logs(
    user_id: UUID,
    repository: ActivityLogRepository = Depends(get_activity_log_repository),
):
    return await repository.list_by_user(user_id)


@router.get("/{log_id}", response_model=ActivityLogResponse)
async def get_log(
    log_id: UUID,
    repository: ActivityLogRepository = Depends(get_activity_log_repository),
):
    entry = await repository.get(log_id)
    if entry is None:
        raise ResourceNotFoundError("ActivityLog", log_id)
    return entry


@router.delete("/{log_id}")
async def delete_log(
    log_id: UUID,
    repository: ActivityLogRepository = Depends(get_activity_log_repository),
):
    if not await repository.delete(log_id):
        raise ResourceNotFoundError("ActivityLog", log_id)
    return {"message": "Log entry deleted", "id": str(log_id)}


@router.delete("")
async def purge_logs(
    repository: ActivityLogRepository = Depends(get_activity_log_repository),
):
    removed = await repository.purge()
    return {"message": "All log entries deleted", "deleted": removed}
