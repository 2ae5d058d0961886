"""Activity Logger: the single best-effort writer for user_actions_log.

Invariants:
    - record() NEVER raises: a failed write is logged at WARNING and dropped
    - Enum values are persisted as their .value; ids and metadata as JSON-safe values
    - Callers write exactly one entry per workflow outcome

Design Decisions:
    - One wrapper instead of try/except at every call site: workflows stay linear
      and the audit trail can never abort a primary mutation
"""

import logging
from uuid import UUID

from pydantic_core import to_jsonable_python

from wardrobe_api.core.domain_types import (
    ActionStatus, ActionType, SourceFeature, TargetEntityType,
)
from wardrobe_api.core.repository_protocols import ActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityLogger:
    def __init__(self, repository: ActivityLogRepository):
        self._repository = repository

    async def record(
        self,
        action_type: ActionType,
        status: ActionStatus,
        *,
        user_id: UUID | None = None,
        source_feature: SourceFeature | None = None,
        target_entity_type: TargetEntityType | None = None,
        target_entity_id: object = None,
        metadata: dict | None = None,
        ip_address: str | None = None,
    ) -> None:
        try:
            entry = {
                "user_id": user_id,
                "action_type": action_type.value,
                "status": status.value,
                "source_feature": source_feature.value if source_feature else None,
                "target_entity_type": (
                    target_entity_type.value if target_entity_type else None
                ),
                "target_entity_id": (
                    str(target_entity_id) if target_entity_id is not None else None
                ),
                "details": to_jsonable_python(metadata) if metadata else None,
                "ip_address": ip_address,
            }
            await self._repository.create(entry)
        except Exception as e:
            logger.warning(
                f"Failed to log activity {action_type.value}: {e}",
                extra={"user_id": user_id, "action_type": action_type.value},
            )
