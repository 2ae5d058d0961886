"""Document Route Helpers: response shapes shared by the dress and outfit routers."""

from uuid import UUID

from wardrobe_api.core.errors import ErrorContext, ResourceNotFoundError
from wardrobe_api.core.outcomes import CreateAndLinkResult


def created_body(label: str, result: CreateAndLinkResult) -> dict:
    """Document and link outcome side by side; warning set when linking fell short."""
    return {
        "message": f"{label} created",
        "document": result.document,
        "link": result.link.to_dict(),
        "warning": result.link.warning,
    }


def link_not_found(wardrobe_id: UUID, document_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Link", f"{wardrobe_id}/{document_id}",
        ErrorContext(wardrobe_id=str(wardrobe_id), document_id=document_id),
    )
