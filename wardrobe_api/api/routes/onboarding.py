"""Onboarding Routes: signup, full onboarding and onboarding updates.

Invariants:
    - Signup responds with the user id and all three default wardrobe ids, or an error
    - Created dresses are reported with their link outcome, never folded into one flag
"""

from fastapi import APIRouter, Depends, Request, status

from wardrobe_api.api.dependencies import client_ip, get_onboarding_service
from wardrobe_api.core.outcomes import CreateAndLinkResult
from wardrobe_api.schemas.onboarding import (
    CompleteOnboardingRequest, UpdateOnboardingRequest,
)
from wardrobe_api.schemas.user import SignupRequest
from wardrobe_api.services.onboarding import OnboardingService

router = APIRouter(prefix="/api/v1/onboarding", tags=["onboarding"])


def _dress_results(results: list[CreateAndLinkResult]) -> list[dict]:
    return [
        {"document": r.document, "link": r.link.to_dict()} for r in results
    ]


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    request: Request,
    service: OnboardingService = Depends(get_onboarding_service),
):
    result = await service.bootstrap_user(
        body.email, body.password, body.name, ip_address=client_ip(request),
    )
    return {"message": "User created", **result.to_dict()}


@router.post("/complete", status_code=status.HTTP_201_CREATED)
async def complete_onboarding(
    body: CompleteOnboardingRequest,
    request: Request,
    service: OnboardingService = Depends(get_onboarding_service),
):
    result, dresses = await service.complete_onboarding(
        body.user_details.model_dump(exclude_none=True),
        body.user_preferences.model_dump(exclude_none=True)
        if body.user_preferences else None,
        [dress.document() for dress in body.dresses],
        ip_address=client_ip(request),
    )
    return {
        "message": "Onboarding completed",
        **result.to_dict(),
        "dresses": _dress_results(dresses),
    }


@router.put("/update")
async def update_onboarding(
    body: UpdateOnboardingRequest,
    request: Request,
    service: OnboardingService = Depends(get_onboarding_service),
):
    dresses = await service.update_onboarding_details(
        body.user_id,
        body.wardrobe_id,
        body.user_details.model_dump(exclude_unset=True)
        if body.user_details else None,
        body.wardrobe_details.changes() if body.wardrobe_details else None,
        [dress.document() for dress in body.dresses],
        ip_address=client_ip(request),
    )
    return {
        "message": "Onboarding details updated",
        "user_id": str(body.user_id),
        "wardrobe_id": str(body.wardrobe_id),
        "dresses": _dress_results(dresses),
    }
