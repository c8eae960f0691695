"""
Dashboard submission API routes: campaign owners send items for review.
"""

from fastapi import APIRouter

from .auth import UserDep, ensure_identity
from .container import ContainerDep, SessionDep
from .errors import error_response
from .schemas import ActionResponse, ApprovalRead, SubmitRequest

router = APIRouter(prefix="/dashboard-submission", tags=["dashboard-submission"])


@router.post("/submit", response_model=ActionResponse)
async def submit_for_review(payload: SubmitRequest, session: SessionDep, container: ContainerDep, principal: UserDep):
    ensure_identity(principal, payload.user_id)
    result = await container.submission_service(session).submit_for_review(
        campaign_id=payload.campaign_id,
        user_id=payload.user_id,
        entity_types=payload.entity_types,
        submission_note=payload.submission_note,
    )
    if result.is_err():
        return error_response(result.error)
    return ActionResponse(
        success=True,
        message="Dashboard items submitted for review",
        data=result.value.model_dump(by_alias=True, mode="json"),
    )


@router.get("/{campaign_id}/approval", response_model=ApprovalRead)
async def get_approval(campaign_id: str, session: SessionDep, container: ContainerDep, principal: UserDep):
    """Current review state of a campaign's dashboard."""
    result = await container.submission_service(session).get_approval(campaign_id)
    if result.is_err():
        return error_response(result.error)
    return result.value
