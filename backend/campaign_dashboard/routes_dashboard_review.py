"""
Dashboard review API routes for administrators.
"""

from fastapi import APIRouter

from .auth import AdminDep, ensure_identity
from .container import ContainerDep, SessionDep
from .errors import error_response
from .schemas import ActionResponse, ApprovalHistoryRead, ReviewRequest

router = APIRouter(prefix="/dashboard-review", tags=["dashboard-review"])


@router.post("/review", response_model=ActionResponse)
async def review_dashboard(payload: ReviewRequest, session: SessionDep, container: ContainerDep, principal: AdminDep):
    """Approve or reject submitted dashboard items (reject requires a comment)."""
    ensure_identity(principal, payload.admin_id)
    result = await container.review_service(session).review(
        campaign_id=payload.campaign_id,
        admin_id=payload.admin_id,
        entity_types=payload.entity_types,
        action=payload.action,
        comment=payload.comment,
    )
    if result.is_err():
        return error_response(result.error)
    return ActionResponse(
        success=True,
        message=f"Dashboard items {result.value.status}",
        data=result.value.model_dump(by_alias=True, mode="json"),
    )


@router.get("/{campaign_id}/history", response_model=list[ApprovalHistoryRead])
async def get_review_history(campaign_id: str, session: SessionDep, container: ContainerDep, principal: AdminDep):
    result = await container.review_service(session).get_history(campaign_id)
    if result.is_err():
        return error_response(result.error)
    return result.value
