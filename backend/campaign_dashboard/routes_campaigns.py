"""
Campaign API routes.
"""

from typing import Optional

from fastapi import APIRouter, Query

from .auth import AdminDep
from .container import ContainerDep, SessionDep
from .errors import error_response
from .schemas import Page, PendingCampaignRead

router = APIRouter(prefix="/campaign", tags=["campaign"])


@router.get("/pending", response_model=Page[PendingCampaignRead])
async def get_pending_campaigns(
    session: SessionDep,
    container: ContainerDep,
    principal: AdminDep,
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100, alias="perPage"),
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    campaign_stage: Optional[str] = Query(None, alias="campaignStage"),
):
    """Campaigns whose dashboard changes are waiting for review."""
    result = await container.campaign_service(session).get_pending_campaigns(
        page=page,
        per_page=per_page,
        search_term=search_term,
        campaign_stage=campaign_stage,
    )
    if result.is_err():
        return error_response(result.error)
    return result.value
