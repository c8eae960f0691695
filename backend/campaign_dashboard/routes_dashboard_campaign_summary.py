"""
Dashboard campaign summary API routes.
"""

from fastapi import APIRouter

from .auth import UserDep
from .container import ContainerDep, SessionDep
from .errors import error_response
from .schemas import CampaignSummaryRead, CampaignSummaryWrite

router = APIRouter(prefix="/dashboard-campaign-summary", tags=["dashboard-campaign-summary"])


@router.get("/{slug}", response_model=CampaignSummaryRead)
async def get_campaign_summary(slug: str, session: SessionDep, container: ContainerDep):
    result = await container.campaign_summary_service(session).find_by_campaign_slug(slug)
    if result.is_err():
        return error_response(result.error)
    return result.value


@router.post("", response_model=CampaignSummaryRead)
async def save_campaign_summary(
    payload: CampaignSummaryWrite, session: SessionDep, container: ContainerDep, principal: UserDep
):
    result = await container.campaign_summary_service(session).create_or_update(payload)
    if result.is_err():
        return error_response(result.error)
    return result.value
