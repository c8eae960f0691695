"""
Dashboard campaign info API routes.
"""

from fastapi import APIRouter

from .auth import UserDep
from .container import ContainerDep, SessionDep
from .errors import error_response
from .schemas import CampaignInfoRead, CampaignInfoWrite

router = APIRouter(prefix="/dashboard-campaign-info", tags=["dashboard-campaign-info"])


@router.get("/{slug}", response_model=CampaignInfoRead)
async def get_campaign_info(slug: str, session: SessionDep, container: ContainerDep):
    result = await container.campaign_info_service(session).find_by_campaign_slug(slug)
    if result.is_err():
        return error_response(result.error)
    return result.value


@router.post("", response_model=CampaignInfoRead)
async def save_campaign_info(
    payload: CampaignInfoWrite, session: SessionDep, container: ContainerDep, principal: UserDep
):
    result = await container.campaign_info_service(session).create_or_update(payload)
    if result.is_err():
        return error_response(result.error)
    return result.value
