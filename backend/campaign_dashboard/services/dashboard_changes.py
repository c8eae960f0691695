from __future__ import annotations

import logging

from ..repositories.base import UnitOfWork
from ..result import Ok, Result
from ..schemas import SaveChangesRequest
from .dashboard_campaign_info import DashboardCampaignInfoService
from .dashboard_campaign_summary import DashboardCampaignSummaryService
from .dashboard_owners import DashboardOwnersService
from .dashboard_socials import DashboardSocialsService

logger = logging.getLogger(__name__)


class DashboardChangesService:
    """Saves every dashboard section of a campaign in one go."""

    def __init__(
        self,
        uow: UnitOfWork,
        campaign_info: DashboardCampaignInfoService,
        campaign_summary: DashboardCampaignSummaryService,
        socials: DashboardSocialsService,
        owners: DashboardOwnersService,
    ):
        self.uow = uow
        self.campaign_info = campaign_info
        self.campaign_summary = campaign_summary
        self.socials = socials
        self.owners = owners

    async def save_changes(self, request: SaveChangesRequest) -> Result[list[str]]:
        """Run each section's upsert; the first failure rolls back all of them."""
        campaign_id = request.campaign_id
        saved: list[str] = []
        sections = []
        if request.campaign_info is not None:
            dto = request.campaign_info.model_copy(update={"campaign_id": campaign_id})
            sections.append(("campaignInfo", lambda dto=dto: self.campaign_info.save(dto)))
        if request.campaign_summary is not None:
            dto = request.campaign_summary.model_copy(update={"campaign_id": campaign_id})
            sections.append(("campaignSummary", lambda dto=dto: self.campaign_summary.save(dto)))
        if request.socials is not None:
            dto = request.socials.model_copy(update={"campaign_id": campaign_id})
            sections.append(("socials", lambda dto=dto: self.socials.save(dto)))
        if request.owners is not None:
            sections.append(("owners", lambda: self.owners.save(campaign_id, request.owners)))

        for name, save in sections:
            result = await save()
            if result.is_err():
                logger.warning(f"[dashboard] save-changes for {campaign_id} failed at {name}: {result.error.code}")
                await self.uow.rollback()
                return result
            saved.append(name)

        committed = await self.uow.commit()
        if committed.is_err():
            return committed
        logger.info(f"[dashboard] saved {saved} for campaign {campaign_id}")
        return Ok(saved)
