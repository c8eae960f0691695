from __future__ import annotations

import logging

from ..entities import DashboardCampaignSummary
from ..errors import AppError
from ..mappers import campaign_own_summary_to_dto, campaign_summary_to_dto
from ..repositories.base import UnitOfWork
from ..repositories.campaigns import CampaignRepository
from ..repositories.dashboard import DashboardCampaignSummaryRepository
from ..result import Err, Ok, Result
from ..schemas import CampaignSummaryRead, CampaignSummaryWrite

logger = logging.getLogger(__name__)


class DashboardCampaignSummaryService:
    def __init__(
        self,
        uow: UnitOfWork,
        campaigns: CampaignRepository,
        summaries: DashboardCampaignSummaryRepository,
    ):
        self.uow = uow
        self.campaigns = campaigns
        self.summaries = summaries

    async def find_by_campaign_slug(self, slug: str) -> Result[CampaignSummaryRead]:
        found = await self.summaries.find_by_campaign_slug(slug)
        if found.is_err():
            return found
        if found.value is not None:
            return Ok(campaign_summary_to_dto(found.value))
        campaign = await self.campaigns.get_by_slug(slug)
        if campaign.is_err():
            return campaign
        return Ok(campaign_own_summary_to_dto(campaign.value))

    async def create_or_update(self, dto: CampaignSummaryWrite) -> Result[CampaignSummaryRead]:
        result = await self.save(dto)
        if result.is_err():
            await self.uow.rollback()
            return result
        committed = await self.uow.commit()
        if committed.is_err():
            return committed
        return Ok(campaign_summary_to_dto(result.value))

    async def save(self, dto: CampaignSummaryWrite) -> Result[DashboardCampaignSummary]:
        campaign = await self.campaigns.get_by_id(dto.campaign_id)
        if campaign.is_err():
            return campaign
        existing = await self.summaries.find_by_campaign_id(dto.campaign_id)
        if existing.is_err():
            return existing
        if existing.value is not None:
            return await self.summaries.update(existing.value.update(dto.summary, dto.tag_line))
        try:
            summary = DashboardCampaignSummary.create(dto.campaign_id, summary=dto.summary, tag_line=dto.tag_line)
        except AppError as exc:
            return Err(exc)
        logger.info(f"[campaign-summary] creating dashboard summary for campaign {dto.campaign_id}")
        return await self.summaries.create(summary)
