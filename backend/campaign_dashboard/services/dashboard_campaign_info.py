from __future__ import annotations

import logging

from ..entities import DashboardCampaignInfo
from ..errors import AppError
from ..mappers import campaign_info_to_dto, default_campaign_info_dto
from ..repositories.base import UnitOfWork
from ..repositories.campaigns import CampaignInfoRepository, CampaignRepository
from ..repositories.dashboard import DashboardCampaignInfoRepository
from ..result import Err, Ok, Result
from ..schemas import CampaignInfoRead, CampaignInfoWrite

logger = logging.getLogger(__name__)


class DashboardCampaignInfoService:
    def __init__(
        self,
        uow: UnitOfWork,
        campaigns: CampaignRepository,
        published: CampaignInfoRepository,
        info: DashboardCampaignInfoRepository,
    ):
        self.uow = uow
        self.campaigns = campaigns
        self.published = published
        self.info = info

    async def find_by_campaign_slug(self, slug: str) -> Result[CampaignInfoRead]:
        """Dashboard copy first, then the published record, then empty defaults."""
        found = await self.info.find_by_campaign_slug(slug)
        if found.is_err():
            return found
        if found.value is not None:
            return Ok(campaign_info_to_dto(found.value))

        campaign = await self.campaigns.get_by_slug(slug)
        if campaign.is_err():
            return campaign
        published = await self.published.find_by_campaign_id(campaign.value.campaign_id)
        if published.is_err():
            return published
        if published.value is not None:
            return Ok(campaign_info_to_dto(published.value))
        return Ok(default_campaign_info_dto(campaign.value))

    async def create_or_update(self, dto: CampaignInfoWrite) -> Result[CampaignInfoRead]:
        result = await self.save(dto)
        if result.is_err():
            await self.uow.rollback()
            return result
        committed = await self.uow.commit()
        if committed.is_err():
            return committed
        return Ok(campaign_info_to_dto(result.value))

    async def save(self, dto: CampaignInfoWrite) -> Result[DashboardCampaignInfo]:
        campaign = await self.campaigns.get_by_id(dto.campaign_id)
        if campaign.is_err():
            return campaign
        try:
            incoming = DashboardCampaignInfo.create(
                dto.campaign_id,
                milestones=dto.milestones,
                investor_pitch=dto.investor_pitch,
                is_show_pitch=dto.is_show_pitch,
                investor_pitch_title=dto.investor_pitch_title,
            )
        except AppError as exc:
            return Err(exc)

        existing = await self.info.find_by_campaign_id(dto.campaign_id)
        if existing.is_err():
            return existing
        if existing.value is None:
            logger.info(f"[campaign-info] creating dashboard info for campaign {dto.campaign_id}")
            return await self.info.create(incoming)
        return await self.info.update(existing.value.update(incoming))
