"""Repositories for the editable dashboard copies of campaign content."""
from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .. import entities, models
from ..mappers import campaign_info_from_row
from ..result import Ok, Result
from .base import BaseRepository, persistence_failure

E = TypeVar("E")


class CampaignItemRepository(BaseRepository[E]):
    """Dashboard item keyed by campaign, at most one row per campaign."""

    async def find_by_campaign_id(self, campaign_id: str) -> Result[E | None]:
        return await self.find_one_by(campaign_id=campaign_id)

    async def find_by_campaign_slug(self, slug: str) -> Result[E | None]:
        query = (
            select(self.model)
            .join(models.Campaign, models.Campaign.campaign_id == self.model.campaign_id)
            .where(models.Campaign.slug == slug.strip().lower())
            .limit(1)
        )
        try:
            row = await self.session.scalar(query)
        except SQLAlchemyError as exc:
            return persistence_failure(f"{self.name}.find_by_campaign_slug", exc)
        return Ok(self.to_entity(row) if row is not None else None)


class DashboardSocialsRepository(CampaignItemRepository[entities.DashboardSocials]):
    model = models.DashboardSocials
    entity = entities.DashboardSocials


class DashboardCampaignInfoRepository(CampaignItemRepository[entities.DashboardCampaignInfo]):
    model = models.DashboardCampaignInfo
    entity = entities.DashboardCampaignInfo

    def to_entity(self, row: Any) -> entities.DashboardCampaignInfo:
        return campaign_info_from_row(entities.DashboardCampaignInfo, row)


class DashboardCampaignSummaryRepository(CampaignItemRepository[entities.DashboardCampaignSummary]):
    model = models.DashboardCampaignSummary
    entity = entities.DashboardCampaignSummary


class DashboardOwnerRepository(BaseRepository[entities.DashboardOwner]):
    model = models.DashboardOwner
    entity = entities.DashboardOwner

    async def find_by_campaign_id(self, campaign_id: str) -> Result[list[entities.DashboardOwner]]:
        return await self.find_all_by(order_by=models.DashboardOwner.created_at, campaign_id=campaign_id)
