"""Repositories for the published campaign records."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from .. import entities, models
from ..errors import ValidationError, campaign_not_found
from ..mappers import approval_from_row, campaign_info_from_row
from ..models import ApprovalStatus
from ..result import Err, Ok, Result
from .base import BaseRepository, persistence_failure


class CampaignRepository(BaseRepository[entities.Campaign]):
    model = models.Campaign
    entity = entities.Campaign

    async def find_by_slug(self, slug: str) -> Result[entities.Campaign | None]:
        return await self.find_one_by(slug=slug.strip().lower())

    async def get_by_id(self, campaign_id: str | None) -> Result[entities.Campaign]:
        if not campaign_id:
            return Err(ValidationError("Campaign ID is required"))
        found = await self.find_by_id(campaign_id)
        if found.is_ok() and found.value is None:
            return Err(campaign_not_found(campaign_id))
        return found

    async def get_by_slug(self, slug: str) -> Result[entities.Campaign]:
        found = await self.find_by_slug(slug)
        if found.is_ok() and found.value is None:
            return Err(campaign_not_found(slug))
        return found

    async def find_pending_review(
        self,
        page: int,
        per_page: int,
        search_term: str | None = None,
        campaign_stage: str | None = None,
    ) -> Result[tuple[list[tuple[entities.Campaign, entities.DashboardApproval]], int]]:
        """Campaigns with a pending approval, oldest submission first."""
        query = (
            select(models.Campaign, models.DashboardApproval)
            .join(models.DashboardApproval, models.DashboardApproval.campaign_id == models.Campaign.campaign_id)
            .where(models.DashboardApproval.status == ApprovalStatus.pending.value)
        )
        if search_term:
            query = query.where(func.lower(models.Campaign.campaign_name).contains(search_term.strip().lower(), autoescape=True))
        if campaign_stage:
            query = query.where(models.Campaign.campaign_stage == campaign_stage)

        count_query = select(func.count()).select_from(query.subquery())
        query = (
            query.order_by(models.DashboardApproval.submitted_at.asc(), models.Campaign.campaign_name.asc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        try:
            total = await self.session.scalar(count_query)
            rows = (await self.session.execute(query)).all()
        except SQLAlchemyError as exc:
            return persistence_failure(f"{self.name}.find_pending_review", exc)
        items = [(self.to_entity(campaign), approval_from_row(approval)) for campaign, approval in rows]
        return Ok((items, total or 0))


class IssuerRepository(BaseRepository[entities.Issuer]):
    model = models.Issuer
    entity = entities.Issuer


class UserRepository(BaseRepository[entities.User]):
    model = models.User
    entity = entities.User


class CampaignInfoRepository(BaseRepository[entities.CampaignInfo]):
    model = models.CampaignInfo
    entity = entities.CampaignInfo

    def to_entity(self, row: Any) -> entities.CampaignInfo:
        return campaign_info_from_row(entities.CampaignInfo, row)

    async def find_by_campaign_id(self, campaign_id: str) -> Result[entities.CampaignInfo | None]:
        return await self.find_one_by(campaign_id=campaign_id)


class OwnerRepository(BaseRepository[entities.Owner]):
    model = models.Owner
    entity = entities.Owner

    async def find_by_campaign_id(self, campaign_id: str) -> Result[list[entities.Owner]]:
        return await self.find_all_by(order_by=models.Owner.created_at, campaign_id=campaign_id)
