"""
Dashboard socials: campaign-specific social links with the issuer's own
profile as read-time fallback.
"""
from __future__ import annotations

import logging

from ..entities import DashboardSocials
from ..errors import AppError, issuer_not_found
from ..mappers import issuer_socials_to_dto, socials_to_dto
from ..models import SOCIAL_FIELDS
from ..repositories.base import UnitOfWork
from ..repositories.campaigns import CampaignRepository, IssuerRepository
from ..repositories.dashboard import DashboardSocialsRepository
from ..result import Err, Ok, Result
from ..schemas import SocialsRead, SocialsWrite

logger = logging.getLogger(__name__)


class DashboardSocialsService:
    def __init__(
        self,
        uow: UnitOfWork,
        campaigns: CampaignRepository,
        issuers: IssuerRepository,
        socials: DashboardSocialsRepository,
    ):
        self.uow = uow
        self.campaigns = campaigns
        self.issuers = issuers
        self.socials = socials

    async def find_by_campaign_slug(self, slug: str) -> Result[SocialsRead]:
        found = await self.socials.find_by_campaign_slug(slug)
        if found.is_err():
            return found
        if found.value is not None:
            return Ok(socials_to_dto(found.value))

        campaign = await self.campaigns.get_by_slug(slug)
        if campaign.is_err():
            return campaign

        issuer = None
        if campaign.value.issuer_id:
            lookup = await self.issuers.find_by_id(campaign.value.issuer_id)
            if lookup.is_err():
                return lookup
            issuer = lookup.value
        if issuer is None:
            logger.warning(f"[socials] campaign {slug} has no issuer record (issuer_id={campaign.value.issuer_id})")
            return Err(issuer_not_found(slug))
        return Ok(issuer_socials_to_dto(campaign.value, issuer))

    async def create_or_update(self, dto: SocialsWrite) -> Result[SocialsRead]:
        result = await self.save(dto)
        if result.is_err():
            await self.uow.rollback()
            return result
        committed = await self.uow.commit()
        if committed.is_err():
            return committed
        return Ok(socials_to_dto(result.value))

    async def save(self, dto: SocialsWrite) -> Result[DashboardSocials]:
        """Upsert without committing, so callers can group several saves."""
        values = {name: getattr(dto, name) for name in SOCIAL_FIELDS}
        campaign = await self.campaigns.get_by_id(dto.campaign_id)
        if campaign.is_err():
            return campaign
        try:
            existing = await self.socials.find_by_campaign_id(dto.campaign_id)
            if existing.is_err():
                return existing
            if existing.value is None:
                logger.info(f"[socials] creating dashboard socials for campaign {dto.campaign_id}")
                return await self.socials.create(DashboardSocials.create(dto.campaign_id, **values))
            return await self.socials.update(existing.value.update(**values))
        except AppError as exc:
            return Err(exc)
