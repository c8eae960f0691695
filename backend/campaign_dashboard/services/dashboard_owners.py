from __future__ import annotations

import logging
from typing import Sequence

from ..entities import DashboardOwner
from ..errors import AppError, NotFoundError
from ..mappers import owner_to_dto
from ..repositories.base import UnitOfWork
from ..repositories.campaigns import CampaignRepository, OwnerRepository
from ..repositories.dashboard import DashboardOwnerRepository
from ..result import Err, Ok, Result
from ..schemas import OwnerRead, OwnerWrite

logger = logging.getLogger(__name__)


class DashboardOwnersService:
    def __init__(
        self,
        uow: UnitOfWork,
        campaigns: CampaignRepository,
        published: OwnerRepository,
        owners: DashboardOwnerRepository,
    ):
        self.uow = uow
        self.campaigns = campaigns
        self.published = published
        self.owners = owners

    async def find_by_campaign_slug(self, slug: str) -> Result[list[OwnerRead]]:
        campaign = await self.campaigns.get_by_slug(slug)
        if campaign.is_err():
            return campaign
        campaign_id = campaign.value.campaign_id

        owners = await self.owners.find_by_campaign_id(campaign_id)
        if owners.is_err():
            return owners
        if owners.value:
            return Ok([owner_to_dto(owner) for owner in owners.value])

        published = await self.published.find_by_campaign_id(campaign_id)
        if published.is_err():
            return published
        return Ok([owner_to_dto(owner) for owner in published.value])

    async def create_or_update(self, campaign_id: str, owners: Sequence[OwnerWrite]) -> Result[list[OwnerRead]]:
        result = await self.save(campaign_id, owners)
        if result.is_err():
            await self.uow.rollback()
            return result
        committed = await self.uow.commit()
        if committed.is_err():
            return committed
        return Ok([owner_to_dto(owner) for owner in result.value])

    async def save(self, campaign_id: str, owners: Sequence[OwnerWrite]) -> Result[list[DashboardOwner]]:
        """Entries with a known id are updated, all others are created."""
        campaign = await self.campaigns.get_by_id(campaign_id)
        if campaign.is_err():
            return campaign

        saved: list[DashboardOwner] = []
        for dto in owners:
            existing = None
            if dto.id:
                found = await self.owners.find_by_id(dto.id)
                if found.is_err():
                    return found
                existing = found.value
                if existing is not None and existing.campaign_id != campaign_id:
                    return Err(NotFoundError(f"Owner {dto.id} not found for campaign {campaign_id}", code="OWNER_NOT_FOUND"))
            try:
                if existing is not None:
                    result = await self.owners.update(existing.update(dto.name, dto.position, dto.description))
                else:
                    owner = DashboardOwner.create(
                        campaign_id,
                        name=dto.name,
                        position=dto.position,
                        description=dto.description,
                        owner_id=dto.owner_id,
                    )
                    result = await self.owners.create(owner)
            except AppError as exc:
                return Err(exc)
            if result.is_err():
                return result
            saved.append(result.value)
        logger.info(f"[owners] saved {len(saved)} dashboard owners for campaign {campaign_id}")
        return Ok(saved)
