from __future__ import annotations

import logging

from ..errors import ValidationError
from ..mappers import pending_campaign_to_dto
from ..repositories.campaigns import CampaignRepository
from ..result import Err, Ok, Result
from ..schemas import Page, PendingCampaignRead

logger = logging.getLogger(__name__)

MAX_PER_PAGE = 100


class CampaignService:
    def __init__(self, campaigns: CampaignRepository):
        self.campaigns = campaigns

    async def get_pending_campaigns(
        self,
        page: int = 1,
        per_page: int = 10,
        search_term: str | None = None,
        campaign_stage: str | None = None,
    ) -> Result[Page[PendingCampaignRead]]:
        """Campaigns waiting for review, oldest submission first."""
        if page < 1:
            return Err(ValidationError("page must be >= 1"))
        if not 1 <= per_page <= MAX_PER_PAGE:
            return Err(ValidationError(f"perPage must be between 1 and {MAX_PER_PAGE}"))

        found = await self.campaigns.find_pending_review(
            page=page,
            per_page=per_page,
            search_term=(search_term or "").strip() or None,
            campaign_stage=(campaign_stage or "").strip() or None,
        )
        if found.is_err():
            return found
        rows, total = found.value
        logger.debug(f"[campaigns] pending page={page} per_page={per_page} total={total}")
        items = [pending_campaign_to_dto(campaign, approval) for campaign, approval in rows]
        return Ok(Page[PendingCampaignRead].build(items, total=total, page=page, per_page=per_page))
