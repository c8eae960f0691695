"""
Admin review of submitted dashboard items.

The approval update and the history entries of one review are written in a
single transaction; notifications and publication run after it commits.
"""
from __future__ import annotations

import logging
from typing import Sequence

from ..entities import ApprovalHistory, DashboardApproval, parse_item_kinds
from ..errors import AppError, ValidationError
from ..events import DashboardItemsReviewed, EventBus
from ..mappers import approval_to_dto, history_to_dto
from ..models import DashboardItemKind, ReviewAction
from ..repositories.approvals import ApprovalHistoryRepository, DashboardApprovalRepository
from ..repositories.base import UnitOfWork
from ..repositories.campaigns import CampaignRepository
from ..repositories.dashboard import CampaignItemRepository
from ..result import Err, Ok, Result
from ..schemas import ApprovalHistoryRead, ApprovalRead
from .dashboard_submission import approval_not_found

logger = logging.getLogger(__name__)


def parse_action(action: str) -> ReviewAction:
    try:
        return ReviewAction((action or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown review action {action!r}; expected approve or reject") from None


class DashboardReviewService:
    def __init__(
        self,
        uow: UnitOfWork,
        campaigns: CampaignRepository,
        approvals: DashboardApprovalRepository,
        history: ApprovalHistoryRepository,
        items: dict[DashboardItemKind, CampaignItemRepository],
        events: EventBus,
    ):
        self.uow = uow
        self.campaigns = campaigns
        self.approvals = approvals
        self.history = history
        self.items = items
        self.events = events

    async def review(
        self,
        campaign_id: str,
        admin_id: str,
        entity_types: Sequence[str],
        action: str,
        comment: str | None = None,
    ) -> Result[ApprovalRead]:
        try:
            kinds = parse_item_kinds(entity_types)
            review_action = parse_action(action)
            if not (admin_id and admin_id.strip()):
                raise ValidationError("Admin ID is required")
        except AppError as exc:
            return Err(exc)

        result = await self.uow.run(lambda: self._apply(campaign_id, admin_id, kinds, review_action, comment))
        if result.is_err():
            logger.info(f"[review] campaign {campaign_id} not reviewed: {result.error.code}")
            return result

        reviewed: DashboardApproval = result.value
        logger.info(f"[review] campaign {campaign_id} {reviewed.status.value} by {admin_id}: {[k.value for k in kinds]}")
        await self.events.publish(
            DashboardItemsReviewed(
                campaign_id=campaign_id,
                reviewed_by=admin_id,
                action=review_action.value,
                status=reviewed.status.value,
                entity_types=tuple(kind.value for kind in kinds),
                comment=reviewed.comment,
            )
        )
        return Ok(approval_to_dto(reviewed))

    async def _apply(
        self,
        campaign_id: str,
        admin_id: str,
        kinds: Sequence[DashboardItemKind],
        action: ReviewAction,
        comment: str | None,
    ) -> Result[DashboardApproval]:
        found = await self.approvals.find_by_campaign_id(campaign_id, for_update=True)
        if found.is_err():
            return found
        if found.value is None:
            return Err(approval_not_found(campaign_id))
        try:
            reviewed = found.value.review(action, admin_id, comment)
        except AppError as exc:
            return Err(exc)

        updated = await self.approvals.update(reviewed)
        if updated.is_err():
            return updated

        for kind in kinds:
            entity_id = await self._entity_id(kind, campaign_id)
            if entity_id.is_err():
                return entity_id
            entry = ApprovalHistory.create(
                entity_id=entity_id.value,
                entity_type=kind.value,
                campaign_id=campaign_id,
                status=reviewed.status,
                user_id=admin_id,
                comment=reviewed.comment,
            )
            created = await self.history.create(entry)
            if created.is_err():
                return created
        return Ok(reviewed)

    async def _entity_id(self, kind: DashboardItemKind, campaign_id: str) -> Result[str]:
        """Id of the reviewed dashboard row, or the campaign id when none was saved."""
        found = await self.items[kind].find_by_campaign_id(campaign_id)
        if found.is_err():
            return found
        return Ok(found.value.id if found.value is not None else campaign_id)

    async def get_history(self, campaign_id: str) -> Result[list[ApprovalHistoryRead]]:
        campaign = await self.campaigns.get_by_id(campaign_id)
        if campaign.is_err():
            return campaign
        entries = await self.history.find_by_campaign_id(campaign_id)
        if entries.is_err():
            return entries
        return Ok([history_to_dto(entry) for entry in entries.value])
