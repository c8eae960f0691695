"""
Submission intake: records what a campaign owner sent for review and resets
the campaign's approval to ``pending``.
"""
from __future__ import annotations

import logging
from typing import Sequence

from ..entities import Submission, parse_item_kinds, submitted_items_for
from ..errors import AppError, NotFoundError, ValidationError
from ..events import EventBus, SubmissionSubmitted
from ..mappers import approval_to_dto
from ..repositories.approvals import DashboardApprovalRepository, SubmissionRepository
from ..repositories.base import UnitOfWork
from ..repositories.campaigns import CampaignRepository
from ..result import Err, Ok, Result
from ..schemas import ApprovalRead, SubmitResult

logger = logging.getLogger(__name__)


def approval_not_found(campaign_id: str) -> NotFoundError:
    return NotFoundError(f"No approval record for campaign {campaign_id}", code="APPROVAL_NOT_FOUND")


class DashboardSubmissionService:
    def __init__(
        self,
        uow: UnitOfWork,
        campaigns: CampaignRepository,
        submissions: SubmissionRepository,
        approvals: DashboardApprovalRepository,
        events: EventBus,
    ):
        self.uow = uow
        self.campaigns = campaigns
        self.submissions = submissions
        self.approvals = approvals
        self.events = events

    async def submit_for_review(
        self,
        campaign_id: str,
        user_id: str,
        entity_types: Sequence[str],
        submission_note: str | None = None,
    ) -> Result[SubmitResult]:
        try:
            kinds = parse_item_kinds(entity_types)
            if not (user_id and user_id.strip()):
                raise ValidationError("User ID is required")
        except AppError as exc:
            return Err(exc)

        campaign = await self.campaigns.get_by_id(campaign_id)
        if campaign.is_err():
            return campaign

        items = submitted_items_for(kinds)
        try:
            submission = Submission.create(campaign_id, user_id, items, submission_note)
        except AppError as exc:
            return Err(exc)
        created = await self.submissions.create(submission)
        if created.is_err():
            await self.uow.rollback()
            return created
        committed = await self.uow.commit()
        if committed.is_err():
            return committed
        logger.info(f"[submission] {submission.id} recorded for campaign {campaign_id}: {submission.selected_items}")

        approval = await self.approvals.submit_for_approval(campaign_id, items, user_id)
        if approval.is_err():
            failed = submission.fail({"error": approval.error.message, "items": submission.selected_items})
            await self._finish(failed)
            logger.warning(f"[submission] {submission.id} failed: {approval.error.message}")
            return approval

        completed = submission.complete({kind: "submitted" for kind in submission.selected_items})
        finished = await self._finish(completed)
        if finished.is_err():
            return finished

        await self.events.publish(
            SubmissionSubmitted(
                campaign_id=campaign_id,
                submitted_by=user_id,
                items=tuple(submission.selected_items),
                submission_id=submission.id,
                submission_note=submission.submission_note,
            )
        )
        return Ok(
            SubmitResult(
                submission_id=submission.id,
                approval_id=approval.value.id,
                status=approval.value.status.value,
                submitted_items=dict(approval.value.submitted_items),
            )
        )

    async def _finish(self, submission: Submission) -> Result[Submission]:
        updated = await self.submissions.update(submission)
        if updated.is_err():
            await self.uow.rollback()
            return updated
        committed = await self.uow.commit()
        return committed if committed.is_err() else updated

    async def get_approval(self, campaign_id: str) -> Result[ApprovalRead]:
        found = await self.approvals.find_by_campaign_id(campaign_id)
        if found.is_err():
            return found
        if found.value is None:
            return Err(approval_not_found(campaign_id))
        return Ok(approval_to_dto(found.value))
