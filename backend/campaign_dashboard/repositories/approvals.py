"""Repositories for the submission/approval workflow."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .. import entities, models
from ..errors import AppError, PersistenceError, StateConflictError
from ..mappers import approval_from_row, history_from_row, submission_from_row, to_persistence
from ..result import Err, Ok, Result
from .base import BaseRepository, persistence_failure

logger = logging.getLogger(__name__)


class SubmissionRepository(BaseRepository[entities.Submission]):
    model = models.Submission
    entity = entities.Submission

    def to_entity(self, row: Any) -> entities.Submission:
        return submission_from_row(row)

    async def find_by_campaign_id(self, campaign_id: str) -> Result[list[entities.Submission]]:
        return await self.find_all_by(order_by=models.Submission.created_at, campaign_id=campaign_id)


class ApprovalHistoryRepository(BaseRepository[entities.ApprovalHistory]):
    model = models.ApprovalHistory
    entity = entities.ApprovalHistory

    def to_entity(self, row: Any) -> entities.ApprovalHistory:
        return history_from_row(row)

    async def find_by_campaign_id(self, campaign_id: str) -> Result[list[entities.ApprovalHistory]]:
        return await self.find_all_by(order_by=models.ApprovalHistory.created_at, campaign_id=campaign_id)

    async def update(self, entity: entities.ApprovalHistory) -> Result[entities.ApprovalHistory]:
        # History is append-only.
        return Err(StateConflictError("Approval history entries are immutable"))


class DashboardApprovalRepository(BaseRepository[entities.DashboardApproval]):
    model = models.DashboardApproval
    entity = entities.DashboardApproval

    def to_entity(self, row: Any) -> entities.DashboardApproval:
        return approval_from_row(row)

    async def _find_row(self, campaign_id: str, for_update: bool = False) -> models.DashboardApproval | None:
        query = select(models.DashboardApproval).where(models.DashboardApproval.campaign_id == campaign_id)
        if for_update:
            query = query.with_for_update()
        return await self.session.scalar(query.execution_options(populate_existing=True))

    async def find_by_campaign_id(
        self, campaign_id: str, for_update: bool = False
    ) -> Result[entities.DashboardApproval | None]:
        try:
            row = await self._find_row(campaign_id, for_update=for_update)
        except SQLAlchemyError as exc:
            return persistence_failure(f"{self.name}.find_by_campaign_id", exc)
        return Ok(self.to_entity(row) if row is not None else None)

    async def submit_for_approval(
        self,
        campaign_id: str,
        submitted_items: Mapping[str, bool],
        submitted_by: str,
    ) -> Result[entities.DashboardApproval]:
        """
        Insert or reset the campaign's approval to ``pending`` and commit.

        The unique constraint on ``campaign_id`` decides concurrent first
        submissions: the losing insert is rolled back and re-applied as an update
        of the row that won, so exactly one approval exists per campaign.
        """
        try:
            existing = await self.find_by_campaign_id(campaign_id)
            if existing.is_err():
                return existing
            if existing.value is None:
                approval = entities.DashboardApproval.create(campaign_id, submitted_items, submitted_by)
                self.session.add(self.model(**to_persistence(approval)))
                try:
                    await self.session.commit()
                    logger.info(f"[approval] created {approval.id} for campaign {campaign_id}")
                    return Ok(approval)
                except IntegrityError:
                    await self.session.rollback()
                    logger.info(f"[approval] concurrent insert for campaign {campaign_id}, retrying as update")

            row = await self._find_row(campaign_id, for_update=True)
            if row is None:
                await self.session.rollback()
                return Err(PersistenceError(f"Approval for campaign {campaign_id} could not be created"))
            approval = self.to_entity(row).resubmit(submitted_items, submitted_by)
            for column, value in to_persistence(approval).items():
                setattr(row, column, value)
            await self.session.commit()
        except AppError as exc:
            await self.session.rollback()
            return Err(exc)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            return persistence_failure(f"{self.name}.submit_for_approval", exc)
        logger.info(f"[approval] reset {approval.id} to pending for campaign {campaign_id}")
        return Ok(approval)
