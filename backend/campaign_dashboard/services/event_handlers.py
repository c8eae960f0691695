"""
Subscribers of workflow events.

Each handler opens its own session; the triggering request has already
committed, so nothing here can undo a submission or a review.
"""
from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..entities import CampaignInfo, new_id, utcnow
from ..events import DashboardItemsReviewed, EventBus, SubmissionSubmitted
from ..models import DashboardItemKind, ReviewAction
from ..repositories.base import UnitOfWork
from ..repositories.campaigns import CampaignInfoRepository, CampaignRepository, IssuerRepository, UserRepository
from ..repositories.dashboard import (
    DashboardCampaignInfoRepository,
    DashboardCampaignSummaryRepository,
    DashboardSocialsRepository,
)
from ..result import Result
from .notify import Notifier

logger = logging.getLogger(__name__)


async def _describe(session: AsyncSession, campaign_id: str, user_id: str) -> tuple[str, str]:
    campaign = await CampaignRepository(session).find_by_id(campaign_id)
    user = await UserRepository(session).find_by_id(user_id)
    campaign_name = campaign.value.campaign_name if campaign.is_ok() and campaign.value else campaign_id
    user_name = user.value.display_name if user.is_ok() and user.value else user_id
    return campaign_name, user_name


def submission_notifier(session_factory: async_sessionmaker, notifier: Notifier):
    async def notify_submission(event: SubmissionSubmitted) -> None:
        async with session_factory() as session:
            campaign_name, submitter = await _describe(session, event.campaign_id, event.submitted_by)
        await notifier.notify_submission(campaign_name, submitter, event.items, event.submission_note)

    return notify_submission


def review_notifier(session_factory: async_sessionmaker, notifier: Notifier):
    async def notify_review(event: DashboardItemsReviewed) -> None:
        async with session_factory() as session:
            campaign_name, reviewer = await _describe(session, event.campaign_id, event.reviewed_by)
        await notifier.notify_review(campaign_name, reviewer, event.status, event.entity_types, event.comment)

    return notify_review


class ApprovedDataPublisher:
    """Copies approved dashboard items over the published campaign records."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def __call__(self, event: DashboardItemsReviewed) -> None:
        if event.action != ReviewAction.approve.value:
            return
        async with self.session_factory() as session:
            uow = UnitOfWork(session)
            for entity_type in event.entity_types:
                result = await self.publish(session, DashboardItemKind(entity_type), event.campaign_id)
                if result.is_err():
                    logger.warning(
                        f"[publish] {entity_type} for campaign {event.campaign_id} not published: {result.error.message}"
                    )
                    await uow.rollback()
                    return
            committed = await uow.commit()
        if committed.is_ok():
            logger.info(f"[publish] campaign {event.campaign_id}: {list(event.entity_types)}")

    async def publish(self, session: AsyncSession, kind: DashboardItemKind, campaign_id: str) -> Result[object]:
        campaigns = CampaignRepository(session)
        campaign = await campaigns.get_by_id(campaign_id)
        if campaign.is_err():
            return campaign

        if kind == DashboardItemKind.socials:
            socials = await DashboardSocialsRepository(session).find_by_campaign_id(campaign_id)
            if socials.is_err() or socials.value is None or not campaign.value.issuer_id:
                return socials
            issuers = IssuerRepository(session)
            issuer = await issuers.find_by_id(campaign.value.issuer_id)
            if issuer.is_err() or issuer.value is None:
                return issuer
            return await issuers.update(issuer.value.with_socials(**socials.value.socials()))

        if kind == DashboardItemKind.campaign_summary:
            summary = await DashboardCampaignSummaryRepository(session).find_by_campaign_id(campaign_id)
            if summary.is_err() or summary.value is None:
                return summary
            return await campaigns.update(campaign.value.with_summary(summary.value.summary, summary.value.tag_line))

        info = await DashboardCampaignInfoRepository(session).find_by_campaign_id(campaign_id)
        if info.is_err() or info.value is None:
            return info
        published_repo = CampaignInfoRepository(session)
        published = await published_repo.find_by_campaign_id(campaign_id)
        if published.is_err():
            return published
        content = dict(
            milestones=info.value.milestones,
            investor_pitch=info.value.investor_pitch,
            is_show_pitch=info.value.is_show_pitch,
            investor_pitch_title=info.value.investor_pitch_title,
        )
        if published.value is None:
            return await published_repo.create(CampaignInfo(id=new_id(), campaign_id=campaign_id, **content))
        return await published_repo.update(replace(published.value, updated_at=utcnow(), **content))


def register_event_handlers(bus: EventBus, session_factory: async_sessionmaker, notifier: Notifier) -> EventBus:
    bus.register(SubmissionSubmitted.name, submission_notifier(session_factory, notifier))
    bus.register(DashboardItemsReviewed.name, ApprovedDataPublisher(session_factory))
    bus.register(DashboardItemsReviewed.name, review_notifier(session_factory, notifier))
    return bus

