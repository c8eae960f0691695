"""
Service wiring.

One ``Container`` is built per app in ``create_app``. Services are assembled per
request around that request's session; nothing is looked up globally.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .db import get_session
from .events import EventBus
from .models import DashboardItemKind
from .repositories.approvals import ApprovalHistoryRepository, DashboardApprovalRepository, SubmissionRepository
from .repositories.base import UnitOfWork
from .repositories.campaigns import CampaignInfoRepository, CampaignRepository, IssuerRepository, OwnerRepository
from .repositories.dashboard import (
    DashboardCampaignInfoRepository,
    DashboardCampaignSummaryRepository,
    DashboardOwnerRepository,
    DashboardSocialsRepository,
)
from .services.campaign import CampaignService
from .services.dashboard_campaign_info import DashboardCampaignInfoService
from .services.dashboard_campaign_summary import DashboardCampaignSummaryService
from .services.dashboard_changes import DashboardChangesService
from .services.dashboard_owners import DashboardOwnersService
from .services.dashboard_review import DashboardReviewService
from .services.dashboard_socials import DashboardSocialsService
from .services.dashboard_submission import DashboardSubmissionService
from .services.event_handlers import register_event_handlers
from .services.notify import Notifier
from .settings import Settings


@dataclass
class Container:
    settings: Settings
    session_factory: async_sessionmaker
    events: EventBus
    notifier: Notifier

    @classmethod
    def build(
        cls,
        settings: Settings,
        session_factory: async_sessionmaker,
        notifier: Notifier | None = None,
    ) -> "Container":
        notifier = notifier or Notifier(settings)
        events = register_event_handlers(EventBus(), session_factory, notifier)
        return cls(settings=settings, session_factory=session_factory, events=events, notifier=notifier)

    def socials_service(self, session: AsyncSession) -> DashboardSocialsService:
        return DashboardSocialsService(
            UnitOfWork(session),
            CampaignRepository(session),
            IssuerRepository(session),
            DashboardSocialsRepository(session),
        )

    def campaign_info_service(self, session: AsyncSession) -> DashboardCampaignInfoService:
        return DashboardCampaignInfoService(
            UnitOfWork(session),
            CampaignRepository(session),
            CampaignInfoRepository(session),
            DashboardCampaignInfoRepository(session),
        )

    def campaign_summary_service(self, session: AsyncSession) -> DashboardCampaignSummaryService:
        return DashboardCampaignSummaryService(
            UnitOfWork(session),
            CampaignRepository(session),
            DashboardCampaignSummaryRepository(session),
        )

    def owners_service(self, session: AsyncSession) -> DashboardOwnersService:
        return DashboardOwnersService(
            UnitOfWork(session),
            CampaignRepository(session),
            OwnerRepository(session),
            DashboardOwnerRepository(session),
        )

    def changes_service(self, session: AsyncSession) -> DashboardChangesService:
        return DashboardChangesService(
            UnitOfWork(session),
            self.campaign_info_service(session),
            self.campaign_summary_service(session),
            self.socials_service(session),
            self.owners_service(session),
        )

    def submission_service(self, session: AsyncSession) -> DashboardSubmissionService:
        return DashboardSubmissionService(
            UnitOfWork(session),
            CampaignRepository(session),
            SubmissionRepository(session),
            DashboardApprovalRepository(session),
            self.events,
        )

    def review_service(self, session: AsyncSession) -> DashboardReviewService:
        items = {
            DashboardItemKind.socials: DashboardSocialsRepository(session),
            DashboardItemKind.campaign_info: DashboardCampaignInfoRepository(session),
            DashboardItemKind.campaign_summary: DashboardCampaignSummaryRepository(session),
        }
        return DashboardReviewService(
            UnitOfWork(session),
            CampaignRepository(session),
            DashboardApprovalRepository(session),
            ApprovalHistoryRepository(session),
            items,
            self.events,
        )

    def campaign_service(self, session: AsyncSession) -> CampaignService:
        return CampaignService(CampaignRepository(session))


SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_container(request: Request) -> Container:
    return request.app.state.container


ContainerDep = Annotated[Container, Depends(get_container)]
