from __future__ import annotations

from datetime import datetime
from enum import Enum

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class DashboardItemKind(str, Enum):
    campaign_info = "dashboard-campaign-info"
    campaign_summary = "dashboard-campaign-summary"
    socials = "dashboard-socials"


class ApprovalStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class SubmissionStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


class ReviewAction(str, Enum):
    approve = "approve"
    reject = "reject"


SOCIAL_FIELDS = ("linked_in", "twitter", "instagram", "facebook", "tiktok", "yelp")


def _created_at() -> Mapped[datetime]:
    return mapped_column(sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def _updated_at() -> Mapped[datetime]:
    return mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False
    )


class Issuer(Base):
    __tablename__ = "issuers"

    issuer_id: Mapped[str] = mapped_column(sa.String(64), primary_key=True)
    issuer_name: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(sa.String(512), nullable=True)
    linked_in: Mapped[str | None] = mapped_column(sa.String(512), nullable=True)
    twitter: Mapped[str | None] = mapped_column(sa.String(512), nullable=True)
    instagram: Mapped[str | None] = mapped_column(sa.String(512), nullable=True)
    facebook: Mapped[str | None] = mapped_column(sa.String(512), nullable=True)
    tiktok: Mapped[str | None] = mapped_column(sa.String(512), nullable=True)
    yelp: Mapped[str | None] = mapped_column(sa.String(512), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class Campaign(Base):
    __tablename__ = "campaigns"

    campaign_id: Mapped[str] = mapped_column(sa.String(64), primary_key=True)
    campaign_name: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    slug: Mapped[str] = mapped_column(sa.String(255), unique=True, nullable=False, index=True)
    campaign_stage: Mapped[str | None] = mapped_column(sa.String(64), nullable=True, index=True)
    summary: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    tag_line: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    issuer_id: Mapped[str | None] = mapped_column(sa.String(64), nullable=True, index=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class CampaignInfo(Base):
    __tablename__ = "campaign_info"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    campaign_id: Mapped[str] = mapped_column(
        sa.ForeignKey("campaigns.campaign_id", ondelete="CASCADE"), unique=True, nullable=False
    )
    milestones: Mapped[list | None] = mapped_column(sa.JSON(), nullable=True)
    investor_pitch: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    is_show_pitch: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=False)
    investor_pitch_title: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class Owner(Base):
    __tablename__ = "owners"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    campaign_id: Mapped[str] = mapped_column(
        sa.ForeignKey("campaigns.campaign_id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(sa.String(64), primary_key=True)
    first_name: Mapped[str | None] = mapped_column(sa.String(128), nullable=True)
    last_name: Mapped[str | None] = mapped_column(sa.String(128), nullable=True)
    email: Mapped[str | None] = mapped_column(sa.String(255), nullable=True)
    created_at: Mapped[datetime] = _created_at()


class DashboardSocials(Base):
    __tablename__ = "dashboard_socials"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    campaign_id: Mapped[str] = mapped_column(
        sa.ForeignKey("campaigns.campaign_id", ondelete="CASCADE"), unique=True, nullable=False
    )
    linked_in: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    twitter: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    instagram: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    facebook: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    tiktok: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    yelp: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class DashboardCampaignInfo(Base):
    __tablename__ = "dashboard_campaign_info"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    campaign_id: Mapped[str] = mapped_column(
        sa.ForeignKey("campaigns.campaign_id", ondelete="CASCADE"), unique=True, nullable=False
    )
    milestones: Mapped[list | None] = mapped_column(sa.JSON(), nullable=True)
    investor_pitch: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    is_show_pitch: Mapped[bool] = mapped_column(sa.Boolean(), nullable=False, default=False)
    investor_pitch_title: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class DashboardCampaignSummary(Base):
    __tablename__ = "dashboard_campaign_summary"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    campaign_id: Mapped[str] = mapped_column(
        sa.ForeignKey("campaigns.campaign_id", ondelete="CASCADE"), unique=True, nullable=False
    )
    summary: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    tag_line: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class DashboardOwner(Base):
    __tablename__ = "dashboard_owners"

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    campaign_id: Mapped[str] = mapped_column(
        sa.ForeignKey("campaigns.campaign_id", ondelete="CASCADE"), nullable=False, index=True
    )
    owner_id: Mapped[str | None] = mapped_column(sa.String(36), nullable=True)
    name: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    position: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    description: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class DashboardApproval(Base):
    __tablename__ = "dashboard_approvals"
    __table_args__ = (
        sa.UniqueConstraint("campaign_id", name="uq_dashboard_approvals_campaign_id"),
        sa.Index("ix_dashboard_approvals_status_submitted_at", "status", "submitted_at"),
    )

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    campaign_id: Mapped[str] = mapped_column(
        sa.ForeignKey("campaigns.campaign_id", ondelete="CASCADE"), nullable=False
    )
    submitted_items: Mapped[dict] = mapped_column(sa.JSON(), nullable=False)
    status: Mapped[str] = mapped_column(sa.String(16), nullable=False, server_default=ApprovalStatus.pending.value)
    submitted_at: Mapped[datetime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)
    submitted_by: Mapped[str | None] = mapped_column(sa.String(64), nullable=True, index=True)
    reviewed_by: Mapped[str | None] = mapped_column(sa.String(64), nullable=True, index=True)
    comment: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class Submission(Base):
    __tablename__ = "submissions"
    __table_args__ = (sa.Index("ix_submissions_status_created_at", "status", "created_at"),)

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    campaign_id: Mapped[str] = mapped_column(
        sa.ForeignKey("campaigns.campaign_id", ondelete="CASCADE"), nullable=False, index=True
    )
    submitted_by: Mapped[str] = mapped_column(sa.String(64), nullable=False, index=True)
    items: Mapped[dict] = mapped_column(sa.JSON(), nullable=False)
    submission_note: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    status: Mapped[str] = mapped_column(sa.String(16), nullable=False, server_default=SubmissionStatus.pending.value)
    results: Mapped[dict | None] = mapped_column(sa.JSON(), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()


class ApprovalHistory(Base):
    __tablename__ = "approval_history"
    __table_args__ = (sa.Index("ix_approval_history_entity", "entity_id", "entity_type"),)

    id: Mapped[str] = mapped_column(sa.String(36), primary_key=True)
    entity_id: Mapped[str] = mapped_column(sa.String(64), nullable=False)
    entity_type: Mapped[str] = mapped_column(sa.String(64), nullable=False)
    campaign_id: Mapped[str] = mapped_column(sa.String(64), nullable=False, index=True)
    status: Mapped[str] = mapped_column(sa.String(16), nullable=False)
    user_id: Mapped[str] = mapped_column(sa.String(64), nullable=False)
    comment: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _updated_at()
