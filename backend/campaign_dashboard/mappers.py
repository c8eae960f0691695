"""
Converters between ORM rows, domain entities and public DTOs.
"""
from __future__ import annotations

from dataclasses import fields
from enum import Enum
from typing import Any, TypeVar

from . import entities
from .models import ApprovalStatus, SOCIAL_FIELDS, SubmissionStatus
from .schemas import (
    ApprovalHistoryRead,
    ApprovalRead,
    CampaignInfoRead,
    CampaignSummaryRead,
    OwnerRead,
    PendingCampaignRead,
    SocialsRead,
)

E = TypeVar("E")


def from_persistence(entity_cls: type[E], row: Any, **overrides: Any) -> E:
    """Rehydrate an entity from a stored row; no validation is applied."""
    values = {f.name: getattr(row, f.name) for f in fields(entity_cls) if hasattr(row, f.name)}
    values.update(overrides)
    return entity_cls(**values)


def to_persistence(entity: Any) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for f in fields(entity):
        value = getattr(entity, f.name)
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, tuple):
            value = list(value)
        elif isinstance(value, dict):
            value = dict(value)
        values[f.name] = value
    return values


# ============ row -> entity ============


def approval_from_row(row: Any) -> entities.DashboardApproval:
    return from_persistence(
        entities.DashboardApproval,
        row,
        status=ApprovalStatus(row.status),
        submitted_items=dict(row.submitted_items or {}),
    )


def submission_from_row(row: Any) -> entities.Submission:
    return from_persistence(
        entities.Submission,
        row,
        status=SubmissionStatus(row.status),
        items=dict(row.items or {}),
    )


def history_from_row(row: Any) -> entities.ApprovalHistory:
    return from_persistence(entities.ApprovalHistory, row, status=ApprovalStatus(row.status))


def campaign_info_from_row(entity_cls: type[E], row: Any) -> E:
    return from_persistence(entity_cls, row, milestones=tuple(row.milestones or ()))


# ============ entity -> DTO ============


def socials_to_dto(socials: entities.DashboardSocials) -> SocialsRead:
    return SocialsRead(
        id=socials.id,
        campaign_id=socials.campaign_id,
        source="dashboard",
        updated_at=socials.updated_at,
        **socials.socials(),
    )


def issuer_socials_to_dto(campaign: entities.Campaign, issuer: entities.Issuer) -> SocialsRead:
    """Issuer profile fields remapped into the dashboard socials shape."""
    return SocialsRead(
        id=None,
        campaign_id=campaign.campaign_id,
        source="issuer",
        **{name: getattr(issuer, name) for name in SOCIAL_FIELDS},
    )


def campaign_info_to_dto(info: entities.DashboardCampaignInfo | entities.CampaignInfo) -> CampaignInfoRead:
    published = isinstance(info, entities.CampaignInfo)
    return CampaignInfoRead(
        id=None if published else info.id,
        campaign_id=info.campaign_id,
        milestones=list(info.milestones),
        investor_pitch=info.investor_pitch,
        is_show_pitch=info.is_show_pitch,
        investor_pitch_title=info.investor_pitch_title,
        source="published" if published else "dashboard",
        updated_at=None if published else info.updated_at,
    )


def default_campaign_info_dto(campaign: entities.Campaign) -> CampaignInfoRead:
    return CampaignInfoRead(campaign_id=campaign.campaign_id, source="default")


def campaign_summary_to_dto(summary: entities.DashboardCampaignSummary) -> CampaignSummaryRead:
    return CampaignSummaryRead(
        id=summary.id,
        campaign_id=summary.campaign_id,
        summary=summary.summary,
        tag_line=summary.tag_line,
        updated_at=summary.updated_at,
    )


def campaign_own_summary_to_dto(campaign: entities.Campaign) -> CampaignSummaryRead:
    return CampaignSummaryRead(
        campaign_id=campaign.campaign_id,
        summary=campaign.summary,
        tag_line=campaign.tag_line,
        source="campaign",
    )


def owner_to_dto(owner: entities.DashboardOwner | entities.Owner) -> OwnerRead:
    published = isinstance(owner, entities.Owner)
    return OwnerRead(
        id=owner.id,
        campaign_id=owner.campaign_id,
        owner_id=owner.id if published else owner.owner_id,
        name=owner.name,
        position=owner.position,
        description=owner.description,
        source="published" if published else "dashboard",
    )


def approval_to_dto(approval: entities.DashboardApproval) -> ApprovalRead:
    return ApprovalRead(
        id=approval.id,
        campaign_id=approval.campaign_id,
        submitted_items=dict(approval.submitted_items),
        status=approval.status.value,
        submitted_at=approval.submitted_at,
        reviewed_at=approval.reviewed_at,
        submitted_by=approval.submitted_by,
        reviewed_by=approval.reviewed_by,
        comment=approval.comment,
    )


def history_to_dto(entry: entities.ApprovalHistory) -> ApprovalHistoryRead:
    return ApprovalHistoryRead(
        id=entry.id,
        entity_id=entry.entity_id,
        entity_type=entry.entity_type,
        campaign_id=entry.campaign_id,
        status=entry.status.value,
        user_id=entry.user_id,
        comment=entry.comment,
        created_at=entry.created_at,
    )


def pending_campaign_to_dto(
    campaign: entities.Campaign, approval: entities.DashboardApproval
) -> PendingCampaignRead:
    return PendingCampaignRead(
        campaign_id=campaign.campaign_id,
        campaign_name=campaign.campaign_name,
        slug=campaign.slug,
        campaign_stage=campaign.campaign_stage,
        approval_id=approval.id,
        submitted_items=dict(approval.submitted_items),
        submitted_at=approval.submitted_at,
        submitted_by=approval.submitted_by,
    )
