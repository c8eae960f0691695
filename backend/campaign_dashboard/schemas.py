from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActionResponse(CamelModel):
    success: bool = True
    message: str
    data: Any = None


# ============ Dashboard items ============


class SocialsBase(CamelModel):
    linked_in: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    tiktok: str | None = None
    yelp: str | None = None


class SocialsWrite(SocialsBase):
    campaign_id: str | None = None


class SocialsRead(SocialsBase):
    id: str | None = None
    campaign_id: str
    source: Literal["dashboard", "issuer"] = "dashboard"
    updated_at: datetime | None = None


class CampaignInfoBase(CamelModel):
    milestones: list[str] = Field(default_factory=list)
    investor_pitch: str | None = None
    is_show_pitch: bool = False
    investor_pitch_title: str | None = None


class CampaignInfoWrite(CampaignInfoBase):
    campaign_id: str | None = None

    @field_validator("milestones", mode="before")
    @classmethod
    def default_milestones(cls, value: Any) -> Any:
        return [] if value is None else value


class CampaignInfoRead(CampaignInfoBase):
    id: str | None = None
    campaign_id: str
    source: Literal["dashboard", "published", "default"] = "dashboard"
    updated_at: datetime | None = None


class CampaignSummaryBase(CamelModel):
    summary: str | None = None
    tag_line: str | None = None


class CampaignSummaryWrite(CampaignSummaryBase):
    campaign_id: str | None = None


class CampaignSummaryRead(CampaignSummaryBase):
    id: str | None = None
    campaign_id: str
    source: Literal["dashboard", "campaign"] = "dashboard"
    updated_at: datetime | None = None


class OwnerWrite(CamelModel):
    id: str | None = None
    owner_id: str | None = None
    name: str | None = None
    position: str | None = None
    description: str | None = None


class OwnersWrite(CamelModel):
    campaign_id: str
    owners: list[OwnerWrite] = Field(default_factory=list)


class OwnerRead(CamelModel):
    id: str
    campaign_id: str
    owner_id: str | None = None
    name: str | None = None
    position: str | None = None
    description: str | None = None
    source: Literal["dashboard", "published"] = "dashboard"


class SaveChangesRequest(CamelModel):
    campaign_id: str
    campaign_info: CampaignInfoWrite | None = None
    campaign_summary: CampaignSummaryWrite | None = None
    socials: SocialsWrite | None = None
    owners: list[OwnerWrite] | None = None


# ============ Submission / review ============


class SubmitRequest(CamelModel):
    campaign_id: str
    user_id: str
    entity_types: list[str] = Field(default_factory=list)
    submission_note: str | None = None


class SubmitResult(CamelModel):
    submission_id: str
    approval_id: str
    status: str
    submitted_items: dict[str, bool]


class ReviewRequest(CamelModel):
    campaign_id: str
    admin_id: str
    entity_types: list[str] = Field(default_factory=list)
    action: str
    comment: str | None = None


class ApprovalRead(CamelModel):
    id: str
    campaign_id: str
    submitted_items: dict[str, bool]
    status: str
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    submitted_by: str | None = None
    reviewed_by: str | None = None
    comment: str | None = None


class ApprovalHistoryRead(CamelModel):
    id: str
    entity_id: str
    entity_type: str
    campaign_id: str
    status: str
    user_id: str
    comment: str | None = None
    created_at: datetime | None = None


# ============ Campaigns ============


class PendingCampaignRead(CamelModel):
    campaign_id: str
    campaign_name: str
    slug: str
    campaign_stage: str | None = None
    approval_id: str
    submitted_items: dict[str, bool]
    submitted_at: datetime | None = None
    submitted_by: str | None = None


class Page(CamelModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    per_page: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def build(cls, items: list[T], total: int, page: int, per_page: int) -> "Page[T]":
        total_pages = (total + per_page - 1) // per_page if per_page else 0
        return cls(
            items=items,
            total=total,
            page=page,
            per_page=per_page,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1,
        )
