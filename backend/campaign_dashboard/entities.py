"""
Domain entities.

Every entity is a frozen dataclass with an explicit id. ``create`` builds a new,
validated instance with a fresh id and timestamps; ``from_persistence`` (see
``mappers.py``) rehydrates stored rows without validation. Changes always return
a new instance via ``dataclasses.replace``.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from .errors import StateConflictError, ValidationError
from .models import ApprovalStatus, DashboardItemKind, ReviewAction, SOCIAL_FIELDS, SubmissionStatus

ITEM_KINDS: tuple[str, ...] = tuple(kind.value for kind in DashboardItemKind)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require(value: str | None, name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{name} is required")
    return value.strip()


def parse_item_kinds(values: Iterable[str]) -> tuple[DashboardItemKind, ...]:
    """Validate a list of dashboard item names, preserving order and dropping duplicates."""
    kinds: list[DashboardItemKind] = []
    unknown: list[str] = []
    for value in values or ():
        try:
            kind = DashboardItemKind(value)
        except ValueError:
            unknown.append(str(value))
            continue
        if kind not in kinds:
            kinds.append(kind)
    if unknown:
        raise ValidationError(f"Unknown dashboard items: {', '.join(unknown)}")
    if not kinds:
        raise ValidationError("At least one dashboard item must be selected")
    return tuple(kinds)


def submitted_items_for(kinds: Iterable[DashboardItemKind]) -> dict[str, bool]:
    """Flag map covering every known kind; kinds not named are False."""
    named = {DashboardItemKind(kind).value for kind in kinds}
    return {kind: kind in named for kind in ITEM_KINDS}


def validate_items(items: Mapping[str, bool]) -> dict[str, bool]:
    unknown = [key for key in items if key not in ITEM_KINDS]
    if unknown:
        raise ValidationError(f"Unknown dashboard items: {', '.join(unknown)}")
    if not any(items.values()):
        raise ValidationError("At least one dashboard item must be selected")
    return {kind: bool(items.get(kind, False)) for kind in ITEM_KINDS}


def selected_items(items: Mapping[str, bool]) -> list[str]:
    return [kind for kind in ITEM_KINDS if items.get(kind)]


@dataclass(frozen=True)
class Issuer:
    issuer_id: str
    issuer_name: str
    email: str | None = None
    website: str | None = None
    linked_in: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    tiktok: str | None = None
    yelp: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def id(self) -> str:
        return self.issuer_id

    @classmethod
    def create(cls, issuer_name: str, issuer_id: str | None = None, **fields: Any) -> Issuer:
        socials = {name: _clean(fields.pop(name, None)) for name in SOCIAL_FIELDS}
        return cls(
            issuer_id=issuer_id or new_id(),
            issuer_name=_require(issuer_name, "Issuer name"),
            email=_clean(fields.pop("email", None)),
            website=_clean(fields.pop("website", None)),
            **socials,
        )

    def with_socials(self, **socials: str | None) -> Issuer:
        changes = {name: value for name, value in socials.items() if name in SOCIAL_FIELDS}
        return replace(self, updated_at=utcnow(), **changes)


@dataclass(frozen=True)
class Campaign:
    campaign_id: str
    campaign_name: str
    slug: str
    campaign_stage: str | None = None
    summary: str | None = None
    tag_line: str | None = None
    issuer_id: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def id(self) -> str:
        return self.campaign_id

    @classmethod
    def create(
        cls,
        campaign_name: str,
        slug: str,
        campaign_id: str | None = None,
        campaign_stage: str | None = None,
        issuer_id: str | None = None,
        summary: str | None = None,
        tag_line: str | None = None,
    ) -> Campaign:
        return cls(
            campaign_id=campaign_id or new_id(),
            campaign_name=_require(campaign_name, "Campaign name"),
            slug=_require(slug, "Slug").lower(),
            campaign_stage=_clean(campaign_stage),
            summary=summary,
            tag_line=tag_line,
            issuer_id=issuer_id,
        )

    def with_summary(self, summary: str | None, tag_line: str | None) -> Campaign:
        return replace(self, summary=summary, tag_line=tag_line, updated_at=utcnow())


@dataclass(frozen=True)
class User:
    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.id


@dataclass(frozen=True)
class CampaignInfo:
    id: str
    campaign_id: str
    milestones: tuple[str, ...] = ()
    investor_pitch: str | None = None
    is_show_pitch: bool = False
    investor_pitch_title: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Owner:
    id: str
    campaign_id: str
    name: str | None = None
    position: str | None = None
    description: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class DashboardSocials:
    id: str
    campaign_id: str
    linked_in: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    tiktok: str | None = None
    yelp: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, campaign_id: str, **socials: str | None) -> DashboardSocials:
        unknown = set(socials) - set(SOCIAL_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown social fields: {', '.join(sorted(unknown))}")
        return cls(
            id=new_id(),
            campaign_id=_require(campaign_id, "Campaign ID"),
            **{name: _clean(value) for name, value in socials.items()},
        )

    def update(self, **socials: str | None) -> DashboardSocials:
        changes = {name: _clean(value) for name, value in socials.items() if name in SOCIAL_FIELDS}
        return replace(self, updated_at=utcnow(), **changes)

    def socials(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in SOCIAL_FIELDS}


@dataclass(frozen=True)
class DashboardCampaignInfo:
    id: str
    campaign_id: str
    milestones: tuple[str, ...] = ()
    investor_pitch: str | None = None
    is_show_pitch: bool = False
    investor_pitch_title: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        campaign_id: str,
        milestones: Iterable[str] | None = None,
        investor_pitch: str | None = None,
        is_show_pitch: bool = False,
        investor_pitch_title: str | None = None,
    ) -> DashboardCampaignInfo:
        return cls(
            id=new_id(),
            campaign_id=_require(campaign_id, "Campaign ID"),
            milestones=tuple(m.strip() for m in milestones or () if m and m.strip()),
            investor_pitch=investor_pitch,
            is_show_pitch=bool(is_show_pitch),
            investor_pitch_title=investor_pitch_title,
        )

    def update(self, other: DashboardCampaignInfo) -> DashboardCampaignInfo:
        """Take the content of ``other`` while keeping this record's identity."""
        return replace(
            other,
            id=self.id,
            campaign_id=self.campaign_id,
            created_at=self.created_at,
            updated_at=utcnow(),
        )


@dataclass(frozen=True)
class DashboardCampaignSummary:
    id: str
    campaign_id: str
    summary: str | None = None
    tag_line: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, campaign_id: str, summary: str | None = None, tag_line: str | None = None) -> DashboardCampaignSummary:
        return cls(id=new_id(), campaign_id=_require(campaign_id, "Campaign ID"), summary=summary, tag_line=tag_line)

    def update(self, summary: str | None, tag_line: str | None) -> DashboardCampaignSummary:
        return replace(self, summary=summary, tag_line=tag_line, updated_at=utcnow())


@dataclass(frozen=True)
class DashboardOwner:
    id: str
    campaign_id: str
    owner_id: str | None = None
    name: str | None = None
    position: str | None = None
    description: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        campaign_id: str,
        name: str | None = None,
        position: str | None = None,
        description: str | None = None,
        owner_id: str | None = None,
    ) -> DashboardOwner:
        if not (name and name.strip()):
            raise ValidationError("Owner name is required")
        return cls(
            id=new_id(),
            campaign_id=_require(campaign_id, "Campaign ID"),
            owner_id=owner_id,
            name=name.strip(),
            position=_clean(position),
            description=description,
        )

    def update(self, name: str | None, position: str | None, description: str | None) -> DashboardOwner:
        return replace(
            self,
            name=_clean(name) or self.name,
            position=_clean(position),
            description=description,
            updated_at=utcnow(),
        )


@dataclass(frozen=True)
class Submission:
    id: str
    campaign_id: str
    submitted_by: str
    items: dict[str, bool]
    status: SubmissionStatus = SubmissionStatus.pending
    submission_note: str | None = None
    results: dict[str, Any] | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    completed_at: datetime | None = None

    @classmethod
    def create(
        cls,
        campaign_id: str,
        submitted_by: str,
        items: Mapping[str, bool],
        submission_note: str | None = None,
    ) -> Submission:
        return cls(
            id=new_id(),
            campaign_id=_require(campaign_id, "Campaign ID"),
            submitted_by=_require(submitted_by, "Submitter ID"),
            items=validate_items(items),
            submission_note=_clean(submission_note),
        )

    @property
    def selected_items(self) -> list[str]:
        return selected_items(self.items)

    @property
    def is_terminal(self) -> bool:
        return self.status != SubmissionStatus.pending

    def _finish(self, status: SubmissionStatus, results: dict[str, Any]) -> Submission:
        if self.is_terminal:
            raise StateConflictError(f"Submission {self.id} is already {self.status.value}")
        now = utcnow()
        return replace(self, status=status, results=results, updated_at=now, completed_at=now)

    def complete(self, results: dict[str, Any]) -> Submission:
        return self._finish(SubmissionStatus.completed, results)

    def fail(self, results: dict[str, Any]) -> Submission:
        return self._finish(SubmissionStatus.failed, results)


@dataclass(frozen=True)
class DashboardApproval:
    """Per-campaign review state across all dashboard items."""

    id: str
    campaign_id: str
    submitted_items: dict[str, bool]
    status: ApprovalStatus = ApprovalStatus.pending
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    submitted_by: str | None = None
    reviewed_by: str | None = None
    comment: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, campaign_id: str, submitted_items: Mapping[str, bool], submitted_by: str) -> DashboardApproval:
        now = utcnow()
        return cls(
            id=new_id(),
            campaign_id=_require(campaign_id, "Campaign ID"),
            submitted_items=validate_items(submitted_items),
            status=ApprovalStatus.pending,
            submitted_at=now,
            submitted_by=submitted_by,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == ApprovalStatus.pending

    def resubmit(self, submitted_items: Mapping[str, bool], submitted_by: str) -> DashboardApproval:
        """Restart the review cycle; previous flags and review data are discarded."""
        now = utcnow()
        return replace(
            self,
            submitted_items=validate_items(submitted_items),
            status=ApprovalStatus.pending,
            submitted_at=now,
            submitted_by=submitted_by,
            reviewed_at=None,
            reviewed_by=None,
            comment=None,
            updated_at=now,
        )

    def review(self, action: ReviewAction, reviewed_by: str, comment: str | None = None) -> DashboardApproval:
        action = ReviewAction(action)
        comment = _clean(comment)
        if not self.is_pending:
            raise StateConflictError(
                f"Approval for campaign {self.campaign_id} is {self.status.value}; only pending approvals can be reviewed"
            )
        if action == ReviewAction.reject and not comment:
            raise ValidationError("A comment explaining the rejection is required")
        now = utcnow()
        status = ApprovalStatus.approved if action == ReviewAction.approve else ApprovalStatus.rejected
        return replace(
            self,
            status=status,
            reviewed_by=_require(reviewed_by, "Reviewer ID"),
            reviewed_at=now,
            comment=comment,
            updated_at=now,
        )


@dataclass(frozen=True)
class ApprovalHistory:
    id: str
    entity_id: str
    entity_type: str
    campaign_id: str
    status: ApprovalStatus
    user_id: str
    comment: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        entity_id: str,
        entity_type: str,
        campaign_id: str,
        status: ApprovalStatus,
        user_id: str,
        comment: str | None = None,
    ) -> ApprovalHistory:
        now = utcnow()
        return cls(
            id=new_id(),
            entity_id=_require(entity_id, "Entity ID"),
            entity_type=DashboardItemKind(entity_type).value,
            campaign_id=campaign_id,
            status=ApprovalStatus(status),
            user_id=_require(user_id, "User ID"),
            comment=_clean(comment),
            created_at=now,
            updated_at=now,
        )
