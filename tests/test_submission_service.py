"""
Integration tests for DashboardSubmissionService.submit_for_review
"""

import pytest

from campaign_dashboard.errors import PersistenceError
from campaign_dashboard.events import SubmissionSubmitted
from campaign_dashboard.models import DashboardItemKind, SubmissionStatus
from campaign_dashboard.repositories.approvals import SubmissionRepository
from campaign_dashboard.result import Err

SOCIALS = DashboardItemKind.socials.value
INFO = DashboardItemKind.campaign_info.value
SUMMARY = DashboardItemKind.campaign_summary.value


@pytest.fixture
def received(container):
    events = []

    async def capture(event):
        events.append(event)

    container.events.register(SubmissionSubmitted.name, capture)
    return events


class TestSubmitForReview:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "entity_types",
        [[SOCIALS], [INFO, SUMMARY], [INFO, SUMMARY, SOCIALS]],
    )
    async def test_named_kinds_are_flagged_pending(self, session, container, acme, entity_types):
        service = container.submission_service(session)

        result = await service.submit_for_review(acme.campaign_id, "user-1", entity_types)

        assert result.is_ok()
        approval = (await service.get_approval(acme.campaign_id)).unwrap()
        assert approval.status == "pending"
        assert {kind for kind, flagged in approval.submitted_items.items() if flagged} == set(entity_types)

    @pytest.mark.asyncio
    async def test_submission_is_recorded_as_completed(self, session, container, acme, received):
        service = container.submission_service(session)

        result = await service.submit_for_review(acme.campaign_id, "user-1", [SOCIALS], submission_note="New links")

        submissions = (await SubmissionRepository(session).find_by_campaign_id(acme.campaign_id)).unwrap()
        assert len(submissions) == 1
        assert submissions[0].id == result.value.submission_id
        assert submissions[0].status == SubmissionStatus.completed
        assert submissions[0].results == {SOCIALS: "submitted"}
        assert submissions[0].submission_note == "New links"

        # Then: the event went out once the work was committed
        assert len(received) == 1
        assert received[0].campaign_id == acme.campaign_id
        assert received[0].items == (SOCIALS,)
        assert received[0].submission_id == result.value.submission_id

    @pytest.mark.asyncio
    async def test_empty_entity_types_is_validation_error(self, session, container, acme, received):
        result = await container.submission_service(session).submit_for_review(acme.campaign_id, "user-1", [])

        assert isinstance(result, Err)
        assert result.error.code == "VALIDATION_ERROR"
        assert received == []

    @pytest.mark.asyncio
    async def test_unknown_entity_type_is_validation_error(self, session, container, acme):
        result = await container.submission_service(session).submit_for_review(
            acme.campaign_id, "user-1", ["dashboard-owners"]
        )

        assert result.error.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_campaign_is_not_found(self, session, container):
        result = await container.submission_service(session).submit_for_review("nope", "user-1", [SOCIALS])

        assert result.is_err()
        assert result.error.code == "CAMPAIGN_NOT_FOUND"
        assert (await SubmissionRepository(session).find_by_campaign_id("nope")).unwrap() == []

    @pytest.mark.asyncio
    async def test_approval_failure_marks_submission_failed(self, session, container, acme, received, monkeypatch):
        service = container.submission_service(session)

        async def broken_upsert(*args, **kwargs):
            return Err(PersistenceError("disk full"))

        monkeypatch.setattr(service.approvals, "submit_for_approval", broken_upsert)

        result = await service.submit_for_review(acme.campaign_id, "user-1", [SOCIALS])

        assert result.error.code == "PERSISTENCE_ERROR"
        submissions = (await SubmissionRepository(session).find_by_campaign_id(acme.campaign_id)).unwrap()
        assert submissions[0].status == SubmissionStatus.failed
        assert submissions[0].results["error"] == "disk full"
        assert received == []

    @pytest.mark.asyncio
    async def test_get_approval_without_submission(self, session, container, acme):
        result = await container.submission_service(session).get_approval(acme.campaign_id)

        assert result.error.code == "APPROVAL_NOT_FOUND"
