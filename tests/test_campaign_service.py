"""
Integration tests for CampaignService.get_pending_campaigns
"""

import pytest
import pytest_asyncio

from campaign_dashboard.models import DashboardItemKind

SOCIALS = DashboardItemKind.socials.value


@pytest_asyncio.fixture
async def pending(session, container, seed):
    """Five campaigns submitted in order, one of them already approved"""
    campaigns = [
        await seed("Alpha Solar", "alpha-solar", stage="live"),
        await seed("Beta Brewing", "beta-brewing", stage="upcoming"),
        await seed("Gamma Solar Farms", "gamma-solar", stage="live"),
        await seed("Delta Bikes", "delta-bikes", stage="live"),
        await seed("Epsilon Solar", "epsilon-solar", stage="live"),
    ]
    submissions = container.submission_service(session)
    for campaign in campaigns:
        assert (await submissions.submit_for_review(campaign.campaign_id, "user-1", [SOCIALS])).is_ok()
    await container.review_service(session).review(campaigns[3].campaign_id, "admin-1", [SOCIALS], "approve")
    return campaigns


class TestPendingCampaigns:
    @pytest.mark.asyncio
    async def test_first_page(self, session, container, pending):
        result = await container.campaign_service(session).get_pending_campaigns(page=1, per_page=3)

        page = result.value
        assert [item.slug for item in page.items] == ["alpha-solar", "beta-brewing", "gamma-solar"]
        assert page.total == 4
        assert page.total_pages == 2
        assert page.has_next is True
        assert page.has_previous is False

    @pytest.mark.asyncio
    async def test_last_page(self, session, container, pending):
        page = (await container.campaign_service(session).get_pending_campaigns(page=2, per_page=3)).value

        assert [item.slug for item in page.items] == ["epsilon-solar"]
        assert page.has_next is False
        assert page.has_previous is True

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, session, container, pending):
        page = (await container.campaign_service(session).get_pending_campaigns(search_term="SOLAR")).value

        assert [item.campaign_name for item in page.items] == ["Alpha Solar", "Gamma Solar Farms", "Epsilon Solar"]
        assert page.total == 3

    @pytest.mark.asyncio
    async def test_stage_filter(self, session, container, pending):
        page = (await container.campaign_service(session).get_pending_campaigns(campaign_stage="upcoming")).value

        assert [item.slug for item in page.items] == ["beta-brewing"]
        assert page.items[0].submitted_items[SOCIALS] is True

    @pytest.mark.asyncio
    async def test_camel_case_payload(self, session, container, pending):
        page = (await container.campaign_service(session).get_pending_campaigns(per_page=2)).value

        payload = page.model_dump(by_alias=True)
        assert {"items", "total", "page", "perPage", "totalPages", "hasNext", "hasPrevious"} <= set(payload)
        assert "campaignName" in payload["items"][0]

    @pytest.mark.asyncio
    async def test_empty_result(self, session, container, acme):
        page = (await container.campaign_service(session).get_pending_campaigns()).value

        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0
        assert page.has_next is False

    @pytest.mark.asyncio
    async def test_invalid_page(self, session, container):
        result = await container.campaign_service(session).get_pending_campaigns(page=0)

        assert result.error.code == "VALIDATION_ERROR"
