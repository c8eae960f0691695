"""
Integration tests for the dashboard item services: read fallbacks and upserts
"""

import pytest

from campaign_dashboard.entities import CampaignInfo, Owner, new_id
from campaign_dashboard.repositories.campaigns import CampaignInfoRepository, OwnerRepository
from campaign_dashboard.repositories.dashboard import DashboardSocialsRepository
from campaign_dashboard.schemas import (
    CampaignInfoWrite,
    CampaignSummaryWrite,
    OwnerWrite,
    SaveChangesRequest,
    SocialsWrite,
)


class TestSocialsRead:
    """find_by_campaign_slug for socials"""

    @pytest.mark.asyncio
    async def test_falls_back_to_issuer(self, session, container, acme):
        # Given: no dashboard socials row, issuer twitter '@acme'
        # When: reading by slug
        result = await container.socials_service(session).find_by_campaign_slug("acme")

        # Then: the issuer's fields in the socials shape
        assert result.is_ok()
        assert result.value.twitter == "@acme"
        assert result.value.source == "issuer"
        assert result.value.campaign_id == acme.campaign_id
        assert result.value.id is None

    @pytest.mark.asyncio
    async def test_fallback_does_not_write(self, session, container, acme):
        await container.socials_service(session).find_by_campaign_slug("acme")

        stored = await DashboardSocialsRepository(session).find_by_campaign_id(acme.campaign_id)
        assert stored.unwrap() is None

    @pytest.mark.asyncio
    async def test_dashboard_row_wins(self, session, container, acme):
        await container.socials_service(session).create_or_update(
            SocialsWrite(campaign_id=acme.campaign_id, twitter="@acme_dashboard", instagram="acme.ig")
        )

        result = await container.socials_service(session).find_by_campaign_slug("ACME")

        assert result.value.source == "dashboard"
        assert result.value.twitter == "@acme_dashboard"
        assert result.value.instagram == "acme.ig"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("with_dashboard_row", [False, True])
    async def test_repeated_reads_are_identical(self, session, container, acme, with_dashboard_row):
        service = container.socials_service(session)
        if with_dashboard_row:
            await service.create_or_update(SocialsWrite(campaign_id=acme.campaign_id, facebook="fb.com/acme"))

        first = await service.find_by_campaign_slug("acme")
        second = await service.find_by_campaign_slug("acme")

        assert first.value.model_dump(by_alias=True) == second.value.model_dump(by_alias=True)

    @pytest.mark.asyncio
    async def test_unknown_slug_is_campaign_not_found(self, session, container):
        result = await container.socials_service(session).find_by_campaign_slug("ghost")

        assert result.error.code == "CAMPAIGN_NOT_FOUND"
        assert result.error.status_code == 404

    @pytest.mark.asyncio
    async def test_orphaned_campaign_is_issuer_not_found(self, session, container, seed):
        await seed("Orphan", "orphan", with_issuer=False)

        result = await container.socials_service(session).find_by_campaign_slug("orphan")

        assert result.error.code == "ISSUER_NOT_FOUND"
        assert result.error.status_code == 404


class TestSocialsWrite:
    @pytest.mark.asyncio
    async def test_create_then_update_keeps_one_row(self, session, container, acme):
        service = container.socials_service(session)

        created = await service.create_or_update(SocialsWrite(campaign_id=acme.campaign_id, twitter="@one"))
        updated = await service.create_or_update(SocialsWrite(campaign_id=acme.campaign_id, twitter="@two"))

        assert created.value.id == updated.value.id
        assert updated.value.twitter == "@two"

    @pytest.mark.asyncio
    async def test_unknown_campaign(self, session, container):
        result = await container.socials_service(session).create_or_update(SocialsWrite(campaign_id="ghost"))

        assert result.error.code == "CAMPAIGN_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_missing_campaign_id(self, session, container):
        result = await container.socials_service(session).create_or_update(SocialsWrite(twitter="@x"))

        assert result.error.code == "VALIDATION_ERROR"


class TestCampaignInfo:
    @pytest.mark.asyncio
    async def test_defaults_when_nothing_saved(self, session, container, acme):
        result = await container.campaign_info_service(session).find_by_campaign_slug("acme")

        assert result.value.source == "default"
        assert result.value.milestones == []
        assert result.value.is_show_pitch is False

    @pytest.mark.asyncio
    async def test_falls_back_to_published_info(self, session, container, acme):
        await CampaignInfoRepository(session).create(
            CampaignInfo(id=new_id(), campaign_id=acme.campaign_id, milestones=("MVP",), investor_pitch="Pitch")
        )
        await session.commit()

        result = await container.campaign_info_service(session).find_by_campaign_slug("acme")

        assert result.value.source == "published"
        assert result.value.milestones == ["MVP"]
        assert result.value.investor_pitch == "Pitch"

    @pytest.mark.asyncio
    async def test_upsert(self, session, container, acme):
        service = container.campaign_info_service(session)
        first = await service.create_or_update(
            CampaignInfoWrite(campaign_id=acme.campaign_id, milestones=["Seed", " ", "Launch"], is_show_pitch=True)
        )
        second = await service.create_or_update(
            CampaignInfoWrite(campaign_id=acme.campaign_id, milestones=["Launch"], investor_pitch_title="Why us")
        )

        assert first.value.milestones == ["Seed", "Launch"]
        assert second.value.id == first.value.id
        read = await service.find_by_campaign_slug("acme")
        assert read.value.source == "dashboard"
        assert read.value.milestones == ["Launch"]
        assert read.value.investor_pitch_title == "Why us"
        assert read.value.is_show_pitch is False


class TestCampaignSummary:
    @pytest.mark.asyncio
    async def test_falls_back_to_campaign(self, session, container, acme):
        result = await container.campaign_summary_service(session).find_by_campaign_slug("acme")

        assert result.value.source == "campaign"
        assert result.value.summary == "Acme Seed Round summary"

    @pytest.mark.asyncio
    async def test_upsert(self, session, container, acme):
        service = container.campaign_summary_service(session)
        await service.create_or_update(CampaignSummaryWrite(campaign_id=acme.campaign_id, summary="v1"))
        await service.create_or_update(CampaignSummaryWrite(campaign_id=acme.campaign_id, summary="v2", tag_line="t"))

        result = await service.find_by_campaign_slug("acme")

        assert result.value.source == "dashboard"
        assert (result.value.summary, result.value.tag_line) == ("v2", "t")


class TestOwners:
    @pytest.mark.asyncio
    async def test_falls_back_to_published_owners(self, session, container, acme):
        await OwnerRepository(session).create(Owner(id=new_id(), campaign_id=acme.campaign_id, name="Jane", position="CEO"))
        await session.commit()

        result = await container.owners_service(session).find_by_campaign_slug("acme")

        assert [(owner.name, owner.source) for owner in result.value] == [("Jane", "published")]

    @pytest.mark.asyncio
    async def test_known_ids_update_others_create(self, session, container, acme):
        service = container.owners_service(session)
        created = await service.create_or_update(acme.campaign_id, [OwnerWrite(name="Jane", position="CEO")])
        jane = created.value[0]

        result = await service.create_or_update(
            acme.campaign_id,
            [OwnerWrite(id=jane.id, name="Jane", position="Chair"), OwnerWrite(name="John", position="CTO")],
        )

        assert result.is_ok()
        owners = (await service.find_by_campaign_slug("acme")).value
        assert sorted((owner.name, owner.position) for owner in owners) == [("Jane", "Chair"), ("John", "CTO")]
        assert jane.id in {owner.id for owner in owners}

    @pytest.mark.asyncio
    async def test_owner_without_name_is_rejected(self, session, container, acme):
        result = await container.owners_service(session).create_or_update(acme.campaign_id, [OwnerWrite(position="CFO")])

        assert result.error.code == "VALIDATION_ERROR"
        assert (await container.owners_service(session).find_by_campaign_slug("acme")).value == []


class TestSaveChanges:
    @pytest.mark.asyncio
    async def test_saves_every_section(self, session, container, acme):
        request = SaveChangesRequest(
            campaign_id=acme.campaign_id,
            campaign_info=CampaignInfoWrite(milestones=["Beta"]),
            campaign_summary=CampaignSummaryWrite(summary="Short"),
            socials=SocialsWrite(linked_in="https://linkedin.com/company/acme"),
            owners=[OwnerWrite(name="Jane")],
        )

        result = await container.changes_service(session).save_changes(request)

        assert result.value == ["campaignInfo", "campaignSummary", "socials", "owners"]
        socials = await container.socials_service(session).find_by_campaign_slug("acme")
        assert socials.value.linked_in == "https://linkedin.com/company/acme"
        assert socials.value.twitter is None

    @pytest.mark.asyncio
    async def test_first_failure_is_returned_and_nothing_kept(self, session, container, acme):
        request = SaveChangesRequest(
            campaign_id=acme.campaign_id,
            campaign_summary=CampaignSummaryWrite(summary="Kept?"),
            owners=[OwnerWrite(position="No name")],
        )

        result = await container.changes_service(session).save_changes(request)

        assert result.error.code == "VALIDATION_ERROR"
        summary = await container.campaign_summary_service(session).find_by_campaign_slug("acme")
        assert summary.value.source == "campaign"
