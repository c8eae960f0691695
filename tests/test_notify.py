"""
Unit tests for the Slack/email notifier
"""

import json

import httpx
import pytest

from campaign_dashboard.services import notify as notify_module
from campaign_dashboard.services.notify import Notifier


class FakeSMTP:
    sent = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        pass

    def starttls(self, context=None):
        pass

    def login(self, username, password):
        pass

    def send_message(self, message):
        FakeSMTP.sent.append(message)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.sent = []
    monkeypatch.setattr(notify_module.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def slack_transport(requests, status_code=200):
    def handler(request):
        requests.append(request)
        return httpx.Response(status_code, text="ok")

    return httpx.MockTransport(handler)


class TestSlack:
    @pytest.mark.asyncio
    async def test_skipped_when_not_configured(self, settings):
        assert await Notifier(settings).send_slack("hello") is False

    @pytest.mark.asyncio
    async def test_posts_to_webhook(self, settings):
        requests = []
        configured = settings.model_copy(update={"slack_webhook_url": "https://hooks.slack.test/T000/B000"})

        sent = await Notifier(configured, transport=slack_transport(requests)).send_slack("Acme submitted")

        assert sent is True
        assert str(requests[0].url) == "https://hooks.slack.test/T000/B000"
        assert json.loads(requests[0].content) == {"text": "Acme submitted"}

    @pytest.mark.asyncio
    async def test_webhook_error_is_reported_not_raised(self, settings):
        configured = settings.model_copy(update={"slack_webhook_url": "https://hooks.slack.test/T000/B000"})

        sent = await Notifier(configured, transport=slack_transport([], status_code=500)).send_slack("x")

        assert sent is False


class TestEmail:
    @pytest.mark.asyncio
    async def test_skipped_when_not_configured(self, settings, fake_smtp):
        assert await Notifier(settings).send_email(["a@example.com"], "s", "b") is False
        assert fake_smtp.sent == []

    @pytest.mark.asyncio
    async def test_submission_mails_admin_and_owner(self, settings, fake_smtp):
        configured = settings.model_copy(
            update={"smtp_host": "smtp.test", "admin_email": "admin@example.com", "owner_email": "owner@example.com"}
        )

        await Notifier(configured).notify_submission(
            "Acme Seed Round", "Olivia Owner", ["dashboard-socials"], submission_note="New links"
        )

        assert len(fake_smtp.sent) == 1
        message = fake_smtp.sent[0]
        assert message["To"] == "admin@example.com, owner@example.com"
        assert message["Subject"] == "Dashboard submission: Acme Seed Round"
        assert "New links" in message.get_content()

    @pytest.mark.asyncio
    async def test_smtp_failure_is_reported_not_raised(self, settings, monkeypatch):
        class BrokenSMTP(FakeSMTP):
            def send_message(self, message):
                raise notify_module.smtplib.SMTPException("relay denied")

        monkeypatch.setattr(notify_module.smtplib, "SMTP", BrokenSMTP)
        configured = settings.model_copy(update={"smtp_host": "smtp.test"})

        assert await Notifier(configured).send_email(["a@example.com"], "s", "b") is False
