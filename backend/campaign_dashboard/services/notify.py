"""
Notification service: Slack incoming webhook and plain SMTP email.

Env:
  SLACK_WEBHOOK_URL
  SMTP_HOST, SMTP_PORT, SMTP_USERNAME, SMTP_PASSWORD, SMTP_USE_TLS, SMTP_SENDER
  ADMIN_EMAIL, OWNER_EMAIL

Both channels are optional; when unconfigured the message is skipped. Send
failures are logged and reported as ``False``, never raised.
"""
from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Iterable

import httpx

from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)


class Notifier:
    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or get_settings()
        self.transport = transport

    @property
    def slack_enabled(self) -> bool:
        return bool(self.settings.slack_webhook_url)

    @property
    def email_enabled(self) -> bool:
        return bool(self.settings.smtp_host)

    def review_recipients(self) -> list[str]:
        return [addr for addr in (self.settings.admin_email, self.settings.owner_email) if addr]

    async def send_slack(self, text: str) -> bool:
        if not self.slack_enabled:
            logger.debug("[notify] Slack not configured, skipping")
            return False
        try:
            async with httpx.AsyncClient(timeout=10, transport=self.transport) as client:
                r = await client.post(self.settings.slack_webhook_url, json={"text": text[:3000]})
            if r.status_code == 200:
                return True
            logger.warning(f"[notify] Slack webhook {r.status_code}: {r.text[:200]}")
        except httpx.HTTPError as e:
            logger.warning(f"[notify] Slack send failed: {e}")
        return False

    async def send_email(self, recipients: Iterable[str], subject: str, body: str) -> bool:
        recipients = [addr for addr in recipients if addr]
        if not self.email_enabled or not recipients:
            logger.debug("[notify] email not configured or no recipients, skipping")
            return False
        message = EmailMessage()
        message["From"] = self.settings.smtp_sender
        message["To"] = ", ".join(recipients)
        message["Subject"] = subject
        message.set_content(body)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(f"[notify] email to {recipients} failed: {e}")
            return False
        logger.info(f"[notify] email '{subject}' sent to {recipients}")
        return True

    def _deliver(self, message: EmailMessage) -> None:
        s = self.settings
        with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=30) as server:
            server.ehlo()
            if s.smtp_use_tls:
                server.starttls(context=ssl.create_default_context())
                server.ehlo()
            if s.smtp_username and s.smtp_password:
                server.login(s.smtp_username, s.smtp_password)
            server.send_message(message)

    async def notify_submission(
        self,
        campaign_name: str,
        submitter: str,
        items: Iterable[str],
        submission_note: str | None = None,
    ) -> None:
        items = list(items)
        text = f":inbox_tray: *{campaign_name}* submitted for review by {submitter}: {', '.join(items)}"
        if submission_note:
            text += f"\n> {submission_note}"
        await self.send_slack(text)
        body = (
            f"{submitter} submitted dashboard changes for {campaign_name}.\n\n"
            f"Items: {', '.join(items)}\n"
        )
        if submission_note:
            body += f"Note: {submission_note}\n"
        await self.send_email(self.review_recipients(), f"Dashboard submission: {campaign_name}", body)

    async def notify_review(
        self,
        campaign_name: str,
        reviewer: str,
        status: str,
        items: Iterable[str],
        comment: str | None = None,
    ) -> None:
        items = list(items)
        icon = ":white_check_mark:" if status == "approved" else ":x:"
        text = f"{icon} *{campaign_name}* {status} by {reviewer}: {', '.join(items)}"
        if comment:
            text += f"\n> {comment}"
        await self.send_slack(text)
        body = f"Your dashboard changes for {campaign_name} were {status}.\n\nItems: {', '.join(items)}\n"
        if comment:
            body += f"Reviewer comment: {comment}\n"
        recipients = [self.settings.owner_email] if self.settings.owner_email else []
        await self.send_email(recipients, f"Dashboard review: {campaign_name} {status}", body)
