"""Unit tests for the account mailers."""

from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlparse

import aiosmtplib
import pytest

from participa.adapter.mail import OutboxMailer, SmtpMailer
from participa.config import MailSettings
from tests.factories import make_account

FRONTEND = "http://localhost:5173/"


class TestOutboxMailer:
    """Tests for OutboxMailer links and content."""

    @pytest.mark.asyncio
    async def test_confirmation_link(self):
        mailer = OutboxMailer(MailSettings(), FRONTEND)
        account = make_account(email_confirmed=False)

        await mailer.send_confirmation_instructions(account, "tok/en+1")

        mail = mailer.last_to("manuela@madrid.es")
        link = urlparse(mail.link)
        assert f"{link.scheme}://{link.netloc}{link.path}" == (
            "http://localhost:5173/auth/confirm"
        )
        assert parse_qs(link.query) == {"confirmation_token": ["tok/en+1"]}
        assert mail.link in mail.body
        assert "manuela" in mail.body

    @pytest.mark.asyncio
    async def test_reset_link(self):
        mailer = OutboxMailer(MailSettings(), FRONTEND)

        await mailer.send_reset_password_instructions(make_account(), "abc")

        mail = mailer.last_to("manuela@madrid.es")
        assert mail.link == "http://localhost:5173/auth/password/edit?reset_password_token=abc"
        assert mail.subject == "Reset password instructions"

    def test_last_to_unknown_recipient(self):
        mailer = OutboxMailer(MailSettings(), FRONTEND)

        assert mailer.last_to("nobody@madrid.es") is None


class TestSmtpMailer:
    """Tests for SmtpMailer delivery."""

    @pytest.mark.asyncio
    async def test_skips_without_smtp_host(self):
        mailer = SmtpMailer(MailSettings(), FRONTEND)

        with patch("aiosmtplib.send", new_callable=AsyncMock) as send:
            await mailer.send_confirmation_instructions(make_account(), "abc")

        send.assert_not_called()

    @pytest.mark.asyncio
    async def test_sends_message(self):
        settings = MailSettings(smtp_host="smtp.madrid.es", smtp_port=2525)
        mailer = SmtpMailer(settings, FRONTEND)

        with patch("aiosmtplib.send", new_callable=AsyncMock) as send:
            await mailer.send_confirmation_instructions(make_account(), "abc")

        message = send.call_args.args[0]
        assert message["To"] == "manuela@madrid.es"
        assert message["Subject"] == "Confirmation instructions"
        assert send.call_args.kwargs["hostname"] == "smtp.madrid.es"
        assert send.call_args.kwargs["port"] == 2525

    @pytest.mark.asyncio
    async def test_delivery_failure_is_not_raised(self):
        mailer = SmtpMailer(MailSettings(smtp_host="smtp.madrid.es"), FRONTEND)

        with patch(
            "aiosmtplib.send",
            new_callable=AsyncMock,
            side_effect=aiosmtplib.SMTPException("boom"),
        ):
            await mailer.send_reset_password_instructions(make_account(), "abc")
