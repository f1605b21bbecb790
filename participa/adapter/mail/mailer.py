"""SMTP mailer (aiosmtplib) and an in-memory outbox for tests."""

from dataclasses import dataclass
from email.message import EmailMessage
from urllib.parse import urlencode

import aiosmtplib
import logfire

from participa.config import MailSettings
from participa.domain.model.account import Account
from participa.domain.service.mailer import Mailer
from participa.util.logging import redact_email


@dataclass(frozen=True)
class SentMail:
    """An email as handed to the transport."""

    to: str
    subject: str
    body: str
    link: str
    token: str


def _link(frontend_url: str, path: str, param: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}{path}?{urlencode({param: token})}"


def _confirmation_mail(account: Account, link: str, token: str) -> SentMail:
    return SentMail(
        to=account.email,
        subject="Confirmation instructions",
        body=(
            f"Hi {account.username.root},\n\n"
            f"You can confirm your account email through the link below:\n{link}\n"
        ),
        link=link,
        token=token,
    )


def _reset_password_mail(account: Account, link: str, token: str) -> SentMail:
    return SentMail(
        to=account.email,
        subject="Reset password instructions",
        body=(
            f"Hi {account.username.root},\n\n"
            "Someone has requested a link to change your password. "
            f"You can do this through the link below:\n{link}\n\n"
            "If you didn't request this, please ignore this email. Your "
            "password won't change until you access the link above and "
            "create a new one.\n"
        ),
        link=link,
        token=token,
    )


class SmtpMailer(Mailer):
    """Sends account emails over SMTP.

    When no SMTP host is configured the send is skipped (logged only), so
    local development works without a mail server.
    """

    def __init__(self, mail_settings: MailSettings, frontend_url: str) -> None:
        self.mail_settings = mail_settings
        self.frontend_url = frontend_url

    async def send_confirmation_instructions(self, account: Account, token: str) -> None:
        link = _link(
            self.frontend_url,
            self.mail_settings.confirmation_path,
            "confirmation_token",
            token,
        )
        await self._send(_confirmation_mail(account, link, token))

    async def send_reset_password_instructions(
        self, account: Account, token: str
    ) -> None:
        link = _link(
            self.frontend_url,
            self.mail_settings.password_reset_path,
            "reset_password_token",
            token,
        )
        await self._send(_reset_password_mail(account, link, token))

    async def _send(self, mail: SentMail) -> None:
        settings = self.mail_settings
        if not settings.smtp_host:
            logfire.info(
                "SMTP not configured, email skipped",
                to=redact_email(mail.to),
                subject=mail.subject,
            )
            return

        message = EmailMessage()
        message["Subject"] = mail.subject
        message["From"] = f"{settings.sender_name} <{settings.sender}>"
        message["To"] = mail.to
        message.set_content(mail.body)

        # Delivery failures are logged, not raised: the user can ask for a resend
        try:
            await aiosmtplib.send(
                message,
                hostname=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_username,
                password=settings.smtp_password,
                start_tls=settings.use_tls,
            )
        except aiosmtplib.SMTPException as e:
            logfire.error(
                "Email delivery failed",
                to=redact_email(mail.to),
                subject=mail.subject,
                error=str(e),
            )
            return

        logfire.info("Email sent", to=redact_email(mail.to), subject=mail.subject)


class OutboxMailer(Mailer):
    """Mailer that keeps every email in ``deliveries`` instead of sending it."""

    def __init__(self, mail_settings: MailSettings, frontend_url: str) -> None:
        self.mail_settings = mail_settings
        self.frontend_url = frontend_url
        self.deliveries: list[SentMail] = []

    async def send_confirmation_instructions(self, account: Account, token: str) -> None:
        link = _link(
            self.frontend_url,
            self.mail_settings.confirmation_path,
            "confirmation_token",
            token,
        )
        self.deliveries.append(_confirmation_mail(account, link, token))

    async def send_reset_password_instructions(
        self, account: Account, token: str
    ) -> None:
        link = _link(
            self.frontend_url,
            self.mail_settings.password_reset_path,
            "reset_password_token",
            token,
        )
        self.deliveries.append(_reset_password_mail(account, link, token))

    def last_to(self, email: str) -> SentMail | None:
        """Most recent email delivered to ``email``."""
        for mail in reversed(self.deliveries):
            if mail.to == email:
                return mail
        return None
