"""Outbound email infrastructure providers."""

from dishka import Scope, provide

from participa.adapter.mail import SmtpMailer
from participa.config import Settings
from participa.domain.service import Mailer
from participa.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider delivering over SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mailer(self, settings: Settings) -> Mailer:
        """Provide SMTP mailer with links pointing at the frontend."""
        return SmtpMailer(
            mail_settings=settings.mail, frontend_url=settings.api.frontend_url
        )
