"""Mock mail providers for testing."""

from dishka import Scope, provide

from participa.adapter.mail import OutboxMailer
from participa.config import Settings
from participa.domain.service import Mailer
from participa.util.di.infrastructure.mail import MailProvider


class MockMailProvider(MailProvider):
    """Mock mail provider collecting emails in an in-memory outbox."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mailer(self, settings: Settings) -> Mailer:
        """Provide outbox mailer."""
        return OutboxMailer(
            mail_settings=settings.mail, frontend_url=settings.api.frontend_url
        )
