"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from participa.adapter.password import PasslibPasswordHasher
from participa.config import AuthSettings, CaptchaSettings, MailSettings, Settings
from participa.domain.service import PasswordHasher
from participa.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_captcha_settings(self, settings: Settings) -> CaptchaSettings:
        return settings.captcha

    @provide(scope=Scope.APP)
    def provide_mail_settings(self, settings: Settings) -> MailSettings:
        return settings.mail


class ProdPasswordProvider(ProviderBase):
    """Password hashing provider.

    Hashing is local CPU work, so tests use the real hasher too.
    """

    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        """Provide the argon2 password hasher."""
        return PasslibPasswordHasher()
