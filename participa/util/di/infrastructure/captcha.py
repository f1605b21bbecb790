"""Captcha infrastructure providers."""

from dishka import Scope, provide

from participa.adapter.captcha import RecaptchaVerifier
from participa.config import CaptchaSettings
from participa.domain.service import CaptchaVerifier
from participa.util.di.base import ProviderBase


class CaptchaProvider(ProviderBase):
    """Captcha component base."""

    __mock_component__ = "captcha"


class ProdCaptchaProvider(CaptchaProvider):
    """Production captcha provider backed by reCAPTCHA."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_captcha_verifier(self, captcha_settings: CaptchaSettings) -> CaptchaVerifier:
        """Provide reCAPTCHA verifier."""
        return RecaptchaVerifier(captcha_settings=captcha_settings)
