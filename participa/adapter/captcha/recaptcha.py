"""reCAPTCHA siteverify client."""

import httpx
import logfire

from participa.adapter.error import ProviderError
from participa.config import CaptchaSettings
from participa.domain.service.captcha import CaptchaVerifier


class RecaptchaVerifier(CaptchaVerifier):
    """Verifies captcha responses against the reCAPTCHA siteverify API."""

    def __init__(self, captcha_settings: CaptchaSettings) -> None:
        self.captcha_settings = captcha_settings

    async def verify(self, response: str | None) -> bool:
        """Check a captcha response.

        Raises:
            ProviderError: If the verification service is unreachable
        """
        if not self.captcha_settings.enabled:
            return True
        if not response:
            return False

        try:
            async with httpx.AsyncClient() as client:
                result = await client.post(
                    self.captcha_settings.verify_url,
                    data={
                        "secret": self.captcha_settings.secret_key,
                        "response": response,
                    },
                    timeout=10.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Captcha verification HTTP error", error=str(e))
            raise ProviderError(f"HTTP error during captcha verification: {e}")

        if result.status_code != 200:
            logfire.error(
                "Captcha verification failed",
                status_code=result.status_code,
                error=result.text,
            )
            raise ProviderError(f"Captcha verification failed: {result.status_code}")

        body = result.json()
        if not body.get("success", False):
            logfire.info(
                "Captcha rejected", error_codes=body.get("error-codes", [])
            )
            return False
        return True


class StaticCaptchaVerifier(CaptchaVerifier):
    """Captcha verifier for tests: accepts any non-empty response unless told otherwise."""

    def __init__(self, accept: bool = True) -> None:
        self.accept = accept

    async def verify(self, response: str | None) -> bool:
        return self.accept and bool(response)
