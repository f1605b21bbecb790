"""Bot-check interface."""


class CaptchaVerifier:
    """Verifies a captcha response submitted with a registration form."""

    async def verify(self, response: str | None) -> bool:
        """Return True if the captcha response is valid."""
        raise NotImplementedError
