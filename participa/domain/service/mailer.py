"""Outbound email interface."""

from participa.domain.model.account import Account


class Mailer:
    """Delivers account emails carrying one-time tokens.

    Implementations build the link from the raw token; templating and
    delivery are outside the domain.
    """

    async def send_confirmation_instructions(self, account: Account, token: str) -> None:
        """Send the email confirmation link."""
        raise NotImplementedError

    async def send_reset_password_instructions(
        self, account: Account, token: str
    ) -> None:
        """Send the password reset link."""
        raise NotImplementedError
