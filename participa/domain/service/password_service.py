"""Password policy and credential checks."""

import logfire

from participa.config import AuthSettings

from .base import Service


class PasswordHasher:
    """Hashes and verifies password credentials."""

    def hash(self, password: str) -> str:
        """Hash a plain text password."""
        raise NotImplementedError

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plain text password against a stored hash."""
        raise NotImplementedError


class PasswordService(Service):
    """Domain service for password rules and hashing."""

    def __init__(self, password_hasher: PasswordHasher, auth_settings: AuthSettings) -> None:
        """Initialize password service.

        Args:
            password_hasher: Hashing implementation
            auth_settings: Authentication settings (minimum length)
        """
        self.password_hasher = password_hasher
        self.auth_settings = auth_settings

    def policy_errors(
        self, password: str | None, confirmation: str | None
    ) -> dict[str, str]:
        """Collect password policy violations.

        Returns:
            Field -> message map (empty when the password is acceptable)
        """
        errors: dict[str, str] = {}
        min_length = self.auth_settings.password_min_length
        if not password:
            errors["password"] = "can't be blank"
        elif len(password) < min_length:
            errors["password"] = f"is too short (minimum is {min_length} characters)"
        if password and password != confirmation:
            errors["password_confirmation"] = "doesn't match password"
        return errors

    def hash(self, password: str) -> str:
        """Hash a password for storage."""
        return self.password_hasher.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Check a password, treating a missing hash as a mismatch."""
        if password_hash is None:
            logfire.debug("Password check against account without password")
            return False
        return self.password_hasher.verify(password, password_hash)
