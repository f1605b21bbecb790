"""One-time token domain service."""

import hashlib
import secrets
from datetime import timedelta
from uuid import uuid4

import logfire

from participa.config import AuthSettings
from participa.domain.error import ExpiredTokenError, InvalidTokenError
from participa.domain.model.auth_token import AuthToken
from participa.domain.model.common import utc_now
from participa.domain.repository import AuthTokenRepository
from participa.domain.value import AccountId, AuthTokenId, TokenPurpose

from .base import Service


def hash_token(raw_token: str) -> str:
    """SHA-256 hex digest of a raw token; only digests are stored."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


class TokenService(Service):
    """Issues and redeems single-use emailed tokens."""

    def __init__(
        self, auth_token_repository: AuthTokenRepository, auth_settings: AuthSettings
    ) -> None:
        """Initialize token service.

        Args:
            auth_token_repository: Token repository
            auth_settings: Authentication settings (token lifetimes)
        """
        self.auth_token_repository = auth_token_repository
        self.auth_settings = auth_settings

    def _ttl(self, purpose: TokenPurpose) -> timedelta:
        if purpose == TokenPurpose.CONFIRMATION:
            return timedelta(hours=self.auth_settings.confirmation_token_ttl_hours)
        return timedelta(hours=self.auth_settings.password_reset_token_ttl_hours)

    async def issue(self, account_id: AccountId, purpose: TokenPurpose) -> str:
        """Issue a new token, superseding earlier live tokens of the same purpose.

        Args:
            account_id: Account the token proves control of
            purpose: What the token is for

        Returns:
            Raw token (returned once, never stored)
        """
        with logfire.span(
            "token_service.issue", account_id=str(account_id), purpose=purpose.value
        ):
            now = utc_now()
            superseded = await self.auth_token_repository.supersede_live(
                account_id, purpose, now
            )

            raw_token = secrets.token_urlsafe(32)
            await self.auth_token_repository.add(
                AuthToken(
                    id=AuthTokenId(uuid4()),
                    account_id=account_id,
                    purpose=purpose,
                    token_hash=hash_token(raw_token),
                    expires_at=now + self._ttl(purpose),
                    created_at=now,
                )
            )
            logfire.info(
                "Token issued",
                account_id=str(account_id),
                purpose=purpose.value,
                superseded=superseded,
            )
            return raw_token

    async def consume(self, raw_token: str, purpose: TokenPurpose) -> AuthToken:
        """Redeem a token exactly once.

        Args:
            raw_token: Token as received from the emailed link
            purpose: Expected purpose

        Returns:
            The consumed token

        Raises:
            InvalidTokenError: Unknown, spent or superseded token, or a lost
                concurrent redemption
            ExpiredTokenError: Token past its expiry
        """
        with logfire.span("token_service.consume", purpose=purpose.value):
            token_hash = hash_token(raw_token)
            now = utc_now()

            token = await self.auth_token_repository.find_by_hash(token_hash, purpose)
            if token is None or token.is_spent:
                logfire.warn("Token rejected", purpose=purpose.value, reason="invalid")
                raise InvalidTokenError()
            if token.is_expired(now):
                logfire.warn("Token rejected", purpose=purpose.value, reason="expired")
                raise ExpiredTokenError()

            consumed = await self.auth_token_repository.consume(token_hash, purpose, now)
            if consumed is None:
                logfire.warn(
                    "Token rejected", purpose=purpose.value, reason="already_consumed"
                )
                raise InvalidTokenError()

            logfire.info(
                "Token consumed",
                account_id=str(consumed.account_id),
                purpose=purpose.value,
            )
            return consumed
