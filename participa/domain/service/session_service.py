"""Session domain service."""

from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID, uuid4

import logfire

from participa.config import AuthSettings
from participa.domain.error import IncompleteSignupError
from participa.domain.model.account import Account
from participa.domain.model.common import utc_now
from participa.domain.model.session import Session
from participa.domain.repository import AccountRepository, SessionRepository
from participa.domain.value import AccountId, SessionId
from participa.util.jwt import JWTError, create_token, verify_token

from .base import Service
from .confirmation_service import ConfirmationGate


@dataclass(frozen=True)
class IssuedSession:
    """A session record together with its bearer credential."""

    session: Session
    token: str
    refreshed: bool


@dataclass(frozen=True)
class SignOutResult:
    """Outcome of a sign-out request."""

    already_signed_out: bool


class SessionService(Service):
    """Establishes, checks and destroys authenticated sessions."""

    def __init__(
        self,
        account_repository: AccountRepository,
        session_repository: SessionRepository,
        confirmation_gate: ConfirmationGate,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize session service.

        Args:
            account_repository: Account repository
            session_repository: Session repository
            confirmation_gate: Gate every session must pass
            auth_settings: Authentication settings (JWT, session lifetime)
        """
        self.account_repository = account_repository
        self.session_repository = session_repository
        self.confirmation_gate = confirmation_gate
        self.auth_settings = auth_settings

    async def establish(self, account: Account) -> IssuedSession:
        """Issue a session for a confirmed account that has finished signing up.

        Re-invoking while a session is active refreshes that session
        (same session ID, later expiry) instead of creating another.

        Raises:
            UnconfirmedAccountError: If the account's email is not confirmed
            IncompleteSignupError: If the signup completion flow is unfinished
        """
        with logfire.span("session_service.establish", account_id=str(account.id)):
            self.confirmation_gate.require_confirmed(account)
            if not account.is_signup_complete:
                raise IncompleteSignupError(str(account.id), account.signup_state.value)

            now = utc_now()
            expires_at = now + timedelta(days=self.auth_settings.session_expiry_days)
            existing = await self.session_repository.find_active_by_account_id(
                account.id, now
            )

            if existing:
                session = existing.model_copy(
                    update={"refreshed_at": now, "expires_at": expires_at}
                )
            else:
                session = Session(
                    id=SessionId(uuid4()),
                    account_id=account.id,
                    created_at=now,
                    refreshed_at=now,
                    expires_at=expires_at,
                )
            saved = await self.session_repository.save(session)

            token = create_token(
                session_id=str(saved.id),
                account_id=str(account.id),
                username=account.username.root,
                expires_at=expires_at,
                settings=self.auth_settings,
            )
            logfire.info(
                "Session established",
                account_id=str(account.id),
                session_id=str(saved.id),
                refreshed=existing is not None,
            )
            return IssuedSession(session=saved, token=token, refreshed=existing is not None)

    async def authenticate(self, token: str | None) -> Account | None:
        """Resolve a bearer token to its account.

        Returns:
            The account if the token maps to an active session, None otherwise
        """
        if not token:
            return None

        session = await self._session_from_token(token)
        if session is None:
            return None
        return await self.account_repository.find_by_id(session.account_id)

    async def sign_out(self, token: str | None) -> SignOutResult:
        """Destroy the caller's session.

        Never fails: a missing, invalid or expired token, or a session that
        was already destroyed, yields ``already_signed_out=True``.
        """
        with logfire.span("session_service.sign_out"):
            if not token:
                return SignOutResult(already_signed_out=True)

            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.debug("Sign out with unusable token", error=str(e))
                return SignOutResult(already_signed_out=True)

            deleted = await self.session_repository.delete(
                SessionId(UUID(payload.session_id))
            )
            logfire.info(
                "Signed out",
                account_id=payload.account_id,
                already_signed_out=not deleted,
            )
            return SignOutResult(already_signed_out=not deleted)

    async def destroy_all(self, account_id: AccountId) -> int:
        """Destroy every session of an account (e.g. after a password change)."""
        with logfire.span("session_service.destroy_all", account_id=str(account_id)):
            return await self.session_repository.delete_all_for_account(account_id)

    async def _session_from_token(self, token: str) -> Session | None:
        try:
            payload = verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.debug("Session token rejected", error=str(e))
            return None

        session = await self.session_repository.find_by_id(
            SessionId(UUID(payload.session_id))
        )
        if session is None or not session.is_active(utc_now()):
            return None
        return session
