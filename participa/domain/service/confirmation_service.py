"""Email confirmation gate."""

import logfire

from participa.domain.error import InvalidTokenError, UnconfirmedAccountError
from participa.domain.model.account import Account
from participa.domain.model.common import utc_now
from participa.domain.model.signup import next_state
from participa.domain.repository import AccountRepository, UnitOfWork
from participa.domain.value import SignupEvent, SignupState, TokenPurpose, normalize_email
from participa.util.logging import redact_email

from .base import Service
from .mailer import Mailer
from .slug import is_placeholder_email
from .token_service import TokenService


class ConfirmationGate(Service):
    """Tracks confirmed/unconfirmed email state and gates sessions on it."""

    def __init__(
        self,
        account_repository: AccountRepository,
        token_service: TokenService,
        mailer: Mailer,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize confirmation gate.

        Args:
            account_repository: Account repository
            token_service: One-time token service
            mailer: Outbound mailer
            unit_of_work: Atomic write boundary
        """
        self.account_repository = account_repository
        self.token_service = token_service
        self.mailer = mailer
        self.unit_of_work = unit_of_work

    def is_confirmed(self, account: Account) -> bool:
        """Whether the account has proven control of its (real) email."""
        return account.email_confirmed and not is_placeholder_email(account.email)

    def require_confirmed(self, account: Account) -> None:
        """Raise unless the account may be given a session.

        Raises:
            UnconfirmedAccountError: If the email is not confirmed
        """
        if not self.is_confirmed(account):
            raise UnconfirmedAccountError(str(account.id))

    async def issue(self, account: Account) -> str:
        """Issue a confirmation token for the account's email and mail it.

        Any earlier confirmation token for the account stops working.

        Returns:
            Raw confirmation token
        """
        raw_token = await self.issue_token(account)
        await self.send(account, raw_token)
        return raw_token

    async def issue_token(self, account: Account) -> str:
        """Store a confirmation token without mailing it.

        Callers inside ``unit_of_work.atomic()`` use this and call ``send``
        once the block has exited.
        """
        with logfire.span("confirmation_gate.issue", account_id=str(account.id)):
            return await self.token_service.issue(account.id, TokenPurpose.CONFIRMATION)

    async def send(self, account: Account, raw_token: str) -> None:
        """Mail confirmation instructions carrying ``raw_token``."""
        await self.mailer.send_confirmation_instructions(account, raw_token)

    async def confirm(self, raw_token: str) -> Account:
        """Consume a confirmation token and mark the email confirmed.

        Args:
            raw_token: Token from the confirmation link

        Returns:
            The confirmed account

        Raises:
            InvalidTokenError: Unknown, spent or superseded token
            ExpiredTokenError: Token past its expiry
        """
        with logfire.span("confirmation_gate.confirm"):
            async with self.unit_of_work.atomic():
                token = await self.token_service.consume(
                    raw_token, TokenPurpose.CONFIRMATION
                )
                account = await self.account_repository.find_by_id(token.account_id)
                if account is None:
                    logfire.error(
                        "Confirmation token without account",
                        account_id=str(token.account_id),
                    )
                    raise InvalidTokenError()

                signup_state = account.signup_state
                if signup_state != SignupState.COMPLETE:
                    signup_state = next_state(signup_state, SignupEvent.TOKEN_CONSUMED)

                now = utc_now()
                confirmed = await self.account_repository.save(
                    account.model_copy(
                        update={
                            "email_confirmed": True,
                            "confirmed_at": now,
                            "signup_state": signup_state,
                            "updated_at": now,
                        }
                    )
                )

            logfire.info(
                "Email confirmed",
                account_id=str(confirmed.id),
                signup_state=confirmed.signup_state.value,
            )
            return confirmed

    async def resend(self, email: str) -> None:
        """Re-send confirmation instructions.

        Always returns normally so callers cannot probe which emails exist.
        """
        with logfire.span("confirmation_gate.resend", email=redact_email(email)):
            account = await self.account_repository.find_by_email(normalize_email(email))
            if (
                account is None
                or account.email_confirmed
                or account.signup_state != SignupState.AWAITING_CONFIRMATION
            ):
                logfire.info("Confirmation resend skipped", email=redact_email(email))
                return
            await self.issue(account)
