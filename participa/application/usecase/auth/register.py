"""Register use case."""

from uuid import uuid4

import logfire
from pydantic import BaseModel

from participa.adapter.error import ProviderError
from participa.domain.error import ConflictError, DuplicateKeyError, ValidationError
from participa.domain.model.account import Account
from participa.domain.model.common import utc_now
from participa.domain.repository import AccountRepository, UnitOfWork
from participa.domain.service import (
    CaptchaVerifier,
    CollisionResolver,
    ConfirmationGate,
    PasswordService,
    is_placeholder_email,
    slugify,
)
from participa.domain.value import (
    AccountField,
    AccountId,
    SignupState,
    Username,
    is_well_formed_email,
    normalize_email,
)
from participa.util.logging import redact_email

from .common import AccountInfo

CONFIRMATION_SENT_MESSAGE = (
    "A message with a confirmation link has been sent to your email address. "
    "Please follow the link to activate your account."
)


class RegisterRequest(BaseModel):
    """Password registration form.

    Every field is optional at this level so that missing values are
    reported together with the other form errors.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None
    captcha_response: str | None = None
    terms_accepted: bool = False


class RegisterResponse(BaseModel):
    """Pending account created by a registration."""

    account: AccountInfo
    message: str = CONFIRMATION_SENT_MESSAGE


class RegisterUseCase:
    """Use case for registering an account with email and password."""

    def __init__(
        self,
        account_repository: AccountRepository,
        collision_resolver: CollisionResolver,
        password_service: PasswordService,
        captcha_verifier: CaptchaVerifier,
        confirmation_gate: ConfirmationGate,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize register use case.

        Args:
            account_repository: Account repository
            collision_resolver: Username/email availability checks
            password_service: Password policy and hashing
            captcha_verifier: Bot-check
            confirmation_gate: Issues the confirmation email
            unit_of_work: Atomic write boundary
        """
        self.account_repository = account_repository
        self.collision_resolver = collision_resolver
        self.password_service = password_service
        self.captcha_verifier = captcha_verifier
        self.confirmation_gate = confirmation_gate
        self.unit_of_work = unit_of_work

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Execute registration.

        Steps:
        1. Validate every field, collecting all errors
        2. Verify the captcha
        3. Reject a username or email owned by another account
        4. Create the unconfirmed account and mail a confirmation link

        Raises:
            ValidationError: Missing or malformed fields, failed captcha
            ConflictError: Username or email already taken
        """
        username = slugify(request.username or "")
        email = normalize_email(request.email or "")

        with logfire.span("register", username=username, email=redact_email(email)):
            errors: dict[str, str] = {}
            if not username:
                errors["username"] = "can't be blank"
            if not email:
                errors["email"] = "can't be blank"
            elif not is_well_formed_email(email) or is_placeholder_email(email):
                errors["email"] = "is invalid"
            errors.update(
                self.password_service.policy_errors(
                    request.password, request.password_confirmation
                )
            )
            if not request.terms_accepted:
                errors["terms_accepted"] = "must be accepted"
            try:
                if not await self.captcha_verifier.verify(request.captcha_response):
                    errors["captcha"] = "verification failed"
            except ProviderError as e:
                logfire.warn("Captcha service unavailable", error=str(e))
                errors["captcha"] = "could not be verified, please try again"

            if errors:
                logfire.info("Registration rejected", fields=sorted(errors))
                raise ValidationError(errors)

            if not await self.collision_resolver.is_available(
                AccountField.USERNAME, username
            ):
                raise ConflictError(AccountField.USERNAME.value, username)
            if not await self.collision_resolver.is_available(AccountField.EMAIL, email):
                raise ConflictError(AccountField.EMAIL.value, email)

            now = utc_now()
            account = Account(
                id=AccountId(uuid4()),
                username=Username(username),
                email=email,
                email_confirmed=False,
                password_hash=self.password_service.hash(request.password or ""),
                signup_state=SignupState.AWAITING_CONFIRMATION,
                terms_accepted_at=now,
                created_at=now,
                updated_at=now,
            )

            try:
                async with self.unit_of_work.atomic():
                    saved = await self.account_repository.save(account)
                    confirmation_token = await self.confirmation_gate.issue_token(saved)
            except DuplicateKeyError as e:
                # Taken between the availability check and the insert
                value = username if e.field == AccountField.USERNAME.value else email
                raise ConflictError(e.field, value) from e
            await self.confirmation_gate.send(saved, confirmation_token)

            logfire.info("Account registered", account_id=str(saved.id))
            return RegisterResponse(account=AccountInfo.from_account(saved))
