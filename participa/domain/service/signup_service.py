"""Signup completion domain service."""

from dataclasses import dataclass, field

import logfire

from participa.domain.error import (
    DuplicateKeyError,
    InvalidSignupTransition,
    NotFoundError,
    ValidationError,
)
from participa.domain.model.account import Account
from participa.domain.model.common import utc_now
from participa.domain.model.signup import can_submit, next_state
from participa.domain.repository import AccountRepository, UnitOfWork
from participa.domain.value import (
    AccountField,
    AccountId,
    SignupEvent,
    SignupState,
    Username,
    is_well_formed_email,
    normalize_email,
)

from .base import Service
from .collision_service import CollisionResolver
from .confirmation_service import ConfirmationGate
from .slug import is_placeholder_email, slugify


@dataclass(frozen=True)
class SignupSubmission:
    """Result of one completion form submission."""

    account: Account
    # Field -> submitted value that is owned by another account
    collisions: dict[str, str] = field(default_factory=dict)
    confirmation_token: str | None = None

    @property
    def state(self) -> SignupState:
        return self.account.signup_state

    @property
    def collided(self) -> bool:
        return bool(self.collisions)


class SignupCompletionService(Service):
    """Drives a pending account through the signup completion flow."""

    def __init__(
        self,
        account_repository: AccountRepository,
        collision_resolver: CollisionResolver,
        confirmation_gate: ConfirmationGate,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize signup completion service.

        Args:
            account_repository: Account repository
            collision_resolver: Username/email availability checks
            confirmation_gate: Issues confirmation tokens for new emails
            unit_of_work: Atomic write boundary
        """
        self.account_repository = account_repository
        self.collision_resolver = collision_resolver
        self.confirmation_gate = confirmation_gate
        self.unit_of_work = unit_of_work

    async def submit(
        self,
        account_id: AccountId,
        username: str | None = None,
        email: str | None = None,
        require_collision_state: bool = False,
    ) -> SignupSubmission:
        """Apply a completion form submission to a pending account.

        Colliding values are never written and never touch the account that
        owns them; the pending account keeps its non-colliding changes and
        moves to AWAITING_COLLISION_RESOLUTION. A clean submission moves to
        AWAITING_CONFIRMATION (new or unconfirmed email, token issued) or
        straight to COMPLETE (email unchanged and already confirmed).

        Args:
            account_id: Pending account
            username: New username (slugified), or None to keep the current one
            email: New email, or None to keep the current one
            require_collision_state: Only accept the submission while
                resolving a collision

        Raises:
            NotFoundError: Unknown account
            InvalidSignupTransition: Account not awaiting a submission
            ValidationError: Effective username or email unusable
        """
        with logfire.span("signup_service.submit", account_id=str(account_id)):
            account = await self.account_repository.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account", str(account_id))

            if not can_submit(account.signup_state) or (
                require_collision_state
                and account.signup_state != SignupState.AWAITING_COLLISION_RESOLUTION
            ):
                logfire.warn(
                    "Signup submission rejected",
                    account_id=str(account_id),
                    signup_state=account.signup_state.value,
                )
                raise InvalidSignupTransition(
                    account.signup_state.value, SignupEvent.SUBMISSION_ACCEPTED.value
                )

            changes = self._validated_changes(account, username, email)

            collisions: dict[str, str] = {}
            for account_field, value in list(changes.items()):
                if not await self.collision_resolver.is_available(
                    account_field, value, excluding_account_id=account.id
                ):
                    collisions[account_field.value] = changes.pop(account_field)

            # Unique constraints are re-checked at write time; a value taken
            # in between becomes one more collision.
            while True:
                try:
                    return await self._apply(account, changes, collisions)
                except DuplicateKeyError as e:
                    colliding = AccountField(e.field)
                    if colliding not in changes:
                        raise
                    collisions[e.field] = changes.pop(colliding)

    def _validated_changes(
        self, account: Account, username: str | None, email: str | None
    ) -> dict[AccountField, str]:
        errors: dict[str, str] = {}
        changes: dict[AccountField, str] = {}

        if username is not None:
            candidate = slugify(username)
            if not candidate:
                errors["username"] = "can't be blank"
            elif candidate != account.username.root:
                changes[AccountField.USERNAME] = candidate

        effective_email = account.email
        if email is not None:
            effective_email = normalize_email(email)
        if not effective_email or is_placeholder_email(effective_email):
            errors["email"] = "can't be blank"
        elif not is_well_formed_email(effective_email):
            errors["email"] = "is invalid"
        elif effective_email != account.email:
            changes[AccountField.EMAIL] = effective_email

        if errors:
            raise ValidationError(errors)
        return changes

    async def _apply(
        self,
        account: Account,
        changes: dict[AccountField, str],
        collisions: dict[str, str],
    ) -> SignupSubmission:
        email_changed = AccountField.EMAIL in changes
        if collisions:
            event = SignupEvent.SUBMISSION_COLLIDED
        elif email_changed or not account.email_confirmed:
            event = SignupEvent.SUBMISSION_ACCEPTED
        else:
            event = SignupEvent.SUBMISSION_CONFIRMED

        update: dict = {
            "signup_state": next_state(account.signup_state, event),
            "updated_at": utc_now(),
        }
        if AccountField.USERNAME in changes:
            update["username"] = Username(changes[AccountField.USERNAME])
        if email_changed:
            update["email"] = changes[AccountField.EMAIL]
            update["email_confirmed"] = False
            update["confirmed_at"] = None

        confirmation_token = None
        async with self.unit_of_work.atomic():
            saved = await self.account_repository.save(account.model_copy(update=update))
            if event == SignupEvent.SUBMISSION_ACCEPTED:
                confirmation_token = await self.confirmation_gate.issue_token(saved)
        if confirmation_token:
            await self.confirmation_gate.send(saved, confirmation_token)

        logfire.info(
            "Signup submission applied",
            account_id=str(saved.id),
            signup_event=event.value,
            signup_state=saved.signup_state.value,
            collisions=sorted(collisions),
        )
        return SignupSubmission(
            account=saved,
            collisions=dict(collisions),
            confirmation_token=confirmation_token,
        )
