"""Identity linker domain service.

Matches an inbound provider identity to an account, provisioning a new
account and identity atomically when there is no match.
"""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from participa.config import AuthSettings
from participa.domain.error import (
    ConflictError,
    DuplicateKeyError,
    InvalidProviderResponse,
    NotFoundError,
)
from participa.domain.model.account import Account
from participa.domain.model.common import utc_now
from participa.domain.model.identity import Identity
from participa.domain.repository import AccountRepository, IdentityRepository, UnitOfWork
from participa.domain.value import (
    AccountField,
    AccountId,
    AuthProvider,
    IdentityId,
    LinkOutcome,
    ProfileClaims,
    SignupState,
    is_well_formed_email,
    normalize_email,
)

from .base import Service
from .collision_service import FALLBACK_USERNAME, CollisionResolver
from .confirmation_service import ConfirmationGate
from .slug import is_placeholder_email, placeholder_email, slugify


@dataclass(frozen=True)
class LinkResult:
    """Account and identity matched or created for a provider login."""

    account: Account
    identity: Identity
    outcome: LinkOutcome
    # Raw confirmation token when a real but unverified email was accepted
    confirmation_token: str | None = None


class IdentityLinkService(Service):
    """Finds or creates the account linked to a provider identity."""

    def __init__(
        self,
        account_repository: AccountRepository,
        identity_repository: IdentityRepository,
        collision_resolver: CollisionResolver,
        confirmation_gate: ConfirmationGate,
        unit_of_work: UnitOfWork,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize identity link service.

        Args:
            account_repository: Account repository
            identity_repository: Identity repository
            collision_resolver: Username/email availability checks
            confirmation_gate: Issues confirmation tokens for unverified emails
            unit_of_work: Atomic write boundary
            auth_settings: Authentication settings (retry attempts)
        """
        self.account_repository = account_repository
        self.identity_repository = identity_repository
        self.collision_resolver = collision_resolver
        self.confirmation_gate = confirmation_gate
        self.unit_of_work = unit_of_work
        self.auth_settings = auth_settings

    async def resolve(self, claims: ProfileClaims) -> LinkResult:
        """Resolve provider claims to an account.

        - Known (provider, external_id): pure read, outcome LINKED.
        - Unknown: account and identity created together, outcome
          CREATED_COMPLETE or CREATED_NEEDS_COMPLETION.

        Losing a concurrent creation race for the same identity is
        recovered by re-reading the winner's account (outcome LINKED).

        Raises:
            InvalidProviderResponse: If the claims carry no external ID
        """
        external_id = (claims.external_id or "").strip()
        with logfire.span(
            "identity_link_service.resolve",
            provider=claims.provider.value,
            external_id=external_id,
        ):
            if not external_id:
                logfire.error(
                    "Provider response without external id",
                    provider=claims.provider.value,
                )
                raise InvalidProviderResponse(
                    f"{claims.provider.value} returned no external id"
                )

            linked = await self._find_linked(claims.provider, external_id)
            if linked:
                return linked

            attempts = max(1, self.auth_settings.link_retry_attempts)
            for attempt in range(1, attempts + 1):
                try:
                    return await self._provision(claims, external_id)
                except DuplicateKeyError as e:
                    logfire.warn(
                        "Provisioning hit a uniqueness constraint",
                        field=e.field,
                        attempt=attempt,
                        provider=claims.provider.value,
                        external_id=external_id,
                    )
                    # Another request linked this identity first
                    linked = await self._find_linked(claims.provider, external_id)
                    if linked:
                        return linked
                    if attempt == attempts:
                        raise ConflictError(e.field, external_id) from e

    async def _find_linked(
        self, provider: AuthProvider, external_id: str
    ) -> LinkResult | None:
        identity = await self.identity_repository.find_by_provider(provider, external_id)
        if identity is None:
            return None

        account = await self.account_repository.find_by_id(identity.account_id)
        if account is None:
            # Identity rows cascade with accounts, so this is data corruption
            logfire.error(
                "Identity without account",
                identity_id=str(identity.id),
                account_id=str(identity.account_id),
            )
            raise NotFoundError("Account", str(identity.account_id))

        logfire.info(
            "Provider identity already linked",
            provider=provider.value,
            account_id=str(account.id),
        )
        return LinkResult(account=account, identity=identity, outcome=LinkOutcome.LINKED)

    async def _provision(self, claims: ProfileClaims, external_id: str) -> LinkResult:
        base = slugify(claims.display_name or "") or FALLBACK_USERNAME
        username = await self.collision_resolver.unique_username(base)
        username_collided = username.root != base

        real_email = None
        if (
            claims.email
            and is_well_formed_email(claims.email)
            and not is_placeholder_email(claims.email)
        ):
            candidate = normalize_email(claims.email)
            if await self.collision_resolver.is_available(AccountField.EMAIL, candidate):
                real_email = candidate
            else:
                # Never attach to the existing owner of this email
                logfire.info(
                    "Provider email belongs to another account",
                    provider=claims.provider.value,
                    external_id=external_id,
                )

        email_confirmed = real_email is not None and claims.verified_email
        needs_completion = real_email is None or username_collided
        if needs_completion:
            signup_state = SignupState.AWAITING_INPUT
        elif email_confirmed:
            signup_state = SignupState.COMPLETE
        else:
            signup_state = SignupState.AWAITING_CONFIRMATION

        now = utc_now()
        account = Account(
            id=AccountId(uuid4()),
            username=username,
            email=real_email or placeholder_email(external_id, claims.provider),
            email_confirmed=email_confirmed,
            confirmed_at=now if email_confirmed else None,
            password_hash=None,
            signup_state=signup_state,
            created_at=now,
            updated_at=now,
        )
        identity = Identity(
            id=IdentityId(uuid4()),
            account_id=account.id,
            provider=claims.provider,
            external_id=external_id,
            created_at=now,
        )

        confirmation_token = None
        async with self.unit_of_work.atomic():
            saved = await self.account_repository.save(account)
            saved_identity = await self.identity_repository.add(identity)
            if signup_state == SignupState.AWAITING_CONFIRMATION:
                confirmation_token = await self.confirmation_gate.issue_token(saved)
        if confirmation_token:
            await self.confirmation_gate.send(saved, confirmation_token)

        outcome = (
            LinkOutcome.CREATED_NEEDS_COMPLETION
            if needs_completion
            else LinkOutcome.CREATED_COMPLETE
        )
        logfire.info(
            "Account provisioned from provider identity",
            account_id=str(saved.id),
            provider=claims.provider.value,
            outcome=outcome.value,
            signup_state=signup_state.value,
            placeholder_email=real_email is None,
        )
        return LinkResult(
            account=saved,
            identity=saved_identity,
            outcome=outcome,
            confirmation_token=confirmation_token,
        )
