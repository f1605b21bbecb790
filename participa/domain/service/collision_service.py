"""Username and email collision resolution."""

import logfire

from participa.domain.repository import AccountRepository
from participa.domain.value import (
    AccountField,
    AccountId,
    Availability,
    Username,
    normalize_email,
)
from participa.domain.value.types import USERNAME_MAX_LENGTH

from .base import Service

FALLBACK_USERNAME = "user"


class CollisionResolver(Service):
    """Decides whether a candidate username or email is free.

    The check is advisory: the storage layer's unique constraints remain
    the source of truth and are re-validated when the write commits.
    """

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize collision resolver.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def check_availability(
        self,
        field: AccountField,
        value: str,
        excluding_account_id: AccountId | None = None,
    ) -> Availability:
        """Check whether ``value`` is free for ``field``.

        Args:
            field: Which unique field to check
            value: Candidate username or email
            excluding_account_id: Account allowed to already own the value

        Returns:
            AVAILABLE or TAKEN_BY_OTHER
        """
        with logfire.span(
            "collision_resolver.check_availability", field=field.value
        ):
            if field == AccountField.USERNAME:
                owner = await self.account_repository.find_by_username(
                    Username(value)
                )
            else:
                owner = await self.account_repository.find_by_email(
                    normalize_email(value)
                )

            if owner is None or owner.id == excluding_account_id:
                return Availability.AVAILABLE

            logfire.info(
                "Value taken by another account",
                field=field.value,
                owner_id=str(owner.id),
            )
            return Availability.TAKEN_BY_OTHER

    async def is_available(
        self,
        field: AccountField,
        value: str,
        excluding_account_id: AccountId | None = None,
    ) -> bool:
        """Shortcut for ``check_availability(...) == AVAILABLE``."""
        availability = await self.check_availability(
            field, value, excluding_account_id
        )
        return availability == Availability.AVAILABLE

    async def unique_username(self, base: str) -> Username:
        """Find a free username derived from ``base``.

        Handles collisions by appending numeric suffixes: ``manuela``,
        ``manuela-2``, ``manuela-3``...

        Args:
            base: Slugified candidate (may be empty)

        Returns:
            Username that is currently unused
        """
        with logfire.span("collision_resolver.unique_username", base=base):
            base = base or FALLBACK_USERNAME
            candidate = base
            counter = 1
            while not await self.is_available(AccountField.USERNAME, candidate):
                counter += 1
                suffix = f"-{counter}"
                # Ensure we don't exceed the username limit with the suffix
                candidate = base[: USERNAME_MAX_LENGTH - len(suffix)].rstrip("-")
                candidate = f"{candidate}{suffix}"
                logfire.debug(
                    "Username collision, trying with suffix",
                    base=base,
                    attempt=candidate,
                )

            return Username(candidate)
