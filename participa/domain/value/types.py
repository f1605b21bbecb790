"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import EmailStr, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from participa.domain.value.common import RootValueObject, ValueObject

USERNAME_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
USERNAME_MAX_LENGTH = 60

_email_adapter = TypeAdapter(EmailStr)


class AuthProvider(str, Enum):
    """Supported third-party identity providers."""

    TWITTER = "twitter"
    FACEBOOK = "facebook"
    GOOGLE = "google"


class TokenPurpose(str, Enum):
    """What a one-time emailed token proves."""

    CONFIRMATION = "confirmation"
    PASSWORD_RESET = "password_reset"


class AccountField(str, Enum):
    """Account fields that must be globally unique."""

    USERNAME = "username"
    EMAIL = "email"


class Availability(str, Enum):
    """Result of a uniqueness check."""

    AVAILABLE = "available"
    TAKEN_BY_OTHER = "taken_by_other"


class LinkOutcome(str, Enum):
    """How an inbound provider identity was matched to an account."""

    LINKED = "linked"
    CREATED_COMPLETE = "created_complete"
    CREATED_NEEDS_COMPLETION = "created_needs_completion"


class SignupState(str, Enum):
    """States of the signup completion flow."""

    AWAITING_INPUT = "awaiting_input"
    AWAITING_COLLISION_RESOLUTION = "awaiting_collision_resolution"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    COMPLETE = "complete"


class SignupEvent(str, Enum):
    """Events that drive the signup completion flow."""

    SUBMISSION_COLLIDED = "submission_collided"
    SUBMISSION_ACCEPTED = "submission_accepted"
    SUBMISSION_CONFIRMED = "submission_confirmed"
    TOKEN_CONSUMED = "token_consumed"


class Username(RootValueObject[str]):
    """Public account name in slug form.

    Lowercase ASCII alphanumerics separated by single hyphens, 1-60 characters.
    Examples: 'manuela', 'manuela-carmena', 'manuela-2'
    """

    @field_validator("root")
    @classmethod
    def validate_username_format(cls, v: str) -> str:
        """Validate username format."""
        if len(v) < 1 or len(v) > USERNAME_MAX_LENGTH:
            raise ValueError(f"Username must be 1-{USERNAME_MAX_LENGTH} characters")
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username must be lowercase alphanumeric with single hyphens, "
                "no leading or trailing hyphens"
            )
        return v


class ProfileClaims(ValueObject):
    """Profile claims asserted by an identity provider.

    ``external_id`` is optional here so a malformed provider response can
    still be represented and rejected by the identity linker.
    """

    provider: AuthProvider
    external_id: str | None
    display_name: str | None = None
    email: str | None = None
    verified_email: bool = False


def normalize_email(value: str) -> str:
    """Normalize an email address for storage and comparison."""
    return value.strip().lower()


def is_well_formed_email(value: str | None) -> bool:
    """Check an email address is syntactically valid."""
    if not value or not value.strip():
        return False
    try:
        _email_adapter.validate_python(value.strip())
    except PydanticValidationError:
        return False
    return True
