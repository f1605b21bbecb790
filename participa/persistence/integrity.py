"""Translation of storage uniqueness violations into domain errors."""

from sqlalchemy.exc import IntegrityError

from participa.domain.error import DuplicateKeyError

# Unique constraint name -> field reported by DuplicateKeyError
CONSTRAINT_FIELDS = {
    "uq_accounts_username": "username",
    "uq_accounts_email": "email",
    "uq_identities_provider_external_id": "identity",
    "uq_identities_account_provider": "account_provider",
    "uq_auth_tokens_token_hash": "token_hash",
}


def duplicate_key_error(error: IntegrityError) -> DuplicateKeyError | None:
    """Map a unique violation to DuplicateKeyError.

    Returns None for integrity errors that are not one of our unique
    constraints (foreign keys, NOT NULL), which callers re-raise.
    """
    # asyncpg exposes the constraint on the driver exception wrapped by the DBAPI adapter
    driver_error = getattr(error.orig, "__cause__", None)
    constraint = getattr(driver_error, "constraint_name", None) or getattr(
        error.orig, "constraint_name", None
    )
    message = str(error.orig)
    for name, field in CONSTRAINT_FIELDS.items():
        if constraint == name or name in message:
            return DuplicateKeyError(field)
    return None
