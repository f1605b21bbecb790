"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from participa.domain.model import Account, AuthToken, Identity, Session
from participa.domain.value import (
    AccountId,
    AuthProvider,
    AuthTokenId,
    IdentityId,
    SessionId,
    SignupState,
    TokenPurpose,
    Username,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(_uuid(row["id"])),
        username=Username(row["username"]),
        email=row["email"],
        email_confirmed=row["email_confirmed"],
        confirmed_at=row.get("confirmed_at"),
        password_hash=row.get("password_hash"),
        signup_state=SignupState(row["signup_state"]),
        terms_accepted_at=row.get("terms_accepted_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = account.model_dump()
    data["signup_state"] = account.signup_state.value
    return data


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model."""
    return Identity(
        id=IdentityId(_uuid(row["id"])),
        account_id=AccountId(_uuid(row["account_id"])),
        provider=AuthProvider(row["provider"]),
        external_id=row["external_id"],
        created_at=row["created_at"],
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to database dict."""
    data = identity.model_dump()
    data["provider"] = identity.provider.value
    return data


def row_to_auth_token(row: Dict[str, Any]) -> AuthToken:
    """Convert database row to AuthToken domain model."""
    return AuthToken(
        id=AuthTokenId(_uuid(row["id"])),
        account_id=AccountId(_uuid(row["account_id"])),
        purpose=TokenPurpose(row["purpose"]),
        token_hash=row["token_hash"],
        expires_at=row["expires_at"],
        used_at=row.get("used_at"),
        superseded_at=row.get("superseded_at"),
        created_at=row["created_at"],
    )


def auth_token_to_dict(token: AuthToken) -> Dict[str, Any]:
    """Convert AuthToken domain model to database dict."""
    data = token.model_dump()
    data["purpose"] = token.purpose.value
    return data


def row_to_session(row: Dict[str, Any]) -> Session:
    """Convert database row to Session domain model."""
    return Session(
        id=SessionId(_uuid(row["id"])),
        account_id=AccountId(_uuid(row["account_id"])),
        created_at=row["created_at"],
        refreshed_at=row["refreshed_at"],
        expires_at=row["expires_at"],
    )


def session_to_dict(session: Session) -> Dict[str, Any]:
    """Convert Session domain model to database dict."""
    return session.model_dump()
