"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from participa.config import AuthSettings

SESSION_TOKEN_TYPE = "session"
SIGNUP_TICKET_TYPE = "signup"


class TokenPayload(BaseModel):
    """JWT session token payload."""

    session_id: str
    account_id: str
    username: str
    exp: datetime


class SignupTicketPayload(BaseModel):
    """JWT payload proving a browser came through a provider callback."""

    account_id: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    session_id: str,
    account_id: str,
    username: str,
    expires_at: datetime,
    settings: AuthSettings,
) -> str:
    """Create a JWT token for a session.

    Args:
        session_id: Session ID
        account_id: Account ID owning the session
        username: Account username
        expires_at: Session expiry (used as the ``exp`` claim)
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    payload = {
        "typ": SESSION_TOKEN_TYPE,
        "session_id": session_id,
        "account_id": account_id,
        "username": username,
        "exp": expires_at,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    payload = _decode(token, SESSION_TOKEN_TYPE, settings)
    try:
        return TokenPayload(**payload)
    except PydanticValidationError:
        raise JWTError("Invalid token payload")


def create_signup_ticket(account_id: str, settings: AuthSettings) -> str:
    """Create the short-lived ticket that authorizes completing a pending signup."""
    payload = {
        "typ": SIGNUP_TICKET_TYPE,
        "account_id": account_id,
        "exp": datetime.now(timezone.utc)
        + timedelta(minutes=settings.signup_ticket_ttl_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_signup_ticket(token: str, settings: AuthSettings) -> SignupTicketPayload:
    """Verify and decode a signup ticket.

    Raises:
        JWTError: If the ticket is invalid or expired
    """
    payload = _decode(token, SIGNUP_TICKET_TYPE, settings)
    try:
        return SignupTicketPayload(**payload)
    except PydanticValidationError:
        raise JWTError("Invalid token payload")


def _decode(token: str, token_type: str, settings: AuthSettings) -> dict:
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if payload.pop("typ", None) != token_type:
        raise JWTError("Invalid token type")
    return payload
