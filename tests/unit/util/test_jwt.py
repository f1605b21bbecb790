"""Unit tests for session tokens and signup tickets."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from participa.config import AuthSettings
from participa.util.jwt import (
    JWTError,
    create_signup_ticket,
    create_token,
    verify_signup_ticket,
    verify_token,
)

settings = AuthSettings(jwt_secret="test-secret-0123456789abcdef0123456789")


def _session_token(expires_in: timedelta = timedelta(days=1)) -> str:
    return create_token(
        session_id="session-1",
        account_id="account-1",
        username="manuela",
        expires_at=datetime.now(timezone.utc) + expires_in,
        settings=settings,
    )


def test_session_token_round_trip():
    payload = verify_token(_session_token(), settings)

    assert payload.session_id == "session-1"
    assert payload.account_id == "account-1"
    assert payload.username == "manuela"


def test_expired_session_token():
    with pytest.raises(JWTError):
        verify_token(_session_token(timedelta(seconds=-1)), settings)


def test_wrong_secret():
    other = AuthSettings(jwt_secret="other-secret-0123456789abcdef012345678")

    with pytest.raises(JWTError):
        verify_token(_session_token(), other)


def test_signup_ticket_is_not_a_session():
    ticket = create_signup_ticket("account-1", settings)

    assert verify_signup_ticket(ticket, settings).account_id == "account-1"
    with pytest.raises(JWTError):
        verify_token(ticket, settings)


def test_session_is_not_a_signup_ticket():
    with pytest.raises(JWTError):
        verify_signup_ticket(_session_token(), settings)


def test_untyped_token_is_rejected():
    token = jwt.encode(
        {
            "session_id": "s",
            "account_id": "a",
            "username": "u",
            "exp": datetime.now(timezone.utc) + timedelta(days=1),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(JWTError):
        verify_token(token, settings)
