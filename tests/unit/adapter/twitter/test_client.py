"""Unit tests for the Twitter OAuth client."""

from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest

from participa.adapter.twitter import RealTwitterOAuthClient
from participa.adapter.twitter.client import TwitterOAuthError
from participa.domain.value import AuthProvider


def _client() -> RealTwitterOAuthClient:
    return RealTwitterOAuthClient(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://localhost:8000/auth/callback/twitter",
    )


def _response(status_code: int, body: dict) -> MagicMock:
    response = MagicMock(status_code=status_code, text=str(body))
    response.json.return_value = body
    return response


class TestRealTwitterOAuthClient:
    """Tests for RealTwitterOAuthClient."""

    @pytest.mark.asyncio
    async def test_authorization_url_carries_pkce_challenge(self):
        client = _client()

        url = await client.initiate_authorization("state-1")

        params = parse_qs(urlparse(url).query)
        assert params["state"] == ["state-1"]
        assert params["code_challenge_method"] == ["S256"]
        assert params["redirect_uri"] == [
            "http://localhost:8000/auth/callback/twitter"
        ]
        assert "state-1" in client._pkce_verifiers

    @pytest.mark.asyncio
    async def test_unknown_state_is_rejected(self):
        client = _client()

        with pytest.raises(TwitterOAuthError):
            await client.complete_authorization("code", "never-issued")

    @pytest.mark.asyncio
    async def test_confirmed_email_is_verified(self):
        client = _client()
        await client.initiate_authorization("state-1")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(
                return_value=_response(200, {"access_token": "access"})
            )
            http.get = AsyncMock(
                return_value=_response(
                    200,
                    {
                        "data": {
                            "id": "12345",
                            "name": "Manuela Carmena",
                            "username": "manuelacarmena",
                            "confirmed_email": "manuela@madrid.es",
                        }
                    },
                )
            )

            claims = await client.complete_authorization("code", "state-1")

        assert claims.provider == AuthProvider.TWITTER
        assert claims.external_id == "12345"
        assert claims.display_name == "Manuela Carmena"
        assert claims.email == "manuela@madrid.es"
        assert claims.verified_email is True
        # Verifier is single use
        assert "state-1" not in client._pkce_verifiers

    @pytest.mark.asyncio
    async def test_missing_email(self):
        client = _client()
        await client.initiate_authorization("state-1")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(
                return_value=_response(200, {"access_token": "access"})
            )
            http.get = AsyncMock(
                return_value=_response(
                    200, {"data": {"id": "12345", "username": "manuelacarmena"}}
                )
            )

            claims = await client.complete_authorization("code", "state-1")

        assert claims.display_name == "manuelacarmena"
        assert claims.email is None
        assert claims.verified_email is False

    @pytest.mark.asyncio
    async def test_failed_token_exchange(self):
        client = _client()
        await client.initiate_authorization("state-1")

        with patch("httpx.AsyncClient") as mock_client:
            http = mock_client.return_value.__aenter__.return_value
            http.post = AsyncMock(
                return_value=_response(400, {"error": "invalid_grant"})
            )

            with pytest.raises(TwitterOAuthError):
                await client.complete_authorization("code", "state-1")
