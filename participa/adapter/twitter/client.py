"""Twitter OAuth 2.0 client implementation.

Implements OAuth 2.0 with PKCE for Twitter authentication and maps the
``users/me`` response to provider profile claims.
"""

import hashlib
import secrets
from base64 import urlsafe_b64encode
from urllib.parse import urlencode

import httpx
import logfire

from participa.adapter.error import ProviderError
from participa.domain.service.auth_service import OAuthClient
from participa.domain.value.types import AuthProvider, ProfileClaims


class TwitterOAuthError(ProviderError):
    """Twitter OAuth error."""

    pass


class TwitterOAuthClient(OAuthClient):
    """Base class for Twitter OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealTwitterOAuthClient(TwitterOAuthClient):
    """Twitter OAuth 2.0 client with PKCE support."""

    authorize_url = "https://twitter.com/i/oauth2/authorize"
    token_url = "https://api.twitter.com/2/oauth2/token"
    user_info_url = "https://api.twitter.com/2/users/me"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> None:
        """Initialize Twitter OAuth client.

        Args:
            client_id: Twitter OAuth client ID
            client_secret: Twitter OAuth client secret
            redirect_uri: Callback URL registered with Twitter
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        # PKCE verifiers keyed by state, single process only
        self._pkce_verifiers: dict[str, str] = {}

    def _generate_pkce_pair(self) -> tuple[str, str]:
        """Generate PKCE code verifier and challenge.

        Returns:
            Tuple of (verifier, challenge)
        """
        code_verifier = urlsafe_b64encode(secrets.token_bytes(32)).decode("utf-8")
        code_verifier = code_verifier.rstrip("=")

        challenge_bytes = hashlib.sha256(code_verifier.encode("utf-8")).digest()
        code_challenge = urlsafe_b64encode(challenge_bytes).decode("utf-8")
        code_challenge = code_challenge.rstrip("=")

        return code_verifier, code_challenge

    async def initiate_authorization(self, state: str) -> str:
        code_verifier, code_challenge = self._generate_pkce_pair()
        self._pkce_verifiers[state] = code_verifier

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "users.read users.email tweet.read",
            "state": state,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
        }

        logfire.info(
            "Twitter OAuth authorization initiated",
            state=state,
            redirect_uri=self.redirect_uri,
        )
        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> ProfileClaims:
        """Complete Twitter OAuth authorization flow.

        The numeric Twitter user ID is the external ID: handles can be
        renamed, IDs cannot. ``confirmed_email`` is only returned when the
        app has email access and the user approved it; Twitter only hands
        out confirmed addresses, so a present email is a verified one.

        Raises:
            TwitterOAuthError: If OAuth flow fails
        """
        code_verifier = self._pkce_verifiers.pop(state, None)
        if not code_verifier:
            raise TwitterOAuthError("Invalid state or PKCE verifier not found")

        access_token = await self._exchange_code_for_token(code, code_verifier)
        user_info = await self._get_user_info(access_token)

        email = user_info.get("confirmed_email")
        logfire.info(
            "Twitter OAuth completed",
            user_id=user_info.get("id"),
            has_email=email is not None,
        )

        return ProfileClaims(
            provider=AuthProvider.TWITTER,
            external_id=user_info.get("id"),
            display_name=user_info.get("name") or user_info.get("username"),
            email=email,
            verified_email=email is not None,
        )

    async def _exchange_code_for_token(self, code: str, code_verifier: str) -> str:
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "code_verifier": code_verifier,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    auth=(self.client_id, self.client_secret),
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=30.0,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Twitter token exchange failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise TwitterOAuthError(
                        f"Token exchange failed: {response.status_code}"
                    )

                return response.json()["access_token"]

        except httpx.HTTPError as e:
            logfire.error("Twitter token exchange HTTP error", error=str(e))
            raise TwitterOAuthError(f"HTTP error during token exchange: {e}")

    async def _get_user_info(self, access_token: str) -> dict:
        params = {"user.fields": "id,name,username,confirmed_email"}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.user_info_url,
                    params=params,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=30.0,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Twitter user info request failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise TwitterOAuthError(
                        f"User info request failed: {response.status_code}"
                    )

                return response.json().get("data") or {}

        except httpx.HTTPError as e:
            logfire.error("Twitter user info HTTP error", error=str(e))
            raise TwitterOAuthError(f"HTTP error fetching user info: {e}")


class MockTwitterOAuthClient(TwitterOAuthClient):
    """Mock Twitter OAuth client for testing.

    Returns the configured ``claims`` without making real API calls. Tests
    replace ``claims`` to script what Twitter asserts on the next callback.
    """

    def __init__(self, claims: ProfileClaims | None = None):
        self.claims = claims or ProfileClaims(
            provider=AuthProvider.TWITTER,
            external_id="12345",
            display_name="Mock Twitter User",
            email="mock@twitter.com",
            verified_email=True,
        )

    async def initiate_authorization(self, state: str) -> str:
        return f"https://twitter.com/i/oauth2/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> ProfileClaims:
        return self.claims
