"""Identity provider domain service."""

import logfire

from participa.domain.value.types import AuthProvider, ProfileClaims

from .base import Service


class OAuthClient:
    """Generic identity provider client interface.

    The provider's OAuth handshake is a black box: the client turns a
    callback into profile claims.
    """

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> ProfileClaims:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Profile claims asserted by the provider
        """
        raise NotImplementedError


class AuthService(Service):
    """Coordinates authentication across identity providers."""

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client_for(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise ValueError(f"Unsupported provider: {provider.value}")
        return client

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Raises:
            ValueError: If provider not supported
        """
        with logfire.span("auth_service.initiate_login", provider=provider.value):
            return await self._client_for(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> ProfileClaims:
        """Complete OAuth login flow and return the provider's profile claims.

        Raises:
            ValueError: If provider not supported
        """
        with logfire.span("auth_service.complete_login", provider=provider.value):
            claims = await self._client_for(provider).complete_authorization(
                code, state
            )
            logfire.info(
                "Provider claims received",
                provider=provider.value,
                has_email=claims.email is not None,
                verified_email=claims.verified_email,
            )
            return claims
