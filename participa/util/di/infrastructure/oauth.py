"""OAuth infrastructure provider for multi-provider authentication."""

from dishka import Scope, provide

from participa.adapter.twitter.client import TwitterOAuthClient
from participa.domain.service.auth_service import OAuthClient
from participa.domain.value import AuthProvider
from participa.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        twitter_oauth_client: TwitterOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of configured OAuth clients by provider.

        Providers without a client are rejected by AuthService.

        Args:
            twitter_oauth_client: Twitter OAuth client (specific type)

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        return {
            AuthProvider.TWITTER: twitter_oauth_client,
        }
