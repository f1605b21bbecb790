"""Twitter infrastructure providers."""

from dishka import Scope, provide

from participa.adapter.twitter.client import (
    RealTwitterOAuthClient,
    TwitterOAuthClient,
)
from participa.config import Settings
from participa.util.di.base import ProviderBase
from participa.util.error import ConfigurationError


class TwitterProvider(ProviderBase):
    """Twitter component base."""

    __mock_component__ = "twitter"


class ProdTwitterProvider(TwitterProvider):
    """Production Twitter provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_twitter_oauth_client(self, settings: Settings) -> TwitterOAuthClient:
        """Provide Twitter OAuth client.

        Returns:
            Twitter OAuth 2.0 client

        Raises:
            ConfigurationError: If Twitter OAuth credentials are not configured
        """
        if not settings.auth.twitter.client_id:
            raise ConfigurationError("Twitter OAuth client ID must be configured")
        if not settings.auth.twitter.client_secret:
            raise ConfigurationError("Twitter OAuth client secret must be configured")

        return RealTwitterOAuthClient(
            client_id=settings.auth.twitter.client_id,
            client_secret=settings.auth.twitter.client_secret,
            redirect_uri=settings.auth.twitter_callback_url,
        )
