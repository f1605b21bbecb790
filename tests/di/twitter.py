"""Mock Twitter providers for testing."""

from dishka import Scope, provide

from participa.adapter.twitter.client import MockTwitterOAuthClient, TwitterOAuthClient
from participa.util.di.infrastructure.twitter import TwitterProvider


class MockTwitterProvider(TwitterProvider):
    """Mock Twitter provider using mock OAuth client.

    Tests fetch ``TwitterOAuthClient`` from the container and set its
    ``claims`` to script the next callback.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_twitter_oauth_client(self) -> TwitterOAuthClient:
        """Provide mock Twitter OAuth client."""
        return MockTwitterOAuthClient()
