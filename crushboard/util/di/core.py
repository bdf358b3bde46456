"""Core DI providers (non-mockable)."""

from dishka import Scope, from_context, provide

from crushboard.config import AuthSettings, FeedSettings, Settings, VotingSettings
from crushboard.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Configuration provider - concrete, no mocks needed.

    Settings are handed to the container as context when it is built, so
    the app and everything it resolves share one Settings instance.
    """

    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        """Provide voting settings."""
        return settings.voting

    @provide(scope=Scope.APP)
    def provide_feed_settings(self, settings: Settings) -> FeedSettings:
        """Provide feed settings."""
        return settings.feed
