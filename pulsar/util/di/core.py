"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from pulsar.config import AuthSettings, Settings, VotingSettings
from pulsar.domain.error import ValidationError
from pulsar.domain.value.window import resolve_timezone
from pulsar.util.di.base import ProviderBase
from pulsar.util.error import ConfigurationError


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        """Provide voting settings.

        Raises:
            ConfigurationError: If the voting timezone is unknown
        """
        try:
            resolve_timezone(settings.voting.timezone)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e
        return settings.voting
