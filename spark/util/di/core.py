"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from spark.config import (
    AuthSettings,
    RecommendationSettings,
    RealtimeSettings,
    Settings,
    TrendingSettings,
)
from spark.util.di.base import ProviderBase
from spark.util.error import ConfigurationError

DEFAULT_JWT_SECRET = AuthSettings().jwt_secret


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
        """Provide auth settings.

        Raises:
            ConfigurationError: If production runs with the default JWT secret
        """
        if (
            settings.environment == "production"
            and settings.auth.jwt_secret == DEFAULT_JWT_SECRET
        ):
            raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_recommendation_settings(
        self, settings: Settings
    ) -> RecommendationSettings:
        """Provide recommendation scoring settings."""
        return settings.recommendation

    @provide(scope=Scope.APP)
    def provide_trending_settings(self, settings: Settings) -> TrendingSettings:
        """Provide trending window settings."""
        return settings.trending

    @provide(scope=Scope.APP)
    def provide_realtime_settings(self, settings: Settings) -> RealtimeSettings:
        """Provide realtime gateway settings."""
        return settings.realtime
