"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from grove.config import AuthSettings, SecuritySettings, Settings
from grove.interface.api.security import RateLimiterRegistry
from grove.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and process-wide state.

    Settings are loaded from environment variables and .env file.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_security_settings(self, settings: Settings) -> SecuritySettings:
        return settings.security

    @provide
    def provide_rate_limiters(self, security: SecuritySettings) -> RateLimiterRegistry:
        """One registry per app so limits hold across requests."""
        return RateLimiterRegistry(security.rate_limits)
