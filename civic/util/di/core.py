"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from civic.config import AuthSettings, CommentSettings, Settings, VoteSettings
from civic.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Each nested section is provided on its own so services only see their rules.
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
    def provide_vote_settings(self, settings: Settings) -> VoteSettings:
        return settings.votes

    @provide
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        return settings.comments
