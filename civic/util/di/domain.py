"""Domain layer DI providers."""

from dishka import Scope, provide

from civic.config import AuthSettings, CommentSettings, VoteSettings
from civic.domain.repository import (
    CommentEditRepository,
    CommentRepository,
    VoteRepository,
)
from civic.domain.service import CommentService, JWTService, VoteService
from civic.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service (stateless, shared)."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_vote_service(
        self, vote_repository: VoteRepository, vote_settings: VoteSettings
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository, vote_settings=vote_settings
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_edit_repository: CommentEditRepository,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            comment_edit_repository=comment_edit_repository,
            comment_settings=comment_settings,
        )
