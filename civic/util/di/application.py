"""Application layer DI providers."""

from dishka import Scope, provide

from civic.application.usecase.comment import (
    DeleteCommentUseCase,
    EditCommentUseCase,
    GetEditHistoryUseCase,
    ListCommentsUseCase,
    PostCommentUseCase,
)
from civic.application.usecase.vote import CastVoteUseCase, GetVoteAggregateUseCase
from civic.domain.service import CommentService, VoteService
from civic.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Vote use cases
    @provide
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide
    def get_vote_aggregate_use_case(
        self, vote_service: VoteService
    ) -> GetVoteAggregateUseCase:
        """Provide get vote aggregate use case."""
        return GetVoteAggregateUseCase(vote_service=vote_service)

    # Comment use cases
    @provide
    def get_post_comment_use_case(
        self, comment_service: CommentService
    ) -> PostCommentUseCase:
        """Provide post comment use case."""
        return PostCommentUseCase(comment_service=comment_service)

    @provide
    def get_edit_comment_use_case(
        self, comment_service: CommentService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_edit_history_use_case(
        self, comment_service: CommentService
    ) -> GetEditHistoryUseCase:
        """Provide get edit history use case."""
        return GetEditHistoryUseCase(comment_service=comment_service)

    @provide
    def get_list_comments_use_case(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            comment_service=comment_service, vote_service=vote_service
        )
