"""List comments use case."""

from typing import Optional

from civic.application.usecase.base import ApiModel, BaseUseCase
from civic.application.usecase.comment.post_comment import CommentResponse
from civic.domain.service import CommentService, CommentTreeNode, VoteService
from civic.domain.value import (
    CommentId,
    TargetRef,
    TargetType,
    UserId,
    VoteAggregate,
    VoteType,
)


class CommentNode(CommentResponse):
    """Comment in a thread, with vote counts and the reader's permissions."""

    like_count: int = 0
    dislike_count: int = 0
    user_vote: Optional[VoteType] = None
    can_edit: bool = False
    can_delete: bool = False
    reply_count: int = 0
    replies: list["CommentNode"] = []


class ListCommentsRequest(ApiModel):
    """List comments request."""

    target_type: str
    target_id: int | str
    user_id: Optional[str] = None  # None for anonymous readers
    can_moderate: bool = False


class ListCommentsResponse(ApiModel):
    """List comments response."""

    target_type: str
    target_id: int
    comments: list[CommentNode]
    total: int  # Live comments on the target


class ListCommentsUseCase(BaseUseCase):
    """Use case for reading the comment thread of a target."""

    def __init__(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote service for comment likes and dislikes
        """
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Comment likes are the votes cast on TargetRef(comment, id), fetched
        for the whole thread in one batch.

        Args:
            request: Target and optional reader identity

        Returns:
            Comment tree, oldest first at every level

        Raises:
            InvalidTargetError: If the target reference is malformed
        """
        target = TargetRef.parse(request.target_type, request.target_id)
        user_id = UserId(request.user_id) if request.user_id else None

        roots = await self.comment_service.list_comments(target)

        # Parents precede their replies in this order
        order: list[CommentTreeNode] = []
        stack = list(roots)
        while stack:
            node = stack.pop()
            order.append(node)
            stack.extend(node.replies)

        ids = [node.comment.id for node in order if node.comment.id is not None]
        aggregates = await self.vote_service.get_aggregates(
            TargetType.COMMENT, ids, user_id
        )

        def to_item(node: CommentTreeNode, replies: list[CommentNode]) -> CommentNode:
            comment = node.comment
            aggregate = aggregates.get(comment.id or 0, VoteAggregate())
            is_author = user_id is not None and comment.author_id == user_id
            live = not node.is_placeholder
            return CommentNode(
                **CommentResponse.from_comment(
                    comment,
                    content=self.comment_service.visible_content(comment),
                    author_id=comment.author_id if live else None,
                ).model_dump(),
                like_count=aggregate.upvotes,
                dislike_count=aggregate.downvotes,
                user_vote=aggregate.user_vote,
                can_edit=live and is_author,
                can_delete=live
                and user_id is not None
                and (is_author or request.can_moderate),
                reply_count=sum(1 for r in node.replies if not r.is_placeholder),
                replies=replies,
            )

        items: dict[Optional[CommentId], CommentNode] = {}
        for node in reversed(order):
            items[node.comment.id] = to_item(
                node, [items[reply.comment.id] for reply in node.replies]
            )

        comments = [items[node.comment.id] for node in roots]
        total = await self.comment_service.count_comments(target)

        return ListCommentsResponse(
            target_type=target.target_type.value,
            target_id=target.target_id,
            comments=comments,
            total=total,
        )
