"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Path, Response, status

from civic.application.usecase.comment import (
    CommentResponse,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    EditCommentCommand,
    EditCommentRequest,
    EditCommentUseCase,
    EditHistoryItem,
    GetEditHistoryRequest,
    GetEditHistoryUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    PostCommentCommand,
    PostCommentRequest,
    PostCommentUseCase,
)
from civic.domain.service import JWTService
from civic.domain.value import MAX_ID
from civic.interface.api.identity import require_identity, resolve_identity

router = APIRouter(prefix="/api/comments", tags=["comments"], route_class=DishkaRoute)


# Registered before /{target_type}/{target_id}, which would otherwise match it
@router.get("/history/{comment_id}", response_model=list[EditHistoryItem])
async def get_edit_history(
    get_edit_history_use_case: FromDishka[GetEditHistoryUseCase],
    comment_id: int = Path(gt=0, le=MAX_ID),
) -> list[EditHistoryItem]:
    """Get the versions of a comment, newest first.

    Public endpoint. Deleted comments have no visible history.
    """
    return await get_edit_history_use_case.execute(
        GetEditHistoryRequest(comment_id=comment_id)
    )


@router.get("/{target_type}/{target_id}", response_model=ListCommentsResponse)
async def list_comments(
    target_type: str,
    target_id: str,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListCommentsResponse:
    """Get the comment thread of a target.

    Public endpoint. Authenticated callers also get their own comment votes
    and whether they may edit or delete each comment.

    Args:
        target_type: Target type (e.g. "bill")
        target_id: Target ID
        list_comments_use_case: List comments use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        Comment tree
    """
    identity = resolve_identity(jwt_service, authorization, auth_token)
    request = ListCommentsRequest(
        target_type=target_type,
        target_id=target_id,
        user_id=identity.user_id if identity else None,
        can_moderate=identity.can_moderate if identity else False,
    )
    return await list_comments_use_case.execute(request)


@router.post(
    "/{target_type}/{target_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_comment(
    target_type: str,
    target_id: str,
    body: PostCommentRequest,
    post_comment_use_case: FromDishka[PostCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Comment on a target, or reply when parentCommentId is given.

    Requires authentication.
    """
    identity = require_identity(jwt_service, "comment", authorization, auth_token)
    command = PostCommentCommand(
        author_id=identity.user_id,
        target_type=target_type,
        target_id=target_id,
        content=body.content,
        parent_comment_id=body.parent_comment_id,
    )
    return await post_comment_use_case.execute(command)


@router.put("/{comment_id}", response_model=CommentResponse)
async def edit_comment(
    body: EditCommentRequest,
    edit_comment_use_case: FromDishka[EditCommentUseCase],
    jwt_service: FromDishka[JWTService],
    comment_id: int = Path(gt=0, le=MAX_ID),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Edit a comment. Only the author can edit."""
    identity = require_identity(
        jwt_service, "edit comments", authorization, auth_token
    )
    command = EditCommentCommand(
        comment_id=comment_id,
        requester_id=identity.user_id,
        content=body.content,
    )
    return await edit_comment_use_case.execute(command)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    comment_id: int = Path(gt=0, le=MAX_ID),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Soft-delete a comment.

    The author can delete their own comments; holders of the
    moderate_comments capability can delete any comment.
    """
    identity = require_identity(
        jwt_service, "delete comments", authorization, auth_token
    )
    await delete_comment_use_case.execute(
        DeleteCommentRequest(
            comment_id=comment_id,
            requester_id=identity.user_id,
            can_moderate=identity.can_moderate,
        )
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
