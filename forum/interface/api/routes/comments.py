"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel

from forum.application.presenter import CommentItem
from forum.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
    LikeCommentRequest,
    LikeCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesResponse,
    ListRepliesUseCase,
    UnlikeCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.domain.service import JWTService
from forum.domain.value import AuthContext
from forum.persistence.guard import store_deadline

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def resolve_auth(
    jwt_service: JWTService, authorization: str | None, auth_token: str | None
) -> AuthContext:
    """Build the auth context from a bearer header or the auth cookie.

    The header wins when both are present. Invalid tokens yield an
    anonymous context; the use case decides whether that is acceptable.
    """
    token = auth_token
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            token = credentials.strip()
    return jwt_service.auth_context(token)


class CommentContentAPIRequest(BaseModel):
    """API request carrying comment content."""

    content: str


class CreateReplyAPIRequest(BaseModel):
    """API request for replying to a comment."""

    content: str
    post_id: str | None = None  # Defaults to the parent's post


@router.get("/posts/{post_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    post_id: str,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> ListCommentsResponse:
    """List a page of a post's top-level comments, each with its replies.

    Args:
        post_id: Post UUID
        list_comments_use_case: List comments use case from DI
        jwt_service: JWT service for token verification (injected)
        page: 1-based page number
        limit: Page size
        authorization: Bearer token header
        auth_token: JWT token from cookie
        request_timeout: Optional deadline in seconds (X-Request-Timeout)

    Returns:
        Comments with paging metadata
    """
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await list_comments_use_case.execute(
            ListCommentsRequest(post_id=post_id, page=page, limit=limit, auth=auth)
        )


@router.get("/posts/{post_id}/comments/tree", response_model=GetCommentTreeResponse)
async def get_post_comment_tree(
    post_id: str,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> GetCommentTreeResponse:
    """Get every comment of a post as a nested tree."""
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await get_comment_tree_use_case.for_post(post_id, auth)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CommentContentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> CommentItem:
    """Create a top-level comment on a post.

    Requires authentication; the requester becomes the creator.
    """
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await create_comment_use_case.execute(
            CreateCommentRequest(post_id=post_id, content=request.content, auth=auth)
        )


@router.get("/comments/{comment_id}/replies", response_model=ListRepliesResponse)
async def list_replies(
    comment_id: str,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
    jwt_service: FromDishka[JWTService],
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> ListRepliesResponse:
    """List a page of a comment's direct replies."""
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await list_replies_use_case.execute(
            ListRepliesRequest(
                comment_id=comment_id, page=page, limit=limit, auth=auth
            )
        )


@router.post(
    "/comments/{comment_id}/replies",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    comment_id: str,
    request: CreateReplyAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> CommentItem:
    """Reply to a comment."""
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=request.post_id,
                parent_id=comment_id,
                content=request.content,
                auth=auth,
            )
        )


@router.get("/comments/{comment_id}/tree", response_model=GetCommentTreeResponse)
async def get_comment_subtree(
    comment_id: str,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> GetCommentTreeResponse:
    """Get the nested replies below a comment."""
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await get_comment_tree_use_case.for_comment(comment_id, auth)


@router.patch("/comments/{comment_id}", response_model=CommentItem)
async def update_comment(
    comment_id: str,
    request: CommentContentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> CommentItem:
    """Edit a comment's content.

    Only the comment creator can edit.
    """
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=comment_id, content=request.content, auth=auth
            )
        )


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> DeleteCommentResponse:
    """Delete a comment and every reply below it.

    Only the comment creator can delete.
    """
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, auth=auth)
        )


@router.post("/comments/{comment_id}/like", response_model=CommentItem)
async def like_comment(
    comment_id: str,
    like_comment_use_case: FromDishka[LikeCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> CommentItem:
    """Like a comment (no-op if already liked)."""
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await like_comment_use_case.execute(
            LikeCommentRequest(comment_id=comment_id, auth=auth)
        )


@router.delete("/comments/{comment_id}/like", response_model=CommentItem)
async def unlike_comment(
    comment_id: str,
    unlike_comment_use_case: FromDishka[UnlikeCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
    request_timeout: float | None = Header(
        default=None, alias="X-Request-Timeout", gt=0
    ),
) -> CommentItem:
    """Withdraw a like (no-op if not liked)."""
    auth = resolve_auth(jwt_service, authorization, auth_token)
    with store_deadline(request_timeout):
        return await unlike_comment_use_case.execute(
            LikeCommentRequest(comment_id=comment_id, auth=auth)
        )
