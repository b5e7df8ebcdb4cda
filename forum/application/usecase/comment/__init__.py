"""Comment use cases."""

from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comment_tree import (
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
)
from .like_comment import LikeCommentRequest, LikeCommentUseCase, UnlikeCommentUseCase
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .list_replies import ListRepliesRequest, ListRepliesResponse, ListRepliesUseCase
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentTreeRequest",
    "GetCommentTreeResponse",
    "GetCommentTreeUseCase",
    "LikeCommentRequest",
    "LikeCommentUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "ListRepliesRequest",
    "ListRepliesResponse",
    "ListRepliesUseCase",
    "UnlikeCommentUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
]
