"""Domain services."""

from .base import Service
from .comment_deletion_service import CommentDeletionService
from .comment_page_service import CommentPage, CommentPageService
from .comment_service import CommentService
from .comment_tree_service import CommentTreeNode, CommentTreeService
from .jwt_service import JWTService
from .post_service import PostService
from .reaction_service import ReactionService
from .user_service import UserService

__all__ = [
    "CommentDeletionService",
    "CommentPage",
    "CommentPageService",
    "CommentService",
    "CommentTreeNode",
    "CommentTreeService",
    "JWTService",
    "PostService",
    "ReactionService",
    "Service",
    "UserService",
]
