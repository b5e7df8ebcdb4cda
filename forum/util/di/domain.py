"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, CommentSettings
from forum.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
)
from forum.domain.service import (
    CommentDeletionService,
    CommentPageService,
    CommentService,
    CommentTreeService,
    JWTService,
    PostService,
    ReactionService,
    UserService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_service=post_service,
            settings=settings,
        )

    @provide
    def get_comment_tree_service(
        self,
        comment_repository: CommentRepository,
        comment_service: CommentService,
        post_service: PostService,
        settings: CommentSettings,
    ) -> CommentTreeService:
        """Provide tree materializer."""
        return CommentTreeService(
            comment_repository=comment_repository,
            comment_service=comment_service,
            post_service=post_service,
            max_depth=settings.max_tree_depth,
        )

    @provide
    def get_comment_page_service(
        self,
        comment_service: CommentService,
        post_service: PostService,
        settings: CommentSettings,
    ) -> CommentPageService:
        """Provide paginated level reader."""
        return CommentPageService(
            comment_service=comment_service,
            post_service=post_service,
            settings=settings,
        )

    @provide
    def get_comment_deletion_service(
        self,
        comment_repository: CommentRepository,
        comment_service: CommentService,
    ) -> CommentDeletionService:
        """Provide subtree deleter."""
        return CommentDeletionService(
            comment_repository=comment_repository,
            comment_service=comment_service,
        )

    @provide
    def get_reaction_service(
        self,
        comment_repository: CommentRepository,
        comment_service: CommentService,
    ) -> ReactionService:
        """Provide reaction toggler."""
        return ReactionService(
            comment_repository=comment_repository,
            comment_service=comment_service,
        )
