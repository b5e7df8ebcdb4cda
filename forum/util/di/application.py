"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.presenter import CommentPresenter
from forum.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentTreeUseCase,
    LikeCommentUseCase,
    ListCommentsUseCase,
    ListRepliesUseCase,
    UnlikeCommentUseCase,
    UpdateCommentUseCase,
)
from forum.domain.service import (
    CommentDeletionService,
    CommentPageService,
    CommentService,
    CommentTreeService,
    ReactionService,
    UserService,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_comment_presenter(self, user_service: UserService) -> CommentPresenter:
        """Provide comment presenter."""
        return CommentPresenter(user_service=user_service)

    # Read use cases
    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self,
        page_service: CommentPageService,
        tree_service: CommentTreeService,
        presenter: CommentPresenter,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            page_service=page_service,
            tree_service=tree_service,
            presenter=presenter,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_replies_use_case(
        self, page_service: CommentPageService, presenter: CommentPresenter
    ) -> ListRepliesUseCase:
        """Provide list replies use case."""
        return ListRepliesUseCase(page_service=page_service, presenter=presenter)

    @provide(scope=Scope.REQUEST)
    def get_comment_tree_use_case(
        self, tree_service: CommentTreeService, presenter: CommentPresenter
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(tree_service=tree_service, presenter=presenter)

    # Write use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, presenter: CommentPresenter
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, presenter=presenter
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService, presenter: CommentPresenter
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service, presenter=presenter
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, deletion_service: CommentDeletionService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(deletion_service=deletion_service)

    # Reaction use cases
    @provide(scope=Scope.REQUEST)
    def get_like_comment_use_case(
        self,
        reaction_service: ReactionService,
        comment_service: CommentService,
        presenter: CommentPresenter,
    ) -> LikeCommentUseCase:
        """Provide like comment use case."""
        return LikeCommentUseCase(
            reaction_service=reaction_service,
            comment_service=comment_service,
            presenter=presenter,
        )

    @provide(scope=Scope.REQUEST)
    def get_unlike_comment_use_case(
        self,
        reaction_service: ReactionService,
        comment_service: CommentService,
        presenter: CommentPresenter,
    ) -> UnlikeCommentUseCase:
        """Provide unlike comment use case."""
        return UnlikeCommentUseCase(
            reaction_service=reaction_service,
            comment_service=comment_service,
            presenter=presenter,
        )
