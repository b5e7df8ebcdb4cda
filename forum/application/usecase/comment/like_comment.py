"""Like and unlike comment use cases."""

from pydantic import BaseModel

from forum.application.presenter import CommentItem, CommentPresenter
from forum.domain.service import CommentService, ReactionService
from forum.domain.value import AuthContext, CommentId

from forum.application.usecase.base import parse_uuid, require_requester


class LikeCommentRequest(BaseModel):
    """Like or unlike comment request."""

    comment_id: str  # UUID string
    auth: AuthContext


class LikeCommentUseCase:
    """Use case for liking a comment.

    Idempotent: liking an already-liked comment returns it unchanged.
    """

    def __init__(
        self,
        reaction_service: ReactionService,
        comment_service: CommentService,
        presenter: CommentPresenter,
    ) -> None:
        """Initialize like comment use case.

        Args:
            reaction_service: Reaction toggler
            comment_service: Comment domain service (reply counts)
            presenter: Comment presenter
        """
        self.reaction_service = reaction_service
        self.comment_service = comment_service
        self.presenter = presenter

    async def execute(self, request: LikeCommentRequest) -> CommentItem:
        """Execute like comment flow.

        Args:
            request: Like comment request

        Returns:
            The comment with its updated likes

        Raises:
            AuthenticationRequiredError: If the request is anonymous
            ValidationError: If the ID is malformed
            NotFoundError: If the comment does not exist
        """
        user_id = require_requester(request.auth, "like a comment")
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))

        comment = await self.reaction_service.like(comment_id, user_id)
        replies_count = await self.comment_service.count_children(comment_id)

        return await self.presenter.present_comment(comment, replies_count)


class UnlikeCommentUseCase:
    """Use case for withdrawing a like.

    Idempotent: unliking a comment that was not liked returns it unchanged.
    """

    def __init__(
        self,
        reaction_service: ReactionService,
        comment_service: CommentService,
        presenter: CommentPresenter,
    ) -> None:
        """Initialize unlike comment use case.

        Args:
            reaction_service: Reaction toggler
            comment_service: Comment domain service (reply counts)
            presenter: Comment presenter
        """
        self.reaction_service = reaction_service
        self.comment_service = comment_service
        self.presenter = presenter

    async def execute(self, request: LikeCommentRequest) -> CommentItem:
        """Execute unlike comment flow.

        Raises:
            AuthenticationRequiredError: If the request is anonymous
            ValidationError: If the ID is malformed
            NotFoundError: If the comment does not exist
        """
        user_id = require_requester(request.auth, "unlike a comment")
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))

        comment = await self.reaction_service.unlike(comment_id, user_id)
        replies_count = await self.comment_service.count_children(comment_id)

        return await self.presenter.present_comment(comment, replies_count)
