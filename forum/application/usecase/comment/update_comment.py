"""Update comment use case."""

from pydantic import BaseModel

from forum.application.presenter import CommentItem, CommentPresenter
from forum.domain.service import CommentService
from forum.domain.value import AuthContext, CommentId

from forum.application.usecase.base import parse_uuid, require_requester


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    content: str
    auth: AuthContext


class UpdateCommentUseCase:
    """Use case for editing the content of a comment."""

    def __init__(
        self, comment_service: CommentService, presenter: CommentPresenter
    ) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
            presenter: Comment presenter
        """
        self.comment_service = comment_service
        self.presenter = presenter

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Execute update comment flow.

        Only the creator may edit a comment. Likes, parent and post are
        left untouched.

        Args:
            request: Update comment request

        Returns:
            The updated comment

        Raises:
            AuthenticationRequiredError: If the request is anonymous
            ValidationError: If the new content is empty or the ID is malformed
            NotFoundError: If the comment does not exist
            AuthorizationError: If the requester is not the creator
        """
        requester_id = require_requester(request.auth, "edit a comment")
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))

        comment = await self.comment_service.update_content(
            comment_id, request.content, requester_id
        )
        replies_count = await self.comment_service.count_children(comment_id)

        return await self.presenter.present_comment(comment, replies_count)
