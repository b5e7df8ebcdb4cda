"""Create comment use case."""

from pydantic import BaseModel

from forum.application.presenter import CommentItem, CommentPresenter
from forum.domain.error import ValidationError
from forum.domain.service import CommentService
from forum.domain.value import AuthContext, CommentId, PostId

from forum.application.usecase.base import parse_uuid, require_requester


class CreateCommentRequest(BaseModel):
    """Create comment request.

    ``post_id`` may be omitted for replies, in which case the reply lands
    on the parent's post.
    """

    content: str
    post_id: str | None = None  # UUID string
    parent_id: str | None = None  # Parent comment ID for replies
    auth: AuthContext


class CreateCommentUseCase:
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self, comment_service: CommentService, presenter: CommentPresenter
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            presenter: Comment presenter
        """
        self.comment_service = comment_service
        self.presenter = presenter

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Steps:
        1. Require an authenticated requester (becomes the creator)
        2. Resolve the target post (from the parent for bare replies)
        3. Create the comment via comment service, which validates the
           content, the post and the parent and refreshes the post's
           comment count
        4. Present the new comment

        Args:
            request: Create comment request

        Returns:
            The created comment with an empty reply list

        Raises:
            AuthenticationRequiredError: If the request is anonymous
            ValidationError: If content is empty, an ID is malformed, or the
                parent belongs to another post
            NotFoundError: If the post or parent comment does not exist
        """
        creator_id = require_requester(request.auth, "create a comment")

        parent_id = (
            CommentId(parse_uuid(request.parent_id, "parent_id"))
            if request.parent_id
            else None
        )

        if request.post_id:
            post_id = PostId(parse_uuid(request.post_id, "post_id"))
        elif parent_id:
            parent = await self.comment_service.get_comment_by_id(parent_id)
            post_id = parent.post_id
        else:
            raise ValidationError("post_id is required for top-level comments")

        comment = await self.comment_service.create_comment(
            content=request.content,
            post_id=post_id,
            creator_id=creator_id,
            parent_id=parent_id,
        )

        return await self.presenter.present_comment(comment, replies_count=0)
