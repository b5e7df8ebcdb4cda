"""Get comment tree use case."""

from pydantic import BaseModel, model_validator

from forum.application.presenter import CommentItem, CommentPresenter
from forum.domain.service import CommentTreeNode, CommentTreeService
from forum.domain.value import AuthContext, CommentId, PostId

from forum.application.usecase.base import parse_uuid, require_requester


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request.

    Exactly one of ``post_id`` (whole discussion) or ``comment_id``
    (replies below one comment) must be given.
    """

    post_id: str | None = None
    comment_id: str | None = None
    auth: AuthContext

    @model_validator(mode="after")
    def validate_target(self) -> "GetCommentTreeRequest":
        if (self.post_id is None) == (self.comment_id is None):
            raise ValueError("Exactly one of post_id or comment_id is required")
        return self


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    comments: list[CommentItem]
    total: int  # Number of comments in the returned forest


class GetCommentTreeUseCase:
    """Use case for reading a whole discussion, or one thread of it, nested."""

    def __init__(
        self, tree_service: CommentTreeService, presenter: CommentPresenter
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            tree_service: Tree materializer
            presenter: Comment presenter
        """
        self.tree_service = tree_service
        self.presenter = presenter

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Args:
            request: Get comment tree request

        Returns:
            Nested comments, newest first at every level

        Raises:
            AuthenticationRequiredError: If the request is anonymous
            ValidationError: If the ID is malformed
            NotFoundError: If the post or comment does not exist
        """
        require_requester(request.auth, "read comments")

        if request.post_id is not None:
            post_id = PostId(parse_uuid(request.post_id, "post_id"))
            nodes = await self.tree_service.build_post_tree(post_id)
        else:
            comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))
            nodes = await self.tree_service.build_subtree(comment_id)

        return await self._respond(nodes)

    async def for_post(self, post_id: str, auth: AuthContext) -> GetCommentTreeResponse:
        """Materialize every comment of a post."""
        return await self.execute(GetCommentTreeRequest(post_id=post_id, auth=auth))

    async def for_comment(
        self, comment_id: str, auth: AuthContext
    ) -> GetCommentTreeResponse:
        """Materialize the replies below a comment."""
        return await self.execute(
            GetCommentTreeRequest(comment_id=comment_id, auth=auth)
        )

    async def _respond(self, nodes: list[CommentTreeNode]) -> GetCommentTreeResponse:
        comments = await self.presenter.present_nodes(nodes)
        total = sum(1 for root in nodes for _ in root.walk())
        return GetCommentTreeResponse(comments=comments, total=total)
