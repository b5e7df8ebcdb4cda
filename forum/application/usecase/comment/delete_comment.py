"""Delete comment use case."""

from pydantic import BaseModel

from forum.domain.service import CommentDeletionService
from forum.domain.value import AuthContext, CommentId

from forum.application.usecase.base import parse_uuid, require_requester


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    auth: AuthContext


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    success: bool
    deleted_count: int  # The comment itself plus every removed reply


class DeleteCommentUseCase:
    """Use case for deleting a comment and all of its replies."""

    def __init__(self, deletion_service: CommentDeletionService) -> None:
        """Initialize delete comment use case.

        Args:
            deletion_service: Subtree deleter
        """
        self.deletion_service = deletion_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            AuthenticationRequiredError: If the request is anonymous
            ValidationError: If the ID is malformed
            NotFoundError: If the comment does not exist
            AuthorizationError: If the requester is not the creator
        """
        requester_id = require_requester(request.auth, "delete a comment")
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))

        deleted = await self.deletion_service.delete_subtree(comment_id, requester_id)

        return DeleteCommentResponse(success=True, deleted_count=deleted)
