"""List replies use case."""

from pydantic import BaseModel

from forum.application.presenter import CommentItem, CommentPresenter
from forum.domain.service import CommentPageService
from forum.domain.value import AuthContext, CommentId

from forum.application.usecase.base import parse_uuid, require_requester


class ListRepliesRequest(BaseModel):
    """List replies request."""

    comment_id: str  # UUID string of the parent comment
    page: int | None = None
    limit: int | None = None
    auth: AuthContext


class ListRepliesResponse(BaseModel):
    """List replies response."""

    replies: list[CommentItem]
    total: int
    has_more: bool
    page: int
    limit: int


class ListRepliesUseCase:
    """Use case for listing a page of a comment's direct replies."""

    def __init__(
        self, page_service: CommentPageService, presenter: CommentPresenter
    ) -> None:
        """Initialize list replies use case.

        Args:
            page_service: Paginated level reader
            presenter: Comment presenter
        """
        self.page_service = page_service
        self.presenter = presenter

    async def execute(self, request: ListRepliesRequest) -> ListRepliesResponse:
        """Execute list replies flow.

        Replies are returned without their own replies; ``replies_count``
        tells the caller whether another level can be requested.

        Args:
            request: List replies request

        Returns:
            The page of replies and paging metadata

        Raises:
            AuthenticationRequiredError: If the request is anonymous
            ValidationError: If the comment ID or paging parameters are invalid
            NotFoundError: If the parent comment does not exist
        """
        require_requester(request.auth, "list replies")
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))

        page = await self.page_service.list_replies(
            comment_id, page=request.page, limit=request.limit
        )
        replies = await self.presenter.present_nodes(page.items)

        return ListRepliesResponse(
            replies=replies,
            total=page.total,
            has_more=page.has_more,
            page=page.page,
            limit=page.limit,
        )
