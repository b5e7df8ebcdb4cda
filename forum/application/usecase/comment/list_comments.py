"""List comments use case."""

from pydantic import BaseModel

from forum.application.presenter import CommentItem, CommentPresenter
from forum.domain.service import CommentPageService, CommentTreeService
from forum.domain.value import AuthContext, PostId

from forum.application.usecase.base import parse_uuid, require_requester


class ListCommentsRequest(BaseModel):
    """List comments request."""

    post_id: str  # UUID string
    page: int | None = None  # 1-based, defaults to the first page
    limit: int | None = None  # Defaults to the configured page size
    auth: AuthContext


class ListCommentsResponse(BaseModel):
    """List comments response."""

    comments: list[CommentItem]
    total: int
    has_more: bool
    page: int
    limit: int


class ListCommentsUseCase:
    """Use case for listing a page of a post's top-level comments.

    Each comment on the page is returned with its full reply tree.
    """

    def __init__(
        self,
        page_service: CommentPageService,
        tree_service: CommentTreeService,
        presenter: CommentPresenter,
    ) -> None:
        """Initialize list comments use case.

        Args:
            page_service: Paginated level reader
            tree_service: Tree materializer for the replies of the page
            presenter: Comment presenter
        """
        self.page_service = page_service
        self.tree_service = tree_service
        self.presenter = presenter

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Steps:
        1. Require an authenticated requester
        2. Read one page of top-level comments
        3. Expand the replies of the whole page in one batched pass
        4. Present the trees

        Args:
            request: List comments request

        Returns:
            The page with nested replies and paging metadata

        Raises:
            AuthenticationRequiredError: If the request is anonymous
            ValidationError: If the post ID or paging parameters are invalid
            NotFoundError: If the post does not exist
        """
        require_requester(request.auth, "list comments")
        post_id = PostId(parse_uuid(request.post_id, "post_id"))

        page = await self.page_service.list_top_level(
            post_id, page=request.page, limit=request.limit, count_replies=False
        )
        trees = await self.tree_service.expand([node.comment for node in page.items])
        comments = await self.presenter.present_nodes(trees)

        return ListCommentsResponse(
            comments=comments,
            total=page.total,
            has_more=page.has_more,
            page=page.page,
            limit=page.limit,
        )
