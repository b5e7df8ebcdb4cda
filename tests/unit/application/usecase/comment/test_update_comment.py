"""Unit tests for UpdateCommentUseCase."""

from uuid import uuid4

import pytest

from forum.application.usecase.comment import (
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.domain.error import (
    AuthenticationRequiredError,
    AuthorizationError,
    ValidationError,
)
from forum.domain.repository import CommentRepository
from forum.domain.value import AuthContext, PostId, UserId
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateCommentUseCase:
    """Tests for UpdateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_creator_edits_content(self, unit_env):
        """The edit keeps likes and reports the current reply count."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        creator = UserId(uuid4())
        liker = UserId(uuid4())
        comment = await comment_repo.save(
            make_comment(post_id, creator, liked_by=frozenset({liker}))
        )
        await comment_repo.save(make_comment(post_id, liker, comment.id))

        # Act
        item = await use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment.id),
                content="Edited",
                auth=AuthContext.for_user(creator),
            )
        )

        # Assert
        assert item.content == "Edited"
        assert item.liked_by == [str(liker)]
        assert item.replies_count == 1
        assert item.created_at == "2024-01-01T12:00:00.000Z"
        assert item.updated_at != item.created_at

    @pytest.mark.asyncio
    async def test_other_user_rejected(self, unit_env):
        """Only the creator may edit."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(
            make_comment(PostId(uuid4()), UserId(uuid4()))
        )

        # Act & Assert
        with pytest.raises(AuthorizationError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=str(comment.id),
                    content="Mine now",
                    auth=AuthContext.for_user(UserId(uuid4())),
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_request_rejected(self, unit_env):
        """Editing requires an authenticated requester."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)

        # Act & Assert
        with pytest.raises(AuthenticationRequiredError):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id=str(uuid4()),
                    content="Edited",
                    auth=AuthContext.anonymous(),
                )
            )

    @pytest.mark.asyncio
    async def test_malformed_id_rejected(self, unit_env):
        """A comment ID that is not a UUID is a validation error."""
        # Arrange
        use_case = await unit_env.get(UpdateCommentUseCase)

        # Act & Assert
        with pytest.raises(ValidationError, match="Invalid comment_id"):
            await use_case.execute(
                UpdateCommentRequest(
                    comment_id="42",
                    content="Edited",
                    auth=AuthContext.for_user(UserId(uuid4())),
                )
            )
