"""Unit tests for GetCommentTreeUseCase."""

from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from forum.application.usecase.comment import (
    GetCommentTreeRequest,
    GetCommentTreeUseCase,
)
from forum.domain.error import AuthenticationRequiredError, NotFoundError
from forum.domain.repository import CommentRepository, PostRepository, UserRepository
from forum.domain.value import AuthContext, UserId
from tests.conftest import make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCommentTreeUseCase:
    """Tests for GetCommentTreeUseCase."""

    @pytest.mark.asyncio
    async def test_whole_post_tree(self, unit_env):
        """All comments are nested and counted."""
        # Arrange
        use_case = await unit_env.get(GetCommentTreeUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("Alice"))
        post = await post_repo.save(make_post())

        root = await comment_repo.save(make_comment(post.id, alice.id))
        reply = await comment_repo.save(
            make_comment(post.id, alice.id, root.id, minutes=1)
        )
        await comment_repo.save(make_comment(post.id, alice.id, reply.id, minutes=2))
        await comment_repo.save(make_comment(post.id, alice.id, minutes=3))

        # Act
        response = await use_case.for_post(str(post.id), AuthContext.for_user(alice.id))

        # Assert
        assert response.total == 4
        assert len(response.comments) == 2
        oldest_root = response.comments[1]
        assert oldest_root.id == str(root.id)
        assert oldest_root.replies[0].replies[0].creator.name == "Alice"

    @pytest.mark.asyncio
    async def test_subtree_of_comment(self, unit_env):
        """A comment's subtree lists its replies, not the comment itself."""
        # Arrange
        use_case = await unit_env.get(GetCommentTreeUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        post = make_post()
        user_id = UserId(uuid4())

        root = await comment_repo.save(make_comment(post.id, user_id))
        reply = await comment_repo.save(make_comment(post.id, user_id, root.id))

        # Act
        response = await use_case.for_comment(
            str(root.id), AuthContext.for_user(user_id)
        )

        # Assert
        assert response.total == 1
        assert response.comments[0].id == str(reply.id)
        assert response.comments[0].creator.name == "Deleted User"

    @pytest.mark.asyncio
    async def test_unknown_post_raises_not_found(self, unit_env):
        """Materializing an unknown post fails."""
        # Arrange
        use_case = await unit_env.get(GetCommentTreeUseCase)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.for_post(str(uuid4()), AuthContext.for_user(UserId(uuid4())))

    @pytest.mark.asyncio
    async def test_anonymous_request_rejected(self, unit_env):
        """Reading the tree requires an authenticated requester."""
        # Arrange
        use_case = await unit_env.get(GetCommentTreeUseCase)

        # Act & Assert
        with pytest.raises(AuthenticationRequiredError):
            await use_case.for_post(str(uuid4()), AuthContext.anonymous())

    def test_request_needs_exactly_one_target(self):
        """Both or neither target is a malformed request."""
        # Arrange
        auth = AuthContext.anonymous()

        # Act & Assert
        with pytest.raises(PydanticValidationError):
            GetCommentTreeRequest(auth=auth)
        with pytest.raises(PydanticValidationError):
            GetCommentTreeRequest(
                post_id=str(uuid4()), comment_id=str(uuid4()), auth=auth
            )
