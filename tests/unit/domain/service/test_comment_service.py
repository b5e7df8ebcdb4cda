"""Unit tests for CommentService."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from forum.config import CommentSettings
from forum.domain.error import AuthorizationError, NotFoundError, ValidationError
from forum.domain.repository import CommentRepository, PostRepository
from forum.domain.service import CommentService, PostService
from forum.domain.value import CommentId, PostId, UserId
from forum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
)
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """Top-level comment is stored without a parent and with no likes."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)

        post = await post_repo.save(make_post())
        creator_id = UserId(uuid4())

        # Act
        result = await comment_service.create_comment(
            content="First!", post_id=post.id, creator_id=creator_id
        )

        # Assert
        assert result.parent_id is None
        assert result.content == "First!"
        assert result.post_id == post.id
        assert result.creator_id == creator_id
        assert result.liked_by == frozenset()
        assert result.created_at == result.updated_at

        saved = await comment_repo.find_by_id(result.id)
        assert saved == result

    @pytest.mark.asyncio
    async def test_content_is_trimmed(self, unit_env):
        """Surrounding whitespace is removed before storage."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act
        result = await comment_service.create_comment(
            content="  hello world \n", post_id=post.id, creator_id=UserId(uuid4())
        )

        # Assert
        assert result.content == "hello world"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    async def test_blank_content_rejected(self, unit_env, content):
        """Empty or whitespace-only content is a validation error."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act & Assert
        with pytest.raises(ValidationError, match="Comment cannot be empty"):
            await comment_service.create_comment(
                content=content, post_id=post.id, creator_id=UserId(uuid4())
            )
        assert await comment_repo.count_top_level(post.id) == 0

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        """Commenting on a post that does not exist fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Post not found"):
            await comment_service.create_comment(
                content="Hello", post_id=PostId(uuid4()), creator_id=UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_reply_to_existing_comment(self, unit_env):
        """A reply references its parent and leaves the post count alone."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        parent = await comment_service.create_comment(
            content="Parent", post_id=post.id, creator_id=UserId(uuid4())
        )

        # Act
        reply = await comment_service.create_comment(
            content="Reply",
            post_id=post.id,
            creator_id=UserId(uuid4()),
            parent_id=parent.id,
        )

        # Assert
        assert reply.parent_id == parent.id
        assert not reply.is_top_level
        stored_post = await post_repo.find_by_id(post.id)
        assert stored_post.comment_count == 1

    @pytest.mark.asyncio
    async def test_missing_parent_raises_not_found(self, unit_env):
        """Replying to a comment that does not exist fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act & Assert
        with pytest.raises(NotFoundError, match="Parent comment not found"):
            await comment_service.create_comment(
                content="Orphan reply",
                post_id=post.id,
                creator_id=UserId(uuid4()),
                parent_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_post_rejected(self, unit_env):
        """A reply must target a parent on the same post."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post_a = await post_repo.save(make_post())
        post_b = await post_repo.save(make_post())

        parent = await comment_service.create_comment(
            content="On A", post_id=post_a.id, creator_id=UserId(uuid4())
        )

        # Act & Assert
        with pytest.raises(ValidationError, match="does not belong to this post"):
            await comment_service.create_comment(
                content="On B",
                post_id=post_b.id,
                creator_id=UserId(uuid4()),
                parent_id=parent.id,
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_post_allowed_when_not_enforced(self):
        """With the check disabled the reply is addressed by parent alone."""
        # Arrange
        comment_repo = InMemoryCommentRepository()
        post_repo = InMemoryPostRepository()
        service = CommentService(
            comment_repo,
            PostService(post_repo),
            CommentSettings(enforce_parent_post_match=False),
        )
        post_a = await post_repo.save(make_post())
        post_b = await post_repo.save(make_post())
        parent = await service.create_comment(
            content="On A", post_id=post_a.id, creator_id=UserId(uuid4())
        )

        # Act
        reply = await service.create_comment(
            content="On B",
            post_id=post_b.id,
            creator_id=UserId(uuid4()),
            parent_id=parent.id,
        )

        # Assert
        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_too_long_content_rejected(self):
        """Content longer than the configured maximum is rejected."""
        # Arrange
        post_repo = InMemoryPostRepository()
        service = CommentService(
            InMemoryCommentRepository(),
            PostService(post_repo),
            CommentSettings(max_content_length=10),
        )
        post = await post_repo.save(make_post())

        # Act & Assert
        with pytest.raises(ValidationError, match="cannot exceed 10 characters"):
            await service.create_comment(
                content="x" * 11, post_id=post.id, creator_id=UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_top_level_comment_refreshes_post_count(self, unit_env):
        """The post's cached count tracks top-level comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act
        for text in ("one", "two", "three"):
            await comment_service.create_comment(
                content=text, post_id=post.id, creator_id=UserId(uuid4())
            )

        # Assert
        stored_post = await post_repo.find_by_id(post.id)
        assert stored_post.comment_count == 3


class TestUpdateContent:
    """Tests for update_content method."""

    @pytest.mark.asyncio
    async def test_creator_can_edit(self, unit_env):
        """Only content and updated_at change."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        creator_id = UserId(uuid4())
        liker = UserId(uuid4())
        original = await comment_repo.save(
            make_comment(PostId(uuid4()), creator_id, liked_by=frozenset({liker}))
        )

        # Act
        updated = await comment_service.update_content(
            original.id, "  Edited  ", creator_id
        )

        # Assert
        assert updated.content == "Edited"
        assert updated.updated_at > original.updated_at
        assert updated.created_at == original.created_at
        assert updated.liked_by == frozenset({liker})
        assert updated.parent_id == original.parent_id

    @pytest.mark.asyncio
    async def test_non_creator_rejected(self, unit_env):
        """Editing someone else's comment is an authorization error."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        original = await comment_repo.save(
            make_comment(PostId(uuid4()), UserId(uuid4()), content="Mine")
        )

        # Act & Assert
        with pytest.raises(AuthorizationError):
            await comment_service.update_content(
                original.id, "Hijacked", UserId(uuid4())
            )
        stored = await comment_repo.find_by_id(original.id)
        assert stored.content == "Mine"

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        """Editing a comment that does not exist fails."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError, match="Comment not found"):
            await comment_service.update_content(
                CommentId(uuid4()), "Anything", UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, unit_env):
        """The new content follows the same rules as on creation."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        creator_id = UserId(uuid4())
        original = await comment_repo.save(make_comment(PostId(uuid4()), creator_id))

        # Act & Assert
        with pytest.raises(ValidationError):
            await comment_service.update_content(original.id, "   ", creator_id)


class TestCountChildren:
    """Tests for reply counting."""

    @pytest.mark.asyncio
    async def test_counts_immediate_children_only(self, unit_env):
        """Grandchildren are not counted."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        user_id = UserId(uuid4())

        root = await comment_repo.save(make_comment(post_id, user_id))
        child = await comment_repo.save(make_comment(post_id, user_id, root.id))
        await comment_repo.save(make_comment(post_id, user_id, root.id))
        await comment_repo.save(make_comment(post_id, user_id, child.id))

        # Act
        counts = await comment_service.count_children_many([root.id, child.id])

        # Assert
        assert await comment_service.count_children(root.id) == 2
        assert counts == {root.id: 2, child.id: 1}

    @pytest.mark.asyncio
    async def test_count_children_many_empty(self, unit_env):
        """No IDs means no store call and an empty result."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        assert await comment_service.count_children_many([]) == {}


class ParentVanishesOnInsert(InMemoryCommentRepository):
    """Rejects reply inserts as PostgreSQL does once the parent is gone."""

    async def save(self, comment):
        if comment.parent_id is not None:
            raise IntegrityError(
                "INSERT INTO comments",
                {},
                Exception('violates foreign key constraint "comments_parent_id_fkey"'),
            )
        return await super().save(comment)


class TestCreateCommentConstraintViolation:
    """Tests for inserts racing a concurrent delete."""

    @pytest.mark.asyncio
    async def test_parent_deleted_before_insert_is_not_found(self):
        """A foreign-key violation on insert surfaces as NotFoundError."""
        # Arrange
        comment_repo = ParentVanishesOnInsert()
        post_repo = InMemoryPostRepository()
        service = CommentService(comment_repo, PostService(post_repo), CommentSettings())
        post = await post_repo.save(make_post())
        parent = await service.create_comment(
            content="Parent", post_id=post.id, creator_id=UserId(uuid4())
        )

        # Act & Assert
        with pytest.raises(NotFoundError, match="Parent comment not found"):
            await service.create_comment(
                content="Reply",
                post_id=post.id,
                creator_id=UserId(uuid4()),
                parent_id=parent.id,
            )
        assert await comment_repo.count_children(parent.id) == 0
