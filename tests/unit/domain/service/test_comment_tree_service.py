"""Unit tests for CommentTreeService."""

from uuid import uuid4

import pytest

from forum.config import CommentSettings
from forum.domain.error import NotFoundError
from forum.domain.repository import CommentRepository, PostRepository
from forum.domain.service import CommentService, CommentTreeService, PostService
from forum.domain.value import CommentId, PostId, UserId
from forum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
)
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def build_tree_service(
    comment_repo: InMemoryCommentRepository,
    post_repo: InMemoryPostRepository,
    max_depth: int,
) -> CommentTreeService:
    post_service = PostService(post_repo)
    comment_service = CommentService(comment_repo, post_service, CommentSettings())
    return CommentTreeService(comment_repo, comment_service, post_service, max_depth)


class TestBuildPostTree:
    """Tests for build_post_tree method."""

    @pytest.mark.asyncio
    async def test_post_without_comments(self, unit_env):
        """An empty discussion is an empty forest."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act
        tree = await tree_service.build_post_tree(post.id)

        # Assert
        assert tree == []

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        """Materializing an unknown post fails."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await tree_service.build_post_tree(PostId(uuid4()))

    @pytest.mark.asyncio
    async def test_nests_replies_newest_first(self, unit_env):
        """Every level is ordered newest first and carries its child count."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        older = await comment_repo.save(make_comment(post.id, user_id, minutes=1))
        newer = await comment_repo.save(make_comment(post.id, user_id, minutes=2))
        early_reply = await comment_repo.save(
            make_comment(post.id, user_id, older.id, minutes=3)
        )
        late_reply = await comment_repo.save(
            make_comment(post.id, user_id, older.id, minutes=5)
        )
        nested = await comment_repo.save(
            make_comment(post.id, user_id, early_reply.id, minutes=4)
        )

        # Act
        tree = await tree_service.build_post_tree(post.id)

        # Assert
        assert [node.comment.id for node in tree] == [newer.id, older.id]
        assert tree[0].replies == []
        assert tree[0].replies_count == 0

        older_node = tree[1]
        assert older_node.replies_count == 2
        assert [n.comment.id for n in older_node.replies] == [
            late_reply.id,
            early_reply.id,
        ]
        early_node = older_node.replies[1]
        assert early_node.replies_count == 1
        assert early_node.replies[0].comment.id == nested.id
        assert early_node.replies[0].replies == []

    @pytest.mark.asyncio
    async def test_equal_timestamps_tie_break_by_id(self, unit_env):
        """Siblings created at the same instant come out in a stable order."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        first = await comment_repo.save(make_comment(post.id, user_id))
        second = await comment_repo.save(make_comment(post.id, user_id))

        # Act
        tree = await tree_service.build_post_tree(post.id)

        # Assert
        expected = sorted([first.id, second.id], reverse=True)
        assert [node.comment.id for node in tree] == expected

    @pytest.mark.asyncio
    async def test_contains_every_comment_exactly_once(self, unit_env):
        """Walking the forest yields each stored comment once."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        stored: list[CommentId] = []
        parents: list[CommentId | None] = [None]
        for i in range(12):
            parent_id = parents[i // 3]
            comment = await comment_repo.save(
                make_comment(post.id, user_id, parent_id, minutes=i)
            )
            stored.append(comment.id)
            parents.append(comment.id)

        # Act
        tree = await tree_service.build_post_tree(post.id)

        # Assert
        walked = [node.comment.id for root in tree for node in root.walk()]
        assert sorted(walked) == sorted(stored)


class TestBuildSubtree:
    """Tests for build_subtree method."""

    @pytest.mark.asyncio
    async def test_returns_replies_of_comment(self, unit_env):
        """The subtree starts at the direct replies, not the comment itself."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        user_id = UserId(uuid4())

        a = await comment_repo.save(make_comment(post_id, user_id, minutes=0))
        b = await comment_repo.save(make_comment(post_id, user_id, a.id, minutes=1))
        c = await comment_repo.save(make_comment(post_id, user_id, b.id, minutes=2))

        # Act
        subtree = await tree_service.build_subtree(a.id)

        # Assert
        assert len(subtree) == 1
        assert subtree[0].comment.id == b.id
        assert subtree[0].replies_count == 1
        assert subtree[0].replies[0].comment.id == c.id

    @pytest.mark.asyncio
    async def test_leaf_comment_has_empty_subtree(self, unit_env):
        """A comment without replies yields an empty list."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)
        comment_repo = await unit_env.get(CommentRepository)
        leaf = await comment_repo.save(make_comment(PostId(uuid4()), UserId(uuid4())))

        # Act & Assert
        assert await tree_service.build_subtree(leaf.id) == []

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        """Materializing below an unknown comment fails."""
        # Arrange
        tree_service = await unit_env.get(CommentTreeService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await tree_service.build_subtree(CommentId(uuid4()))


class TestDepthLimit:
    """Tests for max_depth truncation."""

    @pytest.mark.asyncio
    async def test_truncates_below_limit_but_keeps_count(self):
        """Nodes at the limit are not expanded yet still report replies."""
        # Arrange
        comment_repo = InMemoryCommentRepository()
        post_repo = InMemoryPostRepository()
        tree_service = build_tree_service(comment_repo, post_repo, max_depth=2)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        level1 = await comment_repo.save(make_comment(post.id, user_id))
        level2 = await comment_repo.save(make_comment(post.id, user_id, level1.id))
        await comment_repo.save(make_comment(post.id, user_id, level2.id))

        # Act
        tree = await tree_service.build_post_tree(post.id)

        # Assert
        assert tree[0].replies_count == 1
        level2_node = tree[0].replies[0]
        assert level2_node.comment.id == level2.id
        assert level2_node.replies == []
        assert level2_node.replies_count == 1
        assert level2_node.truncated is True

    @pytest.mark.asyncio
    async def test_deep_chain_does_not_recurse(self):
        """A thread far deeper than the limit materializes without error."""
        # Arrange
        comment_repo = InMemoryCommentRepository()
        post_repo = InMemoryPostRepository()
        tree_service = build_tree_service(comment_repo, post_repo, max_depth=50)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        parent_id = None
        for i in range(2000):
            comment = await comment_repo.save(
                make_comment(post.id, user_id, parent_id, minutes=i)
            )
            parent_id = comment.id

        # Act
        tree = await tree_service.build_post_tree(post.id)

        # Assert
        depth = 0
        node = tree[0]
        while node.replies:
            node = node.replies[0]
            depth += 1
        assert depth == 49
        assert node.truncated is True
        assert node.replies_count == 1
