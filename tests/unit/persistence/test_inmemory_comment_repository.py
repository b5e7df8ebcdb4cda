"""Unit tests for the in-memory comment repository used by tests and tooling."""

from uuid import uuid4

import pytest

from forum.domain.value import CommentId, PostId, UserId
from forum.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment


class TestInMemoryCommentRepository:
    """Behaviour the services rely on, shared with the PostgreSQL repository."""

    @pytest.mark.asyncio
    async def test_top_level_paging_newest_first(self):
        """Offsets and limits slice the newest-first ordering."""
        # Arrange
        repo = InMemoryCommentRepository()
        post_id = PostId(uuid4())
        user_id = UserId(uuid4())
        comments = [
            await repo.save(make_comment(post_id, user_id, minutes=i)) for i in range(5)
        ]
        await repo.save(make_comment(post_id, user_id, comments[0].id, minutes=9))

        # Act
        page = await repo.find_top_level(post_id, offset=1, limit=2)

        # Assert
        assert [c.id for c in page] == [comments[3].id, comments[2].id]
        assert await repo.count_top_level(post_id) == 5

    @pytest.mark.asyncio
    async def test_children_of_many_and_counts(self):
        """Batched lookups cover every requested parent."""
        # Arrange
        repo = InMemoryCommentRepository()
        post_id = PostId(uuid4())
        user_id = UserId(uuid4())
        a = await repo.save(make_comment(post_id, user_id))
        b = await repo.save(make_comment(post_id, user_id))
        a1 = await repo.save(make_comment(post_id, user_id, a.id, minutes=1))
        a2 = await repo.save(make_comment(post_id, user_id, a.id, minutes=2))
        b1 = await repo.save(make_comment(post_id, user_id, b.id, minutes=3))

        # Act
        children = await repo.find_children_of_many([a.id, b.id])
        child_ids = await repo.find_child_ids_of_many([a.id, b.id])
        counts = await repo.count_children_many([a.id, b.id, a1.id])

        # Assert
        assert [c.id for c in children[a.id]] == [a2.id, a1.id]
        assert [c.id for c in children[b.id]] == [b1.id]
        assert set(child_ids) == {a1.id, a2.id, b1.id}
        assert counts[a.id] == 2
        assert counts[b.id] == 1
        assert counts.get(a1.id, 0) == 0

    @pytest.mark.asyncio
    async def test_like_set_primitives_report_changes(self):
        """add_like and remove_like say whether the set changed."""
        # Arrange
        repo = InMemoryCommentRepository()
        comment = await repo.save(make_comment(PostId(uuid4()), UserId(uuid4())))
        user_id = UserId(uuid4())

        # Act & Assert
        assert await repo.add_like(comment.id, user_id) is True
        assert await repo.add_like(comment.id, user_id) is False
        assert await repo.remove_like(comment.id, user_id) is True
        assert await repo.remove_like(comment.id, user_id) is False

    @pytest.mark.asyncio
    async def test_delete_many_counts_only_existing(self):
        """Unknown IDs are ignored by bulk delete."""
        # Arrange
        repo = InMemoryCommentRepository()
        comment = await repo.save(make_comment(PostId(uuid4()), UserId(uuid4())))

        # Act
        deleted = await repo.delete_many([comment.id, CommentId(uuid4())])

        # Assert
        assert deleted == 1
        assert await repo.find_by_id(comment.id) is None
