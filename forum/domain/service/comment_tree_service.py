"""Comment tree materialization."""

from collections import deque
from dataclasses import dataclass, field

import logfire

from forum.domain.model.comment import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId

from .base import Service
from .comment_service import CommentService
from .post_service import PostService


@dataclass
class CommentTreeNode:
    """Node in a materialized comment tree.

    ``replies_count`` is always the immediate-child count of the comment,
    whether or not ``replies`` was expanded. ``truncated`` marks a node
    whose replies exist but were cut off by the depth limit.
    """

    comment: Comment
    replies: list["CommentTreeNode"] = field(default_factory=list)
    replies_count: int = 0
    truncated: bool = False

    def walk(self):
        """Yield this node and all its descendants, breadth-first."""
        queue = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.replies)


class CommentTreeService(Service):
    """Assembles nested reply trees from flat parent pointers.

    Expansion is iterative and level by level: each level of the tree
    costs one batched ``find_children_of_many`` query, and no Python
    recursion is involved, so thread depth cannot exhaust the stack.
    Levels beyond ``max_depth`` are not fetched.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_service: CommentService,
        post_service: PostService,
        max_depth: int,
    ) -> None:
        """Initialize comment tree service.

        Args:
            comment_repository: Comment repository
            comment_service: Comment domain service
            post_service: Post domain service
            max_depth: Maximum number of levels in a returned tree
        """
        self.comment_repository = comment_repository
        self.comment_service = comment_service
        self.post_service = post_service
        self.max_depth = max_depth

    async def build_post_tree(self, post_id: PostId) -> list[CommentTreeNode]:
        """Materialize every comment of a post as a forest.

        Args:
            post_id: Post ID

        Returns:
            Top-level comments (newest first), each with nested replies

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("comment_tree_service.build_post_tree", post_id=str(post_id)):
            await self.post_service.require_post(post_id)
            roots = await self.comment_repository.find_top_level(post_id)
            return await self.expand(roots)

    async def build_subtree(self, comment_id: CommentId) -> list[CommentTreeNode]:
        """Materialize the replies of a single comment.

        Args:
            comment_id: Comment whose replies are expanded

        Returns:
            Direct replies (newest first), each with nested replies

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_tree_service.build_subtree", comment_id=str(comment_id)
        ):
            await self.comment_service.get_comment_by_id(comment_id)
            children = await self.comment_repository.find_children(comment_id)
            return await self.expand(children)

    async def expand(self, roots: list[Comment]) -> list[CommentTreeNode]:
        """Nest the full reply tree under already-fetched comments.

        The order of ``roots`` is preserved; replies at every level are
        ordered newest first among their siblings.

        Args:
            roots: Comments forming the first level of the result

        Returns:
            One tree node per root
        """
        nodes = [CommentTreeNode(comment=comment) for comment in roots]
        visited: set[CommentId] = {comment.id for comment in roots}
        frontier = nodes
        level = 1
        fetched = len(nodes)

        while frontier:
            frontier_ids = [node.comment.id for node in frontier]

            if level >= self.max_depth:
                # Depth limit reached: report counts, skip the subtrees
                counts = await self.comment_repository.count_children_many(
                    frontier_ids
                )
                for node in frontier:
                    node.replies_count = counts.get(node.comment.id, 0)
                    node.truncated = node.replies_count > 0
                if any(node.truncated for node in frontier):
                    logfire.warn(
                        "Comment tree truncated at depth limit",
                        max_depth=self.max_depth,
                    )
                break

            children_by_parent = await self.comment_repository.find_children_of_many(
                frontier_ids
            )

            next_frontier: list[CommentTreeNode] = []
            for node in frontier:
                children = children_by_parent.get(node.comment.id, [])
                node.replies_count = len(children)
                for child in children:
                    if child.id in visited:
                        logfire.error(
                            "Cycle detected in comment tree",
                            comment_id=str(child.id),
                            parent_id=str(node.comment.id),
                        )
                        continue
                    visited.add(child.id)
                    child_node = CommentTreeNode(comment=child)
                    node.replies.append(child_node)
                    next_frontier.append(child_node)

            fetched += len(next_frontier)
            frontier = next_frontier
            level += 1

        logfire.info(
            "Comment tree materialized", roots=len(nodes), comments=fetched, depth=level
        )
        return nodes
