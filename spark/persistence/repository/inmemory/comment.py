"""In-memory comment repository for testing."""

from typing import Optional

from spark.domain.model.comment import Comment
from spark.domain.repository.comment import CommentRepository
from spark.domain.value import CommentId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def increment_vote_score(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        """Add a signed delta to the comment's vote score."""
        comment = self._comments.get(comment_id)
        if not comment:
            return None
        updated = comment.model_copy(update={"vote_score": comment.vote_score + delta})
        self._comments[comment_id] = updated
        return updated.vote_score
