"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from spark.domain.model.comment import Comment
from spark.domain.value import CommentId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found (deleted or not), None otherwise
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def increment_vote_score(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        """Atomically add a signed delta to the comment's vote score.

        Uses SQL-level increment to avoid race conditions.

        Args:
            comment_id: The comment ID
            delta: Signed amount to add

        Returns:
            The new vote score, or None if the comment does not exist
        """
        pass
