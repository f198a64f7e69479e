"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from spark.domain.model.vote import Vote
from spark.domain.value import UserId, VotableType, VoteId, VoteTarget, VoteType


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target: VoteTarget,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target.

        Args:
            user_id: The user's ID
            target: The idea or comment voted on
            for_update: Lock the vote row until the transaction ends

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(
        self,
        user_id: UserId,
        vote_type: Optional[VoteType] = None,
        votable_type: Optional[VotableType] = None,
        limit: Optional[int] = None,
    ) -> List[Vote]:
        """Find votes cast by a user, newest first.

        Args:
            user_id: The user's ID
            vote_type: Only votes of this polarity (None for both)
            votable_type: Only votes on this kind of target (None for both)
            limit: Maximum number of votes to return (None for all)

        Returns:
            List of votes by the user, most recent first
        """
        pass

    @abstractmethod
    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items (idea or comment)
            votable_ids: List of item IDs to check

        Returns:
            List of votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def find_by_target(self, target: VoteTarget) -> List[Vote]:
        """Find all votes on a specific target.

        Args:
            target: The idea or comment

        Returns:
            List of votes on the target
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a new vote.

        The insert runs in a savepoint so a duplicate does not poison the
        surrounding transaction.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the user already voted on this target
        """
        pass

    @abstractmethod
    async def update_type(
        self, vote_id: VoteId, expected: VoteType, new: VoteType
    ) -> bool:
        """Switch a vote's polarity if it still holds the expected one.

        Args:
            vote_id: The vote ID
            expected: Polarity the caller read
            new: Polarity to store

        Returns:
            True if the vote was updated, False if it vanished or changed
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId, expected: VoteType) -> bool:
        """Delete a vote if it still holds the expected polarity.

        Args:
            vote_id: The vote ID to delete
            expected: Polarity the caller read

        Returns:
            True if a vote was deleted, False otherwise
        """
        pass
