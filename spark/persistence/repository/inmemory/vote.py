"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from spark.domain.model.vote import Vote
from spark.domain.repository.vote import VoteRepository
from spark.domain.value import UserId, VotableType, VoteId, VoteTarget, VoteType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Every mutation completes without awaiting, so it is atomic with respect
    to other coroutines.
    """

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target: VoteTarget,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a vote by user and target. Locking is a no-op here."""
        for vote in self._votes:
            if vote.user_id == user_id and vote.target == target:
                return vote
        return None

    async def find_by_user(
        self,
        user_id: UserId,
        vote_type: Optional[VoteType] = None,
        votable_type: Optional[VotableType] = None,
        limit: Optional[int] = None,
    ) -> list[Vote]:
        """Find votes by a user, newest first."""
        votes = [
            v
            for v in reversed(self._votes)
            if v.user_id == user_id
            and (vote_type is None or v.vote_type == vote_type)
            and (votable_type is None or v.votable_type == votable_type)
        ]
        # Stable sort keeps later insertions first on equal timestamps
        votes = sorted(votes, key=lambda v: v.created_at, reverse=True)
        return votes[:limit] if limit is not None else votes

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        wanted = set(votable_ids)
        return [
            v
            for v in self._votes
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in wanted
        ]

    async def find_by_target(self, target: VoteTarget) -> list[Vote]:
        """Find all votes on a target."""
        return [v for v in self._votes if v.target == target]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        for existing in self._votes:
            if existing.user_id == vote.user_id and existing.target == vote.target:
                raise IntegrityError("Duplicate vote", None, Exception("unique_vote"))

        self._votes.append(vote)
        return vote

    async def update_type(
        self, vote_id: VoteId, expected: VoteType, new: VoteType
    ) -> bool:
        """Switch polarity if the vote still holds the expected one."""
        for i, vote in enumerate(self._votes):
            if vote.id == vote_id and vote.vote_type == expected:
                self._votes[i] = vote.model_copy(update={"vote_type": new})
                return True
        return False

    async def delete(self, vote_id: VoteId, expected: VoteType) -> bool:
        """Delete a vote if it still holds the expected polarity."""
        for i, vote in enumerate(self._votes):
            if vote.id == vote_id and vote.vote_type == expected:
                self._votes.pop(i)
                return True
        return False
