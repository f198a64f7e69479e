"""Vote entity.

Votes are up/down signals cast by one user on one idea or comment.
Each user holds at most one vote per target; casting the same polarity
again removes it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from spark.domain.model.common import DomainModel, utc_now
from spark.domain.value import IdeaId, UserId, VotableType, VoteId, VoteTarget, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per target (enforced by database unique constraint)
    - Polymorphic reference to the target (idea or comment)
    - Never references content authored by the voter
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # IdeaId or CommentId (both are UUIDs)
    vote_type: VoteType
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def target(self) -> VoteTarget:
        """The voted-on target as a tagged reference."""
        return VoteTarget(votable_type=self.votable_type, votable_id=self.votable_id)


class VoteOutcome(DomainModel):
    """Result of one committed vote transition.

    This is also the payload the caller broadcasts once the transaction
    has been committed.
    """

    target: VoteTarget
    idea_id: IdeaId  # Idea the target belongs to (room for realtime updates)
    voter_id: UserId
    vote_score: int
    user_vote: Optional[VoteType]
    delta: int
    karma_applied: bool = True
