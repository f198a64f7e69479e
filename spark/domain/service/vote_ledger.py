"""Vote ledger domain service.

Votes are toggles: casting the polarity a user already holds removes the
vote. Every cast resolves to exactly one transition and one signed delta,
which is applied atomically to the target's score and to its author's karma.
"""

from enum import Enum
from typing import Optional, Tuple
from uuid import uuid4

import logfire
from pydantic import BaseModel, ConfigDict
from sqlalchemy.exc import IntegrityError

from spark.domain.error import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from spark.domain.model import Activity, Vote, VoteOutcome
from spark.domain.repository import (
    ActivityRepository,
    CommentRepository,
    IdeaRepository,
    VoteRepository,
)
from spark.domain.value import (
    ActivityId,
    ActivityType,
    CommentId,
    IdeaId,
    UserId,
    VotableType,
    VoteId,
    VoteTarget,
    VoteType,
)

from .base import Service
from .karma import KarmaAccumulator

MAX_CAST_ATTEMPTS = 3


class VoteAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class VoteTransition(BaseModel):
    """One row of the vote transition table."""

    model_config = ConfigDict(frozen=True)

    action: VoteAction
    delta: int
    resulting: Optional[VoteType]


def resolve_transition(
    existing: Optional[VoteType], requested: VoteType
) -> VoteTransition:
    """Resolve what casting ``requested`` does given the vote already held.

    Args:
        existing: Polarity the voter currently holds, or None
        requested: Polarity being cast

    Returns:
        The action to take, the score delta and the resulting polarity
    """
    if existing is None:
        return VoteTransition(
            action=VoteAction.CREATE, delta=requested.sign, resulting=requested
        )
    if existing == requested:
        return VoteTransition(
            action=VoteAction.DELETE, delta=-existing.sign, resulting=None
        )
    return VoteTransition(
        action=VoteAction.UPDATE,
        delta=requested.sign - existing.sign,
        resulting=requested,
    )


class VoteLedger(Service):
    """Domain service owning votes and the vote scores derived from them."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        idea_repository: IdeaRepository,
        comment_repository: CommentRepository,
        activity_repository: ActivityRepository,
        karma_accumulator: KarmaAccumulator,
    ) -> None:
        """Initialize vote ledger.

        Args:
            vote_repository: Vote repository
            idea_repository: Idea repository
            comment_repository: Comment repository
            activity_repository: Activity log repository
            karma_accumulator: Applies deltas to the target author's karma
        """
        self.vote_repository = vote_repository
        self.idea_repository = idea_repository
        self.comment_repository = comment_repository
        self.activity_repository = activity_repository
        self.karma_accumulator = karma_accumulator

    async def cast_vote(
        self, voter_id: UserId, target: VoteTarget, vote_type: VoteType
    ) -> VoteOutcome:
        """Cast a vote on an idea or comment.

        All writes happen in the caller's transaction. The caller commits and
        then broadcasts the returned outcome.

        Args:
            voter_id: User casting the vote
            target: Idea or comment voted on
            vote_type: Requested polarity

        Returns:
            New score, the voter's resulting vote and the applied delta

        Raises:
            InvalidArgumentError: If the polarity is invalid or the comment is deleted
            NotFoundError: If the target does not exist
            ForbiddenError: If the voter authored the target
            ConflictError: If concurrent casts kept invalidating this one
            ServiceUnavailableError: If storage is unreachable
        """
        with logfire.span(
            "vote_ledger.cast_vote",
            voter_id=str(voter_id),
            target=str(target),
            vote_type=str(vote_type),
        ):
            try:
                vote_type = VoteType(vote_type)
            except ValueError:
                raise InvalidArgumentError("Vote type must be UP or DOWN")

            with self.storage_guard("cast_vote"):
                author_id, idea_id = await self._load_target(target)
                if author_id == voter_id:
                    logfire.warn(
                        "Self-vote rejected", voter_id=str(voter_id), target=str(target)
                    )
                    raise ForbiddenError("Cannot vote on your own content")

                transition = await self._record_vote(voter_id, target, vote_type)
                vote_score = await self._increment_score(target, transition.delta)
                karma_applied = await self.karma_accumulator.apply_delta(
                    author_id, transition.delta
                )
                await self.activity_repository.append(
                    Activity(
                        id=ActivityId(uuid4()),
                        type=(
                            ActivityType.IDEA_VOTED
                            if target.votable_type == VotableType.IDEA
                            else ActivityType.COMMENT_VOTED
                        ),
                        user_id=voter_id,
                        target_id=target.votable_id,
                        payload={
                            "vote_type": vote_type.value,
                            "action": transition.action.value,
                        },
                    )
                )

            logfire.info(
                "Vote cast",
                voter_id=str(voter_id),
                target=str(target),
                action=transition.action.value,
                delta=transition.delta,
                vote_score=vote_score,
            )
            return VoteOutcome(
                target=target,
                idea_id=idea_id,
                voter_id=voter_id,
                vote_score=vote_score,
                user_vote=transition.resulting,
                delta=transition.delta,
                karma_applied=karma_applied,
            )

    async def _load_target(self, target: VoteTarget) -> Tuple[UserId, IdeaId]:
        """Return the target's author and the idea it belongs to."""
        if target.votable_type == VotableType.IDEA:
            idea = await self.idea_repository.find_by_id(IdeaId(target.votable_id))
            if not idea:
                logfire.warn("Vote on non-existent idea", target=str(target))
                raise NotFoundError("Idea", str(target.votable_id))
            return idea.author_id, idea.id

        comment = await self.comment_repository.find_by_id(
            CommentId(target.votable_id)
        )
        if not comment:
            logfire.warn("Vote on non-existent comment", target=str(target))
            raise NotFoundError("Comment", str(target.votable_id))
        if comment.is_deleted:
            raise InvalidArgumentError("Cannot vote on deleted comment")
        return comment.author_id, comment.idea_id

    async def _record_vote(
        self, voter_id: UserId, target: VoteTarget, vote_type: VoteType
    ) -> VoteTransition:
        """Apply the transition to the vote row, retrying on lost races."""
        for attempt in range(1, MAX_CAST_ATTEMPTS + 1):
            existing = await self.vote_repository.find_by_user_and_target(
                voter_id, target, for_update=True
            )
            transition = resolve_transition(
                existing.vote_type if existing else None, vote_type
            )

            if existing is None:
                try:
                    await self.vote_repository.save(
                        Vote(
                            id=VoteId(uuid4()),
                            user_id=voter_id,
                            votable_type=target.votable_type,
                            votable_id=target.votable_id,
                            vote_type=vote_type,
                        )
                    )
                    return transition
                except IntegrityError:
                    logfire.warn(
                        "Concurrent vote created first",
                        voter_id=str(voter_id),
                        target=str(target),
                        attempt=attempt,
                    )
                    continue

            if transition.action == VoteAction.UPDATE:
                changed = await self.vote_repository.update_type(
                    existing.id, existing.vote_type, vote_type
                )
            else:
                changed = await self.vote_repository.delete(
                    existing.id, existing.vote_type
                )
            if changed:
                return transition

            logfire.warn(
                "Vote changed concurrently",
                voter_id=str(voter_id),
                target=str(target),
                attempt=attempt,
            )

        logfire.error(
            "Vote cast gave up after repeated conflicts",
            voter_id=str(voter_id),
            target=str(target),
        )
        raise ConflictError("Vote was modified concurrently, please retry")

    async def _increment_score(self, target: VoteTarget, delta: int) -> int:
        if target.votable_type == VotableType.IDEA:
            score = await self.idea_repository.increment_vote_score(
                IdeaId(target.votable_id), delta
            )
            resource = "Idea"
        else:
            score = await self.comment_repository.increment_vote_score(
                CommentId(target.votable_id), delta
            )
            resource = "Comment"
        if score is None:
            # Target deleted between the existence check and the increment
            raise NotFoundError(resource, str(target.votable_id))
        return score
