"""Cast vote use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from spark.adapter.error import BroadcastError
from spark.application.usecase.base import BaseUseCase
from spark.domain.repository import UnitOfWork
from spark.domain.service import BroadcastEvent, BroadcastSink, VoteLedger
from spark.domain.value import UserId, VotableType, VoteTarget, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    vote_type: str  # "UP" or "DOWN", checked by the ledger


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    # Score and user state keep the names clients already read from broadcasts
    vote_score: int = Field(serialization_alias="voteScore")
    # None after a toggle-off
    user_vote: VoteType | None = Field(serialization_alias="userVote")
    karma_applied: bool
    message: str


class CastVoteUseCase(BaseUseCase[CastVoteRequest, CastVoteResponse]):
    """Use case for voting on an idea or comment."""

    def __init__(
        self,
        vote_ledger: VoteLedger,
        unit_of_work: UnitOfWork,
        broadcast_sink: BroadcastSink,
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_ledger: Vote ledger domain service
            unit_of_work: Transaction boundary of the request
            broadcast_sink: Realtime sink for committed score updates
        """
        self.vote_ledger = vote_ledger
        self.unit_of_work = unit_of_work
        self.broadcast_sink = broadcast_sink

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        The vote is committed before it is broadcast. A failed broadcast is
        logged and does not affect the committed vote.

        Args:
            request: Cast vote request

        Returns:
            New score and the voter's resulting vote

        Raises:
            DomainError: If the ledger rejects the vote
        """
        target = VoteTarget(
            votable_type=request.votable_type,
            votable_id=UUID(request.votable_id),
        )
        user_id = UserId(UUID(request.user_id))

        try:
            outcome = await self.vote_ledger.cast_vote(
                user_id, target, request.vote_type
            )
        except Exception:
            await self.unit_of_work.rollback()
            raise

        await self.unit_of_work.commit()

        try:
            await self.broadcast_sink.publish(BroadcastEvent.from_vote(outcome))
        except BroadcastError as e:
            logfire.warn("Vote broadcast failed", target=str(target), error=str(e))

        message = "Vote recorded" if outcome.user_vote else "Vote removed"
        if not outcome.karma_applied:
            message += " (warning: author karma was not updated)"

        return CastVoteResponse(
            vote_score=outcome.vote_score,
            user_vote=outcome.user_vote,
            karma_applied=outcome.karma_applied,
            message=message,
        )
