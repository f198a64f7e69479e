"""Realtime broadcast sink interface.

The ledger never broadcasts itself: use cases publish committed outcomes
through a ``BroadcastSink`` after the transaction has been committed.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from spark.domain.model import VoteOutcome
from spark.domain.value import VotableType


class BroadcastEvent(BaseModel):
    """Event delivered to every client in a room."""

    event: str
    room: str
    data: dict[str, Any]

    @classmethod
    def from_vote(cls, outcome: VoteOutcome) -> "BroadcastEvent":
        """Build the score update event for a committed vote."""
        target_id = str(outcome.target.votable_id)
        user_vote = outcome.user_vote.value if outcome.user_vote else None
        if outcome.target.votable_type == VotableType.IDEA:
            return cls(
                event="vote:updated",
                room=f"idea:{outcome.idea_id}",
                data={
                    "ideaId": target_id,
                    "voteScore": outcome.vote_score,
                    "userVote": user_vote,
                },
            )
        return cls(
            event="comment:vote_updated",
            room=f"idea:{outcome.idea_id}",
            data={
                "commentId": target_id,
                "voteScore": outcome.vote_score,
                "userVote": user_vote,
            },
        )


class BroadcastSink(ABC):
    """Delivers events to connected realtime clients."""

    @abstractmethod
    async def publish(self, event: BroadcastEvent) -> None:
        """Publish an event.

        Args:
            event: The event to deliver

        Raises:
            BroadcastError: If the event could not be delivered
        """
        pass
