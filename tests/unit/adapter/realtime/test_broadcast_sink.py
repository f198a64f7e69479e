"""Unit tests for broadcast events and sinks."""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import httpx
import pytest

from spark.adapter.error import BroadcastError
from spark.adapter.realtime.sink import HttpBroadcastSink, LoggingBroadcastSink
from spark.domain.model import VoteOutcome
from spark.domain.service import BroadcastEvent
from spark.domain.value import CommentId, IdeaId, UserId, VoteTarget, VoteType

GATEWAY_URL = "http://realtime.test/broadcast"


def _idea_outcome(**overrides) -> VoteOutcome:
    idea_id = IdeaId(uuid4())
    data = {
        "target": VoteTarget.idea(idea_id),
        "idea_id": idea_id,
        "voter_id": UserId(uuid4()),
        "vote_score": 4,
        "user_vote": VoteType.UP,
        "delta": 1,
    }
    data.update(overrides)
    return VoteOutcome(**data)


class TestBroadcastEvent:
    """Tests for BroadcastEvent.from_vote."""

    def test_idea_vote_event(self):
        # Arrange
        outcome = _idea_outcome()

        # Act
        event = BroadcastEvent.from_vote(outcome)

        # Assert
        assert event.event == "vote:updated"
        assert event.room == f"idea:{outcome.idea_id}"
        assert event.data == {
            "ideaId": str(outcome.idea_id),
            "voteScore": 4,
            "userVote": "UP",
        }

    def test_comment_vote_event_after_toggle_off(self):
        # Arrange
        comment_id = CommentId(uuid4())
        outcome = _idea_outcome(
            target=VoteTarget.comment(comment_id), user_vote=None, vote_score=0
        )

        # Act
        event = BroadcastEvent.from_vote(outcome)

        # Assert
        assert event.event == "comment:vote_updated"
        assert event.room == f"idea:{outcome.idea_id}"
        assert event.data == {
            "commentId": str(comment_id),
            "voteScore": 0,
            "userVote": None,
        }


class TestHttpBroadcastSink:
    """Tests for HttpBroadcastSink."""

    @pytest.mark.asyncio
    async def test_posts_event_as_json(self):
        """Should post the event body to the gateway."""
        mock_response = MagicMock()
        mock_response.status_code = 202
        sink = HttpBroadcastSink(GATEWAY_URL, timeout=1.5)
        event = BroadcastEvent.from_vote(_idea_outcome())

        with patch("httpx.AsyncClient") as mock_client:
            post = mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=mock_response
            )

            await sink.publish(event)

            post.assert_called_once_with(
                GATEWAY_URL, json=event.model_dump(mode="json"), timeout=1.5
            )

    @pytest.mark.asyncio
    async def test_rejected_event_raises(self):
        """Should raise BroadcastError when the gateway answers with an error."""
        mock_response = MagicMock()
        mock_response.status_code = 503
        sink = HttpBroadcastSink(GATEWAY_URL)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=mock_response
            )

            with pytest.raises(BroadcastError, match="503"):
                await sink.publish(BroadcastEvent.from_vote(_idea_outcome()))

    @pytest.mark.asyncio
    async def test_unreachable_gateway_raises(self):
        """Should wrap transport failures in BroadcastError."""
        sink = HttpBroadcastSink(GATEWAY_URL)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                side_effect=httpx.ConnectError("connection refused")
            )

            with pytest.raises(BroadcastError, match="HTTP error"):
                await sink.publish(BroadcastEvent.from_vote(_idea_outcome()))


class TestLoggingBroadcastSink:
    @pytest.mark.asyncio
    async def test_publish_never_raises(self):
        # Act & Assert
        await LoggingBroadcastSink().publish(BroadcastEvent.from_vote(_idea_outcome()))
