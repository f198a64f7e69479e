"""Unit tests for VoteLedger."""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from spark.domain.error import (
    ConflictError,
    ErrorKind,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    ServiceUnavailableError,
)
from spark.domain.model import Vote
from spark.domain.repository import (
    ActivityRepository,
    CommentRepository,
    IdeaRepository,
    UserRepository,
    VoteRepository,
)
from spark.domain.service import KarmaAccumulator, VoteLedger, resolve_transition
from spark.domain.service.vote_ledger import VoteAction
from spark.domain.value import (
    ActivityType,
    IdeaId,
    UserId,
    VotableType,
    VoteId,
    VoteTarget,
    VoteType,
)
from spark.persistence.repository.inmemory import (
    InMemoryActivityRepository,
    InMemoryCommentRepository,
    InMemoryIdeaRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from tests.conftest import make_comment, make_idea, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _seed_idea(unit_env, **overrides):
    """Store an author and one of their ideas."""
    user_repo = await unit_env.get(UserRepository)
    idea_repo = await unit_env.get(IdeaRepository)
    author = await user_repo.save(make_user())
    idea = await idea_repo.save(make_idea(author, **overrides))
    return author, idea


class TestResolveTransition:
    """Tests for the vote transition table."""

    @pytest.mark.parametrize(
        "existing, requested, action, delta, resulting",
        [
            (None, VoteType.UP, VoteAction.CREATE, 1, VoteType.UP),
            (None, VoteType.DOWN, VoteAction.CREATE, -1, VoteType.DOWN),
            (VoteType.UP, VoteType.UP, VoteAction.DELETE, -1, None),
            (VoteType.DOWN, VoteType.DOWN, VoteAction.DELETE, 1, None),
            (VoteType.UP, VoteType.DOWN, VoteAction.UPDATE, -2, VoteType.DOWN),
            (VoteType.DOWN, VoteType.UP, VoteAction.UPDATE, 2, VoteType.UP),
        ],
    )
    def test_transition_table(self, existing, requested, action, delta, resulting):
        """Each (existing, requested) pair resolves to exactly one transition."""
        # Act
        transition = resolve_transition(existing, requested)

        # Assert
        assert transition.action == action
        assert transition.delta == delta
        assert transition.resulting == resulting


class TestCastVoteOnIdea:
    """Tests for cast_vote on ideas."""

    @pytest.mark.asyncio
    async def test_upvote_then_same_vote_toggles_off(self, unit_env):
        """Casting UP twice returns the score to 0 and removes the vote."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        vote_repo = await unit_env.get(VoteRepository)
        _, idea = await _seed_idea(unit_env)
        voter = UserId(uuid4())
        target = VoteTarget.idea(idea.id)

        # Act
        first = await ledger.cast_vote(voter, target, VoteType.UP)
        second = await ledger.cast_vote(voter, target, VoteType.UP)

        # Assert
        assert first.vote_score == 1
        assert first.user_vote == VoteType.UP
        assert second.vote_score == 0
        assert second.user_vote is None
        assert await vote_repo.find_by_user_and_target(voter, target) is None

    @pytest.mark.asyncio
    async def test_switching_polarity_applies_delta_of_two(self, unit_env):
        """UP then DOWN moves the score from 1 to -1 in a single step."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        vote_repo = await unit_env.get(VoteRepository)
        _, idea = await _seed_idea(unit_env)
        voter = UserId(uuid4())
        target = VoteTarget.idea(idea.id)
        await ledger.cast_vote(voter, target, VoteType.UP)

        # Act
        outcome = await ledger.cast_vote(voter, target, VoteType.DOWN)

        # Assert
        assert outcome.delta == -2
        assert outcome.vote_score == -1
        assert outcome.user_vote == VoteType.DOWN
        vote = await vote_repo.find_by_user_and_target(voter, target)
        assert vote.vote_type == VoteType.DOWN

    @pytest.mark.asyncio
    async def test_score_matches_active_votes_after_every_step(self, unit_env):
        """The score always equals the sum of currently held polarities."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        vote_repo = await unit_env.get(VoteRepository)
        idea_repo = await unit_env.get(IdeaRepository)
        _, idea = await _seed_idea(unit_env)
        target = VoteTarget.idea(idea.id)
        voters = [UserId(uuid4()) for _ in range(3)]
        casts = [
            (voters[0], VoteType.UP),
            (voters[1], VoteType.DOWN),
            (voters[2], VoteType.UP),
            (voters[0], VoteType.DOWN),
            (voters[1], VoteType.DOWN),
            (voters[2], VoteType.UP),
            (voters[1], VoteType.UP),
        ]

        for voter, vote_type in casts:
            # Act
            outcome = await ledger.cast_vote(voter, target, vote_type)

            # Assert
            votes = await vote_repo.find_by_target(target)
            expected = sum(vote.vote_type.sign for vote in votes)
            stored = await idea_repo.find_by_id(idea.id)
            assert outcome.vote_score == expected
            assert stored.vote_score == expected

    @pytest.mark.asyncio
    async def test_concurrent_opposite_votes_cancel_out(self, unit_env):
        """Concurrent UP and DOWN from different voters end at score 0."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        idea_repo = await unit_env.get(IdeaRepository)
        _, idea = await _seed_idea(unit_env)
        target = VoteTarget.idea(idea.id)

        # Act
        await asyncio.gather(
            ledger.cast_vote(UserId(uuid4()), target, VoteType.UP),
            ledger.cast_vote(UserId(uuid4()), target, VoteType.DOWN),
        )

        # Assert
        stored = await idea_repo.find_by_id(idea.id)
        assert stored.vote_score == 0

    @pytest.mark.asyncio
    async def test_self_vote_is_forbidden_and_score_unchanged(self, unit_env):
        """Voting on your own idea fails with FORBIDDEN."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        idea_repo = await unit_env.get(IdeaRepository)
        author, idea = await _seed_idea(unit_env)

        # Act & Assert
        with pytest.raises(ForbiddenError, match="Cannot vote on your own content"):
            await ledger.cast_vote(author.id, VoteTarget.idea(idea.id), VoteType.UP)

        stored = await idea_repo.find_by_id(idea.id)
        assert stored.vote_score == 0

    @pytest.mark.asyncio
    async def test_vote_on_missing_idea_raises_not_found(self, unit_env):
        """Voting on a non-existent idea fails with NOT_FOUND."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)

        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await ledger.cast_vote(
                UserId(uuid4()), VoteTarget.idea(IdeaId(uuid4())), VoteType.UP
            )
        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_invalid_polarity_raises_invalid_argument(self, unit_env):
        """Only UP and DOWN are accepted."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        _, idea = await _seed_idea(unit_env)

        # Act & Assert
        with pytest.raises(InvalidArgumentError):
            await ledger.cast_vote(UserId(uuid4()), VoteTarget.idea(idea.id), "SIDEWAYS")

    @pytest.mark.asyncio
    async def test_vote_credits_author_karma(self, unit_env):
        """The author's karma moves with every transition."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        user_repo = await unit_env.get(UserRepository)
        author, idea = await _seed_idea(unit_env)
        voter = UserId(uuid4())
        target = VoteTarget.idea(idea.id)

        # Act
        await ledger.cast_vote(voter, target, VoteType.UP)
        outcome = await ledger.cast_vote(voter, target, VoteType.DOWN)

        # Assert
        assert outcome.karma_applied is True
        stored = await user_repo.find_by_id(author.id)
        assert stored.karma_score == -1

    @pytest.mark.asyncio
    async def test_missing_author_keeps_vote_and_reports_karma(self, unit_env):
        """A vote on an idea whose author is gone stands, with karma_applied False."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        idea_repo = await unit_env.get(IdeaRepository)
        idea = await idea_repo.save(make_idea())  # author never stored

        # Act
        outcome = await ledger.cast_vote(
            UserId(uuid4()), VoteTarget.idea(idea.id), VoteType.UP
        )

        # Assert
        assert outcome.vote_score == 1
        assert outcome.karma_applied is False

    @pytest.mark.asyncio
    async def test_vote_appends_activity(self, unit_env):
        """Every cast is recorded in the activity log."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        activity_repo = await unit_env.get(ActivityRepository)
        _, idea = await _seed_idea(unit_env)
        voter = UserId(uuid4())

        # Act
        await ledger.cast_vote(voter, VoteTarget.idea(idea.id), VoteType.DOWN)

        # Assert
        entries = await activity_repo.find_by_user(voter)
        assert len(entries) == 1
        assert entries[0].type == ActivityType.IDEA_VOTED
        assert entries[0].target_id == idea.id
        assert entries[0].payload["vote_type"] == "DOWN"


class TestCastVoteOnComment:
    """Tests for cast_vote on comments."""

    @pytest.mark.asyncio
    async def test_comment_vote_updates_comment_score(self, unit_env):
        """Comment votes change the comment's score, not the idea's."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        comment_repo = await unit_env.get(CommentRepository)
        idea_repo = await unit_env.get(IdeaRepository)
        user_repo = await unit_env.get(UserRepository)
        _, idea = await _seed_idea(unit_env)
        commenter = await user_repo.save(make_user())
        comment = await comment_repo.save(make_comment(idea, commenter))

        # Act
        outcome = await ledger.cast_vote(
            UserId(uuid4()), VoteTarget.comment(comment.id), VoteType.UP
        )

        # Assert
        assert outcome.vote_score == 1
        assert outcome.idea_id == idea.id
        assert (await comment_repo.find_by_id(comment.id)).vote_score == 1
        assert (await idea_repo.find_by_id(idea.id)).vote_score == 0
        assert (await user_repo.find_by_id(commenter.id)).karma_score == 1

    @pytest.mark.asyncio
    async def test_deleted_comment_cannot_be_voted_on(self, unit_env):
        """Soft-deleted comments reject votes."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        comment_repo = await unit_env.get(CommentRepository)
        _, idea = await _seed_idea(unit_env)
        comment = await comment_repo.save(make_comment(idea, is_deleted=True))

        # Act & Assert
        with pytest.raises(InvalidArgumentError, match="deleted comment"):
            await ledger.cast_vote(
                UserId(uuid4()), VoteTarget.comment(comment.id), VoteType.UP
            )


class RacingVoteRepository(InMemoryVoteRepository):
    """Another request inserts the same vote just before ours."""

    def __init__(self) -> None:
        super().__init__()
        self.raced = False

    async def save(self, vote: Vote) -> Vote:
        if not self.raced:
            self.raced = True
            await super().save(vote.model_copy(update={"id": VoteId(uuid4())}))
            raise IntegrityError("Duplicate vote", None, Exception("unique_vote"))
        return await super().save(vote)


class StaleVoteRepository(InMemoryVoteRepository):
    """Every conditional write finds the vote already changed."""

    async def update_type(self, vote_id, expected, new) -> bool:
        return False

    async def delete(self, vote_id, expected) -> bool:
        return False


class UnreachableIdeaRepository(InMemoryIdeaRepository):
    async def find_by_id(self, idea_id):
        raise OperationalError("SELECT ideas", {}, Exception("connection refused"))


def _ledger(vote_repo=None, idea_repo=None):
    return VoteLedger(
        vote_repository=vote_repo or InMemoryVoteRepository(),
        idea_repository=idea_repo or InMemoryIdeaRepository(),
        comment_repository=InMemoryCommentRepository(),
        activity_repository=InMemoryActivityRepository(),
        karma_accumulator=KarmaAccumulator(user_repository=InMemoryUserRepository()),
    )


class TestCastVoteRaces:
    """Tests for lost races and storage failures."""

    @pytest.mark.asyncio
    async def test_lost_insert_race_is_resolved_against_winner(self):
        """After a unique violation the ledger re-reads the winning vote."""
        # Arrange
        vote_repo = RacingVoteRepository()
        idea_repo = InMemoryIdeaRepository()
        idea = await idea_repo.save(make_idea())
        ledger = _ledger(vote_repo, idea_repo)
        voter = UserId(uuid4())
        target = VoteTarget.idea(idea.id)

        # Act
        outcome = await ledger.cast_vote(voter, target, VoteType.UP)

        # Assert - the winner already holds UP, so this cast toggles it off
        assert outcome.user_vote is None
        assert outcome.delta == -1
        assert await vote_repo.find_by_user_and_target(voter, target) is None

    @pytest.mark.asyncio
    async def test_gives_up_after_repeated_conflicts(self):
        """Persistent races end in CONFLICT instead of retrying forever."""
        # Arrange
        vote_repo = StaleVoteRepository()
        idea_repo = InMemoryIdeaRepository()
        idea = await idea_repo.save(make_idea())
        voter = UserId(uuid4())
        await vote_repo.save(
            Vote(
                id=VoteId(uuid4()),
                user_id=voter,
                votable_type=VotableType.IDEA,
                votable_id=idea.id,
                vote_type=VoteType.UP,
            )
        )
        ledger = _ledger(vote_repo, idea_repo)

        # Act & Assert
        with pytest.raises(ConflictError) as exc_info:
            await ledger.cast_vote(voter, VoteTarget.idea(idea.id), VoteType.DOWN)
        assert exc_info.value.kind == ErrorKind.CONFLICT

        stored = await idea_repo.find_by_id(idea.id)
        assert stored.vote_score == 0

    @pytest.mark.asyncio
    async def test_unreachable_storage_raises_service_unavailable(self):
        """Connectivity failures surface as SERVICE_UNAVAILABLE."""
        # Arrange
        ledger = _ledger(idea_repo=UnreachableIdeaRepository())

        # Act & Assert
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await ledger.cast_vote(
                UserId(uuid4()), VoteTarget.idea(IdeaId(uuid4())), VoteType.UP
            )
        assert exc_info.value.kind == ErrorKind.SERVICE_UNAVAILABLE
