"""Integration tests for the PostgreSQL engagement repositories.

These tests verify the atomic counters, the unique vote constraint and the
array filters against a real database. They are skipped when PostgreSQL is
not reachable.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from spark.domain.model import Vote
from spark.domain.model.common import utc_now
from spark.domain.repository import (
    CandidateFilter,
    IdeaFilter,
    IdeaRepository,
    UserRepository,
    VoteRepository,
)
from spark.domain.service import VoteLedger
from spark.domain.value import (
    IdeaCategory,
    SortMode,
    UserId,
    VotableType,
    VoteId,
    VoteTarget,
    VoteType,
)
from tests.conftest import make_idea, make_user
from tests.harness import create_env_fixture

# Integration test fixture - real persistence, assumes postgres running
integration_env = create_env_fixture(unmock={"persistence"})


async def _seed(integration_env, **idea_overrides):
    user_repo = await integration_env.get(UserRepository)
    idea_repo = await integration_env.get(IdeaRepository)
    author = await user_repo.save(make_user())
    voter = await user_repo.save(make_user())
    idea = await idea_repo.save(make_idea(author, **idea_overrides))
    return author, voter, idea


class TestVoteRepositoryIntegration:
    """Integration tests for PostgresVoteRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_vote_violates_unique_constraint(self, integration_env):
        """A second vote row for the same voter and target is rejected."""
        # Arrange
        vote_repo = await integration_env.get(VoteRepository)
        _, voter, idea = await _seed(integration_env)

        def vote() -> Vote:
            return Vote(
                id=VoteId(uuid4()),
                user_id=voter.id,
                votable_type=VotableType.IDEA,
                votable_id=idea.id,
                vote_type=VoteType.UP,
            )

        await vote_repo.save(vote())

        # Act & Assert
        with pytest.raises(IntegrityError):
            await vote_repo.save(vote())

        # The savepoint keeps the transaction usable
        found = await vote_repo.find_by_user_and_target(
            voter.id, VoteTarget.idea(idea.id)
        )
        assert found is not None
        assert found.vote_type == VoteType.UP

    @pytest.mark.asyncio
    async def test_conditional_writes_check_expected_polarity(self, integration_env):
        # Arrange
        vote_repo = await integration_env.get(VoteRepository)
        _, voter, idea = await _seed(integration_env)
        vote = await vote_repo.save(
            Vote(
                id=VoteId(uuid4()),
                user_id=voter.id,
                votable_type=VotableType.IDEA,
                votable_id=idea.id,
                vote_type=VoteType.UP,
            )
        )

        # Act
        stale = await vote_repo.update_type(vote.id, VoteType.DOWN, VoteType.UP)
        switched = await vote_repo.update_type(vote.id, VoteType.UP, VoteType.DOWN)
        stale_delete = await vote_repo.delete(vote.id, VoteType.UP)
        deleted = await vote_repo.delete(vote.id, VoteType.DOWN)

        # Assert
        assert (stale, switched, stale_delete, deleted) == (False, True, False, True)


class TestVoteLedgerIntegration:
    """The ledger against real storage."""

    @pytest.mark.asyncio
    async def test_cast_sequence_keeps_counters_consistent(self, integration_env):
        # Arrange
        ledger = await integration_env.get(VoteLedger)
        user_repo = await integration_env.get(UserRepository)
        idea_repo = await integration_env.get(IdeaRepository)
        author, voter, idea = await _seed(integration_env)
        target = VoteTarget.idea(idea.id)

        # Act
        await ledger.cast_vote(voter.id, target, VoteType.UP)
        outcome = await ledger.cast_vote(voter.id, target, VoteType.DOWN)

        # Assert
        assert outcome.vote_score == -1
        assert (await idea_repo.find_by_id(idea.id)).vote_score == -1
        assert (await user_repo.find_by_id(author.id)).karma_score == -1

    @pytest.mark.asyncio
    async def test_karma_for_missing_user_is_not_applied(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)

        # Act
        applied = await user_repo.increment_karma(UserId(uuid4()), 1)

        # Assert
        assert applied is False


class TestIdeaRepositoryIntegration:
    """Integration tests for PostgresIdeaRepository."""

    @pytest.mark.asyncio
    async def test_bookmark_count_floors_at_zero(self, integration_env):
        # Arrange
        idea_repo = await integration_env.get(IdeaRepository)
        _, _, idea = await _seed(integration_env)

        # Act
        count = await idea_repo.increment_bookmark_count(idea.id, -1)

        # Assert
        assert count == 0

    @pytest.mark.asyncio
    async def test_array_filters_and_search(self, integration_env):
        # Arrange
        idea_repo = await integration_env.get(IdeaRepository)
        marker = uuid4().hex
        _, _, idea = await _seed(
            integration_env,
            title=f"Garden {marker}",
            category=IdeaCategory.IOT,
            tags=["garden"],
            ai_tech_stack=["TinyML"],
        )

        # Act
        by_ai_stack = await idea_repo.find_all(
            IdeaFilter(tech_stack=["TinyML"], search=marker), sort=SortMode.NEWEST
        )
        total = await idea_repo.count(IdeaFilter(tags=["garden"], search=marker))
        candidates = await idea_repo.find_candidates(
            CandidateFilter(categories=[IdeaCategory.IOT], tech_stack=["garden"]),
            limit=500,
        )

        # Assert
        assert [i.id for i in by_ai_stack] == [idea.id]
        assert total == 1
        assert idea.id in {c.id for c in candidates}

    @pytest.mark.asyncio
    async def test_published_since_uses_inclusive_cutoff(self, integration_env):
        # Arrange
        idea_repo = await integration_env.get(IdeaRepository)
        created = utc_now() - timedelta(hours=2)
        _, _, idea = await _seed(
            integration_env, category=IdeaCategory.HEALTHTECH, created_at=created
        )

        # Act
        ideas = await idea_repo.find_published_since(created, IdeaCategory.HEALTHTECH)

        # Assert
        assert idea.id in {i.id for i in ideas}
