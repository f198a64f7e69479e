"""Unit tests for ListIdeasUseCase."""

from uuid import uuid4

import pytest

from spark.application.usecase.idea import ListIdeasRequest, ListIdeasUseCase
from spark.domain.repository import IdeaRepository
from spark.domain.service import IdeaService, VoteLedger
from spark.domain.value import IdeaCategory, SortMode, UserId, VoteTarget, VoteType
from tests.conftest import make_idea
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListIdeasUseCase:
    """Tests for ListIdeasUseCase."""

    @pytest.mark.asyncio
    async def test_paginates_ranked_feed(self, unit_env):
        """Pages follow the hot order and report the total page count."""
        # Arrange
        use_case = ListIdeasUseCase(idea_service=await unit_env.get(IdeaService))
        idea_repo = await unit_env.get(IdeaRepository)
        for score in range(5):
            await idea_repo.save(make_idea(title=f"idea {score}", vote_score=score))

        # Act
        response = await use_case.execute(ListIdeasRequest(page=2, limit=2))

        # Assert
        assert [item.title for item in response.ideas] == ["idea 2", "idea 1"]
        assert response.pagination.page == 2
        assert response.pagination.total == 5
        assert response.pagination.pages == 3

    @pytest.mark.asyncio
    async def test_includes_callers_votes(self, unit_env):
        # Arrange
        use_case = ListIdeasUseCase(idea_service=await unit_env.get(IdeaService))
        ledger = await unit_env.get(VoteLedger)
        idea_repo = await unit_env.get(IdeaRepository)
        voter = UserId(uuid4())
        liked = await idea_repo.save(make_idea(title="liked"))
        await idea_repo.save(make_idea(title="other"))
        await ledger.cast_vote(voter, VoteTarget.idea(liked.id), VoteType.UP)

        # Act
        response = await use_case.execute(
            ListIdeasRequest(sort=SortMode.POPULAR, user_id=str(voter))
        )

        # Assert
        votes = {item.title: item.user_vote for item in response.ideas}
        assert votes == {"liked": VoteType.UP, "other": None}

    @pytest.mark.asyncio
    async def test_empty_result(self, unit_env):
        # Arrange
        use_case = ListIdeasUseCase(idea_service=await unit_env.get(IdeaService))

        # Act
        response = await use_case.execute(
            ListIdeasRequest(category=IdeaCategory.FINTECH, user_id=str(uuid4()))
        )

        # Assert
        assert response.ideas == []
        assert response.pagination.total == 0
        assert response.pagination.pages == 0
