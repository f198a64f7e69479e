"""Unit tests for GetTrendingUseCase."""

import pytest

from spark.application.usecase.recommendation import (
    GetTrendingRequest,
    GetTrendingUseCase,
)
from spark.domain.repository import IdeaRepository
from spark.domain.service import TrendingWindowCalculator
from spark.domain.value import IdeaCategory, TrendingPeriod
from tests.conftest import days_ago, make_idea
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetTrendingUseCase:
    """Tests for GetTrendingUseCase."""

    @pytest.mark.asyncio
    async def test_topics_and_ideas_share_the_window(self, unit_env):
        # Arrange
        use_case = GetTrendingUseCase(
            trending_calculator=await unit_env.get(TrendingWindowCalculator)
        )
        idea_repo = await unit_env.get(IdeaRepository)
        recent = await idea_repo.save(
            make_idea(tags=["llm", "agents"], category=IdeaCategory.AI_ML, vote_score=3)
        )
        await idea_repo.save(make_idea(tags=["llm"], created_at=days_ago(2)))
        await idea_repo.save(make_idea(tags=["crypto"], created_at=days_ago(12)))

        # Act
        response = await use_case.execute(GetTrendingRequest(period=TrendingPeriod.DAILY))

        # Assert
        assert response.period == TrendingPeriod.DAILY
        assert response.category is None
        assert [(t.tag, t.count) for t in response.topics.tags] == [
            ("agents", 1),
            ("llm", 1),
        ]
        assert [c.category for c in response.topics.categories] == [IdeaCategory.AI_ML]
        assert [item.idea_id for item in response.ideas] == [str(recent.id)]

    @pytest.mark.asyncio
    async def test_defaults_to_daily(self, unit_env):
        # Arrange
        use_case = GetTrendingUseCase(
            trending_calculator=await unit_env.get(TrendingWindowCalculator)
        )
        idea_repo = await unit_env.get(IdeaRepository)
        await idea_repo.save(make_idea(tags=["llm"], created_at=days_ago(0.5)))
        await idea_repo.save(make_idea(tags=["crypto"], created_at=days_ago(2)))

        # Act
        response = await use_case.execute(GetTrendingRequest())

        # Assert
        assert response.period == TrendingPeriod.DAILY
        assert [t.tag for t in response.topics.tags] == ["llm"]
        assert len(response.ideas) == 1
