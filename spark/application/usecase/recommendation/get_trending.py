"""Get trending use case."""

from typing import Optional

from pydantic import BaseModel

from spark.domain.model import CategoryCount, TagCount
from spark.domain.model.common import utc_now
from spark.domain.service import TrendingWindowCalculator
from spark.domain.value import IdeaCategory, TrendingPeriod

from spark.application.usecase.idea.list_ideas import IdeaListItem


class TrendingTopics(BaseModel):
    """Most frequent tags and categories of a window."""

    tags: list[TagCount]
    categories: list[CategoryCount]


class GetTrendingRequest(BaseModel):
    """Get trending request."""

    period: TrendingPeriod = TrendingPeriod.DAILY
    category: Optional[IdeaCategory] = None
    limit: Optional[int] = None  # Range is checked by the calculator


class GetTrendingResponse(BaseModel):
    """Get trending response."""

    topics: TrendingTopics
    ideas: list[IdeaListItem]
    period: TrendingPeriod
    category: Optional[IdeaCategory]


class GetTrendingUseCase:
    """Use case for trending topics and ideas."""

    def __init__(self, trending_calculator: TrendingWindowCalculator) -> None:
        """Initialize get trending use case.

        Args:
            trending_calculator: Trending window domain service
        """
        self.trending_calculator = trending_calculator

    async def execute(self, request: GetTrendingRequest) -> GetTrendingResponse:
        """Execute get trending flow.

        Args:
            request: Get trending request

        Returns:
            Top tags, categories and ideas of the window

        Raises:
            InvalidArgumentError: If the limit is out of range
            ServiceUnavailableError: If storage is unreachable
        """
        # Same window end for the snapshot and the idea list
        now = utc_now()
        ideas = await self.trending_calculator.trending_ideas(
            request.period, category=request.category, limit=request.limit, now=now
        )
        snapshot = await self.trending_calculator.compute(
            request.period, category=request.category, now=now
        )

        return GetTrendingResponse(
            topics=TrendingTopics(
                tags=snapshot.tag_counts, categories=snapshot.category_counts
            ),
            ideas=[IdeaListItem.from_idea(idea) for idea in ideas],
            period=request.period,
            category=request.category,
        )
