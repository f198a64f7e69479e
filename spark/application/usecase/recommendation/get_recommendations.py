"""Get recommendations use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from spark.domain.model import RecommendationCriteria, RecommendationFilters
from spark.domain.service import RecommendationEngine
from spark.domain.value import DifficultyLevel, IdeaCategory, TimeCommitment, UserId

from spark.application.usecase.idea.list_ideas import IdeaListItem


class RecommendedIdea(IdeaListItem):
    """Idea with its personalized score."""

    recommendation_score: float
    author_karma: int


class GetRecommendationsRequest(BaseModel):
    """Get recommendations request."""

    user_id: str
    limit: Optional[int] = None  # Range is checked by the engine
    category: Optional[IdeaCategory] = None
    difficulty: Optional[DifficultyLevel] = None
    time_commitment: Optional[TimeCommitment] = None


class GetRecommendationsResponse(BaseModel):
    """Get recommendations response."""

    recommendations: list[RecommendedIdea]
    criteria: RecommendationCriteria
    total: int


class GetRecommendationsUseCase:
    """Use case for personalized idea recommendations."""

    def __init__(self, recommendation_engine: RecommendationEngine) -> None:
        """Initialize get recommendations use case.

        Args:
            recommendation_engine: Recommendation domain service
        """
        self.recommendation_engine = recommendation_engine

    async def execute(
        self, request: GetRecommendationsRequest
    ) -> GetRecommendationsResponse:
        """Execute get recommendations flow.

        Args:
            request: Get recommendations request

        Returns:
            Scored recommendations and the criteria that produced them

        Raises:
            NotFoundError: If the user does not exist
            InvalidArgumentError: If the limit is out of range
            ServiceUnavailableError: If storage is unreachable
        """
        result = await self.recommendation_engine.recommend(
            UserId(UUID(request.user_id)),
            filters=RecommendationFilters(
                category=request.category,
                difficulty=request.difficulty,
                time_commitment=request.time_commitment,
            ),
            limit=request.limit,
        )

        return GetRecommendationsResponse(
            recommendations=[
                RecommendedIdea.from_idea(
                    scored.idea,
                    recommendation_score=round(scored.score, 2),
                    author_karma=scored.author_karma,
                )
                for scored in result.recommendations
            ],
            criteria=result.criteria,
            total=result.total,
        )
