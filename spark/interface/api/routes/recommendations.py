"""Recommendation and trending routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from spark.application.usecase.recommendation import (
    GetRecommendationsRequest,
    GetRecommendationsResponse,
    GetRecommendationsUseCase,
    GetTrendingRequest,
    GetTrendingResponse,
    GetTrendingUseCase,
)
from spark.domain.service import JWTService
from spark.domain.value import (
    DifficultyLevel,
    IdeaCategory,
    TimeCommitment,
    TrendingPeriod,
)
from spark.interface.api.auth import require_user_id

router = APIRouter(
    prefix="/recommendations", tags=["recommendations"], route_class=DishkaRoute
)


@router.get("/ideas", response_model=GetRecommendationsResponse)
async def get_recommendations(
    get_recommendations_use_case: FromDishka[GetRecommendationsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int | None = None,
    category: IdeaCategory | None = None,
    difficulty: DifficultyLevel | None = None,
    time_commitment: TimeCommitment | None = Query(
        default=None, alias="timeCommitment"
    ),
    auth_token: str | None = Cookie(default=None),
) -> GetRecommendationsResponse:
    """Personalized idea recommendations for the caller.

    Requires authentication. Filters replace the inferred criteria for
    their dimension.
    """
    user_id = require_user_id(jwt_service, auth_token, "get recommendations")

    request = GetRecommendationsRequest(
        user_id=user_id,
        limit=limit,
        category=category,
        difficulty=difficulty,
        time_commitment=time_commitment,
    )
    return await get_recommendations_use_case.execute(request)


@router.get("/trending", response_model=GetTrendingResponse)
async def get_trending(
    get_trending_use_case: FromDishka[GetTrendingUseCase],
    period: TrendingPeriod = TrendingPeriod.DAILY,
    category: IdeaCategory | None = None,
    limit: int | None = None,
) -> GetTrendingResponse:
    """Trending tags, categories and ideas for a time window."""
    request = GetTrendingRequest(period=period, category=category, limit=limit)
    return await get_trending_use_case.execute(request)
