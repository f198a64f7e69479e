"""Recommendation and trending use cases."""

from .get_recommendations import (
    GetRecommendationsRequest,
    GetRecommendationsResponse,
    GetRecommendationsUseCase,
    RecommendedIdea,
)
from .get_trending import (
    GetTrendingRequest,
    GetTrendingResponse,
    GetTrendingUseCase,
    TrendingTopics,
)

__all__ = [
    "GetRecommendationsRequest",
    "GetRecommendationsResponse",
    "GetRecommendationsUseCase",
    "RecommendedIdea",
    "GetTrendingRequest",
    "GetTrendingResponse",
    "GetTrendingUseCase",
    "TrendingTopics",
]
