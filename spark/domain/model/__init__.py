"""Domain model entities for Spark."""

from spark.domain.model.activity import Activity
from spark.domain.model.bookmark import Bookmark, BookmarkToggle
from spark.domain.model.comment import Comment
from spark.domain.model.idea import Idea, IdeaWithAuthor
from spark.domain.model.preferences import UserPreferences
from spark.domain.model.recommendation import (
    RecommendationCriteria,
    RecommendationFilters,
    RecommendationResult,
    ScoreBreakdown,
    ScoredIdea,
)
from spark.domain.model.trending import CategoryCount, TagCount, TrendingSnapshot
from spark.domain.model.user import User
from spark.domain.model.vote import Vote, VoteOutcome

__all__ = [
    "Activity",
    "Bookmark",
    "BookmarkToggle",
    "CategoryCount",
    "Comment",
    "Idea",
    "IdeaWithAuthor",
    "RecommendationCriteria",
    "RecommendationFilters",
    "RecommendationResult",
    "ScoreBreakdown",
    "ScoredIdea",
    "TagCount",
    "TrendingSnapshot",
    "User",
    "UserPreferences",
    "Vote",
    "VoteOutcome",
]
