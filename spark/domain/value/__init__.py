"""Domain value objects for Spark."""

from spark.domain.value.identifiers import (
    ActivityId,
    BookmarkId,
    CommentId,
    IdeaId,
    UserId,
    VoteId,
)
from spark.domain.value.types import (
    ActivityType,
    DifficultyLevel,
    IdeaCategory,
    IdeaStatus,
    SortMode,
    TimeCommitment,
    TrendingPeriod,
    VotableType,
    VoteTarget,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "IdeaId",
    "CommentId",
    "VoteId",
    "BookmarkId",
    "ActivityId",
    # Types
    "ActivityType",
    "DifficultyLevel",
    "IdeaCategory",
    "IdeaStatus",
    "SortMode",
    "TimeCommitment",
    "TrendingPeriod",
    "VotableType",
    "VoteTarget",
    "VoteType",
]
