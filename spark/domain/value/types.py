"""Domain value objects for Spark.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from datetime import timedelta
from enum import Enum
from uuid import UUID

from spark.domain.value.common import ValueObject
from spark.domain.value.identifiers import CommentId, IdeaId


class VoteType(str, Enum):
    """Polarity of a vote."""

    UP = "UP"
    DOWN = "DOWN"

    @property
    def sign(self) -> int:
        """Contribution of this polarity to a vote score (+1 or -1)."""
        return 1 if self is VoteType.UP else -1


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    IDEA = "idea"
    COMMENT = "comment"


class IdeaCategory(str, Enum):
    """Category an idea is filed under."""

    WEB = "WEB"
    MOBILE = "MOBILE"
    AI_ML = "AI_ML"
    BLOCKCHAIN = "BLOCKCHAIN"
    IOT = "IOT"
    GAME_DEV = "GAME_DEV"
    DATA_SCIENCE = "DATA_SCIENCE"
    CYBERSECURITY = "CYBERSECURITY"
    DEVTOOLS = "DEVTOOLS"
    FINTECH = "FINTECH"
    HEALTHTECH = "HEALTHTECH"
    EDTECH = "EDTECH"
    SOCIAL = "SOCIAL"
    ECOMMERCE = "ECOMMERCE"
    PRODUCTIVITY = "PRODUCTIVITY"
    OTHER = "OTHER"


class DifficultyLevel(str, Enum):
    """How hard an idea is to build."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class TimeCommitment(str, Enum):
    """Rough effort needed to build an idea."""

    QUICK = "QUICK"
    SHORT = "SHORT"
    MEDIUM = "MEDIUM"
    LONG = "LONG"
    EXTENDED = "EXTENDED"


class IdeaStatus(str, Enum):
    """Publication status of an idea."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class SortMode(str, Enum):
    """Feed ordering policies."""

    NEWEST = "newest"
    OLDEST = "oldest"
    POPULAR = "popular"
    TRENDING = "trending"
    HOT = "hot"


class TrendingPeriod(str, Enum):
    """Lookback windows for trending computations."""

    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"

    @property
    def lookback(self) -> timedelta:
        """Fixed duration subtracted from "now" to form the window cutoff."""
        return _LOOKBACKS[self]


_LOOKBACKS = {
    TrendingPeriod.HOURLY: timedelta(hours=1),
    TrendingPeriod.DAILY: timedelta(hours=24),
    TrendingPeriod.WEEKLY: timedelta(days=7),
    TrendingPeriod.MONTHLY: timedelta(days=30),
}


class ActivityType(str, Enum):
    """Kinds of entries in the append-only activity log."""

    IDEA_CREATED = "IDEA_CREATED"
    IDEA_VOTED = "IDEA_VOTED"
    COMMENT_VOTED = "COMMENT_VOTED"
    BOOKMARK_ADDED = "BOOKMARK_ADDED"


class VoteTarget(ValueObject):
    """Tagged reference to something a user can vote on.

    Ideas and comments share one vote table, so a target is always the pair
    of its type and its id.
    """

    votable_type: VotableType
    votable_id: UUID

    @classmethod
    def idea(cls, idea_id: IdeaId) -> "VoteTarget":
        """Build a target pointing at an idea."""
        return cls(votable_type=VotableType.IDEA, votable_id=idea_id)

    @classmethod
    def comment(cls, comment_id: CommentId) -> "VoteTarget":
        """Build a target pointing at a comment."""
        return cls(votable_type=VotableType.COMMENT, votable_id=comment_id)

    def __str__(self) -> str:
        return f"{self.votable_type.value}:{self.votable_id}"
