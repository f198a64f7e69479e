"""SQLAlchemy table definitions for Spark.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

from spark.domain.value import (
    ActivityType,
    DifficultyLevel,
    IdeaCategory,
    IdeaStatus,
    TimeCommitment,
    VotableType,
    VoteType,
)

# Metadata object for all tables
metadata = MetaData()


def _values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(50), nullable=False, unique=True),
    Column("email", String(255), nullable=True),
    Column("bio", Text, nullable=True),
    Column("skills", ARRAY(String(50)), nullable=False, server_default="{}"),
    # Incremental ledger maintained by votes, may go negative
    Column("karma_score", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# IDEAS TABLE
# ============================================================================
ideas_table = Table(
    "ideas",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_username", String(50), nullable=False),  # Denormalized from users
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column(
        "category",
        Enum(*_values(IdeaCategory), name="idea_category", create_type=False),
        nullable=False,
        server_default=IdeaCategory.OTHER.value,
    ),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("tech_stack", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("ai_tech_stack", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column(
        "difficulty",
        Enum(*_values(DifficultyLevel), name="difficulty_level", create_type=False),
        nullable=True,
    ),
    Column(
        "time_commitment",
        Enum(*_values(TimeCommitment), name="time_commitment", create_type=False),
        nullable=True,
    ),
    Column(
        "status",
        Enum(*_values(IdeaStatus), name="idea_status", create_type=False),
        nullable=False,
        server_default=IdeaStatus.DRAFT.value,
    ),
    # Aggregate counters, only changed through atomic increments
    Column("vote_score", Integer, nullable=False, server_default="0"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("bookmark_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("bookmark_count >= 0", name="bookmark_count_non_negative"),
)

Index("idx_ideas_author_id", ideas_table.c.author_id)
Index("idx_ideas_status_created_at", ideas_table.c.status, ideas_table.c.created_at)
Index(
    "idx_ideas_vote_score",
    ideas_table.c.vote_score.desc(),
    ideas_table.c.created_at.desc(),
)
# Note: GIN indexes for the array columns are created in migration, not here

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("idea_id", UUID, ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_username", String(50), nullable=False),  # Denormalized from users
    Column("text", Text, nullable=False),
    Column("vote_score", Integer, nullable=False, server_default="0"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_idea_id", comments_table.c.idea_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "votable_type",
        Enum(*_values(VotableType), name="votable_type", create_type=False),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column(
        "vote_type",
        Enum(*_values(VoteType), name="vote_type", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

Index("idx_votes_user_id_created_at", votes_table.c.user_id, votes_table.c.created_at)

# ============================================================================
# BOOKMARKS TABLE
# ============================================================================
bookmarks_table = Table(
    "bookmarks",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("idea_id", UUID, ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "idea_id", name="unique_bookmark"),
)

# ============================================================================
# ACTIVITIES TABLE (append-only)
# ============================================================================
activities_table = Table(
    "activities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "type",
        Enum(*_values(ActivityType), name="activity_type", create_type=False),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("target_id", UUID, nullable=False),
    Column("payload", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_activities_user_id_created_at",
    activities_table.c.user_id,
    activities_table.c.created_at.desc(),
)

# ============================================================================
# USER PREFERENCES TABLE
# ============================================================================
user_preferences_table = Table(
    "user_preferences",
    metadata,
    Column(
        "user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "preferred_categories", ARRAY(String(32)), nullable=False, server_default="{}"
    ),
    Column(
        "preferred_tech_stack", ARRAY(String(50)), nullable=False, server_default="{}"
    ),
    Column(
        "preferred_difficulty", ARRAY(String(32)), nullable=False, server_default="{}"
    ),
    Column(
        "preferred_time_commitment",
        ARRAY(String(32)),
        nullable=False,
        server_default="{}",
    ),
    Column("enable_recommendations", Boolean, nullable=False, server_default="true"),
    Column("enable_trending", Boolean, nullable=False, server_default="true"),
    Column("recommendation_weight", JSONB, nullable=False, server_default="{}"),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
