"""initial_schema

Create the foundational schema for Spark:
- Users (karma is an incremental ledger, may go negative)
- Ideas (denormalized engagement counters)
- Comments (threaded, soft-deletable)
- Votes (UP/DOWN on ideas and comments, one per user and target)
- Bookmarks (one per user and idea)
- Activities (append-only activity log)
- User preferences (explicit recommendation preferences)

Revision ID: 3f2a9c61d0b4
Revises:
Create Date: 2026-10-19 10:12:44.503921

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2a9c61d0b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    "idea_category": (
        "WEB", "MOBILE", "AI_ML", "BLOCKCHAIN", "IOT", "GAME_DEV",
        "DATA_SCIENCE", "CYBERSECURITY", "DEVTOOLS", "FINTECH",
        "HEALTHTECH", "EDTECH", "SOCIAL", "ECOMMERCE", "PRODUCTIVITY", "OTHER",
    ),
    "difficulty_level": ("BEGINNER", "INTERMEDIATE", "ADVANCED", "EXPERT"),
    "time_commitment": ("QUICK", "SHORT", "MEDIUM", "LONG", "EXTENDED"),
    "idea_status": ("DRAFT", "PUBLISHED", "ARCHIVED"),
    "votable_type": ("idea", "comment"),
    "vote_type": ("UP", "DOWN"),
    "activity_type": (
        "IDEA_CREATED", "IDEA_VOTED", "COMMENT_VOTED", "BOOKMARK_ADDED",
    ),
}  # fmt: skip


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _id() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _text_array(name: str, length: int = 50) -> sa.Column:
    return sa.Column(
        name,
        postgresql.ARRAY(sa.String(length)),
        nullable=False,
        server_default="{}",
    )


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUMS.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id(),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        _text_array("skills"),
        sa.Column("karma_score", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    # ========================================================================
    # IDEAS table
    # ========================================================================
    op.create_table(
        "ideas",
        _id(),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_username", sa.String(50), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "category",
            _enum("idea_category"),
            nullable=False,
            server_default="OTHER",
        ),
        _text_array("tags"),
        _text_array("tech_stack"),
        _text_array("ai_tech_stack"),
        sa.Column("difficulty", _enum("difficulty_level"), nullable=True),
        sa.Column("time_commitment", _enum("time_commitment"), nullable=True),
        sa.Column(
            "status", _enum("idea_status"), nullable=False, server_default="DRAFT"
        ),
        sa.Column("vote_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("bookmark_count", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("bookmark_count >= 0", name="bookmark_count_non_negative"),
    )
    op.create_index("idx_ideas_author_id", "ideas", ["author_id"])
    op.create_index("idx_ideas_status_created_at", "ideas", ["status", "created_at"])
    op.create_index(
        "idx_ideas_vote_score",
        "ideas",
        [sa.text("vote_score DESC"), sa.text("created_at DESC")],
    )
    # GIN indexes for array overlap filters (tags, tech stacks)
    for column in ("tags", "tech_stack", "ai_tech_stack"):
        op.create_index(
            f"idx_ideas_{column}", "ideas", [column], postgresql_using="gin"
        )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        _id(),
        sa.Column("idea_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_username", sa.String(50), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("vote_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default="false"),
        _created_at(),
        sa.ForeignKeyConstraint(["idea_id"], ["ideas.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_comments_idea_id", "comments", ["idea_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("votable_type", _enum("votable_type"), nullable=False),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("vote_type", _enum("vote_type"), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        # One vote per user per target, the ledger relies on this
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_vote"
        ),
    )
    op.create_index(
        "idx_votes_user_id_created_at", "votes", ["user_id", "created_at"]
    )

    # ========================================================================
    # BOOKMARKS table
    # ========================================================================
    op.create_table(
        "bookmarks",
        _id(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("idea_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["idea_id"], ["ideas.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "idea_id", name="unique_bookmark"),
    )

    # ========================================================================
    # ACTIVITIES table (append-only)
    # ========================================================================
    op.create_table(
        "activities",
        _id(),
        sa.Column("type", _enum("activity_type"), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column(
            "payload",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_activities_user_id_created_at",
        "activities",
        ["user_id", sa.text("created_at DESC")],
    )

    # ========================================================================
    # USER_PREFERENCES table
    # ========================================================================
    op.create_table(
        "user_preferences",
        sa.Column("user_id", sa.UUID(), nullable=False),
        _text_array("preferred_categories", 32),
        _text_array("preferred_tech_stack"),
        _text_array("preferred_difficulty", 32),
        _text_array("preferred_time_commitment", 32),
        sa.Column(
            "enable_recommendations",
            sa.Boolean(),
            nullable=False,
            server_default="true",
        ),
        sa.Column(
            "enable_trending", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.Column(
            "recommendation_weight",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        _created_at("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("user_preferences")
    op.drop_table("activities")
    op.drop_table("bookmarks")
    op.drop_table("votes")
    op.drop_table("comments")
    op.drop_table("ideas")
    op.drop_table("users")

    # Drop ENUM types
    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")

    # Drop extensions (commented out to avoid issues with shared extensions)
    # op.execute("DROP EXTENSION IF EXISTS \"uuid-ossp\"")
