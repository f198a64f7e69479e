"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from spark.domain.model import (
    Activity,
    Bookmark,
    Comment,
    Idea,
    User,
    UserPreferences,
    Vote,
)
from spark.domain.value import (
    ActivityId,
    ActivityType,
    BookmarkId,
    CommentId,
    DifficultyLevel,
    IdeaCategory,
    IdeaId,
    IdeaStatus,
    TimeCommitment,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    """asyncpg returns UUIDs, other drivers may return strings."""
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        email=row.get("email"),
        bio=row.get("bio"),
        skills=list(row.get("skills") or []),
        karma_score=row["karma_score"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_idea(row: Dict[str, Any]) -> Idea:
    """Convert database row to Idea domain model.

    Args:
        row: Database row as dict

    Returns:
        Idea domain model
    """
    return Idea(
        id=IdeaId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_username=row["author_username"],
        title=row["title"],
        description=row["description"],
        category=IdeaCategory(row["category"]),
        tags=list(row.get("tags") or []),
        tech_stack=list(row.get("tech_stack") or []),
        ai_tech_stack=list(row.get("ai_tech_stack") or []),
        difficulty=DifficultyLevel(row["difficulty"]) if row.get("difficulty") else None,
        time_commitment=TimeCommitment(row["time_commitment"])
        if row.get("time_commitment")
        else None,
        status=IdeaStatus(row["status"]),
        vote_score=row["vote_score"],
        view_count=row["view_count"],
        comment_count=row["comment_count"],
        bookmark_count=row["bookmark_count"],
        created_at=row["created_at"],
        published_at=row.get("published_at"),
    )


def idea_to_dict(idea: Idea) -> Dict[str, Any]:
    """Convert Idea domain model to database dict.

    Enums are stored by value.
    """
    data = idea.model_dump()
    data["category"] = idea.category.value
    data["status"] = idea.status.value
    data["difficulty"] = idea.difficulty.value if idea.difficulty else None
    data["time_commitment"] = (
        idea.time_commitment.value if idea.time_commitment else None
    )
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        idea_id=IdeaId(_uuid(row["idea_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_username=row["author_username"],
        text=row["text"],
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        vote_score=row["vote_score"],
        is_deleted=row["is_deleted"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "vote_type": vote.vote_type.value,
        "created_at": vote.created_at,
    }


def row_to_bookmark(row: Dict[str, Any]) -> Bookmark:
    """Convert database row to Bookmark domain model."""
    return Bookmark(
        id=BookmarkId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        idea_id=IdeaId(_uuid(row["idea_id"])),
        created_at=row["created_at"],
    )


def row_to_activity(row: Dict[str, Any]) -> Activity:
    """Convert database row to Activity domain model."""
    return Activity(
        id=ActivityId(_uuid(row["id"])),
        type=ActivityType(row["type"]),
        user_id=UserId(_uuid(row["user_id"])),
        target_id=_uuid(row["target_id"]),
        payload=dict(row.get("payload") or {}),
        created_at=row["created_at"],
    )


def activity_to_dict(activity: Activity) -> Dict[str, Any]:
    """Convert Activity domain model to database dict."""
    return {
        "id": activity.id,
        "type": activity.type.value,
        "user_id": activity.user_id,
        "target_id": activity.target_id,
        "payload": activity.payload,
        "created_at": activity.created_at,
    }


def row_to_preferences(row: Dict[str, Any]) -> UserPreferences:
    """Convert database row to UserPreferences domain model.

    Args:
        row: Database row as dict

    Returns:
        UserPreferences domain model
    """
    return UserPreferences(
        user_id=UserId(_uuid(row["user_id"])),
        preferred_categories=[
            IdeaCategory(value) for value in row.get("preferred_categories") or []
        ],
        preferred_tech_stack=list(row.get("preferred_tech_stack") or []),
        preferred_difficulty=[
            DifficultyLevel(value) for value in row.get("preferred_difficulty") or []
        ],
        preferred_time_commitment=[
            TimeCommitment(value)
            for value in row.get("preferred_time_commitment") or []
        ],
        enable_recommendations=row["enable_recommendations"],
        enable_trending=row["enable_trending"],
        recommendation_weight=dict(row.get("recommendation_weight") or {}),
        updated_at=row["updated_at"],
    )


def preferences_to_dict(preferences: UserPreferences) -> Dict[str, Any]:
    """Convert UserPreferences domain model to database dict.

    Enum lists are stored as their string values.
    """
    return {
        "user_id": preferences.user_id,
        "preferred_categories": [c.value for c in preferences.preferred_categories],
        "preferred_tech_stack": list(preferences.preferred_tech_stack),
        "preferred_difficulty": [d.value for d in preferences.preferred_difficulty],
        "preferred_time_commitment": [
            t.value for t in preferences.preferred_time_commitment
        ],
        "enable_recommendations": preferences.enable_recommendations,
        "enable_trending": preferences.enable_trending,
        "recommendation_weight": dict(preferences.recommendation_weight),
        "updated_at": preferences.updated_at,
    }
