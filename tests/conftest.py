"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

from spark.domain.model import Comment, Idea, User
from spark.domain.model.common import utc_now
from spark.domain.value import CommentId, IdeaCategory, IdeaId, UserId


def make_user(**overrides: Any) -> User:
    """Build a user with sensible defaults for tests."""
    data: dict[str, Any] = {
        "id": UserId(uuid4()),
        "username": f"user-{uuid4().hex[:8]}",
        "email": None,
        "skills": [],
        "karma_score": 0,
    }
    data.update(overrides)
    return User(**data)


def make_idea(author: User | None = None, **overrides: Any) -> Idea:
    """Build a published idea.

    Args:
        author: Author of the idea (a fresh user if omitted)
        **overrides: Field values to override

    Returns:
        Idea domain model
    """
    author = author or make_user()
    data: dict[str, Any] = {
        "id": IdeaId(uuid4()),
        "author_id": author.id,
        "author_username": author.username,
        "title": "A test idea",
        "description": "Something worth building",
        "category": IdeaCategory.WEB,
    }
    data.update(overrides)
    return Idea(**data)


def make_comment(idea: Idea, author: User | None = None, **overrides: Any) -> Comment:
    """Build a comment on an idea."""
    author = author or make_user()
    data: dict[str, Any] = {
        "id": CommentId(uuid4()),
        "idea_id": idea.id,
        "author_id": author.id,
        "author_username": author.username,
        "text": "Nice idea",
    }
    data.update(overrides)
    return Comment(**data)


def days_ago(days: float, now: datetime | None = None) -> datetime:
    """Timestamp ``days`` before ``now`` (defaults to the current time)."""
    return (now or utc_now()) - timedelta(days=days)
