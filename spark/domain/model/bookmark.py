"""Bookmark entity."""

from datetime import datetime

from pydantic import Field

from spark.domain.model.common import DomainModel, utc_now
from spark.domain.value import BookmarkId, IdeaId, UserId


class Bookmark(DomainModel):
    """A user's saved idea. At most one per (user, idea)."""

    id: BookmarkId
    user_id: UserId
    idea_id: IdeaId
    created_at: datetime = Field(default_factory=utc_now)


class BookmarkToggle(DomainModel):
    """Result of toggling a bookmark."""

    idea_id: IdeaId
    bookmarked: bool
    bookmark_count: int
