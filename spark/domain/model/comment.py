"""Comment entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from spark.domain.model.common import DomainModel, utc_now
from spark.domain.value import CommentId, IdeaId, UserId


class Comment(DomainModel):
    """Comment on an idea, or a reply to another comment.

    Deleted comments are kept (soft delete) so threads stay intact, but they
    can no longer be voted on.
    """

    id: CommentId
    idea_id: IdeaId
    author_id: UserId
    author_username: str
    text: str = Field(min_length=1, max_length=5000)
    parent_id: Optional[CommentId] = None
    vote_score: int = 0
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=utc_now)
