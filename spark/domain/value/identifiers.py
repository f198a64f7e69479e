"""Strongly typed identifiers for Spark domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
IdeaId = NewType("IdeaId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)
BookmarkId = NewType("BookmarkId", UUID)
ActivityId = NewType("ActivityId", UUID)
