"""In-memory bookmark repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from spark.domain.model.bookmark import Bookmark
from spark.domain.repository.bookmark import BookmarkRepository
from spark.domain.value import BookmarkId, IdeaId, UserId


class InMemoryBookmarkRepository(BookmarkRepository):
    """In-memory implementation of BookmarkRepository for testing."""

    def __init__(self) -> None:
        self._bookmarks: dict[BookmarkId, Bookmark] = {}

    async def find_by_user_and_idea(
        self, user_id: UserId, idea_id: IdeaId
    ) -> Optional[Bookmark]:
        for bookmark in self._bookmarks.values():
            if bookmark.user_id == user_id and bookmark.idea_id == idea_id:
                return bookmark
        return None

    async def find_idea_ids_by_user(self, user_id: UserId) -> list[IdeaId]:
        return [b.idea_id for b in self._bookmarks.values() if b.user_id == user_id]

    async def find_by_user_and_ideas(
        self, user_id: UserId, idea_ids: Sequence[IdeaId]
    ) -> list[Bookmark]:
        wanted = set(idea_ids)
        return [
            b
            for b in self._bookmarks.values()
            if b.user_id == user_id and b.idea_id in wanted
        ]

    async def save(self, bookmark: Bookmark) -> Bookmark:
        """Save a bookmark.

        Raises:
            IntegrityError: If the user already bookmarked the idea
        """
        for existing in self._bookmarks.values():
            if (
                existing.user_id == bookmark.user_id
                and existing.idea_id == bookmark.idea_id
            ):
                raise IntegrityError(
                    "Duplicate bookmark", None, Exception("unique_bookmark")
                )
        self._bookmarks[bookmark.id] = bookmark
        return bookmark

    async def delete(self, bookmark_id: BookmarkId) -> bool:
        return self._bookmarks.pop(bookmark_id, None) is not None
