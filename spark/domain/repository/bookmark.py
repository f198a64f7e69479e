"""Bookmark repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from spark.domain.model.bookmark import Bookmark
from spark.domain.value import BookmarkId, IdeaId, UserId


class BookmarkRepository(ABC):
    """Repository for Bookmark entity."""

    @abstractmethod
    async def find_by_user_and_idea(
        self, user_id: UserId, idea_id: IdeaId
    ) -> Optional[Bookmark]:
        """Find a user's bookmark on an idea.

        Args:
            user_id: The user's ID
            idea_id: The idea's ID

        Returns:
            The bookmark if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_idea_ids_by_user(self, user_id: UserId) -> List[IdeaId]:
        """List the ids of every idea a user has bookmarked.

        Args:
            user_id: The user's ID

        Returns:
            Bookmarked idea IDs
        """
        pass

    @abstractmethod
    async def find_by_user_and_ideas(
        self, user_id: UserId, idea_ids: Sequence[IdeaId]
    ) -> List[Bookmark]:
        """Find a user's bookmarks among several ideas (batch query).

        Args:
            user_id: The user's ID
            idea_ids: Idea IDs to check

        Returns:
            Bookmarks the user holds on those ideas
        """
        pass

    @abstractmethod
    async def save(self, bookmark: Bookmark) -> Bookmark:
        """Save a new bookmark.

        Args:
            bookmark: The bookmark to save

        Returns:
            The saved bookmark

        Raises:
            IntegrityError: If the user already bookmarked this idea
        """
        pass

    @abstractmethod
    async def delete(self, bookmark_id: BookmarkId) -> bool:
        """Delete a bookmark.

        Args:
            bookmark_id: The bookmark ID

        Returns:
            True if a bookmark was deleted, False otherwise
        """
        pass
