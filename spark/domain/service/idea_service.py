"""Idea domain service."""

from typing import Optional, Sequence
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from spark.domain.error import NotFoundError
from spark.domain.model import Activity, Bookmark, BookmarkToggle, Idea
from spark.domain.repository import (
    ActivityRepository,
    BookmarkRepository,
    IdeaFilter,
    IdeaRepository,
    VoteRepository,
)
from spark.domain.value import (
    ActivityId,
    ActivityType,
    BookmarkId,
    IdeaId,
    IdeaStatus,
    SortMode,
    UserId,
    VotableType,
    VoteType,
)

from .base import Service


class IdeaService(Service):
    """Domain service for idea reads, view counting and bookmarks."""

    def __init__(
        self,
        idea_repository: IdeaRepository,
        vote_repository: VoteRepository,
        bookmark_repository: BookmarkRepository,
        activity_repository: ActivityRepository,
    ) -> None:
        """Initialize idea service.

        Args:
            idea_repository: Idea repository
            vote_repository: Vote repository
            bookmark_repository: Bookmark repository
            activity_repository: Activity log repository
        """
        self.idea_repository = idea_repository
        self.vote_repository = vote_repository
        self.bookmark_repository = bookmark_repository
        self.activity_repository = activity_repository

    async def get_idea(
        self, idea_id: IdeaId, viewer_id: Optional[UserId] = None
    ) -> Idea:
        """Get an idea, counting the view.

        Views are counted for authenticated viewers other than the author.
        Unpublished ideas are only visible to their author.

        Args:
            idea_id: Idea ID
            viewer_id: Authenticated viewer, if any

        Returns:
            The idea, with the counted view reflected

        Raises:
            NotFoundError: If the idea does not exist or is hidden from the viewer
        """
        with logfire.span("idea_service.get_idea", idea_id=str(idea_id)):
            idea = await self.idea_repository.find_by_id(idea_id)
            if not idea:
                logfire.warn("Idea not found", idea_id=str(idea_id))
                raise NotFoundError("Idea", str(idea_id))

            is_author = viewer_id is not None and viewer_id == idea.author_id
            if idea.status != IdeaStatus.PUBLISHED and not is_author:
                logfire.warn("Unpublished idea requested", idea_id=str(idea_id))
                raise NotFoundError("Idea", str(idea_id))

            if viewer_id is not None and not is_author:
                await self.idea_repository.increment_view_count(idea_id)
                idea = idea.model_copy(update={"view_count": idea.view_count + 1})

            return idea

    async def list_ideas(
        self,
        filter: IdeaFilter,
        sort: SortMode = SortMode.HOT,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Idea], int]:
        """List published ideas for the feed.

        Args:
            filter: Listing filters
            sort: Ranking mode
            limit: Page size
            offset: Number of ideas to skip

        Returns:
            The page of ideas in ranking order and the total match count
        """
        with logfire.span(
            "idea_service.list_ideas", sort=sort.value, limit=limit, offset=offset
        ):
            ideas = await self.idea_repository.find_all(
                filter, sort=sort, limit=limit, offset=offset
            )
            total = await self.idea_repository.count(filter)
            logfire.info("Ideas listed", count=len(ideas), total=total)
            return ideas, total

    async def get_user_votes(
        self, user_id: UserId, idea_ids: Sequence[IdeaId]
    ) -> dict[IdeaId, VoteType]:
        """Map each idea the user voted on to the polarity they hold.

        Args:
            user_id: User ID
            idea_ids: Ideas to check

        Returns:
            Polarity per voted idea. Ideas without a vote are absent.
        """
        if not idea_ids:
            return {}

        votes = await self.vote_repository.find_by_user_and_targets(
            user_id, VotableType.IDEA, idea_ids
        )
        return {IdeaId(vote.votable_id): vote.vote_type for vote in votes}

    async def get_bookmarked(
        self, user_id: UserId, idea_ids: Sequence[IdeaId]
    ) -> set[IdeaId]:
        """Subset of ``idea_ids`` the user has bookmarked."""
        if not idea_ids:
            return set()

        bookmarks = await self.bookmark_repository.find_by_user_and_ideas(
            user_id, idea_ids
        )
        return {bookmark.idea_id for bookmark in bookmarks}

    async def toggle_bookmark(self, user_id: UserId, idea_id: IdeaId) -> BookmarkToggle:
        """Bookmark an idea, or remove the bookmark if it exists.

        Args:
            user_id: User ID
            idea_id: Idea ID

        Returns:
            Whether the idea is now bookmarked and its bookmark count

        Raises:
            NotFoundError: If the idea does not exist
        """
        with logfire.span(
            "idea_service.toggle_bookmark", user_id=str(user_id), idea_id=str(idea_id)
        ):
            idea = await self.idea_repository.find_by_id(idea_id)
            if not idea:
                logfire.warn("Bookmark on non-existent idea", idea_id=str(idea_id))
                raise NotFoundError("Idea", str(idea_id))

            existing = await self.bookmark_repository.find_by_user_and_idea(
                user_id, idea_id
            )
            if existing:
                deleted = await self.bookmark_repository.delete(existing.id)
                count = idea.bookmark_count
                if deleted:
                    count = await self._increment_count(idea_id, -1)
                logfire.info("Bookmark removed", user_id=str(user_id), idea_id=str(idea_id))
                return BookmarkToggle(
                    idea_id=idea_id, bookmarked=False, bookmark_count=count
                )

            try:
                await self.bookmark_repository.save(
                    Bookmark(id=BookmarkId(uuid4()), user_id=user_id, idea_id=idea_id)
                )
            except IntegrityError:
                # A concurrent request bookmarked it first and already counted it
                logfire.warn(
                    "Duplicate bookmark attempt",
                    user_id=str(user_id),
                    idea_id=str(idea_id),
                )
                return BookmarkToggle(
                    idea_id=idea_id, bookmarked=True, bookmark_count=idea.bookmark_count
                )

            count = await self._increment_count(idea_id, 1)
            await self.activity_repository.append(
                Activity(
                    id=ActivityId(uuid4()),
                    type=ActivityType.BOOKMARK_ADDED,
                    user_id=user_id,
                    target_id=idea_id,
                )
            )
            logfire.info("Bookmark added", user_id=str(user_id), idea_id=str(idea_id))
            return BookmarkToggle(idea_id=idea_id, bookmarked=True, bookmark_count=count)

    async def _increment_count(self, idea_id: IdeaId, delta: int) -> int:
        count = await self.idea_repository.increment_bookmark_count(idea_id, delta)
        if count is None:
            raise NotFoundError("Idea", str(idea_id))
        return count
