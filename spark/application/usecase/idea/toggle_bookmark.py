"""Toggle bookmark use case."""

from uuid import UUID

from pydantic import BaseModel

from spark.domain.service import IdeaService
from spark.domain.value import IdeaId, UserId


class ToggleBookmarkRequest(BaseModel):
    """Toggle bookmark request."""

    idea_id: str
    user_id: str


class ToggleBookmarkResponse(BaseModel):
    """Toggle bookmark response."""

    idea_id: str
    bookmarked: bool
    bookmark_count: int
    message: str


class ToggleBookmarkUseCase:
    """Use case for bookmarking an idea or removing the bookmark."""

    def __init__(self, idea_service: IdeaService) -> None:
        """Initialize toggle bookmark use case.

        Args:
            idea_service: Idea domain service
        """
        self.idea_service = idea_service

    async def execute(self, request: ToggleBookmarkRequest) -> ToggleBookmarkResponse:
        """Execute toggle bookmark flow.

        Args:
            request: Toggle bookmark request

        Returns:
            Resulting bookmark state and count

        Raises:
            NotFoundError: If the idea does not exist
        """
        toggle = await self.idea_service.toggle_bookmark(
            UserId(UUID(request.user_id)), IdeaId(UUID(request.idea_id))
        )

        return ToggleBookmarkResponse(
            idea_id=str(toggle.idea_id),
            bookmarked=toggle.bookmarked,
            bookmark_count=toggle.bookmark_count,
            message="Idea bookmarked" if toggle.bookmarked else "Bookmark removed",
        )
