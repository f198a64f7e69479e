"""Get idea use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from spark.domain.service import IdeaService
from spark.domain.value import IdeaId, UserId

from .list_ideas import IdeaListItem


class GetIdeaRequest(BaseModel):
    """Get idea request."""

    idea_id: str
    user_id: Optional[str] = None  # Current user ID (if authenticated)


class IdeaDetail(IdeaListItem):
    """Idea detail with the caller's bookmark state."""

    status: str
    is_bookmarked: bool = False


class GetIdeaResponse(BaseModel):
    """Get idea response."""

    idea: IdeaDetail


class GetIdeaUseCase:
    """Use case for viewing a single idea."""

    def __init__(self, idea_service: IdeaService) -> None:
        """Initialize get idea use case.

        Args:
            idea_service: Idea domain service
        """
        self.idea_service = idea_service

    async def execute(self, request: GetIdeaRequest) -> GetIdeaResponse:
        """Execute get idea flow.

        Authenticated viewers other than the author count as a view.

        Args:
            request: Get idea request

        Returns:
            The idea with the caller's vote and bookmark state

        Raises:
            NotFoundError: If the idea does not exist or is not visible
        """
        idea_id = IdeaId(UUID(request.idea_id))
        viewer_id = UserId(UUID(request.user_id)) if request.user_id else None

        idea = await self.idea_service.get_idea(idea_id, viewer_id=viewer_id)

        user_vote = None
        is_bookmarked = False
        if viewer_id:
            votes = await self.idea_service.get_user_votes(viewer_id, [idea_id])
            user_vote = votes.get(idea_id)
            bookmarked = await self.idea_service.get_bookmarked(viewer_id, [idea_id])
            is_bookmarked = idea_id in bookmarked

        return GetIdeaResponse(
            idea=IdeaDetail.from_idea(
                idea,
                user_vote=user_vote,
                status=idea.status.value,
                is_bookmarked=is_bookmarked,
            )
        )
