"""Idea use cases."""

from .get_idea import GetIdeaRequest, GetIdeaResponse, GetIdeaUseCase, IdeaDetail
from .list_ideas import (
    IdeaListItem,
    ListIdeasRequest,
    ListIdeasResponse,
    ListIdeasUseCase,
    Pagination,
)
from .toggle_bookmark import (
    ToggleBookmarkRequest,
    ToggleBookmarkResponse,
    ToggleBookmarkUseCase,
)

__all__ = [
    "GetIdeaRequest",
    "GetIdeaResponse",
    "GetIdeaUseCase",
    "IdeaDetail",
    "IdeaListItem",
    "ListIdeasRequest",
    "ListIdeasResponse",
    "ListIdeasUseCase",
    "Pagination",
    "ToggleBookmarkRequest",
    "ToggleBookmarkResponse",
    "ToggleBookmarkUseCase",
]
