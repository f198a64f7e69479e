"""Idea repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from spark.domain.model.idea import Idea
from spark.domain.value import (
    DifficultyLevel,
    IdeaCategory,
    IdeaId,
    SortMode,
    TimeCommitment,
    UserId,
)


class IdeaFilter(BaseModel):
    """Feed listing filters. Only published ideas are ever listed."""

    model_config = ConfigDict(frozen=True)

    category: Optional[IdeaCategory] = None
    difficulty: Optional[DifficultyLevel] = None
    time_commitment: Optional[TimeCommitment] = None
    tags: list[str] = Field(default_factory=list)  # any-of
    tech_stack: list[str] = Field(default_factory=list)  # any-of over both stacks
    search: Optional[str] = None  # case-insensitive, title or description


class CandidateFilter(BaseModel):
    """Recommendation candidate filter.

    Empty lists mean "no constraint" on that dimension.
    """

    model_config = ConfigDict(frozen=True)

    categories: list[IdeaCategory] = Field(default_factory=list)
    difficulties: list[DifficultyLevel] = Field(default_factory=list)
    time_commitments: list[TimeCommitment] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    exclude_author_id: Optional[UserId] = None
    exclude_ids: frozenset[IdeaId] = Field(default_factory=frozenset)


class IdeaRepository(ABC):
    """Repository for Idea aggregate.

    Defines the contract for idea persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, idea_id: IdeaId) -> Optional[Idea]:
        """Find an idea by ID.

        Args:
            idea_id: The idea's unique identifier

        Returns:
            The idea if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, idea_ids: Sequence[IdeaId]) -> List[Idea]:
        """Find several ideas at once.

        Args:
            idea_ids: Idea IDs to look up

        Returns:
            Ideas that exist, in the order of ``idea_ids``
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        filter: IdeaFilter,
        sort: SortMode = SortMode.HOT,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Idea]:
        """Find published ideas with filtering, ranking and pagination.

        Args:
            filter: Listing filters
            sort: Ranking mode
            limit: Maximum number of ideas to return
            offset: Number of ideas to skip

        Returns:
            List of ideas in ranking order
        """
        pass

    @abstractmethod
    async def count(self, filter: IdeaFilter) -> int:
        """Count published ideas matching the given filters.

        Args:
            filter: Listing filters

        Returns:
            Total number of ideas matching the criteria
        """
        pass

    @abstractmethod
    async def find_candidates(self, filter: CandidateFilter, limit: int) -> List[Idea]:
        """Find published recommendation candidates.

        Ordered by vote score desc, then created_at desc.

        Args:
            filter: Candidate filter
            limit: Maximum number of ideas to return

        Returns:
            List of candidate ideas
        """
        pass

    @abstractmethod
    async def find_published_since(
        self,
        cutoff: datetime,
        category: Optional[IdeaCategory] = None,
    ) -> List[Idea]:
        """Find published ideas created at or after a cutoff.

        Args:
            cutoff: Inclusive lower bound on created_at
            category: Only ideas in this category (None for all)

        Returns:
            Ideas in the window, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, idea: Idea) -> Idea:
        """Save an idea (create or update).

        Args:
            idea: The idea to save

        Returns:
            The saved idea
        """
        pass

    @abstractmethod
    async def increment_vote_score(self, idea_id: IdeaId, delta: int) -> Optional[int]:
        """Atomically add a signed delta to the idea's vote score.

        Uses SQL-level increment to avoid race conditions.

        Args:
            idea_id: The idea ID
            delta: Signed amount to add

        Returns:
            The new vote score, or None if the idea does not exist
        """
        pass

    @abstractmethod
    async def increment_view_count(self, idea_id: IdeaId) -> None:
        """Atomically increment the view count by 1.

        Args:
            idea_id: The idea ID
        """
        pass

    @abstractmethod
    async def increment_bookmark_count(
        self, idea_id: IdeaId, delta: int
    ) -> Optional[int]:
        """Atomically add a signed delta to the bookmark count (minimum 0).

        Args:
            idea_id: The idea ID
            delta: +1 or -1

        Returns:
            The new bookmark count, or None if the idea does not exist
        """
        pass

