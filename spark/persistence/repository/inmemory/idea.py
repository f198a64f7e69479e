"""In-memory idea repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from spark.domain.model.common import as_utc
from spark.domain.model.idea import Idea
from spark.domain.repository.idea import CandidateFilter, IdeaFilter, IdeaRepository
from spark.domain.service.ranking import ranking_key, sort_ideas
from spark.domain.value import IdeaCategory, IdeaId, IdeaStatus, SortMode


def _matches_listing(idea: Idea, filter: IdeaFilter) -> bool:
    if idea.status != IdeaStatus.PUBLISHED:
        return False
    if filter.category and idea.category != filter.category:
        return False
    if filter.difficulty and idea.difficulty != filter.difficulty:
        return False
    if filter.time_commitment and idea.time_commitment != filter.time_commitment:
        return False
    if filter.tags and not set(filter.tags) & set(idea.tags):
        return False
    if filter.tech_stack and not set(filter.tech_stack) & {
        *idea.tech_stack,
        *idea.ai_tech_stack,
    }:
        return False
    if filter.search:
        needle = filter.search.lower()
        if needle not in idea.title.lower() and needle not in idea.description.lower():
            return False
    return True


def _matches_candidate(idea: Idea, filter: CandidateFilter) -> bool:
    if idea.status != IdeaStatus.PUBLISHED:
        return False
    if filter.categories and idea.category not in filter.categories:
        return False
    if filter.difficulties and idea.difficulty not in filter.difficulties:
        return False
    if filter.time_commitments and idea.time_commitment not in filter.time_commitments:
        return False
    if filter.tech_stack and not set(filter.tech_stack) & set(idea.tech_tokens):
        return False
    if filter.exclude_author_id and idea.author_id == filter.exclude_author_id:
        return False
    return idea.id not in filter.exclude_ids


class InMemoryIdeaRepository(IdeaRepository):
    """In-memory implementation of IdeaRepository for testing."""

    def __init__(self) -> None:
        self._ideas: dict[IdeaId, Idea] = {}

    async def find_by_id(self, idea_id: IdeaId) -> Optional[Idea]:
        """Find an idea by ID."""
        return self._ideas.get(idea_id)

    async def find_by_ids(self, idea_ids: Sequence[IdeaId]) -> list[Idea]:
        """Find several ideas, preserving the requested order."""
        return [self._ideas[i] for i in idea_ids if i in self._ideas]

    async def find_all(
        self,
        filter: IdeaFilter,
        sort: SortMode = SortMode.HOT,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Idea]:
        """Filter, rank and paginate published ideas."""
        matching = [i for i in self._ideas.values() if _matches_listing(i, filter)]
        return sort_ideas(matching, sort)[offset : offset + limit]

    async def count(self, filter: IdeaFilter) -> int:
        """Count published ideas matching the filters."""
        return sum(1 for i in self._ideas.values() if _matches_listing(i, filter))

    async def find_candidates(self, filter: CandidateFilter, limit: int) -> list[Idea]:
        """Candidates ordered by vote score desc, then created_at desc."""
        matching = [i for i in self._ideas.values() if _matches_candidate(i, filter)]
        # The trending order is exactly vote score desc, created_at desc, id
        return sorted(matching, key=lambda i: ranking_key(i, SortMode.TRENDING))[
            :limit
        ]

    async def find_published_since(
        self,
        cutoff: datetime,
        category: Optional[IdeaCategory] = None,
    ) -> list[Idea]:
        """Published ideas created at or after the cutoff."""
        cutoff = as_utc(cutoff)
        return [
            idea
            for idea in self._ideas.values()
            if idea.status == IdeaStatus.PUBLISHED
            and as_utc(idea.created_at) >= cutoff
            and (category is None or idea.category == category)
        ]

    async def save(self, idea: Idea) -> Idea:
        """Save or update an idea."""
        self._ideas[idea.id] = idea
        return idea

    async def increment_vote_score(self, idea_id: IdeaId, delta: int) -> Optional[int]:
        """Add a signed delta to the vote score."""
        return self._increment(idea_id, "vote_score", delta)

    async def increment_view_count(self, idea_id: IdeaId) -> None:
        """Increment the view count by 1."""
        self._increment(idea_id, "view_count", 1)

    async def increment_bookmark_count(
        self, idea_id: IdeaId, delta: int
    ) -> Optional[int]:
        """Add a signed delta to the bookmark count (minimum 0)."""
        return self._increment(idea_id, "bookmark_count", delta, minimum=0)

    def _increment(
        self, idea_id: IdeaId, field: str, delta: int, minimum: Optional[int] = None
    ) -> Optional[int]:
        idea = self._ideas.get(idea_id)
        if not idea:
            return None
        value = getattr(idea, field) + delta
        if minimum is not None:
            value = max(minimum, value)
        self._ideas[idea_id] = idea.model_copy(update={field: value})
        return value
