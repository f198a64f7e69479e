"""PostgreSQL implementation of Idea repository."""

from datetime import datetime
from typing import List, Optional, Sequence

import logfire
from sqlalchemy import and_, asc, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from spark.domain.model import Idea
from spark.domain.repository import CandidateFilter, IdeaFilter, IdeaRepository
from spark.domain.value import IdeaCategory, IdeaId, IdeaStatus, SortMode
from spark.persistence.mappers import idea_to_dict, row_to_idea
from spark.persistence.tables import ideas_table

# Column orderings matching spark.domain.service.ranking.ranking_key
_c = ideas_table.c
SORT_ORDER = {
    SortMode.NEWEST: [desc(_c.created_at), asc(_c.id)],
    SortMode.OLDEST: [asc(_c.created_at), asc(_c.id)],
    SortMode.POPULAR: [desc(_c.vote_score), asc(_c.id)],
    SortMode.TRENDING: [desc(_c.vote_score), desc(_c.created_at), asc(_c.id)],
    SortMode.HOT: [
        desc(_c.vote_score),
        desc(_c.comment_count),
        desc(_c.view_count),
        asc(_c.id),
    ],
}


def _listing_conditions(filter: IdeaFilter) -> list:
    conditions = [_c.status == IdeaStatus.PUBLISHED.value]
    if filter.category:
        conditions.append(_c.category == filter.category.value)
    if filter.difficulty:
        conditions.append(_c.difficulty == filter.difficulty.value)
    if filter.time_commitment:
        conditions.append(_c.time_commitment == filter.time_commitment.value)
    if filter.tags:
        conditions.append(_c.tags.overlap(filter.tags))
    if filter.tech_stack:
        conditions.append(
            or_(
                _c.tech_stack.overlap(filter.tech_stack),
                _c.ai_tech_stack.overlap(filter.tech_stack),
            )
        )
    if filter.search:
        pattern = f"%{filter.search}%"
        conditions.append(
            or_(_c.title.ilike(pattern), _c.description.ilike(pattern))
        )
    return conditions


def _candidate_conditions(filter: CandidateFilter) -> list:
    conditions = [_c.status == IdeaStatus.PUBLISHED.value]
    if filter.categories:
        conditions.append(_c.category.in_([c.value for c in filter.categories]))
    if filter.difficulties:
        conditions.append(_c.difficulty.in_([d.value for d in filter.difficulties]))
    if filter.time_commitments:
        conditions.append(
            _c.time_commitment.in_([t.value for t in filter.time_commitments])
        )
    if filter.tech_stack:
        conditions.append(
            or_(
                _c.tech_stack.overlap(filter.tech_stack),
                _c.ai_tech_stack.overlap(filter.tech_stack),
                _c.tags.overlap(filter.tech_stack),
            )
        )
    if filter.exclude_author_id:
        conditions.append(_c.author_id != filter.exclude_author_id)
    if filter.exclude_ids:
        conditions.append(_c.id.notin_(list(filter.exclude_ids)))
    return conditions


class PostgresIdeaRepository(IdeaRepository):
    """PostgreSQL implementation of IdeaRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, idea_id: IdeaId) -> Optional[Idea]:
        """Find an idea by ID."""
        with logfire.span("idea_repository.find_by_id", idea_id=str(idea_id)):
            stmt = select(ideas_table).where(_c.id == idea_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_idea(row._asdict()) if row else None

    async def find_by_ids(self, idea_ids: Sequence[IdeaId]) -> List[Idea]:
        """Find several ideas at once, preserving the requested order."""
        if not idea_ids:
            return []

        stmt = select(ideas_table).where(_c.id.in_(idea_ids))
        result = await self.session.execute(stmt)
        by_id = {row.id: row_to_idea(row._asdict()) for row in result.fetchall()}
        return [by_id[idea_id] for idea_id in idea_ids if idea_id in by_id]

    async def find_all(
        self,
        filter: IdeaFilter,
        sort: SortMode = SortMode.HOT,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Idea]:
        """Find published ideas with filtering, ranking and pagination."""
        with logfire.span(
            "idea_repository.find_all", sort=sort.value, limit=limit, offset=offset
        ):
            stmt = (
                select(ideas_table)
                .where(and_(*_listing_conditions(filter)))
                .order_by(*SORT_ORDER[sort])
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            ideas = [row_to_idea(row._asdict()) for row in result.fetchall()]
            logfire.info("Found ideas", count=len(ideas))
            return ideas

    async def count(self, filter: IdeaFilter) -> int:
        """Count published ideas matching the given filters."""
        stmt = (
            select(func.count())
            .select_from(ideas_table)
            .where(and_(*_listing_conditions(filter)))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_candidates(self, filter: CandidateFilter, limit: int) -> List[Idea]:
        """Find published recommendation candidates."""
        with logfire.span(
            "idea_repository.find_candidates",
            limit=limit,
            excluded=len(filter.exclude_ids),
        ):
            stmt = (
                select(ideas_table)
                .where(and_(*_candidate_conditions(filter)))
                .order_by(desc(_c.vote_score), desc(_c.created_at), asc(_c.id))
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            return [row_to_idea(row._asdict()) for row in result.fetchall()]

    async def find_published_since(
        self,
        cutoff: datetime,
        category: Optional[IdeaCategory] = None,
    ) -> List[Idea]:
        """Find published ideas created at or after a cutoff."""
        stmt = select(ideas_table).where(
            _c.status == IdeaStatus.PUBLISHED.value,
            _c.created_at >= cutoff,
        )
        if category:
            stmt = stmt.where(_c.category == category.value)
        result = await self.session.execute(stmt)
        return [row_to_idea(row._asdict()) for row in result.fetchall()]

    async def save(self, idea: Idea) -> Idea:
        """Save an idea (create or update).

        Counters are never overwritten by an update; they only change
        through the increment methods.
        """
        existing = await self.find_by_id(idea.id)

        idea_dict = idea_to_dict(idea)

        if existing:
            for counter in ("vote_score", "view_count", "comment_count", "bookmark_count"):
                idea_dict.pop(counter)
            stmt = update(ideas_table).where(_c.id == idea.id).values(**idea_dict)
        else:
            stmt = insert(ideas_table).values(**idea_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return idea

    async def increment_vote_score(self, idea_id: IdeaId, delta: int) -> Optional[int]:
        """Atomically add a signed delta to the idea's vote score."""
        stmt = (
            update(ideas_table)
            .where(_c.id == idea_id)
            .values(vote_score=_c.vote_score + delta)
            .returning(_c.vote_score)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one_or_none()

    async def increment_view_count(self, idea_id: IdeaId) -> None:
        """Atomically increment the view count by 1."""
        stmt = (
            update(ideas_table)
            .where(_c.id == idea_id)
            .values(view_count=_c.view_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_bookmark_count(
        self, idea_id: IdeaId, delta: int
    ) -> Optional[int]:
        """Atomically add a signed delta to the bookmark count (minimum 0)."""
        stmt = (
            update(ideas_table)
            .where(_c.id == idea_id)
            .values(bookmark_count=func.greatest(_c.bookmark_count + delta, 0))
            .returning(_c.bookmark_count)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one_or_none()
