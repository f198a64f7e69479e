"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, desc, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from spark.domain.model import Vote
from spark.domain.repository import VoteRepository
from spark.domain.value import UserId, VotableType, VoteId, VoteTarget, VoteType
from spark.persistence.mappers import row_to_vote, vote_to_dict
from spark.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target: VoteTarget,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target.

        With ``for_update`` the row stays locked until the request's
        transaction ends, serializing casts by the same voter.
        """
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == target.votable_type.value,
                votes_table.c.votable_id == target.votable_id,
            )
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user(
        self,
        user_id: UserId,
        vote_type: Optional[VoteType] = None,
        votable_type: Optional[VotableType] = None,
        limit: Optional[int] = None,
    ) -> List[Vote]:
        """Find votes cast by a user, newest first."""
        stmt = select(votes_table).where(votes_table.c.user_id == user_id)
        if vote_type:
            stmt = stmt.where(votes_table.c.vote_type == vote_type.value)
        if votable_type:
            stmt = stmt.where(votes_table.c.votable_type == votable_type.value)
        stmt = stmt.order_by(desc(votes_table.c.created_at), votes_table.c.id)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_target(self, target: VoteTarget) -> List[Vote]:
        """Find all votes on a specific target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.votable_type == target.votable_type.value,
                votes_table.c.votable_id == target.votable_id,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        The insert runs in a savepoint: on a unique violation only the
        savepoint is rolled back and the request's transaction stays usable.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return vote

    async def update_type(
        self, vote_id: VoteId, expected: VoteType, new: VoteType
    ) -> bool:
        """Switch a vote's polarity if it still holds the expected one."""
        stmt = (
            update(votes_table)
            .where(
                and_(
                    votes_table.c.id == vote_id,
                    votes_table.c.vote_type == expected.value,
                )
            )
            .values(vote_type=new.value)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete(self, vote_id: VoteId, expected: VoteType) -> bool:
        """Delete a vote if it still holds the expected polarity."""
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.id == vote_id,
                votes_table.c.vote_type == expected.value,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
