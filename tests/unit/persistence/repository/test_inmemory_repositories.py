"""Unit tests for the in-memory repositories used by the test container."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from spark.domain.model import Bookmark, Vote
from spark.domain.repository import CandidateFilter
from spark.domain.value import (
    BookmarkId,
    IdeaCategory,
    IdeaId,
    IdeaStatus,
    UserId,
    VotableType,
    VoteId,
    VoteType,
)
from spark.persistence.repository.inmemory import (
    InMemoryBookmarkRepository,
    InMemoryIdeaRepository,
    InMemoryVoteRepository,
)
from tests.conftest import make_idea, make_user


def _vote(user_id: UserId, votable_id, vote_type=VoteType.UP) -> Vote:
    return Vote(
        id=VoteId(uuid4()),
        user_id=user_id,
        votable_type=VotableType.IDEA,
        votable_id=votable_id,
        vote_type=vote_type,
    )


class TestInMemoryVoteRepository:
    """Tests for InMemoryVoteRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_vote_raises_integrity_error(self):
        # Arrange
        repo = InMemoryVoteRepository()
        user_id = UserId(uuid4())
        target_id = uuid4()
        await repo.save(_vote(user_id, target_id))

        # Act & Assert
        with pytest.raises(IntegrityError):
            await repo.save(_vote(user_id, target_id, VoteType.DOWN))

    @pytest.mark.asyncio
    async def test_find_by_user_newest_first_with_filters(self):
        # Arrange
        repo = InMemoryVoteRepository()
        user_id = UserId(uuid4())
        first = await repo.save(_vote(user_id, uuid4()))
        await repo.save(_vote(user_id, uuid4(), VoteType.DOWN))
        last = await repo.save(_vote(user_id, uuid4()))

        # Act
        upvotes = await repo.find_by_user(user_id, vote_type=VoteType.UP)
        latest = await repo.find_by_user(user_id, limit=1)

        # Assert
        assert [v.id for v in upvotes] == [last.id, first.id]
        assert [v.id for v in latest] == [last.id]


class TestInMemoryIdeaRepository:
    """Tests for InMemoryIdeaRepository."""

    @pytest.mark.asyncio
    async def test_candidates_respect_exclusions_and_order(self):
        # Arrange
        repo = InMemoryIdeaRepository()
        me = make_user()
        mine = await repo.save(make_idea(me, vote_score=9))
        seen = await repo.save(make_idea(vote_score=8))
        top = await repo.save(make_idea(vote_score=5, tech_stack=["Go"]))
        tagged = await repo.save(make_idea(vote_score=1, tags=["Go"]))
        await repo.save(make_idea(vote_score=7, status=IdeaStatus.DRAFT, tech_stack=["Go"]))
        await repo.save(make_idea(vote_score=6, tech_stack=["Rust"]))

        # Act
        candidates = await repo.find_candidates(
            CandidateFilter(
                tech_stack=["Go"],
                exclude_author_id=me.id,
                exclude_ids=frozenset({seen.id}),
            ),
            limit=10,
        )

        # Assert
        assert [c.id for c in candidates] == [top.id, tagged.id]
        assert mine.id not in {c.id for c in candidates}

    @pytest.mark.asyncio
    async def test_increment_missing_idea_returns_none(self):
        # Arrange
        repo = InMemoryIdeaRepository()

        # Act & Assert
        assert await repo.increment_vote_score(IdeaId(uuid4()), 1) is None

    @pytest.mark.asyncio
    async def test_bookmark_count_never_below_zero(self):
        # Arrange
        repo = InMemoryIdeaRepository()
        idea = await repo.save(make_idea(category=IdeaCategory.SOCIAL))

        # Act
        count = await repo.increment_bookmark_count(idea.id, -3)

        # Assert
        assert count == 0


class TestInMemoryBookmarkRepository:
    """Tests for InMemoryBookmarkRepository."""

    @pytest.mark.asyncio
    async def test_one_bookmark_per_user_and_idea(self):
        # Arrange
        repo = InMemoryBookmarkRepository()
        user_id = UserId(uuid4())
        idea_id = IdeaId(uuid4())
        saved = await repo.save(
            Bookmark(id=BookmarkId(uuid4()), user_id=user_id, idea_id=idea_id)
        )

        # Act & Assert
        with pytest.raises(IntegrityError):
            await repo.save(
                Bookmark(id=BookmarkId(uuid4()), user_id=user_id, idea_id=idea_id)
            )
        assert await repo.delete(saved.id) is True
        assert await repo.delete(saved.id) is False
        assert await repo.find_idea_ids_by_user(user_id) == []
