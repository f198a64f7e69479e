"""Recommendation domain service.

Recommendations are built per request in four steps:

1. Criteria: explicit preferences, filled in from the user's upvote history,
   overridden by request filters, with declared skills as a tech fallback.
2. Candidates: published ideas matching the criteria, excluding the user's
   own ideas and ideas they already bookmarked or voted on.
3. Scoring: engagement, personalization, recency and author karma.
4. Ordering: score desc, ties broken by the hot feed order, then truncation.
"""

from collections import Counter
from datetime import datetime
from typing import Iterable, Optional, Sequence, TypeVar

import logfire

from spark.config import RecommendationSettings
from spark.domain.error import InvalidArgumentError, NotFoundError
from spark.domain.model import (
    Idea,
    IdeaWithAuthor,
    RecommendationCriteria,
    RecommendationFilters,
    RecommendationResult,
    ScoreBreakdown,
    ScoredIdea,
    User,
    UserPreferences,
)
from spark.domain.model.common import as_utc, utc_now
from spark.domain.repository import (
    BookmarkRepository,
    CandidateFilter,
    IdeaRepository,
    PreferencesRepository,
    UserRepository,
    VoteRepository,
)
from spark.domain.value import IdeaId, SortMode, UserId, VotableType, VoteType

from .base import Service
from .ranking import ranking_key

T = TypeVar("T")


def top_by_count(values: Iterable[T], n: int) -> list[T]:
    """Most frequent values, ties broken by first-seen order.

    Counter preserves insertion order and ``sorted`` is stable, so equal
    counts keep the order in which values first appeared.
    """
    counts = Counter(values)
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [value for value, _ in ranked[:n]]


def tech_match_count(user_tokens: Iterable[str], idea_tokens: Iterable[str]) -> int:
    """Count user tokens that match at least one idea token.

    Two tokens match when either contains the other, ignoring case. User
    tokens are deduplicated case-insensitively first.
    """
    idea_lower = [token.lower() for token in idea_tokens if token]
    seen: set[str] = set()
    matches = 0
    for token in user_tokens:
        needle = token.lower()
        if not needle or needle in seen:
            continue
        seen.add(needle)
        if any(needle in other or other in needle for other in idea_lower):
            matches += 1
    return matches


class RecommendationEngine(Service):
    """Domain service producing personalized idea recommendations."""

    def __init__(
        self,
        user_repository: UserRepository,
        idea_repository: IdeaRepository,
        vote_repository: VoteRepository,
        bookmark_repository: BookmarkRepository,
        preferences_repository: PreferencesRepository,
        settings: RecommendationSettings,
    ) -> None:
        """Initialize recommendation engine.

        Args:
            user_repository: User repository
            idea_repository: Idea repository
            vote_repository: Vote repository
            bookmark_repository: Bookmark repository
            preferences_repository: Preferences repository
            settings: Scoring weights and limits
        """
        self.user_repository = user_repository
        self.idea_repository = idea_repository
        self.vote_repository = vote_repository
        self.bookmark_repository = bookmark_repository
        self.preferences_repository = preferences_repository
        self.settings = settings

    async def recommend(
        self,
        user_id: UserId,
        filters: Optional[RecommendationFilters] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> RecommendationResult:
        """Recommend ideas to a user.

        Args:
            user_id: User asking for recommendations
            filters: Request-level overrides
            limit: Number of recommendations (defaults to the configured limit)
            now: Reference time for recency bonuses (defaults to now)

        Returns:
            Ordered recommendations, the criteria used and the candidate count

        Raises:
            InvalidArgumentError: If limit is out of range
            NotFoundError: If the user does not exist
            ServiceUnavailableError: If storage is unreachable
        """
        limit = self.settings.default_limit if limit is None else limit
        if not 1 <= limit <= self.settings.max_limit:
            raise InvalidArgumentError(
                f"Limit must be between 1 and {self.settings.max_limit}"
            )
        filters = filters or RecommendationFilters()
        now = now or utc_now()

        with logfire.span(
            "recommendation_engine.recommend", user_id=str(user_id), limit=limit
        ):
            with self.storage_guard("recommend"):
                user = await self.user_repository.find_by_id(user_id)
                if not user:
                    logfire.warn("Recommendations for unknown user", user_id=str(user_id))
                    raise NotFoundError("User", str(user_id))

                preferences = await self.preferences_repository.find_by_user(user_id)
                preferences = preferences or UserPreferences.defaults(user_id)

                upvoted = await self._upvoted_ideas(user_id)
                criteria = self.build_criteria(user, preferences, upvoted, filters)

                if not preferences.enable_recommendations:
                    logfire.info(
                        "Recommendations disabled by user", user_id=str(user_id)
                    )
                    return RecommendationResult(
                        recommendations=[], criteria=criteria, total=0
                    )

                candidates = await self.fetch_candidates(criteria, user_id, limit)

            scored = [
                self.score(candidate, user, preferences, now) for candidate in candidates
            ]
            scored.sort(
                key=lambda item: (-item.score, ranking_key(item.idea, SortMode.HOT))
            )

            logfire.info(
                "Recommendations built",
                user_id=str(user_id),
                candidates=len(candidates),
                returned=min(limit, len(scored)),
            )
            return RecommendationResult(
                recommendations=scored[:limit],
                criteria=criteria,
                total=len(candidates),
            )

    def build_criteria(
        self,
        user: User,
        preferences: UserPreferences,
        upvoted_ideas: Sequence[Idea],
        filters: RecommendationFilters,
    ) -> RecommendationCriteria:
        """Merge explicit, inferred and requested criteria.

        Args:
            user: User asking for recommendations
            preferences: Stored (or default) preferences
            upvoted_ideas: Ideas the user upvoted, most recent vote first
            filters: Request-level overrides

        Returns:
            Criteria for candidate selection
        """
        categories = list(preferences.preferred_categories)
        tech_stack = list(preferences.preferred_tech_stack)
        difficulty = list(preferences.preferred_difficulty)
        time_commitment = list(preferences.preferred_time_commitment)

        if not categories:
            categories = top_by_count(
                (idea.category for idea in upvoted_ideas),
                self.settings.inferred_category_count,
            )
        if not tech_stack:
            tech_stack = top_by_count(
                (
                    token
                    for idea in upvoted_ideas
                    for token in (*idea.tech_stack, *idea.ai_tech_stack)
                ),
                self.settings.inferred_tech_count,
            )

        # Request filters replace, never merge
        if filters.category:
            categories = [filters.category]
        if filters.difficulty:
            difficulty = [filters.difficulty]
        if filters.time_commitment:
            time_commitment = [filters.time_commitment]

        if not tech_stack:
            tech_stack = list(user.skills)

        return RecommendationCriteria(
            categories=categories,
            tech_stack=tech_stack,
            difficulty=difficulty,
            time_commitment=time_commitment,
        )

    async def fetch_candidates(
        self, criteria: RecommendationCriteria, user_id: UserId, limit: int
    ) -> list[IdeaWithAuthor]:
        """Fetch a candidate superset for scoring.

        Args:
            criteria: Merged criteria
            user_id: Requesting user, whose own and engaged-with ideas are excluded
            limit: Number of recommendations requested

        Returns:
            Up to ``candidate_multiplier * limit`` candidates with author karma
        """
        bookmarked = await self.bookmark_repository.find_idea_ids_by_user(user_id)
        voted = await self.vote_repository.find_by_user(
            user_id, votable_type=VotableType.IDEA
        )
        exclude_ids = frozenset(bookmarked) | frozenset(
            IdeaId(vote.votable_id) for vote in voted
        )

        ideas = await self.idea_repository.find_candidates(
            CandidateFilter(
                categories=criteria.categories,
                difficulties=criteria.difficulty,
                time_commitments=criteria.time_commitment,
                tech_stack=criteria.tech_stack,
                exclude_author_id=user_id,
                exclude_ids=exclude_ids,
            ),
            limit=limit * self.settings.candidate_multiplier,
        )

        authors = await self.user_repository.find_by_ids(
            list({idea.author_id for idea in ideas})
        )
        karma = {author.id: author.karma_score for author in authors}
        return [
            IdeaWithAuthor(idea=idea, author_karma=karma.get(idea.author_id, 0))
            for idea in ideas
        ]

    def score(
        self,
        candidate: IdeaWithAuthor,
        user: User,
        preferences: UserPreferences,
        now: datetime,
    ) -> ScoredIdea:
        """Score one candidate for one user.

        Args:
            candidate: Idea with its author's karma
            user: Requesting user
            preferences: Stored (or default) preferences
            now: Reference time for the recency bonus

        Returns:
            The candidate with its total score and per-term breakdown
        """
        s = self.settings
        idea = candidate.idea

        engagement = (
            s.vote_weight * idea.vote_score
            + s.view_weight * idea.view_count
            + s.comment_weight * idea.comment_count
            + s.bookmark_weight * idea.bookmark_count
        )

        category_bonus = (
            s.category_bonus if idea.category in preferences.preferred_categories else 0.0
        )

        user_tokens = [*user.skills, *preferences.preferred_tech_stack]
        tech_bonus = s.tech_match_bonus * tech_match_count(user_tokens, idea.tech_tokens)

        published = as_utc(idea.published_at or idea.created_at)
        age_days = (as_utc(now) - published).total_seconds() / 86400
        if age_days < s.fresh_days:
            recency_bonus = s.fresh_bonus
        elif age_days < s.recent_days:
            recency_bonus = s.recent_bonus
        else:
            recency_bonus = 0.0

        karma_bonus = (candidate.author_karma / s.karma_divisor) * s.karma_multiplier

        breakdown = ScoreBreakdown(
            engagement=engagement,
            category_bonus=category_bonus,
            tech_bonus=tech_bonus,
            recency_bonus=recency_bonus,
            karma_bonus=karma_bonus,
        )
        return ScoredIdea(
            idea=idea,
            author_karma=candidate.author_karma,
            score=breakdown.total,
            breakdown=breakdown,
        )

    async def _upvoted_ideas(self, user_id: UserId) -> list[Idea]:
        """Ideas the user upvoted, most recent vote first."""
        votes = await self.vote_repository.find_by_user(
            user_id,
            vote_type=VoteType.UP,
            votable_type=VotableType.IDEA,
            limit=self.settings.upvote_history_limit,
        )
        return await self.idea_repository.find_by_ids(
            [IdeaId(vote.votable_id) for vote in votes]
        )
