"""Trending window domain service."""

from collections import Counter
from datetime import datetime
from typing import Optional

import logfire

from spark.config import TrendingSettings
from spark.domain.error import InvalidArgumentError
from spark.domain.model import CategoryCount, Idea, TagCount, TrendingSnapshot
from spark.domain.model.common import as_utc, utc_now
from spark.domain.repository import IdeaRepository
from spark.domain.value import IdeaCategory, TrendingPeriod

from .base import Service


def trending_key(idea: Idea) -> tuple:
    """Order within a trending window: score, views, recency, then id."""
    return (
        -idea.vote_score,
        -idea.view_count,
        -as_utc(idea.created_at).timestamp(),
        str(idea.id),
    )


class TrendingWindowCalculator(Service):
    """Computes tag and category frequencies over fixed lookback windows.

    Nothing is persisted: every call recomputes from the ideas in the window.
    """

    def __init__(
        self, idea_repository: IdeaRepository, settings: TrendingSettings
    ) -> None:
        """Initialize trending calculator.

        Args:
            idea_repository: Idea repository
            settings: Top-N sizes and limits
        """
        self.idea_repository = idea_repository
        self.settings = settings

    async def compute(
        self,
        period: TrendingPeriod,
        category: Optional[IdeaCategory] = None,
        now: Optional[datetime] = None,
    ) -> TrendingSnapshot:
        """Compute the tag and category snapshot for one window.

        Args:
            period: Lookback window
            category: Only count ideas in this category
            now: End of the window (defaults to now)

        Returns:
            Top tags (count desc, tag asc) and top categories (count desc, value asc)

        Raises:
            ServiceUnavailableError: If storage is unreachable
        """
        cutoff = as_utc(now or utc_now()) - period.lookback
        with logfire.span(
            "trending.compute",
            period=period.value,
            category=category.value if category else None,
        ):
            ideas = await self._window(cutoff, category)

            tag_counts = Counter(tag for idea in ideas for tag in idea.tags)
            category_counts = Counter(idea.category for idea in ideas)

            top_tags = sorted(tag_counts.items(), key=lambda item: (-item[1], item[0]))
            top_categories = sorted(
                category_counts.items(), key=lambda item: (-item[1], item[0].value)
            )

            logfire.info(
                "Trending snapshot computed",
                period=period.value,
                ideas=len(ideas),
                distinct_tags=len(tag_counts),
            )
            return TrendingSnapshot(
                period=period,
                category=category,
                cutoff=cutoff,
                tag_counts=[
                    TagCount(tag=tag, count=count)
                    for tag, count in top_tags[: self.settings.top_tags]
                ],
                category_counts=[
                    CategoryCount(category=cat, count=count)
                    for cat, count in top_categories[: self.settings.top_categories]
                ],
            )

    async def trending_ideas(
        self,
        period: TrendingPeriod,
        category: Optional[IdeaCategory] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[Idea]:
        """Top ideas of one window.

        Args:
            period: Lookback window
            category: Only ideas in this category
            limit: Number of ideas (defaults to the configured limit)
            now: End of the window (defaults to now)

        Returns:
            Ideas ordered by vote score, views, then recency

        Raises:
            InvalidArgumentError: If limit is out of range
            ServiceUnavailableError: If storage is unreachable
        """
        limit = self.settings.default_limit if limit is None else limit
        if not 1 <= limit <= self.settings.max_limit:
            raise InvalidArgumentError(
                f"Limit must be between 1 and {self.settings.max_limit}"
            )
        cutoff = as_utc(now or utc_now()) - period.lookback
        with logfire.span("trending.trending_ideas", period=period.value, limit=limit):
            ideas = await self._window(cutoff, category)
            return sorted(ideas, key=trending_key)[:limit]

    async def _window(
        self, cutoff: datetime, category: Optional[IdeaCategory]
    ) -> list[Idea]:
        with self.storage_guard("trending"):
            return await self.idea_repository.find_published_since(cutoff, category)
