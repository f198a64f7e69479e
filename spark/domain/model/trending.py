"""Trending snapshot structures (derived per request, never persisted)."""

from datetime import datetime
from typing import Optional

from spark.domain.model.common import DomainModel
from spark.domain.value import IdeaCategory, TrendingPeriod


class TagCount(DomainModel):
    tag: str
    count: int


class CategoryCount(DomainModel):
    category: IdeaCategory
    count: int


class TrendingSnapshot(DomainModel):
    """Tag and category frequencies over one trending window."""

    period: TrendingPeriod
    category: Optional[IdeaCategory] = None
    cutoff: datetime
    tag_counts: list[TagCount]
    category_counts: list[CategoryCount]
