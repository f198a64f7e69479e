"""Karma domain service."""

import logfire

from spark.domain.repository import UserRepository
from spark.domain.value import UserId

from .base import Service


class KarmaAccumulator(Service):
    """Credits content authors with the score deltas their content receives."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize karma accumulator.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def apply_delta(self, author_id: UserId, delta: int) -> bool:
        """Atomically add a signed delta to an author's karma.

        A missing author is reported, not raised: the vote that produced the
        delta stands. Storage errors propagate so the caller's transaction
        rolls back as a whole.

        Args:
            author_id: Author of the voted-on content
            delta: Signed delta produced by the vote transition

        Returns:
            True if the author's karma was updated, False if the author is missing
        """
        with logfire.span(
            "karma_accumulator.apply_delta", author_id=str(author_id), delta=delta
        ):
            if delta == 0:
                return True

            applied = await self.user_repository.increment_karma(author_id, delta)
            if not applied:
                logfire.warn(
                    "Karma not applied, author missing",
                    author_id=str(author_id),
                    delta=delta,
                )
            return applied
