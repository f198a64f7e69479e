"""Feed ranking.

Pure ordering functions over ideas. Every sort mode is a total order: ties on
the mode's fields fall through to the idea id.
"""

from typing import Iterable, Tuple, Union

from spark.domain.model import Idea, IdeaWithAuthor
from spark.domain.model.common import as_utc
from spark.domain.value import SortMode

Rankable = Union[Idea, IdeaWithAuthor]


def _idea(candidate: Rankable) -> Idea:
    return candidate.idea if isinstance(candidate, IdeaWithAuthor) else candidate


def ranking_key(candidate: Rankable, mode: SortMode = SortMode.HOT) -> Tuple:
    """Ascending sort key placing ``candidate`` according to ``mode``.

    Descending fields are negated so every mode sorts with plain ``sorted``.
    """
    idea = _idea(candidate)
    created = as_utc(idea.created_at).timestamp()
    tiebreak = str(idea.id)

    if mode == SortMode.NEWEST:
        return (-created, tiebreak)
    if mode == SortMode.OLDEST:
        return (created, tiebreak)
    if mode == SortMode.POPULAR:
        return (-idea.vote_score, tiebreak)
    if mode == SortMode.TRENDING:
        return (-idea.vote_score, -created, tiebreak)
    # hot
    return (-idea.vote_score, -idea.comment_count, -idea.view_count, tiebreak)


def sort_ideas(
    candidates: Iterable[Rankable], mode: SortMode = SortMode.HOT
) -> list[Rankable]:
    """Order candidates for feed display.

    Args:
        candidates: Ideas (or ideas joined with their author)
        mode: Ranking mode, hot by default

    Returns:
        New list in ranking order. No limit is applied.
    """
    return sorted(candidates, key=lambda candidate: ranking_key(candidate, mode))
