"""
Leaderboard Ranking

Orders a population by overall score. Every user gets a unique rank:
ties are not dense-ranked but resolved by submission order, so the user
that appears first in the input is ranked higher.
"""

import logging
from typing import Iterable, Mapping, Optional

from ..core.entities import LeaderboardEntry
from ..core.errors import EmptyPopulationError, UnknownUserError

logger = logging.getLogger(__name__)


class LeaderboardRanker:
    """Ranks users by score with deterministic tie-breaks."""

    def rank(
        self,
        scores_by_user: Mapping[str, float],
        require_non_empty: bool = False,
        scope: Optional[str] = None
    ) -> tuple[LeaderboardEntry, ...]:
        """
        Rank users by descending score.

        Mapping iteration order is the submission order used for ties.
        """
        if not scores_by_user:
            if require_non_empty:
                raise EmptyPopulationError(scope)
            return ()

        # sorted() is stable, so equal scores keep their submission order
        ordered = sorted(scores_by_user.items(), key=lambda item: item[1], reverse=True)

        entries = []
        for index, (user_id, score) in enumerate(ordered):
            if index + 1 < len(ordered):
                gap = score - ordered[index + 1][1]
            else:
                gap = 0
            entries.append(LeaderboardEntry(
                user_id=user_id,
                rank=index + 1,
                score=score,
                gap_to_next=gap
            ))

        logger.debug("Ranked %d users (scope=%s)", len(entries), scope)
        return tuple(entries)


def entry_for(
    entries: Iterable[LeaderboardEntry],
    user_id: str,
    scope: Optional[str] = None
) -> LeaderboardEntry:
    """Find a user's entry on a leaderboard."""
    for entry in entries:
        if entry.user_id == user_id:
            return entry
    raise UnknownUserError(user_id, scope)
