"""Leaderboard ranking over a grade cohort.

Cohort members are ranked by points DESC. Ties keep their input order
(Python's sort is stable and there is no secondary key in the source data).
The display list is capped, but the caller's own rank always comes from the
full cohort.
"""

from __future__ import annotations

from collections.abc import Iterable

from edulink.errors import InvalidInput
from edulink.stats.schemas import CohortMember, LeaderboardEntry, LeaderboardResult

DEFAULT_LEADERBOARD_SIZE = 10

# Rank -> decoration for the podium positions
PODIUM_MARKERS: dict[int, str] = {
    1: "\U0001f3c6",  # trophy
    2: "\U0001f948",  # silver medal
    3: "\U0001f949",  # bronze medal
}


def rank_leaderboard(
    members: Iterable[CohortMember],
    self_id: str | None,
    limit: int = DEFAULT_LEADERBOARD_SIZE,
) -> LeaderboardResult:
    """Rank a cohort and return the top ``limit`` entries plus the caller's rank."""
    if limit < 1:
        msg = f"limit must be at least 1, got {limit}"
        raise InvalidInput(msg)

    members = list(members)
    for m in members:
        if m.points < 0:
            msg = f"points must be non-negative, got {m.points} for user {m.user_id}"
            raise InvalidInput(msg)

    sorted_members = sorted(members, key=lambda m: -m.points)

    self_rank = 0
    entries: list[LeaderboardEntry] = []
    for idx, m in enumerate(sorted_members):
        rank = idx + 1
        is_self = self_id is not None and m.user_id == self_id
        if is_self and self_rank == 0:
            self_rank = rank
        if rank <= limit:
            entries.append(LeaderboardEntry(
                rank=rank,
                user_id=m.user_id,
                display_name=m.display_name,
                points=m.points,
                is_self=is_self,
                marker=PODIUM_MARKERS.get(rank, ""),
                profile_image_ref=m.profile_image_ref,
            ))

    return LeaderboardResult(entries=entries, self_rank=self_rank, total=len(sorted_members))
