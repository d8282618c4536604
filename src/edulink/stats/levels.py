"""Level size and level computation.

Levels are a flat 200-point span. A user with zero points sits at the start
of level 1 with a 200-point target, never at a completed "level 0".
"""

from __future__ import annotations

from edulink.errors import InvalidInput
from edulink.stats.schemas import LevelState

LEVEL_SIZE = 200


def compute_level(points: int, level_size: int = LEVEL_SIZE) -> LevelState:
    """Compute level, in-level progress and the next threshold from a points total."""
    if isinstance(level_size, bool) or not isinstance(level_size, int) or level_size <= 0:
        msg = f"level_size must be a positive integer, got {level_size!r}"
        raise InvalidInput(msg)
    if isinstance(points, bool) or not isinstance(points, int):
        msg = f"points must be an integer, got {points!r}"
        raise InvalidInput(msg)
    if points < 0:
        msg = f"points must be non-negative, got {points}"
        raise InvalidInput(msg)

    if points > 0:
        level = points // level_size + 1
        progress = points % level_size
    else:
        level = 1
        progress = 0

    return LevelState(
        level=level,
        current_level_progress=progress,
        next_level_threshold=level * level_size,
        level_size=level_size,
        progress_ratio=progress / level_size,
    )
