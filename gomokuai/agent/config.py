"""Difficulty ladder shared by the strategies.

Difficulty is a single 1-5 knob. Each level maps onto concrete search and
selection parameters; both strategies read their settings from here so the
two stay in step when the ladder is tuned.
"""

from __future__ import annotations

from dataclasses import dataclass

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEFAULT_DIFFICULTY = 3

# Search depth never exceeds this many plies
MAX_SEARCH_DEPTH = 4
# Neighbourhood radius (Manhattan) never exceeds this for candidate moves
MAX_CANDIDATE_RADIUS = 3

BASE_TIME_BUDGET_MS = 1000
TIME_BUDGET_PER_LEVEL_MS = 500
BASE_ROOT_WIDTH = 6


@dataclass(frozen=True)
class DifficultyProfile:
    level: int
    search_depth: int
    time_budget_ms: int
    root_width: int
    candidate_radius: int
    random_pool: int


def clamp_difficulty(level: int) -> int:
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, int(level)))


def profile_for(level: int) -> DifficultyProfile:
    """Return the profile for ``level`` (clamped into 1..5)."""
    d = clamp_difficulty(level)
    return DifficultyProfile(
        level=d,
        search_depth=min(1 + d, MAX_SEARCH_DEPTH),
        time_budget_ms=BASE_TIME_BUDGET_MS + TIME_BUDGET_PER_LEVEL_MS * d,
        root_width=BASE_ROOT_WIDTH + d,
        candidate_radius=min(1 + d, MAX_CANDIDATE_RADIUS),
        random_pool=1 if d == MAX_DIFFICULTY else max(1, 6 - d),
    )


DIFFICULTY_PROFILES: dict[int, DifficultyProfile] = {
    d: profile_for(d) for d in range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1)
}
