"""Candidate move generation: empty cells near existing stones."""

from __future__ import annotations

from typing import Sequence

from gomokuai.agent.config import MAX_CANDIDATE_RADIUS, clamp_difficulty
from gomokuai.game.types import Point, Stone


def candidate_radius(difficulty: int) -> int:
    return min(1 + clamp_difficulty(difficulty), MAX_CANDIDATE_RADIUS)


def center_point(size: int) -> Point:
    return Point(size // 2, size // 2)


def generate_candidates(grid: Sequence[Sequence[Stone]], difficulty: int) -> list[Point]:
    """Return empty cells within Manhattan distance ``radius`` of any stone.

    Cells come back in first-seen order (stones scanned row-major), without
    duplicates, so callers that sort stably get reproducible tie order.
    On an empty board, returns the center point. A full board yields [].
    """
    size = len(grid)
    radius = candidate_radius(difficulty)
    seen: dict[Point, None] = {}
    any_stone = False

    for r in range(size):
        for c in range(size):
            if grid[r][c] is Stone.EMPTY:
                continue
            any_stone = True
            for dr in range(-radius, radius + 1):
                reach = radius - abs(dr)
                for dc in range(-reach, reach + 1):
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < size and 0 <= nc < size and grid[nr][nc] is Stone.EMPTY:
                        seen.setdefault(Point(nr, nc), None)

    if not any_stone:
        return [center_point(size)]
    return list(seen)
