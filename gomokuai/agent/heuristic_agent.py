"""Rule-based agent: one-ply scoring of every empty cell, with difficulty-graded
refinements and a random pick among the top few at lower levels."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from gomokuai.agent.base import BoardLike, Strategy, search_grid
from gomokuai.agent.candidates import center_point
from gomokuai.agent.config import DEFAULT_DIFFICULTY
from gomokuai.game.board import WIN_LENGTH
from gomokuai.game.types import NO_MOVE, Move, Point, Stone

# All eight compass directions; each axis is walked from both of its ends.
DIRECTIONS_8 = [
    (-1, -1), (-1, 0), (-1, 1), (0, -1),
    (0, 1), (1, -1), (1, 0), (1, 1),
]

RUN_SCORES: dict[int, int] = {
    5: 100_000,
    4: 10_000,
    3: 1_000,
    2: 100,
    1: 10,
}

CENTER_WEIGHT = 2
DIRECTION_WEIGHT = 10


def count_line(
    grid: Sequence[Sequence[Stone]],
    row: int,
    col: int,
    dr: int,
    dc: int,
    owner: Stone,
) -> int:
    """Length of the unbroken ``owner`` run through (row, col), counting the cell itself."""
    size = len(grid)
    count = 1
    r, c = row + dr, col + dc
    while 0 <= r < size and 0 <= c < size and grid[r][c] is owner:
        count += 1
        r += dr
        c += dc
    r, c = row - dr, col - dc
    while 0 <= r < size and 0 <= c < size and grid[r][c] is owner:
        count += 1
        r -= dr
        c -= dc
    return count


def run_score(count: int) -> int:
    if count >= WIN_LENGTH:
        return RUN_SCORES[WIN_LENGTH]
    return RUN_SCORES.get(count, 0)


def evaluate_position(grid: Sequence[Sequence[Stone]], row: int, col: int, owner: Stone) -> int:
    return sum(run_score(count_line(grid, row, col, dr, dc, owner)) for dr, dc in DIRECTIONS_8)


def score_cell(
    grid: Sequence[Sequence[Stone]],
    point: Point,
    mover: Stone,
    difficulty: int,
) -> int:
    score = evaluate_position(grid, point.row, point.col, mover)

    if difficulty >= 2:
        # Block the opponent's best line if it outweighs our own
        score = max(score, evaluate_position(grid, point.row, point.col, mover.other))

    if difficulty >= 3:
        size = len(grid)
        center = size // 2
        distance = abs(point.row - center) + abs(point.col - center)
        score += (size - distance) * CENTER_WEIGHT

    if difficulty >= 4:
        for dr, dc in DIRECTIONS_8:
            score += count_line(grid, point.row, point.col, dr, dc, mover) * DIRECTION_WEIGHT

    return score


def rank_cells(
    grid: Sequence[Sequence[Stone]],
    mover: Stone,
    difficulty: int,
) -> list[tuple[int, Point]]:
    """All empty cells scored and sorted best first (stable for equal scores)."""
    size = len(grid)
    scored = [
        (score_cell(grid, Point(r, c), mover, difficulty), Point(r, c))
        for r in range(size)
        for c in range(size)
        if grid[r][c] is Stone.EMPTY
    ]
    scored.sort(key=lambda s: s[0], reverse=True)
    return scored


class HeuristicAgent(Strategy):
    """Single-ply rule-based agent; below difficulty 5 it picks randomly among the top cells."""

    strategy_name = "RuleBased"

    def __init__(
        self,
        difficulty: int = DEFAULT_DIFFICULTY,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(difficulty, rng)

    @property
    def pool_size(self) -> int:
        return self.profile.random_pool

    def get_next_move(self, board: BoardLike, mover: Stone) -> Move:
        assert mover is not Stone.EMPTY, "mover must be Black or White"
        grid = search_grid(board)
        size = len(grid)

        if all(cell is Stone.EMPTY for row in grid for cell in row):
            center = center_point(size)
            return Move(center.row, center.col, mover)

        ranked = rank_cells(grid, mover, self.difficulty)
        if not ranked:
            return NO_MOVE

        pool = min(self.pool_size, len(ranked))
        _, point = ranked[self.rng.randrange(pool)] if pool > 1 else ranked[0]
        return Move(point.row, point.col, mover)
