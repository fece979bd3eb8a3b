"""Static evaluation of a whole position from one player's point of view."""

from __future__ import annotations

from typing import Sequence

from gomokuai.agent.patterns import WIN_SCORE, WIN_THRESHOLD, line_scores
from gomokuai.game.types import Stone

# Cells whose lines already carry a real threat skip the positional term
POSITIONAL_CUTOFF = 2_000

CENTER_BONUS = 120
CENTER_FALLOFF = 8  # per step of Manhattan distance from the centre

# (own, opposing) weight for a neighbouring stone, by Chebyshev ring
NEIGHBOR_WEIGHTS: dict[int, tuple[int, int]] = {
    1: (15, 10),
    2: (8, 5),
}
NEIGHBOR_REACH = max(NEIGHBOR_WEIGHTS)


def positional_score(grid: Sequence[Sequence[Stone]], row: int, col: int, owner: Stone) -> int:
    """Centre proximity plus half the neighbour density, never below zero."""
    size = len(grid)
    center = size // 2
    distance = abs(row - center) + abs(col - center)
    base = CENTER_BONUS - distance * CENTER_FALLOFF

    neighbors = 0
    for dr in range(-NEIGHBOR_REACH, NEIGHBOR_REACH + 1):
        for dc in range(-NEIGHBOR_REACH, NEIGHBOR_REACH + 1):
            if dr == 0 and dc == 0:
                continue
            r, c = row + dr, col + dc
            if not (0 <= r < size and 0 <= c < size):
                continue
            piece = grid[r][c]
            if piece is Stone.EMPTY:
                continue
            own, opposing = NEIGHBOR_WEIGHTS[max(abs(dr), abs(dc))]
            neighbors += own if piece is owner else opposing

    return max(0, base + neighbors // 2)


def evaluate_board(grid: Sequence[Sequence[Stone]], perspective: Stone) -> int:
    """Signed score of ``grid`` for ``perspective``.

    Every stone adds (own) or subtracts (opposing) the sum of its four line
    scores. A completed five anywhere ends the scan with +/-WIN_SCORE.
    Stones without a near-terminal threat also carry a positional term.
    """
    size = len(grid)
    score = 0
    for r in range(size):
        row = grid[r]
        for c in range(size):
            piece = row[c]
            if piece is Stone.EMPTY:
                continue
            sign = 1 if piece is perspective else -1

            line_sum = 0
            for line in line_scores(grid, r, c, piece):
                if line >= WIN_THRESHOLD:
                    return sign * WIN_SCORE
                line_sum += line
            score += sign * line_sum

            if line_sum < POSITIONAL_CUTOFF:
                score += sign * positional_score(grid, r, c, piece)
    return score
