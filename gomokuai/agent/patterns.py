"""Line pattern scoring shared by the evaluator and the search pre-filter."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from gomokuai.game.board import AXES, WIN_LENGTH
from gomokuai.game.types import Stone

# ---------------------------------------------------------------------------
# Score tiers by stone count
# ---------------------------------------------------------------------------

WIN_SCORE = 100_000

# Any line score at or above this is treated as a completed five
WIN_THRESHOLD = 90_000

DEAD_SCORES: dict[int, int] = {
    4: 3_000,   # dead four, blocked at both ends
    3: 300,
    2: 30,
}
OPEN_SCORES: dict[int, int] = {
    4: 20_000,  # open four, room on both sides
    3: 3_000,   # open three
    2: 200,
}
HALF_OPEN_SCORES: dict[int, int] = {
    4: 8_000,
    3: 800,
    2: 50,
}
DEAD_PER_STONE = 8
OPEN_PER_STONE = 15

# How far the scan reaches on each side of the origin
SCAN_REACH = WIN_LENGTH - 1


class _Side(NamedTuple):
    stones: int      # owner stones seen, including past the gap
    contiguous: int  # owner stones before any gap
    empty: int       # 1 if the single tolerated empty cell was used
    blocked: bool    # ran into an opposing stone or the edge
    gap: bool        # an owner stone was found beyond the empty cell


def _scan_side(
    grid: Sequence[Sequence[Stone]],
    row: int,
    col: int,
    dr: int,
    dc: int,
    owner: Stone,
) -> _Side:
    size = len(grid)
    stones = contiguous = empty = 0
    blocked = gap = False
    for step in range(1, SCAN_REACH + 1):
        r, c = row + dr * step, col + dc * step
        if not (0 <= r < size and 0 <= c < size):
            blocked = True
            break
        piece = grid[r][c]
        if piece is owner:
            stones += 1
            if empty:
                gap = True
            else:
                contiguous += 1
        elif piece is Stone.EMPTY:
            if empty:
                break
            empty = 1
        else:
            blocked = True
            break
    return _Side(stones, contiguous, empty, blocked, gap)


def tier_score(count: int, empty: int, blocked: bool) -> int:
    """Look up the score for ``count`` stones with the given end state."""
    if count >= WIN_LENGTH:
        return WIN_SCORE
    if blocked:
        return DEAD_SCORES.get(count, count * DEAD_PER_STONE)
    if count in OPEN_SCORES:
        return OPEN_SCORES[count] if empty >= 2 else HALF_OPEN_SCORES[count]
    return count * OPEN_PER_STONE


def score_line(
    grid: Sequence[Sequence[Stone]],
    row: int,
    col: int,
    dr: int,
    dc: int,
    owner: Stone,
) -> int:
    """Score the run through (row, col) along one axis for ``owner``.

    The origin is assumed to hold an ``owner`` stone whatever the grid says,
    so the same call rates both existing stones and hypothetical moves.
    Each side may step over one empty cell. Only an unbroken run of five
    scores as a win; a five that needs its gap filled scores as a four.
    Runs that used a gap are worth two thirds of the tier.
    """
    fwd = _scan_side(grid, row, col, dr, dc, owner)
    back = _scan_side(grid, row, col, -dr, -dc, owner)

    if 1 + fwd.contiguous + back.contiguous >= WIN_LENGTH:
        return WIN_SCORE

    count = min(1 + fwd.stones + back.stones, WIN_LENGTH - 1)
    empty = fwd.empty + back.empty
    blocked = fwd.blocked and back.blocked

    score = tier_score(count, empty, blocked)
    if fwd.gap or back.gap:
        score = score * 2 // 3
    return score


def line_scores(
    grid: Sequence[Sequence[Stone]],
    row: int,
    col: int,
    owner: Stone,
) -> list[int]:
    """score_line over the four axes, in AXES order."""
    return [score_line(grid, row, col, dr, dc, owner) for dr, dc in AXES]
