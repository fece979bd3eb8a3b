"""Search agent: time-boxed alpha-beta over a pre-filtered candidate list.

The root candidates are scored one ply deep for attack and defence, the
strongest few are kept, and each is searched with plain minimax plus
alpha-beta pruning on a single shared grid (place, recurse, restore).
The wall clock is checked between root candidates only, so a deep branch
can overrun the nominal budget; when the budget is gone the best move
found so far is returned.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, NamedTuple, Optional, Sequence

from gomokuai.agent.base import BoardLike, Strategy, search_grid
from gomokuai.agent.candidates import center_point, generate_candidates
from gomokuai.agent.config import DEFAULT_DIFFICULTY, profile_for
from gomokuai.agent.evaluation import evaluate_board
from gomokuai.agent.patterns import WIN_SCORE, WIN_THRESHOLD, line_scores
from gomokuai.game.board import Grid, find_win_line
from gomokuai.game.types import NO_MOVE, Move, Point, Stone

logger = logging.getLogger(__name__)

INF = 10**9

# Pre-filter blending thresholds on the defence score
DEFENSE_DOMINANT = 3_000   # opponent would get an open three or better
DEFENSE_WEIGHTED = 800     # opponent would get a half-open three or better

THREAT_REACH = 2           # Manhattan radius for the local threat bonus
THREAT_DIVISOR = 4

Clock = Callable[[], float]


class ScoredMove(NamedTuple):
    point: Point
    score: int


class SearchResult(NamedTuple):
    move: Move
    score: int
    searched: int        # root candidates fully searched
    timed_out: bool


# ---------------------------------------------------------------------------
# One-ply pre-filter
# ---------------------------------------------------------------------------

def quick_evaluate(grid: Sequence[Sequence[Stone]], point: Point, stone: Stone) -> int:
    """Value of ``stone`` sitting at ``point``: its own lines plus nearby support.

    Friendly stones within THREAT_REACH add a quarter of each of their line
    scores. A completed five returns WIN_SCORE at once.
    """
    score = 0
    for line in line_scores(grid, point.row, point.col, stone):
        if line >= WIN_THRESHOLD:
            return WIN_SCORE
        score += line

    size = len(grid)
    threat = 0
    for dr in range(-THREAT_REACH, THREAT_REACH + 1):
        reach = THREAT_REACH - abs(dr)
        for dc in range(-reach, reach + 1):
            if dr == 0 and dc == 0:
                continue
            r, c = point.row + dr, point.col + dc
            if 0 <= r < size and 0 <= c < size and grid[r][c] is stone:
                for line in line_scores(grid, r, c, stone):
                    threat += line // THREAT_DIVISOR
    return score + threat


def blend_scores(attack: int, defense: int) -> int:
    if defense >= DEFENSE_DOMINANT:
        return max(attack, defense)
    if defense >= DEFENSE_WEIGHTED:
        return max(attack, attack + defense * 2 // 3)
    return attack + defense // 3


def prefilter(
    grid: Grid,
    candidates: Sequence[Point],
    mover: Stone,
) -> tuple[list[ScoredMove], Optional[Point]]:
    """Score every candidate one ply deep.

    Returns the scored list (candidate order) and a forced point: the first
    candidate where either side would complete five, if any.
    """
    opponent = mover.other
    scored: list[ScoredMove] = []

    for point in candidates:
        grid[point.row][point.col] = mover
        attack = quick_evaluate(grid, point, mover)
        grid[point.row][point.col] = opponent
        defense = quick_evaluate(grid, point, opponent)
        grid[point.row][point.col] = Stone.EMPTY

        if attack >= WIN_THRESHOLD or defense >= WIN_THRESHOLD:
            return scored, point
        scored.append(ScoredMove(point, blend_scores(attack, defense)))

    return scored, None


def rank_candidates(scored: Sequence[ScoredMove], width: int) -> list[ScoredMove]:
    """Best ``width`` candidates, highest first; ties keep their input order."""
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)
    return ranked[: min(width, len(ranked))]


# ---------------------------------------------------------------------------
# Minimax with alpha-beta
# ---------------------------------------------------------------------------

def _order_children(grid: Grid, children: list[Point], to_move: Stone) -> list[Point]:
    """Sort by immediate line value for both sides; pruning improves, values do not change."""
    opponent = to_move.other

    def key(p: Point) -> int:
        return sum(line_scores(grid, p.row, p.col, to_move)) + sum(
            line_scores(grid, p.row, p.col, opponent)
        )

    return sorted(children, key=key, reverse=True)


def alphabeta(
    grid: Grid,
    depth: int,
    alpha: int,
    beta: int,
    to_move: Stone,
    maximizing: bool,
    perspective: Stone,
    difficulty: int,
) -> int:
    """Minimax value of ``grid`` for ``perspective`` with ``to_move`` to play.

    The grid is mutated in place and restored before returning. A move
    that completes five ends its branch with +/-WIN_SCORE.
    """
    if depth == 0:
        return evaluate_board(grid, perspective)

    children = generate_candidates(grid, difficulty)
    if not children:
        return evaluate_board(grid, perspective)
    if depth >= 2:
        children = _order_children(grid, children, to_move)

    win_value = WIN_SCORE if to_move is perspective else -WIN_SCORE

    if maximizing:
        best = -INF
        for p in children:
            grid[p.row][p.col] = to_move
            if find_win_line(grid, p.row, p.col) is not None:
                score = win_value
            else:
                score = alphabeta(
                    grid, depth - 1, alpha, beta, to_move.other, False, perspective, difficulty
                )
            grid[p.row][p.col] = Stone.EMPTY

            best = max(best, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break
        return best

    best = INF
    for p in children:
        grid[p.row][p.col] = to_move
        if find_win_line(grid, p.row, p.col) is not None:
            score = win_value
        else:
            score = alphabeta(
                grid, depth - 1, alpha, beta, to_move.other, True, perspective, difficulty
            )
        grid[p.row][p.col] = Stone.EMPTY

        best = min(best, score)
        beta = min(beta, score)
        if beta <= alpha:
            break
    return best


def search_root(
    grid: Grid,
    mover: Stone,
    difficulty: int = DEFAULT_DIFFICULTY,
    time_budget_ms: Optional[int] = None,
    clock: Clock = time.monotonic,
) -> SearchResult:
    """Choose a move for ``mover`` on ``grid`` (mutated during, restored after)."""
    profile = profile_for(difficulty)
    budget_ms = profile.time_budget_ms if time_budget_ms is None else time_budget_ms
    start = clock()

    candidates = generate_candidates(grid, profile.level)
    if not candidates:
        return SearchResult(NO_MOVE, 0, 0, False)

    if all(cell is Stone.EMPTY for row in grid for cell in row):
        center = center_point(len(grid))
        return SearchResult(Move(center.row, center.col, mover), 0, 0, False)

    scored, forced = prefilter(grid, candidates, mover)
    if forced is not None:
        logger.debug("Forced move %s for %s", forced, mover)
        return SearchResult(Move(forced.row, forced.col, mover), WIN_SCORE, 0, False)

    ranked = rank_candidates(scored, profile.root_width)
    opponent = mover.other

    best_point = ranked[0].point
    best_score = -INF
    alpha, beta = -INF, INF
    searched = 0
    timed_out = False

    for point, _ in ranked:
        grid[point.row][point.col] = mover
        score = alphabeta(
            grid, profile.search_depth - 1, alpha, beta, opponent, False, mover, profile.level
        )
        grid[point.row][point.col] = Stone.EMPTY
        searched += 1

        if score > best_score:
            best_score = score
            best_point = point
        alpha = max(alpha, best_score)

        elapsed_ms = (clock() - start) * 1000
        if elapsed_ms > budget_ms:
            timed_out = searched < len(ranked)
            if timed_out:
                logger.info(
                    "Search budget of %d ms spent after %d/%d root moves",
                    budget_ms, searched, len(ranked),
                )
            break

    logger.debug(
        "Search d=%d chose %s score=%d over %d candidates (%d kept)",
        profile.level, best_point, best_score, len(candidates), len(ranked),
    )
    return SearchResult(Move(best_point.row, best_point.col, mover), best_score, searched, timed_out)


# ---------------------------------------------------------------------------
# SearchAgent
# ---------------------------------------------------------------------------

class SearchAgent(Strategy):
    """Alpha-beta agent whose depth, width and time budget follow the difficulty."""

    strategy_name = "AlphaBetaSearch"

    def __init__(
        self,
        difficulty: int = DEFAULT_DIFFICULTY,
        rng: Optional[random.Random] = None,
        time_budget_ms: Optional[int] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        super().__init__(difficulty, rng)
        self.time_budget_ms = time_budget_ms
        self.clock = clock

    @property
    def depth(self) -> int:
        return self.profile.search_depth

    def get_next_move(self, board: BoardLike, mover: Stone) -> Move:
        assert mover is not Stone.EMPTY, "mover must be Black or White"
        grid = search_grid(board)
        result = search_root(grid, mover, self.difficulty, self.time_budget_ms, self.clock)
        return result.move
