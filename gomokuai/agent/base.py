from __future__ import annotations

import abc
import random
from typing import Optional, Sequence, Union

from gomokuai.agent.config import DEFAULT_DIFFICULTY, DifficultyProfile, clamp_difficulty, profile_for
from gomokuai.game.board import Board, GomokuGameState, Grid, copy_grid
from gomokuai.game.types import Move, Point, Stone

BoardLike = Union[Board, Sequence[Sequence[Stone]]]


def search_grid(board: BoardLike) -> Grid:
    """Private copy of the position for a strategy to mutate while it thinks."""
    if isinstance(board, Board):
        return board.snapshot()
    return copy_grid(board)


class Strategy(abc.ABC):
    """A move-picking AI. One instance per game; difficulty can change any time."""

    strategy_name = "Strategy"

    def __init__(
        self,
        difficulty: int = DEFAULT_DIFFICULTY,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self._difficulty = clamp_difficulty(difficulty)

    @property
    def difficulty(self) -> int:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, level: int) -> None:
        self._difficulty = clamp_difficulty(level)

    def set_difficulty(self, level: int) -> None:
        self.difficulty = level

    def get_difficulty(self) -> int:
        return self._difficulty

    @property
    def profile(self) -> DifficultyProfile:
        return profile_for(self._difficulty)

    @property
    def name(self) -> str:
        return self.strategy_name

    def get_name(self) -> str:
        return self.strategy_name

    @abc.abstractmethod
    def get_next_move(self, board: BoardLike, mover: Stone) -> Move:
        """Return the move for ``mover``, or NO_MOVE if the board is full."""

    def select_move(self, game_state: GomokuGameState) -> Optional[Point]:
        """Pick a point for the side to move; None when there is nothing to play."""
        move = self.get_next_move(game_state.board, game_state.current_player)
        if not move.is_valid:
            return None
        return move.point
