import random

import pytest

from gomokuai.agent.base import Strategy
from gomokuai.agent.factory import available_strategies, create_strategy, register_strategy
from gomokuai.agent.heuristic_agent import HeuristicAgent
from gomokuai.agent.search_agent import SearchAgent
from gomokuai.game.board import Board, GomokuGameState
from gomokuai.game.types import NO_MOVE, Move, Point, Stone


class _CornerStrategy(Strategy):
    strategy_name = "Corner"

    def get_next_move(self, board, mover):
        return Move(0, 0, mover)


def test_builtin_strategies_available():
    names = available_strategies()
    assert "RuleBased" in names
    assert "AlphaBetaSearch" in names


def test_create_by_name():
    assert isinstance(create_strategy("RuleBased"), HeuristicAgent)
    assert isinstance(create_strategy("AlphaBetaSearch"), SearchAgent)


def test_difficulty_pushed_after_construction():
    strategy = create_strategy("AlphaBetaSearch", difficulty=5)
    assert strategy.get_difficulty() == 5
    assert strategy.difficulty == 5
    assert strategy.get_name() == "AlphaBetaSearch"


def test_rng_passed_through():
    rng = random.Random(3)
    assert create_strategy("RuleBased", rng=rng).rng is rng


def test_unknown_name():
    with pytest.raises(ValueError):
        create_strategy("MonteCarlo")


def test_register_custom_strategy():
    register_strategy("Corner", _CornerStrategy)
    strategy = create_strategy("Corner", difficulty=2)
    assert strategy.name == strategy.get_name() == "Corner"
    assert strategy.get_next_move(Board(), Stone.BLACK) == Move(0, 0, Stone.BLACK)
    assert "Corner" in available_strategies()


def test_register_rejects_non_strategy():
    with pytest.raises(TypeError):
        register_strategy("Bogus", object)


class _NoMoveStrategy(Strategy):
    def get_next_move(self, board, mover):
        return NO_MOVE


def test_select_move_maps_sentinel_to_none():
    assert _NoMoveStrategy().select_move(GomokuGameState()) is None


def test_select_move_uses_side_to_move():
    game = GomokuGameState()
    game.apply_move(Point(7, 7))
    point = create_strategy("RuleBased", difficulty=5).select_move(game)
    assert game.board.is_empty(point)
