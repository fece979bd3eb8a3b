"""Strategy factory.

Strategies are created by name when a game starts, and the chosen
difficulty is pushed into the new instance straight away:

    strategy = create_strategy("AlphaBetaSearch", difficulty=4)
    move = strategy.get_next_move(board, Stone.WHITE)

Additional implementations can be plugged in with ``register_strategy``.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from gomokuai.agent.base import Strategy
from gomokuai.agent.config import DEFAULT_DIFFICULTY
from gomokuai.agent.heuristic_agent import HeuristicAgent
from gomokuai.agent.search_agent import SearchAgent

logger = logging.getLogger(__name__)

_REGISTRY: dict[str, type[Strategy]] = {
    HeuristicAgent.strategy_name: HeuristicAgent,
    SearchAgent.strategy_name: SearchAgent,
}

DEFAULT_STRATEGY = SearchAgent.strategy_name


def register_strategy(name: str, cls: type[Strategy]) -> None:
    if not (isinstance(cls, type) and issubclass(cls, Strategy)):
        raise TypeError(f"{cls!r} is not a Strategy subclass")
    if name in _REGISTRY and _REGISTRY[name] is not cls:
        logger.warning("Replacing strategy %r (%s -> %s)", name, _REGISTRY[name].__name__, cls.__name__)
    _REGISTRY[name] = cls


def available_strategies() -> list[str]:
    return list(_REGISTRY)


def create_strategy(
    name: str,
    difficulty: int = DEFAULT_DIFFICULTY,
    rng: Optional[random.Random] = None,
) -> Strategy:
    """Build the strategy registered as ``name`` and set its difficulty."""
    try:
        cls = _REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown strategy {name!r}; choose one of {', '.join(_REGISTRY)}"
        ) from None
    strategy = cls(rng=rng)
    strategy.set_difficulty(difficulty)
    logger.debug("Created %s at difficulty %d", strategy.name, strategy.difficulty)
    return strategy
