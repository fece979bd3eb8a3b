"""Save and load game records as JSON files."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from .board import BOARD_SIZE, GomokuGameState
from .types import Move, Stone

logger = logging.getLogger(__name__)

SAVED_GAMES_DIR = Path(__file__).resolve().parents[2] / "saved_games"

REQUIRED_KEYS = (
    "isAIEnabled",
    "aiDifficulty",
    "remainingUndos",
    "currentPlayer",
    "board",
    "history",
)


class RecordError(ValueError):
    """Raised when a saved game cannot be turned back into a game state."""


@dataclass
class SaveData:
    ai_enabled: bool = True
    ai_difficulty: int = 3
    undo_limit: int = 3
    remaining_undos: int = 3
    current_player: Stone = Stone.BLACK
    board: list[list[int]] = field(default_factory=lambda: [[0] * BOARD_SIZE for _ in range(BOARD_SIZE)])
    history: list[Move] = field(default_factory=list)
    strategy: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_game(
        cls,
        game: GomokuGameState,
        ai_enabled: bool,
        ai_difficulty: int,
        undo_limit: int,
        remaining_undos: int,
        strategy: str = "",
    ) -> SaveData:
        grid = [[cell.value for cell in row] for row in game.board.snapshot()]
        return cls(
            ai_enabled=ai_enabled,
            ai_difficulty=ai_difficulty,
            undo_limit=undo_limit,
            remaining_undos=remaining_undos,
            current_player=game.current_player,
            board=grid,
            history=list(game.moves),
            strategy=strategy,
        )

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "isAIEnabled": self.ai_enabled,
            "aiDifficulty": self.ai_difficulty,
            "undoLimit": self.undo_limit,
            "remainingUndos": self.remaining_undos,
            "currentPlayer": self.current_player.value,
            "strategy": self.strategy,
            "board": [list(row) for row in self.board],
            "history": [
                {"row": m.row, "col": m.col, "player": m.stone.value} for m in self.history
            ],
        }

    @classmethod
    def from_dict(cls, record: dict) -> SaveData:
        missing = [k for k in REQUIRED_KEYS if k not in record]
        if missing:
            raise RecordError(f"Saved game is missing keys: {', '.join(missing)}")

        board = record["board"]
        size = len(board)
        if size == 0 or any(not isinstance(row, list) or len(row) != size for row in board):
            raise RecordError("Saved board must be a non-empty square grid")
        try:
            grid = [[Stone(int(cell)).value for cell in row] for row in board]
            history = [
                Move(int(m["row"]), int(m["col"]), Stone(int(m["player"])))
                for m in record["history"]
            ]
            current = Stone(int(record["currentPlayer"]))
        except (KeyError, TypeError, ValueError) as e:
            raise RecordError(f"Malformed saved game: {e}") from e

        if current is Stone.EMPTY:
            raise RecordError("currentPlayer must be Black or White")
        for m in history:
            if not (0 <= m.row < size and 0 <= m.col < size):
                raise RecordError(f"History move out of range: {m}")
            if m.stone is Stone.EMPTY:
                raise RecordError(f"History move has no player: {m}")

        timestamp = datetime.now()
        if record.get("timestamp"):
            try:
                timestamp = datetime.fromisoformat(record["timestamp"])
            except ValueError:
                logger.warning("Ignoring unparseable timestamp %r", record["timestamp"])

        remaining = int(record["remainingUndos"])
        return cls(
            ai_enabled=bool(record["isAIEnabled"]),
            ai_difficulty=int(record["aiDifficulty"]),
            undo_limit=int(record.get("undoLimit", remaining)),
            remaining_undos=remaining,
            current_player=current,
            board=grid,
            history=history,
            strategy=str(record.get("strategy", "")),
            timestamp=timestamp,
        )


def _ensure_dir() -> None:
    SAVED_GAMES_DIR.mkdir(exist_ok=True)


def save_game(data: SaveData, filename: Optional[str] = None) -> str:
    """Save a game to a JSON file. Returns the filename."""
    _ensure_dir()
    if not filename:
        filename = f"{data.timestamp.strftime('%Y%m%d_%H%M%S')}_gomoku.json"
    if not filename.endswith(".json"):
        filename += ".json"
    # Sanitize filename
    filename = filename.replace(" ", "_").replace("(", "").replace(")", "")

    filepath = SAVED_GAMES_DIR / filename
    with open(filepath, "w") as f:
        json.dump(data.to_dict(), f, indent=2)

    logger.info("Saved game with %d moves to %s", len(data.history), filepath)
    return filename


def load_game(filename: str) -> SaveData:
    """Load a game record from a JSON file."""
    filepath = SAVED_GAMES_DIR / filename
    with open(filepath) as f:
        try:
            record = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordError(f"{filename} is not valid JSON: {e}") from e
    if not isinstance(record, dict):
        raise RecordError(f"{filename} does not hold a game record")
    return SaveData.from_dict(record)


def list_saved_games() -> list[str]:
    """Return sorted list of saved game filenames (newest first)."""
    _ensure_dir()
    files = [f for f in os.listdir(SAVED_GAMES_DIR) if f.endswith(".json")]
    files.sort(reverse=True)
    return files


def restore_game(data: SaveData) -> GomokuGameState:
    """Rebuild the saved position as a game state that strategies can search."""
    return GomokuGameState.from_snapshot(data.board, data.current_player, data.history)


def replay_to_move(data: SaveData, move_index: int) -> GomokuGameState:
    """Rebuild a GomokuGameState with moves replayed up to move_index (inclusive).

    move_index = -1 means empty board, 0 means first move, etc.
    """
    game = GomokuGameState(len(data.board))
    for move in data.history[: max(0, move_index + 1)]:
        if game.is_over:
            break
        # History may not alternate strictly (e.g. edited saves); honour the recorded stone.
        game.current_player = move.stone
        game.apply_move(move.point)
    return game

