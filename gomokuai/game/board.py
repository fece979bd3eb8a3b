from __future__ import annotations

from typing import Optional, Sequence

from .types import Move, Point, Stone, WinLine

BOARD_SIZE = 15
WIN_LENGTH = 5

# Column labels: A-O (skipping no letters for 15x15)
COL_LABELS = "ABCDEFGHIJKLMNO"

# Vertical, horizontal, diagonal, anti-diagonal. Win detection reports the
# first qualifying axis in this order.
AXES = [(1, 0), (0, 1), (1, 1), (1, -1)]

Grid = list[list[Stone]]


def parse_coordinate(text: str, size: int = BOARD_SIZE) -> Optional[Point]:
    """Parse a coordinate string like 'H8' or 'A15' into a 0-indexed Point.

    Column is a letter, row is a number 1-size counted from the top.
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS[:size]:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= size):
        return None
    return Point(row - 1, COL_LABELS.index(col_char))


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'H8'."""
    return f"{COL_LABELS[point.col]}{point.row + 1}"


def empty_grid(size: int = BOARD_SIZE) -> Grid:
    return [[Stone.EMPTY] * size for _ in range(size)]


def copy_grid(grid: Sequence[Sequence[Stone]]) -> Grid:
    return [list(row) for row in grid]


def find_win_line(grid: Sequence[Sequence[Stone]], row: int, col: int) -> Optional[WinLine]:
    """Return the five-or-more line through the stone at (row, col), if any.

    Only exact contiguous runs count. The extremes of the run are recorded as
    the WinLine; the first axis that qualifies wins.
    """
    size = len(grid)
    if not (0 <= row < size and 0 <= col < size):
        return None
    owner = grid[row][col]
    if owner is Stone.EMPTY:
        return None

    for dr, dc in AXES:
        count = 1
        # Count forward
        end = Point(row, col)
        r, c = row + dr, col + dc
        while 0 <= r < size and 0 <= c < size and grid[r][c] is owner:
            end = Point(r, c)
            count += 1
            r += dr
            c += dc
        # Count backward
        start = Point(row, col)
        r, c = row - dr, col - dc
        while 0 <= r < size and 0 <= c < size and grid[r][c] is owner:
            start = Point(r, c)
            count += 1
            r -= dr
            c -= dc
        if count >= WIN_LENGTH:
            return WinLine(start, end)
    return None


class Board:
    """Square Gomoku board holding one Stone per cell."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self._size = size
        self._grid: Grid = empty_grid(size)

    @property
    def size(self) -> int:
        return self._size

    def is_on_grid(self, point: Point) -> bool:
        return 0 <= point.row < self._size and 0 <= point.col < self._size

    def get_piece(self, row: int, col: int) -> Stone:
        if not (0 <= row < self._size and 0 <= col < self._size):
            return Stone.EMPTY
        return self._grid[row][col]

    def get(self, point: Point) -> Stone:
        return self.get_piece(point.row, point.col)

    def is_empty(self, point: Point) -> bool:
        return self.is_on_grid(point) and self._grid[point.row][point.col] is Stone.EMPTY

    def set_piece(self, row: int, col: int, stone: Stone) -> bool:
        """Write a cell. Off-grid writes are refused and return False."""
        if not (0 <= row < self._size and 0 <= col < self._size):
            return False
        self._grid[row][col] = stone
        return True

    def place(self, point: Point, stone: Stone) -> None:
        assert self.is_empty(point), f"{format_point(point)} is occupied or off the grid"
        self._grid[point.row][point.col] = stone

    def remove(self, point: Point) -> None:
        self.set_piece(point.row, point.col, Stone.EMPTY)

    @property
    def occupied_count(self) -> int:
        return sum(1 for row in self._grid for cell in row if cell is not Stone.EMPTY)

    @property
    def is_full(self) -> bool:
        return all(cell is not Stone.EMPTY for row in self._grid for cell in row)

    def empty_points(self) -> list[Point]:
        return [
            Point(r, c)
            for r in range(self._size)
            for c in range(self._size)
            if self._grid[r][c] is Stone.EMPTY
        ]

    def snapshot(self) -> Grid:
        """Deep copy of the grid."""
        return copy_grid(self._grid)

    def load_snapshot(self, grid: Sequence[Sequence]) -> None:
        """Replace the grid from a square sequence of Stones or their int values."""
        size = len(grid)
        if size == 0 or any(len(row) != size for row in grid):
            raise ValueError("Board snapshot must be a non-empty square grid")
        self._size = size
        self._grid = [
            [cell if isinstance(cell, Stone) else Stone(int(cell)) for cell in row]
            for row in grid
        ]

    def check_win(self, row: int, col: int) -> Optional[WinLine]:
        return find_win_line(self._grid, row, col)


class GomokuGameState:
    """Full game state for Gomoku (15x15, 5-in-a-row)."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self.board = Board(size)
        self.current_player = Stone.BLACK
        self.moves: list[Move] = []
        self._winner: Optional[Stone] = None
        self._win_line: Optional[WinLine] = None
        self._is_over = False

    @classmethod
    def from_snapshot(
        cls,
        grid: Sequence[Sequence],
        current_player: Stone,
        history: Sequence[Move] = (),
    ) -> GomokuGameState:
        """Rebuild a state from a saved grid and move list.

        The grid is authoritative; the history is kept for undo. The terminal
        state is recomputed from the last move in the history.
        """
        game = cls(len(grid))
        game.board.load_snapshot(grid)
        game.current_player = current_player
        game.moves = list(history)
        if game.moves:
            last = game.moves[-1]
            line = game.board.check_win(last.row, last.col)
            if line is not None:
                game._winner = game.board.get_piece(last.row, last.col)
                game._win_line = line
                game._is_over = True
        if not game._is_over and game.board.is_full:
            game._is_over = True
        return game

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Stone]:
        return self._winner

    @property
    def win_line(self) -> Optional[WinLine]:
        return self._win_line

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    def legal_moves(self) -> list[Point]:
        if self._is_over:
            return []
        return self.board.empty_points()

    def apply_move(self, point: Point) -> None:
        """Place a stone for the current player and advance the turn."""
        assert not self._is_over, "Game is already over"
        assert self.board.is_on_grid(point), f"Point {point} is off the grid"
        assert self.board.is_empty(point), f"Point {format_point(point)} is occupied"

        player = self.current_player
        self.board.place(point, player)
        self.moves.append(Move(point.row, point.col, player))

        line = self.board.check_win(point.row, point.col)
        if line is not None:
            self._winner = player
            self._win_line = line
            self._is_over = True
        elif self.board.is_full:
            self._is_over = True

        self.current_player = self.current_player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.point)
        self.current_player = move.stone
        self._winner = None
        self._win_line = None
        self._is_over = False
        return move
