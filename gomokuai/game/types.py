from __future__ import annotations

import enum
from typing import NamedTuple


class Stone(enum.Enum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def other(self) -> Stone:
        if self is Stone.BLACK:
            return Stone.WHITE
        if self is Stone.WHITE:
            return Stone.BLACK
        return Stone.EMPTY

    def __str__(self) -> str:
        return self.name.capitalize()


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = top
    col: int  # 0-indexed, 0 = left


class Move(NamedTuple):
    row: int
    col: int
    stone: Stone = Stone.EMPTY

    @property
    def point(self) -> Point:
        return Point(self.row, self.col)

    @property
    def is_valid(self) -> bool:
        """False for the NO_MOVE sentinel (or any negative coordinate)."""
        return self.row >= 0 and self.col >= 0


NO_MOVE = Move(-1, -1, Stone.EMPTY)


class WinLine(NamedTuple):
    start: Point
    end: Point

    @property
    def length(self) -> int:
        return max(abs(self.end.row - self.start.row), abs(self.end.col - self.start.col)) + 1

    def points(self) -> list[Point]:
        n = self.length
        dr = (self.end.row > self.start.row) - (self.end.row < self.start.row)
        dc = (self.end.col > self.start.col) - (self.end.col < self.start.col)
        return [Point(self.start.row + dr * i, self.start.col + dc * i) for i in range(n)]
