"""Tests for candidate move generation."""

from gomokuai.agent.candidates import candidate_radius, center_point, generate_candidates
from gomokuai.game.board import empty_grid
from gomokuai.game.types import Point, Stone


def test_radius_by_difficulty():
    assert [candidate_radius(d) for d in range(1, 6)] == [2, 3, 3, 3, 3]


def test_empty_board_returns_center():
    assert generate_candidates(empty_grid(), 3) == [Point(7, 7)]
    assert generate_candidates(empty_grid(5), 3) == [center_point(5)] == [Point(2, 2)]


def test_single_stone_diamond():
    grid = empty_grid()
    grid[7][7] = Stone.BLACK
    near = generate_candidates(grid, 1)
    wide = generate_candidates(grid, 3)
    # Manhattan diamonds of radius 2 and 3, minus the stone itself
    assert len(near) == 12
    assert len(wide) == 24
    for pt in wide:
        assert abs(pt.row - 7) + abs(pt.col - 7) <= 3


def test_no_occupied_or_duplicates():
    grid = empty_grid()
    grid[7][7] = Stone.BLACK
    grid[7][8] = Stone.WHITE
    candidates = generate_candidates(grid, 2)
    assert Point(7, 7) not in candidates
    assert Point(7, 8) not in candidates
    assert len(candidates) == len(set(candidates))


def test_candidates_on_grid():
    grid = empty_grid()
    grid[0][0] = Stone.BLACK  # corner
    candidates = generate_candidates(grid, 5)
    assert candidates
    for pt in candidates:
        assert 0 <= pt.row < 15
        assert 0 <= pt.col < 15


def test_first_seen_order():
    grid = empty_grid()
    grid[7][7] = Stone.BLACK
    candidates = generate_candidates(grid, 1)
    assert candidates[0] == Point(5, 7)
    assert candidates[-1] == Point(9, 7)


def test_full_board_has_no_candidates():
    grid = [[Stone.BLACK if (r + c) % 2 else Stone.WHITE for c in range(5)] for r in range(5)]
    assert generate_candidates(grid, 3) == []


def test_nearly_full_board_finds_last_cell():
    grid = [[Stone.BLACK if (r + c) % 2 else Stone.WHITE for c in range(5)] for r in range(5)]
    grid[0][4] = Stone.EMPTY
    assert generate_candidates(grid, 1) == [Point(0, 4)]
