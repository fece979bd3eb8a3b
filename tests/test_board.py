import pytest

from gomokuai.game.board import (
    BOARD_SIZE,
    Board,
    GomokuGameState,
    empty_grid,
    find_win_line,
    format_point,
    parse_coordinate,
)
from gomokuai.game.types import Move, Point, Stone, WinLine


class TestParseCoordinate:
    def test_valid(self):
        assert parse_coordinate("A1") == Point(0, 0)
        assert parse_coordinate("H8") == Point(7, 7)
        assert parse_coordinate("O15") == Point(14, 14)
        assert parse_coordinate("h8") == Point(7, 7)  # case insensitive

    def test_invalid(self):
        assert parse_coordinate("") is None
        assert parse_coordinate("Z1") is None
        assert parse_coordinate("A0") is None
        assert parse_coordinate("A16") is None
        assert parse_coordinate("XX") is None

    def test_small_board(self):
        assert parse_coordinate("F1", size=5) is None
        assert parse_coordinate("E5", size=5) == Point(4, 4)


class TestFormatPoint:
    def test_basic(self):
        assert format_point(Point(0, 0)) == "A1"
        assert format_point(Point(7, 7)) == "H8"
        assert format_point(Point(14, 14)) == "O15"


class TestFindWinLine:
    def test_empty_cell_is_not_a_win(self):
        assert find_win_line(empty_grid(), 7, 7) is None

    def test_off_grid_is_not_a_win(self):
        assert find_win_line(empty_grid(), -1, 20) is None

    def test_four_is_not_a_win(self):
        grid = empty_grid()
        for c in range(3, 7):
            grid[7][c] = Stone.BLACK
        assert find_win_line(grid, 7, 5) is None

    def test_records_extremes_of_run(self):
        grid = empty_grid()
        for c in range(3, 8):
            grid[7][c] = Stone.WHITE
        line = find_win_line(grid, 7, 5)
        assert line == WinLine(Point(7, 3), Point(7, 7))
        assert line.length == 5
        assert Point(7, 5) in line.points()

    def test_overline_counts(self):
        grid = empty_grid()
        for r in range(2, 9):
            grid[r][4] = Stone.BLACK
        line = find_win_line(grid, 5, 4)
        assert line.length == 7

    def test_vertical_reported_before_horizontal(self):
        grid = empty_grid()
        for i in range(5):
            grid[5 + i][7] = Stone.BLACK
            grid[7][5 + i] = Stone.BLACK
        line = find_win_line(grid, 7, 7)
        assert line.start.col == line.end.col == 7

    def test_gap_breaks_run(self):
        grid = empty_grid()
        for c in (2, 3, 5, 6, 7):
            grid[0][c] = Stone.BLACK
        assert find_win_line(grid, 0, 3) is None


class TestBoard:
    def test_place_and_get(self):
        b = Board()
        p = Point(3, 4)
        b.place(p, Stone.BLACK)
        assert b.get(p) is Stone.BLACK
        assert b.get_piece(3, 4) is Stone.BLACK
        assert not b.is_empty(p)

    def test_remove(self):
        b = Board()
        p = Point(3, 4)
        b.place(p, Stone.BLACK)
        b.remove(p)
        assert b.is_empty(p)

    def test_is_on_grid(self):
        b = Board()
        assert b.is_on_grid(Point(0, 0))
        assert b.is_on_grid(Point(14, 14))
        assert not b.is_on_grid(Point(-1, 0))
        assert not b.is_on_grid(Point(0, 15))

    def test_off_grid_write_is_refused(self):
        b = Board()
        assert b.set_piece(15, 0, Stone.BLACK) is False
        assert b.set_piece(-1, 3, Stone.BLACK) is False
        assert b.occupied_count == 0
        assert b.get_piece(15, 0) is Stone.EMPTY

    def test_snapshot_is_a_copy(self):
        b = Board()
        b.set_piece(7, 7, Stone.BLACK)
        snap = b.snapshot()
        snap[7][7] = Stone.WHITE
        snap[0][0] = Stone.WHITE
        assert b.get_piece(7, 7) is Stone.BLACK
        assert b.get_piece(0, 0) is Stone.EMPTY

    def test_load_snapshot_accepts_ints(self):
        b = Board()
        grid = [[0] * 5 for _ in range(5)]
        grid[2][2] = 2
        b.load_snapshot(grid)
        assert b.size == 5
        assert b.get_piece(2, 2) is Stone.WHITE

    def test_load_snapshot_rejects_ragged_grid(self):
        b = Board()
        with pytest.raises(ValueError):
            b.load_snapshot([[0, 0], [0]])

    def test_full_board(self):
        b = Board(size=3)
        for r in range(3):
            for c in range(3):
                b.set_piece(r, c, Stone.BLACK if (r + c) % 2 else Stone.WHITE)
        assert b.is_full
        assert b.empty_points() == []

    def test_check_win(self):
        b = Board()
        for r in range(5):
            b.set_piece(r, r, Stone.BLACK)
        assert b.check_win(2, 2) == WinLine(Point(0, 0), Point(4, 4))


class TestGomokuGameState:
    def test_initial_state(self):
        g = GomokuGameState()
        assert g.current_player is Stone.BLACK
        assert not g.is_over
        assert g.winner is None
        assert g.win_line is None
        assert len(g.legal_moves()) == BOARD_SIZE * BOARD_SIZE

    def test_alternating_turns(self):
        g = GomokuGameState()
        g.apply_move(Point(5, 5))
        assert g.current_player is Stone.WHITE
        g.apply_move(Point(5, 6))
        assert g.current_player is Stone.BLACK
        assert g.moves == [Move(5, 5, Stone.BLACK), Move(5, 6, Stone.WHITE)]

    def test_horizontal_win(self):
        g = GomokuGameState()
        # Black: row 0, cols 0-4. White: row 1, cols 0-3.
        for i in range(4):
            g.apply_move(Point(0, i))  # Black
            g.apply_move(Point(1, i))  # White
        g.apply_move(Point(0, 4))  # Black wins
        assert g.is_over
        assert g.winner is Stone.BLACK
        assert g.win_line == WinLine(Point(0, 0), Point(0, 4))

    def test_vertical_win(self):
        g = GomokuGameState()
        for i in range(4):
            g.apply_move(Point(i, 0))  # Black
            g.apply_move(Point(i, 1))  # White
        g.apply_move(Point(4, 0))  # Black wins
        assert g.is_over
        assert g.winner is Stone.BLACK

    def test_anti_diagonal_win(self):
        g = GomokuGameState()
        moves_black = [Point(i, 4 - i) for i in range(5)]
        moves_white = [Point(i, 9) for i in range(4)]
        for i in range(4):
            g.apply_move(moves_black[i])
            g.apply_move(moves_white[i])
        g.apply_move(moves_black[4])
        assert g.is_over
        assert g.winner is Stone.BLACK
        assert g.win_line.length == 5

    def test_no_premature_win(self):
        """4 in a row should NOT trigger a win."""
        g = GomokuGameState()
        for i in range(4):
            g.apply_move(Point(0, i))
            g.apply_move(Point(1, i))
        assert not g.is_over

    def test_undo_move(self):
        g = GomokuGameState()
        g.apply_move(Point(5, 5))
        g.apply_move(Point(5, 6))
        move = g.undo_move()
        assert move is not None
        assert move.point == Point(5, 6)
        assert g.current_player is Stone.WHITE
        assert g.board.is_empty(Point(5, 6))

    def test_undo_reverses_win(self):
        g = GomokuGameState()
        for i in range(4):
            g.apply_move(Point(0, i))
            g.apply_move(Point(1, i))
        g.apply_move(Point(0, 4))
        assert g.is_over

        g.undo_move()
        assert not g.is_over
        assert g.winner is None
        assert g.win_line is None

    def test_undo_empty_returns_none(self):
        g = GomokuGameState()
        assert g.undo_move() is None

    def test_cannot_play_on_occupied(self):
        g = GomokuGameState()
        g.apply_move(Point(5, 5))
        with pytest.raises(AssertionError):
            g.apply_move(Point(5, 5))

    def test_cannot_play_after_game_over(self):
        g = GomokuGameState()
        for i in range(4):
            g.apply_move(Point(0, i))
            g.apply_move(Point(1, i))
        g.apply_move(Point(0, 4))
        with pytest.raises(AssertionError):
            g.apply_move(Point(3, 1))
        assert g.legal_moves() == []

    def test_from_snapshot_recomputes_win(self):
        grid = empty_grid()
        history = []
        for c in range(5):
            grid[3][c] = Stone.WHITE
            history.append(Move(3, c, Stone.WHITE))
        g = GomokuGameState.from_snapshot(grid, Stone.BLACK, history)
        assert g.is_over
        assert g.winner is Stone.WHITE
        assert g.win_line == WinLine(Point(3, 0), Point(3, 4))

    def test_from_snapshot_in_progress(self):
        grid = empty_grid()
        grid[7][7] = Stone.BLACK
        g = GomokuGameState.from_snapshot(grid, Stone.WHITE, [Move(7, 7, Stone.BLACK)])
        assert not g.is_over
        assert g.current_player is Stone.WHITE
        g.undo_move()
        assert g.board.occupied_count == 0
        assert g.current_player is Stone.BLACK
