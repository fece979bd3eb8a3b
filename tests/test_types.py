from gomokuai.game.types import NO_MOVE, Move, Point, Stone, WinLine


def test_stone_other():
    assert Stone.BLACK.other is Stone.WHITE
    assert Stone.WHITE.other is Stone.BLACK
    assert Stone.EMPTY.other is Stone.EMPTY


def test_stone_str():
    assert str(Stone.BLACK) == "Black"
    assert str(Stone.WHITE) == "White"


def test_stone_values_match_saved_encoding():
    assert [s.value for s in Stone] == [0, 1, 2]


def test_point_is_namedtuple():
    p = Point(3, 5)
    assert p.row == 3
    assert p.col == 5
    assert p == Point(3, 5)


def test_move_point_and_validity():
    m = Move(7, 8, Stone.BLACK)
    assert m.point == Point(7, 8)
    assert m.is_valid
    assert not NO_MOVE.is_valid
    assert NO_MOVE.row == -1 and NO_MOVE.col == -1


def test_win_line_points():
    line = WinLine(Point(2, 6), Point(6, 2))
    assert line.length == 5
    assert line.points() == [Point(2, 6), Point(3, 5), Point(4, 4), Point(5, 3), Point(6, 2)]
