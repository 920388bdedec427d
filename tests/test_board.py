from checkers.board import Board
from checkers.pieces import BLACK_MAN, RED_KING, RED_MAN, Side
from checkers.rules import is_playable


def test_initial_position():
    board = Board.initial()
    empty = 0
    for row, col in board.iter_positions():
        cell = board.get((row, col))
        if cell is None:
            empty += 1
            continue
        assert is_playable((row, col))
        if row < 3:
            assert cell == BLACK_MAN
        else:
            assert 5 <= row <= 7
            assert cell == RED_MAN
    assert empty == 40
    assert board.count_pieces() == {Side.RED: 12, Side.BLACK: 12}


def test_out_of_range_reads_are_empty():
    board = Board.initial()
    for pos in [(-1, 0), (0, -1), (8, 1), (1, 8), (-2, -2), (9, 9)]:
        assert board.get(pos) is None


def test_set_overwrites_cell():
    board = Board.empty()
    board.set((4, 3), RED_KING)
    assert board.get((4, 3)) == RED_KING
    board.set((4, 3), None)
    assert board.get((4, 3)) is None
    assert board.count_pieces() == {Side.RED: 0, Side.BLACK: 0}


def test_clone_is_independent():
    board = Board.initial()
    copy = board.clone()
    assert copy == board
    copy.set((5, 0), None)
    assert copy != board
    assert board.get((5, 0)) == RED_MAN


def test_iter_pieces_filters_by_side():
    board = Board.from_pieces({(3, 2): RED_MAN, (2, 3): BLACK_MAN})
    assert list(board.iter_pieces(Side.RED)) == [((3, 2), RED_MAN)]
    assert list(board.iter_pieces()) == [((2, 3), BLACK_MAN), ((3, 2), RED_MAN)]


def test_render_ascii_labels():
    text = Board.initial().render_ascii()
    lines = text.splitlines()
    assert lines[0].startswith("8")
    assert "b" in lines[0]
    assert "r" in lines[7]
    assert lines[-1].strip() == "a b c d e f g h"
