"""Rules helpers for 8x8 American checkers."""

from __future__ import annotations

from typing import Iterable, Tuple

from checkers.pieces import Side

BOARD_SIZE = 8
ROWS_PER_SIDE = 3

FILES = "abcdefgh"

Position = Tuple[int, int]

COLUMN_DIRECTIONS: Tuple[int, int] = (-1, 1)


def in_bounds(pos: Position) -> bool:
    """Return whether a position is inside the board."""
    row, col = pos
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_playable(pos: Position) -> bool:
    """Return whether a position is a dark (playable) square."""
    row, col = pos
    return (row + col) % 2 == 1


def forward_step(side: Side) -> int:
    """Row direction a man of this side travels in."""
    # Red starts on rows 5-7 and travels toward row 0.
    return -1 if side is Side.RED else 1


def promotion_row(side: Side) -> int:
    """Row on which a man of this side is crowned."""
    return 0 if side is Side.RED else BOARD_SIZE - 1


def home_rows(side: Side) -> Iterable[int]:
    """Rows a side occupies in the starting position."""
    if side is Side.BLACK:
        return range(0, ROWS_PER_SIDE)
    return range(BOARD_SIZE - ROWS_PER_SIDE, BOARD_SIZE)


def jumped_square(start: Position, end: Position) -> Position:
    """Return the square strictly between two positions two diagonals apart."""
    sr, sc = start
    er, ec = end
    if abs(er - sr) != 2 or abs(ec - sc) != 2:
        raise ValueError(f"Not a jump: {start} -> {end}")
    return ((sr + er) // 2, (sc + ec) // 2)


def square_name(pos: Position) -> str:
    """Return the algebraic name of a square, e.g. (5, 0) -> 'a3'."""
    if not in_bounds(pos):
        raise ValueError(f"Square off the board: {pos}")
    row, col = pos
    return f"{FILES[col]}{BOARD_SIZE - row}"


def parse_square(name: str) -> Position:
    """Parse an algebraic square name such as 'e3' into (row, col)."""
    text = name.strip().lower()
    if len(text) != 2 or text[0] not in FILES or not text[1].isdigit():
        raise ValueError(f"Bad square: {name!r}")
    rank = int(text[1])
    if not 1 <= rank <= BOARD_SIZE:
        raise ValueError(f"Bad square: {name!r}")
    return (BOARD_SIZE - rank, FILES.index(text[0]))
