"""Checkers board model: an 8x8 grid of optional pieces."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from checkers.pieces import Piece, Rank, Side
from checkers.rules import BOARD_SIZE, Position, home_rows, in_bounds, is_playable

Cell = Optional[Piece]


class Board:
    """8x8 checkers grid.

    Reads outside the board return ``None`` so that neighbour and jump probing
    near the edges needs no extra bounds branches. Writes are unchecked.
    """

    rows: int = BOARD_SIZE
    cols: int = BOARD_SIZE

    def __init__(self, grid: Optional[Iterable[Iterable[Cell]]] = None) -> None:
        if grid is None:
            self.grid: List[List[Cell]] = [[None for _ in range(self.cols)] for _ in range(self.rows)]
        else:
            self.grid = [list(row) for row in grid]

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def initial(cls) -> "Board":
        """Standard starting position: Black on rows 0-2, Red on rows 5-7."""
        board = cls()
        for side in (Side.BLACK, Side.RED):
            for row in home_rows(side):
                for col in range(cls.cols):
                    if is_playable((row, col)):
                        board.grid[row][col] = Piece(side=side, rank=Rank.MAN)
        return board

    @classmethod
    def from_pieces(cls, pieces: Dict[Position, Piece]) -> "Board":
        """Build a board holding exactly the given pieces."""
        board = cls()
        for pos, piece in pieces.items():
            board.set(pos, piece)
        return board

    def clone(self) -> "Board":
        """Copy the grid. Pieces are immutable and can be shared."""
        return Board(self.grid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __repr__(self) -> str:
        return f"Board(\n{self.render_ascii()}\n)"

    def iter_positions(self) -> Iterator[Position]:
        """Yield all board positions."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def get(self, pos: Position) -> Cell:
        """Return the piece at a position, or None when empty or off the board."""
        if not in_bounds(pos):
            return None
        row, col = pos
        return self.grid[row][col]

    def set(self, pos: Position, value: Cell) -> None:
        """Overwrite a cell. Callers only write in-range playable squares."""
        row, col = pos
        self.grid[row][col] = value

    def iter_pieces(self, side: Optional[Side] = None) -> Iterator[Tuple[Position, Piece]]:
        """Yield (position, piece) for occupied squares, optionally for one side."""
        for pos in self.iter_positions():
            cell = self.get(pos)
            if cell is None:
                continue
            if side is not None and cell.side is not side:
                continue
            yield pos, cell

    def count_pieces(self) -> Dict[Side, int]:
        """Count pieces per side in a single scan."""
        counts = {Side.RED: 0, Side.BLACK: 0}
        for row in self.grid:
            for cell in row:
                if cell is not None:
                    counts[cell.side] += 1
        return counts

    def render_ascii(self) -> str:
        """Return a human-readable board with algebraic file/rank labels."""
        lines: List[str] = []
        for row in range(self.rows):
            row_cells: List[str] = []
            for col in range(self.cols):
                cell = self.grid[row][col]
                if cell is not None:
                    row_cells.append(cell.symbol)
                elif is_playable((row, col)):
                    row_cells.append(".")
                else:
                    row_cells.append(" ")
            lines.append(f"{self.rows - row}  " + " ".join(row_cells))
        lines.append("   " + " ".join("abcdefgh"))
        return "\n".join(lines)
