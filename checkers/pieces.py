"""Piece definitions and the single-character piece codes used on the wire."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Side(str, Enum):
    """Player side."""

    RED = "red"
    BLACK = "black"

    def opponent(self) -> "Side":
        return Side.BLACK if self is Side.RED else Side.RED


class Rank(str, Enum):
    """Checkers piece rank."""

    MAN = "man"
    KING = "king"


@dataclass(frozen=True)
class Piece:
    """A checker owned by one side."""

    side: Side
    rank: Rank = Rank.MAN

    @property
    def is_king(self) -> bool:
        return self.rank is Rank.KING

    def promoted(self) -> "Piece":
        """Return the crowned version of this piece."""
        return Piece(side=self.side, rank=Rank.KING)

    @property
    def symbol(self) -> str:
        return piece_to_code(self)


RED_MAN = Piece(Side.RED, Rank.MAN)
RED_KING = Piece(Side.RED, Rank.KING)
BLACK_MAN = Piece(Side.BLACK, Rank.MAN)
BLACK_KING = Piece(Side.BLACK, Rank.KING)

# Case carries rank, letter carries side. Only the codec and ASCII views use these.
PIECE_CODES: Dict[Piece, str] = {
    RED_MAN: "r",
    RED_KING: "R",
    BLACK_MAN: "b",
    BLACK_KING: "B",
}

_CODE_TO_PIECE: Dict[str, Piece] = {code: piece for piece, code in PIECE_CODES.items()}


def piece_to_code(piece: Piece) -> str:
    return PIECE_CODES[piece]


def piece_from_code(code: str) -> Optional[Piece]:
    """Return the piece for a wire code, or None when the code is unknown."""
    return _CODE_TO_PIECE.get(code)
