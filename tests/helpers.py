from __future__ import annotations

from typing import Dict

from checkers.board import Board
from checkers.game import Game
from checkers.pieces import Piece, Side
from checkers.rules import Position
from checkers.state import GameState


def make_game(pieces: Dict[Position, Piece], to_move: Side = Side.RED) -> Game:
    """Build a game from an explicit piece placement."""
    return Game(GameState(board=Board.from_pieces(pieces), current_player=to_move))
