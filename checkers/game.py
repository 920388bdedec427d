"""Checkers turn state machine: move application, promotion and win detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from checkers.board import Board
from checkers.codec import from_payload
from checkers.moves import Move, all_moves_for, has_jump, moves_for
from checkers.pieces import Piece, Rank, Side
from checkers.rules import Position, promotion_row
from checkers.state import AwaitingMove, Finished, ForcedContinuation, GameState, Phase

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveApplied:
    """Emitted after a move has been applied to the board."""

    move: Move
    piece: Piece
    promoted: bool
    continues: bool


Listener = Callable[[MoveApplied], None]


class Game:
    """Authoritative checkers game.

    Each table owns its own instance; collaborators receive it explicitly.
    """

    def __init__(self, state: Optional[GameState] = None) -> None:
        self._state = state.copy() if state is not None else GameState()
        self._listeners: List[Listener] = []

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def current_player(self) -> Side:
        return self._state.current_player

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def continuation(self) -> Optional[Position]:
        return self._state.continuation

    @property
    def winner(self) -> Optional[Side]:
        return self._state.winner

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def get_piece(self, row: int, col: int) -> Optional[Piece]:
        return self.board.get((row, col))

    def is_own_piece(self, piece: Optional[Piece]) -> bool:
        return piece is not None and piece.side is self.current_player

    def is_opponent_piece(self, piece: Optional[Piece]) -> bool:
        return piece is not None and piece.side is not self.current_player

    def get_valid_moves(self, row: int, col: int) -> List[Move]:
        """Raw moves for one piece of the side to move, without forced-capture filtering."""
        return moves_for(self.board, (row, col), self.current_player)

    def get_all_valid_moves(self) -> List[Move]:
        """Legal move set for the side to move."""
        if self.winner is not None:
            return []
        return all_moves_for(self.board, self.current_player, self.continuation)

    def make_move(self, from_pos: Position, to_pos: Position) -> bool:
        """Apply the legal move matching ``from_pos``/``to_pos``.

        Returns False and leaves the state untouched when the game is over or
        no legal move matches. Kind and captures always come from the legal set.
        """
        if isinstance(self.phase, Finished):
            LOGGER.debug("Rejected %s -> %s: game is over", from_pos, to_pos)
            return False

        from_pos = tuple(from_pos)
        to_pos = tuple(to_pos)
        legal = all_moves_for(self.board, self.current_player, self.continuation)
        move = next((m for m in legal if m.from_pos == from_pos and m.to_pos == to_pos), None)
        if move is None:
            LOGGER.debug("Rejected %s -> %s for %s: not legal", from_pos, to_pos, self.current_player.value)
            return False

        piece, promoted = self._apply(move)

        continues = move.is_jump and has_jump(self.board, move.to_pos, self.current_player)
        if continues:
            self._state.phase = ForcedContinuation(piece=move.to_pos)
        else:
            self._state.current_player = self.current_player.opponent()
            self._state.phase = AwaitingMove()
            self._check_win_condition()

        event = MoveApplied(move=move, piece=piece, promoted=promoted, continues=continues)
        for listener in list(self._listeners):
            listener(event)
        return True

    def _apply(self, move: Move) -> Tuple[Piece, bool]:
        board = self.board
        piece = board.get(move.from_pos)
        if piece is None:
            raise RuntimeError(f"Legal move {move} starts on an empty square")
        if move.is_jump and len(move.captures) != 1:
            raise RuntimeError(f"Jump must capture exactly one square: {move}")

        board.set(move.to_pos, piece)
        board.set(move.from_pos, None)
        for captured in move.captures:
            board.set(captured, None)

        promoted = False
        if piece.rank is Rank.MAN and move.to_pos[0] == promotion_row(piece.side):
            piece = piece.promoted()
            board.set(move.to_pos, piece)
            promoted = True
        return piece, promoted

    def _check_win_condition(self) -> None:
        if self.winner is not None:
            return

        counts = self.board.count_pieces()
        if counts[Side.RED] == 0:
            self._finish(Side.BLACK, "no red pieces left")
            return
        if counts[Side.BLACK] == 0:
            self._finish(Side.RED, "no black pieces left")
            return

        if not all_moves_for(self.board, self.current_player, self.continuation):
            self._finish(self.current_player.opponent(), f"{self.current_player.value} has no legal moves")

    def _finish(self, winner: Side, reason: str) -> None:
        self._state.phase = Finished(winner=winner)
        LOGGER.info("Game over: %s wins (%s)", winner.value, reason)

    def get_board_state(self) -> GameState:
        """Return a detached copy of the full game state."""
        return self._state.copy()

    def load_board_state(self, state: Union[GameState, Mapping[str, Any]]) -> None:
        """Replace the whole state with ``state``.

        Mappings are validated with the snapshot codec first; on
        ``MalformedStateError`` the current state is left as it was.
        """
        if isinstance(state, GameState):
            loaded = state.copy()
        else:
            loaded = from_payload(state)
        self._state = loaded

    def reset(self) -> None:
        """Return to the starting position with Red to move."""
        self._state = GameState()
