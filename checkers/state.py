"""Game state value types: the turn phase and the full snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from checkers.board import Board
from checkers.pieces import Side
from checkers.rules import Position


@dataclass(frozen=True)
class AwaitingMove:
    """The side to move may move any piece, subject to forced capture."""


@dataclass(frozen=True)
class ForcedContinuation:
    """A multi-jump is in progress; only ``piece`` may move, and only by jumping."""

    piece: Position


@dataclass(frozen=True)
class Finished:
    """Terminal phase. The winner is final for the session."""

    winner: Side


Phase = Union[AwaitingMove, ForcedContinuation, Finished]


@dataclass
class GameState:
    """Complete replicable game state."""

    board: Board = field(default_factory=Board.initial)
    current_player: Side = Side.RED
    phase: Phase = field(default_factory=AwaitingMove)

    @property
    def continuation(self) -> Optional[Position]:
        if isinstance(self.phase, ForcedContinuation):
            return self.phase.piece
        return None

    @property
    def winner(self) -> Optional[Side]:
        if isinstance(self.phase, Finished):
            return self.phase.winner
        return None

    def copy(self) -> "GameState":
        return GameState(board=self.board.clone(), current_player=self.current_player, phase=self.phase)
