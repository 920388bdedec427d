"""Legal move generation with forced capture and multi-jump continuation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

import numpy as np

from checkers.board import Board
from checkers.pieces import Piece, Side
from checkers.rules import BOARD_SIZE, COLUMN_DIRECTIONS, Position, forward_step, in_bounds


class MoveKind(str, Enum):
    """Kind of checkers move."""

    STEP = "step"
    JUMP = "jump"


@dataclass(frozen=True)
class Move:
    """A single step or a single jump.

    A multi-jump is played as a chain of Jump moves by the same piece.
    """

    from_pos: Position
    to_pos: Position
    kind: MoveKind = MoveKind.STEP
    captures: Tuple[Position, ...] = ()

    @property
    def is_jump(self) -> bool:
        return self.kind is MoveKind.JUMP


def row_directions(piece: Piece) -> Tuple[int, ...]:
    """Row directions a piece may travel in."""
    forward = forward_step(piece.side)
    if piece.is_king:
        return (forward, -forward)
    return (forward,)


def moves_for(board: Board, pos: Position, current_player: Side) -> List[Move]:
    """Generate steps and jumps for the piece at ``pos``.

    Returns an empty list when the square is empty or holds a piece that does
    not belong to ``current_player``. No forced-capture filtering happens here.
    """
    piece = board.get(pos)
    if piece is None or piece.side is not current_player:
        return []

    row, col = pos
    piece_moves: List[Move] = []
    for dr in row_directions(piece):
        for dc in COLUMN_DIRECTIONS:
            step_to = (row + dr, col + dc)
            if in_bounds(step_to) and board.get(step_to) is None:
                piece_moves.append(Move(from_pos=pos, to_pos=step_to, kind=MoveKind.STEP))

            jump_to = (row + 2 * dr, col + 2 * dc)
            if not in_bounds(jump_to):
                continue
            jumped = board.get(step_to)
            if jumped is not None and jumped.side is not current_player and board.get(jump_to) is None:
                piece_moves.append(
                    Move(from_pos=pos, to_pos=jump_to, kind=MoveKind.JUMP, captures=(step_to,))
                )
    return piece_moves


def has_jump(board: Board, pos: Position, current_player: Side) -> bool:
    """Return whether the piece at ``pos`` has at least one jump available."""
    return any(move.is_jump for move in moves_for(board, pos, current_player))


def all_moves_for(board: Board, player: Side, continuation: Optional[Position] = None) -> List[Move]:
    """Return the legal move set for ``player``.

    During a multi-jump only jumps by the continuing piece are legal.
    Otherwise, if any jump exists anywhere for the player, only jumps are
    legal; else all steps are.
    """
    if continuation is not None:
        return [move for move in moves_for(board, continuation, player) if move.is_jump]

    jumps: List[Move] = []
    steps: List[Move] = []
    for pos, _ in board.iter_pieces(player):
        for move in moves_for(board, pos, player):
            if move.is_jump:
                jumps.append(move)
            else:
                steps.append(move)
    return jumps if jumps else steps


def destination_mask(moves: Iterable[Move], from_pos: Optional[Position] = None) -> np.ndarray:
    """Return an (8, 8) boolean mask of destination squares.

    When ``from_pos`` is given only moves starting there are marked, which is
    what a host needs to highlight targets for a selected piece.
    """
    mask = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.bool_)
    for move in moves:
        if from_pos is not None and move.from_pos != from_pos:
            continue
        row, col = move.to_pos
        mask[row, col] = True
    return mask
