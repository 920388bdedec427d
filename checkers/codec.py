"""Snapshot codec for replicating game state between engine instances.

Wire shape::

    {
      "board": [[null, "b", ...], ...],   # 8 rows x 8 columns, codes r R b B
      "currentPlayer": "red" | "black",
      "continuation": [row, col] | null,
      "winner": "red" | "black" | null
    }

Snapshots written by older clients carry ``mustJump``/``selectedPiece``
instead of ``continuation``; those are still accepted.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from checkers.board import Board
from checkers.pieces import Side, piece_from_code, piece_to_code
from checkers.rules import BOARD_SIZE, Position, in_bounds
from checkers.state import AwaitingMove, Finished, ForcedContinuation, GameState, Phase


class MalformedStateError(ValueError):
    """Raised when a snapshot cannot be decoded into a valid game state."""


def to_payload(state: GameState) -> Dict[str, Any]:
    """Convert a state into the JSON-ready snapshot mapping."""
    board: List[List[Optional[str]]] = []
    for row in state.board.grid:
        board.append([None if cell is None else piece_to_code(cell) for cell in row])
    continuation = state.continuation
    winner = state.winner
    return {
        "board": board,
        "currentPlayer": state.current_player.value,
        "continuation": None if continuation is None else [continuation[0], continuation[1]],
        "winner": None if winner is None else winner.value,
    }


def encode(state: GameState) -> str:
    """Serialize a state to compact, deterministic JSON text."""
    return json.dumps(to_payload(state), separators=(",", ":"))


def decode(text: str) -> GameState:
    """Parse snapshot text. Raises MalformedStateError on any defect."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedStateError(f"Snapshot is not valid JSON: {exc}") from exc
    return from_payload(payload)


def from_payload(payload: Mapping[str, Any]) -> GameState:
    """Validate a snapshot mapping and build a fresh GameState from it."""
    if not isinstance(payload, Mapping):
        raise MalformedStateError(f"Snapshot must be an object, got {type(payload).__name__}")

    board = _decode_board(payload.get("board"))
    current_player = _decode_side(payload.get("currentPlayer"), "currentPlayer", nullable=False)
    winner = _decode_side(payload.get("winner"), "winner", nullable=True)
    continuation = _decode_continuation(payload)

    phase: Phase
    if winner is not None:
        if continuation is not None:
            raise MalformedStateError("Snapshot has both a winner and a pending continuation")
        phase = Finished(winner=winner)
    elif continuation is not None:
        piece = board.get(continuation)
        if piece is None or piece.side is not current_player:
            raise MalformedStateError(
                f"Continuation square {list(continuation)} does not hold a {current_player.value} piece"
            )
        phase = ForcedContinuation(piece=continuation)
    else:
        phase = AwaitingMove()

    return GameState(board=board, current_player=current_player, phase=phase)


def _decode_board(raw: Any) -> Board:
    if not isinstance(raw, list) or len(raw) != BOARD_SIZE:
        raise MalformedStateError(f"Board must be a list of {BOARD_SIZE} rows")
    board = Board.empty()
    for row, raw_row in enumerate(raw):
        if not isinstance(raw_row, list) or len(raw_row) != BOARD_SIZE:
            raise MalformedStateError(f"Board row {row} must be a list of {BOARD_SIZE} cells")
        for col, code in enumerate(raw_row):
            if code is None:
                continue
            piece = piece_from_code(code) if isinstance(code, str) else None
            if piece is None:
                raise MalformedStateError(f"Unknown piece code {code!r} at [{row}, {col}]")
            board.set((row, col), piece)
    return board


def _decode_side(raw: Any, field_name: str, nullable: bool) -> Optional[Side]:
    if raw is None and nullable:
        return None
    if isinstance(raw, str):
        try:
            return Side(raw)
        except ValueError:
            pass
    raise MalformedStateError(f"{field_name} must be 'red' or 'black', got {raw!r}")


def _decode_continuation(payload: Mapping[str, Any]) -> Optional[Position]:
    if "continuation" in payload:
        raw = payload["continuation"]
    elif "mustJump" in payload:
        must_jump = payload["mustJump"]
        if not isinstance(must_jump, bool):
            raise MalformedStateError(f"mustJump must be a boolean, got {must_jump!r}")
        raw = payload.get("selectedPiece") if must_jump else None
        if must_jump and raw is None:
            raise MalformedStateError("mustJump is set without a selectedPiece")
    else:
        raw = None

    if raw is None:
        return None
    if (
        not isinstance(raw, list)
        or len(raw) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in raw)
    ):
        raise MalformedStateError(f"continuation must be a [row, col] pair, got {raw!r}")
    pos = (raw[0], raw[1])
    if not in_bounds(pos):
        raise MalformedStateError(f"continuation {raw!r} is off the board")
    return pos
