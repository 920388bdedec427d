import json

import pytest

from checkers.board import Board
from checkers.codec import MalformedStateError, decode, encode, from_payload, to_payload
from checkers.game import Game
from checkers.pieces import BLACK_MAN, RED_KING, RED_MAN, Side
from checkers.state import AwaitingMove, Finished, ForcedContinuation, GameState

from helpers import make_game


def empty_payload():
    return {
        "board": [[None] * 8 for _ in range(8)],
        "currentPlayer": "red",
        "continuation": None,
        "winner": None,
    }


def test_initial_payload_shape():
    payload = to_payload(GameState())
    assert list(payload) == ["board", "currentPlayer", "continuation", "winner"]
    assert payload["board"][0] == [None, "b"] * 4
    assert payload["board"][7] == ["r", None] * 4
    assert payload["board"][3] == [None] * 8
    assert payload["currentPlayer"] == "red"
    assert payload["continuation"] is None
    assert payload["winner"] is None


def test_encode_is_plain_json():
    text = encode(GameState())
    assert json.loads(text) == to_payload(GameState())
    assert encode(GameState()) == text


def test_round_trip_initial():
    state = GameState()
    assert decode(encode(state)) == state


def test_round_trip_continuation():
    game = make_game({(5, 0): RED_MAN, (4, 1): BLACK_MAN, (2, 3): BLACK_MAN})
    game.make_move((5, 0), (3, 2))
    state = game.get_board_state()
    payload = to_payload(state)
    assert payload["continuation"] == [3, 2]
    decoded = decode(encode(state))
    assert decoded == state
    assert decoded.phase == ForcedContinuation(piece=(3, 2))


def test_round_trip_finished():
    game = make_game({(3, 2): RED_MAN, (2, 3): BLACK_MAN})
    game.make_move((3, 2), (1, 4))
    state = game.get_board_state()
    assert to_payload(state)["winner"] == "red"
    decoded = decode(encode(state))
    assert decoded == state
    assert decoded.winner is Side.RED
    assert decoded.current_player is Side.BLACK


def test_kings_are_uppercase():
    state = GameState(board=Board.from_pieces({(0, 1): RED_KING}))
    assert to_payload(state)["board"][0][1] == "R"
    assert decode(encode(state)).board.get((0, 1)) == RED_KING


def test_legacy_must_jump_fields():
    payload = empty_payload()
    payload.pop("continuation")
    payload["board"][3][2] = "r"
    payload["board"][2][3] = "b"
    payload["mustJump"] = True
    payload["selectedPiece"] = [3, 2]
    state = from_payload(payload)
    assert state.continuation == (3, 2)

    payload["mustJump"] = False
    payload["selectedPiece"] = None
    assert from_payload(payload).phase == AwaitingMove()


def test_decoded_state_drives_a_game():
    game = Game()
    game.make_move((5, 2), (4, 3))
    game.make_move((2, 5), (3, 4))
    restored = Game(decode(encode(game.get_board_state())))
    assert restored.get_all_valid_moves() == game.get_all_valid_moves()
    assert all(m.is_jump for m in restored.get_all_valid_moves())


def _mutated(**changes):
    payload = empty_payload()
    payload["board"][5][0] = "r"
    payload["board"][2][1] = "b"
    payload.update(changes)
    return payload


@pytest.mark.parametrize(
    "payload",
    [
        [],
        None,
        "red",
        _mutated(board=None),
        _mutated(board=[[None] * 8] * 7),
        _mutated(board=[[None] * 7] * 8),
        _mutated(board=[[None] * 8] * 7 + ["........"]),
        _mutated(board=[["x"] + [None] * 7] + [[None] * 8] * 7),
        _mutated(board=[[1] + [None] * 7] + [[None] * 8] * 7),
        _mutated(board=[["rr"] + [None] * 7] + [[None] * 8] * 7),
        _mutated(currentPlayer="green"),
        _mutated(currentPlayer=None),
        _mutated(winner="blue"),
        _mutated(continuation=[9, 9]),
        _mutated(continuation=[1]),
        _mutated(continuation=[True, 0]),
        _mutated(continuation="f4"),
        _mutated(continuation=[4, 1]),
        _mutated(continuation=[2, 1]),
        _mutated(continuation=[5, 0], winner="red"),
    ],
)
def test_malformed_payloads_rejected(payload):
    with pytest.raises(MalformedStateError):
        from_payload(payload)


@pytest.mark.parametrize("text", ["", "not json", "{", "[1, 2]", "null"])
def test_malformed_text_rejected(text):
    with pytest.raises(MalformedStateError):
        decode(text)


def test_legacy_must_jump_without_piece_rejected():
    payload = empty_payload()
    payload.pop("continuation")
    payload["mustJump"] = True
    with pytest.raises(MalformedStateError):
        from_payload(payload)


def test_malformed_state_error_is_value_error():
    assert issubclass(MalformedStateError, ValueError)


def test_finished_phase_round_trips_through_payload():
    state = GameState(board=Board.from_pieces({(0, 1): RED_KING}), current_player=Side.BLACK, phase=Finished(Side.RED))
    assert from_payload(to_payload(state)) == state


def test_legacy_must_jump_must_be_boolean():
    payload = empty_payload()
    payload.pop("continuation")
    payload["mustJump"] = "yes"
    with pytest.raises(MalformedStateError):
        from_payload(payload)


def test_deeply_nested_text_rejected():
    with pytest.raises(MalformedStateError):
        decode("[" * 200000 + "]" * 200000)
