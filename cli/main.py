"""CLI entrypoint for hot-seat checkers in the terminal."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from checkers.codec import MalformedStateError, decode, encode
from checkers.game import Game
from checkers.moves import Move
from checkers.rules import Position, parse_square, square_name

HELP_TEXT = "Commands: move <from> <to> | moves | state | load <json> | reset | help | quit"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play checkers in the terminal.")
    parser.add_argument("--state", type=str, default=None, help="Snapshot JSON file to start from")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    return parser.parse_args(argv)


def parse_user_move(command: str) -> Optional[Tuple[Position, Position]]:
    """Parse 'move e3 f4' (or just 'e3 f4') into a (from, to) pair."""
    parts = command.strip().split()
    if parts and parts[0].lower() == "move":
        parts = parts[1:]
    if len(parts) != 2:
        return None
    return parse_square(parts[0]), parse_square(parts[1])


def format_move(move: Move) -> str:
    separator = "x" if move.is_jump else "-"
    return f"{square_name(move.from_pos)}{separator}{square_name(move.to_pos)}"


def status_line(game: Game) -> str:
    if game.winner is not None:
        return f"Winner: {game.winner.value}"
    line = f"Turn: {game.current_player.value}"
    if game.continuation is not None:
        line += f" | continue jumping with {square_name(game.continuation)}"
    return line


def load_game(path: Optional[str]) -> Game:
    game = Game()
    if path:
        game.load_board_state(decode(Path(path).read_text(encoding="utf-8")))
    return game


def run_cli(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    logger = logging.getLogger("checkers.cli")

    game = load_game(args.state)
    logger.info("Starting checkers game. %s", status_line(game))
    print(HELP_TEXT)

    while True:
        print()
        print(game.board.render_ascii())
        print(status_line(game))

        user_input = input("> ").strip()
        command = user_input.split(maxsplit=1)[0].lower() if user_input else ""
        if command in {"quit", "exit"}:
            print("Exiting game.")
            break
        if command in {"", "help"}:
            print(HELP_TEXT)
            continue
        if command == "moves":
            print(" ".join(format_move(m) for m in game.get_all_valid_moves()) or "No legal moves.")
            continue
        if command == "state":
            print(encode(game.get_board_state()))
            continue
        if command == "reset":
            game.reset()
            continue
        if command == "load":
            try:
                game.load_board_state(decode(user_input.split(maxsplit=1)[1]))
            except (IndexError, MalformedStateError) as exc:
                print(f"Could not load snapshot: {exc}")
            continue

        try:
            requested = parse_user_move(user_input)
        except ValueError as exc:
            print(str(exc))
            continue
        if requested is None:
            print("Invalid command format.")
            continue
        if game.winner is not None:
            print("The game is over. Type 'reset' to play again.")
            continue
        if not game.make_move(*requested):
            print("Illegal move for current state.")


if __name__ == "__main__":
    run_cli()
