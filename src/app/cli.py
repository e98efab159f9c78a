from __future__ import annotations

import argparse
import logging
import os
import sys

from commit_reveal import SCHEME_ID, parse_key, require_commitment
from game import GameRound, RoundResult
from help_table import format_table
from protocol import EntropyUnavailable, GameError, IntegrityViolation, InvalidMoveSet, Move, MoveSet

logger = logging.getLogger(__name__)

USAGE_EXAMPLE = "Example: rps play rock paper scissors"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rps")
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=_default_log_level(),
        help="DEBUG|INFO|WARNING|ERROR|CRITICAL (env: RPS_LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play one round against the computer")
    play.add_argument("moves", nargs="+", help="Odd number (>= 3) of unique moves, in dominance order")

    table = sub.add_parser("table", help="Print the outcome table for a move set")
    table.add_argument("moves", nargs="+")

    verify = sub.add_parser("verify", help="Check a revealed key and move against a published HMAC")
    verify.add_argument("--key", required=True, help="HMAC key revealed after the round (hex)")
    verify.add_argument("--move", required=True, help="Computer move revealed after the round")
    verify.add_argument("--hmac", required=True, help="HMAC published before the round")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "verify":
        return _verify(args.key, args.move, args.hmac)

    try:
        move_set = MoveSet.from_names(args.moves)
    except InvalidMoveSet as exc:
        print(f"Error: {exc}")
        print("Usage: rps play <move1> <move2> <move3> ...")
        print(USAGE_EXAMPLE)
        return 2

    if args.cmd == "table":
        print(format_table(move_set))
        return 0

    if args.cmd == "play":
        try:
            return _play(move_set)
        except EntropyUnavailable as exc:
            print(f"Error: {exc}")
            return 1

    raise SystemExit("unhandled command")


def _play(move_set: MoveSet) -> int:
    game_round = GameRound.start(move_set)
    print(f"HMAC: {game_round.commitment}")

    try:
        choice = _prompt_for_move(move_set)
    except KeyboardInterrupt:
        game_round.discard()
        print("\nInterrupted. Key discarded.")
        return 130
    if choice is None:
        game_round.discard()
        print("Exiting game.")
        return 0

    result = game_round.play(choice)
    _show_game_result(result)
    return 0


def _verify(key_hex: str, move: str, commitment: str) -> int:
    try:
        key = parse_key(key_hex)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2
    try:
        require_commitment(key, move, commitment)
    except IntegrityViolation as exc:
        print(f"INTEGRITY VIOLATION: {exc}")
        return 1
    print(f"OK: {SCHEME_ID}({move!r}) matches the published HMAC")
    return 0


def _print_menu(move_set: MoveSet) -> None:
    print("Available moves:")
    for number, name in enumerate(move_set.names, start=1):
        print(f"{number} - {name}")
    print("0 - exit")
    print("? - help")


def _prompt_for_move(move_set: MoveSet) -> Move | None:
    """Interactive prompt for the human's move. Returns None when the player exits."""
    _print_menu(move_set)
    while True:
        try:
            choice = input("Enter your move: ").strip()
        except EOFError:
            return None
        if choice == "?":
            print(format_table(move_set))
            continue
        if choice == "0":
            return None
        try:
            if choice.isdecimal():
                return move_set.move_at(int(choice) - 1)
            return move_set.move(choice)
        except GameError as exc:
            logger.debug("rejected input %r: %s", choice, exc)
            print(f"Invalid input. Enter 1-{len(move_set)}, 0 to exit, or ? for help.")


def _show_game_result(result: RoundResult) -> None:
    print(f"Your move: {result.human_move}")
    print(f"Computer move: {result.computer_move}")
    if result.outcome == "Win":
        print("Result: You win!")
    elif result.outcome == "Lose":
        print("Result: You lose!")
    else:
        print("Result: Draw")
    print(f"HMAC key: {result.key_hex}")


def _default_log_level() -> str:
    return os.environ.get("RPS_LOG_LEVEL", "WARNING")


def _log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise argparse.ArgumentTypeError(f"unknown log level {value!r}")
    return level


if __name__ == "__main__":
    sys.exit(main())
