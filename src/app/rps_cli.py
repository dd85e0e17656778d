from __future__ import annotations

import argparse
import os
import sys

from rps_commit_reveal import EntropyUnavailable, verify_commitment
from rps_protocol import InvalidMoveSet, build_relation_table, validate_moves
from rps_rules_table import format_help
from rps_session import GameSession


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rps")
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play against the computer with an HMAC-committed move")
    play.add_argument("moves", nargs="+", metavar="MOVE", help="Odd number (>= 3) of unique move names")
    play.add_argument("--rounds", type=int, default=None, help="Stop after this many rounds (default: until exit)")
    play.add_argument(
        "--withhold-key",
        action="store_true",
        help="Show only the HMAC before your move and disclose the key with the computer's move",
    )
    play.add_argument("--no-color", action="store_true", help="Disable ANSI colors (also honors NO_COLOR)")

    table = sub.add_parser("table", help="Print the rules table for a move set")
    table.add_argument("moves", nargs="+", metavar="MOVE")
    table.add_argument("--no-color", action="store_true")

    verify = sub.add_parser("verify", help="Check a revealed move and key against a published HMAC")
    verify.add_argument("--key", required=True)
    verify.add_argument("--move", required=True)
    verify.add_argument("--hmac", required=True)

    args = parser.parse_args(argv)

    if args.cmd == "verify":
        if verify_commitment(expected_hmac=args.hmac, key=args.key, move=args.move):
            print("OK: HMAC matches the revealed move and key")
            return 0
        print("MISMATCH: HMAC does not match the revealed move and key", file=sys.stderr)
        return 1

    try:
        moves = validate_moves(args.moves)
    except InvalidMoveSet as exc:
        print(f"Invalid input: {exc}. Please provide an odd number (>= 3) of unique moves.", file=sys.stderr)
        print("Example: rps play Rock Paper Scissors", file=sys.stderr)
        return 1

    color = _use_color(args.no_color)

    if args.cmd == "table":
        print(format_help(moves, build_relation_table(moves), color=color))
        return 0

    if args.cmd == "play":
        if args.rounds is not None and args.rounds < 1:
            raise SystemExit("--rounds must be >= 1")
        game = GameSession(moves, color=color, show_key_early=not args.withhold_key)
        try:
            game.run(max_rounds=args.rounds)
        except EntropyUnavailable as exc:
            print(f"Aborting round: {exc}", file=sys.stderr)
            return 1
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
        return 0

    raise SystemExit("unhandled command")


def _use_color(disabled: bool) -> bool:
    if disabled or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


if __name__ == "__main__":
    raise SystemExit(main())
