"""Command-line front end for the variant engine.

Usage:
    python -m variant_engine.cli move <fen> <move> [--start FEN]
        [--category NAME] [--holdings JSON]
    python -m variant_engine.cli dests <fen> [--start FEN]
        [--category NAME] [--holdings JSON]
    python -m variant_engine.cli validate <fen> [--category NAME]
    python -m variant_engine.cli chess960 [--idn N]

Prints JSON on stdout. Errors go to stderr with exit status 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys

from variant_engine.categories import require_supported
from variant_engine.chess960 import chess960_fen
from variant_engine.config import Settings
from variant_engine.destinations import destinations
from variant_engine.interpreter import interpret
from variant_engine.validation import validate_fen


def _fail(message: str) -> None:
    print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def _holdings(text: str | None) -> dict | None:
    if text is None:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid holdings JSON: {text}") from e


def _run(args: argparse.Namespace, settings: Settings) -> dict:
    if args.command == "chess960":
        rng = random.Random(settings.chess960_seed) if settings.chess960_seed is not None else None
        return {"fen": chess960_fen(args.idn, rng=rng)}

    category = require_supported(args.category or settings.default_category)
    if args.command == "validate":
        return {"error": validate_fen(args.fen, category)}

    start = args.start or args.fen
    holdings = _holdings(args.holdings)
    if args.command == "dests":
        dests = destinations(args.fen, start, category, holdings)
        if dests is None:
            raise ValueError(f"Invalid FEN: {args.fen}")
        return {sq: sorted(targets) for sq, targets in sorted(dests.items())}

    result = interpret(args.fen, args.move, start, category, holdings)
    if result is None:
        raise ValueError(f"{args.move} is not legal in this position")
    return result.to_dict()


def _add_position_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("fen", help="Position FEN (quote the full string)")
    parser.add_argument("--start", metavar="FEN", help="Game starting position (default: the position itself)")
    parser.add_argument("--category", help="Game category, e.g. crazyhouse or wild/fr")
    parser.add_argument("--holdings", metavar="JSON", help='Pieces in hand, e.g. \'{"N": 1, "p": 2}\'')


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Chess variant move and position engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    move = sub.add_parser("move", help="Play a move and print the new position")
    _add_position_args(move)
    move.add_argument("move", help="Move in SAN or coordinates (e2-e4, N@f3, O-O)")

    dests = sub.add_parser("dests", help="List legal destinations per origin square")
    _add_position_args(dests)

    validate = sub.add_parser("validate", help="Check a FEN for validity")
    validate.add_argument("fen")
    validate.add_argument("--category")

    c960 = sub.add_parser("chess960", help="Generate a Chess960 starting position")
    c960.add_argument("--idn", type=int, help="Position number 0-959 (default: random)")

    args = parser.parse_args()
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    try:
        result = _run(args, settings)
    except ValueError as e:
        # UnsupportedCategoryError included
        _fail(str(e))
    json.dump(result, sys.stdout, indent=2)
    print()


if __name__ == "__main__":
    main()
