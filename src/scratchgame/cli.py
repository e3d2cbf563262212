from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from scratchgame.config import load_config
from scratchgame.contracts import RoundResult
from scratchgame.core import PythonRandomSource
from scratchgame.engine import GameEngine


class CliUsageError(ValueError):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise CliUsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="scratch-game",
        description="Plays one round of the scratch matrix game.",
        add_help=False,
        usage="%(prog)s [--help] --config <configPath> --bet_amount|--betting-amount <betAmount>",
    )
    parser.add_argument("--config", type=Path, default=None, help="path to JSON configuration file")
    parser.add_argument(
        "--bet_amount",
        "--betting-amount",
        "--betting_amount",
        dest="bet_amount",
        type=float,
        default=None,
        help="positive bet amount",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for deterministic dev/testing runs")
    parser.add_argument("--verbose", action="store_true", help="log engine decisions to stderr")
    parser.add_argument("-h", "--help", action="store_true", help="show this help message and exit")
    return parser


def play_round(args: argparse.Namespace) -> RoundResult:
    if args.config is None:
        raise CliUsageError("Missing required argument: --config")
    if args.bet_amount is None:
        raise CliUsageError("Missing required argument: --bet_amount")

    config = load_config(args.config)
    engine = GameEngine(config, PythonRandomSource(seed=args.seed))
    return engine.play(args.bet_amount)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if args.help:
            parser.print_help()
            return 0
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )
        result = play_round(args)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
