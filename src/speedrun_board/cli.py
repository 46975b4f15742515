"""Command-line entry point for speedrun-board."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable, Sequence

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from .client import SpeedrunClient
from .constants import SERVICE_NAME, VERSION
from .errors import EmptyResultSet, SpeedrunApiError, SpeedrunBoardError
from .models import CategoryKind, GameSummary
from .render import render_game, render_player
from .service import LeaderboardService

logger = Logger(service=SERVICE_NAME, logger_handler=logging.StreamHandler(sys.stderr))

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_DATA_ERROR = 2
EXIT_INTERRUPTED = 130


def select_game(
    games: Sequence[GameSummary],
    pick: int | None = None,
    prompt: Callable[[str], str] = input,
) -> GameSummary:
    """Choose one game, from ``pick`` or by asking on the terminal.

    A single result is chosen without asking; an empty answer picks the first game.
    """
    if pick is not None:
        if not 0 <= pick < len(games):
            raise ValueError(f"--pick must be between 0 and {len(games) - 1}")
        return games[pick]
    if len(games) == 1:
        return games[0]

    print("Select a game:")
    for index, game in enumerate(games):
        print(f"  [{index}] {game.label}")
    while True:
        answer = prompt("Game [0]: ").strip()
        if not answer:
            return games[0]
        if answer.isdecimal() and int(answer) < len(games):
            return games[int(answer)]
        print(f"Please enter a number between 0 and {len(games) - 1}")


async def run_game(args: argparse.Namespace) -> int:
    async with SpeedrunClient() as client:
        service = LeaderboardService(client)
        games = await service.search_games(args.name, strict=args.strict)
        game = select_game(games, args.pick)
        logger.info("Game selected", extra={"game": game.abbreviation})

        leaderboards = await service.get_leaderboards(game, CategoryKind(args.kind))
        names = await service.get_player_names(leaderboards) if args.names else None

    print(render_game(game, leaderboards, names))
    return EXIT_OK


async def run_player(args: argparse.Namespace) -> int:
    async with SpeedrunClient() as client:
        profile = await LeaderboardService(client).get_player(args.id)

    if args.debug:
        print(profile.model_dump_json(indent=2))
    else:
        print(render_player(profile))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="speedrun-board", description="CLI for exploring speedrun.com"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    game = subparsers.add_parser("game", help="Show the leaderboards of a game")
    game.add_argument("-n", "--name", required=True, help="Game name")
    game.add_argument(
        "-k",
        "--kind",
        choices=[kind.value for kind in CategoryKind],
        default=CategoryKind.PER_GAME.value,
        help="Category kind to show",
    )
    game.add_argument("-p", "--pick", type=int, help="Index of the search result to use")
    game.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a search result lacks its records or categories link",
    )
    game.add_argument(
        "--names", action="store_true", help="Show registered users by name"
    )
    game.set_defaults(handler=run_game)

    player = subparsers.add_parser("player", help="Show a player")
    player.add_argument("-i", "--id", required=True, help="Player ID")
    player.add_argument("-d", "--debug", action="store_true", help="Dump the profile")
    player.set_defaults(handler=run_player)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logger.setLevel("DEBUG")

    try:
        return asyncio.run(args.handler(args))
    except SpeedrunApiError as e:
        logger.error("Speedrun API error", extra={"error": str(e)})
        print(f"error: {e}", file=sys.stderr)
        return EXIT_API_ERROR
    except EmptyResultSet as e:
        logger.warning("Empty search result", extra={"error": str(e)})
        print(f"error: {e}", file=sys.stderr)
        return EXIT_API_ERROR
    except SpeedrunBoardError as e:
        logger.error("Inconsistent leaderboard data", extra={"error": str(e)})
        print(f"error: {e}", file=sys.stderr)
        return EXIT_DATA_ERROR
    except ValidationError as e:
        logger.error("Unexpected payload shape", extra={"error": str(e)})
        print(f"error: unexpected payload shape: {e}", file=sys.stderr)
        return EXIT_DATA_ERROR
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_DATA_ERROR
    except (EOFError, KeyboardInterrupt):
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
