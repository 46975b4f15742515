"""Business logic service for speedrun leaderboard lookups."""

import asyncio

from aws_lambda_powertools import Logger

from .client import SpeedrunClient
from .constants import MAX_CONCURRENT_LOOKUPS, SERVICE_NAME
from .errors import EmptyResultSet, SpeedrunApiError, SpeedrunBoardError
from .models import (
    CategoryKind,
    CategoryLeaderboard,
    GameSummary,
    PlayerProfile,
    RegisteredUser,
)
from .normalize import assemble_leaderboards, build_catalog, resolve_games

logger = Logger(service=SERVICE_NAME, child=True)


class LeaderboardService:
    """Service layer joining API payloads into leaderboards."""

    def __init__(self, client: SpeedrunClient) -> None:
        """Initialize service with client dependency."""
        self.client = client

    async def search_games(self, title: str, strict: bool = False) -> list[GameSummary]:
        """Search games and keep those that can drive a leaderboard lookup.

        Args:
            title: Free-text game title
            strict: Fail on the first game lacking an endpoint instead of skipping it

        Returns:
            Usable games in search order

        Raises:
            EmptyResultSet: If no usable game came back
            MissingEndpoint: In strict mode, if a game lacks an endpoint
            SpeedrunApiError: If the API request fails
        """
        raw_games = await self.client.search_games(title)
        games = resolve_games(raw_games, strict=strict)
        logger.info(
            "Games resolved",
            extra={"title": title, "results": len(raw_games), "usable": len(games)},
        )
        if not games:
            raise EmptyResultSet(f"No games came back with the search of {title!r}")
        return games

    async def get_leaderboards(
        self, game: GameSummary, kind: CategoryKind = CategoryKind.PER_GAME
    ) -> list[CategoryLeaderboard]:
        """Get the leaderboards of one category kind for a game.

        Raises:
            UnknownCategory: If records and categories disagree
            UnknownCategoryKind: If a category has an unsupported type
            MalformedPlayerReference: If a run has no usable player reference
            DurationParseFailure: If a run time cannot be parsed
            SpeedrunApiError: If an API request fails
        """
        raw_categories, raw_records = await self.client.get_game_data(game)

        try:
            catalog = build_catalog(raw_categories)
            leaderboards = assemble_leaderboards(raw_records, catalog, kind)
        except SpeedrunBoardError as e:
            logger.error(
                "Failed to assemble leaderboards",
                extra={"game": game.abbreviation, "error": str(e)},
            )
            raise

        logger.info(
            "Leaderboards assembled",
            extra={
                "game": game.abbreviation,
                "kind": kind.value,
                "categories": len(catalog),
                "leaderboards": len(leaderboards),
            },
        )
        return leaderboards

    async def get_player(self, player_id: str) -> PlayerProfile:
        return PlayerProfile.from_raw(await self.client.get_player(player_id))

    async def get_player_names(
        self, leaderboards: list[CategoryLeaderboard]
    ) -> dict[str, str]:
        """Look up display names of the registered users credited in leaderboards.

        Users whose lookup fails are left out of the mapping, so they are
        shown by id.
        """
        user_ids = list(
            dict.fromkeys(
                entry.run.player.id
                for leaderboard in leaderboards
                for entry in leaderboard.entries
                if isinstance(entry.run.player, RegisteredUser)
            )
        )
        semaphore = asyncio.Semaphore(MAX_CONCURRENT_LOOKUPS)

        async def lookup(user_id: str) -> PlayerProfile | None:
            async with semaphore:
                try:
                    return await self.get_player(user_id)
                except SpeedrunApiError as e:
                    logger.warning(
                        "Player name lookup failed",
                        extra={"player_id": user_id, "error": str(e)},
                    )
                    return None

        profiles = await asyncio.gather(*(lookup(uid) for uid in user_ids))
        return {
            profile.id: profile.international_name
            for profile in profiles
            if profile is not None
        }
