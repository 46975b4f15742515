"""HTTP access to the speedrun.com REST API."""

import asyncio
import os
from typing import Any

import httpx
from aws_lambda_powertools import Logger
from pydantic import TypeAdapter

from .constants import (
    API_URL_ENV,
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    SERVICE_NAME,
    TIMEOUT_ENV,
    USER_AGENT_ENV,
)
from .errors import SpeedrunApiError
from .models import GameSummary, RawCategory, RawGame, RawPlayer, RawRecordCategory

logger = Logger(service=SERVICE_NAME, child=True)

_GAMES = TypeAdapter(list[RawGame])
_CATEGORIES = TypeAdapter(list[RawCategory])
_RECORDS = TypeAdapter(list[RawRecordCategory])


class SpeedrunClient:
    """Async client returning the validated "data" member of API responses."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client settings; the connection opens on ``async with``."""
        resolved_base_url = base_url or os.environ.get(API_URL_ENV, DEFAULT_API_URL)
        if not resolved_base_url:
            raise ValueError("API base URL must be provided")
        self.base_url = resolved_base_url.rstrip("/")
        self.timeout = (
            timeout
            if timeout is not None
            else float(os.environ.get(TIMEOUT_ENV, DEFAULT_TIMEOUT_SECONDS))
        )
        self.user_agent = user_agent or os.environ.get(USER_AGENT_ENV, DEFAULT_USER_AGENT)
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SpeedrunClient":
        self._http = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def get_data(self, url: str, params: dict[str, str] | None = None) -> Any:
        """GET a URL and unwrap its data envelope.

        Raises:
            SpeedrunApiError: If the request fails or the body has no data member
        """
        if self._http is None:
            raise RuntimeError("SpeedrunClient must be used as an async context manager")

        logger.debug("API request", extra={"url": url, "params": params})
        try:
            response = await self._http.get(url, params=params)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise SpeedrunApiError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise SpeedrunApiError(f"Response from {url} is not JSON") from e

        if not isinstance(body, dict) or "data" not in body:
            raise SpeedrunApiError(f"Response from {url} has no data member")
        return body["data"]

    async def search_games(self, title: str) -> list[RawGame]:
        """Search games by title."""
        data = await self.get_data(f"{self.base_url}/games", params={"name": title})
        return _GAMES.validate_python(data)

    async def get_categories(self, uri: str) -> list[RawCategory]:
        return _CATEGORIES.validate_python(await self.get_data(uri))

    async def get_records(self, uri: str) -> list[RawRecordCategory]:
        return _RECORDS.validate_python(await self.get_data(uri))

    async def get_game_data(
        self, game: GameSummary
    ) -> tuple[list[RawCategory], list[RawRecordCategory]]:
        """Fetch a game's categories and records concurrently."""
        categories, records = await asyncio.gather(
            self.get_categories(game.categories_uri),
            self.get_records(game.records_uri),
        )
        return categories, records

    async def get_player(self, player_id: str) -> RawPlayer:
        data = await self.get_data(f"{self.base_url}/users/{player_id}")
        return RawPlayer.model_validate(data)
