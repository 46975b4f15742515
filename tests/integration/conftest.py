"""Integration test configuration and fixtures."""

from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import patch

import pytest

from src.speedrun_board.client import SpeedrunClient
from tests.helpers import (
    API_URL,
    api_transport,
    guest_ref,
    make_category,
    make_game,
    make_record,
    make_run,
    make_user,
    user_ref,
)


@pytest.fixture
def api_routes() -> dict[str, Any]:
    """Canned speedrun.com API with one complete game and one without categories."""
    return {
        "/v1/games": [
            make_game("celeste", "Celeste", 2018, "g1"),
            make_game("celestecl", "Celeste Classic", 2015, "g2", rels=("self", "records")),
        ],
        "/v1/games/g1/categories": [
            make_category("any", "Any%"),
            make_category("full", "100%"),
            make_category("ch1", "Forsaken City", kind="per-level"),
            make_category("berry", "Golden Berry", miscellaneous=True),
        ],
        "/v1/games/g1/records": [
            make_record(
                "any",
                [
                    make_run("r1", players=[user_ref("u1")], videos=["https://mirror/1", "https://yt/1"]),
                    make_run("r2", players=[guest_ref("Bob")], realtime="PT27M1.5S"),
                ],
                game_id="g1",
            ),
            make_record("ch1", [make_run("r3")], game_id="g1", level="l1"),
            make_record("berry", [make_run("r4")], game_id="g1"),
            make_record(
                "full",
                [make_run("r5", players=[user_ref("u2")], videos=["https://yt/5"], realtime="P1Y")],
                game_id="g1",
            ),
        ],
        "/v1/users/u1": make_user("u1", "Alice"),
        "/v1/users/u2": make_user("u2", "Carol", "キャロル"),
    }


@pytest.fixture
def run_cli(api_routes: dict[str, Any]) -> Generator[Callable[..., int], None, None]:
    """Run the CLI against the canned API."""
    from src.speedrun_board.cli import main

    def factory() -> SpeedrunClient:
        return SpeedrunClient(base_url=API_URL, transport=api_transport(api_routes))

    with patch("src.speedrun_board.cli.SpeedrunClient", new=factory):
        yield lambda *argv: main(list(argv))
