"""Builders for speedrun.com API payloads used across tests."""

from typing import Any

import httpx

API_URL = "https://api.test/v1"


def make_game(
    abbreviation: str = "celeste",
    name: str = "Celeste",
    released: int = 2018,
    game_id: str = "o1y9j9v6",
    rels: tuple[str, ...] = ("self", "records", "categories"),
) -> dict[str, Any]:
    return {
        "id": game_id,
        "abbreviation": abbreviation,
        "names": {"international": name, "japanese": None},
        "released": released,
        "links": [{"rel": rel, "uri": f"{API_URL}/games/{game_id}/{rel}"} for rel in rels],
    }


def make_category(
    category_id: str, name: str, kind: str = "per-game", miscellaneous: bool = False
) -> dict[str, Any]:
    return {
        "id": category_id,
        "name": name,
        "type": kind,
        "miscellaneous": miscellaneous,
    }


def user_ref(user_id: str) -> dict[str, Any]:
    return {"rel": "user", "id": user_id, "uri": f"{API_URL}/users/{user_id}"}


def guest_ref(name: str) -> dict[str, Any]:
    return {"rel": "guest", "name": name, "uri": f"{API_URL}/guests/{name}"}


def make_run(
    run_id: str,
    players: list[dict[str, Any]] | None = None,
    videos: list[str] | None = None,
    realtime: str | None = "PT1H2M3.004S",
    primary: str | None = None,
) -> dict[str, Any]:
    return {
        "id": run_id,
        "weblink": f"https://www.speedrun.com/run/{run_id}",
        "videos": None if videos is None else {"links": [{"uri": uri} for uri in videos]},
        "times": {"realtime": realtime, "primary": primary or realtime},
        "submitted": "2021-03-04T05:06:07Z",
        "players": [user_ref("u1")] if players is None else players,
    }


def make_record(
    category_id: str,
    runs: list[dict[str, Any]],
    game_id: str = "o1y9j9v6",
    places: list[int] | None = None,
    level: str | None = None,
) -> dict[str, Any]:
    places = places or list(range(1, len(runs) + 1))
    return {
        "game": game_id,
        "weblink": f"https://www.speedrun.com/celeste#{category_id}",
        "category": category_id,
        "level": level,
        "runs": [{"place": place, "run": run} for place, run in zip(places, runs)],
    }


def make_user(user_id: str, name: str, japanese: str | None = None) -> dict[str, Any]:
    return {"id": user_id, "names": {"international": name, "japanese": japanese}}


def api_transport(routes: dict[str, Any]) -> httpx.MockTransport:
    """Serve ``{"data": payload}`` for each known URL path, 404 otherwise."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path not in routes:
            return httpx.Response(404, json={"status": 404, "message": "Not found"})
        return httpx.Response(200, json={"data": routes[path]})

    return httpx.MockTransport(handler)
