"""Normalization and join of raw speedrun.com payloads into leaderboards."""

from collections.abc import Iterable, Sequence

from aws_lambda_powertools import Logger

from .constants import SERVICE_NAME
from .duration import parse_duration
from .errors import (
    DurationParseFailure,
    MalformedPlayerReference,
    MissingEndpoint,
    UnknownCategory,
)
from .models import (
    Category,
    CategoryKind,
    CategoryLeaderboard,
    GameSummary,
    GuestName,
    LeaderboardEntry,
    RawCategory,
    RawGame,
    RawPlayerRef,
    RawRecordCategory,
    RawRun,
    RawVideos,
    RegisteredUser,
    Run,
)

logger = Logger(service=SERVICE_NAME, child=True)

USER_REL = "user"


def collect_video_uris(videos: RawVideos | None) -> list[str]:
    """Collect the candidate video URIs of a run, in upstream order."""
    if videos is None or not videos.links:
        return []
    return [link.uri for link in videos.links]


def select_video_uri(candidates: Sequence[str]) -> str:
    """Pick the preferred video URI.

    The API lists mirror links before the primary one, so with two
    candidates the second wins and with more the last one does.
    """
    if not candidates:
        return ""
    if len(candidates) == 1:
        return candidates[0]
    return candidates[-1]


def identify_player(ref: RawPlayerRef) -> RegisteredUser | GuestName:
    """Turn one player reference into a registered user or guest identity."""
    if ref.rel == USER_REL:
        if not ref.id:
            raise MalformedPlayerReference("User player reference has no id")
        return RegisteredUser(id=ref.id)

    if ref.name is None:
        raise MalformedPlayerReference(
            f"Player reference with rel {ref.rel!r} has no name"
        )
    return GuestName(name=ref.name)


def resolve_player(refs: Sequence[RawPlayerRef]) -> RegisteredUser | GuestName:
    """Resolve the credited identity of a run from its first player reference."""
    if not refs:
        raise MalformedPlayerReference("Run has no player references")
    return identify_player(refs[0])


def normalize_run(raw: RawRun) -> Run:
    """Flatten a raw run into a Run.

    Raises:
        MalformedPlayerReference: If the run has no usable player reference
        DurationParseFailure: If the run time is missing or malformed
    """
    primary = resolve_player(raw.players)
    players = (primary, *(identify_player(ref) for ref in raw.players[1:]))

    time = raw.times.realtime or raw.times.primary
    if time is None:
        raise DurationParseFailure(f"Run {raw.id} has no realtime or primary time")

    return Run(
        id=raw.id,
        weblink=raw.weblink,
        video_uri=select_video_uri(collect_video_uris(raw.videos)),
        duration=parse_duration(time),
        submitted_at=raw.submitted,
        players=players,
    )


def build_catalog(raw_categories: Iterable[RawCategory]) -> dict[str, Category]:
    """Index a game's categories by id; a repeated id replaces the earlier one."""
    catalog: dict[str, Category] = {}
    for raw in raw_categories:
        catalog[raw.id] = Category.from_raw(raw)
    return catalog


def assemble_leaderboards(
    raw_records: Sequence[RawRecordCategory],
    catalog: dict[str, Category],
    kind: CategoryKind = CategoryKind.PER_GAME,
) -> list[CategoryLeaderboard]:
    """Join records with the catalog and keep the categories of one kind.

    Args:
        raw_records: Records payload, one element per category
        catalog: Categories of the same game keyed by id
        kind: Category kind to keep

    Returns:
        Leaderboards in source order, each with its runs in source order

    Raises:
        UnknownCategory: If a record references a category missing from the catalog
    """
    categories = []
    for record in raw_records:
        if record.category not in catalog:
            raise UnknownCategory(record.category)
        categories.append(catalog[record.category])

    leaderboards = []
    for record, category in zip(raw_records, categories):
        if category.kind != kind:
            continue
        entries = tuple(
            LeaderboardEntry(place=placed.place, run=normalize_run(placed.run))
            for placed in record.runs
        )
        leaderboards.append(
            CategoryLeaderboard(
                game_id=record.game,
                category_id=category.id,
                category_name=category.name,
                level_id=record.level,
                entries=entries,
            )
        )
    return leaderboards


def resolve_games(raw_games: Iterable[RawGame], strict: bool = False) -> list[GameSummary]:
    """Normalize search results into game summaries.

    Games lacking a records or categories link are skipped with a warning,
    or raise MissingEndpoint when ``strict`` is set.
    """
    games = []
    for raw in raw_games:
        try:
            games.append(GameSummary.from_raw(raw))
        except MissingEndpoint as e:
            if strict:
                raise
            logger.warning(
                "Skipping game without required endpoint",
                extra={"game": e.game, "rel": e.rel},
            )
    return games
