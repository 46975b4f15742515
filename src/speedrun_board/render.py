"""Text rendering of normalized leaderboards."""

from collections.abc import Mapping, Sequence

from .models import (
    CategoryLeaderboard,
    GameSummary,
    GuestName,
    ParsedDuration,
    PlayerProfile,
    RegisteredUser,
)

NO_TIME = "No time provided"
HEADERS = ("Place", "Run ID", "Player", "Run Video", "Time")
COLUMN_GAP = "  "


def format_duration(duration: ParsedDuration) -> str:
    if not duration.available:
        return NO_TIME
    return (
        f"{duration.hours:02d}:{duration.minutes:02d}:"
        f"{duration.seconds:02d}.{duration.milliseconds:03d}"
    )


def player_label(
    identity: RegisteredUser | GuestName, names: Mapping[str, str] | None = None
) -> str:
    """Display text for a player, using a looked-up name when one is known."""
    if isinstance(identity, RegisteredUser) and names:
        return names.get(identity.id, identity.id)
    return identity.display


def render_table(rows: Sequence[Sequence[str]]) -> str:
    """Left-align rows into columns separated by two spaces."""
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    return "\n".join(
        COLUMN_GAP.join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in rows
    )


def render_leaderboard(
    leaderboard: CategoryLeaderboard, names: Mapping[str, str] | None = None
) -> str:
    rows = [HEADERS]
    for entry in leaderboard.entries:
        rows.append(
            (
                str(entry.place),
                entry.run.id,
                player_label(entry.run.player, names),
                entry.run.video_uri,
                format_duration(entry.run.duration),
            )
        )
    heading = f"Category: {leaderboard.category_name}"
    if leaderboard.level_id:
        heading += f" (level {leaderboard.level_id})"
    return f"{heading}\n{render_table(rows)}"


def render_game(
    game: GameSummary,
    leaderboards: Sequence[CategoryLeaderboard],
    names: Mapping[str, str] | None = None,
) -> str:
    """Render every leaderboard of a game under a title line."""
    sections = [f"Runs for {game.display_name}"]
    if not leaderboards:
        sections.append("No leaderboards found.")
    sections.extend(render_leaderboard(leaderboard, names) for leaderboard in leaderboards)
    return "\n\n".join(sections)


def render_player(profile: PlayerProfile) -> str:
    lines = [f"Player: {profile.international_name} ({profile.id})"]
    if profile.japanese_name:
        lines.append(f"Japanese name: {profile.japanese_name}")
    return "\n".join(lines)
