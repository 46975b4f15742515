"""Data models for speedrun.com payloads and normalized leaderboards."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import MissingEndpoint, UnknownCategoryKind

RECORDS_REL = "records"
CATEGORIES_REL = "categories"


# Raw payload shapes, as served inside the API's "data" envelope.


class RawLink(BaseModel):
    """Model for a {rel, uri} link pair."""

    rel: str
    uri: str


class RawNames(BaseModel):
    """Model for the localized names of a game or user."""

    international: str
    japanese: str | None = None


class RawGame(BaseModel):
    """Model for one element of a game search result."""

    id: str | None = None
    abbreviation: str
    names: RawNames
    released: int = Field(..., ge=0, le=65535, description="Release year")
    links: list[RawLink] = Field(default_factory=list)


class RawCategory(BaseModel):
    """Model for one element of a game's categories payload."""

    id: str
    name: str
    type: str
    miscellaneous: bool = False


class RawPlayerRef(BaseModel):
    """Model for a player reference attached to a run."""

    rel: str
    id: str | None = None
    name: str | None = None
    uri: str | None = None


class RawVideoLink(BaseModel):
    uri: str


class RawVideos(BaseModel):
    """Model for a run's video container."""

    links: list[RawVideoLink] | None = None
    text: str | None = None


class RawTimes(BaseModel):
    realtime: str | None = None
    primary: str | None = None


class RawRun(BaseModel):
    """Model for the run object nested inside a placed run."""

    id: str
    weblink: str
    videos: RawVideos | None = None
    times: RawTimes
    submitted: str | None = None
    players: list[RawPlayerRef] = Field(default_factory=list)


class RawPlacedRun(BaseModel):
    """Model for a {place, run} pair inside a record."""

    place: int = Field(..., ge=0)
    run: RawRun


class RawRecordCategory(BaseModel):
    """Model for one element of a game's records payload."""

    game: str
    weblink: str
    category: str
    level: str | None = None
    runs: list[RawPlacedRun] = Field(default_factory=list)


class RawPlayer(BaseModel):
    """Model for the user endpoint payload."""

    id: str
    names: RawNames


# Normalized domain records.


class CategoryKind(str, Enum):
    """Supported category kinds."""

    PER_GAME = "per-game"
    PER_LEVEL = "per-level"
    MISC = "misc"


class GameSummary(BaseModel):
    """Model for a searchable game and the endpoints that describe it."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    abbreviation: str
    display_name: str
    release_year: int = Field(..., ge=0, le=65535)
    records_uri: str
    categories_uri: str

    @property
    def label(self) -> str:
        """Human-readable label for selection prompts."""
        return f"{self.display_name} ({self.release_year}) [{self.abbreviation}]"

    @classmethod
    def from_raw(cls, raw: RawGame) -> "GameSummary":
        """Build a summary from a search result element.

        Raises:
            MissingEndpoint: If the records or categories link is absent
        """
        links: dict[str, str] = {}
        for link in raw.links:
            # first link of a relation wins
            links.setdefault(link.rel, link.uri)

        for rel in (RECORDS_REL, CATEGORIES_REL):
            if rel not in links:
                raise MissingEndpoint(raw.names.international, rel)

        return cls(
            id=raw.id,
            abbreviation=raw.abbreviation,
            display_name=raw.names.international,
            release_year=raw.released,
            records_uri=links[RECORDS_REL],
            categories_uri=links[CATEGORIES_REL],
        )


class Category(BaseModel):
    """Model for a category of a game's catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: CategoryKind

    @classmethod
    def from_raw(cls, raw: RawCategory) -> "Category":
        try:
            kind = CategoryKind(raw.type)
        except ValueError as e:
            raise UnknownCategoryKind(raw.id, raw.type) from e
        if raw.miscellaneous and kind == CategoryKind.PER_GAME:
            kind = CategoryKind.MISC
        return cls(id=raw.id, name=raw.name, kind=kind)


class RegisteredUser(BaseModel):
    """Player identity backed by a speedrun.com account."""

    model_config = ConfigDict(frozen=True)

    rel: Literal["user"] = "user"
    id: str = Field(..., min_length=1)

    @property
    def display(self) -> str:
        return self.id


class GuestName(BaseModel):
    """Player identity given as a free-text guest name."""

    model_config = ConfigDict(frozen=True)

    rel: Literal["guest"] = "guest"
    name: str

    @property
    def display(self) -> str:
        return self.name


PlayerIdentity = Annotated[RegisteredUser | GuestName, Field(discriminator="rel")]


class ParsedDuration(BaseModel):
    """Model for a run time broken down for display."""

    model_config = ConfigDict(frozen=True)

    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0, le=59)
    seconds: int = Field(default=0, ge=0, le=59)
    milliseconds: int = Field(default=0, ge=0, le=999)
    available: bool = Field(
        default=True, description="False when the source had no time breakdown"
    )


DURATION_UNAVAILABLE = ParsedDuration(available=False)


class Run(BaseModel):
    """Model for a normalized run."""

    model_config = ConfigDict(frozen=True)

    id: str
    weblink: str
    video_uri: str = ""
    duration: ParsedDuration
    submitted_at: str | None = None
    players: tuple[PlayerIdentity, ...] = Field(..., min_length=1)

    @property
    def player(self) -> RegisteredUser | GuestName:
        """The primary credited player."""
        return self.players[0]


class LeaderboardEntry(BaseModel):
    """Model for leaderboard entries handed to rendering."""

    model_config = ConfigDict(frozen=True)

    place: int = Field(..., ge=0, description="Place as reported by the API")
    run: Run


class CategoryLeaderboard(BaseModel):
    """Model for the ranked runs of one category."""

    model_config = ConfigDict(frozen=True)

    game_id: str
    category_id: str
    category_name: str
    level_id: str | None = Field(
        default=None, description="Level of a per-level record, None otherwise"
    )
    entries: tuple[LeaderboardEntry, ...] = ()


class PlayerProfile(BaseModel):
    """Model for a speedrun.com user."""

    model_config = ConfigDict(frozen=True)

    id: str
    international_name: str
    japanese_name: str | None = None

    @classmethod
    def from_raw(cls, raw: RawPlayer) -> "PlayerProfile":
        return cls(
            id=raw.id,
            international_name=raw.names.international,
            japanese_name=raw.names.japanese,
        )
