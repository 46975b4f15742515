"""Exceptions raised while normalizing speedrun.com payloads."""


class SpeedrunBoardError(Exception):
    """Base class for normalization failures."""


class MalformedPlayerReference(SpeedrunBoardError):
    """A run has no player reference, or a reference lacks its id or name."""


class UnknownCategory(SpeedrunBoardError):
    """A record points at a category id the catalog does not contain."""

    def __init__(self, category_id: str) -> None:
        super().__init__(f"Record references unknown category: {category_id}")
        self.category_id = category_id


class MissingEndpoint(SpeedrunBoardError):
    """A game's link list lacks a required relation."""

    def __init__(self, game: str, rel: str) -> None:
        super().__init__(f"Game {game!r} has no {rel!r} link")
        self.game = game
        self.rel = rel


class UnknownCategoryKind(SpeedrunBoardError):
    """A category's type is none of the supported kinds."""

    def __init__(self, category_id: str, kind: str) -> None:
        super().__init__(f"Category {category_id} has unsupported type: {kind!r}")
        self.category_id = category_id
        self.kind = kind


class DurationParseFailure(SpeedrunBoardError):
    """A run time is not a valid ISO-8601 duration."""


class EmptyResultSet(SpeedrunBoardError):
    """A search produced no usable games."""


class SpeedrunApiError(RuntimeError):
    """The speedrun.com API could not be reached or answered garbage."""
