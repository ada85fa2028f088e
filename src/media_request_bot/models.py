"""
Data models for media-request-bot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

OVERVIEW_LIMIT = 100
ELLIPSIS = "..."
MAX_CAST = 3

IMDB_TITLE_URL = "https://www.imdb.com/title/{}/"
TVDB_URL = "https://thetvdb.com/?id={}"


class MediaKind(str, Enum):
    """Media category a user can search for."""

    MOVIE = "movie"
    SERIES = "series"

    @property
    def media_type(self) -> str:
        """Value the catalog uses in search hits and request payloads."""
        return "tv" if self is MediaKind.SERIES else "movie"

    @property
    def plural_label(self) -> str:
        return "series" if self is MediaKind.SERIES else "movie(s)"

    @property
    def no_results_label(self) -> str:
        return "series" if self is MediaKind.SERIES else "movies"


class RequestStatus(str, Enum):
    """Terminal state of a request flow."""

    ALREADY_REQUESTED = "already_requested"
    SUBMITTED = "submitted"
    FAILED = "failed"


def truncate_overview(text: str | None, limit: int = OVERVIEW_LIMIT) -> str | None:
    """Cut overview text to `limit` characters plus an ellipsis marker."""
    if not text:
        return None
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def year_from_date(value: str | None) -> str | None:
    """'2010-07-16' -> '2010'."""
    if not value:
        return None
    year = value.split("-")[0].strip()
    return year or None


@dataclass(frozen=True)
class CandidateItem:
    """A single catalog search hit, optionally enriched with detail data."""

    id: int
    title: str
    kind: MediaKind
    release_year: str | None = None
    overview: str | None = None
    cast_names: tuple[str, ...] = ()
    imdb_id: str | None = None
    tvdb_id: int | str | None = None
    season_numbers: tuple[int, ...] = ()

    @classmethod
    def from_search_hit(cls, hit: dict[str, Any], kind: MediaKind) -> "CandidateItem":
        """Build the base item from a `/search` result entry."""
        return cls(
            id=hit["id"],
            title=hit.get("title") or hit.get("name") or "Unknown Title",
            kind=kind,
            release_year=year_from_date(hit.get("releaseDate") or hit.get("firstAirDate")),
            overview=truncate_overview(hit.get("overview")),
        )

    @property
    def external_url(self) -> str | None:
        """IMDb link if known, else TVDB link, else None."""
        if self.imdb_id:
            return IMDB_TITLE_URL.format(self.imdb_id)
        if self.tvdb_id:
            return TVDB_URL.format(self.tvdb_id)
        return None


@dataclass
class Session:
    """An outstanding multi-choice search awaiting a numeric reply."""

    results: tuple[CandidateItem, ...]
    kind: MediaKind

    def __post_init__(self):
        self.results = tuple(self.results)

    def pick(self, index: int) -> CandidateItem | None:
        """Resolve a 1-based selection. Out of range gives None."""
        if 1 <= index <= len(self.results):
            return self.results[index - 1]
        return None


@dataclass
class RequestOutcome:
    """Result of the check-then-submit flow for one item."""

    status: RequestStatus
    item: CandidateItem
    cause: Exception | None = field(default=None, compare=False)

    @classmethod
    def already_requested(cls, item: CandidateItem) -> "RequestOutcome":
        return cls(RequestStatus.ALREADY_REQUESTED, item)

    @classmethod
    def submitted(cls, item: CandidateItem) -> "RequestOutcome":
        return cls(RequestStatus.SUBMITTED, item)

    @classmethod
    def failed(cls, item: CandidateItem, cause: Exception) -> "RequestOutcome":
        return cls(RequestStatus.FAILED, item, cause)
