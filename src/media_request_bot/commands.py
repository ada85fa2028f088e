"""
Chat command parsing for media-request-bot.

Turns a raw chat message into exactly one intent:

    !request movie Big Momma's House  -> SearchIntent(MOVIE, "Big Momma's House", explicit)
    !r series My Wife and Kids        -> SearchIntent(SERIES, "My Wife and Kids", explicit)
    !r ironman                        -> SearchIntent(MOVIE, "ironman", implicit)
    !r                                -> MissingTermIntent
    2                                 -> SelectionIntent(2)
    !help / !h                        -> HelpIntent
    anything else                     -> IgnoreIntent
"""

import re
from dataclasses import dataclass

from .models import MediaKind

# Prefix must be followed by whitespace or end of message ("!random" is not "!r")
REQUEST_PATTERN = re.compile(r"^!(?:request|r)(?:\s+(?P<rest>.*)|\s*)$", re.IGNORECASE | re.DOTALL)
HELP_PATTERN = re.compile(r"^!(?:help|h)(?:\s|$)", re.IGNORECASE)
KIND_PATTERN = re.compile(r"^(?P<kind>movie|series)\s+(?P<term>.*)$", re.IGNORECASE | re.DOTALL)
SELECTION_PATTERN = re.compile(r"^[0-9]+$")
# Longer digit strings can never be a valid rank and may exceed int() limits
MAX_SELECTION_DIGITS = 9

KIND_KEYWORDS = {
    "movie": MediaKind.MOVIE,
    "series": MediaKind.SERIES,
}


@dataclass(frozen=True)
class SearchIntent:
    kind: MediaKind
    term: str
    kind_explicit: bool = False


@dataclass(frozen=True)
class SelectionIntent:
    index: int  # 1-based, unvalidated


@dataclass(frozen=True)
class HelpIntent:
    pass


@dataclass(frozen=True)
class MissingTermIntent:
    """A request command with nothing to search for."""


@dataclass(frozen=True)
class IgnoreIntent:
    pass


Intent = SearchIntent | SelectionIntent | HelpIntent | MissingTermIntent | IgnoreIntent


def parse_search(remainder: str) -> SearchIntent | MissingTermIntent:
    """
    Split an optional kind keyword off the text after the request prefix.

    The keyword only counts when followed by whitespace, so "!r movie"
    searches for the word "movie" with the default kind.
    """
    kind = MediaKind.MOVIE
    explicit = False

    match = KIND_PATTERN.match(remainder)
    if match:
        kind = KIND_KEYWORDS[match.group("kind").lower()]
        explicit = True
        remainder = match.group("term")

    term = remainder.strip()
    if not term:
        return MissingTermIntent()
    return SearchIntent(kind=kind, term=term, kind_explicit=explicit)


def parse_command(text: str) -> Intent:
    """Classify chat text. Never raises."""
    if not isinstance(text, str):
        return IgnoreIntent()

    text = text.strip()
    if not text:
        return IgnoreIntent()

    if SELECTION_PATTERN.match(text):
        digits = text.lstrip("0") or "0"
        if len(digits) > MAX_SELECTION_DIGITS:
            return SelectionIntent(index=0)
        return SelectionIntent(index=int(digits))

    match = REQUEST_PATTERN.match(text)
    if match:
        return parse_search(match.group("rest") or "")

    if HELP_PATTERN.match(text):
        return HelpIntent()

    return IgnoreIntent()
