"""
Reply text for media-request-bot.

Every builder asks the message provider first and falls back to the
built-in copy below.
"""

from collections.abc import Sequence

from .messages import MessageKey, MessageProvider, NullMessageProvider
from .models import CandidateItem, MediaKind, RequestOutcome, RequestStatus

USAGE = (
    "🤖 *Beep Boop Beep...*\n\n"
    "*Commands:*\n\n"
    "*!request | !r* : _Initiate a request_\n\n"
    "*keywords:*\n"
    "\t*movie* (default): _Request a movie, e.g. !r movie Big Momma's House_\n"
    "\t*series*: _Request a series (all seasons), e.g. !r series My Wife and Kids_\n\n"
    "_If there is more than 1 result, you will be given a choice. "
    "Respond with a valid number to finish the request._\n\n"
)

DEFAULT_READY = "Bot Ready"
DEFAULT_NO_TERM = "⚠️ Please provide a search term. Example:\n!request movie ironman"
DEFAULT_INVALID_SEL = "⚠️ Invalid selection. Please enter a number from the list."
DEFAULT_CATALOG_FAIL = "❌ Error searching the catalog."


def format_item(rank: int, item: CandidateItem) -> str:
    """One listing entry."""
    cast = ", ".join(item.cast_names) or "Unknown cast"
    lines = [
        f"{rank}. *{item.title}* ({item.release_year or 'N/A'})",
        f"   🎭 {cast}",
        f"   📜 {item.overview or 'No description'}",
    ]
    if item.external_url:
        lines.append(f"   🔗 {item.external_url}")
    return "\n".join(lines)


class ResponseFormatter:
    """Builds reply text from already-fetched data."""

    def __init__(self, provider: MessageProvider | None = None):
        self.provider = provider or NullMessageProvider()

    def _text(self, key: MessageKey, default: str, *args) -> str:
        return self.provider.lookup(key, *args) or default

    def build_listing(
        self, results: Sequence[CandidateItem], kind: MediaKind, term: str
    ) -> str:
        """Numbered result list, plus a choice prompt when there is more than one."""
        text = f'🔍 Found {len(results)} {kind.plural_label} for "{term}":\n\n'
        text += "".join(f"{format_item(rank, item)}\n\n" for rank, item in enumerate(results, 1))

        if len(results) > 1:
            text += self._text(
                MessageKey.REQ_CHOICE,
                f"Reply with the number (1-{len(results)}) to request.",
                list(results),
            )
        return text

    def build_outcome(self, outcome: RequestOutcome, listing_text: str | None = None) -> str:
        item = outcome.item

        if outcome.status is RequestStatus.ALREADY_REQUESTED:
            return self._text(
                MessageKey.REQ_EXISTS,
                f'"{item.title}" has already been requested!',
                item,
            )

        if outcome.status is RequestStatus.SUBMITTED:
            default = f'✅ "{item.title}" has been requested successfully!'
            if listing_text:
                default = f"{listing_text}{default}"
            return self._text(MessageKey.REQ_SUCCESS, default, item, listing_text)

        return self._text(
            MessageKey.REQ_FAIL,
            f'❌ Failed to request "{item.title}".',
            item,
        )

    def build_no_results(self, kind: MediaKind, term: str, kind_explicit: bool) -> str:
        if kind_explicit:
            default = f'No {kind.no_results_label} found for "{term}"'
        else:
            default = f'No type provided, used movie (default) and found nothing for "{term}"'
        return self._text(MessageKey.REQ_NO_ITEM, default, kind, term, not kind_explicit)

    def build_invalid_selection(self) -> str:
        return self._text(MessageKey.INVALID_SEL, DEFAULT_INVALID_SEL)

    def build_no_term(self) -> str:
        return self._text(MessageKey.NO_TERM, DEFAULT_NO_TERM)

    def build_help(self) -> str:
        return self._text(MessageKey.BOT_USAGE, USAGE)

    def build_ready(self) -> str:
        return self._text(MessageKey.BOT_READY, DEFAULT_READY, USAGE)

    def build_catalog_failure(self, error: Exception) -> str:
        """Generic failure copy. The error itself belongs in the logs."""
        return self._text(MessageKey.JELLYSEERR_FAIL, DEFAULT_CATALOG_FAIL, error)
