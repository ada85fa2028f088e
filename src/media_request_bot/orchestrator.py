"""
Conversation handling for media-request-bot.

Per sender there are two states: idle (no session) and awaiting a
selection (session stored). Each inbound message is parsed, dispatched,
and answered with at most one reply.
"""

import logging

from .catalog import CatalogClient, CatalogError
from .commands import (
    HelpIntent,
    Intent,
    MissingTermIntent,
    SearchIntent,
    SelectionIntent,
    parse_command,
)
from .formatter import ResponseFormatter
from .models import CandidateItem, RequestOutcome, Session
from .sessions import SessionStore

logger = logging.getLogger(__name__)


class Orchestrator:
    """Drives search, selection and request flows for chat senders."""

    def __init__(
        self,
        catalog: CatalogClient,
        sessions: SessionStore | None = None,
        formatter: ResponseFormatter | None = None,
    ):
        self.catalog = catalog
        self.sessions = sessions if sessions is not None else SessionStore()
        self.formatter = formatter if formatter is not None else ResponseFormatter()

    async def handle(self, sender_id: str, text: str) -> str | None:
        """
        Process one inbound message.

        Messages from the same sender are processed one at a time.

        Returns:
            Reply text, or None when the message needs no answer.
        """
        intent = parse_command(text)

        async with self.sessions.lock(sender_id):
            try:
                return await self._dispatch(sender_id, intent)
            except Exception as e:
                logger.exception(f"Unhandled error processing message from {sender_id}")
                return self.formatter.build_catalog_failure(e)

    def ready_message(self) -> str:
        return self.formatter.build_ready()

    async def _dispatch(self, sender_id: str, intent: Intent) -> str | None:
        if isinstance(intent, SelectionIntent):
            return await self._select(sender_id, intent.index)
        if isinstance(intent, SearchIntent):
            return await self._search(sender_id, intent)
        if isinstance(intent, MissingTermIntent):
            return self.formatter.build_no_term()
        if isinstance(intent, HelpIntent):
            return self.formatter.build_help()
        return None

    async def _select(self, sender_id: str, index: int) -> str | None:
        session = self.sessions.get(sender_id)
        if session is None:
            # Plain number outside a pending selection
            return None

        item = session.pick(index)
        if item is None:
            logger.info(f"Invalid selection {index} from {sender_id} ({len(session.results)} options)")
            self.sessions.clear(sender_id)
            return self.formatter.build_invalid_selection()

        try:
            return await self._request(item)
        finally:
            self.sessions.clear(sender_id)

    async def _search(self, sender_id: str, intent: SearchIntent) -> str:
        # A new search always replaces a pending selection
        self.sessions.clear(sender_id)

        try:
            results = await self.catalog.search(intent.term, intent.kind)
        except CatalogError as e:
            logger.error(f"Search for {intent.term!r} failed: {e}")
            return self.formatter.build_catalog_failure(e)

        if not results:
            return self.formatter.build_no_results(intent.kind, intent.term, intent.kind_explicit)

        listing = self.formatter.build_listing(results, intent.kind, intent.term)

        if len(results) == 1:
            return await self._request(results[0], listing)

        self.sessions.set(sender_id, Session(results=tuple(results), kind=intent.kind))
        return listing

    async def _request(self, item: CandidateItem, listing_text: str | None = None) -> str:
        """Check for an existing request, then submit. Always returns reply text."""
        try:
            exists = await self.catalog.is_already_requested(item.id)
        except CatalogError as e:
            logger.error(f"Could not check existing requests for {item.title!r}: {e}")
            return self.formatter.build_catalog_failure(e)

        if exists:
            logger.info(f"{item.title!r} ({item.id}) already requested")
            return self.formatter.build_outcome(RequestOutcome.already_requested(item))

        try:
            await self.catalog.submit_request(item.id, item.kind, item.season_numbers)
        except CatalogError as e:
            logger.error(f"Request for {item.title!r} ({item.id}) failed: {e}")
            return self.formatter.build_outcome(RequestOutcome.failed(item, e))

        logger.info(f"Request for {item.title!r} ({item.id}) successful")
        return self.formatter.build_outcome(RequestOutcome.submitted(item), listing_text)
