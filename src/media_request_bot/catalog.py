"""
Catalog (request service) client for media-request-bot.

Talks to a Jellyseerr/Overseerr compatible API:

    GET  /api/v1/search?query=<term>&page=1
    GET  /api/v1/<movie|tv>/<id>
    GET  /api/v1/request
    POST /api/v1/request

Failures surface as CatalogError subclasses. User-facing copy is the
formatter's job, so messages here are meant for the logs only.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Any
from urllib.parse import quote

import httpx

from .config import CatalogConfig
from .models import MAX_CAST, CandidateItem, MediaKind, truncate_overview

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
REQUEST_PAGE_SIZE = 100
MAX_REQUEST_PAGES = 50


class CatalogError(Exception):
    """The catalog could not answer, or answered with something unusable."""


class CatalogUnavailableError(CatalogError):
    """Network failure, timeout, or an error status on a read call."""


class CatalogRejectedError(CatalogError):
    """The catalog refused a request submission."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


def apply_details(item: CandidateItem, details: dict[str, Any]) -> CandidateItem:
    """Return a copy of `item` enriched with a `/<movie|tv>/<id>` payload."""
    external = details.get("externalIds") or {}
    credits = details.get("credits") or {}

    cast = [
        member["name"]
        for member in credits.get("cast") or []
        if isinstance(member, dict) and member.get("name")
    ]

    seasons: tuple[int, ...] = ()
    if item.kind is MediaKind.SERIES:
        # Season 0 holds specials and is never requested
        seasons = tuple(
            season["seasonNumber"]
            for season in details.get("seasons") or []
            if isinstance(season, dict)
            and isinstance(season.get("seasonNumber"), int)
            and season["seasonNumber"] > 0
        )

    return replace(
        item,
        overview=item.overview or truncate_overview(details.get("overview")),
        cast_names=tuple(cast[:MAX_CAST]),
        imdb_id=external.get("imdbId") or None,
        tvdb_id=external.get("tvdbId") or None,
        season_numbers=seasons,
    )


class CatalogClient:
    """
    Client for the catalog's search and request endpoints.

    Every call runs with a bounded timeout and the shared-secret
    `X-Api-Key` header. Nothing is retried here.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        concurrent_enrichment: bool = True,
    ):
        """
        Initialize the catalog client.

        Args:
            base_url: Service root, e.g. "http://localhost:5055"
            api_key: Value for the X-Api-Key header
            timeout_seconds: Per-call timeout
            concurrent_enrichment: Fetch detail records in parallel
        """
        self.base_url = base_url.rstrip("/")
        self.api_base = f"{self.base_url}{API_PREFIX}"
        self.api_key = api_key
        self.timeout = timeout_seconds
        self.concurrent_enrichment = concurrent_enrichment

    @classmethod
    def from_config(cls, config: CatalogConfig) -> "CatalogClient":
        return cls(
            base_url=config.base_url,
            api_key=config.get_api_key(),
            timeout_seconds=config.timeout_seconds,
            concurrent_enrichment=config.concurrent_enrichment,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"X-Api-Key": self.api_key},
        )

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise CatalogUnavailableError(
                f"GET {url} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CatalogUnavailableError(f"GET {url} failed: {e!r}") from e
        except ValueError as e:
            raise CatalogError(f"GET {url} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise CatalogError(f"GET {url} returned {type(data).__name__}, expected object")
        return data

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def search(self, term: str, kind: MediaKind) -> list[CandidateItem]:
        """
        Search the catalog and enrich every hit of the requested kind.

        Args:
            term: Free-text search term
            kind: Only hits of this kind are kept

        Returns:
            Items in upstream ranking order. Items whose detail lookup
            failed are returned with their search fields only.

        Raises:
            CatalogError: The search call itself failed
        """
        url = f"{self.api_base}/search?query={quote(term, safe='')}&page=1"
        logger.debug(f"Searching catalog for {kind.value}: {term!r}")

        async with self._client() as client:
            data = await self._get_json(client, url)

            results = data.get("results") or []
            items = [
                CandidateItem.from_search_hit(hit, kind)
                for hit in results
                if isinstance(hit, dict)
                and hit.get("mediaType") == kind.media_type
                and hit.get("id") is not None
            ]
            logger.info(f"Search {term!r} ({kind.value}): {len(items)} of {len(results)} hits kept")

            if self.concurrent_enrichment:
                enriched = await asyncio.gather(*(self._enrich(client, item) for item in items))
                return list(enriched)
            return [await self._enrich(client, item) for item in items]

    async def _fetch_details(
        self, client: httpx.AsyncClient, item: CandidateItem
    ) -> CandidateItem:
        url = f"{self.api_base}/{item.kind.media_type}/{item.id}"
        details = await self._get_json(client, url)
        try:
            return apply_details(item, details)
        except (AttributeError, TypeError) as e:
            raise CatalogError(f"Malformed detail record at {url}") from e

    async def _enrich(self, client: httpx.AsyncClient, item: CandidateItem) -> CandidateItem:
        """Best-effort enrichment: a failed lookup leaves the item as is."""
        try:
            return await self._fetch_details(client, item)
        except CatalogError as e:
            logger.debug(f"Skipping enrichment for {item.kind.media_type}/{item.id}: {e}")
            return item

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    async def list_requested_media(self) -> list[dict[str, Any]]:
        """
        Get the `media` record of every existing request.

        Follows `pageInfo` when the service paginates.

        Raises:
            CatalogError: Listing failed
        """
        url = f"{self.api_base}/request"
        media: list[dict[str, Any]] = []

        async with self._client() as client:
            for page in range(MAX_REQUEST_PAGES):
                data = await self._get_json(
                    client,
                    url,
                    params={"take": REQUEST_PAGE_SIZE, "skip": page * REQUEST_PAGE_SIZE},
                )
                for entry in data.get("results") or []:
                    if isinstance(entry, dict) and isinstance(entry.get("media"), dict):
                        media.append(entry["media"])

                page_info = data.get("pageInfo") or {}
                pages = page_info.get("pages")
                if not isinstance(pages, int) or page + 1 >= pages:
                    break

        return media

    async def is_already_requested(self, media_id: int | str) -> bool:
        """
        Check whether any existing request targets `media_id`.

        The id is compared against the TVDB, TMDB and IMDb ids of every
        requested media record.

        Raises:
            CatalogError: The request list could not be fetched. This is
                never reported as False.
        """
        for media in await self.list_requested_media():
            if media_id in (media.get("tvdbId"), media.get("tmdbId"), media.get("imdbId")):
                logger.debug(f"Media {media_id} already requested")
                return True
        return False

    async def submit_request(
        self,
        media_id: int | str,
        kind: MediaKind,
        seasons: tuple[int, ...] | list[int] | None = None,
    ) -> None:
        """
        Create a request.

        Series requests carry every known season except specials (0).
        Movie requests never carry seasons.

        Raises:
            CatalogUnavailableError: Network failure or timeout
            CatalogRejectedError: Any status other than 201
        """
        payload: dict[str, Any] = {"mediaType": kind.media_type, "mediaId": media_id}
        if kind is MediaKind.SERIES:
            wanted = sorted({n for n in seasons or () if n > 0})
            if wanted:
                payload["seasons"] = wanted

        url = f"{self.api_base}/request"
        async with self._client() as client:
            try:
                response = await client.post(url, json=payload)
            except httpx.HTTPError as e:
                raise CatalogUnavailableError(f"POST {url} failed: {e!r}") from e

        if response.status_code != 201:
            raise CatalogRejectedError(
                response.status_code,
                f"POST {url} returned {response.status_code} for {payload}",
            )
        logger.info(f"Request submitted: {payload}")

    async def check_connection(self) -> None:
        """
        Make one authenticated call to verify URL and API key.

        Raises:
            CatalogError: The service is unreachable or refused the key
        """
        async with self._client() as client:
            await self._get_json(client, f"{self.api_base}/request", params={"take": 1, "skip": 0})
