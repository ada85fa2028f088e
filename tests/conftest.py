"""Shared pytest fixtures for media-request-bot tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from media_request_bot.catalog import CatalogClient
from media_request_bot.models import CandidateItem, MediaKind


def make_response(json_data=None, status_code=200):
    """Create a mock httpx response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.raise_for_status = MagicMock()
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Error", request=MagicMock(), response=response
        )
    return response


@pytest.fixture
def mock_response():
    """Factory for mock httpx responses."""
    return make_response


@pytest.fixture
def mock_http():
    """Patch httpx.AsyncClient and yield the client every call will use."""
    with patch("httpx.AsyncClient") as MockClient:
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.__aexit__.return_value = None
        MockClient.return_value = mock_client
        yield mock_client


@pytest.fixture
def catalog_routes(mock_http):
    """
    Route GET calls by API path, e.g. {"/search": response, "/movie/1": error}.

    Values are mock responses or exceptions to raise. Unknown paths get 404.
    """

    def _install(routes: dict):
        def _get(url, params=None, **kwargs):
            path = url.split("?", 1)[0].split("/api/v1", 1)[-1]
            result = routes.get(path)
            if result is None:
                return make_response({"message": "Not found"}, status_code=404)
            if isinstance(result, Exception):
                raise result
            return result

        mock_http.get.side_effect = _get
        return mock_http

    return _install


@pytest.fixture
def catalog_client():
    return CatalogClient(base_url="http://fake-jelly:5055", api_key="FAKE_KEY", timeout_seconds=5.0)


@pytest.fixture
def make_item():
    """Factory for CandidateItems."""

    def _make(item_id=1, title="Inception", kind=MediaKind.MOVIE, **fields):
        return CandidateItem(id=item_id, title=title, kind=kind, **fields)

    return _make
