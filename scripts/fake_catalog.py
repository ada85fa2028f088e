#!/usr/bin/env python3
"""
Fake catalog (Jellyseerr-style) API server for local development and testing.

Implements the endpoints media-request-bot uses:
- Search (movies and series mixed, like the real service)
- Movie / TV detail lookup (cast, external ids, seasons)
- Request listing and creation

Run with: python scripts/fake_catalog.py --port 5055
Then set: JELLYSEERR_URL="http://127.0.0.1:5055" API_KEY="fake-key"
"""

import argparse
import json
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qs, unquote, urlparse

API_KEY = "fake-key"

# Fake catalog
# Maps (mediaType, id) to search hit plus detail data
FAKE_MEDIA = {
    ("movie", 1726): {
        "hit": {
            "id": 1726,
            "mediaType": "movie",
            "title": "Iron Man",
            "releaseDate": "2008-04-30",
            "overview": "After being held captive in an Afghan cave, billionaire engineer "
            "Tony Stark creates a unique weaponized suit of armor to fight evil.",
        },
        "details": {
            "externalIds": {"imdbId": "tt0371746"},
            "credits": {
                "cast": [
                    {"name": "Robert Downey Jr."},
                    {"name": "Terrence Howard"},
                    {"name": "Jeff Bridges"},
                    {"name": "Gwyneth Paltrow"},
                ]
            },
        },
    },
    ("movie", 268): {
        "hit": {
            "id": 268,
            "mediaType": "movie",
            "title": "Batman",
            "releaseDate": "1989-06-21",
            "overview": "Batman must face his most ruthless nemesis when a deformed "
            "madman calling himself the Joker seizes control of Gotham's criminal underworld.",
        },
        "details": {
            "externalIds": {"imdbId": "tt0096895"},
            "credits": {"cast": [{"name": "Michael Keaton"}, {"name": "Jack Nicholson"}]},
        },
    },
    ("movie", 272): {
        "hit": {
            "id": 272,
            "mediaType": "movie",
            "title": "Batman Begins",
            "releaseDate": "2005-06-10",
            "overview": "Driven by tragedy, billionaire Bruce Wayne dedicates his life "
            "to uncovering and defeating the corruption that plagues his home, Gotham City.",
        },
        "details": {
            "externalIds": {"imdbId": "tt0372784"},
            "credits": {"cast": [{"name": "Christian Bale"}, {"name": "Michael Caine"}]},
        },
    },
    ("movie", 414906): {
        "hit": {
            "id": 414906,
            "mediaType": "movie",
            "title": "The Batman",
            "releaseDate": "2022-03-01",
            "overview": "In his second year of fighting crime, Batman uncovers corruption "
            "in Gotham City that connects to his own family.",
        },
        "details": {
            "externalIds": {"imdbId": "tt1877830"},
            "credits": {"cast": [{"name": "Robert Pattinson"}, {"name": "Zoë Kravitz"}]},
        },
    },
    ("tv", 2912): {
        "hit": {
            "id": 2912,
            "mediaType": "tv",
            "name": "My Wife and Kids",
            "firstAirDate": "2001-03-28",
            "overview": "A successful businessman runs his family with a firm hand.",
        },
        "details": {
            "externalIds": {"imdbId": "tt0273366", "tvdbId": 75596},
            "credits": {"cast": [{"name": "Damon Wayans"}, {"name": "Tisha Campbell"}]},
            "seasons": [
                {"seasonNumber": 0},
                {"seasonNumber": 1},
                {"seasonNumber": 2},
                {"seasonNumber": 3},
                {"seasonNumber": 4},
                {"seasonNumber": 5},
            ],
        },
    },
}

# Existing requests (in-memory)
REQUESTS: list[dict] = []


class FakeCatalogHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the fake catalog API."""

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        """Override to reduce noise."""
        print(f"[FakeCatalog] {args[0]}")

    def send_json(self, data: dict, status: int = 200) -> None:
        """Send a JSON response."""
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def send_error_json(self, status: int, message: str) -> None:
        """Send an error response in the service's format."""
        self.send_json({"message": message}, status=status)

    def verify_key(self) -> bool:
        """Check the X-Api-Key header."""
        if self.headers.get("X-Api-Key") != API_KEY:
            self.send_error_json(403, "You do not have permission to access this endpoint")
            return False
        return True

    def do_GET(self) -> None:
        """Handle GET requests."""
        if not self.verify_key():
            return

        parsed = urlparse(self.path)
        parts = parsed.path.rstrip("/").split("/")
        query_params = parse_qs(parsed.query)

        if parsed.path == "/api/v1/search":
            self.handle_search(query_params)
        elif parsed.path == "/api/v1/request":
            self.handle_list_requests(query_params)
        elif len(parts) == 5 and parts[3] in ("movie", "tv"):
            self.handle_details(parts[3], parts[4])
        else:
            self.send_error_json(404, f"Unknown endpoint: {parsed.path}")

    def do_POST(self) -> None:
        """Handle POST requests."""
        if not self.verify_key():
            return

        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length).decode() if content_length > 0 else ""

        if urlparse(self.path).path == "/api/v1/request":
            self.handle_create_request(body)
        else:
            self.send_error_json(404, f"Unknown endpoint: {self.path}")

    def handle_search(self, params: dict) -> None:
        """Substring match on title/name, case-insensitive."""
        query = unquote(params.get("query", [""])[0]).lower()
        results = [
            media["hit"]
            for media in FAKE_MEDIA.values()
            if query and query in (media["hit"].get("title") or media["hit"].get("name", "")).lower()
        ]
        self.send_json({"page": 1, "totalPages": 1, "totalResults": len(results), "results": results})

    def handle_details(self, media_type: str, media_id: str) -> None:
        try:
            media = FAKE_MEDIA.get((media_type, int(media_id)))
        except ValueError:
            media = None
        if media is None:
            self.send_error_json(404, "Unable to retrieve media")
            return
        self.send_json({**media["hit"], **media["details"]})

    def handle_list_requests(self, params: dict) -> None:
        take = int(params.get("take", ["10"])[0])
        skip = int(params.get("skip", ["0"])[0])
        page = REQUESTS[skip : skip + take]
        pages = max(1, -(-len(REQUESTS) // take))
        self.send_json(
            {
                "pageInfo": {"pages": pages, "pageSize": take, "results": len(REQUESTS), "page": skip // take + 1},
                "results": page,
            }
        )

    def handle_create_request(self, body: str) -> None:
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            self.send_error_json(400, "Invalid JSON body")
            return

        media_type = data.get("mediaType")
        media_id = data.get("mediaId")
        media = FAKE_MEDIA.get((media_type, media_id))
        if media is None:
            self.send_error_json(404, "Media not found")
            return

        external = media["details"].get("externalIds", {})
        request = {
            "id": len(REQUESTS) + 1,
            "status": 1,
            "type": media_type,
            "seasons": [{"seasonNumber": n} for n in data.get("seasons", [])],
            "media": {
                "mediaType": media_type,
                "tmdbId": media_id,
                "tvdbId": external.get("tvdbId"),
                "imdbId": external.get("imdbId"),
            },
        }
        REQUESTS.append(request)
        self.send_json(request, status=201)


def main() -> None:
    parser = argparse.ArgumentParser(description="Fake catalog API server")
    parser.add_argument("--port", type=int, default=5055, help="Port to listen on")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    args = parser.parse_args()

    server = HTTPServer((args.host, args.port), FakeCatalogHandler)
    print(f"[FakeCatalog] Listening on http://{args.host}:{args.port}")
    print(f"[FakeCatalog] API key: {API_KEY}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\n[FakeCatalog] Shutting down")
        server.shutdown()


if __name__ == "__main__":
    main()
