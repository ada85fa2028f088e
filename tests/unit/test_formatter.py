"""Tests for reply formatting."""

from media_request_bot.formatter import USAGE, ResponseFormatter, format_item
from media_request_bot.messages import StaticMessageProvider
from media_request_bot.models import MediaKind, RequestOutcome


class TestBuildListing:
    """Test result listings."""

    def test_single_result_with_link_and_cast(self, make_item):
        item = make_item(
            title="Inception",
            release_year="2010",
            cast_names=("Leonardo", "Joseph"),
            overview="A dream within a dream",
            imdb_id="tt1375666",
        )

        text = ResponseFormatter().build_listing([item], MediaKind.MOVIE, "inception")

        assert text.startswith('🔍 Found 1 movie(s) for "inception":')
        assert "1. *Inception* (2010)" in text
        assert "Leonardo, Joseph" in text
        assert "A dream within a dream" in text
        assert "https://www.imdb.com/title/tt1375666/" in text
        assert "Reply with the number" not in text

    def test_prompt_for_multiple_results(self, make_item):
        items = [make_item(item_id=i, title=f"Batman {i}") for i in (1, 2, 3)]

        text = ResponseFormatter().build_listing(items, MediaKind.MOVIE, "batman")

        assert "1. *Batman 1*" in text
        assert "3. *Batman 3*" in text
        assert text.rstrip().endswith("Reply with the number (1-3) to request.")

    def test_fallbacks(self, make_item):
        text = format_item(1, make_item(title="Mystery"))
        assert "(N/A)" in text
        assert "Unknown cast" in text
        assert "No description" in text
        assert "🔗" not in text

    def test_tvdb_link(self, make_item):
        text = format_item(2, make_item(kind=MediaKind.SERIES, tvdb_id=75596))
        assert "https://thetvdb.com/?id=75596" in text

    def test_series_label(self, make_item):
        item = make_item(kind=MediaKind.SERIES)
        text = ResponseFormatter().build_listing([item], MediaKind.SERIES, "office")
        assert 'Found 1 series for "office"' in text

    def test_choice_override_gets_results(self, make_item):
        provider = StaticMessageProvider(
            {"REQ_CHOICE": lambda results: f"Choose wisely from 1 - {len(results)}"}
        )
        items = [make_item(item_id=i) for i in (1, 2)]

        text = ResponseFormatter(provider).build_listing(items, MediaKind.MOVIE, "x")

        assert text.endswith("Choose wisely from 1 - 2")
        assert "Reply with the number" not in text


class TestBuildOutcome:
    """Test request outcome copy."""

    def test_submitted(self, make_item):
        text = ResponseFormatter().build_outcome(RequestOutcome.submitted(make_item(title="Iron Man")))
        assert text == '✅ "Iron Man" has been requested successfully!'

    def test_submitted_with_listing(self, make_item):
        text = ResponseFormatter().build_outcome(
            RequestOutcome.submitted(make_item(title="Iron Man")), "LISTING\n\n"
        )
        assert text.startswith("LISTING\n\n")
        assert text.endswith('"Iron Man" has been requested successfully!')

    def test_already_requested(self, make_item):
        text = ResponseFormatter().build_outcome(
            RequestOutcome.already_requested(make_item(title="Iron Man"))
        )
        assert text == '"Iron Man" has already been requested!'

    def test_failed(self, make_item):
        text = ResponseFormatter().build_outcome(
            RequestOutcome.failed(make_item(title="Iron Man"), RuntimeError("500"))
        )
        assert text == '❌ Failed to request "Iron Man".'
        assert "500" not in text

    def test_success_override_gets_item_and_listing(self, make_item):
        seen = []

        def success(item, listing):
            seen.append((item.title, listing))
            return f"Mock success for {item.title}"

        formatter = ResponseFormatter(StaticMessageProvider({"REQ_SUCCESS": success}))
        text = formatter.build_outcome(RequestOutcome.submitted(make_item(title="Up")), "L")

        assert text == "Mock success for Up"
        assert seen == [("Up", "L")]

    def test_fail_override(self, make_item):
        formatter = ResponseFormatter(
            StaticMessageProvider({"REQ_FAIL": lambda item: f"Mock failure for {item.title}"})
        )
        text = formatter.build_outcome(RequestOutcome.failed(make_item(title="Up"), RuntimeError()))
        assert text == "Mock failure for Up"


class TestStaticCopy:
    """Test the remaining builders."""

    def test_no_results_implicit_kind(self):
        text = ResponseFormatter().build_no_results(MediaKind.MOVIE, "xyz", kind_explicit=False)
        assert text == 'No type provided, used movie (default) and found nothing for "xyz"'

    def test_no_results_explicit_kind(self):
        formatter = ResponseFormatter()
        assert formatter.build_no_results(MediaKind.MOVIE, "xyz", True) == 'No movies found for "xyz"'
        assert formatter.build_no_results(MediaKind.SERIES, "xyz", True) == 'No series found for "xyz"'

    def test_no_results_override_args(self):
        formatter = ResponseFormatter(
            StaticMessageProvider(
                {"REQ_NO_ITEM": lambda kind, term, defaulted: f"{kind.value}|{term}|{defaulted}"}
            )
        )
        assert formatter.build_no_results(MediaKind.SERIES, "abc", True) == "series|abc|False"

    def test_defaults(self):
        formatter = ResponseFormatter()
        assert "Invalid selection" in formatter.build_invalid_selection()
        assert "Please provide a search term" in formatter.build_no_term()
        assert formatter.build_help() == USAGE
        assert formatter.build_ready() == "Bot Ready"
        assert formatter.build_catalog_failure(RuntimeError("x")) == "❌ Error searching the catalog."

    def test_ready_override_gets_usage(self):
        formatter = ResponseFormatter(StaticMessageProvider({"BOT_READY": lambda usage: usage[:3]}))
        assert formatter.build_ready() == USAGE[:3]

    def test_catalog_failure_override_gets_error(self):
        formatter = ResponseFormatter(
            StaticMessageProvider({"JELLYSEERR_FAIL": lambda err: f"Mock error: {err}"})
        )
        assert formatter.build_catalog_failure(RuntimeError("down")) == "Mock error: down"

    def test_string_overrides(self):
        formatter = ResponseFormatter(
            StaticMessageProvider({"NO_TERM": "nt", "INVALID_SEL": "is", "BOT_USAGE": "u"})
        )
        assert formatter.build_no_term() == "nt"
        assert formatter.build_invalid_selection() == "is"
        assert formatter.build_help() == "u"
