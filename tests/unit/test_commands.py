"""Tests for chat command parsing."""

import pytest

from media_request_bot.commands import (
    HelpIntent,
    IgnoreIntent,
    MissingTermIntent,
    SearchIntent,
    SelectionIntent,
    parse_command,
    parse_search,
)
from media_request_bot.models import MediaKind


class TestRequestCommand:
    """Test the !request / !r command."""

    def test_long_prefix_defaults_to_movie(self):
        intent = parse_command("!request ironman")
        assert intent == SearchIntent(kind=MediaKind.MOVIE, term="ironman", kind_explicit=False)

    def test_short_alias(self):
        intent = parse_command("!r ironman")
        assert intent == SearchIntent(kind=MediaKind.MOVIE, term="ironman", kind_explicit=False)

    def test_prefix_is_case_insensitive(self):
        intent = parse_command("!REQUEST Ironman")
        assert isinstance(intent, SearchIntent)
        assert intent.term == "Ironman"

    def test_explicit_movie(self):
        intent = parse_command("!r movie Big Momma's House")
        assert intent == SearchIntent(
            kind=MediaKind.MOVIE, term="Big Momma's House", kind_explicit=True
        )

    def test_explicit_series(self):
        intent = parse_command("!request SERIES My Wife and Kids")
        assert intent == SearchIntent(
            kind=MediaKind.SERIES, term="My Wife and Kids", kind_explicit=True
        )

    def test_kind_keyword_without_term_is_the_term(self):
        """A bare keyword is searched for, with the default kind."""
        intent = parse_command("!r movie")
        assert intent == SearchIntent(kind=MediaKind.MOVIE, term="movie", kind_explicit=False)

    def test_keyword_must_be_a_whole_word(self):
        intent = parse_command("!r seriesfoo")
        assert intent == SearchIntent(kind=MediaKind.MOVIE, term="seriesfoo", kind_explicit=False)

    def test_term_is_trimmed(self):
        intent = parse_command("!r series    The Office   ")
        assert intent.term == "The Office"

    @pytest.mark.parametrize("text", ["!request", "!r", "!r   ", "  !REQUEST  "])
    def test_missing_term(self, text):
        assert parse_command(text) == MissingTermIntent()

    def test_prefix_needs_word_boundary(self):
        assert parse_command("!random stuff") == IgnoreIntent()
        assert parse_command("!requests batman") == IgnoreIntent()


class TestSelection:
    """Test numeric replies."""

    def test_digits(self):
        assert parse_command("2") == SelectionIntent(index=2)

    def test_surrounding_whitespace(self):
        assert parse_command("  3\n") == SelectionIntent(index=3)

    def test_zero_is_not_validated(self):
        assert parse_command("0") == SelectionIntent(index=0)

    def test_leading_zeros(self):
        assert parse_command("0002") == SelectionIntent(index=2)

    @pytest.mark.parametrize("text", ["1" * 10, "9" * 5000, "0" * 3 + "1" * 4400])
    def test_huge_number_is_out_of_range(self, text):
        """Digit strings too long to be a rank never raise."""
        assert parse_command(text) == SelectionIntent(index=0)

    def test_many_zeros(self):
        assert parse_command("0" * 5000) == SelectionIntent(index=0)

    @pytest.mark.parametrize("text", ["2a", "-1", "1.5", "1 2", "٣"])
    def test_non_digits_are_ignored(self, text):
        assert parse_command(text) == IgnoreIntent()


class TestHelpAndIgnore:
    """Test help and everything else."""

    @pytest.mark.parametrize("text", ["!help", "!h", "!HELP me", "!h please"])
    def test_help(self, text):
        assert parse_command(text) == HelpIntent()

    def test_help_needs_word_boundary(self):
        assert parse_command("!hello") == IgnoreIntent()

    @pytest.mark.parametrize(
        "text", ["", "   ", "hello there", "request ironman", "r ironman", "!", "!!r x"]
    )
    def test_ignored(self, text):
        assert parse_command(text) == IgnoreIntent()

    def test_non_string_input(self):
        assert parse_command(None) == IgnoreIntent()  # type: ignore[arg-type]


class TestParseSearch:
    """Test kind splitting on the text after the prefix."""

    def test_multiline_term(self):
        intent = parse_search("series Line one\nline two")
        assert intent.kind is MediaKind.SERIES
        assert intent.term == "Line one\nline two"

    def test_empty(self):
        assert parse_search("") == MissingTermIntent()
