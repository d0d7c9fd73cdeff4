"""Unit tests for link filtering and query validation."""

import pytest

from src.security.guardrails import (
    InvalidQueryError,
    WebSearchError,
    is_allowed_url,
    require_query,
    validate_query,
)

BLACKLIST = ["youtube.com", "twitter.com", "facebook.com", "instagram.com"]


class TestIsAllowedUrl:
    def test_plain_link_allowed(self):
        assert is_allowed_url("https://example.com/article", BLACKLIST) is True

    def test_subdomain_of_blacklisted_host(self):
        assert is_allowed_url("https://sub.youtube.com/x", BLACKLIST) is False

    def test_exact_blacklisted_host(self):
        assert is_allowed_url("https://youtube.com/watch?v=1", BLACKLIST) is False

    def test_not_a_url(self):
        assert is_allowed_url("not a url", BLACKLIST) is False

    def test_missing_scheme_rejected(self):
        assert is_allowed_url("example.com/page", BLACKLIST) is False

    def test_malformed_ipv6_rejected(self):
        assert is_allowed_url("http://[::1/page", BLACKLIST) is False

    def test_non_string_rejected(self):
        assert is_allowed_url(None, BLACKLIST) is False

    def test_substring_match_is_loose(self):
        # Documented behaviour: entries match anywhere inside the hostname,
        # not only as a domain suffix.
        assert is_allowed_url("https://ab.com.evil.net/", ["b.com"]) is False
        assert is_allowed_url("https://notyoutube.community/", BLACKLIST) is False
        assert is_allowed_url("https://you-tube.org/", BLACKLIST) is True
        assert is_allowed_url("https://myyoutube.com.example.org/", BLACKLIST) is False

    def test_path_is_not_checked(self):
        assert is_allowed_url("https://example.com/youtube.com", BLACKLIST) is True

    def test_blank_entries_ignored(self):
        assert is_allowed_url("https://example.com", ["", "   ", None]) is True

    def test_entries_are_trimmed(self):
        assert is_allowed_url("https://www.youtube.com", ["  youtube.com  "]) is False

    def test_empty_blacklist(self):
        assert is_allowed_url("https://youtube.com", []) is True


class TestValidateQuery:
    def test_valid_query(self):
        ok, reason = validate_query("How does Redis work?", 500)
        assert ok is True
        assert reason is None

    def test_empty_query(self):
        ok, reason = validate_query("", 500)
        assert ok is False
        assert "empty" in reason.lower()

    def test_whitespace_query(self):
        ok, _ = validate_query("   ", 500)
        assert ok is False

    def test_too_long(self):
        ok, reason = validate_query("a" * 1000, 500)
        assert ok is False
        assert "length" in reason.lower()

    def test_not_a_string(self):
        ok, reason = validate_query(42, 500)
        assert ok is False
        assert "string" in reason.lower()


class TestRequireQuery:
    def test_returns_query_verbatim(self):
        assert require_query("  Spaced Query ", 500) == "  Spaced Query "

    def test_raises_distinct_error(self):
        with pytest.raises(InvalidQueryError) as exc_info:
            require_query(None, 500)
        assert isinstance(exc_info.value, WebSearchError)
        assert isinstance(exc_info.value, ValueError)
