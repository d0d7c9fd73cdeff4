"""Input validation, link filtering, and the caller-facing error types."""

from typing import Iterable, Optional, Tuple
from urllib.parse import urlsplit

from src.utils.logger import get_logger

log = get_logger(__name__)


class WebSearchError(Exception):
    """Base class for errors raised across the public search boundary."""


class InvalidQueryError(WebSearchError, ValueError):
    """The caller supplied a missing, blank, or oversized query."""


class ToolArgumentError(WebSearchError, ValueError):
    """A tool call arrived with missing or malformed arguments."""


class InvalidRequestError(WebSearchError, ValueError):
    """A command was called with options that cannot be satisfied."""


class SearchUnavailableError(WebSearchError):
    """Search was requested but no provider key is configured."""


def is_allowed_url(link: str, blacklist: Iterable[str]) -> bool:
    """Return True if *link* may be visited.

    Unparseable links are rejected. A link is blacklisted when its hostname
    *contains* any non-blank entry, so ``"b.com"`` also blocks
    ``"ab.com.evil.net"``.
    """
    try:
        parts = urlsplit(link)
        host = parts.hostname
    except (TypeError, ValueError, AttributeError):
        log.debug("Invalid link: %r", link)
        return False

    if not parts.scheme or not host:
        log.debug("Invalid link: %r", link)
        return False

    for entry in blacklist:
        if not isinstance(entry, str):
            continue
        entry = entry.strip()
        if entry and entry in host:
            log.debug("Blacklisted link: %s", link)
            return False
    return True


def validate_query(query: object, max_length: int) -> Tuple[bool, Optional[str]]:
    """Validate type, length and basic sanity of a search query."""
    if not isinstance(query, str):
        return False, "Query must be a string."
    if not query or not query.strip():
        return False, "Query is empty."
    if len(query) > max_length:
        return False, f"Query exceeds max length ({max_length} chars)."
    return True, None


def require_query(query: object, max_length: int) -> str:
    """Like ``validate_query`` but raises ``InvalidQueryError`` on failure."""
    ok, reason = validate_query(query, max_length)
    if not ok:
        raise InvalidQueryError(reason)
    return query  # type: ignore[return-value]
