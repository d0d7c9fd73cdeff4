"""Security module -- guardrails, link filtering, and input validation."""

from src.security.guardrails import (
    InvalidQueryError,
    InvalidRequestError,
    SearchUnavailableError,
    ToolArgumentError,
    WebSearchError,
    is_allowed_url,
    require_query,
    validate_query,
)

__all__ = [
    "InvalidQueryError",
    "InvalidRequestError",
    "SearchUnavailableError",
    "ToolArgumentError",
    "WebSearchError",
    "is_allowed_url",
    "require_query",
    "validate_query",
]
