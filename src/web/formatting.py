"""Template rendering for visited pages and prompt insertion."""

import re
from typing import Iterable

from src.web.search_provider import VisitResult

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def substitute_params(template: str, **params: str) -> str:
    """Replace ``{{name}}`` placeholders; unknown names are left untouched."""

    def _sub(match: "re.Match[str]") -> str:
        key = match.group(1).lower()
        return str(params[key]) if key in params else match.group(0)

    return _PLACEHOLDER.sub(_sub, template or "")


def ensure_end_newline(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"


def format_visit_results(
    query: str,
    results: Iterable[VisitResult],
    file_header: str,
    block_header: str,
) -> str:
    """Render visit results as one document, or "" when none had text."""
    body = ""
    for result in results:
        if result.text:
            body += ensure_end_newline(
                substitute_params(block_header, query=query, text=result.text, link=result.link)
            )

    if not body:
        return ""

    return ensure_end_newline(substitute_params(file_header, query=query)) + body


def render_insertion(template: str, query: str, text: str) -> str:
    """Wrap assembled search text in the prompt insertion template."""
    return substitute_params(template, query=query, text=text)
