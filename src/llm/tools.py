"""Function-tool definitions that expose the search pipeline to a chat model."""

import json
from typing import Any, Dict, List

from src.agent.service import WebSearchService
from src.security.guardrails import SearchUnavailableError, ToolArgumentError

WEB_SEARCH = "WebSearch"
VISIT_LINKS = "VisitLinks"

WEB_SEARCH_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": WEB_SEARCH,
        "description": (
            "Search the web and get the content of the relevant pages. Search for "
            "unknown knowledge, public personalities, up-to-date information, "
            "weather, news, etc."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Web Query used in search engine."},
            },
            "required": ["query"],
        },
    },
}

VISIT_LINKS_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": VISIT_LINKS,
        "description": "Visit the web links and get the content of the relevant pages.",
        "parameters": {
            "type": "object",
            "properties": {
                "links": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Web links to visit.",
                },
            },
            "required": ["links"],
        },
    },
}


def _parse_arguments(arguments: Any) -> Dict[str, Any]:
    if arguments is None:
        raise ToolArgumentError("No arguments provided")
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments) if arguments.strip() else None
        except json.JSONDecodeError as exc:
            raise ToolArgumentError(f"Arguments are not valid JSON: {exc}") from exc
    if not isinstance(arguments, dict):
        raise ToolArgumentError("No arguments provided")
    return arguments


class ToolDispatcher:
    """Validates tool calls and routes them to a ``WebSearchService``."""

    def __init__(self, service: WebSearchService):
        self.service = service

    def definitions(self) -> List[Dict[str, Any]]:
        return [WEB_SEARCH_TOOL, VISIT_LINKS_TOOL]

    @staticmethod
    def format_message(name: str, arguments: Any) -> str:
        """Short status line for a pending tool call ("" when args are unusable)."""
        try:
            args = _parse_arguments(arguments)
        except ToolArgumentError:
            return ""
        if name == WEB_SEARCH and args.get("query"):
            return f"Searching the web for: {args['query']}"
        if name == VISIT_LINKS and args.get("links"):
            return "Visiting the web links"
        return ""

    async def run(self, name: str, arguments: Any) -> Any:
        """Execute one tool call and return JSON-serialisable output."""
        args = _parse_arguments(arguments)

        if name == WEB_SEARCH:
            query = args.get("query")
            if not query or not isinstance(query, str):
                raise ToolArgumentError("No query provided")
            if not self.service.settings.search_available:
                raise SearchUnavailableError("Search is not available")
            result = await self.service.perform_search_request(query, use_cache=True)
            return result.to_dict()

        if name == VISIT_LINKS:
            links = args.get("links")
            if not links:
                raise ToolArgumentError("No links provided")
            if not isinstance(links, list) or not all(isinstance(x, str) for x in links):
                raise ToolArgumentError("Links must be a list of strings")
            # Visiting links does not need a Serper key.
            results = await self.service.collect_visit_results(links)
            return [r.to_dict() for r in results]

        raise ToolArgumentError(f"Unknown tool: {name}")
