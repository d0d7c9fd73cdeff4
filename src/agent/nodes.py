"""Node implementations for the search graph.

Each node receives the full ``SearchState`` and returns a *partial* dict with
only the keys it updates. Nodes are bound methods so that the provider, cache
and settings are injected rather than read from module globals.

The cache nodes are plain functions and make blocking store calls (redis-py is
synchronous). Under ``ainvoke`` LangGraph runs sync nodes in an executor
thread, so those calls never block the event loop; keep them sync.
"""

import time
from typing import Any, Dict

from src.agent.state import SearchState
from src.memory.result_cache import ResultCache
from src.utils.budgeter import assemble_text, unique
from src.utils.config import Settings
from src.utils.logger import get_logger, log_search
from src.web.search_provider import RawSearchPayload, SearchProvider, SearchResult

log = get_logger(__name__)


class SearchNodes:
    """Cache -> provider -> budgeter steps of a single search request."""

    def __init__(self, settings: Settings, provider: SearchProvider, cache: ResultCache):
        self.settings = settings
        self.provider = provider
        self.cache = cache

    def cache_lookup_node(self, state: SearchState) -> Dict[str, Any]:
        """Return the cached result when caching is on and the entry is fresh.

        Runs off the event loop when the graph is awaited.
        """
        update: Dict[str, Any] = {"start_time": time.time(), "cache_hit": False}
        if not state.get("use_cache", True):
            return update

        try:
            cached = self.cache.get(state["query"])
        except Exception:
            log.exception("Cache lookup failed for %r", state["query"])
            cached = None

        if cached is not None:
            log.info("Cache hit for %r", state["query"])
            update.update({"cache_hit": True, "result": cached})
        return update

    def route_decision(self, state: SearchState) -> str:
        """Conditional edge: 'hit' or 'miss' based on ``cache_hit``."""
        return "hit" if state.get("cache_hit") else "miss"

    async def web_search_node(self, state: SearchState) -> Dict[str, Any]:
        """Query the provider; any failure becomes an empty payload."""
        log.info("Searching the web for %r", state["query"])
        try:
            payload = await self.provider.query(state["query"])
        except Exception:
            log.exception("Search failed for %r", state["query"])
            payload = RawSearchPayload()
        return {"payload": payload}

    def assemble_text_node(self, state: SearchState) -> Dict[str, Any]:
        """Dedupe links/images and pack the text bits into the budget."""
        payload = state.get("payload") or RawSearchPayload()
        budget = self.settings.budget_chars
        text = assemble_text(payload.text_bits, budget)

        if not text:
            log.debug("Search produced no text for %r", state["query"])
            return {"result": SearchResult()}

        log.info("Extracted text (length = %d, budget = %d)", len(text), budget)
        result = SearchResult(
            text=text,
            links=[link for link in unique(payload.links) if link],
            images=[image for image in unique(payload.images) if image],
        )
        return {"result": result}

    def store_result_node(self, state: SearchState) -> Dict[str, Any]:
        """Cache non-empty results when the caller asked for caching."""
        result = state.get("result")
        if not state.get("use_cache", True) or result is None or result.is_empty:
            return {"stored": False}
        try:
            self.cache.put(state["query"], result)
        except Exception:
            log.exception("Failed to cache result for %r", state["query"])
            return {"stored": False}
        return {"stored": True}

    def log_search_node(self, state: SearchState) -> Dict[str, Any]:
        """Write the search record and stamp end_time."""
        end = time.time()
        elapsed_ms = (end - state.get("start_time", end)) * 1000
        result = state.get("result") or SearchResult()

        try:
            log_search(
                query=state["query"],
                cache_hit=bool(state.get("cache_hit")),
                text_length=len(result.text),
                link_count=len(result.links),
                image_count=len(result.images),
                response_time_ms=elapsed_ms,
                path=self.settings.search_log_file,
            )
        except OSError:
            log.warning("Could not write search log")

        log.info(
            "Done -- cache_hit=%s, time=%.0fms", bool(state.get("cache_hit")), elapsed_ms
        )
        return {"end_time": end}
