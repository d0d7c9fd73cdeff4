"""High-level web search facade that wires provider, cache and page visitor."""

import time
from dataclasses import dataclass
from typing import Iterable, List, Optional
from urllib.parse import urlsplit

import httpx

from src.agent.graph import build_graph
from src.agent.nodes import SearchNodes
from src.agent.state import SearchState
from src.memory.result_cache import ResultCache
from src.memory.store import build_store
from src.security.guardrails import InvalidRequestError, SearchUnavailableError, require_query
from src.utils.config import Settings, settings as default_settings
from src.utils.logger import get_logger
from src.web import fetcher
from src.web.formatting import format_visit_results
from src.web.search_provider import SearchProvider, SearchResult, VisitResult
from src.web.serper_search import SerperSearch

log = get_logger(__name__)

SCRAPE_OUTPUTS = ("single", "multi")


@dataclass
class ScrapedDocument:
    """A named plain-text document produced by ``scrape``."""

    name: str
    text: str


class WebSearchService:
    """Convenience layer: cached search, link visiting, and scraping.

    Every collaborator can be injected; the defaults build a Serper provider
    and the cache store selected by ``CACHE_BACKEND``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        provider: SearchProvider | None = None,
        cache: ResultCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or default_settings
        self.provider = provider or SerperSearch(self.settings)
        self.cache = cache or ResultCache(build_store(self.settings), self.settings)
        self._transport = transport
        self._graph = build_graph(SearchNodes(self.settings, self.provider, self.cache))

    # -- Search -------------------------------------------------------------

    async def perform_search_request(self, query: str, use_cache: bool = True) -> SearchResult:
        """Search the web for *query*, returning budgeted text plus links/images.

        Never raises for network or provider trouble; the worst case is an
        empty ``SearchResult``. Invalid queries raise ``InvalidQueryError``.
        """
        require_query(query, self.settings.max_query_length)
        state: SearchState = {"query": query, "use_cache": use_cache}
        final = await self._graph.ainvoke(state)
        return final.get("result") or SearchResult()

    def clear_cache(self) -> None:
        self.cache.clear()

    # -- Visiting -----------------------------------------------------------

    async def collect_visit_results(
        self, links: Iterable[str], max_count: Optional[int] = None
    ) -> List[VisitResult]:
        """Visit up to *max_count* (default ``visit_count``) allowed links."""
        count = self.settings.visit_count if max_count is None else max_count
        async with fetcher.make_client(self.settings.request_timeout, self._transport) as client:
            return await fetcher.collect_visit_results(
                links, count, self.settings.visit_blacklist, client=client
            )

    async def visit_links(self, query: str, links: List[str]) -> str:
        """Visit *links* and render them as a single formatted document."""
        if not links:
            log.debug("No links to visit")
            return ""
        results = await self.collect_visit_results(links)
        text = self._format(query, results)
        if not text:
            log.debug("No text to attach for %r", query)
        return text

    def _format(self, query: str, results: List[VisitResult]) -> str:
        return format_visit_results(
            query,
            results,
            self.settings.visit_file_header,
            self.settings.visit_block_header,
        )

    # -- Commands -----------------------------------------------------------

    async def websearch(self, query: str, snippets: bool = True, links: bool = False) -> str:
        """Cached search returning snippets, visited pages, or both."""
        require_query(query, self.settings.max_query_length)
        if not snippets and not links:
            raise InvalidRequestError("No search result type specified")
        if not self.settings.search_available:
            raise SearchUnavailableError("Set SERPER_API_KEY to enable web search")

        result = await self.perform_search_request(query, use_cache=True)
        output = result.text if snippets else ""

        if links and result.links:
            visited = await self.visit_links(query, result.links)
            output += ("\n" if output else "") + visited
        return output

    async def scrape(
        self,
        query: str,
        max_results: Optional[int] = None,
        output: str = "multi",
        snippets: bool = False,
    ) -> List[ScrapedDocument]:
        """Search without the cache and turn the result pages into documents."""
        require_query(query, self.settings.max_query_length)
        if output not in SCRAPE_OUTPUTS:
            raise InvalidRequestError(f"Unknown scrape output {output!r}; expected one of {SCRAPE_OUTPUTS}")
        if not self.settings.search_available:
            raise SearchUnavailableError("Set SERPER_API_KEY to enable web search")

        result = await self.perform_search_request(query, use_cache=False)
        if not result.links:
            log.debug("No links to scrape for %r", query)
            return []

        count = self.settings.visit_count if max_results is None else max_results
        visits = await self.collect_visit_results(result.links, count)
        stamp = int(time.time() * 1000)
        docs: List[ScrapedDocument] = []

        if snippets:
            docs.append(ScrapedDocument(f"snippets - {query} - {stamp}.txt", result.text))

        if output == "single":
            text = self._format(query, visits)
            if text:
                docs.append(ScrapedDocument(f"websearch - {query} - {stamp}.txt", text))
        else:
            for visit in visits:
                domain = urlsplit(visit.link).hostname or "unknown"
                docs.append(ScrapedDocument(f"{query} - {domain} - {stamp}.txt", visit.text))

        log.info("Scraped %d documents for %r", len(docs), query)
        return docs
