"""Web module -- Serper search, page visiting, response parsing."""

from src.web.search_provider import RawSearchPayload, SearchProvider, SearchResult, VisitResult
from src.web.serper_search import SerperSearch

__all__ = ["RawSearchPayload", "SearchProvider", "SearchResult", "SerperSearch", "VisitResult"]
