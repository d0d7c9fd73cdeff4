"""Search state schema -- the single TypedDict that flows through every node."""

from typing import Optional, TypedDict

from src.web.search_provider import RawSearchPayload, SearchResult


class SearchState(TypedDict, total=False):
    """State carried across the search graph.

    Every node receives the full state and returns a *partial* dict with only
    the keys it wants to update.
    """

    # Input
    query: str
    use_cache: bool

    # Cache lookup
    cache_hit: bool

    # Provider output
    payload: Optional[RawSearchPayload]

    # Final output
    result: Optional[SearchResult]
    stored: bool

    # Observability
    start_time: float
    end_time: Optional[float]
