"""Per-query search result cache with lazy, check-on-read expiry."""

import time
from typing import Callable, Optional

from src.memory.store import KeyValueStore
from src.utils.config import Settings, settings as default_settings
from src.utils.logger import get_logger
from src.web.search_provider import SearchResult

log = get_logger(__name__)

KEY_PREFIX = "query_"


def now_ms() -> int:
    return int(time.time() * 1000)


class ResultCache:
    """Stores ``SearchResult`` values keyed by the verbatim query string.

    Entries are never swept; an expired entry is deleted when a read finds it.
    The TTL is read from settings on every call.
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings: Optional[Settings] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.settings = settings or default_settings
        self._clock = clock

    @staticmethod
    def key_for(query: str) -> str:
        return f"{KEY_PREFIX}{query}"

    def get(self, query: str) -> Optional[SearchResult]:
        key = self.key_for(query)
        entry = self.store.get(key)
        if entry is None:
            return None

        try:
            stored_at = int(entry["timestamp"])
            result = SearchResult.from_dict(entry)
        except (KeyError, TypeError, ValueError):
            log.warning("Malformed cache entry for %r, removing", query)
            self.store.remove(key)
            return None

        ttl_ms = self.settings.cache_lifetime_seconds * 1000
        if self._clock() - stored_at >= ttl_ms:
            log.debug("Cached result for %r expired, requerying", query)
            self.store.remove(key)
            return None

        log.debug("Cached result for %r is valid", query)
        return result

    def put(self, query: str, result: SearchResult) -> None:
        entry = result.to_dict()
        entry["timestamp"] = self._clock()
        self.store.set(self.key_for(query), entry)

    def clear(self) -> None:
        self.store.clear()
        log.info("Search cache cleared")
