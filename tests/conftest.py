"""Shared fixtures: in-memory settings, a fake provider, and a manual clock."""

from typing import List, Optional

import pytest

from src.memory.result_cache import ResultCache
from src.memory.store import MemoryStore
from src.utils.config import Settings
from src.web.search_provider import RawSearchPayload, SearchProvider


class FakeProvider(SearchProvider):
    """Returns a copy of ``payload`` (or raises ``error``) and records queries."""

    def __init__(self) -> None:
        self.payload = RawSearchPayload()
        self.error: Optional[Exception] = None
        self.calls: List[str] = []

    async def query(self, query: str) -> RawSearchPayload:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return RawSearchPayload(
            text_bits=list(self.payload.text_bits),
            links=list(self.payload.links),
            images=list(self.payload.images),
        )


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        serper_api_key="test-key",
        cache_backend="memory",
        cache_lifetime_seconds=60,
        budget_chars=2000,
        visit_count=3,
        visit_blacklist=["youtube.com", "twitter.com", "facebook.com", "instagram.com"],
        include_images=False,
        search_log_file=str(tmp_path / "searches.jsonl"),
    )


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def result_cache(memory_store, test_settings, clock):
    return ResultCache(memory_store, test_settings, clock=clock)
