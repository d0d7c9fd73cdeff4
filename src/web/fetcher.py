"""Web page visitor -- fetches result pages and keeps their paragraph text."""

import asyncio
from typing import Iterable, List, Optional

import httpx

from src.security.guardrails import is_allowed_url
from src.utils.logger import get_logger
from src.web.parser import extract_paragraph_text
from src.web.search_provider import VisitResult

log = get_logger(__name__)

HTML_HEADERS = {"Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.5"}


def make_client(timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers=HTML_HEADERS,
        transport=transport,
    )


async def fetch_page(client: httpx.AsyncClient, url: str) -> Optional[str]:
    """GET a URL and return the body text, or None on any error."""
    try:
        resp = await client.get(url)
    except Exception as exc:
        log.warning("Failed to fetch %s: %s", url, exc)
        return None
    if not resp.is_success:
        log.debug("Visit of %s failed with status %s", url, resp.status_code)
        return None
    return resp.text


async def visit_link(client: httpx.AsyncClient, link: str) -> Optional[VisitResult]:
    """Fetch *link* and extract its ``<p>`` text; None when the fetch fails."""
    html = await fetch_page(client, link)
    if html is None:
        return None
    try:
        text = extract_paragraph_text(html)
    except Exception as exc:
        log.warning("Failed to extract text from %s: %s", link, exc)
        return None
    log.debug("Visited %s (%d chars)", link, len(text))
    return VisitResult(link=link, text=text)


async def collect_visit_results(
    links: Iterable[str],
    max_count: int,
    blacklist: Iterable[str],
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 10.0,
) -> List[VisitResult]:
    """Visit the first *max_count* allowed links concurrently.

    Results keep the input order. Links that are filtered out, fail, or yield
    no text are left out, so the output may be shorter than *max_count*.
    """
    blacklist = list(blacklist)
    allowed = [link for link in links if is_allowed_url(link, blacklist)]
    targets = allowed[: max(0, max_count)]
    if not targets:
        log.debug("No links to visit")
        return []

    if client is None:
        async with make_client(timeout) as own_client:
            outcomes = await _visit_all(own_client, targets)
    else:
        outcomes = await _visit_all(client, targets)

    results: List[VisitResult] = []
    for link, outcome in zip(targets, outcomes):
        if isinstance(outcome, BaseException):
            log.warning("Visit of %s raised: %s", link, outcome)
            continue
        if outcome is not None and outcome.text:
            results.append(outcome)
    log.info("Visited %d links, kept %d", len(targets), len(results))
    return results


async def _visit_all(client: httpx.AsyncClient, links: List[str]) -> list:
    return await asyncio.gather(
        *(visit_link(client, link) for link in links),
        return_exceptions=True,
    )
