"""Serper search implementation (our sole web search provider)."""

import asyncio
from typing import Any, Dict, Optional

import httpx

from src.security.guardrails import SearchUnavailableError
from src.utils.config import Settings, settings as default_settings
from src.utils.logger import get_logger
from src.web.parser import parse_image_response, parse_web_response
from src.web.search_provider import RawSearchPayload, SearchProvider

log = get_logger(__name__)


class SerperSearch(SearchProvider):
    """Web and image search via the Serper API.

    The web request and the optional image request run concurrently; a failure
    in one only empties its own share of the payload.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or default_settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.request_timeout, transport=self._transport)

    async def search(
        self, client: httpx.AsyncClient, query: str, images: bool = False
    ) -> Dict[str, Any]:
        """POST one search request and return the decoded JSON body.

        Raises on a missing key, transport error, or non-success status.
        """
        if not self.settings.search_available:
            raise SearchUnavailableError("SERPER_API_KEY is not configured")

        url = self.settings.serper_images_url if images else self.settings.serper_search_url
        resp = await client.post(
            url,
            json={"q": query},
            headers={"X-API-KEY": self.settings.serper_api_key},
        )
        resp.raise_for_status()
        return resp.json()

    async def query(self, query: str) -> RawSearchPayload:
        """Run the web (and image) searches and normalise both responses."""
        include_images = self.settings.include_images

        async with self._client() as client:
            requests = [self.search(client, query)]
            if include_images:
                requests.append(self.search(client, query, images=True))
            outcomes = await asyncio.gather(*requests, return_exceptions=True)

        payload = RawSearchPayload()

        web = outcomes[0]
        if isinstance(web, BaseException):
            log.warning("Web search request failed for %r: %s", query, web)
        else:
            parse_web_response(web, payload, include_images)

        if include_images:
            images = outcomes[1]
            if isinstance(images, BaseException):
                log.warning("Image search request failed for %r: %s", query, images)
            else:
                parse_image_response(images, payload)

        log.debug(
            "Serper returned %d text bits, %d links, %d images",
            len(payload.text_bits), len(payload.links), len(payload.images),
        )
        return payload
