"""
Pokémon TCG API client.

Fetches cards and sets from the public catalog and maps the responses to
domain values. Every call is a fresh round trip: nothing is cached and
nothing is retried. Failures are raised to the caller as TransportError
(no response) or ApiError (failure status or unusable body).
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from tcgguide.config import settings
from tcgguide.models.card import Card
from tcgguide.models.card_set import CardSet, sort_sets_by_name
from tcgguide.models.failure import ApiError, TransportError
from tcgguide.parsers.catalog import parse_cards_response, parse_sets_response

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Api-Key"

# None is a meaningful timeout (wait forever), so "not given" needs its own marker
_SETTINGS_TIMEOUT: Any = object()


class CatalogClient:
    """
    Client for the card catalog API.

    The API key is sent with every request and never validated locally;
    a missing or wrong key shows up as an ApiError from the service.
    """

    def __init__(
        self,
        api_key: str | None = None,
        cards_url: str | None = None,
        sets_url: str | None = None,
        timeout: float | None = _SETTINGS_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the catalog client.

        Args:
            api_key: Catalog API key. Defaults to settings.pokemon_tcg_api_key.
            cards_url: Cards endpoint. Defaults to settings.cards_api_url.
            sets_url: Sets endpoint. Defaults to settings.sets_api_url.
            timeout: Request timeout in seconds. None waits indefinitely.
                Defaults to settings.request_timeout.
            client: Optional httpx client for connection reuse. When omitted
                a client is opened per request.
        """
        self.api_key = api_key if api_key is not None else settings.pokemon_tcg_api_key
        self.cards_url = cards_url or settings.cards_api_url
        self.sets_url = sets_url or settings.sets_api_url
        self.timeout = settings.request_timeout if timeout is _SETTINGS_TIMEOUT else timeout
        self._client = client

    async def _get(self, url: str) -> httpx.Response:
        """
        GET `url` with the API key header.

        Raises:
            TransportError: If no response was received
            ApiError: If the response status is not 2xx
        """
        headers = {API_KEY_HEADER: self.api_key}
        logger.debug("GET %s", url)

        try:
            if self._client is not None:
                response = await self._client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(e.response.status_code, e.response.text) from e
        except httpx.RequestError as e:
            raise TransportError(f"Catalog request failed: {e}", detail=url) from e

        return response

    async def list_sets(self) -> list[CardSet]:
        """
        Fetch all sets.

        Returns:
            Sets sorted by name for display, regardless of server order

        Raises:
            TransportError: If no response was received
            ApiError: If the catalog returned a failure status or an unusable body
        """
        response = await self._get(self.sets_url)

        try:
            sets = parse_sets_response(response.content)
        except ValidationError as e:
            raise ApiError(
                response.status_code,
                response.text,
                message=f"Unexpected sets response: {e.error_count()} validation errors",
            ) from e

        return sort_sets_by_name(sets)

    async def search_cards(
        self,
        query: str,
        page_size: int | None = None,
        order_by: str | None = None,
    ) -> list[Card]:
        """
        Search cards.

        Args:
            query: Percent-encoded query from build_query. Empty means no
                filter, and the `q` parameter is left out.
            page_size: Maximum cards to return. Defaults to settings.page_size.
            order_by: Sort field. Defaults to settings.order_by.

        Returns:
            Cards in the order the catalog returned them

        Raises:
            TransportError: If no response was received
            ApiError: If the catalog returned a failure status or an unusable body
        """
        page_size = page_size or settings.page_size
        order_by = order_by or settings.order_by

        # The query is already encoded; building the string by hand keeps
        # httpx from encoding it a second time.
        params = [f"q={query}"] if query else []
        params.append(f"pageSize={page_size}")
        params.append(f"orderBy={quote(order_by, safe='')}")
        url = f"{self.cards_url}?{'&'.join(params)}"

        response = await self._get(url)

        try:
            cards = parse_cards_response(response.content)
        except ValidationError as e:
            raise ApiError(
                response.status_code,
                response.text,
                message=f"Unexpected cards response: {e.error_count()} validation errors",
            ) from e

        logger.debug("Search returned %d cards", len(cards))
        return cards

