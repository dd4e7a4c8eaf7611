"""
Application wiring.

TcgGuide builds the storage, catalog client, favorites store and search
controller, and is the whole surface a presentation layer talks to.

Usage:
    async with TcgGuide.open() as guide:
        await guide.controller.search(FilterCriteria(name_substring="char"))
        for item in guide.controller.annotated_results():
            ...
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from tcgguide.config import Settings, settings
from tcgguide.db.database import create_engine, create_session_factory, init_db
from tcgguide.models.card import Card
from tcgguide.models.card_set import CardSet
from tcgguide.models.criteria import FilterCriteria
from tcgguide.services.catalog_client import CatalogClient
from tcgguide.services.favorites import FavoritesStore
from tcgguide.services.query_builder import build_query
from tcgguide.services.search_controller import SearchController
from tcgguide.services.storage import KeyValueStorage, SqlKeyValueStorage

logger = logging.getLogger(__name__)


class TcgGuide:
    """Core services for one user session."""

    def __init__(self, client: CatalogClient, storage: KeyValueStorage, favorites_key: str) -> None:
        self.client = client
        self.favorites = FavoritesStore(storage, key=favorites_key)
        self.controller = SearchController(client, self.favorites)

    @classmethod
    @asynccontextmanager
    async def open(cls, config: Settings | None = None) -> AsyncGenerator["TcgGuide", None]:
        """
        Open a session: create storage, load favorites and the set list.

        A failed set load does not prevent startup; see controller.sets_error.
        """
        config = config or settings
        engine: AsyncEngine = create_engine(config.database_url)

        try:
            await init_db(engine)
            storage = SqlKeyValueStorage(create_session_factory(engine))

            async with httpx.AsyncClient(timeout=config.request_timeout) as http:
                client = CatalogClient(
                    api_key=config.pokemon_tcg_api_key,
                    cards_url=config.cards_api_url,
                    sets_url=config.sets_api_url,
                    timeout=config.request_timeout,
                    client=http,
                )
                guide = cls(client, storage, config.favorites_key)
                await guide.start()
                yield guide
        finally:
            await engine.dispose()

    async def start(self) -> None:
        """Load favorites and the set list."""
        await self.favorites.load()
        await self.controller.refresh_sets()
        logger.info(
            "Session ready: %d favorites, %d sets", len(self.favorites), len(self.controller.sets)
        )

    # Presentation surface

    @staticmethod
    def build_query(criteria: FilterCriteria) -> str:
        return build_query(criteria)

    async def search_cards(self, query: str) -> list[Card]:
        return await self.client.search_cards(query)

    async def list_sets(self) -> list[CardSet]:
        return await self.client.list_sets()

    async def load_favorites(self) -> list[Card]:
        return await self.favorites.load()

    async def toggle_favorite(self, card: Card) -> list[Card]:
        return await self.favorites.toggle(card)

    def is_favorite(self, card_id: str) -> bool:
        return self.favorites.is_favorite(card_id)
