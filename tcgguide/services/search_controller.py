"""
Search orchestration.

Owns the single search slot: current criteria, phase, loading flag and
result set. Every search gets a sequence number; when a response arrives
it is applied only if no newer search (or clear) has been issued since.
Stale responses are dropped, so an earlier slow search can never replace
the results of a later one.

Favorite flags are not stored with results. They are read from the
FavoritesStore each time results are requested, so toggling a favorite
shows up without searching again.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from tcgguide.models.card import Card
from tcgguide.models.card_set import CardSet
from tcgguide.models.criteria import FilterCriteria
from tcgguide.models.failure import ApiError, CatalogError, TransportError
from tcgguide.services.catalog_client import CatalogClient
from tcgguide.services.favorites import FavoritesStore
from tcgguide.services.query_builder import build_query

logger = logging.getLogger(__name__)


class SearchPhase(str, Enum):
    """Lifecycle of the search slot."""

    IDLE = "idle"
    SEARCHING = "searching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class AnnotatedCard:
    """A result card paired with its current favorite status."""

    card: Card
    is_favorite: bool


class SearchController:
    """
    Drives searches and exposes their state to the presentation layer.

    Attributes:
        criteria: Criteria of the most recent search
        phase: Current SearchPhase
        results: Cards of the latest completed, current search
        last_error: Failure of the latest search, if it failed
        sets: Sets for the set filter, in display order
        sets_error: Failure of the latest set refresh, if it failed
    """

    def __init__(
        self,
        client: CatalogClient,
        favorites: FavoritesStore,
        query_builder: Callable[[FilterCriteria], str] = build_query,
    ) -> None:
        self._client = client
        self._favorites = favorites
        self._build_query = query_builder

        self.criteria = FilterCriteria()
        self.phase = SearchPhase.IDLE
        self.results: list[Card] = []
        self.last_error: CatalogError | None = None
        self.sets: list[CardSet] = []
        self.sets_error: CatalogError | None = None

        self._sequence = 0

    @property
    def is_loading(self) -> bool:
        return self.phase is SearchPhase.SEARCHING

    @property
    def sequence(self) -> int:
        """Number of the most recently issued search."""
        return self._sequence

    def _next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    async def search(self, criteria: FilterCriteria | None = None) -> list[AnnotatedCard]:
        """
        Run a search and update the slot.

        Catalog failures never escape: they move the slot to FAILED and are
        kept in `last_error`.

        Args:
            criteria: Search constraints. Defaults to the current criteria.

        Returns:
            The current annotated results once this search has resolved.
            If a newer search was issued meanwhile, this search's response
            is discarded and the newer state is returned instead.
        """
        if criteria is not None:
            self.criteria = criteria

        sequence = self._next_sequence()
        self.results = []
        self.last_error = None
        self.phase = SearchPhase.SEARCHING

        query = self._build_query(self.criteria)
        logger.debug("Search #%d query=%r", sequence, query)

        try:
            cards = await self._client.search_cards(query)
        except (TransportError, ApiError) as e:
            if sequence != self._sequence:
                logger.debug("Discarding failure of superseded search #%d", sequence)
                return self.annotated_results()
            logger.warning("Search #%d failed: %s", sequence, e)
            self.results = []
            self.last_error = e
            self.phase = SearchPhase.FAILED
            return self.annotated_results()

        if sequence != self._sequence:
            logger.debug("Discarding %d results of superseded search #%d", len(cards), sequence)
            return self.annotated_results()

        self.results = cards
        self.phase = SearchPhase.SUCCEEDED
        return self.annotated_results()

    def clear_filters(self) -> None:
        """
        Reset criteria and results.

        Any search still in flight is superseded and its response will be dropped.
        """
        self._next_sequence()
        self.criteria = FilterCriteria()
        self.results = []
        self.last_error = None
        self.phase = SearchPhase.IDLE

    def annotated_results(self) -> list[AnnotatedCard]:
        """Current results with favorite status read now."""
        return [
            AnnotatedCard(card=card, is_favorite=self._favorites.is_favorite(card.id))
            for card in self.results
        ]

    async def toggle_favorite(self, card: Card) -> list[Card]:
        """
        Toggle a card's favorite status.

        Raises:
            PersistenceError: If the favorites could not be written. The
                toggle still applies in memory.
        """
        return await self._favorites.toggle(card)

    def is_favorite(self, card_id: str) -> bool:
        return self._favorites.is_favorite(card_id)

    async def refresh_sets(self) -> list[CardSet]:
        """
        Reload the set list for the set filter.

        On failure the previous list is kept and the error is stored in
        `sets_error`.
        """
        try:
            sets = await self._client.list_sets()
        except (TransportError, ApiError) as e:
            logger.warning("Could not load sets: %s", e)
            self.sets_error = e
            return self.sets

        self.sets = sets
        self.sets_error = None
        logger.info("Loaded %d sets", len(sets))
        return self.sets
